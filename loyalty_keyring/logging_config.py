"""Logging setup for entry points. Library modules only call logging.getLogger."""
import logging
from typing import Optional

from .config import Settings, settings as default_settings

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def configure_logging(config: Optional[Settings] = None) -> None:
    """
    Configure root logging from settings

    Args:
        config: Settings to read the level from (defaults to module settings)
    """
    config = config or default_settings
    level = logging.DEBUG if config.debug else getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
