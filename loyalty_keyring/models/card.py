"""
Loyalty card value type and the content-derived card identity.

A card's storage identity is ``format + ":" + data``. The display name is not
part of that identity, although the store keeps names unique as well.
"""

import logging
import re
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

ID_SEPARATOR = ":"

# Format is everything up to the first colon, data is the rest (colons included)
ID_PATTERN = re.compile(r"([^:]*):(.*)", re.DOTALL)


def make_card_id(format: str, data: str) -> str:
    """
    Build the storage identity for a barcode.

    Args:
        format: Barcode symbology name (e.g. "QR_CODE")
        data: Raw barcode payload

    Returns:
        The derived card id
    """
    return f"{format}{ID_SEPARATOR}{data}"


def parse_card_id(card_id: str) -> Optional[Tuple[str, str]]:
    """
    Split a stored card id back into ``(format, data)``.

    Args:
        card_id: Id built by make_card_id

    Returns:
        ``(format, data)``, or None if the id has no separator
    """
    match = ID_PATTERN.fullmatch(card_id or "")
    if match is None:
        logger.error(f"Couldn't parse format/data from '{card_id}' using pattern '{ID_PATTERN.pattern}'")
        return None
    return match.group(1), match.group(2)


def format_from_id(card_id: str) -> Optional[str]:
    parsed = parse_card_id(card_id)
    return parsed[0] if parsed else None


def data_from_id(card_id: str) -> Optional[str]:
    parsed = parse_card_id(card_id)
    return parsed[1] if parsed else None


class LoyaltyCard(BaseModel):
    """
    A stored loyalty card: a display name plus the barcode it renders.

    Value equality compares name, format and data. Two cards with the same
    barcode but different names are different values even though they share
    one storage identity; use ``same_card`` to compare identities.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="User-supplied display name")
    format: str = Field(..., description="Barcode symbology (e.g. 'QR_CODE', 'CODABAR')")
    data: str = Field(..., description="Raw barcode payload, stored verbatim")

    @property
    def card_id(self) -> str:
        """Storage identity derived from format and data"""
        return make_card_id(self.format, self.data)

    def same_card(self, other: "LoyaltyCard") -> bool:
        """True if both values refer to the same stored card, ignoring names"""
        return other is not None and self.card_id == other.card_id

    def __str__(self) -> str:
        return self.name
