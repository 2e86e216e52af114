from .card_store import CardStore
from .keyring_service import KeyringService

__all__ = [
    "CardStore",
    "KeyringService",
]
