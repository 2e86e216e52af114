"""Persistent store for scannable loyalty cards and the groups they belong to."""

from .models.card import LoyaltyCard, make_card_id, parse_card_id
from .services.card_store import CardStore
from .services.keyring_service import KeyringService

__version__ = "1.0.0"

__all__ = [
    "LoyaltyCard",
    "make_card_id",
    "parse_card_id",
    "CardStore",
    "KeyringService",
]
