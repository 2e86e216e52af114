from .card import LoyaltyCard, make_card_id, parse_card_id, format_from_id, data_from_id
from .card_orm import CardORM, CardTagORM, Base, SCHEMA_VERSION
from .converters import orm_to_card, orm_list_to_cards
from .requests import KeyringRequest, RenameCardRequest, RenameGroupRequest, EditGroupRequest

__all__ = [
    "LoyaltyCard",
    "make_card_id",
    "parse_card_id",
    "format_from_id",
    "data_from_id",
    "CardORM",
    "CardTagORM",
    "Base",
    "SCHEMA_VERSION",
    "orm_to_card",
    "orm_list_to_cards",
    "KeyringRequest",
    "RenameCardRequest",
    "RenameGroupRequest",
    "EditGroupRequest",
]
