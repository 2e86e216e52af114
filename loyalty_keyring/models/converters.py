"""Utilities to convert between SQLAlchemy ORM rows and LoyaltyCard values"""
import logging
from typing import Iterable, List, Optional

from loyalty_keyring.models.card import LoyaltyCard, parse_card_id
from loyalty_keyring.models.card_orm import CardORM

logger = logging.getLogger(__name__)


def orm_to_card(card_orm: CardORM) -> Optional[LoyaltyCard]:
    """
    Convert a CardORM row to a LoyaltyCard

    Every query path goes through here so id parsing never diverges.

    Args:
        card_orm: SQLAlchemy ORM model instance

    Returns:
        LoyaltyCard, or None if the stored id is not in "format:data" shape
    """
    logger.debug(f"Parsing card: ID={card_orm.id}; Name={card_orm.name}")
    parsed = parse_card_id(card_orm.id)
    if parsed is None:
        logger.error(f"Skipping card '{card_orm.name}': malformed id '{card_orm.id}'")
        return None

    format, data = parsed
    return LoyaltyCard(name=card_orm.name, format=format, data=data)


def orm_list_to_cards(cards_orm: Iterable[CardORM]) -> List[LoyaltyCard]:
    """
    Convert ORM rows to LoyaltyCards, dropping malformed rows

    Args:
        cards_orm: SQLAlchemy ORM model instances, already ordered

    Returns:
        List of LoyaltyCards in the same order
    """
    cards = []
    for card_orm in cards_orm:
        card = orm_to_card(card_orm)
        if card is not None:
            cards.append(card)
    return cards

