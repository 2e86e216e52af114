"""
Store interface - abstracts card and tag persistence.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from ..models.card import LoyaltyCard


class ICardStore(ABC):
    """
    Interface for loyalty card persistence.

    Follows Repository Pattern - hides the storage engine behind
    card/tag operations. Constraint violations and missing rows are
    reported through return values; only storage faults raise.
    """

    @abstractmethod
    def add_card(self, name: str, format: str, data: str) -> bool:
        """
        Add a card.

        Args:
            name: Display name (unique)
            format: Barcode format
            data: Barcode payload

        Returns:
            True if added, False if the id or the name is already taken
        """
        pass

    @abstractmethod
    def delete_card(self, format: str, data: str) -> bool:
        """
        Delete a card and every tag membership it has.

        Returns:
            True if the card existed and was removed
        """
        pass

    @abstractmethod
    def add_tag(self, format: str, data: str, tag: str) -> bool:
        """Put a card in a group; creates the group if it has no cards yet."""
        pass

    @abstractmethod
    def remove_tag(self, format: str, data: str, tag: str) -> bool:
        """Take a card out of a group; the group disappears with its last card."""
        pass

    @abstractmethod
    def delete_tag(self, tag: str) -> bool:
        """Delete a group. Cards in it are unaffected."""
        pass

    @abstractmethod
    def get_card(self, name: str) -> Optional[LoyaltyCard]:
        """Get a card by display name, or None."""
        pass

    @abstractmethod
    def get_all_cards(self) -> List[LoyaltyCard]:
        """All cards ordered by name."""
        pass

    @abstractmethod
    def get_cards_by_tag(self, tag: Optional[str]) -> List[LoyaltyCard]:
        """Cards in a group ordered by name; None or "" means all cards."""
        pass

    @abstractmethod
    def get_all_groups(self) -> List[str]:
        """Every tag with at least one card, ascending."""
        pass

    @abstractmethod
    def rename_tag(self, old_tag: str, new_tag: str) -> int:
        """Move every card from one group to another; returns cards moved."""
        pass

    @abstractmethod
    def rename_card(self, format: str, data: str, new_name: str) -> bool:
        """Give a card a new display name, keeping its groups."""
        pass

    @abstractmethod
    def set_group_members(self, tag: str, card_ids: Iterable[str]) -> int:
        """Replace a group's members; returns memberships written."""
        pass
