"""
Keyring flows used by the UI layer.

Wraps a card store with the steps the app runs after a scan, a group
selection or a rename prompt. Prompt state is carried in explicit request
objects instead of being kept here.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from ..config import settings
from ..exceptions import InvalidGroupNameError
from ..interfaces.store import ICardStore
from ..models.card import LoyaltyCard
from ..models.requests import EditGroupRequest, RenameCardRequest, RenameGroupRequest
from ..utils.barcode import frame_for_render

logger = logging.getLogger(__name__)


class KeyringService:
    """Application-side operations on top of an ICardStore."""

    def __init__(self, store: ICardStore, all_cards_label: Optional[str] = None):
        """
        Args:
            store: Card store to operate on
            all_cards_label: Reserved pseudo-group meaning "every card"
        """
        self.store = store
        self.all_cards_label = all_cards_label or settings.all_cards_label

    # Group selection

    def resolve_group_filter(self, selected: Optional[str]) -> Optional[str]:
        """Map the selected group to a store filter; the "all" label means no filter"""
        if not selected or selected == self.all_cards_label:
            return None
        return selected

    def group_choices(self) -> List[str]:
        """The "all" label followed by every group in use"""
        return [self.all_cards_label] + self.store.get_all_groups()

    def visible_cards(self, selected: Optional[str]) -> List[LoyaltyCard]:
        tag = self.resolve_group_filter(selected)
        logger.info(f"Loading cards with tag: {tag}")
        return self.store.get_cards_by_tag(tag)

    def validate_group_name(self, name: Optional[str]) -> str:
        if not name or name == self.all_cards_label:
            raise InvalidGroupNameError(name or "")
        return name

    # Scans

    def register_scan(self, name: str, format: str, data: str,
                      current_group: Optional[str] = None) -> bool:
        """
        Store a freshly scanned and named card

        When a real group is selected the new card is also put into it.

        Returns:
            True if the card was added
        """
        if not self.store.add_card(name, format, data):
            return False

        tag = self.resolve_group_filter(current_group)
        if tag is not None:
            self.store.add_tag(format, data, tag)
        return True

    def render_payload(self, card: LoyaltyCard) -> Tuple[str, str]:
        """(format, data) ready for the external barcode renderer"""
        return card.format, frame_for_render(card.format, card.data)

    # Groups

    def edit_group(self, request: EditGroupRequest) -> int:
        """Replace a group's members with the selection in ``request``"""
        tag = self.validate_group_name(request.tag)
        return self.store.set_group_members(tag, request.card_ids)

    def create_group(self, tag: str, cards: Iterable[LoyaltyCard]) -> int:
        request = EditGroupRequest(
            tag=self.validate_group_name(tag),
            card_ids=[card.card_id for card in cards]
        )
        return self.edit_group(request)

    def selected_card_ids(self, tag: str) -> List[str]:
        """Ids to pre-select when editing ``tag``"""
        return [card.card_id for card in self.store.get_cards_by_tag(tag)]

    def begin_group_rename(self, tag: str) -> RenameGroupRequest:
        return RenameGroupRequest(tag=self.validate_group_name(tag))

    def finish_group_rename(self, request: RenameGroupRequest, new_tag: Optional[str]) -> int:
        """
        Complete a group rename

        An empty answer cancels the rename.

        Returns:
            Number of cards moved to ``new_tag``
        """
        if not new_tag:
            return 0
        self.validate_group_name(new_tag)
        return self.store.rename_tag(request.tag, new_tag)

    # Cards

    def begin_card_rename(self, card: LoyaltyCard) -> RenameCardRequest:
        return RenameCardRequest(card=card)

    def finish_card_rename(self, request: RenameCardRequest, new_name: Optional[str]) -> bool:
        """
        Complete a card rename; an empty answer cancels it

        Returns:
            True if the card was renamed
        """
        if not new_name:
            return False
        card = request.card
        return self.store.rename_card(card.format, card.data, new_name)
