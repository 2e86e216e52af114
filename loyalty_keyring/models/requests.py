"""
Typed request objects for multi-step keyring flows.

Renaming a card or a group spans a prompt shown by the caller. The state
that must survive between "begin" and "finish" lives in these objects and is
passed back in explicitly; the store itself never holds it.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List
from .card import LoyaltyCard


class KeyringRequest(BaseModel):
    """Base class for keyring flow requests."""
    model_config = ConfigDict(frozen=True)


class RenameCardRequest(KeyringRequest):
    """A pending card rename; ``card`` is the card as it was when the prompt opened."""
    card: LoyaltyCard

    @property
    def default_name(self) -> str:
        """Text to pre-fill in the name prompt"""
        return self.card.name


class RenameGroupRequest(KeyringRequest):
    """A pending group rename."""
    tag: str = Field(..., min_length=1, description="Group being renamed")

    @property
    def default_name(self) -> str:
        return self.tag


class EditGroupRequest(KeyringRequest):
    """
    Result of a group membership selection.

    ``card_ids`` are the derived ids of every card that should be in the
    group afterwards; cards not listed are removed from it.
    """
    tag: str = Field(..., min_length=1, description="Group being edited")
    card_ids: List[str] = Field(default_factory=list, description="Selected card ids")
