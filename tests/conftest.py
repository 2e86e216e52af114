"""Shared fixtures for keyring tests."""

import pytest

from loyalty_keyring.services.card_store import CardStore
from loyalty_keyring.services.keyring_service import KeyringService


@pytest.fixture
def store():
    """Create an in-memory card store."""
    card_store = CardStore(db_path=":memory:")
    yield card_store
    card_store.close()


@pytest.fixture
def file_store(tmp_path):
    """Create a card store backed by a file in a temp directory."""
    card_store = CardStore(db_path=str(tmp_path / "cards.db"))
    yield card_store
    card_store.close()


@pytest.fixture
def service(store):
    """Create a keyring service over the in-memory store."""
    return KeyringService(store, all_cards_label="All")


@pytest.fixture
def stocked_store(store):
    """A store with three cards, two of them grouped."""
    store.add_card("Coffee", "QR_CODE", "abc123")
    store.add_card("Library", "CODABAR", "21234000567890")
    store.add_card("Grocer", "UPC_A", "012345678905")
    store.add_tag("QR_CODE", "abc123", "food")
    store.add_tag("UPC_A", "012345678905", "food")
    return store
