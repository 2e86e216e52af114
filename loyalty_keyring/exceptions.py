"""
Exception hierarchy for the keyring.

Expected negative outcomes (duplicates, missing rows) are reported as
boolean or None results and never raise. Only the errors below do.
"""


class KeyringError(Exception):
    """Base exception for all keyring errors."""


class StorageError(KeyringError):
    """
    Raised when the backing store fails (I/O error, corrupt schema).

    The original SQLAlchemy error is chained as ``__cause__``.
    """


class InvalidGroupNameError(KeyringError):
    """Raised when a group name is empty or collides with the reserved "all cards" label."""

    def __init__(self, name: str):
        super().__init__(f"'{name}' is not a valid group name")
        self.name = name
