from .store import ICardStore

__all__ = ["ICardStore"]
