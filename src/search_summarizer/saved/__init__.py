"""Local persistence for saved searches."""

from .store import SavedSearchStore

__all__ = ["SavedSearchStore"]
