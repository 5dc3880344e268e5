"""Session state snapshots exposed to the presentation layer."""

from dataclasses import dataclass, replace
from enum import Enum

from ..models import SavedSearch, SearchResponse


class WorkflowStage(str, Enum):
    """Where the current query turn stands."""

    IDLE = "idle"
    SEARCHING = "searching"
    SUMMARIZING = "summarizing"
    DONE = "done"
    FAILED = "failed"


class SaveState(str, Enum):
    """Save affordance for the current turn. Only a new turn resets it."""

    UNSAVED = "unsaved"
    SAVED = "saved"


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of what the user currently sees.

    ``results`` and ``summary`` are independently nullable: a failed
    summarization still leaves the search results visible.
    """

    query: str = ""
    results: SearchResponse | None = None
    summary: str | None = None
    stage: WorkflowStage = WorkflowStage.IDLE
    error: str | None = None
    notice: str | None = None
    save_state: SaveState = SaveState.UNSAVED

    @property
    def is_loading(self) -> bool:
        return self.stage in (WorkflowStage.SEARCHING, WorkflowStage.SUMMARIZING)

    @property
    def can_save(self) -> bool:
        """All three parts present and not yet saved this turn."""
        return bool(
            self.query.strip()
            and self.results is not None
            and self.summary
            and self.summary.strip()
            and self.save_state == SaveState.UNSAVED
        )

    def to_saved_search(self) -> SavedSearch:
        """Copy the current turn into a SavedSearch.

        Raises:
            ValueError: If query, results or summary is missing.
        """
        if self.results is None:
            raise ValueError("results must be present")
        return SavedSearch(query=self.query, results=self.results, summary=self.summary or "")

    def evolve(self, **changes) -> "SessionState":
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)

    @classmethod
    def from_saved(cls, entry: SavedSearch) -> "SessionState":
        """Session state for a reloaded saved search."""
        return cls(
            query=entry.query,
            results=entry.results,
            summary=entry.summary,
            stage=WorkflowStage.DONE,
            save_state=SaveState.SAVED,
        )
