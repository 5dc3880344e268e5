"""Search-to-summary workflow with saved-search session handling."""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

from ..exceptions import EmptyQueryError, PersistenceError
from ..gateways import GatewayResult
from ..models import SavedSearch, SearchResponse
from ..observability import bind_request_context, clear_request_context, get_workflow_logger
from ..saved import SavedSearchStore
from .prompts import get_summary_prompt
from .ranking import DEFAULT_TOP_N, build_context, select_top
from .session import SaveState, SessionState, WorkflowStage

if TYPE_CHECKING:
    from ..config import AppSettings

logger = logging.getLogger(__name__)


class SearchGateway(Protocol):
    async def search(self, query: str) -> GatewayResult[SearchResponse]: ...


class SummarizeGateway(Protocol):
    async def summarize(self, prompt: str) -> GatewayResult[str]: ...


StateListener = Callable[[SessionState], None]


class Orchestrator:
    """Runs one query turn at a time and owns the visible session state.

    Each ``run_query`` call takes a new request token. Only the turn holding
    the latest token may publish state; a slower, superseded turn finishes
    its network calls but its results are dropped.
    """

    def __init__(
        self,
        search_gateway: SearchGateway,
        summarize_gateway: SummarizeGateway,
        store: SavedSearchStore,
        top_n: int = DEFAULT_TOP_N,
        listener: StateListener | None = None,
    ):
        self.search_gateway = search_gateway
        self.summarize_gateway = summarize_gateway
        self.store = store
        self.top_n = top_n
        self.listener = listener
        self._request_seq = 0
        self._state = SessionState()
        self._saved: tuple[SavedSearch, ...] = ()

    @classmethod
    def from_settings(cls, app_settings: "AppSettings", listener: StateListener | None = None) -> "Orchestrator":
        """Wire gateways and store from application settings.

        Raises:
            ConfigurationError: If a required credential is missing
        """
        from ..providers import build_search_gateway, build_summarization_gateway

        return cls(
            search_gateway=build_search_gateway(app_settings),
            summarize_gateway=build_summarization_gateway(app_settings),
            store=SavedSearchStore(app_settings.get_store_path()),
            listener=listener,
        )

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def saved(self) -> tuple[SavedSearch, ...]:
        """Cached copy of the saved-search list."""
        return self._saved

    def _publish(self, state: SessionState) -> SessionState:
        self._state = state
        if self.listener is not None:
            self.listener(state)
        return state

    def _next_token(self) -> int:
        self._request_seq += 1
        return self._request_seq

    def _is_current(self, token: int) -> bool:
        return token == self._request_seq

    async def run_query(self, query: str) -> SessionState:
        """Search, rank, summarize, and publish the combined result.

        Previous results, summary and save state are cleared before any
        network call. A search failure leaves both results and summary empty;
        a summarization failure keeps the results.

        Raises:
            EmptyQueryError: If ``query`` is blank. No state changes in that case.
        """
        if not query or not query.strip():
            raise EmptyQueryError("Query must not be empty")

        token = self._next_token()
        self._publish(SessionState(query=query, stage=WorkflowStage.SEARCHING))

        bind_request_context(token, query)
        try:
            return await self._run_turn(token, query)
        finally:
            clear_request_context()

    async def _run_turn(self, token: int, query: str) -> SessionState:
        wf_logger = get_workflow_logger()
        wf_logger.info("query_started")
        logger.info(f"Searching: {query[:100]}")

        search = await self.search_gateway.search(query)
        if not self._is_current(token):
            wf_logger.debug("response_discarded", phase="search")
            return self._state

        if not search.ok:
            wf_logger.warning("search_failed", error=str(search.error))
            return self._publish(SessionState(query=query, stage=WorkflowStage.FAILED, error=str(search.error)))

        response = search.unwrap()
        top_results = select_top(self.top_n, response)
        prompt = get_summary_prompt(query, build_context(top_results))
        logger.debug(f"Summarizing {len(top_results)} of {len(response.results)} results")

        # Results stay hidden until the summary resolves
        self._publish(self._state.evolve(stage=WorkflowStage.SUMMARIZING))

        summary = await self.summarize_gateway.summarize(prompt)
        if not self._is_current(token):
            wf_logger.debug("response_discarded", phase="summarize")
            return self._state

        if not summary.ok:
            wf_logger.warning("summary_failed", error=str(summary.error))
            return self._publish(
                SessionState(query=query, results=response, stage=WorkflowStage.DONE, error=str(summary.error))
            )

        wf_logger.info("query_completed", results=len(response.results))
        return self._publish(SessionState(query=query, results=response, summary=summary.unwrap(), stage=WorkflowStage.DONE))

    def reset(self) -> SessionState:
        """Return to the initial empty state, superseding any in-flight query."""
        self._next_token()
        return self._publish(SessionState())

    async def load_saved(self) -> tuple[SavedSearch, ...]:
        """Load the saved-search list at session start.

        On failure the cached list stays as it was and a notice is set. The
        store then refuses to write until it can read the file again.
        """
        try:
            self._saved = await self.store.load_async()
        except PersistenceError as e:
            logger.error(f"Failed to load saved searches: {e}")
            self._publish(self._state.evolve(notice=f"Could not load saved searches: {e}"))
        return self._saved

    async def save_current(self) -> tuple[SavedSearch, ...]:
        """Save the current turn once.

        A no-op unless query, results and summary are all present and the turn
        is still unsaved. On a write failure the turn stays unsaved and a
        notice is set; the cached list is unchanged.
        """
        state = self._state
        if not state.can_save:
            logger.debug("Nothing to save for the current turn")
            return self._saved

        token = self._request_seq
        entry = state.to_saved_search()
        # Flip before awaiting so a second save in the same turn is a no-op
        self._publish(state.evolve(save_state=SaveState.SAVED, notice=None))

        try:
            self._saved = await self.store.save_async(entry)
        except PersistenceError as e:
            logger.error(f"Failed to save search: {e}")
            if self._is_current(token):
                self._publish(self._state.evolve(save_state=SaveState.UNSAVED, notice=f"Could not save search: {e}"))
            return self._saved

        get_workflow_logger().info("search_saved", saved_count=len(self._saved))
        return self._saved

    async def delete_saved(self, index: int) -> tuple[SavedSearch, ...]:
        """Delete a saved search by position.

        A persistence failure sets a notice; success clears any earlier one.

        Raises:
            InvalidIndexError: If no saved search exists at ``index``.
        """
        try:
            self._saved = await self.store.delete_async(index)
        except PersistenceError as e:
            logger.error(f"Failed to delete saved search {index}: {e}")
            self._publish(self._state.evolve(notice=f"Could not delete saved search: {e}"))
            return self._saved

        if self._state.notice:
            self._publish(self._state.evolve(notice=None))
        return self._saved

    def load_into_session(self, entry: SavedSearch) -> SessionState:
        """Make a saved search the active turn without calling either gateway."""
        self._next_token()
        return self._publish(SessionState.from_saved(entry))
