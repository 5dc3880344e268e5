"""Tests for display helpers and Rich rendering."""

from datetime import datetime, timezone

from rich.console import Console

from search_summarizer.models import SearchResponse
from search_summarizer.render import render_saved_list, render_sources, render_state
from search_summarizer.utils import DATE_UNAVAILABLE, format_published_date, site_name, truncate
from search_summarizer.workflow import SaveState, SessionState, WorkflowStage


def _capture(renderable_or_state) -> str:
    console = Console(record=True, width=100)
    if isinstance(renderable_or_state, SessionState):
        render_state(console, renderable_or_state)
    else:
        console.print(renderable_or_state)
    return console.export_text()


class TestUtils:
    def test_site_name_strips_www(self):
        assert site_name("https://www.britannica.com/place/Paris") == "britannica.com"

    def test_site_name_keeps_subdomain(self):
        assert site_name("https://en.wikipedia.org/wiki/Paris") == "en.wikipedia.org"

    def test_site_name_without_host(self):
        assert site_name("not a url") == "not a url"

    def test_published_date(self):
        assert format_published_date(datetime(2023, 11, 6, tzinfo=timezone.utc)) == "Nov 6, 2023"

    def test_published_date_missing(self):
        assert format_published_date(None) == DATE_UNAVAILABLE

    def test_truncate(self):
        assert truncate("short", 10) == "short"
        assert truncate("a  b\n c", 10) == "a b c"
        assert truncate("abcdefghij", 5) == "abcd…"


class TestRender:
    def test_sources_show_site_and_date(self, sample_response):
        text = _capture(render_sources(sample_response))
        assert "Result 0" in text
        assert "example.com • Date not available" in text
        assert "Snippet 2" in text

    def test_empty_sources(self):
        assert "No sources found." in _capture(render_sources(SearchResponse()))

    def test_saved_list(self, saved_entry):
        text = _capture(render_saved_list((saved_entry,)))
        assert "capital of France" in text
        assert "3" in text

    def test_saved_list_empty(self):
        assert "No saved searches." in _capture(render_saved_list(()))

    def test_failed_state(self):
        state = SessionState(query="q", stage=WorkflowStage.FAILED, error="HTTP 500")
        assert "Search failed: HTTP 500" in _capture(state)

    def test_done_state_with_summary(self, sample_response):
        state = SessionState(query="q", results=sample_response, summary="**Paris**", stage=WorkflowStage.DONE, save_state=SaveState.SAVED)
        text = _capture(state)
        assert "Sources" in text
        assert "Answer" in text
        assert "Paris" in text
        assert "✓ Saved" in text

    def test_notice_shown(self):
        state = SessionState(notice="Could not save search: disk full")
        assert "Could not save search: disk full" in _capture(state)
