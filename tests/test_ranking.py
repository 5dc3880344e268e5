"""Tests for result ranking, context assembly and the summary prompt."""

import pytest

from search_summarizer.models import SearchResponse
from search_summarizer.workflow import build_context, get_summary_prompt, select_top


class TestSelectTop:
    def test_capital_of_france_example(self, sample_response):
        top = select_top(2, sample_response)
        assert [r.score for r in top] == [0.95, 0.9]

    def test_returns_min_of_n_and_size(self, sample_response):
        assert len(select_top(5, sample_response)) == 3
        assert len(select_top(0, sample_response)) == 0

    def test_descending_order(self, make_result):
        response = SearchResponse(results=tuple(make_result(s, i) for i, s in enumerate([0.2, 0.8, 0.5, 0.9, 0.1, 0.6])))
        assert [r.score for r in select_top(4, response)] == [0.9, 0.8, 0.6, 0.5]

    def test_ties_keep_response_order(self, make_result):
        results = [make_result(0.5, 0), make_result(0.7, 1), make_result(0.5, 2), make_result(0.7, 3), make_result(0.5, 4)]
        top = select_top(5, SearchResponse(results=tuple(results)))
        assert [r.id for r in top] == [
            "https://example.com/1",
            "https://example.com/3",
            "https://example.com/0",
            "https://example.com/2",
            "https://example.com/4",
        ]

    def test_accepts_plain_sequence(self, make_result):
        top = select_top(1, [make_result(0.1, 0), make_result(0.3, 1)])
        assert top[0].score == 0.3

    def test_does_not_reorder_response(self, sample_response):
        select_top(3, sample_response)
        assert [r.score for r in sample_response.results] == [0.9, 0.95, 0.7]

    def test_negative_n_rejected(self, sample_response):
        with pytest.raises(ValueError):
            select_top(-1, sample_response)


class TestBuildContext:
    def test_joins_text_with_blank_line(self, make_result):
        context = build_context([make_result(0.9, 0, text="alpha"), make_result(0.8, 1, text="beta")])
        assert context == "alpha\n\nbeta"

    def test_falls_back_to_snippet(self, make_result):
        context = build_context([make_result(0.9, 0, text="", snippet="short")])
        assert context == "short"

    def test_skips_results_without_content(self, make_result):
        context = build_context([make_result(0.9, 0, text="", snippet=""), make_result(0.8, 1, text="beta")])
        assert context == "beta"


class TestSummaryPrompt:
    def test_embeds_query_verbatim(self):
        prompt = get_summary_prompt('what is "x"?', "ctx")
        assert 'The user asked the following question: "what is "x"?"' in prompt

    def test_embeds_context(self):
        prompt = get_summary_prompt("q", "alpha\n\nbeta")
        assert "alpha\n\nbeta" in prompt

    def test_formatting_instructions(self):
        prompt = get_summary_prompt("q", "ctx")
        assert "Begin with a direct answer" in prompt
        assert "**bold**" in prompt
        assert "*italic*" in prompt
        assert "3-4 main sections" in prompt
        assert "original question" in prompt
