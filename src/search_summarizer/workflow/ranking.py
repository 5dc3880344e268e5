"""Result ranking and context assembly."""

from collections.abc import Iterable, Sequence

from ..models import SearchResponse, SearchResult

DEFAULT_TOP_N = 5


def select_top(n: int, response: SearchResponse | Sequence[SearchResult]) -> list[SearchResult]:
    """Return the ``n`` highest-scoring results, best first.

    ``sorted`` is stable (also with ``reverse=True``), so equal scores keep
    their original response order.
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    results = response.results if isinstance(response, SearchResponse) else response
    return sorted(results, key=lambda r: r.score, reverse=True)[:n]


def build_context(results: Iterable[SearchResult]) -> str:
    """Join result bodies with blank lines, falling back to the snippet when text is absent."""
    bodies = []
    for result in results:
        body = result.text or result.snippet
        if body:
            bodies.append(body)
    return "\n\n".join(bodies)
