"""Exa neural search gateway."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..exceptions import UpstreamError
from ..models import SearchResponse
from .result import GatewayResult

logger = logging.getLogger(__name__)

SERVICE_NAME = "search"
DEFAULT_BASE_URL = "https://api.exa.ai"

# Fixed request shape: content-inclusive neural search, capped candidate count
SEARCH_TYPE = "neural"
USE_AUTOPROMPT = True
NUM_RESULTS = 10


def build_search_payload(query: str) -> dict[str, Any]:
    """Build the JSON body for a search-and-contents request."""
    return {
        "query": query,
        "type": SEARCH_TYPE,
        "useAutoprompt": USE_AUTOPROMPT,
        "numResults": NUM_RESULTS,
        "contents": {"text": True},
    }


class ExaSearchGateway:
    """Runs a single search against the Exa API.

    Scores are taken as returned; no re-ranking, retries or timeout overrides
    happen here.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the gateway.

        Args:
            api_key: Exa API key, sent as the ``x-api-key`` header.
            base_url: API root, without the ``/search`` path.
            client: Optional preconfigured client (tests pass one with a mock transport).
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._client = client

    async def search(self, query: str) -> GatewayResult[SearchResponse]:
        """Search for ``query`` and return the ranked results with text bodies."""
        url = f"{self.base_url}/search"
        headers = {"x-api-key": self.api_key, "Content-Type": "application/json"}
        payload = build_search_payload(query)

        try:
            if self._client is not None:
                response = await self._client.post(url, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(url, json=payload, headers=headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Search request failed with status {e.response.status_code}: {e.response.text[:200]}")
            return GatewayResult.failure(UpstreamError(f"Search service returned HTTP {e.response.status_code}", service=SERVICE_NAME))
        except httpx.HTTPError as e:
            logger.error(f"Search request failed: {e}")
            return GatewayResult.failure(UpstreamError(f"Search service unreachable: {e}", service=SERVICE_NAME))
        except ValueError as e:
            logger.error(f"Search response was not valid JSON: {e}")
            return GatewayResult.failure(UpstreamError("Search service returned malformed JSON", service=SERVICE_NAME))

        if not isinstance(data, dict):
            return GatewayResult.failure(UpstreamError("Search service returned an unexpected payload", service=SERVICE_NAME))

        try:
            result = SearchResponse.model_validate(data)
        except ValidationError as e:
            logger.error(f"Search response failed validation: {e}")
            return GatewayResult.failure(UpstreamError("Search service returned malformed results", service=SERVICE_NAME))

        logger.debug(f"Search returned {len(result.results)} results for '{query[:80]}'")
        return GatewayResult.success(result)
