"""Gateways to the external search and summarization services."""

from .result import GatewayResult
from .search import ExaSearchGateway
from .summarize import SummarizationGateway

__all__ = [
    "ExaSearchGateway",
    "GatewayResult",
    "SummarizationGateway",
]
