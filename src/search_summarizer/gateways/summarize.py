"""Chat-completion summarization gateway."""

import logging
from typing import TYPE_CHECKING

from browser_use.llm.messages import SystemMessage, UserMessage

from ..exceptions import UpstreamError
from .result import GatewayResult

if TYPE_CHECKING:
    from browser_use.llm.base import BaseChatModel

logger = logging.getLogger(__name__)

SERVICE_NAME = "summarization"
SYSTEM_PROMPT = "You are a helpful assistant."


class SummarizationGateway:
    """Sends a prompt to a chat model as a system + user exchange."""

    def __init__(self, llm: "BaseChatModel"):
        self.llm = llm

    async def summarize(self, prompt: str) -> GatewayResult[str]:
        """Return the first completion for ``prompt``, or a failure."""
        messages = [
            SystemMessage(content=SYSTEM_PROMPT),
            UserMessage(content=prompt),
        ]

        logger.debug("Starting chat completion")
        try:
            response = await self.llm.ainvoke(messages)
        except Exception as e:
            logger.error(f"Chat completion failed: {e}")
            return GatewayResult.failure(UpstreamError(f"Failed to generate summary: {e}", service=SERVICE_NAME))

        content = getattr(response, "completion", None)
        if not isinstance(content, str) or not content.strip():
            logger.error("Chat completion returned no text")
            return GatewayResult.failure(UpstreamError("Summary service returned an empty completion", service=SERVICE_NAME))

        logger.debug("Chat completion successful")
        return GatewayResult.success(content)
