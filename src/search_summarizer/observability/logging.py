"""Structured logging with per-request context using structlog contextvars."""

import logging
import sys

import structlog

_configured = False


def setup_structured_logging(level: str = "WARNING", json_logs: bool = False) -> None:
    """Configure structlog and stdlib logging, writing to stderr.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_logs: Render JSON lines instead of the console renderer
    """
    global _configured
    if _configured:
        return

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,  # Inject request context
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # stdout belongs to the rendered answer
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.WARNING),
        stream=sys.stderr,
    )

    # Keep HTTP client chatter out of the terminal
    for logger_name in ("httpx", "httpcore", "openai", "browser_use"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    _configured = True


def bind_request_context(request_id: int, query: str) -> None:
    """Bind request context for all subsequent logs in this async context.

    Args:
        request_id: Sequence token of the query workflow
        query: The query text (truncated in log output)
    """
    structlog.contextvars.bind_contextvars(request_id=request_id, query=query[:100])


def clear_request_context() -> None:
    """Clear request context after the workflow completes."""
    structlog.contextvars.clear_contextvars()


def get_workflow_logger(name: str = "search_summarizer") -> structlog.stdlib.BoundLogger:
    """Get a structlog logger that carries the bound request context."""
    return structlog.get_logger(name)
