"""Search-to-summary workflow."""

from .orchestrator import Orchestrator
from .prompts import get_summary_prompt
from .ranking import DEFAULT_TOP_N, build_context, select_top
from .session import SaveState, SessionState, WorkflowStage

__all__ = [
    "DEFAULT_TOP_N",
    "Orchestrator",
    "SaveState",
    "SessionState",
    "WorkflowStage",
    "build_context",
    "get_summary_prompt",
    "select_top",
]
