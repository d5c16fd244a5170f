from slide_director.domain.agent_step import AgentStep, AgentStepKind
from slide_director.domain.approval import (
    ApprovalOutcome,
    ApprovalStatus,
    PendingApproval,
)
from slide_director.domain.editor_context import EditorContext, render_editor_context
from slide_director.domain.image import ImageEntry
from slide_director.domain.presentation import (
    Presentation,
    PresentationMeta,
    Slide,
    Theme,
)
from slide_director.domain.run_result import RunOutcome, RunResult
from slide_director.domain.tool import ToolSpec

__all__ = [
    "AgentStep",
    "AgentStepKind",
    "ApprovalOutcome",
    "ApprovalStatus",
    "EditorContext",
    "ImageEntry",
    "PendingApproval",
    "Presentation",
    "PresentationMeta",
    "RunOutcome",
    "RunResult",
    "Slide",
    "Theme",
    "ToolSpec",
    "render_editor_context",
]
