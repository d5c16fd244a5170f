from enum import Enum
from typing import Optional

from pydantic import BaseModel

from slide_director.domain.approval import PendingApproval

DEFAULT_FINAL_TEXT = "Task completed."
CANCELLED_TEXT = "Task cancelled."


class RunOutcome(str, Enum):
    """How a top-level run ended."""

    COMPLETED = "completed"
    APPROVAL_PENDING = "approval_pending"
    CANCELLED = "cancelled"


class RunResult(BaseModel):
    """What a run hands back to its caller."""

    outcome: RunOutcome
    final_text: str
    pending_approval: Optional[PendingApproval] = None

    @property
    def cancelled(self) -> bool:
        return self.outcome is RunOutcome.CANCELLED
