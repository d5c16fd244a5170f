"""Records exchanged with the caller around sensitive tool calls."""

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

REJECTED_TEXT = "Action cancelled by user."


class PendingApproval(BaseModel):
    """A sensitive tool call held back until the user decides."""

    tool_name: str
    args: Dict[str, Any] = Field(default_factory=dict)
    tool_call_id: str

    model_config = ConfigDict(frozen=True)


class ApprovalStatus(str, Enum):
    """Decision applied to a pending approval."""

    APPROVED = "approved"
    REJECTED = "rejected"


class ApprovalOutcome(BaseModel):
    """Result of resolving a pending approval."""

    status: ApprovalStatus
    approval: PendingApproval
    text: str
