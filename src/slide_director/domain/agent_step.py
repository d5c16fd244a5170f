"""Observable trace events emitted while the agent works."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class AgentStepKind(str, Enum):
    """Defines the kinds of steps an observer can receive."""

    THINKING = "thinking"
    TOOL_CALL = "tool_call"
    TOOL_RESULT = "tool_result"


class AgentStep(BaseModel):
    """One entry in the live step trace."""

    kind: AgentStepKind
    content: str
    tool_name: Optional[str] = None
    args: Optional[Dict[str, Any]] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def thinking(cls, text: str) -> "AgentStep":
        return cls(kind=AgentStepKind.THINKING, content=text)

    @classmethod
    def tool_call(cls, name: str, args: Dict[str, Any]) -> "AgentStep":
        return cls(
            kind=AgentStepKind.TOOL_CALL,
            content=f"Calling {name}",
            tool_name=name,
            args=dict(args),
        )

    @classmethod
    def tool_result(cls, name: str, text: str) -> "AgentStep":
        return cls(kind=AgentStepKind.TOOL_RESULT, content=text, tool_name=name)
