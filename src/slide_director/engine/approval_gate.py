"""Routing of assistant turns and the hold on sensitive tool calls."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Any, Mapping, Optional, Sequence

from slide_director.domain.approval import PendingApproval
from slide_director.domain.exceptions import ApprovalError

logger = logging.getLogger(__name__)


class TurnRoute(str, Enum):
    """Where the loop goes after an assistant turn."""

    END = "end"
    TOOLS = "tools"
    APPROVAL_PENDING = "approval_pending"


@dataclass(frozen=True)
class TurnDecision:
    route: TurnRoute
    pending: Optional[PendingApproval] = None


def classify_turn(
    tool_calls: Sequence[Mapping[str, Any]],
    sensitive: AbstractSet[str],
) -> TurnDecision:
    """
    Classifies the tool calls of one assistant turn.

    The first sensitive call, in order, suspends the whole turn: none of the
    turn's calls run, not even the non-sensitive ones.

    Args:
        tool_calls: Tool calls of the assistant message, in model order.
        sensitive: Names of tools that need approval.

    Returns:
        The routing decision, with the pending approval when suspending.
    """
    if not tool_calls:
        return TurnDecision(TurnRoute.END)
    for call in tool_calls:
        name = call["name"]
        if name in sensitive:
            pending = PendingApproval(
                tool_name=name,
                args=dict(call.get("args") or {}),
                tool_call_id=call.get("id") or name,
            )
            return TurnDecision(TurnRoute.APPROVAL_PENDING, pending)
    return TurnDecision(TurnRoute.TOOLS)


class ApprovalGate:
    """Holds at most one pending approval for a session."""

    def __init__(self) -> None:
        self._pending: Optional[PendingApproval] = None

    @property
    def pending(self) -> Optional[PendingApproval]:
        return self._pending

    def hold(self, approval: PendingApproval) -> None:
        """
        Parks a sensitive call until the caller decides.

        Raises:
            ApprovalError: If another approval is already pending.
        """
        if self._pending is not None:
            raise ApprovalError(
                f"Approval for '{self._pending.tool_name}' is still pending"
            )
        logger.info(
            "Holding '%s' (%s) for approval", approval.tool_name, approval.tool_call_id
        )
        self._pending = approval

    def release(self, approval: PendingApproval) -> PendingApproval:
        """
        Removes the pending approval matching ``approval``.

        Args:
            approval: The record the caller is deciding on.

        Returns:
            The released record.

        Raises:
            ApprovalError: If nothing is pending or the record does not match.
        """
        if self._pending is None:
            raise ApprovalError("No approval is pending")
        if approval.tool_call_id != self._pending.tool_call_id:
            raise ApprovalError(
                f"Approval '{approval.tool_call_id}' does not match pending "
                f"'{self._pending.tool_call_id}'"
            )
        released, self._pending = self._pending, None
        return released

    def clear(self) -> None:
        self._pending = None
