import logging
from typing import Any, Callable, List, Optional

from slide_director.config import Config
from slide_director.domain.agent_step import AgentStep
from slide_director.domain.approval import (
    REJECTED_TEXT,
    ApprovalOutcome,
    ApprovalStatus,
    PendingApproval,
)
from slide_director.domain.editor_context import EditorContext
from slide_director.domain.exceptions import RunCancelledError, SessionBusyError
from slide_director.domain.run_result import (
    CANCELLED_TEXT,
    RunOutcome,
    RunResult,
)
from slide_director.engine.approval_gate import ApprovalGate
from slide_director.engine.cancellation import CancellationToken
from slide_director.engine.slide_agent import SlideAgent, final_text
from slide_director.engine.step_stream import StepObserver, StepStream
from slide_director.engine.tool_executor import SlideToolExecutor
from slide_director.infra.document_store import DocumentStore
from slide_director.infra.image_library import AssetStore
from slide_director.llm.chat_model import build_chat_model
from slide_director.tools import default_registry

logger = logging.getLogger(__name__)


class AgentSession:
    """
    One conversation with the slide agent.

    The session owns the step trace, the pending approval and the
    cancellation token of the active run. Only one run may be active, and no
    new run starts while an approval is outstanding.

    Args:
        agent: The configured agent state machine.
        gate: Holder of the pending approval.
        step_stream: Trace that observers subscribe to.
    """

    def __init__(
        self,
        agent: SlideAgent,
        gate: Optional[ApprovalGate] = None,
        step_stream: Optional[StepStream] = None,
    ) -> None:
        self.agent = agent
        self.executor: SlideToolExecutor = agent.executor
        self.gate = gate or ApprovalGate()
        self.step_stream = step_stream or StepStream()
        self._token: Optional[CancellationToken] = None
        self._running = False

    @classmethod
    def from_config(
        cls,
        config: Config,
        documents: DocumentStore,
        assets: Optional[AssetStore] = None,
        model: Optional[Any] = None,
    ) -> "AgentSession":
        """
        Wires a session from configuration and collaborators.

        Args:
            config: Runtime configuration values.
            documents: Store holding the open deck.
            assets: Optional image asset store.
            model: Chat model override; built from config when omitted.

        Returns:
            A ready session.
        """
        executor = SlideToolExecutor(default_registry(), documents, assets)
        agent = SlideAgent(
            model or build_chat_model(config),
            executor,
            max_iterations=config.max_iterations,
        )
        return cls(agent)

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def pending_approval(self) -> Optional[PendingApproval]:
        return self.gate.pending

    @property
    def steps(self) -> List[AgentStep]:
        return self.step_stream.steps

    def subscribe(self, observer: StepObserver) -> Callable[[], None]:
        """Registers an observer for the steps of every run and approval."""

        return self.step_stream.subscribe(observer)

    async def run(
        self,
        instruction: str,
        editor_context: Optional[EditorContext] = None,
        on_step: Optional[StepObserver] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> RunResult:
        """
        Runs the agent on a user instruction.

        Args:
            instruction: What the user asked for.
            editor_context: Snapshot of the editor, or None without an open deck.
            on_step: Observer for this run's steps only.
            cancellation: Token the caller may cancel; ``cancel()`` works too.

        Returns:
            The run result: completed, approval pending or cancelled.

        Raises:
            SessionBusyError: If a run is active or an approval is pending.
            ModelInvocationError: If the model call failed.
            IterationLimitError: If the model never stopped requesting tools.
        """
        if self._running:
            raise SessionBusyError("A run is already active in this session")
        if self.gate.pending is not None:
            raise SessionBusyError("Resolve the pending approval before starting a new run")

        self._running = True
        self._token = cancellation or CancellationToken()
        unsubscribe = self.step_stream.subscribe(on_step) if on_step else None
        self.step_stream.clear()
        suspended = False
        logger.info("Run started: %s", instruction)
        try:
            state = await self.agent.run(
                instruction,
                editor_context=editor_context,
                cancellation=self._token,
                step_stream=self.step_stream,
            )
            pending = state.get("pending_approval")
            text = final_text(state["messages"])
            if pending is not None:
                self.gate.hold(pending)
                suspended = True
                logger.info("Run suspended awaiting approval of '%s'", pending.tool_name)
                return RunResult(
                    outcome=RunOutcome.APPROVAL_PENDING,
                    final_text=text,
                    pending_approval=pending,
                )
            logger.info("Run completed")
            return RunResult(outcome=RunOutcome.COMPLETED, final_text=text)
        except RunCancelledError:
            logger.info("Run cancelled by caller")
            return RunResult(outcome=RunOutcome.CANCELLED, final_text=CANCELLED_TEXT)
        finally:
            if not suspended:
                self.step_stream.clear()
            if unsubscribe is not None:
                unsubscribe()
            self._token = None
            self._running = False

    async def approve(self, approval: PendingApproval) -> ApprovalOutcome:
        """
        Executes the held sensitive call exactly once.

        The remaining calls of the suspended turn are not executed, and the
        model is not invoked again.

        Args:
            approval: The pending approval returned by ``run``.

        Returns:
            The outcome carrying the tool result text.

        Raises:
            ApprovalError: If ``approval`` is not the pending approval.
        """
        held = self.gate.release(approval)
        logger.info("Approved '%s' (%s)", held.tool_name, held.tool_call_id)
        self.step_stream.emit(AgentStep.tool_call(held.tool_name, held.args))
        result = await self.executor.execute(held.tool_name, held.args, approved=True)
        self.step_stream.emit(AgentStep.tool_result(held.tool_name, result))
        self.step_stream.clear()
        return ApprovalOutcome(status=ApprovalStatus.APPROVED, approval=held, text=result)

    async def reject(self, approval: PendingApproval) -> ApprovalOutcome:
        """
        Discards the held sensitive call without side effects.

        Args:
            approval: The pending approval returned by ``run``.

        Returns:
            The rejected outcome.

        Raises:
            ApprovalError: If ``approval`` is not the pending approval.
        """
        held = self.gate.release(approval)
        logger.info("Rejected '%s' (%s)", held.tool_name, held.tool_call_id)
        self.step_stream.clear()
        return ApprovalOutcome(
            status=ApprovalStatus.REJECTED, approval=held, text=REJECTED_TEXT
        )

    def cancel(self) -> None:
        """
        Requests a cooperative stop of the active run.

        A pending approval is discarded as well.
        """
        if self._token is not None:
            logger.info("Cancellation requested")
            self._token.cancel()
        if self.gate.pending is not None:
            logger.info("Discarding pending approval on cancel")
            self.gate.clear()
        self.step_stream.clear()
