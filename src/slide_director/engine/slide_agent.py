import logging
import operator
from typing import Annotated, Any, Dict, List, Literal, Optional, TypedDict

from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    HumanMessage,
    ToolMessage,
)
from langchain_core.runnables import RunnableConfig
from langgraph.graph import END, StateGraph

from slide_director.config import DEFAULT_MAX_ITERATIONS
from slide_director.domain.agent_step import AgentStep
from slide_director.domain.approval import PendingApproval
from slide_director.domain.editor_context import EditorContext
from slide_director.domain.exceptions import (
    IterationLimitError,
    ModelInvocationError,
    RunCancelledError,
)
from slide_director.domain.run_result import DEFAULT_FINAL_TEXT
from slide_director.engine.approval_gate import TurnRoute, classify_turn
from slide_director.engine.cancellation import CancellationToken
from slide_director.engine.prompt_builder import PromptBuilder
from slide_director.engine.step_stream import StepStream
from slide_director.engine.tool_executor import SlideToolExecutor

logger = logging.getLogger(__name__)

CANCELLATION_KEY = "cancellation"
STEP_STREAM_KEY = "step_stream"


class AgentState(TypedDict):
    messages: Annotated[List[BaseMessage], operator.add]
    editor_context: Optional[EditorContext]
    pending_approval: Optional[PendingApproval]
    iterations: int


def message_text(message: BaseMessage) -> str:
    """
    Extracts the plain text of a message.

    Args:
        message: A chat message whose content is a string or content blocks.

    Returns:
        The concatenated text parts, stripped.
    """
    content = message.content
    if isinstance(content, str):
        return content.strip()
    parts: List[str] = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(str(block.get("text", "")))
    return "".join(parts).strip()


def final_text(messages: List[BaseMessage]) -> str:
    """Returns the last non-empty assistant text, or the default completion text."""

    for message in reversed(messages):
        if isinstance(message, AIMessage):
            text = message_text(message)
            if text:
                return text
    return DEFAULT_FINAL_TEXT


def _run_hooks(config: Optional[RunnableConfig]) -> tuple[CancellationToken, StepStream]:
    configurable: Dict[str, Any] = dict((config or {}).get("configurable") or {})
    token = configurable.get(CANCELLATION_KEY) or CancellationToken()
    stream = configurable.get(STEP_STREAM_KEY) or StepStream()
    return token, stream


class SlideAgent:
    """
    The LangGraph state machine that edits slides through tools.

    States are ``agent`` (model invocation), ``tools`` (sequential tool
    execution) and ``approval_pending`` (suspension on a sensitive call, which
    ends the run). ``route_after_agent`` is the transition function out of
    ``agent``.

    Args:
        model: A LangChain chat model supporting ``bind_tools``.
        executor: Executor applying tool calls to the deck.
        prompt_builder: Builds the message list for each model call.
        max_iterations: Maximum model invocations in one run.
    """

    def __init__(
        self,
        model: Any,
        executor: SlideToolExecutor,
        prompt_builder: Optional[PromptBuilder] = None,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ) -> None:
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        bind_tools = getattr(model, "bind_tools", None)
        if bind_tools is None:
            raise ValueError("Model does not support tool calling")
        self.executor = executor
        self.registry = executor.registry
        self.sensitive = self.registry.sensitive_names()
        self.model_with_tools = bind_tools(self.registry.as_openai_tools())
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.max_iterations = max_iterations
        self.graph = self._build_graph()

    def _build_graph(self):
        """
        Builds the agent -> tools -> agent loop with the approval exit.

        Returns:
            The compiled LangGraph graph executor.
        """
        builder = StateGraph(AgentState)
        builder.add_node("agent", self.call_model)
        builder.add_node("tools", self.execute_tools)
        builder.add_node("approval_pending", self.approval_pending)

        builder.set_entry_point("agent")
        builder.add_conditional_edges(
            "agent",
            self.route_after_agent,
            {
                TurnRoute.TOOLS.value: "tools",
                TurnRoute.APPROVAL_PENDING.value: "approval_pending",
                TurnRoute.END.value: END,
            },
        )
        builder.add_edge("tools", "agent")
        builder.add_edge("approval_pending", END)

        return builder.compile()

    @staticmethod
    def _last_tool_calls(state: AgentState) -> List[Dict[str, Any]]:
        messages = state["messages"]
        if not messages:
            return []
        last_message = messages[-1]
        if isinstance(last_message, AIMessage) and last_message.tool_calls:
            return list(last_message.tool_calls)
        return []

    def route_after_agent(
        self, state: AgentState
    ) -> Literal["tools", "approval_pending", "end"]:
        """
        Decides where the loop goes after a model response.

        Args:
            state: The current agent graph state.

        Returns:
            "tools", "approval_pending" or "end".
        """
        decision = classify_turn(self._last_tool_calls(state), self.sensitive)
        logger.debug("Routing after agent step: %s", decision.route.value)
        return decision.route.value

    async def call_model(
        self, state: AgentState, config: Optional[RunnableConfig] = None
    ) -> Dict[str, Any]:
        """
        Invokes the model with the system prompt, editor context and history.

        Args:
            state: The current agent graph state.
            config: Run config carrying the cancellation token and step stream.

        Returns:
            Updated state values containing the model response.
        """
        token, stream = _run_hooks(config)
        token.raise_if_cancelled()

        iterations = state.get("iterations", 0)
        if iterations >= self.max_iterations:
            logger.warning("Iteration limit of %d reached", self.max_iterations)
            raise IterationLimitError(self.max_iterations)

        messages = self.prompt_builder.build_messages(
            state["messages"], state.get("editor_context")
        )
        try:
            response = await token.guard(self.model_with_tools.ainvoke(messages))
        except RunCancelledError:
            raise
        except Exception as exc:
            logger.exception("Model invocation failed")
            raise ModelInvocationError(str(exc)) from exc

        text = message_text(response)
        if text:
            stream.emit(AgentStep.thinking(text))
        return {"messages": [response], "iterations": iterations + 1}

    async def execute_tools(
        self, state: AgentState, config: Optional[RunnableConfig] = None
    ) -> Dict[str, Any]:
        """
        Executes the turn's tool calls one after another, in model order.

        Args:
            state: The current agent graph state.
            config: Run config carrying the cancellation token and step stream.

        Returns:
            Updated state values containing one tool message per call.
        """
        token, stream = _run_hooks(config)
        tool_messages: List[ToolMessage] = []
        for tool_call in self._last_tool_calls(state):
            name = tool_call["name"]
            args = tool_call.get("args") or {}
            stream.emit(AgentStep.tool_call(name, args))
            result = await self.executor.execute(name, args)
            stream.emit(AgentStep.tool_result(name, result))
            tool_messages.append(
                ToolMessage(
                    content=result,
                    tool_call_id=tool_call.get("id") or name,
                    name=name,
                )
            )
            token.raise_if_cancelled()
        return {"messages": tool_messages}

    async def approval_pending(self, state: AgentState) -> Dict[str, Any]:
        """
        Records the sensitive call that suspended the run.

        Args:
            state: The current agent graph state.

        Returns:
            Updated state values containing the pending approval.
        """
        decision = classify_turn(self._last_tool_calls(state), self.sensitive)
        return {"pending_approval": decision.pending}

    def initial_state(
        self, instruction: str, editor_context: Optional[EditorContext]
    ) -> AgentState:
        return {
            "messages": [HumanMessage(content=instruction)],
            "editor_context": editor_context,
            "pending_approval": None,
            "iterations": 0,
        }

    async def run(
        self,
        instruction: str,
        editor_context: Optional[EditorContext] = None,
        cancellation: Optional[CancellationToken] = None,
        step_stream: Optional[StepStream] = None,
    ) -> AgentState:
        """
        Runs the graph to completion, suspension or failure.

        Args:
            instruction: The user's instruction.
            editor_context: Snapshot of the editor when the run starts.
            cancellation: Token checked at every checkpoint.
            step_stream: Receives steps as they happen.

        Returns:
            The final graph state.

        Raises:
            RunCancelledError: If cancelled at a checkpoint.
            ModelInvocationError: If the model call failed.
            IterationLimitError: If the model never stopped requesting tools.
        """
        config: RunnableConfig = {
            "recursion_limit": 2 * self.max_iterations + 5,
            "configurable": {
                CANCELLATION_KEY: cancellation or CancellationToken(),
                STEP_STREAM_KEY: step_stream or StepStream(),
            },
        }
        return await self.graph.ainvoke(
            self.initial_state(instruction, editor_context), config=config
        )
