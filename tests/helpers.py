"""Fake chat models and deck builders shared by the test suite."""

import asyncio
from itertools import count
from typing import Any, Dict, List, Optional

from langchain_core.messages import AIMessage, BaseMessage

from slide_director.core.session import AgentSession
from slide_director.domain.presentation import Presentation, PresentationMeta, Slide
from slide_director.engine.slide_agent import SlideAgent
from slide_director.engine.tool_executor import SlideToolExecutor
from slide_director.infra.document_store import SlideDeck
from slide_director.tools import default_registry

_call_ids = count(1)


def tool_call(name: str, call_id: Optional[str] = None, **args: Any) -> Dict[str, Any]:
    """Builds a tool call payload as a chat model would emit it."""

    return {"name": name, "args": args, "id": call_id or f"call_{next(_call_ids)}"}


def assistant(content: str = "", *calls: Dict[str, Any]) -> AIMessage:
    """Builds an assistant turn with optional tool calls."""

    return AIMessage(content=content, tool_calls=list(calls))


class ScriptedChatModel:
    """
    Deterministic fake LLM returning pre-scripted assistant turns.

    Args:
        responses: Assistant messages (or exceptions to raise) in call order.
    """

    def __init__(self, responses: List[Any]) -> None:
        self.responses = list(responses)
        self.calls: List[List[BaseMessage]] = []
        self.bound_tools: List[dict] = []

    def bind_tools(self, tools: List[dict]) -> "ScriptedChatModel":
        self.bound_tools = tools
        return self

    async def ainvoke(self, messages: List[BaseMessage]) -> AIMessage:
        self.calls.append(list(messages))
        if not self.responses:
            raise AssertionError("ScriptedChatModel ran out of responses")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class LoopingChatModel(ScriptedChatModel):
    """Fake LLM that requests a read-only tool on every turn."""

    def __init__(self) -> None:
        super().__init__([])

    async def ainvoke(self, messages: List[BaseMessage]) -> AIMessage:
        self.calls.append(list(messages))
        return assistant("", tool_call("get_slide_info"))


class BlockingChatModel(ScriptedChatModel):
    """Fake LLM that replays scripted turns, then never answers again."""

    def __init__(self, responses: Optional[List[Any]] = None) -> None:
        super().__init__(responses or [])
        self.started = asyncio.Event()

    async def ainvoke(self, messages: List[BaseMessage]) -> AIMessage:
        if self.responses:
            return await super().ainvoke(messages)
        self.calls.append(list(messages))
        self.started.set()
        await asyncio.Event().wait()
        raise AssertionError("unreachable")


def make_deck(*titles: str) -> SlideDeck:
    """Opens a deck with one slide per title and selects the last slide."""

    slides = [Slide(html=f"<section class=\"slide\"><h1>{t}</h1></section>") for t in titles]
    deck = SlideDeck(Presentation(meta=PresentationMeta(title="Test Deck"), slides=slides))
    if slides:
        deck.set_current_slide(len(slides) - 1)
    return deck


def make_session(model: Any, deck: SlideDeck, max_iterations: int = 25) -> AgentSession:
    executor = SlideToolExecutor(default_registry(), deck)
    return AgentSession(SlideAgent(model, executor, max_iterations=max_iterations))


