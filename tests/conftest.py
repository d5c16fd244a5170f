import pytest

from helpers import make_deck
from slide_director.engine.tool_executor import SlideToolExecutor
from slide_director.infra.document_store import SlideDeck
from slide_director.tools import default_registry


@pytest.fixture
def deck() -> SlideDeck:
    return make_deck("Intro")


@pytest.fixture
def executor(deck: SlideDeck) -> SlideToolExecutor:
    return SlideToolExecutor(default_registry(), deck)
