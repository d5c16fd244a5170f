"""Tests for slide tool execution."""

import json
from unittest.mock import MagicMock

import pytest

from helpers import make_deck
from slide_director.domain.exceptions import SlideIndexError
from slide_director.domain.image import ImageEntry
from slide_director.engine.tool_executor import SlideToolExecutor
from slide_director.tools import default_registry


@pytest.mark.asyncio
async def test_create_slide_inserts_after_current(executor, deck) -> None:
    """Creates a slide and reports its index."""
    result = await executor.execute("create_slide", {"html": "<p>A</p>", "notes": "n"})

    assert result == "Created new slide at index 1"
    assert deck.slides[1].html == "<p>A</p>"
    assert deck.slides[1].notes == "n"


@pytest.mark.asyncio
async def test_update_slide_reports_one_based_number(executor, deck) -> None:
    """Updates slide markup and names the slide 1-based."""
    result = await executor.execute("update_slide", {"slideIndex": 0, "html": "<p>B</p>"})

    assert result == "Updated slide 1"
    assert deck.slides[0].html == "<p>B</p>"


@pytest.mark.asyncio
async def test_update_out_of_range_becomes_error_text(executor, deck) -> None:
    """Reports bounds violations instead of raising."""
    result = await executor.execute("update_slide", {"slideIndex": 7, "html": "<p/>"})

    assert result.startswith("Error executing tool: ")
    assert "out of range" in result
    assert len(deck.slides) == 1


@pytest.mark.asyncio
async def test_unknown_tool_returns_literal_text(executor) -> None:
    """Returns the unknown tool text for unregistered names."""
    result = await executor.execute("explode_slide", {})

    assert result == "Unknown tool: explode_slide"


@pytest.mark.asyncio
async def test_invalid_arguments_become_error_text(executor, deck) -> None:
    """Validates arguments against the tool's declared shape."""
    result = await executor.execute("update_slide", {"slideIndex": "first"})

    assert result.startswith("Error executing tool: invalid arguments for update_slide")
    assert "slideIndex" in result
    assert "html" in result


@pytest.mark.asyncio
async def test_sensitive_tool_requires_approval() -> None:
    """Refuses to delete without an explicit approval."""
    deck = make_deck("One", "Two")
    executor = SlideToolExecutor(default_registry(), deck)

    refused = await executor.execute("delete_slide", {"slideIndex": 0})
    assert refused == "Error executing tool: delete_slide requires user approval"
    assert len(deck.slides) == 2

    approved = await executor.execute("delete_slide", {"slideIndex": 0}, approved=True)
    assert approved == "Deleted slide 1"
    assert len(deck.slides) == 1


@pytest.mark.asyncio
async def test_collaborator_failure_is_caught() -> None:
    """Turns document store exceptions into error text."""
    documents = MagicMock()
    documents.create_slide.side_effect = RuntimeError("disk full")
    executor = SlideToolExecutor(default_registry(), documents)

    result = await executor.execute("create_slide", {"html": "<p/>"})

    assert result == "Error executing tool: disk full"


@pytest.mark.asyncio
async def test_get_slide_info_defaults_to_current_slide(executor, deck) -> None:
    """Describes the current slide when no index is given."""
    result = json.loads(await executor.execute("get_slide_info", {}))

    assert result["index"] == 0
    assert result["html"] == deck.slides[0].html
    assert result["notes"] is None


@pytest.mark.asyncio
async def test_get_slide_info_missing_slide(executor) -> None:
    """Reports a missing slide as text."""
    assert await executor.execute("get_slide_info", {"slideIndex": 9}) == "Slide not found"


@pytest.mark.asyncio
async def test_list_images_queries_assets_every_time(deck) -> None:
    """Lists images freshly on every call."""
    assets = MagicMock()
    assets.list_images.side_effect = [
        [ImageEntry(name="a.png", reference_url="file:///img/a.png")],
        [
            ImageEntry(name="a.png", reference_url="file:///img/a.png"),
            ImageEntry(name="b.png", reference_url="file:///img/b.png"),
        ],
    ]
    executor = SlideToolExecutor(default_registry(), deck, assets)

    first = json.loads(await executor.execute("list_available_images", {}))
    second = json.loads(await executor.execute("list_available_images", {}))

    assert first == [{"name": "a.png", "url": "file:///img/a.png"}]
    assert [image["name"] for image in second] == ["a.png", "b.png"]
    assert assets.list_images.call_count == 2


@pytest.mark.asyncio
async def test_list_images_without_assets(executor) -> None:
    """Reports an empty library."""
    assert await executor.execute("list_available_images", {}) == "No images available."


@pytest.mark.asyncio
async def test_async_collaborators_are_awaited(deck) -> None:
    """Awaits document store methods that are coroutines."""

    class AsyncStore:
        current_slide_index = 0

        async def delete_slide(self, index: int) -> None:
            raise SlideIndexError(index, 0)

    executor = SlideToolExecutor(default_registry(), AsyncStore())

    result = await executor.execute("delete_slide", {"slideIndex": 3}, approved=True)

    assert result == (
        "Error executing tool: Slide index 3 is out of range (presentation has 0 slides)"
    )
