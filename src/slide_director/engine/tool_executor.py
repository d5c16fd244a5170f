"""Tool execution against the document and asset collaborators."""

import inspect
import json
import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ValidationError

from slide_director.infra.document_store import DocumentStore
from slide_director.infra.image_library import AssetStore
from slide_director.tools import slide_tools
from slide_director.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Error executing tool: "


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _format_validation_error(tool_name: str, exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "arguments"
        problems.append(f"{location}: {error.get('msg')}")
    return f"invalid arguments for {tool_name} ({'; '.join(problems)})"


class SlideToolExecutor:
    """
    Executes slide tool calls and reports every outcome as text.

    Failures never escape ``execute``; they come back as
    ``Error executing tool: <message>`` so the model can react to them.

    Args:
        registry: Tool catalog used to validate names and arguments.
        documents: Store holding the open deck.
        assets: Optional image asset store.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        documents: DocumentStore,
        assets: Optional[AssetStore] = None,
    ) -> None:
        self.registry = registry
        self.documents = documents
        self.assets = assets

    async def execute(
        self,
        name: str,
        args: Optional[Mapping[str, Any]] = None,
        approved: bool = False,
    ) -> str:
        """
        Runs one tool call.

        Args:
            name: Tool name requested by the model.
            args: Raw tool arguments.
            approved: Whether the user approved this call. Sensitive tools do
                nothing without it.

        Returns:
            The textual tool result.
        """
        spec = self.registry.get(name)
        if spec is None:
            logger.warning("Model requested unknown tool '%s'", name)
            return f"Unknown tool: {name}"

        if spec.sensitive and not approved:
            logger.warning("Refusing unapproved call to sensitive tool '%s'", name)
            return f"{ERROR_PREFIX}{name} requires user approval"

        try:
            parsed = spec.validate_args(dict(args or {}))
        except ValidationError as exc:
            return ERROR_PREFIX + _format_validation_error(name, exc)

        try:
            logger.debug("Executing tool '%s' with args=%s", name, args)
            result = await self._dispatch(name, parsed)
        except Exception as exc:
            logger.info("Tool '%s' failed: %s", name, exc)
            return f"{ERROR_PREFIX}{exc}"
        logger.debug("Tool '%s' returned: %s", name, result)
        return result

    async def _dispatch(self, name: str, args: BaseModel) -> str:
        if isinstance(args, slide_tools.CreateSlideArgs):
            index = await _resolve(self.documents.create_slide(args.html, args.notes))
            if index is None:
                return "Created new slide"
            return f"Created new slide at index {index}"
        if isinstance(args, slide_tools.UpdateSlideArgs):
            await _resolve(
                self.documents.update_slide(args.slide_index, args.html, args.notes)
            )
            return f"Updated slide {args.slide_index + 1}"
        if isinstance(args, slide_tools.DeleteSlideArgs):
            await _resolve(self.documents.delete_slide(args.slide_index))
            return f"Deleted slide {args.slide_index + 1}"
        if isinstance(args, slide_tools.GetSlideInfoArgs):
            return await self._slide_info(args.slide_index)
        if isinstance(args, slide_tools.ListAvailableImagesArgs):
            return await self._list_images()
        raise NotImplementedError(f"No handler for tool '{name}'")

    async def _slide_info(self, slide_index: Optional[int]) -> str:
        index = slide_index
        if index is None:
            index = self.documents.current_slide_index
        slide = await _resolve(self.documents.get_slide(index))
        if slide is None:
            return "Slide not found"
        payload: Dict[str, Any] = {"index": index, "html": slide.html, "notes": slide.notes}
        return json.dumps(payload)

    async def _list_images(self) -> str:
        if self.assets is None:
            return "No images available."
        images = await _resolve(self.assets.list_images())
        if not images:
            return "No images available."
        return json.dumps(
            [{"name": image.name, "url": image.reference_url} for image in images]
        )
