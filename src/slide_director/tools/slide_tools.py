"""Catalog of tools the slide agent can call."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from slide_director.domain.tool import ToolSpec

CREATE_SLIDE = "create_slide"
UPDATE_SLIDE = "update_slide"
DELETE_SLIDE = "delete_slide"
GET_SLIDE_INFO = "get_slide_info"
LIST_AVAILABLE_IMAGES = "list_available_images"


class _ToolArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CreateSlideArgs(_ToolArgs):
    html: str = Field(
        description='The HTML content for the slide, wrapped in <section class="slide">'
    )
    notes: Optional[str] = Field(
        default=None, description="Optional speaker notes for the slide"
    )


class UpdateSlideArgs(_ToolArgs):
    slide_index: int = Field(
        alias="slideIndex", description="The 0-based index of the slide to update"
    )
    html: str = Field(description="The new HTML content for the slide")
    notes: Optional[str] = Field(
        default=None, description="Optional new speaker notes"
    )


class DeleteSlideArgs(_ToolArgs):
    slide_index: int = Field(
        alias="slideIndex", description="The 0-based index of the slide to delete"
    )


class GetSlideInfoArgs(_ToolArgs):
    slide_index: Optional[int] = Field(
        default=None,
        alias="slideIndex",
        description="The 0-based index of the slide (omit for current slide)",
    )


class ListAvailableImagesArgs(_ToolArgs):
    pass


SLIDE_TOOLS = (
    ToolSpec(
        name=CREATE_SLIDE,
        description=(
            "Create a new slide with the given HTML content. The HTML should be "
            'wrapped in a <section class="slide"> element. Use semantic HTML like '
            "h1, h2, p, ul, li for content."
        ),
        args_model=CreateSlideArgs,
    ),
    ToolSpec(
        name=UPDATE_SLIDE,
        description="Update an existing slide at the given index with new HTML content.",
        args_model=UpdateSlideArgs,
    ),
    ToolSpec(
        name=DELETE_SLIDE,
        description="Delete the slide at the given index.",
        args_model=DeleteSlideArgs,
        sensitive=True,
    ),
    ToolSpec(
        name=GET_SLIDE_INFO,
        description="Get information about the current slide or a specific slide by index.",
        args_model=GetSlideInfoArgs,
    ),
    ToolSpec(
        name=LIST_AVAILABLE_IMAGES,
        description=(
            "List the images in the user's image library. Returns each image's "
            "name and the exact URL to use in an <img src> attribute."
        ),
        args_model=ListAvailableImagesArgs,
    ),
)

SENSITIVE_TOOLS = frozenset(spec.name for spec in SLIDE_TOOLS if spec.sensitive)
