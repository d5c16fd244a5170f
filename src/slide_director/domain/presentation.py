"""Deck data model shared by the document store and the CLI."""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

DEFAULT_SLIDE_HTML = """<section class="slide">
    <h1>New Slide</h1>
    <p>Click to edit or use AI to generate content</p>
  </section>"""


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Theme(str, Enum):
    """Visual themes a deck can be rendered with."""

    DARK_CORPORATE = "dark-corporate"
    LIGHT_MINIMAL = "light-minimal"
    GRADIENT_MODERN = "gradient-modern"


class Slide(BaseModel):
    """A single slide: HTML markup plus optional speaker notes."""

    id: str = Field(default_factory=lambda: f"slide-{uuid4().hex[:12]}")
    html: str = DEFAULT_SLIDE_HTML
    notes: Optional[str] = None


class PresentationMeta(BaseModel):
    """Descriptive metadata of a deck."""

    title: str = "Untitled Presentation"
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)
    theme: Theme = Theme.DARK_CORPORATE

    def touch(self) -> None:
        """Marks the deck as modified now."""

        self.updated_at = _now()


class Presentation(BaseModel):
    """An ordered list of slides with metadata."""

    meta: PresentationMeta = Field(default_factory=PresentationMeta)
    slides: List[Slide] = Field(default_factory=list)

    @classmethod
    def create_default(cls, title: Optional[str] = None) -> "Presentation":
        """
        Creates a new deck holding a single placeholder slide.

        Args:
            title: Optional deck title.

        Returns:
            The new presentation.
        """
        meta = PresentationMeta(title=title) if title else PresentationMeta()
        return cls(meta=meta, slides=[Slide()])
