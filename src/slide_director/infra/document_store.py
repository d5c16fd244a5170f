"""Document store protocol and the in-memory deck that implements it."""

import json
import logging
from pathlib import Path
from typing import List, Optional, Protocol

from slide_director.domain.editor_context import EditorContext
from slide_director.domain.exceptions import (
    DocumentError,
    NoPresentationError,
    SlideIndexError,
)
from slide_director.domain.presentation import Presentation, Slide

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """Operations the tool executor performs against the open deck."""

    @property
    def current_slide_index(self) -> int: ...

    def create_slide(self, html: str, notes: Optional[str] = None) -> int: ...

    def update_slide(self, index: int, html: str, notes: Optional[str] = None) -> None: ...

    def delete_slide(self, index: int) -> None: ...

    def get_slide(self, index: int) -> Optional[Slide]: ...


class SlideDeck:
    """
    Holds one open presentation and applies slide mutations to it.

    Every mutation completes before the method returns, so a following call
    observes its effect.

    Args:
        presentation: The deck to open, or None for an empty editor.
        path: File the deck was loaded from, used by ``save``.
    """

    def __init__(
        self,
        presentation: Optional[Presentation] = None,
        path: Optional[Path] = None,
    ) -> None:
        self._presentation = presentation
        self._current = 0
        self.path = path
        self.has_unsaved_changes = False

    @property
    def presentation(self) -> Optional[Presentation]:
        return self._presentation

    @property
    def current_slide_index(self) -> int:
        return self._current

    @property
    def slides(self) -> List[Slide]:
        if self._presentation is None:
            return []
        return list(self._presentation.slides)

    def open(self, presentation: Presentation, path: Optional[Path] = None) -> None:
        """Replaces the open deck and selects its first slide."""

        self._presentation = presentation
        self._current = 0
        self.path = path
        self.has_unsaved_changes = False

    def new(self, title: Optional[str] = None) -> Presentation:
        """
        Opens a fresh deck with a single placeholder slide.

        Args:
            title: Optional deck title.

        Returns:
            The new presentation.
        """
        presentation = Presentation.create_default(title)
        self.open(presentation)
        return presentation

    def _require(self) -> Presentation:
        if self._presentation is None:
            raise NoPresentationError("No presentation loaded")
        return self._presentation

    def _check_index(self, presentation: Presentation, index: int) -> None:
        total = len(presentation.slides)
        if index < 0 or index >= total:
            raise SlideIndexError(index, total)

    def _mark_dirty(self, presentation: Presentation) -> None:
        presentation.meta.touch()
        self.has_unsaved_changes = True

    def set_current_slide(self, index: int) -> None:
        """Selects the slide at ``index``."""

        presentation = self._require()
        self._check_index(presentation, index)
        self._current = index

    def create_slide(self, html: str, notes: Optional[str] = None) -> int:
        """
        Inserts a slide after the current one and selects it.

        Args:
            html: Slide markup.
            notes: Optional speaker notes.

        Returns:
            The index of the new slide.
        """
        presentation = self._require()
        index = self._current + 1 if presentation.slides else 0
        presentation.slides.insert(index, Slide(html=html, notes=notes))
        self._current = index
        self._mark_dirty(presentation)
        logger.debug("Created slide at index %d", index)
        return index

    def update_slide(self, index: int, html: str, notes: Optional[str] = None) -> None:
        """
        Replaces the markup of a slide, keeping its notes unless new ones are given.

        Args:
            index: 0-based slide index.
            html: New slide markup.
            notes: Optional new speaker notes.
        """
        presentation = self._require()
        self._check_index(presentation, index)
        slide = presentation.slides[index]
        update = {"html": html}
        if notes is not None:
            update["notes"] = notes
        presentation.slides[index] = slide.model_copy(update=update)
        self._mark_dirty(presentation)
        logger.debug("Updated slide at index %d", index)

    def delete_slide(self, index: int) -> None:
        """
        Removes a slide. The last remaining slide cannot be deleted.

        Args:
            index: 0-based slide index.
        """
        presentation = self._require()
        self._check_index(presentation, index)
        if len(presentation.slides) <= 1:
            raise DocumentError("Cannot delete the only slide in the presentation")
        del presentation.slides[index]
        self._current = min(self._current, len(presentation.slides) - 1)
        self._mark_dirty(presentation)
        logger.debug("Deleted slide at index %d", index)

    def move_slide(self, from_index: int, to_index: int) -> None:
        """Moves a slide to a new position."""

        presentation = self._require()
        self._check_index(presentation, from_index)
        self._check_index(presentation, to_index)
        slide = presentation.slides.pop(from_index)
        presentation.slides.insert(to_index, slide)
        self._mark_dirty(presentation)

    def get_slide(self, index: int) -> Optional[Slide]:
        """
        Returns the slide at ``index``.

        Args:
            index: 0-based slide index.

        Returns:
            The slide, or None when no deck is open or the index is out of range.
        """
        if self._presentation is None:
            return None
        if index < 0 or index >= len(self._presentation.slides):
            return None
        return self._presentation.slides[index]

    def editor_context(self) -> Optional[EditorContext]:
        """
        Snapshots the open deck for a new agent run.

        Returns:
            The editor context, or None when no deck is open.
        """
        if self._presentation is None:
            return None
        slide = self.get_slide(self._current)
        return EditorContext(
            presentation_title=self._presentation.meta.title,
            total_slides=len(self._presentation.slides),
            current_slide_index=self._current,
            current_slide_html=slide.html if slide else "No slide content",
            current_slide_notes=slide.notes if slide else None,
        )

    @classmethod
    def load(cls, path: Path) -> "SlideDeck":
        """
        Opens a deck saved as JSON.

        Args:
            path: The deck file.

        Returns:
            A store holding the loaded deck.
        """
        raw = json.loads(path.read_text(encoding="utf-8"))
        return cls(Presentation.model_validate(raw), path=path)

    def save(self, path: Optional[Path] = None) -> Path:
        """
        Writes the open deck as JSON.

        Args:
            path: Target file; defaults to the file the deck came from.

        Returns:
            The path written.
        """
        presentation = self._require()
        target = path or self.path
        if target is None:
            raise ValueError("No path given for saving the presentation.")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(presentation.model_dump_json(indent=2), encoding="utf-8")
        self.path = target
        self.has_unsaved_changes = False
        return target
