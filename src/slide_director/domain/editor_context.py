from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

NO_PRESENTATION_CONTEXT = "No presentation loaded. User should create a new one first."


class EditorContext(BaseModel):
    """Snapshot of what the user is looking at when a run starts."""

    presentation_title: str
    total_slides: int = Field(ge=0)
    current_slide_index: int = Field(ge=0)
    current_slide_html: str = ""
    current_slide_notes: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def render(self) -> str:
        """
        Renders the snapshot as a prompt section.

        Returns:
            The editor state block appended to the system prompt.
        """
        lines = [
            "Current Editor State:",
            f'- Presentation: "{self.presentation_title}"',
            f"- Total Slides: {self.total_slides}",
            f"- Current Slide Index: {self.current_slide_index}",
            "- Current Slide HTML:",
            "```html",
            self.current_slide_html,
            "```",
        ]
        if self.current_slide_notes:
            lines.append(f"- Speaker Notes: {self.current_slide_notes}")
        return "\n".join(lines)


def render_editor_context(context: Optional[EditorContext]) -> str:
    """Renders a context snapshot, or the placeholder when no deck is open."""

    if context is None:
        return NO_PRESENTATION_CONTEXT
    return context.render()
