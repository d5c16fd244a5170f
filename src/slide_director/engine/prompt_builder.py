"""Prompt construction for the slide agent."""

from typing import List, Optional, Sequence

from langchain_core.messages import BaseMessage, SystemMessage

from slide_director.domain.editor_context import EditorContext, render_editor_context

SLIDE_SYSTEM_PROMPT = """You are a presentation designer assistant. You help users create and edit slides using the available tools.

Available tools:
- create_slide: Create a new slide with HTML content (inserted after the current slide)
- update_slide: Update an existing slide by index
- delete_slide: Delete a slide by index (the user must approve this)
- get_slide_info: Get information about a slide
- list_available_images: List images from the user's library with the exact URL to use

CRITICAL: When updating slides, you MUST preserve existing content unless explicitly asked to replace it.
- If user asks to "add" something, include ALL existing elements plus the new content
- If user asks to "change" or "edit" something specific, modify only that element while keeping everything else
- Only create completely fresh content if user explicitly asks to "replace" or "make a new slide about"
- Always reference the current slide HTML provided in the context before making changes

IMAGES: Call list_available_images before using an image and copy its URL verbatim into the src attribute. Never invent image URLs.

SLIDE LAYOUTS - Use these templates:

1. TITLE SLIDE (for openings, section breaks, hero content):
<section class="slide slide-content slide-title">
  <h1>Main Title</h1>
  <p>Subtitle or tagline</p>
</section>

2. CONTENT SLIDE (for most slides with information):
<section class="slide slide-content slide-content-layout">
  <div class="slide-header">
    <h2>Slide Title</h2>
    <p>Optional description or context</p>
  </div>
  <div class="slide-body">
    <ul>
      <li>Key point one</li>
      <li>Key point two</li>
    </ul>
  </div>
</section>

Guidelines:
- Use slide-title for opening slides, transitions, or when content should be centered
- Use slide-content-layout for informational slides with bullets, paragraphs, or structured content
- Keep text concise and impactful - presentations should be scannable
- Always include the slide-content class for proper styling

Always use the tools to make changes. Respond conversationally to explain what you did."""


class PromptBuilder:
    """
    Builds the message sequence sent to the model on every agent step.

    Args:
        system_prompt: Base instructions; the editor context is appended.
    """

    def __init__(self, system_prompt: str = SLIDE_SYSTEM_PROMPT) -> None:
        self.system_prompt = system_prompt

    def build_system_prompt(self, editor_context: Optional[EditorContext]) -> str:
        """
        Builds the system prompt text from the base prompt and editor state.

        Args:
            editor_context: Snapshot taken when the run started.

        Returns:
            The full system prompt.
        """
        return f"{self.system_prompt}\n\n{render_editor_context(editor_context)}"

    def build_messages(
        self,
        messages: Sequence[BaseMessage],
        editor_context: Optional[EditorContext],
    ) -> List[BaseMessage]:
        """
        Builds the message list for one model invocation.

        Any system messages already in the history are dropped so the prompt
        appears exactly once.

        Args:
            messages: Conversation accumulated in this run.
            editor_context: Snapshot taken when the run started.

        Returns:
            The ordered list of messages for LLM invocation.
        """
        conversation = [m for m in messages if not isinstance(m, SystemMessage)]
        return [SystemMessage(content=self.build_system_prompt(editor_context))] + conversation
