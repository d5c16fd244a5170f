import asyncio
import contextlib
import json
import signal
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from slide_director.config import Config
from slide_director.config_provider import ConfigProvider
from slide_director.core.session import AgentSession
from slide_director.domain.agent_step import AgentStep, AgentStepKind
from slide_director.domain.run_result import RunOutcome
from slide_director.infra.document_store import SlideDeck
from slide_director.infra.image_library import ImageLibrary
from slide_director.infra.utils import setup_logging

app = typer.Typer(help="Edit slide decks with an AI agent.")
console = Console()
DECK_HELP = "Path to the deck JSON file."


def _default_deck_path(config: Config, title: str) -> Path:
    safe = "".join(ch if ch.isalnum() else "-" for ch in title.lower()).strip("-")
    return config.get_presentations_dir() / f"{safe or 'untitled'}.json"


def print_step(step: AgentStep) -> None:
    """Renders one agent step on the console."""

    if step.kind is AgentStepKind.THINKING:
        console.print(f"[dim]{escape(step.content)}[/dim]")
    elif step.kind is AgentStepKind.TOOL_CALL:
        args = json.dumps(step.args or {}, ensure_ascii=False)
        if len(args) > 120:
            args = args[:117] + "..."
        console.print(f"[cyan]-> {step.tool_name}[/cyan] {escape(args)}")
    else:
        console.print(f"[green]<- {step.tool_name}:[/green] {escape(step.content)}")


async def _run_agent(
    session: AgentSession, deck: SlideDeck, instruction: str, auto_approve: bool
) -> None:
    loop = asyncio.get_running_loop()
    with contextlib.suppress(NotImplementedError):
        loop.add_signal_handler(signal.SIGINT, session.cancel)
    try:
        result = await session.run(
            instruction, editor_context=deck.editor_context(), on_step=print_step
        )
    finally:
        with contextlib.suppress(NotImplementedError):
            loop.remove_signal_handler(signal.SIGINT)

    if result.outcome is RunOutcome.CANCELLED:
        console.print("[yellow]Task cancelled.[/yellow]")
        return
    if result.outcome is RunOutcome.APPROVAL_PENDING and result.pending_approval:
        pending = result.pending_approval
        console.print(
            f"[bold yellow]Approval required:[/bold yellow] {pending.tool_name} "
            f"{escape(json.dumps(pending.args))}"
        )
        if auto_approve or typer.confirm("Apply this change?", default=False):
            outcome = await session.approve(pending)
        else:
            outcome = await session.reject(pending)
        console.print(f"[green]{escape(outcome.text)}[/green]")
        return
    console.print(f"[green]{escape(result.final_text)}[/green]")


@app.command()
def new(
    title: str,
    deck: Optional[Path] = typer.Option(None, "--deck", "-d", help=DECK_HELP),
):
    """
    Create a new deck with a single placeholder slide.
    """
    config = ConfigProvider().load()
    path = deck or _default_deck_path(config, title)
    if path.exists():
        console.print(f"[yellow]Deck already exists at {path}.[/yellow]")
        return
    store = SlideDeck()
    store.new(title)
    store.save(path)
    console.print(f"[green]Created deck '{title}' at {path}.[/green]")


@app.command()
def run(
    instruction: str,
    deck: Path = typer.Option(..., "--deck", "-d", help=DECK_HELP),
    slide: Optional[int] = typer.Option(
        None, "--slide", "-s", help="0-based index of the slide being viewed."
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Approve sensitive actions."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs."),
):
    """
    Ask the agent to edit a deck.
    """
    config = ConfigProvider().load()
    setup_logging(config.log_level, verbose=verbose)
    store: Optional[SlideDeck] = None
    try:
        store = SlideDeck.load(deck)
        if slide is not None:
            store.set_current_slide(slide)
        session = AgentSession.from_config(
            config, store, ImageLibrary(config.get_images_dir())
        )
        console.print(f"[bold green]Agent:[/bold green] working on '{escape(instruction)}'...")
        asyncio.run(_run_agent(session, store, instruction, yes))
    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    finally:
        # Tool calls that ran before a failure are kept.
        if store is not None and store.has_unsaved_changes:
            store.save()
            console.print(f"[dim]Saved {escape(str(deck))}.[/dim]")


@app.command()
def show(deck: Path = typer.Option(..., "--deck", "-d", help=DECK_HELP)):
    """
    Print the slides of a deck.
    """
    try:
        store = SlideDeck.load(deck)
    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    presentation = store.presentation
    table = Table(title=presentation.meta.title if presentation else "")
    table.add_column("#", justify="right")
    table.add_column("HTML")
    table.add_column("Notes")
    for index, item in enumerate(store.slides):
        table.add_row(str(index), escape(item.html), escape(item.notes or ""))
    console.print(table)


@app.command()
def images():
    """
    List the images available to the agent.
    """
    config = ConfigProvider().load()
    entries = ImageLibrary(config.get_images_dir()).list_images()
    if not entries:
        console.print("[yellow]No images available.[/yellow]")
        return
    for entry in entries:
        console.print(f"{entry.name}  [dim]{entry.reference_url}[/dim]")


if __name__ == "__main__":
    app()
