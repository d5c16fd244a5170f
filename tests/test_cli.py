from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from helpers import ScriptedChatModel, assistant, make_session, tool_call
from slide_director.cli.main import app
from slide_director.config import Config
from slide_director.infra.document_store import SlideDeck

runner = CliRunner()


def _write_deck(path: Path, *htmls: str) -> None:
    deck = SlideDeck()
    deck.new("Demo")
    for html in htmls:
        deck.create_slide(html)
    deck.save(path)


def _scripted_sessions(mock_session, responses):
    model = ScriptedChatModel(responses)
    mock_session.from_config.side_effect = (
        lambda config, store, assets=None: make_session(model, store)
    )
    return model


@patch("slide_director.cli.main.ConfigProvider")
def test_new_creates_deck(mock_config_provider, tmp_path: Path):
    mock_config_provider.return_value.load.return_value = Config(storage_dir=tmp_path)
    target = tmp_path / "demo.json"

    result = runner.invoke(app, ["new", "Demo", "--deck", str(target)])

    assert result.exit_code == 0
    assert "Created deck" in result.stdout
    assert len(SlideDeck.load(target).slides) == 1


@patch("slide_director.cli.main.ConfigProvider")
def test_new_defaults_to_presentations_dir(mock_config_provider, tmp_path: Path):
    mock_config_provider.return_value.load.return_value = Config(storage_dir=tmp_path)

    result = runner.invoke(app, ["new", "Q3 Review"])

    assert result.exit_code == 0
    assert (tmp_path / "presentations" / "q3-review.json").exists()


@patch("slide_director.cli.main.ConfigProvider")
def test_new_refuses_to_overwrite(mock_config_provider, tmp_path: Path):
    mock_config_provider.return_value.load.return_value = Config(storage_dir=tmp_path)
    target = tmp_path / "demo.json"
    _write_deck(target, "<p>keep</p>")

    result = runner.invoke(app, ["new", "Demo", "--deck", str(target)])

    assert result.exit_code == 0
    assert "already exists" in result.stdout
    assert len(SlideDeck.load(target).slides) == 2


@patch("slide_director.cli.main.ConfigProvider")
@patch("slide_director.cli.main.AgentSession")
def test_run_applies_and_saves_changes(mock_session, mock_config_provider, tmp_path: Path):
    mock_config_provider.return_value.load.return_value = Config(storage_dir=tmp_path)
    target = tmp_path / "demo.json"
    _write_deck(target)
    _scripted_sessions(
        mock_session,
        [assistant("", tool_call("create_slide", html="<p>agenda</p>")), assistant("Added.")],
    )

    result = runner.invoke(app, ["run", "add an agenda", "--deck", str(target)])

    assert result.exit_code == 0
    assert "create_slide" in result.stdout
    assert "Added." in result.stdout
    assert SlideDeck.load(target).slides[1].html == "<p>agenda</p>"


@patch("slide_director.cli.main.ConfigProvider")
@patch("slide_director.cli.main.AgentSession")
def test_run_with_yes_approves_delete(mock_session, mock_config_provider, tmp_path: Path):
    mock_config_provider.return_value.load.return_value = Config(storage_dir=tmp_path)
    target = tmp_path / "demo.json"
    _write_deck(target, "<p>two</p>")
    _scripted_sessions(mock_session, [assistant("", tool_call("delete_slide", slideIndex=1))])

    result = runner.invoke(app, ["run", "drop slide 2", "--deck", str(target), "--yes"])

    assert result.exit_code == 0
    assert "Approval required" in result.stdout
    assert "Deleted slide 2" in result.stdout
    assert len(SlideDeck.load(target).slides) == 1


@patch("slide_director.cli.main.ConfigProvider")
@patch("slide_director.cli.main.AgentSession")
def test_run_declined_delete_keeps_deck(mock_session, mock_config_provider, tmp_path: Path):
    mock_config_provider.return_value.load.return_value = Config(storage_dir=tmp_path)
    target = tmp_path / "demo.json"
    _write_deck(target, "<p>two</p>")
    _scripted_sessions(mock_session, [assistant("", tool_call("delete_slide", slideIndex=1))])

    result = runner.invoke(app, ["run", "drop slide 2", "--deck", str(target)], input="n\n")

    assert result.exit_code == 0
    assert "Action cancelled by user." in result.stdout
    assert len(SlideDeck.load(target).slides) == 2


@patch("slide_director.cli.main.ConfigProvider")
def test_run_missing_deck_fails(mock_config_provider, tmp_path: Path):
    mock_config_provider.return_value.load.return_value = Config(storage_dir=tmp_path)

    result = runner.invoke(app, ["run", "anything", "--deck", str(tmp_path / "nope.json")])

    assert result.exit_code == 1
    assert "Error:" in result.stdout


def test_show_lists_slides(tmp_path: Path):
    target = tmp_path / "demo.json"
    _write_deck(target, "<p>two</p>")

    result = runner.invoke(app, ["show", "--deck", str(target)])

    assert result.exit_code == 0
    assert "Demo" in result.stdout
    assert "two" in result.stdout


@patch("slide_director.cli.main.ConfigProvider")
def test_images_lists_library(mock_config_provider, tmp_path: Path):
    mock_config_provider.return_value.load.return_value = Config(storage_dir=tmp_path)
    images_dir = tmp_path / "images"
    images_dir.mkdir()
    (images_dir / "logo.png").write_bytes(b"")

    result = runner.invoke(app, ["images"])

    assert result.exit_code == 0
    assert "logo.png" in result.stdout


@patch("slide_director.cli.main.ConfigProvider")
def test_images_empty_library(mock_config_provider, tmp_path: Path):
    mock_config_provider.return_value.load.return_value = Config(storage_dir=tmp_path)

    result = runner.invoke(app, ["images"])

    assert result.exit_code == 0
    assert "No images available." in result.stdout


@patch("slide_director.cli.main.ConfigProvider")
@patch("slide_director.cli.main.AgentSession")
def test_run_failure_keeps_applied_changes(mock_session, mock_config_provider, tmp_path: Path):
    mock_config_provider.return_value.load.return_value = Config(storage_dir=tmp_path)
    target = tmp_path / "demo.json"
    _write_deck(target)
    _scripted_sessions(
        mock_session,
        [
            assistant("", tool_call("create_slide", html="<p>kept</p>")),
            RuntimeError("provider down"),
        ],
    )

    result = runner.invoke(app, ["run", "add a slide", "--deck", str(target)])

    assert result.exit_code == 1
    assert "provider down" in result.stdout
    slides = SlideDeck.load(target).slides
    assert len(slides) == 2
    assert slides[1].html == "<p>kept</p>"


@patch("slide_director.cli.main.ConfigProvider")
@patch("slide_director.cli.main.AgentSession")
def test_run_prints_markup_like_arguments_verbatim(
    mock_session, mock_config_provider, tmp_path: Path
):
    mock_config_provider.return_value.load.return_value = Config(storage_dir=tmp_path)
    target = tmp_path / "demo.json"
    _write_deck(target, "<p>two</p>")
    _scripted_sessions(
        mock_session, [assistant("", tool_call("delete_slide", slideIndex="[/red]"))]
    )

    result = runner.invoke(app, ["run", "drop it", "--deck", str(target), "--yes"])

    assert result.exit_code == 0
    assert "[/red]" in result.stdout
    assert "Error executing tool: invalid arguments for delete_slide" in result.stdout
    assert len(SlideDeck.load(target).slides) == 2


def test_show_missing_deck_fails(tmp_path: Path):
    result = runner.invoke(app, ["show", "--deck", str(tmp_path / "nope.json")])

    assert result.exit_code == 1
    assert "Error:" in result.stdout
