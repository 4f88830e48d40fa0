"""CLI entry point for rwweb."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import click

from rwweb.navigation import Workspace
from rwweb.ports import EMPTY_ITEM

# Default config template
CONFIG_TEMPLATE = """\
store:
  path: .rwweb/rwweb.db

canvas:
  state_file: .rwweb/canvas.yaml
  viewport: {width: 1200, height: 800}
  empty_item: {x: 100, y: 100, width: 400, height: 50}
  drop_item: {width: 200, height: 150}
  friend_item: {width: 200, height: 150}
  column_gap: 60
  row_gap: 20

welcome:
  enabled: true  # Show the welcome note and demo links on reset
  geometry: {x: 50, y: 50, width: 500, height: 150}

suggest:
  limit: 10

log_level: WARNING  # DEBUG | INFO | WARNING | ERROR
"""

project_root_option = click.option(
    "--project-root",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    default=".",
    help="Project root directory (default: cwd).",
)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@contextmanager
def _workspace(project_root: str) -> Iterator[Workspace]:
    """Open the project's workspace, turning known failures into CLI errors."""
    from rwweb.canvas import CanvasStateError, UnknownItemError
    from rwweb.config import ConfigError, load_config
    from rwweb.session import open_workspace

    root = Path(project_root)
    try:
        config = load_config(root)
    except ConfigError as exc:
        raise click.ClickException(f"{exc}\nRun 'rwweb init' first.") from exc
    _setup_logging(config["log_level"])

    try:
        with open_workspace(root, config) as ws:
            yield ws
    except CanvasStateError as exc:
        raise click.ClickException(
            f"{exc}\nTo recover, run:\n  rwweb reset --project-root {root}"
        ) from exc
    except UnknownItemError as exc:
        raise click.ClickException(f"No item {exc} on the canvas.") from exc


@click.group()
def cli() -> None:
    """rwweb: a read/write web browser on an infinite canvas."""


@cli.command()
@project_root_option
def init(project_root: str) -> None:
    """Initialize .rwweb/ with a config, an empty store and a fresh canvas."""
    from rwweb.navigation import init_canvas

    root = Path(project_root)
    rwweb_dir = root / ".rwweb"

    if rwweb_dir.exists():
        click.echo(f".rwweb/ already exists at {rwweb_dir}")
        raise SystemExit(1)

    rwweb_dir.mkdir(parents=True)
    config_path = rwweb_dir / "config.yaml"
    config_path.write_text(CONFIG_TEMPLATE)
    click.echo(f"Created {config_path}")

    with _workspace(project_root) as ws:
        item_id = init_canvas(ws)
    click.echo(f"Canvas ready. Type into {item_id} with: rwweb navigate {item_id} <url or note>")


@cli.command()
@project_root_option
def reset(project_root: str) -> None:
    """Clean the canvas and show the empty item (and welcome note)."""
    from rwweb.canvas import CanvasStateError, load_canvas_state
    from rwweb.config import ConfigError, load_config, resolve_paths
    from rwweb.navigation import init_canvas

    root = Path(project_root)
    try:
        state_file = resolve_paths(load_config(root), root)["canvas_state"]
    except ConfigError as exc:
        raise click.ClickException(f"{exc}\nRun 'rwweb init' first.") from exc

    # Drop a corrupt snapshot before rebuilding
    try:
        load_canvas_state(state_file)
    except CanvasStateError:
        click.echo(f"Discarding unreadable canvas state: {state_file}")
        state_file.unlink()

    with _workspace(project_root) as ws:
        item_id = init_canvas(ws)
    click.echo(f"Canvas reset. Empty item: {item_id}")


@cli.command()
@project_root_option
@click.argument("item_id")
@click.argument("user_input", required=False)
@click.option("--doc-id", default=None, help="Navigate to an existing document id instead.")
def navigate(project_root: str, item_id: str, user_input: str | None, doc_id: str | None) -> None:
    """Show a URL or note in ITEM_ID and reveal its linked documents."""
    from rwweb.navigation import navigate_to
    from rwweb.render import doc_label

    with _workspace(project_root) as ws:
        ws.canvas.get_item(item_id)
        if doc_id is not None and ws.store.get_doc(doc_id) is None:
            raise click.ClickException(f"No document '{doc_id}' in the store.")
        result = navigate_to(ws, item_id, doc_id=doc_id, user_input=user_input)
        if result is None:
            click.echo("Nothing to navigate to.")
            return
        click.echo(f"{item_id}: {doc_label(ws.store, result)} [{result}]")
        connected = ws.canvas.get_connected_item_ids(item_id)
        click.echo(f"  Friends shown: {len(connected)}")


@cli.command()
@project_root_option
@click.argument("x", type=float)
@click.argument("y", type=float)
@click.option("--url", default=None, help="Dropped URL.")
@click.option("--html", default=None, help="Dropped HTML fragment.")
@click.option("--text", default=None, help="Dropped plain text.")
def drop(
    project_root: str,
    x: float,
    y: float,
    url: str | None,
    html: str | None,
    text: str | None,
) -> None:
    """Drop a URL, HTML or text on the canvas at (X, Y)."""
    from rwweb.navigation import DropPayload, handle_drop

    with _workspace(project_root) as ws:
        item_id = handle_drop(ws, x, y, DropPayload(url=url, html=html, text=text))
        if item_id is None:
            click.echo("Nothing to drop.")
            return
        item = ws.canvas.get_item(item_id)
        click.echo(f"Dropped {item.doc_id} as {item_id}")


@cli.command()
@project_root_option
@click.argument("item_id")
def tap(project_root: str, item_id: str) -> None:
    """Tap an item: star it, or expand a centered web page."""
    from rwweb.navigation import handle_tap

    with _workspace(project_root) as ws:
        handle_tap(ws, item_id)
        item = ws.canvas.get_item(item_id)
        if item.expanded:
            state = "expanded"
        elif item.centered:
            state = "centered"
        else:
            state = "focused"
        click.echo(f"{item_id}: {state}")


@cli.command("drag-out")
@project_root_option
@click.argument("item_id")
@click.option(
    "--dir",
    "direction",
    type=click.Choice(["left", "right"]),
    default="right",
    help="Canvas edge the item was dragged over.",
)
def drag_out(project_root: str, item_id: str, direction: str) -> None:
    """Drag ITEM_ID off the canvas, unlinking it from its visible friends."""
    from rwweb.navigation import handle_dragged_out

    with _workspace(project_root) as ws:
        doc_id = ws.canvas.get_item(item_id).doc_id
        handle_dragged_out(ws, item_id, direction)
        click.echo(f"Removed {item_id}")
        if doc_id != EMPTY_ITEM and ws.store.get_doc(doc_id) is None:
            click.echo(f"Deleted document {doc_id} (no friends left)")


@cli.command("type")
@project_root_option
@click.argument("item_id")
@click.argument("value")
def type_cmd(project_root: str, item_id: str, value: str) -> None:
    """Type VALUE into an empty item and list matching documents."""
    from rwweb.navigation import set_empty_item_value, update_auto_suggest

    with _workspace(project_root) as ws:
        ws.canvas.get_item(item_id)
        set_empty_item_value(ws, item_id, value)
        suggestions = update_auto_suggest(ws, item_id)
        if not suggestions:
            click.echo("No suggestions.")
            return
        click.echo(f"Suggestions ({len(suggestions)}):")
        for s in suggestions:
            click.echo(f"  {s['doc_id']}  {s['label']}")


@cli.command()
@project_root_option
def show(project_root: str) -> None:
    """Print the visible items and their connections."""
    from rwweb.render import render_canvas

    with _workspace(project_root) as ws:
        click.echo(render_canvas(ws.canvas, ws.store), nl=False)


@cli.command()
@project_root_option
def status(project_root: str) -> None:
    """Show store and canvas counts."""
    with _workspace(project_root) as ws:
        stats = ws.store.stats()  # type: ignore[attr-defined]
        visible = ws.canvas.visible_items()  # type: ignore[attr-defined]

        click.echo("Store:")
        click.echo(f"  URL documents: {stats['url']}")
        click.echo(f"  Notes: {stats['note']}")
        click.echo(f"  Links: {stats['links']}")
        click.echo("\nCanvas:")
        click.echo(f"  Visible items: {len(visible)}")
        centered = [item.item_id for item in visible if item.centered]
        click.echo(f"  Centered: {centered[0] if centered else '-'}")
        focused = ws.canvas.focused_item_id  # type: ignore[attr-defined]
        click.echo(f"  Focused: {focused or '-'}")
