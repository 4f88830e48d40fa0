"""Workspace wiring for a project directory.

:func:`open_workspace` builds a :class:`~rwweb.navigation.Workspace` from
``.rwweb/`` state (config, SQLite store, canvas snapshot) and writes the
canvas snapshot back once the caller's gesture has completed.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from rwweb.canvas import load_canvas_state, save_canvas_state
from rwweb.config import load_config, resolve_paths
from rwweb.navigation import Workspace
from rwweb.store import DocumentStore

log = logging.getLogger(__name__)


@contextmanager
def open_workspace(
    project_root: Path,
    config: dict[str, Any] | None = None,
) -> Iterator[Workspace]:
    """Yield the project's workspace; save the canvas if the block succeeds.

    Parameters
    ----------
    project_root:
        Directory containing ``.rwweb/``.
    config:
        Already-loaded config. Loaded from ``.rwweb/config.yaml`` if None.
    """
    root = Path(project_root)
    if config is None:
        config = load_config(root)
    paths = resolve_paths(config, root)

    store = DocumentStore(paths["db"], suggest_limit=config["suggest"]["limit"])
    canvas, suggestions = load_canvas_state(paths["canvas_state"], config["canvas"])
    ws = Workspace(store=store, canvas=canvas, suggestions=suggestions, config=config)

    yield ws

    save_canvas_state(paths["canvas_state"], canvas, suggestions)
    log.debug("Saved canvas state to %s", paths["canvas_state"])
