"""YAML snapshot of the canvas and suggestion panel between CLI runs."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from rwweb.canvas.layout import Canvas
from rwweb.suggest import SuggestionPanel

SNAPSHOT_VERSION = 1


class CanvasStateError(Exception):
    """Raised when a canvas snapshot cannot be read."""


def load_canvas_state(
    path: Path,
    geometry: dict[str, Any] | None = None,
) -> tuple[Canvas, SuggestionPanel]:
    """Load the canvas and suggestion panel from *path*.

    A missing file yields an empty canvas and panel.
    """
    if not path.exists():
        return Canvas(geometry), SuggestionPanel()

    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise CanvasStateError(f"Canvas state is invalid YAML: {path}") from exc

    if raw is None:
        return Canvas(geometry), SuggestionPanel()
    if not isinstance(raw, dict):
        raise CanvasStateError(f"Canvas state must be a YAML mapping: {path}")
    version = raw.get("version")
    if version != SNAPSHOT_VERSION:
        raise CanvasStateError(
            f"Unsupported canvas state version {version!r} in {path} "
            f"(expected {SNAPSHOT_VERSION})"
        )

    try:
        canvas = Canvas.from_dict(raw.get("canvas") or {}, geometry)
        panel = SuggestionPanel.from_dict(raw.get("suggestions") or {})
    except (TypeError, ValueError) as exc:
        raise CanvasStateError(f"Canvas state is malformed: {path}: {exc}") from exc
    return canvas, panel


def save_canvas_state(path: Path, canvas: Canvas, panel: SuggestionPanel) -> None:
    """Write the canvas and suggestion panel to *path*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "version": SNAPSHOT_VERSION,
        "canvas": canvas.to_dict(),
        "suggestions": panel.to_dict(),
    }
    path.write_text(yaml.safe_dump(payload, sort_keys=True))
