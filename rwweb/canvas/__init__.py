"""Canvas layout engine and its on-disk snapshot."""

from rwweb.canvas.layout import Canvas, UnknownItemError
from rwweb.canvas.state import CanvasStateError, load_canvas_state, save_canvas_state

__all__ = [
    "Canvas",
    "CanvasStateError",
    "UnknownItemError",
    "load_canvas_state",
    "save_canvas_state",
]
