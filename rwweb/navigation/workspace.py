"""Explicit state handed to every navigation operation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from rwweb.config import default_config
from rwweb.ports import GraphPort, SpatialPort
from rwweb.suggest import SuggestionPanel


@dataclass
class Workspace:
    """The two collaborators plus UI-side state for one gesture.

    Operations read and write only through these objects, so tests can
    build a workspace over a temporary store and a fresh canvas.
    """

    store: GraphPort
    canvas: SpatialPort
    suggestions: SuggestionPanel = field(default_factory=SuggestionPanel)
    config: dict[str, Any] = field(default_factory=default_config)
