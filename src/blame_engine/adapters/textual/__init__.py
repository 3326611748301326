"""Rich rendering and Textual bridge for commit highlights.

``HighlightView`` lives in ``blame_engine.adapters.textual.widget`` so the
controller can be used without importing Textual.
"""

from .controller import TextualTrackChangesAdapter, TextualUIHooks
from .render import DEFAULT_MARKER_STYLE, DEFAULT_STYLES, render_highlight

__all__ = [
    "DEFAULT_MARKER_STYLE",
    "DEFAULT_STYLES",
    "TextualTrackChangesAdapter",
    "TextualUIHooks",
    "render_highlight",
]
