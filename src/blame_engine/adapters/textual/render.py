"""Render highlight decorations onto rich ``Text``."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from rich.text import Text

from blame_engine.buffer import TextDocument
from blame_engine.highlight import DEFAULT_STYLE, Decoration

DEFAULT_MARKER_STYLE = "black on yellow"
DEFAULT_STYLES: Mapping[str, str] = {DEFAULT_STYLE: DEFAULT_MARKER_STYLE}


def render_highlight(
    document: TextDocument,
    decorations: Iterable[Decoration],
    *,
    styles: Optional[Mapping[str, str]] = None,
) -> Text:
    """Return ``document`` as rich text with every decoration styled.

    Decoration style names are looked up in ``styles``; unknown names fall
    back to ``DEFAULT_MARKER_STYLE``.
    """

    palette = DEFAULT_STYLES if styles is None else styles
    text = Text(document.text, no_wrap=False)
    for decoration in decorations:
        style = palette.get(decoration.style, DEFAULT_MARKER_STYLE)
        text.stylize(style, decoration.start, decoration.end)
    return text


__all__ = ["DEFAULT_MARKER_STYLE", "DEFAULT_STYLES", "render_highlight"]
