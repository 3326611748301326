"""Textual widget showing the document with the active commit highlighted."""

from __future__ import annotations

from typing import Any, Mapping, Optional

try:  # pragma: no cover - import guard
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use blame_engine.adapters.textual.widget"
    ) from exc

from rich.text import Text

from blame_engine.host import Editor

from .controller import TextualTrackChangesAdapter, TextualUIHooks


class HighlightView(Static):
    """Static widget kept in sync with an ``Editor`` through the adapter."""

    DEFAULT_CSS = """
    HighlightView {
        height: 1fr;
        padding: 0 1;
        overflow: auto;
    }
    """

    def __init__(
        self,
        editor: Editor,
        *,
        styles: Optional[Mapping[str, str]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__("", **kwargs)
        self.editor = editor
        self.palette = styles
        self.rendered = Text()
        self.status = ""
        self.adapter: TextualTrackChangesAdapter | None = None

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_document=self._show,
            update_status=self._set_status,
        )
        self.adapter = TextualTrackChangesAdapter(
            self.editor, hooks, styles=self.palette
        )

    def _show(self, rendered: Text) -> None:
        self.rendered = rendered
        self.update(rendered)

    def _set_status(self, status: str) -> None:
        self.status = status
        self.border_subtitle = status


__all__ = ["HighlightView"]
