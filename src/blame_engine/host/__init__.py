"""Host-facing state machine, commands and editor façade."""

from .commands import (
    TRACK_CHANGES_COMMANDS,
    CommandContext,
    clear_highlight_commit,
    do_commit,
    get_commits,
    highlight_commit,
    revert_commit,
)
from .editor import Editor, EditorBus
from .fields import highlight_field, history_field, track_changes_fields
from .state import EditorState, StateField

__all__ = [
    "CommandContext",
    "TRACK_CHANGES_COMMANDS",
    "clear_highlight_commit",
    "do_commit",
    "get_commits",
    "highlight_commit",
    "revert_commit",
    "Editor",
    "EditorBus",
    "EditorState",
    "StateField",
    "highlight_field",
    "history_field",
    "track_changes_fields",
]
