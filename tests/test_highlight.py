from blame_engine.buffer import TextDocument
from blame_engine.highlight import (
    Decoration,
    DecorationSet,
    HighlightRequest,
    HighlightState,
    apply_highlight,
)
from blame_engine.history import HistoryState
from blame_engine.host import Editor
from blame_engine.transform import Mapping, StepMap, Transform


def make_editor() -> Editor:
    editor = Editor.from_text("Hello")
    editor.insert(5, " world")
    editor.commit("add world")
    return editor


def test_highlight_marks_commit_ranges() -> None:
    editor = make_editor()
    commit = editor.list_commits()[0]

    assert editor.highlight_commit(commit) is True

    assert editor.highlight.active is commit
    assert list(editor.highlight.decorations) == [
        Decoration(5, 11, "commit-blame-marker")
    ]


def test_highlight_follows_later_edits() -> None:
    editor = make_editor()
    commit = editor.list_commits()[0]
    editor.highlight_commit(commit)

    editor.insert(0, ">> ")

    assert editor.highlight.active is commit
    assert list(editor.highlight.decorations) == [Decoration(8, 14)]


def test_highlighting_active_commit_again_is_a_no_op() -> None:
    editor = make_editor()
    commit = editor.list_commits()[0]
    editor.highlight_commit(commit)
    before = editor.highlight

    editor.highlight_commit(commit)

    assert editor.highlight is before


def test_clear_only_acts_on_active_commit() -> None:
    editor = make_editor()
    editor.insert(0, "> ")
    editor.commit("prompt")
    first, second = editor.list_commits()
    editor.highlight_commit(first)

    editor.clear_highlight(second)
    assert editor.highlight.active is first

    editor.clear_highlight(first)
    assert editor.highlight.is_idle
    assert not editor.highlight.decorations


def test_switching_highlight_recomputes_decorations() -> None:
    editor = make_editor()
    editor.insert(0, "> ")
    editor.commit("prompt")
    first, second = editor.list_commits()
    editor.highlight_commit(first)

    editor.highlight_commit(second)

    assert editor.highlight.active is second
    assert list(editor.highlight.decorations) == [Decoration(0, 2)]


def test_highlight_of_fully_deleted_commit_is_empty_but_active() -> None:
    editor = make_editor()
    editor.delete(5, 11)
    editor.commit("remove world")
    first = editor.list_commits()[0]

    editor.highlight_commit(first)

    assert editor.highlight.active is first
    assert len(editor.highlight.decorations) == 0


def test_highlight_uses_configured_style() -> None:
    history = make_editor().history
    commit = history.commits[0]
    transform = Transform(TextDocument.from_text("Hello world"))

    state = apply_highlight(
        HighlightState(),
        HighlightRequest(add=commit),
        transform,
        history,
        style="blame",
    )

    assert list(state.decorations) == [Decoration(5, 11, "blame")]


def test_idle_state_ignores_document_changes() -> None:
    state = HighlightState()
    transform = Transform(TextDocument.from_text("abc"))
    transform.insert(0, "z")

    assert apply_highlight(state, None, transform, HistoryState()) is state


def test_decoration_set_drops_collapsed_decorations() -> None:
    decorations = DecorationSet([Decoration(6, 8), Decoration(1, 3)])
    mapping = Mapping([StepMap(((0, 4, 0),))])

    mapped = decorations.map(mapping)

    assert list(decorations) == [Decoration(1, 3), Decoration(6, 8)]
    assert list(mapped) == [Decoration(2, 4)]
    assert decorations.find(4, 6) == (Decoration(6, 8),)
    assert decorations.find() == tuple(decorations)


def test_highlight_change_is_published_on_the_bus() -> None:
    editor = make_editor()
    seen: list[object] = []
    editor.bus.subscribe("highlight.change", seen.append)

    editor.highlight_commit(editor.list_commits()[0])
    editor.highlight_commit(editor.list_commits()[0])

    assert len(seen) == 1
    assert isinstance(seen[0], HighlightState)
