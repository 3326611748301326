from datetime import datetime, timezone

from blame_engine.buffer import TextDocument
from blame_engine.history import Commit, HistoryState, Span
from blame_engine.transform import ReplaceStep, StepMap, Transaction

WHEN = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_transaction(doc: TextDocument) -> Transaction:
    return Transaction(doc, time=WHEN)


def test_transform_without_steps_returns_same_state() -> None:
    doc = TextDocument.from_text("abc")
    history = HistoryState.init(doc)

    assert history.apply_transform(make_transaction(doc)) is history


def test_commit_without_pending_steps_returns_same_state() -> None:
    history = HistoryState.init(TextDocument.from_text("abc"))

    assert history.apply_commit("nothing", WHEN) is history
    assert history.commits == ()


def test_pending_buffer_holds_inverted_steps_and_maps() -> None:
    doc = TextDocument.from_text("abc")
    history = HistoryState.init(doc)
    tr = make_transaction(doc)
    tr.insert(1, "X")

    updated = history.apply_transform(tr)

    assert updated.pending_steps == (ReplaceStep(1, 2, ""),)
    assert updated.pending_maps == (StepMap(((1, 0, 1),)),)
    assert updated.has_pending is True
    assert history.pending_steps == ()
    assert history.attribution == (Span(0, 3),)


def test_pending_steps_undo_the_transform_in_reverse() -> None:
    doc = TextDocument.from_text("hello world")
    tr = make_transaction(doc)
    tr.replace(0, 5, "HELLO").insert(11, "!").delete(5, 6)
    history = HistoryState.init(doc).apply_transform(tr)

    restored = tr.doc
    for step in reversed(history.pending_steps):
        result = step.apply(restored)
        assert result.doc is not None
        restored = result.doc

    assert tr.doc.text == "HELLOworld!"
    assert restored.text == "hello world"


def test_commit_moves_pending_buffer_into_history() -> None:
    doc = TextDocument.from_text("abc")
    tr = make_transaction(doc)
    tr.insert(3, "d")
    history = HistoryState.init(doc).apply_transform(tr)

    committed = history.apply_commit("append", WHEN)

    assert committed.pending_steps == ()
    assert committed.pending_maps == ()
    commit = committed.commits[0]
    assert isinstance(commit, Commit)
    assert commit.message == "append"
    assert commit.time == WHEN
    assert commit.steps == history.pending_steps
    assert len(commit.mapping) == 1


def test_prospective_id_matches_commit_index() -> None:
    doc = TextDocument.from_text("abc")
    history = HistoryState.init(doc)
    for message in ("first", "second"):
        tr = make_transaction(doc)
        tr.insert(doc.size, message[0])
        pending_id = history.pending_commit_id
        history = history.apply_transform(tr)
        doc = tr.doc

        assert history.attribution[-1] == Span(doc.size - 1, doc.size, pending_id)

        history = history.apply_commit(message, WHEN)
        assert history.commits[pending_id].message == message

    assert doc.text == "abcfs"
    assert history.attribution_at(3) == Span(3, 4, 0)
    assert history.attribution_at(4) == Span(4, 5, 1)


def test_index_of_uses_identity() -> None:
    doc = TextDocument.from_text("abc")
    tr = make_transaction(doc)
    tr.insert(0, "z")
    history = HistoryState.init(doc).apply_transform(tr).apply_commit("z", WHEN)
    commit = history.commits[0]

    assert history.index_of(commit) == 0
    assert history.index_of(Commit.from_json(commit.to_json())) is None
