from contextlib import contextmanager
from typing import Iterator

import pytest

from blame_engine.host import Editor
from blame_engine.runtime import telemetry


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_config_and_preset_are_exclusive() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="quiet")


def test_span_yields_handle_and_reraises() -> None:
    telemetry.configure(preset="quiet")
    try:
        with telemetry.span("test::span", metadata={"steps": 2}) as handle:
            handle.add_metadata("doc", {"size": 3})
            assert handle.metadata == {"steps": "2", "doc": "{'size': 3}"}

        with pytest.raises(RuntimeError):
            with telemetry.span("test::failing", component=True):
                raise RuntimeError("boom")
    finally:
        telemetry.configure()


def test_loggers_are_cached_per_name() -> None:
    assert telemetry.get_logger("blame_engine.test") is telemetry.get_logger(
        "blame_engine.test"
    )


class RecordingLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, str]]] = []
        self.context: dict[str, str] = {}

    def __getattr__(self, name: str):
        if not name.endswith("_with"):
            raise AttributeError(name)
        level = name[: -len("_with")]
        return lambda message, pairs: self.records.append(
            (level, message, dict(pairs))
        )

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        yield

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        yield


def test_dispatch_span_reports_resulting_state(monkeypatch: pytest.MonkeyPatch) -> None:
    recorder = RecordingLogger()
    monkeypatch.setitem(telemetry._loggers, telemetry.DEFAULT_LOGGER_NAME, recorder)
    editor = Editor.from_text("abc", name="traced")

    editor.insert(0, "x")
    editor.commit("first")

    done = [data for _, message, data in recorder.records if message == "span::done"]
    assert [entry["commits"] for entry in done] == ["0", "1"]
    assert done[0]["version"] == "1"
    assert done[0]["editor"] == "traced"
    assert done[0]["component"] == "editor::dispatch"
    assert ("info", "event::history.commit") in [
        (level, message) for level, message, _ in recorder.records
    ]
    assert recorder.context == {}
