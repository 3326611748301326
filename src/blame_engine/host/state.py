"""Editor state built from pluggable ``(init, apply)`` fields."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

from blame_engine.buffer import TextDocument
from blame_engine.transform import Transaction

T = TypeVar("T")


@dataclass(frozen=True)
class StateField(Generic[T]):
    """Named slot of editor state advanced once per transaction.

    ``apply`` receives the transaction, the field's previous value, the old
    state and the new state under construction (fields declared earlier are
    already populated).
    """

    name: str
    init: Callable[[TextDocument], T]
    apply: Callable[[Transaction, T, "EditorState", "EditorState"], T]


class EditorState:
    """Immutable pairing of a document with its field values."""

    __slots__ = ("doc", "fields", "_values")

    def __init__(
        self,
        doc: TextDocument,
        fields: Tuple[StateField[Any], ...],
        values: Dict[str, Any],
    ) -> None:
        self.doc = doc
        self.fields = fields
        self._values = values

    @classmethod
    def create(
        cls, doc: TextDocument, fields: Sequence[StateField[Any]] = ()
    ) -> "EditorState":
        names = [field.name for field in fields]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate state field names in {names}")
        values = {field.name: field.init(doc) for field in fields}
        return cls(doc, tuple(fields), values)

    @property
    def values(self) -> Mapping[str, Any]:
        return dict(self._values)

    def field(self, name: str) -> Any:
        try:
            return self._values[name]
        except KeyError as exc:
            raise KeyError(f"State field '{name}' is not registered") from exc

    def transaction(self, *, time: Optional[datetime] = None) -> Transaction:
        return Transaction(self.doc, time=time)

    def apply(self, tr: Transaction) -> "EditorState":
        if tr.before is not self.doc:
            raise ValueError("Transaction was built against a different document")
        values: Dict[str, Any] = {}
        new_state = EditorState(tr.doc, self.fields, values)
        for field in self.fields:
            previous = self._values[field.name]
            values[field.name] = field.apply(tr, previous, self, new_state)
        return new_state


__all__ = ["EditorState", "StateField"]
