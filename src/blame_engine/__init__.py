"""UI-agnostic change attribution and selective revert engine."""

__all__ = [
    "adapters",
    "buffer",
    "config",
    "highlight",
    "history",
    "host",
    "runtime",
    "transform",
]

__version__ = "0.1.0"
