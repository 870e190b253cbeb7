from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StructuredLogger(Protocol):
    def debug(self, message: str, *fields: dict[str, Any]) -> None: ...

    def info(self, message: str, *fields: dict[str, Any]) -> None: ...

    def warn(self, message: str, *fields: dict[str, Any]) -> None: ...

    def error(self, message: str, *fields: dict[str, Any]) -> None: ...

    def with_field(self, key: str, value: Any) -> StructuredLogger: ...

    def with_fields(self, fields: dict[str, Any]) -> StructuredLogger: ...

    def is_healthy(self) -> bool: ...


class NoOpLogger:
    def debug(self, _message: str, *fields: dict[str, Any]) -> None:
        return None

    def info(self, _message: str, *fields: dict[str, Any]) -> None:
        return None

    def warn(self, _message: str, *fields: dict[str, Any]) -> None:
        return None

    def error(self, _message: str, *fields: dict[str, Any]) -> None:
        return None

    def with_field(self, _key: str, _value: Any) -> StructuredLogger:
        return self

    def with_fields(self, _fields: dict[str, Any]) -> StructuredLogger:
        return self

    def is_healthy(self) -> bool:
        return True


@dataclass(slots=True)
class LogEntry:
    level: str
    message: str
    fields: dict[str, Any]


@dataclass(slots=True)
class MemoryLogger:
    """Logger test double that keeps every entry in ``entries``.

    Loggers derived with ``with_field``/``with_fields`` share the parent's
    entry list and merge their bound fields into each record.
    """

    entries: list[LogEntry] = field(default_factory=list)
    bound: dict[str, Any] = field(default_factory=dict)

    def _record(self, level: str, message: str, fields: tuple[dict[str, Any], ...]) -> None:
        merged = dict(self.bound)
        for extra in fields:
            merged.update(extra or {})
        self.entries.append(LogEntry(level=level, message=str(message), fields=merged))

    def debug(self, message: str, *fields: dict[str, Any]) -> None:
        self._record("debug", message, fields)

    def info(self, message: str, *fields: dict[str, Any]) -> None:
        self._record("info", message, fields)

    def warn(self, message: str, *fields: dict[str, Any]) -> None:
        self._record("warn", message, fields)

    def error(self, message: str, *fields: dict[str, Any]) -> None:
        self._record("error", message, fields)

    def with_field(self, key: str, value: Any) -> StructuredLogger:
        return self.with_fields({key: value})

    def with_fields(self, fields: dict[str, Any]) -> StructuredLogger:
        return MemoryLogger(entries=self.entries, bound={**self.bound, **(fields or {})})

    def is_healthy(self) -> bool:
        return True

    def messages(self) -> list[str]:
        return [e.message for e in self.entries]


_global_logger: StructuredLogger = NoOpLogger()


def get_logger() -> StructuredLogger:
    return _global_logger


def set_logger(logger: StructuredLogger | None) -> None:
    global _global_logger
    _global_logger = logger if logger is not None else NoOpLogger()


__all__ = [
    "LogEntry",
    "MemoryLogger",
    "NoOpLogger",
    "StructuredLogger",
    "get_logger",
    "set_logger",
]
