# src/csvline/testing/__init__.py
"""Test infrastructure for csvline processors.

Factories for constructing production types with sensible defaults, and an
observer that captures diagnostic events for assertions.

Usage:
    from csvline.testing import RecordingObserver, make_records

    observer = RecordingObserver()
    processor = create_csv_processor({"source": "message"}, observer=observer)
    processor.process_batch(make_records("1,2", "3,4"))
    assert observer.of_type(BatchProcessed)[0].parsed == 2
"""

from __future__ import annotations

import threading
from typing import Any, TypeVar

from csvline.contracts.events import DiagnosticEvent
from csvline.contracts.record import Record

E = TypeVar("E", bound=DiagnosticEvent)


def make_record(data: dict[str, Any] | None = None, **fields: Any) -> Record:
    """Create a Record from a dict and/or keyword fields."""
    merged = dict(data) if data is not None else {}
    merged.update(fields)
    return Record(merged)


def make_records(*lines: str, source: str = "message") -> list[Record]:
    """Create one Record per line, each holding the line under source."""
    return [Record({source: line}) for line in lines]


class RecordingObserver:
    """Observer that keeps every event it receives, in order.

    Safe for concurrent emit().
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: list[DiagnosticEvent] = []

    def emit(self, event: DiagnosticEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> list[DiagnosticEvent]:
        with self._lock:
            return list(self._events)

    def of_type(self, event_type: type[E]) -> list[E]:
        return [e for e in self.events if isinstance(e, event_type)]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


__all__ = [
    "RecordingObserver",
    "make_record",
    "make_records",
]
