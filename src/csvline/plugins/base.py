# src/csvline/plugins/base.py
"""Base class for processor implementations.

Plugins MUST subclass BaseProcessor: plugin discovery uses issubclass()
checks against it, and Protocol classes with non-method members cannot
support issubclass().

Lifecycle Contract (all hooks called by the host):
    initialize() -> process_batch(records)* -> prepare_for_shutdown()
    -> is_ready_for_shutdown() polled until True -> shutdown()

- initialize: Per-run setup. If it raises, the host must not call
  process_batch().
- process_batch: Called once per processing cycle with an ordered batch of
  records. Returns the same collection, records mutated in place.
- prepare_for_shutdown: Stop accepting new work; flush anything buffered.
- is_ready_for_shutdown: True once no work is in flight.
- shutdown: Release resources. Must be idempotent.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, TypeVar

from csvline.contracts.enums import Determinism
from csvline.contracts.events import DiagnosticEvent
from csvline.contracts.record import RecordProtocol
from csvline.core.logging import get_logger
from csvline.telemetry.observers import LoggingObserver
from csvline.telemetry.protocols import DiagnosticObserver

logger = get_logger(__name__)

R = TypeVar("R", bound=RecordProtocol)


class BaseProcessor(ABC):
    """Base class for all record processors.

    Example:
        class UpperCase(BaseProcessor):
            name = "upper"

            def process_batch(self, records):
                for record in records:
                    record.put("message", record.get("message", str).upper())
                return records
    """

    name: str
    plugin_version: str = "0.0.0"
    determinism: Determinism = Determinism.DETERMINISTIC

    def __init__(self, config: dict[str, Any], *, observer: DiagnosticObserver | None = None) -> None:
        """Initialize with configuration.

        Args:
            config: Plugin configuration
            observer: Receiver for diagnostic events (default: LoggingObserver)
        """
        self.config = config
        self.observer: DiagnosticObserver = observer if observer is not None else LoggingObserver()

    def emit(self, event: DiagnosticEvent) -> None:
        """Deliver a diagnostic event to the observer.

        Observer failures are logged and swallowed: diagnostics must never
        change what happens to the records.
        """
        try:
            self.observer.emit(event)
        except Exception:
            logger.exception("Diagnostic observer failed", plugin=self.name, event_type=type(event).__name__)

    @abstractmethod
    def process_batch(self, records: Sequence[R]) -> Sequence[R]:
        """Process an ordered batch of records.

        Implementations mutate records in place and return the same
        collection: size and order are always preserved.
        """
        ...

    # === Lifecycle Hooks ===
    # Optional hooks for subclasses to override.

    def initialize(self) -> None:  # noqa: B027 - optional hook
        """Called once before the first batch."""
        pass

    def prepare_for_shutdown(self) -> None:  # noqa: B027 - optional hook
        """Called when the host starts draining the pipeline."""
        pass

    def is_ready_for_shutdown(self) -> bool:
        """Return True when no work is in flight.

        Processors that never buffer records are always ready.
        """
        return True

    def shutdown(self) -> None:  # noqa: B027 - optional hook
        """Release resources. Called once, after the last batch."""
        pass
