"""Per-record outcomes.

These types answer: "What did processing one record do?"

IMPORTANT:
- A RecordResult is produced for every record, including failures
- Failures are values, not exceptions, so the batch loop can keep going
- header_deleted is independent of status (the header source field is
  consumed even when the source row is malformed)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from csvline.contracts.enums import HeaderOrigin, RecordStatus
from csvline.contracts.errors import RecordErrorReason, RecordSuccessReason


@dataclass(frozen=True, slots=True)
class RecordResult:
    """Result of processing one record.

    Use the factory methods to create instances.

    Fields:
        status: What happened to the record
        header_origin: Which header tier was used (None when no header was
            resolved, e.g. empty or malformed source)
        fields_added: Names written into the record, in write order
        header_deleted: True if the header source field was removed
        reason: Failure details for non-success statuses
        success_reason: Metadata for PARSED/EMPTY statuses
        header_failure: Set when the header source failed to parse and
            column names fell back to auto-generation
    """

    status: RecordStatus
    header_origin: HeaderOrigin | None = None
    fields_added: tuple[str, ...] = ()
    header_deleted: bool = False
    reason: RecordErrorReason | None = None
    success_reason: RecordSuccessReason | None = None
    header_failure: RecordErrorReason | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.is_success and self.success_reason is None:
            raise ValueError(f"RecordResult with status={self.status!s} MUST provide success_reason.")
        if not self.is_success and self.reason is None:
            raise ValueError(f"RecordResult with status={self.status!s} MUST provide reason.")

    @property
    def is_success(self) -> bool:
        """True for PARSED and EMPTY outcomes."""
        return self.status in (RecordStatus.PARSED, RecordStatus.EMPTY)

    @classmethod
    def parsed(
        cls,
        fields_added: list[str],
        *,
        header_origin: HeaderOrigin,
        fields_overwritten: list[str] | None = None,
        header_deleted: bool = False,
        header_failure: RecordErrorReason | None = None,
    ) -> RecordResult:
        """Create result for a record whose row was injected."""
        success_reason: RecordSuccessReason = {"action": "parsed", "fields_added": list(fields_added)}
        if fields_overwritten:
            success_reason["fields_overwritten"] = list(fields_overwritten)
        return cls(
            status=RecordStatus.PARSED,
            header_origin=header_origin,
            fields_added=tuple(fields_added),
            header_deleted=header_deleted,
            success_reason=success_reason,
            header_failure=header_failure,
        )

    @classmethod
    def empty(cls, *, header_deleted: bool = False) -> RecordResult:
        """Create result for a blank source line (nothing injected)."""
        return cls(
            status=RecordStatus.EMPTY,
            header_deleted=header_deleted,
            success_reason={"action": "skipped_empty"},
        )

    @classmethod
    def error(
        cls,
        status: RecordStatus,
        reason: RecordErrorReason,
        *,
        header_deleted: bool = False,
    ) -> RecordResult:
        """Create result for a per-record failure.

        Args:
            status: One of the failure statuses
            reason: Structured failure details
            header_deleted: Whether the header source field was still removed
        """
        if status in (RecordStatus.PARSED, RecordStatus.EMPTY):
            raise ValueError(f"RecordResult.error() requires a failure status, got {status!s}")
        return cls(status=status, header_deleted=header_deleted, reason=reason)
