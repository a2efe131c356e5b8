"""Shared contracts for cross-module data types.

This package is a LEAF MODULE: it imports nothing from csvline.core,
csvline.plugins or csvline.telemetry.

Import patterns:
    from csvline.contracts import Record, RecordResult, HeaderOrigin
"""

from csvline.contracts.enums import Determinism, HeaderOrigin, RecordStatus
from csvline.contracts.errors import (
    CSVParseError,
    FieldTypeError,
    RecordErrorReason,
    RecordSuccessReason,
)
from csvline.contracts.events import (
    BatchProcessed,
    DiagnosticEvent,
    MalformedHeaderSource,
    MalformedRow,
    RecordFailed,
    SourceFieldUnreadable,
)
from csvline.contracts.record import Record, RecordProtocol
from csvline.contracts.results import RecordResult

__all__ = [
    "BatchProcessed",
    "CSVParseError",
    "Determinism",
    "DiagnosticEvent",
    "FieldTypeError",
    "HeaderOrigin",
    "MalformedHeaderSource",
    "MalformedRow",
    "Record",
    "RecordErrorReason",
    "RecordFailed",
    "RecordProtocol",
    "RecordResult",
    "RecordStatus",
    "RecordSuccessReason",
    "SourceFieldUnreadable",
]
