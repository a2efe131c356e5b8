"""Error types and reason schema contracts.

Exceptions are raised at the edges (tokenizer, record access, config
validation). Inside a batch they are converted to RecordErrorReason payloads
so that one bad record never unwinds the batch call.
"""

from typing import Literal, NotRequired, TypedDict

RecordErrorKind = Literal[
    "source_field_missing_or_wrong_type",
    "malformed_row",
    "malformed_header_source",
    "unexpected_error",
]


class RecordErrorReason(TypedDict):
    """Schema for per-record failure payloads.

    Carried by RecordResult.error() and by diagnostic events.
    """

    reason: RecordErrorKind
    message: str
    field: NotRequired[str]  # Record key involved, if any
    exception_type: NotRequired[str]


class RecordSuccessReason(TypedDict):
    """Schema for per-record success payloads."""

    action: Literal["parsed", "skipped_empty"]
    fields_added: NotRequired[list[str]]
    fields_overwritten: NotRequired[list[str]]


# =============================================================================
# Exceptions
# =============================================================================


class CSVParseError(ValueError):
    """Raised when a line cannot be tokenized (wraps csv.Error)."""

    pass


class FieldTypeError(TypeError):
    """Raised when a record field holds a value of an unexpected type."""

    def __init__(self, key: str, expected_type: type, actual_type: type) -> None:
        super().__init__(f"Field '{key}' expected {expected_type.__name__}, got {actual_type.__name__}")
        self.key = key
        self.expected_type = expected_type
        self.actual_type = actual_type
