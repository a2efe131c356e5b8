"""Status codes, origins, and kinds shared across csvline modules."""

from enum import StrEnum


class HeaderOrigin(StrEnum):
    """Where the column names applied to a row came from.

    Resolution is evaluated in this priority order:
    - FROM_EVENT_FIELD: tokenized from the record's header source field
    - FROM_STATIC_CONFIG: the configured column_names list
    - AUTO_GENERATED: no usable header, every column is auto-named
    """

    FROM_EVENT_FIELD = "from_event_field"
    FROM_STATIC_CONFIG = "from_static_config"
    AUTO_GENERATED = "auto_generated"


class RecordStatus(StrEnum):
    """Outcome of processing a single record.

    PARSED and EMPTY leave the record in its intended state. The remaining
    statuses are per-record failures: the record passes through without
    injected fields and a diagnostic is emitted.
    """

    PARSED = "parsed"
    EMPTY = "empty"
    SOURCE_UNREADABLE = "source_unreadable"
    MALFORMED_ROW = "malformed_row"
    FAILED = "failed"


class Determinism(StrEnum):
    """Processor determinism classification.

    - DETERMINISTIC: re-running on the same input yields identical output
    - NON_DETERMINISTIC: output depends on state outside the record
    """

    DETERMINISTIC = "deterministic"
    NON_DETERMINISTIC = "non_deterministic"
