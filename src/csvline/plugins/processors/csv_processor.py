"""CSV processor plugin.

Parses one line of delimited text held in a record field and merges the
resulting columns into the same record as named fields.

Per record:
    1. Read the source field as text (missing/non-text: record untouched)
    2. Tokenize it with the configured delimiter and quote character
    3. If the row is non-empty, resolve column names and write the fields
    4. If configured, delete the header source field
    5. Report a RecordResult to the batch loop

Column names are resolved in strict priority order:
    1. column_names_source_key present in the record -> tokenize that field
       (on failure, fall back to auto-generated names, never raise)
    2. column_names configured -> use them
    3. otherwise -> auto-generate

Columns without a name are called "column<N>" where N is the 1-based
absolute position in the row. Header names beyond the row length are
dropped.

The header source field is deleted (when delete_header is true) whenever it
is present, even if it failed to parse and even if the source row was
malformed.
"""

import csv
import time
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Self, TypeVar

from pydantic import AliasChoices, Field, ValidationInfo, field_validator, model_validator

from csvline.contracts.enums import HeaderOrigin, RecordStatus
from csvline.contracts.errors import CSVParseError, FieldTypeError, RecordErrorReason
from csvline.contracts.events import (
    BatchProcessed,
    MalformedHeaderSource,
    MalformedRow,
    RecordFailed,
    SourceFieldUnreadable,
)
from csvline.contracts.record import RecordProtocol
from csvline.contracts.results import RecordResult
from csvline.plugins.base import BaseProcessor
from csvline.plugins.config_base import PluginConfig
from csvline.telemetry.protocols import DiagnosticObserver

R = TypeVar("R", bound=RecordProtocol)


# =============================================================================
# Line Tokenizer
# =============================================================================


def tokenize(line: str, delimiter: str = ",", quote: str = '"') -> list[str]:
    """Split one line of delimited text into raw field values.

    Uses csv.reader in strict mode, so quoting follows RFC 4180: a quoted
    field may contain delimiters, line breaks and doubled quotes, and must be
    followed by a delimiter or the end of the line.

    Args:
        line: The text to split. Trailing line terminators are ignored.
        delimiter: Single-character field separator
        quote: Single-character quote, distinct from delimiter

    Returns:
        Field values in order. An empty line gives [] (no fields), which is
        distinct from [""] (one empty field, e.g. from a line holding only
        an empty quoted field).

    Raises:
        CSVParseError: On an unterminated quoted field, text between a
            closing quote and the next delimiter, or a line break inside an
            unquoted field.

    Example:
        >>> tokenize('"a,b",c')
        ['a,b', 'c']
        >>> tokenize("a,,b")
        ['a', '', 'b']
    """
    reader = csv.reader([line], delimiter=delimiter, quotechar=quote, strict=True)
    try:
        return next(reader, [])
    except csv.Error as e:
        raise CSVParseError(f"CSV parse error: {e}") from e


@dataclass(frozen=True, slots=True)
class CSVDialect:
    """Delimiter and quote character, built once per processor.

    Immutable: one instance is shared by every record of every batch, and
    by concurrent workers.
    """

    delimiter: str = ","
    quote_character: str = '"'

    def tokenize(self, line: str) -> list[str]:
        return tokenize(line, self.delimiter, self.quote_character)


# =============================================================================
# Configuration
# =============================================================================


class CSVProcessorConfig(PluginConfig):
    """Configuration for the CSV processor.

    Attributes:
        source: Record field holding the line to parse (also accepted as
            source_key)
        delimiter: Single-character field separator (default ",")
        quote_character: Single-character quote (default '"')
        column_names: Static column names (default: none)
        column_names_source_key: Record field holding a per-record header
            line; takes precedence over column_names when present
        delete_header: Remove the header source field after processing
    """

    source: str = Field(
        ...,
        validation_alias=AliasChoices("source", "source_key"),
        description="Record field holding the line to parse",
    )
    delimiter: str = Field(default=",", description="Single-character field separator")
    quote_character: str = Field(default='"', description="Single-character quote")
    column_names: list[str] | None = Field(default=None, description="Static column names")
    column_names_source_key: str | None = Field(default=None, description="Record field holding a header line")
    delete_header: bool = Field(default=False, description="Delete the header source field after processing")

    @field_validator("source")
    @classmethod
    def validate_source_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("source cannot be empty")
        return v

    @field_validator("column_names_source_key")
    @classmethod
    def validate_header_key_not_empty(cls, v: str | None) -> str | None:
        if v is not None and not v:
            raise ValueError("column_names_source_key cannot be empty; omit it instead")
        return v

    @field_validator("delimiter", "quote_character")
    @classmethod
    def validate_single_character(cls, v: str, info: ValidationInfo) -> str:
        if len(v) != 1:
            raise ValueError(f"{info.field_name} must be exactly one character, got {v!r}")
        if v in "\r\n":
            raise ValueError(f"{info.field_name} cannot be a line terminator")
        return v

    @model_validator(mode="after")
    def _validate_distinct_characters(self) -> Self:
        if self.delimiter == self.quote_character:
            raise ValueError(f"delimiter and quote_character must differ, both are {self.delimiter!r}")
        return self

    def dialect(self) -> CSVDialect:
        return CSVDialect(delimiter=self.delimiter, quote_character=self.quote_character)


# =============================================================================
# Header Resolver
# =============================================================================


@dataclass(frozen=True, slots=True)
class ResolvedHeader:
    """Column names for one record and where they came from.

    failure is set only when the header source field existed but could not
    be used; header is then empty and origin AUTO_GENERATED.
    """

    header: tuple[str, ...]
    origin: HeaderOrigin
    failure: RecordErrorReason | None = None


def _header_source_failure(key: str, message: str) -> ResolvedHeader:
    failure: RecordErrorReason = {"reason": "malformed_header_source", "message": message, "field": key}
    return ResolvedHeader(header=(), origin=HeaderOrigin.AUTO_GENERATED, failure=failure)


def _header_from_record(record: RecordProtocol, key: str, dialect: CSVDialect) -> ResolvedHeader:
    try:
        text = record.get(key, str)
    except FieldTypeError as e:
        return _header_source_failure(key, str(e))
    if text is None:
        return _header_source_failure(key, f"Field '{key}' has no value")

    try:
        header = dialect.tokenize(text)
    except CSVParseError as e:
        return _header_source_failure(key, str(e))
    # An empty header line is valid: every column is auto-named
    return ResolvedHeader(header=tuple(header), origin=HeaderOrigin.FROM_EVENT_FIELD)


def resolve_header(record: RecordProtocol, config: CSVProcessorConfig, dialect: CSVDialect) -> ResolvedHeader:
    """Choose the column names for one record.

    Never raises: a header source that cannot be parsed yields an empty
    AUTO_GENERATED header with failure details attached.
    """
    key = config.column_names_source_key
    if key is not None and record.contains(key):
        return _header_from_record(record, key, dialect)
    if config.column_names is not None:
        return ResolvedHeader(header=tuple(config.column_names), origin=HeaderOrigin.FROM_STATIC_CONFIG)
    return ResolvedHeader(header=(), origin=HeaderOrigin.AUTO_GENERATED)


# =============================================================================
# Field Mapper
# =============================================================================


def generate_column_name(index: int) -> str:
    """Name for the column at 0-based index: column1, column2, ..."""
    return f"column{index + 1}"


def map_fields(header: Sequence[str], row: Sequence[str]) -> list[tuple[str, str]]:
    """Pair column names with row values.

    Values beyond the header get generate_column_name() of their absolute
    position. Header names beyond the row are dropped.

    Example:
        >>> map_fields(["x", "y"], ["1", "2", "3"])
        [('x', '1'), ('y', '2'), ('column3', '3')]
    """
    named = min(len(header), len(row))
    pairs = [(header[i], row[i]) for i in range(named)]
    pairs.extend((generate_column_name(i), row[i]) for i in range(named, len(row)))
    return pairs


# =============================================================================
# Orchestrator
# =============================================================================


class CSVProcessor(BaseProcessor):
    """Parse a delimited line from each record into named fields.

    Config options:
        source: Required. Field holding the line to parse
        delimiter: Field separator (default: ",")
        quote_character: Quote character (default: '"')
        column_names: Static column names (default: none)
        column_names_source_key: Field holding a per-record header line
        delete_header: Remove the header source field (default: False)

    Example:
        Config: {"source": "message", "column_names": ["a", "b"]}
        Input:  {"message": "1,2,3"}
        Output: {"message": "1,2,3", "a": "1", "b": "2", "column3": "3"}

    Failures never leave process_batch(): each record gets a RecordResult,
    failures are reported to the observer, and the batch is returned with
    the same size and order.
    """

    name = "csv"
    plugin_version = "1.0.0"

    def __init__(self, config: dict[str, Any], *, observer: DiagnosticObserver | None = None) -> None:
        """Initialize the CSV processor.

        Raises:
            PluginConfigError: If the configuration is invalid
        """
        super().__init__(config, observer=observer)
        self._config = CSVProcessorConfig.from_dict(config)
        self._dialect = self._config.dialect()

    @property
    def settings(self) -> CSVProcessorConfig:
        return self._config

    @property
    def dialect(self) -> CSVDialect:
        return self._dialect

    def process_batch(self, records: Sequence[R]) -> Sequence[R]:
        """Parse every record in the batch, in place.

        Returns:
            The same collection that was passed in.
        """
        started = time.perf_counter()
        parsed = empty = failed = header_fallbacks = 0

        for index, record in enumerate(records):
            try:
                result = self.process_record(record)
            except Exception as e:
                # Record implementation misbehaved; isolate it from the batch
                result = RecordResult.error(
                    RecordStatus.FAILED,
                    {"reason": "unexpected_error", "message": str(e), "exception_type": type(e).__name__},
                )

            if result.status == RecordStatus.PARSED:
                parsed += 1
            elif result.status == RecordStatus.EMPTY:
                empty += 1
            else:
                failed += 1
            if result.header_failure is not None:
                header_fallbacks += 1
            self._report(index, result)

        self.emit(
            BatchProcessed(
                timestamp=datetime.now(UTC),
                plugin_name=self.name,
                records_in=len(records),
                records_out=len(records),
                parsed=parsed,
                empty=empty,
                failed=failed,
                header_fallbacks=header_fallbacks,
                duration_ms=(time.perf_counter() - started) * 1000,
            )
        )
        return records

    def process_record(self, record: RecordProtocol) -> RecordResult:
        """Parse one record in place.

        Returns a RecordResult describing what happened. Data problems
        (missing source, malformed row, malformed header source) are
        returned as results, not raised.
        """
        source_key = self._config.source
        try:
            text = record.get(source_key, str)
        except FieldTypeError as e:
            return self._source_unreadable(source_key, str(e))
        if text is None:
            return self._source_unreadable(source_key, f"Field '{source_key}' is missing")

        header_key = self._config.column_names_source_key
        has_header_source = header_key is not None and record.contains(header_key)

        try:
            row = self._dialect.tokenize(text)
        except CSVParseError as e:
            return RecordResult.error(
                RecordStatus.MALFORMED_ROW,
                {"reason": "malformed_row", "message": str(e), "field": source_key},
                header_deleted=self._consume_header_source(record, has_header_source),
            )

        if not row:
            return RecordResult.empty(header_deleted=self._consume_header_source(record, has_header_source))

        resolved = resolve_header(record, self._config, self._dialect)
        pairs = map_fields(resolved.header, row)

        overwritten = [name for name in dict.fromkeys(name for name, _ in pairs) if record.contains(name)]
        for name, value in pairs:
            record.put(name, value)

        return RecordResult.parsed(
            list(dict.fromkeys(name for name, _ in pairs)),
            header_origin=resolved.origin,
            fields_overwritten=overwritten,
            header_deleted=self._consume_header_source(record, has_header_source),
            header_failure=resolved.failure,
        )

    def _consume_header_source(self, record: RecordProtocol, has_header_source: bool) -> bool:
        if has_header_source and self._config.delete_header:
            # has_header_source implies the key is configured
            record.delete(self._config.column_names_source_key)  # type: ignore[arg-type]
            return True
        return False

    @staticmethod
    def _source_unreadable(source_key: str, message: str) -> RecordResult:
        return RecordResult.error(
            RecordStatus.SOURCE_UNREADABLE,
            {"reason": "source_field_missing_or_wrong_type", "message": message, "field": source_key},
        )

    def _report(self, index: int, result: RecordResult) -> None:
        """Emit diagnostics for one record's result."""
        now = datetime.now(UTC)
        if result.header_failure is not None:
            failure = result.header_failure
            self.emit(
                MalformedHeaderSource(
                    timestamp=now,
                    plugin_name=self.name,
                    record_index=index,
                    field=failure.get("field", ""),
                    message=failure["message"],
                )
            )
        if result.reason is None:
            return

        reason = result.reason
        if result.status == RecordStatus.SOURCE_UNREADABLE:
            self.emit(
                SourceFieldUnreadable(
                    timestamp=now,
                    plugin_name=self.name,
                    record_index=index,
                    field=reason.get("field", self._config.source),
                    message=reason["message"],
                )
            )
        elif result.status == RecordStatus.MALFORMED_ROW:
            self.emit(
                MalformedRow(
                    timestamp=now,
                    plugin_name=self.name,
                    record_index=index,
                    field=reason.get("field", self._config.source),
                    message=reason["message"],
                )
            )
        else:
            self.emit(
                RecordFailed(
                    timestamp=now,
                    plugin_name=self.name,
                    record_index=index,
                    exception_type=reason.get("exception_type", "Exception"),
                    message=reason["message"],
                )
            )


def create_csv_processor(config: dict[str, Any], *, observer: DiagnosticObserver | None = None) -> CSVProcessor:
    """Build a CSVProcessor from a raw configuration dict.

    Raises:
        PluginConfigError: If the configuration is invalid
    """
    return CSVProcessor(config, observer=observer)
