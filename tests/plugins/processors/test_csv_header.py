"""Tests for header resolution and field mapping."""

from typing import Any

import pytest

from csvline.contracts.enums import HeaderOrigin
from csvline.contracts.record import Record
from csvline.plugins.processors.csv_processor import (
    CSVProcessorConfig,
    generate_column_name,
    map_fields,
    resolve_header,
)


def _resolve(record: dict[str, Any], **config: Any):
    config.setdefault("source", "message")
    cfg = CSVProcessorConfig.from_dict(config)
    return resolve_header(Record(record), cfg, cfg.dialect())


class TestResolveHeaderPriority:
    """Event field beats static config beats auto-generation."""

    def test_event_field_header(self) -> None:
        resolved = _resolve({"hdr": "x,y"}, column_names_source_key="hdr")

        assert resolved.header == ("x", "y")
        assert resolved.origin == HeaderOrigin.FROM_EVENT_FIELD
        assert resolved.failure is None

    def test_event_field_wins_over_static_config(self) -> None:
        resolved = _resolve({"hdr": "x,y"}, column_names_source_key="hdr", column_names=["a", "b"])

        assert resolved.header == ("x", "y")
        assert resolved.origin == HeaderOrigin.FROM_EVENT_FIELD

    def test_static_config_when_header_field_absent(self) -> None:
        resolved = _resolve({}, column_names_source_key="hdr", column_names=["a", "b"])

        assert resolved.header == ("a", "b")
        assert resolved.origin == HeaderOrigin.FROM_STATIC_CONFIG

    def test_static_config_without_header_key(self) -> None:
        resolved = _resolve({"hdr": "x,y"}, column_names=["a"])

        assert resolved.header == ("a",)
        assert resolved.origin == HeaderOrigin.FROM_STATIC_CONFIG

    def test_auto_generated_when_nothing_configured(self) -> None:
        resolved = _resolve({"hdr": "x,y"})

        assert resolved.header == ()
        assert resolved.origin == HeaderOrigin.AUTO_GENERATED
        assert resolved.failure is None

    def test_empty_static_config_is_still_static(self) -> None:
        resolved = _resolve({}, column_names=[])

        assert resolved.header == ()
        assert resolved.origin == HeaderOrigin.FROM_STATIC_CONFIG

    def test_header_field_uses_configured_dialect(self) -> None:
        resolved = _resolve({"hdr": "'a;b';c"}, column_names_source_key="hdr", delimiter=";", quote_character="'")

        assert resolved.header == ("a;b", "c")


class TestResolveHeaderFallback:
    """A broken header source never raises; it falls back to auto-naming."""

    def test_malformed_header_falls_back(self) -> None:
        resolved = _resolve({"hdr": '"x,y'}, column_names_source_key="hdr", column_names=["a", "b"])

        assert resolved.header == ()
        assert resolved.origin == HeaderOrigin.AUTO_GENERATED
        assert resolved.failure is not None
        assert resolved.failure["reason"] == "malformed_header_source"
        assert resolved.failure["field"] == "hdr"

    def test_non_string_header_falls_back(self) -> None:
        resolved = _resolve({"hdr": ["x", "y"]}, column_names_source_key="hdr")

        assert resolved.header == ()
        assert resolved.origin == HeaderOrigin.AUTO_GENERATED
        assert resolved.failure is not None
        assert "expected str, got list" in resolved.failure["message"]

    def test_none_header_falls_back(self) -> None:
        resolved = _resolve({"hdr": None}, column_names_source_key="hdr", column_names=["a"])

        assert resolved.origin == HeaderOrigin.AUTO_GENERATED
        assert resolved.failure is not None

    def test_empty_header_line_is_event_sourced(self) -> None:
        resolved = _resolve({"hdr": ""}, column_names_source_key="hdr", column_names=["a"])

        assert resolved.header == ()
        assert resolved.origin == HeaderOrigin.FROM_EVENT_FIELD
        assert resolved.failure is None


class TestGenerateColumnName:
    @pytest.mark.parametrize(("index", "expected"), [(0, "column1"), (1, "column2"), (9, "column10")])
    def test_one_based(self, index: int, expected: str) -> None:
        assert generate_column_name(index) == expected


class TestMapFields:
    """Names pair with values; auto-names use absolute 1-based positions."""

    def test_empty_header_auto_names_everything(self) -> None:
        assert map_fields([], ["1", "2", "3"]) == [("column1", "1"), ("column2", "2"), ("column3", "3")]

    def test_short_header_continues_absolute_numbering(self) -> None:
        assert map_fields(["x", "y"], ["1", "2", "3"]) == [("x", "1"), ("y", "2"), ("column3", "3")]

    def test_long_header_drops_extra_names(self) -> None:
        assert map_fields(["x", "y", "z"], ["1", "2"]) == [("x", "1"), ("y", "2")]

    def test_exact_header(self) -> None:
        assert map_fields(("x", "y"), ("1", "2")) == [("x", "1"), ("y", "2")]

    def test_empty_row(self) -> None:
        assert map_fields(["x"], []) == []

    def test_preserves_empty_values(self) -> None:
        assert map_fields(["a", "b"], ["", ""]) == [("a", ""), ("b", "")]
