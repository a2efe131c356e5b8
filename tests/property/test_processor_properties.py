# tests/property/test_processor_properties.py
"""Property-based tests for batch processing.

Key Properties:
- Shape: the returned batch is the input batch, same size, same order
- Determinism: identical batches produce identical records
- Isolation: fields the parser does not write are untouched
"""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from csvline.contracts.record import Record
from csvline.plugins.processors.csv_processor import CSVProcessor
from csvline.telemetry.observers import NullObserver
from tests.property.settings import QUICK_SETTINGS

# Lines mixing valid, empty, and malformed input
lines = st.one_of(
    st.text(max_size=30),
    st.just(""),
    st.just('"unterminated,x'),
    st.lists(st.text(alphabet="xyz", max_size=4), min_size=1, max_size=5).map(",".join),
)

# A source value that is sometimes not a string
source_values = st.one_of(lines, st.integers(), st.none())


def _processor() -> CSVProcessor:
    return CSVProcessor({"source": "message", "column_names_source_key": "header", "delete_header": True}, observer=NullObserver())


def _batch(values: list[object]) -> list[Record]:
    return [Record({"message": value, "header": "a,b", "keep": i}) for i, value in enumerate(values)]


class TestProcessBatchProperties:
    @given(values=st.lists(source_values, max_size=10))
    @QUICK_SETTINGS
    def test_batch_shape_preserved(self, values: list[object]) -> None:
        records = _batch(values)
        before = list(records)

        result = _processor().process_batch(records)

        assert result is records
        assert len(result) == len(before)
        assert all(a is b for a, b in zip(result, before, strict=True))

    @given(values=st.lists(source_values, max_size=10))
    @QUICK_SETTINGS
    def test_identical_batches_identical_output(self, values: list[object]) -> None:
        first = _batch(values)
        second = _batch(values)

        _processor().process_batch(first)
        _processor().process_batch(second)

        assert [r.to_dict() for r in first] == [r.to_dict() for r in second]

    @given(values=st.lists(source_values, max_size=10))
    @QUICK_SETTINGS
    def test_untouched_fields_survive(self, values: list[object]) -> None:
        records = _batch(values)

        _processor().process_batch(records)

        for i, record in enumerate(records):
            assert record.get("keep") == i
