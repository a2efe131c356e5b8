"""Record contract and the dict-backed implementation.

A record is one unit of pipeline data: string keys mapped to typed values.
The host pipeline owns records; processors only mutate the fields they are
responsible for, in place.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Protocol, TypeVar, overload, runtime_checkable

from csvline.contracts.errors import FieldTypeError

T = TypeVar("T")


@runtime_checkable
class RecordProtocol(Protocol):
    """Interface a host record must provide to csvline processors."""

    def get(self, key: str, expected_type: type[T]) -> T | None:
        """Return the value for key, or None when absent.

        Raises:
            FieldTypeError: If the stored value is not an expected_type.
        """
        ...

    def put(self, key: str, value: Any) -> None:
        """Set key to value, replacing any existing value."""
        ...

    def delete(self, key: str) -> None:
        """Remove key. Removing an absent key is a no-op."""
        ...

    def contains(self, key: str) -> bool:
        """Return True if key is present (even when its value is None)."""
        ...


class Record:
    """Mutable record backed by an insertion-ordered dict.

    Existing fields keep their position when overwritten; new fields are
    appended. Compares equal to another Record or to a plain mapping with the
    same items.

    Example:
        record = Record({"message": "1,2,3"})
        record.get("message", str)  # "1,2,3"
        record.put("column1", "1")
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data) if data is not None else {}

    @overload
    def get(self, key: str, expected_type: type[T]) -> T | None: ...

    @overload
    def get(self, key: str) -> Any: ...

    def get(self, key: str, expected_type: type[Any] | None = None) -> Any:
        value = self._data.get(key)
        if value is None or expected_type is None:
            return value
        if not isinstance(value, expected_type):
            raise FieldTypeError(key, expected_type, type(value))
        return value

    def put(self, key: str, value: Any) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def contains(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> list[str]:
        return list(self._data)

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the record's fields."""
        return dict(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Record):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Record({self._data!r})"
