# formstate/core/containers.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Immutable, hash-keyed containers for per-field engine state.

Every mutator returns a new container and leaves the receiver untouched, so
an EngineState can be compared, logged and kept around as a snapshot. Fold
order is never taken from these containers; the validator registry keeps the
configured field order.
"""

from __future__ import annotations

from typing import Any, Dict, FrozenSet, Generic, Hashable, Iterable, Iterator, Mapping, Optional, TypeVar

from formstate.core.results import Result, is_invalid, is_valid

V = TypeVar("V")


class FieldsSet:
    """A set of fields, e.g. the emitted fields or those with async validation in flight."""

    __slots__ = ("_fields",)

    def __init__(self, fields: Iterable[Hashable] = ()) -> None:
        self._fields: FrozenSet[Hashable] = frozenset(fields)

    def add(self, field: Hashable) -> "FieldsSet":
        if field in self._fields:
            return self
        return FieldsSet(self._fields | {field})

    def discard(self, field: Hashable) -> "FieldsSet":
        if field not in self._fields:
            return self
        return FieldsSet(self._fields - {field})

    def __contains__(self, field: object) -> bool:
        return field in self._fields

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __bool__(self) -> bool:
        return bool(self._fields)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldsSet):
            return self._fields == other._fields
        if isinstance(other, (set, frozenset)):
            return self._fields == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._fields)

    def __repr__(self) -> str:
        return f"FieldsSet({sorted(self._fields, key=repr)!r})"


class FieldMap(Generic[V]):
    """Immutable mapping keyed by field."""

    __slots__ = ("_items",)

    def __init__(self, items: Optional[Mapping[Hashable, V]] = None) -> None:
        self._items: Dict[Hashable, V] = dict(items or {})

    def get(self, field: Hashable, default: Any = None) -> Any:
        return self._items.get(field, default)

    def set(self, field: Hashable, value: V) -> "FieldMap[V]":
        if field in self._items and self._items[field] == value:
            return self
        items = dict(self._items)
        items[field] = value
        return type(self)(items)

    def __contains__(self, field: object) -> bool:
        return field in self._items

    def __getitem__(self, field: Hashable) -> V:
        return self._items[field]

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def items(self):
        return self._items.items()

    def as_dict(self) -> Dict[Hashable, V]:
        return dict(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldMap):
            return self._items == other._items
        if isinstance(other, Mapping):
            return self._items == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._items.items()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"


class ResultsMap(FieldMap[Optional[Result]]):
    """Per-field validation results. A missing key and a None value both mean "no result yet"."""

    def is_valid(self, field: Hashable) -> bool:
        return is_valid(self._items.get(field))

    def is_invalid(self, field: Hashable) -> bool:
        return is_invalid(self._items.get(field))

    def clear(self, field: Hashable) -> "ResultsMap":
        return self.set(field, None)
