# formstate/core/accessors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import copy
import dataclasses
from typing import Any, Mapping

from formstate.interfaces.types import Field, Value


class MappingAccessor:
    """
    Accessor for domain state held in a mapping (dict, MappingProxyType, ...).
    Updates produce a new dict; the original mapping is never modified.
    """

    def get(self, field: Field, data: Mapping[Field, Any]) -> Value:
        return data.get(field)

    def update(self, field: Field, value: Value, data: Mapping[Field, Any]) -> Mapping[Field, Any]:
        return {**data, field: value}


class AttributeAccessor:
    """
    Accessor for domain state held in object attributes. Dataclasses are
    updated with dataclasses.replace(), anything else is shallow-copied first.
    """

    def get(self, field: Field, data: Any) -> Value:
        return getattr(data, field)

    def update(self, field: Field, value: Value, data: Any) -> Any:
        if dataclasses.is_dataclass(data) and not isinstance(data, type):
            return dataclasses.replace(data, **{field: value})
        updated = copy.copy(data)
        setattr(updated, field, value)
        return updated


def default_extract_value(field: Field, raw_event: Any) -> Value:
    """
    Pull a value out of a raw UI event: ``event.target.value`` when present,
    then ``event.value``, otherwise the event itself is taken as the value.
    """
    target = getattr(raw_event, "target", None)
    if target is not None and hasattr(target, "value"):
        return target.value
    if hasattr(raw_event, "value"):
        return raw_event.value
    return raw_event
