# formstate/core/rules.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Ready-made synchronous validators.

Each factory returns a callable with the validate(value, data) signature a
FieldValidator expects, producing a ValidityBag. Apart from required(), rules
let None and "" pass so that optional fields stay optional; combine them with
required() through all_of() to make a field mandatory.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Optional

from formstate.core.accessors import MappingAccessor
from formstate.core.results import ValidityBag, as_result
from formstate.interfaces.protocols import DomainAccessor
from formstate.interfaces.types import Field, SyncValidate

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

_OK = ValidityBag(valid=True)


def _blank(value: Any) -> bool:
    return value is None or value == ""


def required(message: str = "This field is required.") -> SyncValidate:
    def validate(value: Any, data: Any) -> ValidityBag:
        if value is None:
            return ValidityBag(False, message)
        if isinstance(value, (str, list, dict, tuple, set)) and not value:
            return ValidityBag(False, message)
        return _OK

    return validate


def min_length(length: int, message: Optional[str] = None) -> SyncValidate:
    def validate(value: Any, data: Any) -> ValidityBag:
        if not _blank(value) and len(str(value)) < length:
            return ValidityBag(False, message or f"Must be at least {length} characters long.")
        return _OK

    return validate


def max_length(length: int, message: Optional[str] = None) -> SyncValidate:
    def validate(value: Any, data: Any) -> ValidityBag:
        if not _blank(value) and len(str(value)) > length:
            return ValidityBag(False, message or f"Must be at most {length} characters long.")
        return _OK

    return validate


def pattern(regex: str, message: str = "Invalid format.") -> SyncValidate:
    compiled = re.compile(regex)

    def validate(value: Any, data: Any) -> ValidityBag:
        if not _blank(value) and not compiled.fullmatch(str(value)):
            return ValidityBag(False, message)
        return _OK

    return validate


def email(message: str = "Must be a valid email address.") -> SyncValidate:
    return pattern(EMAIL_PATTERN, message)


def matches(
    other: Field,
    message: str = "Values do not match.",
    accessor: Optional[DomainAccessor] = None,
) -> SyncValidate:
    """
    Compare the value with another field of the domain state. Typically put on
    a confirmation field that is listed among the other field's dependents.
    """
    accessor = accessor or MappingAccessor()

    def validate(value: Any, data: Any) -> ValidityBag:
        if value != accessor.get(other, data):
            return ValidityBag(False, message)
        return _OK

    return validate


def all_of(*rules: Callable[[Any, Any], Any]) -> SyncValidate:
    """Run rules in order and return the first invalid result, or valid."""

    def validate(value: Any, data: Any) -> ValidityBag:
        for rule in rules:
            result = as_result(rule(value, data))
            if result is not None and not result.valid:
                if isinstance(result, ValidityBag):
                    return result
                return ValidityBag(False)
        return _OK

    return validate
