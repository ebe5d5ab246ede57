# formstate/core/results.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from formstate.core.errors import InvalidResultError


@dataclass(frozen=True)
class Valid:
    """Plain validity flag with no message."""

    valid: bool


@dataclass(frozen=True)
class ValidityBag:
    """Validity flag with an optional message for display."""

    valid: bool
    message: Optional[str] = None


Result = Union[Valid, ValidityBag]


def is_valid(result: Optional[Result]) -> bool:
    """
    Return True only for a result that reports validity. ``None`` (no result
    yet) is not valid.
    """
    return result is not None and result.valid


def is_invalid(result: Optional[Result]) -> bool:
    """Return True for a stored result that reports invalidity."""
    return result is not None and not result.valid


def as_result(raw: Any, field: Any = None) -> Optional[Result]:
    """
    Normalize a validator's return value.

    :param raw: A bool, Valid, ValidityBag or None.
    :param field: Field the value belongs to, used in error reporting.
    :return: A Result, or None when the validator produced nothing.
    :raises InvalidResultError: If raw is of any other type.
    """
    if raw is None or isinstance(raw, (Valid, ValidityBag)):
        return raw
    if isinstance(raw, bool):
        return Valid(raw)
    raise InvalidResultError(field, raw)


def message_of(result: Optional[Result]) -> Optional[str]:
    """Message carried by a ValidityBag, None otherwise."""
    if isinstance(result, ValidityBag):
        return result.message
    return None
