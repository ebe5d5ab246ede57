# formstate/core/events.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Events consumed by the state machine and effects it asks the executor to run.

Events are the only way state changes. Effects never change state directly;
the executor performs them and feeds their outcome back in as new events.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Hashable, Optional

from formstate.core.results import Result


class Event:
    """Base class for everything the state machine processes."""

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class Change(Event):
    """A field's value was edited."""

    field: Hashable
    value: Any


@dataclass(frozen=True)
class Blur(Event):
    """A field lost focus. The value is informational; validation reads the stored value."""

    field: Hashable
    value: Any = None


@dataclass(frozen=True)
class Submit(Event):
    """The form was submitted."""


@dataclass(frozen=True)
class Reset(Event):
    """Restore the state derived from the initial domain snapshot."""


@dataclass(frozen=True)
class TriggerAsyncValidation(Event):
    """A debounce interval elapsed for a field's async validator."""

    field: Hashable
    value: Any
    revision: int


@dataclass(frozen=True)
class ApplyAsyncResult(Event):
    """An async validator resolved."""

    field: Hashable
    value: Any
    revision: int
    result: Result


@dataclass(frozen=True)
class AsyncValidationFailed(Event):
    """An async validator raised or timed out."""

    field: Hashable
    value: Any
    revision: int
    reason: Optional[str] = None


@dataclass(frozen=True)
class HandleSubmissionError(Event):
    """The external submit callback reported failure."""


class Effect:
    """Base class for side effects returned alongside a new state."""


@dataclass(frozen=True)
class ScheduleDebouncedCall(Effect):
    """Forward (field, value, revision) to the field's debouncer."""

    field: Hashable
    value: Any
    revision: int


@dataclass(frozen=True)
class InvokeAsyncValidator(Effect):
    """Call the async validator and report back with ApplyAsyncResult."""

    field: Hashable
    value: Any
    revision: int
    validate_async: Callable[[Any], Awaitable[Any]]


@dataclass(frozen=True)
class InvokeSubmitCallback(Effect):
    """Hand the domain state to the external submit callback."""

    data: Any


@dataclass(frozen=True)
class CancelDebouncedCalls(Effect):
    """Drop every pending debounced call."""
