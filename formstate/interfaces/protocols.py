# formstate/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Protocol, runtime_checkable

from formstate.interfaces.types import DomainState, Field, Value


@runtime_checkable
class DomainAccessor(Protocol):
    """
    Reads and writes single fields of the consumer-owned domain state.

    Methods:
        get(field, data): Returns the field's current value.
        update(field, value, data): Returns a new domain state with the field replaced.

    Runtime Invariants:
    - update() never mutates the state it is given; the engine keeps the
      original snapshot around for Reset.
    """

    def get(self, field: Field, data: DomainState) -> Value:
        """Return the value stored for field."""
        ...

    def update(self, field: Field, value: Value, data: DomainState) -> DomainState:
        """Return a copy of data with field set to value."""
        ...


@runtime_checkable
class UIEvent(Protocol):
    """
    The part of a raw UI event the public interface touches on submit.
    """

    @property
    def default_prevented(self) -> bool:
        """Whether the default browser/toolkit action was already prevented."""
        ...

    def prevent_default(self) -> None:
        """Prevent the default action."""
        ...


@runtime_checkable
class EngineHook(Protocol):
    """
    Observer notified by the executor. Implementations may define either
    method; missing methods are skipped.
    """

    def on_event(self, event: Any, previous: Any, current: Any) -> None:
        """Called after an event was processed."""
        ...

    def on_error(self, error: Exception) -> None:
        """Called when processing or an effect fails."""
        ...
