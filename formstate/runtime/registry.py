# formstate/runtime/registry.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from formstate.core.config import DEFAULT_DEBOUNCE_MS
from formstate.core.errors import ConfigurationError, FormStateError
from formstate.core.events import Event, TriggerAsyncValidation
from formstate.core.results import Result, as_result
from formstate.core.strategy import Strategy
from formstate.core.validators import FieldValidator
from formstate.interfaces.types import Field, Value
from formstate.runtime.debouncer import Debouncer, Scheduler

logger = logging.getLogger(__name__)


class RegisteredValidator:
    """
    A configured validator together with the debouncer that throttles its
    async part. Sync-only validators carry no debouncer.
    """

    def __init__(self, field: Field, validator: FieldValidator, debouncer: Optional[Debouncer] = None) -> None:
        self.field = field
        self.validator = validator
        self.debouncer = debouncer

    @property
    def has_async(self) -> bool:
        return self.validator.has_async

    @property
    def strategy(self) -> Optional[Strategy]:
        return self.validator.strategy

    @property
    def dependents(self) -> Tuple[Field, ...]:
        return tuple(self.validator.dependents)

    def validate(self, value: Value, data: Any) -> Optional[Result]:
        """Run the sync check and normalize what it returns."""
        return as_result(self.validator.validate(value, data), self.field)

    def __repr__(self) -> str:
        return f"RegisteredValidator(field={self.field!r}, async={self.has_async})"


class ValidatorRegistry:
    """
    Wraps every configured validator once at construction. The state machine
    only ever consults this registry; iteration follows configuration order.
    """

    def __init__(
        self,
        validators: Union[Mapping[Field, FieldValidator], Iterable[Tuple[Field, FieldValidator]]],
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        clock: Optional[Callable[[], float]] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        """
        :param validators: Field to FieldValidator, in the order submit should fold over them.
        :param debounce_ms: Default quiet interval for async validators.
        :param clock: Passed to every Debouncer.
        :param scheduler: Passed to every Debouncer.
        :raises ConfigurationError: If dependents reference unknown fields or the field itself.
        """
        pairs = list(validators.items()) if isinstance(validators, Mapping) else list(validators)
        self._dispatch: Optional[Callable[[Event], None]] = None
        self._entries: Dict[Field, RegisteredValidator] = {}
        for field, validator in pairs:
            if field in self._entries:
                raise ConfigurationError(f"Field {field!r} is configured twice")
            self._entries[field] = self._wrap(field, validator, debounce_ms, clock, scheduler)
        self._check_dependents()

    def _wrap(
        self,
        field: Field,
        validator: FieldValidator,
        debounce_ms: int,
        clock: Optional[Callable[[], float]],
        scheduler: Optional[Scheduler],
    ) -> RegisteredValidator:
        if not callable(validator.validate):
            raise ConfigurationError(f"Validator for field {field!r} must be callable")
        if not validator.has_async:
            return RegisteredValidator(field, validator)
        if not callable(validator.validate_async):
            raise ConfigurationError(f"Async validator for field {field!r} must be callable")
        interval = validator.debounce_ms if validator.debounce_ms is not None else debounce_ms
        if interval < 0:
            raise ConfigurationError(f"debounce_ms for field {field!r} must be >= 0, got {interval}")
        debouncer = Debouncer(self._on_debounced, interval, clock=clock, scheduler=scheduler)
        return RegisteredValidator(field, validator, debouncer)

    def _check_dependents(self) -> None:
        for field, entry in self._entries.items():
            for dependent in entry.dependents:
                if dependent == field:
                    raise ConfigurationError(f"Field {field!r} lists itself as a dependent")
                if dependent not in self._entries:
                    raise ConfigurationError(f"Field {field!r} lists unknown dependent {dependent!r}")

    def bind(self, dispatch: Callable[[Event], None]) -> None:
        """
        Set where expired debounce timers send TriggerAsyncValidation.
        """
        self._dispatch = dispatch

    def _on_debounced(self, field: Field, value: Value, revision: int) -> None:
        if self._dispatch is None:
            raise FormStateError("ValidatorRegistry is not bound to a dispatcher")
        self._dispatch(TriggerAsyncValidation(field, value, revision))

    def lookup(self, field: Field) -> Optional[RegisteredValidator]:
        """Return the wrapped validator for field, or None if it has none."""
        return self._entries.get(field)

    @property
    def fields(self) -> List[Field]:
        return list(self._entries)

    def cancel_pending(self) -> None:
        """Cancel every pending debounced call."""
        for entry in self._entries.values():
            if entry.debouncer is not None:
                entry.debouncer.cancel()

    def __iter__(self) -> Iterator[RegisteredValidator]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, field: object) -> bool:
        return field in self._entries
