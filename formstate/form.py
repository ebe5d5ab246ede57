# formstate/form.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple, Union

from formstate.core.accessors import default_extract_value
from formstate.core.config import FormConfig
from formstate.core.events import Blur, Change, Reset, Submit
from formstate.core.hooks import HookManager
from formstate.core.results import Result
from formstate.core.state import EngineState
from formstate.core.state_machine import FormStateMachine
from formstate.core.validators import FieldValidator
from formstate.interfaces.protocols import DomainAccessor, EngineHook, UIEvent
from formstate.interfaces.types import Field, Value, ValueExtractor
from formstate.runtime.debouncer import Scheduler
from formstate.runtime.executor import Executor, SubmitCallback
from formstate.runtime.registry import ValidatorRegistry

logger = logging.getLogger(__name__)


class Form:
    """
    Public face of the engine for one form: read projections for rendering
    and the three dispatchers a presentation layer wires to its widgets.

    Example:
        form = Form(
            {"email": ""},
            {"email": FieldValidator(validate=rules.email(), validate_async=check_email_free)},
            on_submit=save,
        )
        form.on_change("email", event)
        form.result_of("email")
    """

    def __init__(
        self,
        initial_data: Any,
        validators: Union[Mapping[Field, FieldValidator], Iterable[Tuple[Field, FieldValidator]]],
        on_submit: SubmitCallback,
        config: Optional[FormConfig] = None,
        accessor: Optional[DomainAccessor] = None,
        extract_value: ValueExtractor = default_extract_value,
        hooks: Optional[List[EngineHook]] = None,
        clock: Optional[Callable[[], float]] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        """
        :param initial_data: Domain state snapshot the form starts from and resets to.
        :param validators: Field to FieldValidator; order is the submit fold order.
        :param on_submit: Called as on_submit(data, notifiers) once every field passes.
        :param config: Engine settings (strategy, debounce interval, async timeout).
        :param accessor: Reads/writes fields of the domain state. Defaults to mapping access.
        :param extract_value: Turns a raw UI event into a field value.
        :param hooks: Observers notified after every event and on errors.
        :param clock: Time source for debouncers, in seconds.
        :param scheduler: Timer factory for debouncers; defaults to the asyncio loop.
        """
        self.config = config or FormConfig()
        self._extract_value = extract_value
        registry = ValidatorRegistry(validators, self.config.debounce_ms, clock=clock, scheduler=scheduler)
        machine = FormStateMachine(registry, initial_data, accessor=accessor, config=self.config)
        self._executor = Executor(
            machine,
            on_submit,
            hooks=HookManager(hooks),
            async_timeout=self.config.async_timeout_seconds,
        )

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def state(self) -> EngineState:
        return self._executor.state

    @property
    def data(self) -> Any:
        return self._executor.state.data

    def result_of(self, field: Field) -> Optional[Result]:
        """Latest committed result for field, or None if there is none yet."""
        return self._executor.state.results.get(field)

    def is_validating(self, field: Field) -> bool:
        return field in self._executor.state.validating

    def is_emitted(self, field: Field) -> bool:
        return field in self._executor.state.emitted

    @property
    def is_submitting(self) -> bool:
        return self._executor.state.submitting

    @property
    def submitted_once(self) -> bool:
        return self._executor.state.submitted_once

    @property
    def executor(self) -> Executor:
        return self._executor

    # -------------------------------------------------------------------------
    # UI event dispatchers
    # -------------------------------------------------------------------------

    def on_change(self, field: Field, raw_event: Any) -> None:
        self.change(field, self._extract_value(field, raw_event))

    def on_blur(self, field: Field, raw_event: Any) -> None:
        self._executor.dispatch(Blur(field, self._extract_value(field, raw_event)))

    def on_submit(self, raw_event: UIEvent) -> None:
        if not raw_event.default_prevented:
            raw_event.prevent_default()
        self.submit()

    # -------------------------------------------------------------------------
    # Direct dispatchers
    # -------------------------------------------------------------------------

    def change(self, field: Field, value: Value) -> None:
        self._executor.dispatch(Change(field, value))

    def blur(self, field: Field) -> None:
        self._executor.dispatch(Blur(field))

    def submit(self) -> None:
        self._executor.dispatch(Submit())

    def reset(self) -> None:
        self._executor.dispatch(Reset())

    async def settle(self) -> None:
        """Wait for async validators and submit callbacks started so far."""
        await self._executor.drain()
