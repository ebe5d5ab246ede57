# formstate/core/state_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple, Type

from formstate.core.accessors import MappingAccessor
from formstate.core.config import FormConfig
from formstate.core.errors import InternalEngineError, UnknownEventError
from formstate.core.events import (
    ApplyAsyncResult,
    AsyncValidationFailed,
    Blur,
    CancelDebouncedCalls,
    Change,
    Effect,
    Event,
    HandleSubmissionError,
    InvokeAsyncValidator,
    InvokeSubmitCallback,
    Reset,
    ScheduleDebouncedCall,
    Submit,
    TriggerAsyncValidation,
)
from formstate.core.results import Result, ValidityBag, is_invalid, is_valid
from formstate.core.state import EngineState, Step
from formstate.core.strategy import Strategy, Trigger, change_trigger, validates_on_blur

if TYPE_CHECKING:
    from formstate.interfaces.protocols import DomainAccessor
    from formstate.interfaces.types import Field, Value
    from formstate.runtime.registry import RegisteredValidator, ValidatorRegistry

logger = logging.getLogger(__name__)


class FormStateMachine:
    """
    The transition function of the engine: process_event(state, event) returns
    the next state plus the effects the executor has to carry out. It never
    performs I/O, arms timers or calls async validators itself, so the same
    state and event always give the same Step.
    """

    def __init__(
        self,
        registry: "ValidatorRegistry",
        initial_data: Any,
        accessor: Optional["DomainAccessor"] = None,
        config: Optional[FormConfig] = None,
    ) -> None:
        """
        :param registry: Wrapped validators, in configuration order.
        :param initial_data: Domain state snapshot that Reset returns to.
        :param accessor: Reads and writes fields of the domain state.
        :param config: Engine settings; only strategy and async_failure_message are used here.
        """
        self._registry = registry
        self._initial_data = initial_data
        self._accessor = accessor or MappingAccessor()
        self._config = config or FormConfig()
        self._handlers: Dict[Type[Event], Callable[[EngineState, Any], Step]] = {
            Change: self._on_change,
            Blur: self._on_blur,
            Submit: self._on_submit,
            Reset: self._on_reset,
            TriggerAsyncValidation: self._on_trigger_async,
            ApplyAsyncResult: self._on_async_result,
            AsyncValidationFailed: self._on_async_failure,
            HandleSubmissionError: self._on_submission_error,
        }

    @property
    def registry(self) -> "ValidatorRegistry":
        return self._registry

    @property
    def accessor(self) -> "DomainAccessor":
        return self._accessor

    def initial_state(self) -> EngineState:
        """State right after construction, and after every Reset."""
        return EngineState.initial(self._initial_data, self._registry.fields)

    def process_event(self, state: EngineState, event: Event) -> Step:
        """
        Compute the next state for event.

        :raises UnknownEventError: If event is not one of the engine's events.
        """
        handler = self._handlers.get(type(event))
        if handler is None:
            raise UnknownEventError(f"Cannot process event {event!r}")
        return handler(state, event)

    def strategy_for(self, entry: "RegisteredValidator") -> Strategy:
        return entry.strategy or self._config.strategy

    # -------------------------------------------------------------------------
    # External events
    # -------------------------------------------------------------------------

    def _on_change(self, state: EngineState, event: Change) -> Step:
        data = self._accessor.update(event.field, event.value, state.data)
        entry = self._registry.lookup(event.field)
        if entry is None:
            return Step(replace(state, data=data))

        field = event.field
        state = replace(state, data=data, revisions=state.revisions.set(field, state.revision(field) + 1))
        trigger = change_trigger(self.strategy_for(entry), field in state.emitted, state.submitted_once)
        if trigger is Trigger.SKIP:
            logger.debug("Change of %r only updates data under %s", field, self.strategy_for(entry).name)
            return Step(self._settle(state, field))
        return self._validate_now(state, entry, event.value, commit_invalid=trigger is Trigger.COMMIT, cascade=True)

    def _on_blur(self, state: EngineState, event: Blur) -> Step:
        entry = self._registry.lookup(event.field)
        if entry is None or event.field in state.emitted:
            return Step(state)
        if not validates_on_blur(self.strategy_for(entry)):
            return Step(state)
        value = self._accessor.get(event.field, state.data)
        return self._validate_now(state, entry, value, commit_invalid=True, cascade=False)

    def _on_submit(self, state: EngineState, event: Submit) -> Step:
        if state.validating:
            logger.debug("Submit ignored, async validation in flight for %r", state.validating)
            return Step(state)
        if state.submitting:
            logger.debug("Submit ignored, a submission is already running")
            return Step(state)

        all_valid = True
        results = state.results
        emitted = state.emitted
        for entry in self._registry:
            field = entry.field
            value = self._accessor.get(field, state.data)
            fresh = entry.validate(value, state.data)
            previous = results.get(field)
            if fresh is None and previous is None:
                raise InternalEngineError(f"No result could be computed for field {field!r} during submit")
            current = fresh if fresh is not None else previous
            # The sync check alone cannot promote an async field past a failed async result.
            if entry.has_async and is_invalid(previous) and is_valid(fresh):
                current = previous
            results = results.set(field, current)
            # A stored result is a committed one.
            emitted = emitted.add(field)
            all_valid = all_valid and is_valid(current)

        state = replace(state, results=results, emitted=emitted, submitted_once=True)
        if not all_valid:
            logger.debug("Submit blocked by invalid fields")
            return Step(state)
        return Step(replace(state, submitting=True), (InvokeSubmitCallback(state.data),))

    def _on_reset(self, state: EngineState, event: Reset) -> Step:
        return Step(self.initial_state(), (CancelDebouncedCalls(),))

    def _on_submission_error(self, state: EngineState, event: HandleSubmissionError) -> Step:
        if not state.submitting:
            return Step(state)
        return Step(replace(state, submitting=False))

    # -------------------------------------------------------------------------
    # Async lifecycle
    # -------------------------------------------------------------------------

    def _on_trigger_async(self, state: EngineState, event: TriggerAsyncValidation) -> Step:
        entry = self._registry.lookup(event.field)
        if entry is None or not entry.has_async:
            return Step(state)
        if not self._is_current(state, event.field, event.value, event.revision):
            logger.debug("Debounced call for %r is stale, not invoking async validator", event.field)
            return Step(state)
        effect = InvokeAsyncValidator(event.field, event.value, event.revision, entry.validator.validate_async)
        return Step(state, (effect,))

    def _on_async_result(self, state: EngineState, event: ApplyAsyncResult) -> Step:
        if not self._is_current(state, event.field, event.value, event.revision):
            logger.debug("Dropping stale async result for %r (revision %s)", event.field, event.revision)
            return Step(state)
        return Step(self._commit(state, event.field, event.result))

    def _on_async_failure(self, state: EngineState, event: AsyncValidationFailed) -> Step:
        if not self._is_current(state, event.field, event.value, event.revision):
            return Step(state)
        result = ValidityBag(valid=False, message=self._config.async_failure_message)
        return Step(self._commit(state, event.field, result))

    def _is_current(self, state: EngineState, field: "Field", value: "Value", revision: int) -> bool:
        return (
            field in state.validating
            and state.revision(field) == revision
            and self._accessor.get(field, state.data) == value
        )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def _validate_now(
        self,
        state: EngineState,
        entry: "RegisteredValidator",
        value: "Value",
        commit_invalid: bool,
        cascade: bool,
    ) -> Step:
        """
        Run the sync check for entry's field. An invalid result is committed (or
        dropped, if commit_invalid is False) without reaching the async part; a
        valid result on a field with an async part marks it validating and
        schedules the debounced call.
        """
        field = entry.field
        result = entry.validate(value, state.data)
        if result is None:
            raise InternalEngineError(f"Validator for field {field!r} returned no result")

        if not result.valid and not commit_invalid:
            logger.debug("Dropping invalid result for not yet emitted field %r", field)
            return Step(self._settle(state, field))

        effects: List[Effect] = []
        if entry.has_async and result.valid:
            state = replace(
                state,
                results=state.results.clear(field),
                validating=state.validating.add(field),
            )
            if cascade:
                state, effects = self._cascade(state, entry)
            effects.append(ScheduleDebouncedCall(field, value, state.revision(field)))
            return Step(state, tuple(effects))

        state = self._commit(state, field, result)
        if cascade:
            state, effects = self._cascade(state, entry)
        return Step(state, tuple(effects))

    def _cascade(self, state: EngineState, entry: "RegisteredValidator") -> Tuple[EngineState, List[Effect]]:
        """Re-validate entry's dependents that already emitted, one level deep."""
        effects: List[Effect] = []
        for dependent in entry.dependents:
            if dependent not in state.emitted:
                continue
            dependent_entry = self._registry.lookup(dependent)
            value = self._accessor.get(dependent, state.data)
            step = self._validate_now(state, dependent_entry, value, commit_invalid=True, cascade=False)
            state = step.state
            effects.extend(step.effects)
        return state, effects

    def _commit(self, state: EngineState, field: "Field", result: Result) -> EngineState:
        return replace(
            state,
            results=state.results.set(field, result),
            validating=state.validating.discard(field),
            emitted=state.emitted.add(field),
        )

    def _settle(self, state: EngineState, field: "Field") -> EngineState:
        """
        Take field out of validating without storing anything. Whatever async
        call was in flight belongs to an older revision and will be dropped.
        """
        if field not in state.validating:
            return state
        return replace(state, validating=state.validating.discard(field))
