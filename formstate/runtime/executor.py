# formstate/runtime/executor.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
import inspect
import logging
from collections import deque
from typing import Any, Awaitable, Callable, Coroutine, Deque, List, Optional, Set

from formstate.core.events import (
    ApplyAsyncResult,
    AsyncValidationFailed,
    CancelDebouncedCalls,
    Effect,
    Event,
    HandleSubmissionError,
    InvokeAsyncValidator,
    InvokeSubmitCallback,
    Reset,
    ScheduleDebouncedCall,
)
from formstate.core.hooks import HookManager
from formstate.core.results import as_result
from formstate.core.state import EngineState
from formstate.core.state_machine import FormStateMachine

logger = logging.getLogger(__name__)


class SubmitNotifiers:
    """
    The two callbacks handed to the external submit function. Only the first
    call counts; later calls are logged and ignored.
    """

    def __init__(self, dispatch: Callable[[Event], None]) -> None:
        self._dispatch = dispatch
        self._settled = False

    @property
    def settled(self) -> bool:
        return self._settled

    def on_success(self) -> None:
        """Submission went through: reset the form to its initial state."""
        self._settle(Reset(), "on_success")

    def on_failure(self) -> None:
        """Submission failed: clear the submitting flag and keep everything else."""
        self._settle(HandleSubmissionError(), "on_failure")

    def _settle(self, event: Event, name: str) -> None:
        if self._settled:
            logger.warning("Submit notifier %s called after the submission was already settled", name)
            return
        self._settled = True
        self._dispatch(event)


SubmitCallback = Callable[[Any, SubmitNotifiers], Optional[Awaitable[None]]]


class Executor:
    """
    Owns the engine state and serializes every transition through a single
    FIFO. dispatch() may be called from effects, timers, async completions or
    submit notifiers; events raised while another is being processed are
    queued and handled in order once it finishes.
    """

    def __init__(
        self,
        machine: FormStateMachine,
        on_submit: SubmitCallback,
        hooks: Optional[HookManager] = None,
        async_timeout: Optional[float] = None,
    ) -> None:
        """
        :param machine: Transition function to run events through.
        :param on_submit: External callback, called as on_submit(data, notifiers).
            May return an awaitable, which is scheduled on the running loop.
        :param hooks: Observers notified after each event and on errors.
        :param async_timeout: Seconds before an async validator counts as failed.
        """
        self.machine = machine
        self._on_submit = on_submit
        self._hooks = hooks or HookManager()
        self._async_timeout = async_timeout
        self._state = machine.initial_state()
        self._queue: Deque[Event] = deque()
        self._draining = False
        self._tasks: Set[asyncio.Task] = set()
        self._validator_tasks: Set[asyncio.Task] = set()
        machine.registry.bind(self.dispatch)

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def hooks(self) -> HookManager:
        return self._hooks

    @property
    def pending_tasks(self) -> List[asyncio.Task]:
        return list(self._tasks)

    def dispatch(self, event: Event) -> None:
        """
        Queue event and, unless a drain is already running further up the
        stack, process the queue until it is empty.

        :raises FormStateError: Propagated from the state machine; the queue is cleared.
        """
        self._queue.append(event)
        if self._draining:
            return
        self._draining = True
        try:
            while self._queue:
                self._process(self._queue.popleft())
        except Exception:
            self._queue.clear()
            raise
        finally:
            self._draining = False

    def _process(self, event: Event) -> None:
        """
        Run event through the machine and perform its effects. The new state
        stays committed only if every effect was performed; otherwise the
        previous state is restored and the error propagates.
        """
        previous = self._state
        try:
            step = self.machine.process_event(previous, event)
            self._state = step.state
            for effect in step.effects:
                self._perform(effect)
        except Exception as error:
            self._state = previous
            self._hooks.execute_on_error(error)
            raise
        self._hooks.execute_on_event(event, previous, step.state)

    def _perform(self, effect: Effect) -> None:
        if isinstance(effect, ScheduleDebouncedCall):
            entry = self.machine.registry.lookup(effect.field)
            entry.debouncer.call(effect.field, effect.value, effect.revision)
        elif isinstance(effect, InvokeAsyncValidator):
            self._validator_tasks.add(self._spawn(self._run_async_validator(effect)))
        elif isinstance(effect, InvokeSubmitCallback):
            self._run_submit(effect)
        elif isinstance(effect, CancelDebouncedCalls):
            self.machine.registry.cancel_pending()
            self._cancel_validators()
        else:
            raise TypeError(f"Unknown effect {effect!r}")

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            raise
        task = loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        task.add_done_callback(self._validator_tasks.discard)
        return task

    def _cancel_validators(self) -> None:
        """Cancel async validators still running; their results belong to state that no longer exists."""
        for task in list(self._validator_tasks):
            task.cancel()
        self._validator_tasks.clear()

    async def _run_async_validator(self, effect: InvokeAsyncValidator) -> None:
        try:
            pending = effect.validate_async(effect.value)
            if self._async_timeout is not None:
                raw = await asyncio.wait_for(pending, self._async_timeout)
            else:
                raw = await pending
            result = as_result(raw, effect.field)
            if result is None:
                raise ValueError(f"Async validator for {effect.field!r} resolved to None")
        except asyncio.CancelledError:
            raise
        except Exception as error:
            logger.warning("Async validation of %r failed: %r", effect.field, error)
            self._hooks.execute_on_error(error)
            self.dispatch(AsyncValidationFailed(effect.field, effect.value, effect.revision, repr(error)))
            return
        self.dispatch(ApplyAsyncResult(effect.field, effect.value, effect.revision, result))

    def _run_submit(self, effect: InvokeSubmitCallback) -> None:
        notifiers = SubmitNotifiers(self.dispatch)
        try:
            outcome = self._on_submit(effect.data, notifiers)
        except Exception as error:
            self._submit_failed(error, notifiers)
            return
        if inspect.isawaitable(outcome):
            self._spawn(self._await_submit(outcome, notifiers))

    async def _await_submit(self, outcome: Awaitable[None], notifiers: SubmitNotifiers) -> None:
        try:
            await outcome
        except asyncio.CancelledError:
            raise
        except Exception as error:
            self._submit_failed(error, notifiers)

    def _submit_failed(self, error: Exception, notifiers: SubmitNotifiers) -> None:
        logger.error("Submit callback raised %r; treating it as a failed submission", error)
        self._hooks.execute_on_error(error)
        if not notifiers.settled:
            notifiers.on_failure()

    async def drain(self) -> None:
        """Wait until every async validator and submit task started so far has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
