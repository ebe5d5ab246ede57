# formstate/runtime/debouncer.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable, Optional, Protocol, Tuple

from formstate.core.config import DEFAULT_DEBOUNCE_MS

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


def _call_later(delay: float, callback: Callable[[], None]) -> TimerHandle:
    return asyncio.get_running_loop().call_later(delay, callback)


class Debouncer:
    """
    Coalesces bursts of calls into one delayed call carrying the latest
    arguments. There is never more than one live timer: each call cancels the
    pending one and arms a fresh timer (last write wins, nothing is queued).
    """

    def __init__(
        self,
        callback: Callable[..., None],
        interval_ms: int = DEFAULT_DEBOUNCE_MS,
        clock: Optional[Callable[[], float]] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        """
        :param callback: Called with the surviving arguments once the quiet interval passes.
        :param interval_ms: Quiet interval in milliseconds.
        :param clock: Returns the current time in seconds. Defaults to time.monotonic.
        :param scheduler: scheduler(delay_seconds, fn) arms a timer and returns a
            handle with cancel(). Defaults to the running asyncio loop's call_later.
        """
        self._callback = callback
        self._interval = interval_ms / 1000
        self._clock = clock or time.monotonic
        self._scheduler = scheduler or _call_later
        self._last_call_time: Optional[float] = None
        self._deadline: Optional[float] = None
        self._last_args: Optional[Tuple[Any, ...]] = None
        self._handle: Optional[TimerHandle] = None

    @property
    def interval(self) -> float:
        """Quiet interval in seconds."""
        return self._interval

    @property
    def pending(self) -> bool:
        return self._last_args is not None

    def call(self, *args: Any) -> None:
        """
        Record args as the latest call and restart the quiet interval.
        """
        now = self._clock()
        self._arm(self._interval)
        self._last_call_time = now
        self._deadline = now + self._interval
        self._last_args = args

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._last_args = None
        self._last_call_time = None
        self._deadline = None

    def _arm(self, delay: float) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = self._scheduler(delay, self._expire)

    def _expire(self) -> None:
        self._handle = None
        if self._last_args is None:
            return
        now = self._clock()
        remaining = self._deadline - now
        # A clock that moved backwards counts as expired.
        if remaining > 0 and now >= self._last_call_time:
            self._arm(remaining)
            return
        args = self._last_args
        self._last_args = None
        self._last_call_time = None
        self._deadline = None
        logger.debug("Debounce interval elapsed, firing with %r", args)
        self._callback(*args)
