# tests/fakes.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import asyncio
from typing import Any, Callable, Dict, List

from formstate.core.results import Valid, ValidityBag


class FakeHandle:
    """Timer handle returned by FakeTimers.schedule()."""

    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeTimers:
    """Manual clock and scheduler for deterministic debounce tests."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start
        self.handles: List[FakeHandle] = []

    def clock(self) -> float:
        return self.now

    def schedule(self, delay: float, callback: Callable[[], None]) -> FakeHandle:
        handle = FakeHandle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def live(self) -> List[FakeHandle]:
        return [h for h in self.handles if not h.cancelled and h.callback is not None]

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due timers in deadline order."""
        target = self.now + seconds
        while True:
            due = [h for h in self.live if h.when <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self.now = max(self.now, handle.when)
            callback, handle.callback = handle.callback, None
            callback()
        self.now = target


def non_empty(value: Any, data: Any) -> ValidityBag:
    if value:
        return ValidityBag(True)
    return ValidityBag(False, "Required")


def min_length_bool(length: int) -> Callable[[Any, Any], bool]:
    return lambda value, data: len(value or "") >= length


def same_as_password(value: Any, data: Dict[str, Any]) -> ValidityBag:
    if value == data.get("password"):
        return ValidityBag(True)
    return ValidityBag(False, "Passwords do not match")


class ControlledAsync:
    """
    Async validator whose results are released by the test. Every call gets its
    own future, so completion order is fully under test control.
    """

    def __init__(self) -> None:
        self.calls: List[Any] = []
        self.futures: List[asyncio.Future] = []

    def __call__(self, value: Any) -> asyncio.Future:
        future = asyncio.get_running_loop().create_future()
        self.calls.append(value)
        self.futures.append(future)
        return future

    def resolve(self, index: int, result: Any) -> None:
        self.futures[index].set_result(result)

    def fail(self, index: int, error: Exception) -> None:
        self.futures[index].set_exception(error)


async def always_valid(value: Any) -> Valid:
    return Valid(True)


class FakeSubmitEvent:
    """Stand-in for a UI submit event."""

    def __init__(self, default_prevented: bool = False) -> None:
        self.default_prevented = default_prevented
        self.prevent_calls = 0

    def prevent_default(self) -> None:
        self.prevent_calls += 1
        self.default_prevented = True


class FakeInputEvent:
    """Stand-in for a UI input event carrying target.value."""

    class _Target:
        def __init__(self, value: Any) -> None:
            self.value = value

    def __init__(self, value: Any) -> None:
        self.target = self._Target(value)
