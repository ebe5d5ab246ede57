# formstate/core/hooks.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from formstate.core.events import Event
    from formstate.interfaces.protocols import EngineHook

logger = logging.getLogger(__name__)


class HookManager:
    """
    Manages the registration and execution of hooks that observe the engine
    (on_event, on_error). Users can attach logging, monitoring, or custom side
    effects without altering core logic.
    """

    def __init__(self, hooks: Optional[List["EngineHook"]] = None) -> None:
        """
        Initialize with an optional list of hook objects.
        """
        self._hooks: List["EngineHook"] = list(hooks or [])

    @property
    def hooks(self) -> List["EngineHook"]:
        return list(self._hooks)

    def register_hook(self, hook: "EngineHook") -> None:
        """
        Add a new hook to the manager's list of hooks.

        :param hook: An object implementing any of the EngineHook methods.
        """
        self._hooks.append(hook)

    def execute_on_event(self, event: "Event", previous: Any, current: Any) -> None:
        """
        Run all hooks' on_event logic after an event was processed.
        A failing hook is logged and does not stop the others.
        """
        for hook in self._hooks:
            if hasattr(hook, "on_event"):
                try:
                    hook.on_event(event, previous, current)
                except Exception:
                    logger.exception("Hook %r failed in on_event", hook)

    def execute_on_error(self, error: Exception) -> None:
        """
        Run all hooks' on_error logic when an exception occurs.
        """
        for hook in self._hooks:
            if hasattr(hook, "on_error"):
                try:
                    hook.on_error(error)
                except Exception:
                    logger.exception("Hook %r failed in on_error", hook)


class LoggingHook:
    """Logs every processed event and every error."""

    def __init__(self, logger_name: str = "formstate.events", level: int = logging.DEBUG) -> None:
        self.logger = logging.getLogger(logger_name)
        self.level = level

    def on_event(self, event: "Event", previous: Any, current: Any) -> None:
        if previous is current:
            self.logger.log(self.level, "%r left the state unchanged", event)
        else:
            self.logger.log(
                self.level,
                "%r -> validating=%r emitted=%r submitting=%s",
                event,
                current.validating,
                current.emitted,
                current.submitting,
            )

    def on_error(self, error: Exception) -> None:
        self.logger.error("Engine error: %s", error)
