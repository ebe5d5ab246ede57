# formstate/core/config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from formstate.core.errors import ConfigurationError
from formstate.core.strategy import DEFAULT_STRATEGY, Strategy

DEFAULT_DEBOUNCE_MS = 700
DEFAULT_ASYNC_FAILURE_MESSAGE = "Validation could not be completed."


@dataclass(frozen=True)
class FormConfig:
    """
    Engine-wide settings.

    :param strategy: Default strategy for fields without an override.
    :param debounce_ms: Quiet interval before an async validator runs.
    :param async_timeout_ms: If set, async validators that take longer fail.
    :param async_failure_message: Message stored when an async validator fails.
    """

    strategy: Strategy = DEFAULT_STRATEGY
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    async_timeout_ms: Optional[int] = None
    async_failure_message: str = DEFAULT_ASYNC_FAILURE_MESSAGE

    def __post_init__(self) -> None:
        if not isinstance(self.strategy, Strategy):
            object.__setattr__(self, "strategy", Strategy.parse(self.strategy))
        if self.debounce_ms < 0:
            raise ConfigurationError(f"debounce_ms must be >= 0, got {self.debounce_ms}")
        if self.async_timeout_ms is not None and self.async_timeout_ms <= 0:
            raise ConfigurationError(f"async_timeout_ms must be > 0, got {self.async_timeout_ms}")

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000

    @property
    def async_timeout_seconds(self) -> Optional[float]:
        if self.async_timeout_ms is None:
            return None
        return self.async_timeout_ms / 1000

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> "FormConfig":
        """
        Build a config from a plain mapping, e.g. a parsed settings file.
        Unknown keys are rejected so that typos do not pass silently.

        :raises ConfigurationError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(settings) - known
        if unknown:
            raise ConfigurationError(f"Unknown form settings: {', '.join(sorted(unknown))}")
        return cls(**dict(settings))
