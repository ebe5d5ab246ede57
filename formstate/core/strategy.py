# formstate/core/strategy.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import re
from enum import Enum, auto
from typing import Union

from formstate.core.errors import ConfigurationError


class Strategy(Enum):
    """Defines when a not-yet-emitted field is allowed to validate.

    Once a field has emitted a result, or the form has been submitted once,
    every field behaves as ON_FIRST_CHANGE regardless of its configured strategy.
    """

    ON_FIRST_CHANGE = auto()  # Validate on every change
    ON_FIRST_SUCCESS = auto()  # Validate on change, commit only valid results
    ON_FIRST_BLUR = auto()  # Ignore changes, validate on first blur
    ON_FIRST_SUCCESS_OR_FIRST_BLUR = auto()  # ON_FIRST_SUCCESS plus unconditional blur
    ON_SUBMIT = auto()  # Ignore changes and blurs until the first submit

    @classmethod
    def parse(cls, name: Union[str, "Strategy"]) -> "Strategy":
        """
        Resolve a strategy from its member name in any common spelling:
        ``"ON_FIRST_BLUR"``, ``"on_first_blur"`` or ``"OnFirstBlur"``.

        :raises ConfigurationError: If the name matches no strategy.
        """
        if isinstance(name, cls):
            return name
        key = re.sub(r"(?<=[a-z])(?=[A-Z])", "_", str(name).strip()).upper()
        try:
            return cls[key]
        except KeyError:
            raise ConfigurationError(f"Unknown validation strategy: {name!r}") from None


class Trigger(Enum):
    """What a Change event does to a field with a validator."""

    COMMIT = auto()  # Validate now, store whatever comes out
    COMMIT_IF_VALID = auto()  # Validate now, drop invalid results silently
    SKIP = auto()  # Only update domain data


DEFAULT_STRATEGY = Strategy.ON_FIRST_SUCCESS_OR_FIRST_BLUR


def change_trigger(strategy: Strategy, emitted: bool, submitted_once: bool) -> Trigger:
    """
    Decide how a Change event treats a field. First matching rule wins.

    :param strategy: The field's effective strategy.
    :param emitted: Whether the field has committed a result since the last reset.
    :param submitted_once: Whether the form has gone through a submit.
    """
    if emitted or submitted_once:
        return Trigger.COMMIT
    if strategy is Strategy.ON_FIRST_CHANGE:
        return Trigger.COMMIT
    if strategy in (Strategy.ON_FIRST_SUCCESS, Strategy.ON_FIRST_SUCCESS_OR_FIRST_BLUR):
        return Trigger.COMMIT_IF_VALID
    return Trigger.SKIP


def validates_on_blur(strategy: Strategy) -> bool:
    """Return True if a blur may validate a not-yet-emitted field."""
    return strategy in (Strategy.ON_FIRST_BLUR, Strategy.ON_FIRST_SUCCESS_OR_FIRST_BLUR)
