# formstate/core/validators.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from formstate.core.strategy import Strategy
from formstate.interfaces.types import AsyncValidate, Field, SyncValidate


@dataclass(frozen=True)
class FieldValidator:
    """
    Validation configuration for one field.

    :param validate: Synchronous check, called as validate(value, data).
    :param validate_async: Optional async check, called as validate_async(value)
        once the sync check passes and the debounce interval elapses.
    :param strategy: Overrides the form-level strategy for this field.
    :param dependents: Fields re-validated after this one validates, if they
        already emitted a result.
    :param debounce_ms: Overrides the form-level debounce interval.
    """

    validate: SyncValidate
    validate_async: Optional[AsyncValidate] = None
    strategy: Optional[Strategy] = None
    dependents: Sequence[Field] = ()
    debounce_ms: Optional[int] = None

    @property
    def has_async(self) -> bool:
        return self.validate_async is not None
