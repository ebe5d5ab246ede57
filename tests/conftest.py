# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Dict, Optional

import pytest

from formstate.core.strategy import Strategy
from formstate.core.validators import FieldValidator
from tests.fakes import FakeTimers, non_empty


@pytest.fixture
def fake_timers() -> FakeTimers:
    return FakeTimers()


@pytest.fixture
def initial_data() -> Dict[str, Any]:
    return {"name": "", "email": "", "password": "", "confirm": "", "notes": ""}


@pytest.fixture
def validator_factory():
    """Build a FieldValidator with the common sync check and optional overrides."""

    def _factory(
        strategy: Optional[Strategy] = None,
        validate=non_empty,
        validate_async=None,
        dependents=(),
    ) -> FieldValidator:
        return FieldValidator(
            validate=validate,
            validate_async=validate_async,
            strategy=strategy,
            dependents=dependents,
        )

    return _factory


@pytest.fixture
def machine_factory(initial_data, fake_timers):
    """Returns a factory building a FormStateMachine over fake timers."""
    from formstate.core.config import FormConfig
    from formstate.core.state_machine import FormStateMachine
    from formstate.runtime.registry import ValidatorRegistry

    def _factory(validators, strategy: Strategy = Strategy.ON_FIRST_CHANGE, data=None, **config):
        registry = ValidatorRegistry(validators, clock=fake_timers.clock, scheduler=fake_timers.schedule)
        return FormStateMachine(
            registry,
            initial_data if data is None else data,
            config=FormConfig(strategy=strategy, **config),
        )

    return _factory
