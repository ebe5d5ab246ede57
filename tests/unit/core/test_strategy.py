# tests/unit/core/test_strategy.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from formstate.core.errors import ConfigurationError
from formstate.core.strategy import Strategy, Trigger, change_trigger, validates_on_blur


@pytest.mark.parametrize(
    "strategy,expected",
    [
        (Strategy.ON_FIRST_CHANGE, Trigger.COMMIT),
        (Strategy.ON_FIRST_SUCCESS, Trigger.COMMIT_IF_VALID),
        (Strategy.ON_FIRST_SUCCESS_OR_FIRST_BLUR, Trigger.COMMIT_IF_VALID),
        (Strategy.ON_FIRST_BLUR, Trigger.SKIP),
        (Strategy.ON_SUBMIT, Trigger.SKIP),
    ],
)
def test_change_trigger_for_fresh_field(strategy, expected):
    assert change_trigger(strategy, emitted=False, submitted_once=False) is expected


@pytest.mark.parametrize("strategy", list(Strategy))
def test_emitted_or_submitted_fields_always_commit(strategy):
    assert change_trigger(strategy, emitted=True, submitted_once=False) is Trigger.COMMIT
    assert change_trigger(strategy, emitted=False, submitted_once=True) is Trigger.COMMIT


def test_blur_policy():
    assert validates_on_blur(Strategy.ON_FIRST_BLUR)
    assert validates_on_blur(Strategy.ON_FIRST_SUCCESS_OR_FIRST_BLUR)
    assert not validates_on_blur(Strategy.ON_FIRST_CHANGE)
    assert not validates_on_blur(Strategy.ON_FIRST_SUCCESS)
    assert not validates_on_blur(Strategy.ON_SUBMIT)


@pytest.mark.parametrize(
    "name",
    ["ON_FIRST_SUCCESS_OR_FIRST_BLUR", "on_first_success_or_first_blur", "OnFirstSuccessOrFirstBlur"],
)
def test_parse_accepts_common_spellings(name):
    assert Strategy.parse(name) is Strategy.ON_FIRST_SUCCESS_OR_FIRST_BLUR


def test_parse_rejects_unknown_names():
    with pytest.raises(ConfigurationError, match="whenever"):
        Strategy.parse("whenever")
