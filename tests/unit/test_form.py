# tests/unit/test_form.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from dataclasses import dataclass
from unittest.mock import MagicMock

import pytest

from formstate import Form, FormConfig, LoggingHook, Strategy
from formstate.core.accessors import AttributeAccessor
from formstate.core.errors import ConfigurationError
from formstate.core.results import ValidityBag
from formstate.core.validators import FieldValidator
from tests.fakes import ControlledAsync, FakeInputEvent, FakeSubmitEvent, non_empty


@pytest.fixture
def make_form(initial_data, fake_timers):
    def _make(validators, on_submit=None, **config):
        return Form(
            initial_data,
            validators,
            on_submit or MagicMock(return_value=None),
            config=FormConfig(**config),
            clock=fake_timers.clock,
            scheduler=fake_timers.schedule,
        )

    return _make


def test_on_change_extracts_value_from_ui_event(make_form):
    form = make_form({"name": FieldValidator(non_empty)}, strategy=Strategy.ON_FIRST_CHANGE)
    form.on_change("name", FakeInputEvent("Ann"))

    assert form.data["name"] == "Ann"
    assert form.result_of("name") == ValidityBag(True)
    assert form.is_emitted("name")


def test_on_change_accepts_plain_values(make_form):
    form = make_form({"name": FieldValidator(non_empty)})
    form.on_change("notes", "free text")

    assert form.data["notes"] == "free text"


def test_on_blur_validates_under_blur_strategies(make_form):
    form = make_form({"name": FieldValidator(non_empty)}, strategy=Strategy.ON_FIRST_BLUR)
    form.on_change("name", FakeInputEvent(""))
    assert form.result_of("name") is None

    form.on_blur("name", FakeInputEvent(""))
    assert form.result_of("name") == ValidityBag(False, "Required")


def test_on_submit_prevents_default_once(make_form):
    form = make_form({"name": FieldValidator(non_empty)})
    event = FakeSubmitEvent()
    form.on_submit(event)

    assert event.prevent_calls == 1
    assert form.submitted_once


def test_on_submit_skips_prevent_default_if_already_prevented(make_form):
    form = make_form({"name": FieldValidator(non_empty)})
    event = FakeSubmitEvent(default_prevented=True)
    form.on_submit(event)

    assert event.prevent_calls == 0
    assert form.submitted_once


def test_is_validating_reflects_scheduled_async_call(make_form):
    form = make_form({"email": FieldValidator(non_empty, validate_async=ControlledAsync())})
    form.change("email", "a@b.com")

    assert form.is_validating("email")
    assert form.result_of("email") is None
    assert not form.is_validating("name")


def test_submit_and_reset(make_form, initial_data):
    on_submit = MagicMock(return_value=None)
    form = make_form({"name": FieldValidator(non_empty)}, on_submit=on_submit)
    form.change("name", "Ann")
    form.submit()

    assert form.is_submitting
    on_submit.assert_called_once()

    form.reset()
    assert form.data == initial_data
    assert not form.is_submitting
    assert not form.submitted_once


def test_blur_without_event_uses_stored_value(make_form):
    form = make_form({"name": FieldValidator(non_empty)}, strategy=Strategy.ON_FIRST_BLUR)
    form.change("name", "Ann")
    form.blur("name")

    assert form.result_of("name") == ValidityBag(True)


def test_invalid_config_is_rejected(make_form):
    with pytest.raises(ConfigurationError):
        make_form({"name": FieldValidator(non_empty)}, strategy="on_every_keystroke")


def test_config_strategy_accepts_names(make_form):
    form = make_form({"name": FieldValidator(non_empty)}, strategy="on_first_change")
    form.change("name", "")

    assert form.result_of("name") == ValidityBag(False, "Required")


def test_attribute_accessor_on_dataclass_state(fake_timers):
    @dataclass(frozen=True)
    class Signup:
        username: str = ""
        nickname: str = ""

    initial = Signup()
    form = Form(
        initial,
        {"username": FieldValidator(non_empty)},
        MagicMock(return_value=None),
        config=FormConfig(strategy=Strategy.ON_FIRST_CHANGE),
        accessor=AttributeAccessor(),
        clock=fake_timers.clock,
        scheduler=fake_timers.schedule,
    )
    form.change("username", "ann")

    assert form.data == Signup(username="ann")
    assert form.result_of("username") == ValidityBag(True)

    form.reset()
    assert form.data is initial


def test_logging_hook_sees_dispatched_events(initial_data, fake_timers, caplog):
    form = Form(
        initial_data,
        {"name": FieldValidator(non_empty)},
        MagicMock(return_value=None),
        config=FormConfig(strategy=Strategy.ON_FIRST_CHANGE),
        hooks=[LoggingHook(level=20)],
        clock=fake_timers.clock,
        scheduler=fake_timers.schedule,
    )
    with caplog.at_level(20, logger="formstate.events"):
        form.change("name", "Ann")

    assert "Change" in caplog.text


def test_change_outside_event_loop_does_not_leave_field_validating(initial_data):
    form = Form(
        initial_data,
        {"email": FieldValidator(non_empty, validate_async=ControlledAsync())},
        MagicMock(return_value=None),
        config=FormConfig(strategy=Strategy.ON_FIRST_CHANGE),
    )

    with pytest.raises(RuntimeError):
        form.change("email", "a@b.com")

    assert not form.is_validating("email")
    assert form.data["email"] == ""
    assert form.result_of("email") is None
