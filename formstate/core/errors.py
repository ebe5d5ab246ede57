# formstate/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details


class FormStateError(Exception):
    """
    Base exception class for errors within the form validation engine.
    """


class ConfigurationError(FormStateError):
    """
    Raised when validators, strategies or engine settings are inconsistent.
    """


class InvalidResultError(FormStateError):
    """
    Raised when a validator returns something that is neither a bool nor a
    validation result.
    """

    def __init__(self, field, returned) -> None:
        super().__init__(f"Validator for field {field!r} returned {returned!r}, expected a validation result")
        self.field = field
        self.returned = returned


class InternalEngineError(FormStateError):
    """
    Raised when the engine reaches a state that can only come from a defect,
    e.g. a field with neither a stored nor a computable result during submit.
    """


class UnknownEventError(FormStateError):
    """
    Raised when the state machine is handed an event type it does not process.
    """
