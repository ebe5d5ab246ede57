"""formstate: field-level validation engine for interactive forms

This package decides, per field, when to run synchronous and debounced
asynchronous validation, stores per-field results, re-validates dependent
fields and gates submission until every field passes.

Responsibilities:
    - Strategy-driven choice of when a field validates
    - Debounced async validation with stale-result rejection
    - Dependent-field cascades
    - Submission readiness and reset

Interactions:
    - Presentation layer through Form (change, blur, submit)
    - Consumer domain state through a pluggable accessor
    - Async validators through injected awaitables
    - Logging system for diagnostics

Cross-cutting Concerns:
    Concurrency:
        - Every transition runs through one serialized dispatch queue
        - Timers and async validators resume by dispatching new events

    Error Handling:
        - Structured error hierarchy rooted at FormStateError
        - Invalid input is data, never an exception

    Logging:
        - Module-level loggers under the "formstate" namespace
        - Silent unless the application configures logging
"""

import logging

from formstate.core import (
    AttributeAccessor,
    ConfigurationError,
    FieldValidator,
    FormConfig,
    FormStateError,
    InternalEngineError,
    LoggingHook,
    MappingAccessor,
    Strategy,
    Valid,
    ValidityBag,
    is_valid,
)
from formstate.form import Form
from formstate.runtime import SubmitNotifiers

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "AttributeAccessor",
    "ConfigurationError",
    "FieldValidator",
    "Form",
    "FormConfig",
    "FormStateError",
    "InternalEngineError",
    "LoggingHook",
    "MappingAccessor",
    "Strategy",
    "SubmitNotifiers",
    "Valid",
    "ValidityBag",
    "is_valid",
]
