"""
Core package providing the pure, synchronous parts of the engine.

Architecture:
- Validation vocabulary (results, strategies, validator configuration)
- Immutable per-field containers and the engine state record
- The transition function turning (state, event) into (state, effects)

Design Patterns:
- Reducer for state transitions
- Command Pattern for effects
- Strategy Pattern for validation timing

Cross-cutting:
- Error handling with a single exception hierarchy
- No I/O, timers or awaits: effects are returned, never performed
"""

# Import order matters to avoid circular dependencies
from .errors import (
    ConfigurationError,
    FormStateError,
    InternalEngineError,
    InvalidResultError,
    UnknownEventError,
)
from .results import Result, Valid, ValidityBag, as_result, is_invalid, is_valid, message_of
from .strategy import DEFAULT_STRATEGY, Strategy, Trigger, change_trigger, validates_on_blur
from .containers import FieldMap, FieldsSet, ResultsMap
from .events import (
    ApplyAsyncResult,
    AsyncValidationFailed,
    Blur,
    CancelDebouncedCalls,
    Change,
    Effect,
    Event,
    HandleSubmissionError,
    InvokeAsyncValidator,
    InvokeSubmitCallback,
    Reset,
    ScheduleDebouncedCall,
    Submit,
    TriggerAsyncValidation,
)
from .state import EngineState, Step
from .accessors import AttributeAccessor, MappingAccessor, default_extract_value
from .validators import FieldValidator
from .config import FormConfig
from .hooks import HookManager, LoggingHook
from .state_machine import FormStateMachine

__all__ = [
    # Errors
    "ConfigurationError",
    "FormStateError",
    "InternalEngineError",
    "InvalidResultError",
    "UnknownEventError",
    # Vocabulary
    "Result",
    "Valid",
    "ValidityBag",
    "as_result",
    "is_invalid",
    "is_valid",
    "message_of",
    "DEFAULT_STRATEGY",
    "Strategy",
    "Trigger",
    "change_trigger",
    "validates_on_blur",
    # Containers and state
    "FieldMap",
    "FieldsSet",
    "ResultsMap",
    "EngineState",
    "Step",
    # Events and effects
    "ApplyAsyncResult",
    "AsyncValidationFailed",
    "Blur",
    "CancelDebouncedCalls",
    "Change",
    "Effect",
    "Event",
    "HandleSubmissionError",
    "InvokeAsyncValidator",
    "InvokeSubmitCallback",
    "Reset",
    "ScheduleDebouncedCall",
    "Submit",
    "TriggerAsyncValidation",
    # Configuration
    "AttributeAccessor",
    "MappingAccessor",
    "default_extract_value",
    "FieldValidator",
    "FormConfig",
    "HookManager",
    "LoggingHook",
    "FormStateMachine",
]
