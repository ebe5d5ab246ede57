"""
Runtime package for timers and effect execution.

Architecture:
- Debouncers throttle async validators per field
- The registry wraps configured validators once
- The executor owns the engine state and performs effects

Cross-cutting:
- Single serialized dispatch queue
- asyncio for timers and async validators
"""

from .debouncer import Debouncer
from .registry import RegisteredValidator, ValidatorRegistry
from .executor import Executor, SubmitNotifiers

__all__ = ["Debouncer", "RegisteredValidator", "ValidatorRegistry", "Executor", "SubmitNotifiers"]
