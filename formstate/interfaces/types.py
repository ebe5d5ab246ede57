# formstate/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Awaitable, Callable, Hashable, Union

from formstate.core.results import Result

Field = Hashable
Value = Any
DomainState = Any

# Validator Types
ResultLike = Union[Result, bool]
SyncValidate = Callable[[Value, DomainState], ResultLike]
AsyncValidate = Callable[[Value], Awaitable[ResultLike]]

# Callback Types
ValueExtractor = Callable[[Field, Any], Value]
Notifier = Callable[[], None]
