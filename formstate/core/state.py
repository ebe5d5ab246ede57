# formstate/core/state.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable, NamedTuple, Tuple

from formstate.core.containers import FieldMap, FieldsSet, ResultsMap
from formstate.core.events import Effect


@dataclass(frozen=True)
class EngineState:
    """
    Complete state of one form.

    Invariants:
    - validating only holds fields whose validator has an async part.
    - results[f] is None while f is in validating.
    - f is in emitted iff f committed a result since the last reset.
    - submitting is True only between a passed submit check and the
      resolution of the external submit callback.
    """

    data: Any
    results: ResultsMap = field(default_factory=ResultsMap)
    validating: FieldsSet = field(default_factory=FieldsSet)
    submitting: bool = False
    submitted_once: bool = False
    emitted: FieldsSet = field(default_factory=FieldsSet)
    revisions: FieldMap = field(default_factory=FieldMap)

    @classmethod
    def initial(cls, data: Any, fields: Iterable[Hashable]) -> "EngineState":
        """
        Build the post-construction state for the given domain snapshot.
        Every configured field starts with no result and revision 0.
        """
        fields = list(fields)
        return cls(
            data=data,
            results=ResultsMap({f: None for f in fields}),
            revisions=FieldMap({f: 0 for f in fields}),
        )

    def revision(self, field_name: Hashable) -> int:
        return self.revisions.get(field_name, 0)


class Step(NamedTuple):
    """Outcome of processing one event: the next state plus effects to run."""

    state: EngineState
    effects: Tuple[Effect, ...] = ()
