"""Immutable application state of a router session."""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from config.loader import RouterDefaults
from selector import PriorityWeights

from .history import RunRecord, HISTORY_CAPACITY


@dataclass(frozen=True)
class AppState:
    prompt: str
    input_tokens: int
    max_tokens: int
    weights: PriorityWeights
    rules_name: str
    selected_model_id: Optional[str] = None
    history: Tuple[RunRecord, ...] = ()
    history_capacity: int = HISTORY_CAPACITY

    @classmethod
    def initial(cls, defaults: Optional[RouterDefaults] = None) -> "AppState":
        defaults = defaults or RouterDefaults()
        return cls(
            prompt=defaults.prompt,
            input_tokens=defaults.input_tokens,
            max_tokens=defaults.max_tokens,
            weights=defaults.weights,
            rules_name=defaults.rules_name,
            history_capacity=defaults.history_capacity,
        )

    @property
    def manual_selection(self) -> bool:
        return self.selected_model_id is not None

    def evolve(self, **changes) -> "AppState":
        return replace(self, **changes)
