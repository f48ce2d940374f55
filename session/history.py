"""Run records and the bounded, most-recent-first run history."""

from dataclasses import dataclass
from typing import Dict, Any, Tuple

from estimator import Estimate
from selector import PriorityWeights

HISTORY_CAPACITY = 50
PROMPT_PREVIEW_CHARS = 250


@dataclass(frozen=True)
class RunRecord:
    """Outcome of one simulated prompt run."""
    id: int
    prompt: str
    model: str
    estimate: Estimate
    actual_tokens: int
    actual_cost: float
    timestamp: str
    weights: PriorityWeights
    selected_manually: bool
    rules_name: str
    response_text: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'prompt': self.prompt,
            'model': self.model,
            'estimate': self.estimate.to_dict(),
            'actual': {'tokens': self.actual_tokens, 'cost': self.actual_cost},
            'timestamp': self.timestamp,
            'priorities': self.weights.to_dict(),
            'selected_manually': self.selected_manually,
            'rules_name': self.rules_name,
            'response_text': self.response_text,
        }


def preview_prompt(prompt: str) -> str:
    return prompt[:PROMPT_PREVIEW_CHARS]


def push_record(
    history: Tuple[RunRecord, ...],
    record: RunRecord,
    capacity: int = HISTORY_CAPACITY
) -> Tuple[RunRecord, ...]:
    """Prepend record, evicting the oldest entries beyond capacity."""
    return ((record,) + history)[:capacity]
