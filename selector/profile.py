"""Model profile for selection decisions."""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass(frozen=True)
class ModelProfile:
    """Static catalog entry for a routable model.

    Used by selectors and the estimator without requiring
    live benchmarking. Quality is on a domain-defined scale
    (the default catalog uses 1-10).
    """
    id: str
    name: str
    quality: float
    base_latency_ms: float
    cost_per_1k_tokens: float

    def __post_init__(self):
        if not self.id:
            raise ValueError("Model profile requires a non-empty id")
        if self.base_latency_ms < 0:
            raise ValueError(f"Model '{self.id}': base_latency_ms must be non-negative")
        if self.cost_per_1k_tokens < 0:
            raise ValueError(f"Model '{self.id}': cost_per_1k_tokens must be non-negative")

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelProfile":
        try:
            model_id = data['id']
            return cls(
                id=model_id,
                name=data.get('name', model_id),
                quality=float(data['quality']),
                base_latency_ms=float(data['base_latency_ms']),
                cost_per_1k_tokens=float(data['cost_per_1k_tokens']),
            )
        except KeyError as e:
            raise ValueError(f"Model profile missing field: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'quality': self.quality,
            'base_latency_ms': self.base_latency_ms,
            'cost_per_1k_tokens': self.cost_per_1k_tokens,
        }
