"""Priority weights steering the weighted selector."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Mapping


class Metric(Enum):
    """Metric a selector can optimize for."""
    COST = "cost"          # Minimize cost
    LATENCY = "latency"    # Minimize latency
    QUALITY = "quality"    # Maximize quality


@dataclass(frozen=True)
class PriorityWeights:
    """Weight triple applied to the normalized metrics.

    Weights are taken as-is: nothing forces them to sum to 1,
    so a combined score only compares against other models
    scored under the same weights.
    """
    cost: float = 0.33
    latency: float = 0.33
    quality: float = 0.34

    @classmethod
    def only(cls, metric: Metric) -> "PriorityWeights":
        """One-hot weights that rank purely on a single metric."""
        return cls(
            cost=1.0 if metric == Metric.COST else 0.0,
            latency=1.0 if metric == Metric.LATENCY else 0.0,
            quality=1.0 if metric == Metric.QUALITY else 0.0,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PriorityWeights":
        if not isinstance(data, Mapping):
            raise ValueError(f"Priority must be an object, got {type(data).__name__}")

        values = {}
        for metric in Metric:
            value = data.get(metric.value)
            # bool is an int subclass but never a meaningful weight
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Priority '{metric.value}' must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ValueError(f"Priority '{metric.value}' must be finite, got {value!r}")
            values[metric.value] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, float]:
        return {
            'cost': self.cost,
            'latency': self.latency,
            'quality': self.quality,
        }

    def __str__(self) -> str:
        return f"cost={self.cost:.2f} latency={self.latency:.2f} quality={self.quality:.2f}"


DEFAULT_PRESETS: Dict[str, PriorityWeights] = {
    "cost": PriorityWeights(cost=0.7, latency=0.2, quality=0.1),
    "latency": PriorityWeights(cost=0.1, latency=0.8, quality=0.1),
    "quality": PriorityWeights(cost=0.05, latency=0.15, quality=0.8),
    "balanced": PriorityWeights(cost=0.33, latency=0.33, quality=0.34),
}
