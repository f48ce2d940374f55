"""Cost and latency estimation for a single request."""

import math
import random
from dataclasses import dataclass
from typing import Dict, Any, Optional

from selector.profile import ModelProfile

MAX_OUTPUT_TOKENS = 2000
LATENCY_JITTER = 0.15
COST_DECIMALS = 6


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def estimate_tokens(input_tokens: int, max_tokens: int, output_cap: int = MAX_OUTPUT_TOKENS) -> int:
    """Worst-case token count: input plus the capped requested output, at least 1."""
    return max(1, input_tokens + min(output_cap, max_tokens))


def estimate_cost(tokens: int, cost_per_1k_tokens: float) -> float:
    return round((tokens / 1000) * cost_per_1k_tokens, COST_DECIMALS)


def estimate_latency(base_latency_ms: float, draw: float, jitter: float = LATENCY_JITTER) -> int:
    """Base latency plus up to `jitter` of it, scaled by a draw in [0, 1)."""
    return round_half_up(base_latency_ms + draw * base_latency_ms * jitter)


@dataclass(frozen=True)
class Estimate:
    """Predicted size, price and latency of one request."""
    tokens: int
    cost: float
    latency_ms: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tokens': self.tokens,
            'cost': self.cost,
            'latency_ms': self.latency_ms,
        }


class CostEstimator:
    """Estimates tokens, cost and latency for a model.

    Latency jitter is drawn from `random_source`, any object with
    a random() method returning a float in [0, 1). Tests pass a
    seeded or scripted source to pin the result.
    """

    def __init__(
        self,
        random_source: Optional[Any] = None,
        jitter: float = LATENCY_JITTER,
        output_cap: int = MAX_OUTPUT_TOKENS
    ):
        if jitter < 0:
            raise ValueError("jitter must be non-negative")
        self.random_source = random_source if random_source is not None else random.Random()
        self.jitter = jitter
        self.output_cap = output_cap

    def estimate(self, model: ModelProfile, input_tokens: int, max_tokens: int) -> Estimate:
        tokens = estimate_tokens(input_tokens, max_tokens, self.output_cap)
        return Estimate(
            tokens=tokens,
            cost=estimate_cost(tokens, model.cost_per_1k_tokens),
            latency_ms=estimate_latency(model.base_latency_ms, self.random_source.random(), self.jitter)
        )
