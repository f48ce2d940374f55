from .estimator import (
    CostEstimator,
    Estimate,
    estimate_tokens,
    estimate_cost,
    estimate_latency,
    round_half_up,
    MAX_OUTPUT_TOKENS,
    LATENCY_JITTER,
)

__all__ = [
    'CostEstimator',
    'Estimate',
    'estimate_tokens',
    'estimate_cost',
    'estimate_latency',
    'round_half_up',
    'MAX_OUTPUT_TOKENS',
    'LATENCY_JITTER',
]
