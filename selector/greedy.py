"""Greedy selector - picks best model by single metric."""

import logging

from .base import ScoredModel
from .weighted import WeightedSelector
from .weights import Metric, PriorityWeights

logger = logging.getLogger(__name__)


class GreedySelector(WeightedSelector):
    """Greedy selector that optimizes for a single metric.

    Simple but effective - picks the cheapest, fastest or
    highest-quality model. Scoring uses one-hot weights, so
    ties are broken by catalog order like any weighted ranking.
    """

    def __init__(self, strategy: Metric = Metric.COST):
        super().__init__(weights=PriorityWeights.only(strategy), name=f"greedy-{strategy.value}")
        self.strategy = strategy

    def _log_selection(self, best: ScoredModel, ranked):
        model = best.model
        if self.strategy == Metric.COST:
            metric = f"lowest cost: ${model.cost_per_1k_tokens}/1k"
        elif self.strategy == Metric.LATENCY:
            metric = f"lowest latency: {model.base_latency_ms:.0f}ms"
        else:
            metric = f"highest quality: {model.quality}"
        logger.debug("[%s] Selected %s (%s)", self.name, model, metric)

    def get_summary(self) -> dict:
        summary = super().get_summary()
        summary['strategy'] = self.strategy.value
        return summary
