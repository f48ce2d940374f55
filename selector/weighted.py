"""Weighted selector - ranks models by a weighted sum of normalized metrics."""

import logging
from typing import List, Optional, Sequence, Tuple

from .base import Selector, ModelScore, ScoredModel, require_catalog
from .profile import ModelProfile
from .weights import PriorityWeights

logger = logging.getLogger(__name__)


def _bounds(values: List[float]) -> Tuple[float, float]:
    return min(values), max(values)


def normalize(value: float, low: float, high: float, invert: bool = False) -> float:
    """Map value into [0, 1] relative to the catalog range.

    With invert=True lower raw values score closer to 1. A range
    where every candidate ties carries no signal, so it scores 1.
    """
    if high == low:
        return 1.0
    fraction = (value - low) / (high - low)
    return 1.0 - fraction if invert else fraction


def score_model(
    model: ModelProfile,
    weights: PriorityWeights,
    catalog: Sequence[ModelProfile]
) -> ModelScore:
    """Score one model relative to the whole catalog."""
    require_catalog(catalog)

    min_cost, max_cost = _bounds([m.cost_per_1k_tokens for m in catalog])
    min_latency, max_latency = _bounds([m.base_latency_ms for m in catalog])
    min_quality, max_quality = _bounds([m.quality for m in catalog])

    norm_cost = normalize(model.cost_per_1k_tokens, min_cost, max_cost, invert=True)
    norm_latency = normalize(model.base_latency_ms, min_latency, max_latency, invert=True)
    norm_quality = normalize(model.quality, min_quality, max_quality)

    combined = (
        norm_cost * weights.cost +
        norm_latency * weights.latency +
        norm_quality * weights.quality
    )
    return ModelScore(
        combined=combined,
        norm_cost=norm_cost,
        norm_latency=norm_latency,
        norm_quality=norm_quality
    )


def rank_models(
    catalog: Sequence[ModelProfile],
    weights: PriorityWeights
) -> List[ScoredModel]:
    """Rank the catalog best first.

    sorted() is stable, so on an exact tie the first-listed model wins.
    """
    require_catalog(catalog)
    scored = [ScoredModel(model, score_model(model, weights, catalog)) for model in catalog]
    return sorted(scored, key=lambda s: s.score.combined, reverse=True)


class WeightedSelector(Selector):
    """Selector that trades cost, latency and quality off by weight.

    Every metric is normalized across the full catalog so that
    higher is better, then combined with the priority weights.
    """

    def __init__(self, weights: Optional[PriorityWeights] = None, name: str = "weighted"):
        super().__init__(name=name)
        self.weights = weights or PriorityWeights()

    def rank(self, catalog: Sequence[ModelProfile]) -> List[ScoredModel]:
        return rank_models(catalog, self.weights)

    def _log_selection(self, best: ScoredModel, ranked: List[ScoredModel]):
        logger.debug(
            "[%s] Selected %s (score %.3f, %s) out of %d",
            self.name, best.model, best.score.combined, self.weights, len(ranked)
        )

    def get_summary(self) -> dict:
        summary = super().get_summary()
        summary['weights'] = self.weights.to_dict()
        return summary
