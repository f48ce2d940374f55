"""Selector module for model selection strategies."""

from .base import Selector, CatalogError, ModelScore, ScoredModel, find_model
from .profile import ModelProfile
from .weights import Metric, PriorityWeights, DEFAULT_PRESETS
from .weighted import WeightedSelector, normalize, score_model, rank_models
from .greedy import GreedySelector

__all__ = [
    'Selector',
    'CatalogError',
    'ModelScore',
    'ScoredModel',
    'find_model',
    'ModelProfile',
    'Metric',
    'PriorityWeights',
    'DEFAULT_PRESETS',
    'WeightedSelector',
    'normalize',
    'score_model',
    'rank_models',
    'GreedySelector',
]
