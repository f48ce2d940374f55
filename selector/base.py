"""Base selector interface and scoring dataclasses."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Any, List, Optional, Sequence

from .profile import ModelProfile


class CatalogError(ValueError):
    """Model catalog is empty, malformed, or lacks a requested model."""
    pass


@dataclass(frozen=True)
class ModelScore:
    """Normalized metrics of one model, higher is better for all."""
    combined: float
    norm_cost: float
    norm_latency: float
    norm_quality: float

    def to_dict(self) -> Dict[str, float]:
        return {
            'combined': self.combined,
            'norm_cost': self.norm_cost,
            'norm_latency': self.norm_latency,
            'norm_quality': self.norm_quality,
        }


@dataclass(frozen=True)
class ScoredModel:
    """A catalog model paired with its score under some weights."""
    model: ModelProfile
    score: ModelScore

    def __str__(self) -> str:
        return f"{self.model} ({self.score.combined:.2f})"


def require_catalog(catalog: Sequence[ModelProfile]) -> None:
    """Fail fast on a catalog that cannot be normalized."""
    if not catalog:
        raise CatalogError("Model catalog is empty; at least one model is required")


def find_model(catalog: Sequence[ModelProfile], model_id: str) -> ModelProfile:
    for model in catalog:
        if model.id == model_id:
            return model
    known = ", ".join(m.id for m in catalog)
    raise CatalogError(f"Unknown model '{model_id}' (known: {known})")


class Selector(ABC):
    """Abstract base class for model selectors.

    Selectors rank a catalog of models and pick the best one
    according to their strategy (weighted, greedy).
    """

    def __init__(self, name: str):
        self.name = name
        self._last_selection: Optional[ModelProfile] = None

    @abstractmethod
    def rank(self, catalog: Sequence[ModelProfile]) -> List[ScoredModel]:
        """Score every model and order them best first.

        Args:
            catalog: Candidate models, in their listed order

        Returns:
            Scored models, best first; ties keep list order
        """
        pass

    def select(self, catalog: Sequence[ModelProfile]) -> ModelProfile:
        """Select the best model from the catalog."""
        ranked = self.rank(catalog)
        best = ranked[0]
        self._last_selection = best.model
        self._log_selection(best, ranked)
        return best.model

    def _log_selection(self, best: ScoredModel, ranked: List[ScoredModel]) -> None:
        """Hook for subclasses to report a selection."""
        pass

    def get_current(self) -> Optional[ModelProfile]:
        """Get the most recently selected model."""
        return self._last_selection

    def get_summary(self) -> Dict[str, Any]:
        return {
            'selector': self.name,
            'selected': str(self._last_selection) if self._last_selection else None,
        }

    def reset(self) -> None:
        """Reset selector state."""
        self._last_selection = None
