"""Router session: owns the state and performs simulated runs."""

import logging
import random
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Any, Sequence

from config.loader import ConfigLoader, RouterDefaults
from connectors import SimulatedConnector, SystemClock
from estimator import CostEstimator, Estimate
from selector import (
    DEFAULT_PRESETS,
    ModelProfile,
    ModelScore,
    PriorityWeights,
    rank_models,
)
from selector.base import require_catalog

from .commands import RecordRun, RunPrompt, chosen_model, reduce
from .history import RunRecord, preview_prompt
from .state import AppState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardRow:
    """One model as the rendering surface shows it."""
    model: ModelProfile
    score: ModelScore
    estimate: Estimate
    auto_selected: bool
    chosen: bool


class RouterSession:
    """Single-user session around an immutable AppState.

    State changes go through dispatch(). Runs may overlap; each one
    records its result against the latest state under a lock, so
    concurrent runs never drop each other's history entries.
    """

    def __init__(
        self,
        catalog: Sequence[ModelProfile],
        defaults: Optional[RouterDefaults] = None,
        presets: Optional[Dict[str, PriorityWeights]] = None,
        estimator: Optional[CostEstimator] = None,
        connector: Optional[SimulatedConnector] = None,
        clock: Optional[Any] = None,
        random_source: Optional[Any] = None
    ):
        require_catalog(catalog)
        defaults = defaults or RouterDefaults()
        rng = random_source if random_source is not None else random.Random()

        self.catalog = tuple(catalog)
        self.presets = dict(presets or DEFAULT_PRESETS)
        self.clock = clock or SystemClock()
        self.estimator = estimator or CostEstimator(
            random_source=rng,
            jitter=defaults.latency_jitter,
            output_cap=defaults.max_output_tokens
        )
        self.connector = connector or SimulatedConnector(clock=self.clock, random_source=rng)

        self._lock = threading.Lock()
        self._state = AppState.initial(defaults)
        self._running = 0

    @classmethod
    def from_config(cls, loader: ConfigLoader, **kwargs) -> "RouterSession":
        return cls(
            catalog=loader.get_catalog(),
            defaults=loader.get_defaults(),
            presets=loader.get_presets(),
            **kwargs
        )

    @property
    def state(self) -> AppState:
        with self._lock:
            return self._state

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._running > 0

    def dispatch(self, command) -> AppState:
        """Apply a command; on error the state is left unchanged."""
        if isinstance(command, RunPrompt):
            self.run_prompt(cancel=command.cancel)
            return self.state

        with self._lock:
            self._state = reduce(self._state, command, self.catalog, self.presets)
            return self._state

    def auto_selected(self) -> ModelProfile:
        return rank_models(self.catalog, self.state.weights)[0].model

    def chosen(self) -> ModelProfile:
        return chosen_model(self.state, self.catalog)

    def dashboard(self) -> List[DashboardRow]:
        """Score and a fresh estimate for every model, in catalog order."""
        state = self.state
        ranked = rank_models(self.catalog, state.weights)
        scores = {s.model.id: s.score for s in ranked}
        auto = ranked[0].model
        chosen = chosen_model(state, self.catalog)

        return [
            DashboardRow(
                model=model,
                score=scores[model.id],
                estimate=self.estimator.estimate(model, state.input_tokens, state.max_tokens),
                auto_selected=model.id == auto.id,
                chosen=model.id == chosen.id,
            )
            for model in self.catalog
        ]

    def run_prompt(self, cancel: Optional[threading.Event] = None) -> RunRecord:
        """Run the current prompt against the simulated backend.

        Blocks for the estimated latency unless `cancel` is set first.

        Raises:
            RunCancelled: cancel was set before the simulated reply
        """
        with self._lock:
            state = self._state
            self._running += 1

        try:
            model = chosen_model(state, self.catalog)
            estimate = self.estimator.estimate(model, state.input_tokens, state.max_tokens)
            logger.info("[session] Running on %s (est. %sms, $%s)", model, estimate.latency_ms, estimate.cost)

            result = self.connector.generate(
                model,
                state.prompt,
                max_tokens=state.max_tokens,
                latency_ms=estimate.latency_ms,
                cancel=cancel
            )

            finished = self.clock.now()
            with self._lock:
                record = RunRecord(
                    id=self._next_record_id(finished),
                    prompt=preview_prompt(state.prompt),
                    model=model.name,
                    estimate=estimate,
                    actual_tokens=result["tokens"],
                    actual_cost=result["cost"],
                    timestamp=finished.isoformat(),
                    weights=state.weights,
                    selected_manually=state.manual_selection,
                    rules_name=state.rules_name,
                    response_text=result["output"],
                )
                self._state = reduce(self._state, RecordRun(record))
        finally:
            with self._lock:
                self._running -= 1

        logger.info("[session] %s generated %d tokens ($%s)", model, record.actual_tokens, record.actual_cost)
        return record

    def _next_record_id(self, finished) -> int:
        # epoch millis, bumped to stay unique within the history
        record_id = int(finished.timestamp() * 1000)
        if self._state.history and self._state.history[0].id >= record_id:
            record_id = self._state.history[0].id + 1
        return record_id
