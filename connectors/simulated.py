"""Simulated LLM connector: waits out the estimated latency and fabricates a reply."""

import logging
import random
import threading
from typing import Optional, Dict, Any

from estimator.estimator import estimate_cost, round_half_up
from selector.profile import ModelProfile

from .base import LLMConnector, RunCancelled
from .clock import SystemClock

logger = logging.getLogger(__name__)

SAMPLE_OUTPUT = (
    '"Introducing our easy-to-use wireless charger: fast, compact, '
    'and designed for daily life..."'
)
MIN_GENERATED_TOKENS = 10
GENERATED_FRACTION = 0.8


class SimulatedConnector(LLMConnector):
    """Stand-in backend that performs no real work.

    Translation:
    - Input: {"model": ModelProfile, "prompt": str, "max_tokens": int,
              "latency_ms": int, "cancel": Optional[threading.Event]}
    - Output: {"output": str, "tokens": int, "cost": float}
    """

    def __init__(self, clock: Optional[Any] = None, random_source: Optional[Any] = None):
        self.clock = clock or SystemClock()
        self.random_source = random_source if random_source is not None else random.Random()

    def _translate_input(self, data: Dict[str, Any]) -> Dict[str, Any]:
        model = data.get("model")
        if not isinstance(model, ModelProfile):
            raise ValueError("Simulated run requires a ModelProfile under 'model'")

        max_tokens = int(data.get("max_tokens", 120))
        if max_tokens < 0:
            raise ValueError(f"max_tokens must be non-negative, got {max_tokens}")

        return {
            "model": model,
            "prompt": data.get("prompt", ""),
            "max_tokens": max_tokens,
            "latency_ms": data.get("latency_ms", model.base_latency_ms),
            "cancel": data.get("cancel"),
        }

    def _invoke(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        model: ModelProfile = payload["model"]
        cancel: Optional[threading.Event] = payload["cancel"]

        logger.debug("[connector:simulated] %s sleeping %sms", model, payload["latency_ms"])
        if not self.clock.sleep(payload["latency_ms"] / 1000, cancel):
            raise RunCancelled(f"Run on {model} cancelled")

        max_tokens = payload["max_tokens"]
        generated = min(
            max_tokens,
            round_half_up(self.random_source.random() * max_tokens * GENERATED_FRACTION) + MIN_GENERATED_TOKENS
        )
        return {"model": model, "tokens": generated}

    def _translate_output(self, response: Dict[str, Any]) -> Dict[str, Any]:
        model: ModelProfile = response["model"]
        tokens = response["tokens"]
        text = f"({model.name}) Generated ~{tokens} tokens. Example output:\n{SAMPLE_OUTPUT}"
        return {
            "output": text,
            "tokens": tokens,
            "cost": estimate_cost(tokens, model.cost_per_1k_tokens),
        }
