#!/usr/bin/env python3
"""Batch of simulated prompt runs through a router session.

Run with:
    python -m benchmarks.run_prompts --selector greedy-cost --runs 20 --no-delay
"""

import sys
import json
import random
import argparse
import numpy as np
from datetime import datetime, timezone
from typing import Dict, List, Any, Optional

from tqdm import tqdm

from config import load_config
from selector import GreedySelector, Metric
from session import ApplyPreset, RouterSession, RunRecord, SelectModel, SetPrompt, SetTokenCounts

SELECTORS = ["weighted", "greedy-cost", "greedy-latency", "greedy-quality"]

SAMPLE_PROMPTS = [
    "Write a friendly product description for a wireless charger.",
    "Summarize the attached meeting notes in three bullet points.",
    "Translate 'good morning' into French, German and Spanish.",
    "Draft a polite follow-up email to a customer about a late delivery.",
    "List five names for a coffee shop near a university campus.",
]


class InstantClock:
    """Clock that skips simulated delays but still honours cancellation."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def sleep(self, seconds: float, cancel=None) -> bool:
        return not (cancel is not None and cancel.is_set())


def create_session(
    selector_type: str = "weighted",
    preset: Optional[str] = None,
    config_path: Optional[str] = None,
    seed: int = 42,
    no_delay: bool = False
) -> RouterSession:
    loader = load_config(config_path)
    kwargs: Dict[str, Any] = {"random_source": random.Random(seed)}
    if no_delay:
        kwargs["clock"] = InstantClock()
    session = RouterSession.from_config(loader, **kwargs)

    if selector_type == "weighted":
        if preset:
            session.dispatch(ApplyPreset(preset))
    elif selector_type.startswith("greedy-"):
        metric = Metric(selector_type.split("-", 1)[1])
        pinned = GreedySelector(strategy=metric).select(session.catalog)
        session.dispatch(SelectModel(pinned.id))
    else:
        raise ValueError(f"Unknown selector: {selector_type}")

    return session


def run_batch(session: RouterSession, runs: int, seed: int = 42, progress: bool = True) -> List[RunRecord]:
    rng = random.Random(seed)
    records = []
    for _ in tqdm(range(runs), disable=not progress):
        state = session.state
        session.dispatch(SetPrompt(rng.choice(SAMPLE_PROMPTS)))
        session.dispatch(SetTokenCounts(input_tokens=rng.randint(10, 400), max_tokens=state.max_tokens))
        records.append(session.run_prompt())
    return records


def summarize(records: List[RunRecord]) -> Dict[str, Any]:
    if not records:
        raise ValueError("No runs to summarize")

    latencies = np.array([r.estimate.latency_ms for r in records], dtype=float)
    model_usage: Dict[str, int] = {}
    for r in records:
        model_usage[r.model] = model_usage.get(r.model, 0) + 1

    return {
        "runs": len(records),
        "avg_latency_ms": float(np.mean(latencies)),
        "p95_latency_ms": float(np.percentile(latencies, 95)),
        "estimated_cost": round(float(sum(r.estimate.cost for r in records)), 6),
        "actual_cost": round(float(sum(r.actual_cost for r in records)), 6),
        "model_usage": model_usage,
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--selector", default="weighted", choices=SELECTORS)
    parser.add_argument("--preset", default=None)
    parser.add_argument("--runs", type=int, default=20)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--config", default=None)
    parser.add_argument("--no-delay", action="store_true")
    parser.add_argument("--output", type=str, default=None)
    args = parser.parse_args(argv)

    session = create_session(args.selector, args.preset, args.config, args.seed, args.no_delay)
    print(f"Running {args.runs} prompts with {args.selector} selector...")
    records = run_batch(session, args.runs, args.seed)
    summary = summarize(records)

    print(f"\n{'='*60}")
    print(f"RESULTS: {args.selector}")
    print(f"{'='*60}")
    print(f"Latency: avg={summary['avg_latency_ms']:.0f}ms, p95={summary['p95_latency_ms']:.0f}ms")
    print(f"Cost: estimated=${summary['estimated_cost']}, actual=${summary['actual_cost']}")
    print(f"\nModel Usage:")
    for model, count in sorted(summary["model_usage"].items(), key=lambda x: -x[1]):
        print(f"  {model}: {count}")

    if args.output:
        output_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "config": {
                "selector": args.selector,
                "preset": args.preset,
                "runs": args.runs,
                "seed": args.seed,
            },
            "results": summary,
            "history": [r.to_dict() for r in session.state.history],
        }
        with open(args.output, 'w') as f:
            json.dump(output_data, f, indent=2)
        print(f"\nResults saved to {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
