"""
Entry point for the prompt-router command.
Provides subcommands:
- rank    – score and estimate every model under the chosen weights
- run     – run the prompt against the simulated backend
- export  – write the current rule settings as JSON
- import  – load a rule settings file and show what it applies
"""

import argparse
import logging
import random
import sys
from typing import List, Optional

from config import (
    ConfigLoader,
    SettingsImportError,
    export_settings,
    load_config,
    read_settings,
    read_settings_text,
    setup_logger,
)
from connectors import ConnectorError
from selector import CatalogError, PriorityWeights
from session import (
    ApplyPreset,
    ImportSettings,
    RouterSession,
    SelectModel,
    SetPrompt,
    SetRulesName,
    SetTokenCounts,
    SetWeights,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="prompt-router", description="Priority-weighted model routing demo")
    parser.add_argument("--config", default=None, help="Router YAML config (default: packaged catalog)")
    parser.add_argument("--verbose", action="store_true")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--preset", default=None, help="cost, latency, quality or balanced")
    common.add_argument("--cost", type=float, default=None)
    common.add_argument("--latency", type=float, default=None)
    common.add_argument("--quality", type=float, default=None)
    common.add_argument("--settings", default=None, help="Rule settings JSON to import first")
    common.add_argument("--name", default=None, help="Rule set name")
    common.add_argument("--model", default=None, help="Pin a model id instead of auto selection")
    common.add_argument("--input-tokens", type=int, default=None)
    common.add_argument("--max-tokens", type=int, default=None)
    common.add_argument("--seed", type=int, default=None)

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("rank", parents=[common], help="Score every model")

    run = sub.add_parser("run", parents=[common], help="Run a prompt on the simulated backend")
    run.add_argument("prompt", nargs="?", default=None)

    export = sub.add_parser("export", parents=[common], help="Write rule settings JSON")
    export.add_argument("--output-dir", default=".")

    imp = sub.add_parser("import", help="Validate a rule settings file")
    imp.add_argument("path")

    return parser


def build_session(loader: ConfigLoader, args) -> RouterSession:
    rng = random.Random(args.seed) if args.seed is not None else None
    session = RouterSession.from_config(loader, random_source=rng)

    if args.settings:
        session.dispatch(ImportSettings(read_settings_text(args.settings)))
    if args.preset:
        session.dispatch(ApplyPreset(args.preset))

    if any(v is not None for v in (args.cost, args.latency, args.quality)):
        current = session.state.weights
        session.dispatch(SetWeights(PriorityWeights(
            cost=current.cost if args.cost is None else args.cost,
            latency=current.latency if args.latency is None else args.latency,
            quality=current.quality if args.quality is None else args.quality,
        )))

    if args.name:
        session.dispatch(SetRulesName(args.name))
    if args.model:
        session.dispatch(SelectModel(args.model))
    if args.input_tokens is not None or args.max_tokens is not None:
        state = session.state
        session.dispatch(SetTokenCounts(
            input_tokens=state.input_tokens if args.input_tokens is None else args.input_tokens,
            max_tokens=state.max_tokens if args.max_tokens is None else args.max_tokens,
        ))
    return session


def cmd_rank(session: RouterSession) -> int:
    state = session.state
    print(f"Rules: {state.rules_name} ({state.weights})")
    for row in session.dashboard():
        marker = "*" if row.chosen else " "
        auto = " (auto)" if row.auto_selected else ""
        print(
            f"{marker} {row.model.name:<14} score {row.score.combined:.2f}  "
            f"quality {row.model.quality}  ${row.model.cost_per_1k_tokens}/1k  "
            f"est {row.estimate.latency_ms}ms ${row.estimate.cost}{auto}"
        )
    return 0


def cmd_run(session: RouterSession, prompt: Optional[str]) -> int:
    if prompt:
        session.dispatch(SetPrompt(prompt))

    chosen = session.chosen()
    label = chosen.name if session.state.manual_selection else f"{chosen.name} (auto)"
    print(f"Selected model: {label}")

    record = session.run_prompt()
    print(f"Estimate: {record.estimate.latency_ms}ms • ${record.estimate.cost}")
    print(f"Actual: {record.actual_tokens} tokens • ${record.actual_cost}")
    print(record.response_text)
    return 0


def cmd_export(session: RouterSession, output_dir: str) -> int:
    state = session.state
    path = export_settings(output_dir, state.rules_name, state.weights)
    print(f"Exported rules to {path}")
    return 0


def cmd_import(path: str) -> int:
    update = read_settings(path)
    print("Imported rules successfully.")
    if update.name is not None:
        print(f"  name: {update.name}")
    if update.weights is not None:
        print(f"  priority: {update.weights}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.command == "import":
            return cmd_import(args.path)

        session = build_session(load_config(args.config), args)
        if args.command == "rank":
            return cmd_rank(session)
        if args.command == "run":
            return cmd_run(session, args.prompt)
        return cmd_export(session, args.output_dir)
    except SettingsImportError as e:
        print(f"Invalid JSON file: {e}", file=sys.stderr)
        return 2
    except (CatalogError, ValueError, OSError, ConnectorError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
