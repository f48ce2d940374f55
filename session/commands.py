"""Discrete state transitions of a router session.

reduce() is pure: it returns a new AppState and leaves the input
untouched, raising instead of half-applying a bad command.
"""

import threading
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence

from config.settings import parse_settings
from selector import DEFAULT_PRESETS, ModelProfile, PriorityWeights, find_model, rank_models

from .history import RunRecord, push_record
from .state import AppState


@dataclass(frozen=True)
class SetWeights:
    weights: PriorityWeights


@dataclass(frozen=True)
class ApplyPreset:
    name: str


@dataclass(frozen=True)
class SelectModel:
    model_id: str


@dataclass(frozen=True)
class ClearSelection:
    pass


@dataclass(frozen=True)
class SetPrompt:
    prompt: str


@dataclass(frozen=True)
class SetTokenCounts:
    input_tokens: int
    max_tokens: int


@dataclass(frozen=True)
class SetRulesName:
    name: str


@dataclass(frozen=True)
class ImportSettings:
    """Raw text of a settings file, as produced by export."""
    text: str


@dataclass(frozen=True)
class RecordRun:
    record: RunRecord


@dataclass(frozen=True)
class RunPrompt:
    """Simulated run; needs a session to execute, see RouterSession.dispatch."""
    cancel: Optional[threading.Event] = None


def chosen_model(state: AppState, catalog: Sequence[ModelProfile]) -> ModelProfile:
    """Manually pinned model, else the best one under the current weights."""
    if state.selected_model_id is not None:
        return find_model(catalog, state.selected_model_id)
    return rank_models(catalog, state.weights)[0].model


def reduce(
    state: AppState,
    command,
    catalog: Sequence[ModelProfile] = (),
    presets: Optional[Mapping[str, PriorityWeights]] = None
) -> AppState:
    """Apply one command to the state.

    Raises:
        ValueError: invalid token counts or unknown preset
        CatalogError: SelectModel with an id not in the catalog
        SettingsImportError: ImportSettings with a malformed document
    """
    if isinstance(command, SetWeights):
        return state.evolve(weights=command.weights)

    if isinstance(command, ApplyPreset):
        available: Dict[str, PriorityWeights] = dict(presets or DEFAULT_PRESETS)
        if command.name not in available:
            raise ValueError(f"Unknown preset '{command.name}' (known: {', '.join(available)})")
        return state.evolve(weights=available[command.name])

    if isinstance(command, SelectModel):
        find_model(catalog, command.model_id)
        return state.evolve(selected_model_id=command.model_id)

    if isinstance(command, ClearSelection):
        return state.evolve(selected_model_id=None)

    if isinstance(command, SetPrompt):
        return state.evolve(prompt=command.prompt)

    if isinstance(command, SetTokenCounts):
        if command.input_tokens < 0 or command.max_tokens < 0:
            raise ValueError("Token counts must be non-negative")
        return state.evolve(input_tokens=command.input_tokens, max_tokens=command.max_tokens)

    if isinstance(command, SetRulesName):
        return state.evolve(rules_name=command.name)

    if isinstance(command, ImportSettings):
        update = parse_settings(command.text)
        changes = {}
        if update.weights is not None:
            changes['weights'] = update.weights
        if update.name is not None:
            changes['rules_name'] = update.name
        return state.evolve(**changes)

    if isinstance(command, RecordRun):
        return state.evolve(history=push_record(state.history, command.record, state.history_capacity))

    if isinstance(command, RunPrompt):
        raise TypeError("RunPrompt has side effects; dispatch it through a RouterSession")

    raise TypeError(f"Unknown command: {command!r}")
