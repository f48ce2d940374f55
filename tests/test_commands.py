import pytest

from config import SettingsImportError
from estimator import Estimate
from selector import CatalogError, PriorityWeights
from session import (
    AppState,
    ApplyPreset,
    ClearSelection,
    ImportSettings,
    RecordRun,
    RunPrompt,
    RunRecord,
    SelectModel,
    SetPrompt,
    SetRulesName,
    SetTokenCounts,
    SetWeights,
    chosen_model,
    reduce,
)


def make_record(record_id: int) -> RunRecord:
    return RunRecord(
        id=record_id,
        prompt="p",
        model="gpt-fast",
        estimate=Estimate(tokens=160, cost=0.00032, latency_ms=150),
        actual_tokens=42,
        actual_cost=0.000084,
        timestamp="2026-01-01T00:00:00+00:00",
        weights=PriorityWeights(),
        selected_manually=False,
        rules_name="Default Rule Set",
        response_text="ok",
    )


@pytest.fixture
def state():
    return AppState.initial()


def test_initial_state_uses_auto_selection(state, catalog) -> None:
    assert state.selected_model_id is None
    assert state.history == ()
    assert chosen_model(state, catalog).id == "gpt-balanced"


def test_set_weights_returns_new_state(state, catalog) -> None:
    weights = PriorityWeights(cost=1, latency=0, quality=0)

    new_state = reduce(state, SetWeights(weights), catalog)

    assert new_state.weights == weights
    assert state.weights == PriorityWeights()
    assert chosen_model(new_state, catalog).id == "gpt-fast"


@pytest.mark.parametrize("preset, expected", [
    ("cost", "gpt-fast"),
    ("latency", "gpt-fast"),
    ("quality", "gpt-high"),
    ("balanced", "gpt-balanced"),
])
def test_presets_steer_auto_selection(state, catalog, preset, expected) -> None:
    new_state = reduce(state, ApplyPreset(preset), catalog)

    assert chosen_model(new_state, catalog).id == expected


def test_unknown_preset_rejected(state, catalog) -> None:
    with pytest.raises(ValueError):
        reduce(state, ApplyPreset("turbo"), catalog)


def test_manual_selection_overrides_weights(state, catalog) -> None:
    pinned = reduce(state, SelectModel("gpt-special"), catalog)

    assert pinned.manual_selection
    assert chosen_model(pinned, catalog).id == "gpt-special"

    cleared = reduce(pinned, ClearSelection(), catalog)
    assert not cleared.manual_selection
    assert chosen_model(cleared, catalog).id == "gpt-balanced"


def test_unknown_model_rejected(state, catalog) -> None:
    with pytest.raises(CatalogError):
        reduce(state, SelectModel("gpt-nope"), catalog)


def test_prompt_tokens_and_name(state, catalog) -> None:
    new_state = reduce(state, SetPrompt("Hi"), catalog)
    new_state = reduce(new_state, SetTokenCounts(input_tokens=0, max_tokens=5000), catalog)
    new_state = reduce(new_state, SetRulesName("Mine"), catalog)

    assert (new_state.prompt, new_state.input_tokens, new_state.max_tokens) == ("Hi", 0, 5000)
    assert new_state.rules_name == "Mine"


def test_negative_token_counts_rejected(state, catalog) -> None:
    with pytest.raises(ValueError):
        reduce(state, SetTokenCounts(input_tokens=-1, max_tokens=10), catalog)


def test_import_applies_present_fields_only(state, catalog) -> None:
    new_state = reduce(state, ImportSettings('{"priority": {"cost": 1, "latency": 0, "quality": 0}}'), catalog)

    assert new_state.weights == PriorityWeights(cost=1, latency=0, quality=0)
    assert new_state.rules_name == state.rules_name


def test_invalid_import_leaves_state_unchanged(state, catalog) -> None:
    with pytest.raises(SettingsImportError):
        reduce(state, ImportSettings("{oops"), catalog)

    assert state == AppState.initial()


def test_record_run_prepends_and_bounds_history(state) -> None:
    for record_id in range(60):
        state = reduce(state, RecordRun(make_record(record_id)))

    assert len(state.history) == 50
    assert [r.id for r in state.history] == list(range(59, 9, -1))


def test_run_prompt_needs_a_session(state, catalog) -> None:
    with pytest.raises(TypeError):
        reduce(state, RunPrompt(), catalog)


def test_unknown_command_rejected(state) -> None:
    with pytest.raises(TypeError):
        reduce(state, object())
