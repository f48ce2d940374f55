import logging

import pytest

from selector import (
    CatalogError,
    ModelScore,
    PriorityWeights,
    ScoredModel,
    Selector,
    WeightedSelector,
    normalize,
    rank_models,
    score_model,
)

from .conftest import make_model


def test_cost_only_weights_pick_cheapest_model(catalog) -> None:
    best = WeightedSelector(PriorityWeights(cost=1, latency=0, quality=0)).select(catalog)

    assert best.cost_per_1k_tokens == 0.002
    assert best.id == "gpt-fast"


def test_default_weights_pick_balanced_model(catalog) -> None:
    ranked = rank_models(catalog, PriorityWeights())

    assert [s.model.id for s in ranked] == ["gpt-balanced", "gpt-fast", "gpt-special", "gpt-high"]


def test_quality_preset_weights_pick_high_model(catalog) -> None:
    weights = PriorityWeights(cost=0.05, latency=0.15, quality=0.8)

    assert WeightedSelector(weights).select(catalog).id == "gpt-high"


def test_normalized_metrics_span_catalog_range(catalog) -> None:
    by_id = {m.id: m for m in catalog}

    fast = score_model(by_id["gpt-fast"], PriorityWeights(), catalog)
    high = score_model(by_id["gpt-high"], PriorityWeights(), catalog)
    special = score_model(by_id["gpt-special"], PriorityWeights(), catalog)

    assert (fast.norm_cost, fast.norm_latency, fast.norm_quality) == (1.0, 1.0, 0.0)
    assert (high.norm_cost, high.norm_latency, high.norm_quality) == (0.0, 0.0, 1.0)
    assert special.norm_latency == pytest.approx(1 / 3)
    assert special.norm_quality == pytest.approx(3 / 3.5)
    assert special.norm_cost == pytest.approx(1 - 0.028 / 0.058)


def test_equal_costs_normalize_to_one() -> None:
    catalog = [
        make_model("a", cost=0.01, latency=100, quality=5),
        make_model("b", cost=0.01, latency=200, quality=7),
        make_model("c", cost=0.01, latency=300, quality=9),
    ]

    for model in catalog:
        assert score_model(model, PriorityWeights(), catalog).norm_cost == 1


def test_single_model_catalog_scores_full_marks() -> None:
    only = make_model("solo", cost=0.5, latency=900, quality=2)

    score = score_model(only, PriorityWeights(cost=1, latency=1, quality=1), [only])

    assert score.combined == 3


def test_weights_are_not_renormalized(catalog) -> None:
    score = score_model(catalog[0], PriorityWeights(cost=2, latency=0, quality=0), catalog)

    assert score.combined == 2


def test_exact_tie_keeps_catalog_order() -> None:
    first = make_model("first", cost=0.01, latency=100, quality=5)
    second = make_model("second", cost=0.01, latency=100, quality=5)
    weights = PriorityWeights()

    assert WeightedSelector(weights).select([first, second]).id == "first"
    assert WeightedSelector(weights).select([second, first]).id == "second"


def test_empty_catalog_fails_fast() -> None:
    with pytest.raises(CatalogError):
        rank_models([], PriorityWeights())
    with pytest.raises(CatalogError):
        WeightedSelector().select([])


def test_normalize_inverts_when_asked() -> None:
    assert normalize(5, 0, 10) == 0.5
    assert normalize(2, 0, 10, invert=True) == 0.8
    assert normalize(3, 3, 3, invert=True) == 1.0


def test_selector_remembers_last_selection(catalog) -> None:
    selector = WeightedSelector(PriorityWeights(cost=1, latency=0, quality=0))
    assert selector.get_current() is None

    selector.select(catalog)

    assert selector.get_current().id == "gpt-fast"
    assert selector.get_summary()["weights"] == {"cost": 1, "latency": 0, "quality": 0}
    selector.reset()
    assert selector.get_current() is None


def test_select_logs_through_base_selector(catalog, caplog) -> None:
    selector = WeightedSelector(PriorityWeights(cost=1, latency=0, quality=0))

    with caplog.at_level(logging.DEBUG, logger="selector"):
        selector.select(catalog)

    assert "[weighted] Selected gpt-fast" in caplog.text


def test_base_selector_select_uses_rank(catalog) -> None:
    class LastListed(Selector):
        def rank(self, models):
            return [ScoredModel(m, ModelScore(0, 0, 0, 0)) for m in reversed(models)]

    selector = LastListed(name="last")

    assert selector.select(catalog).id == "gpt-special"
    assert selector.get_current().id == "gpt-special"
