"""Tests for candidate collection."""

import asyncio
import random

from meal_planner.domain.plans import MealTarget
from meal_planner.services.candidates import (
    SEARCH_TERMS,
    CandidateCollector,
    build_fallback_candidate,
    build_search_query,
)
from tests.conftest import FAILING_RECIPE, StaticRecipeSource

BREAKFAST_TARGET = MealTarget(
    meal_type="breakfast", calories=460, protein=35, carbs=46, fat=15
)
LUNCH_TARGET = MealTarget(meal_type="lunch", calories=640, protein=48, carbs=64, fat=21)
SNACK_TARGET = MealTarget(meal_type="snacks", calories=260, protein=20, carbs=26, fat=9)


def test_search_query_uses_meal_vocabulary() -> None:
    query = build_search_query("dinner", [], random.Random(3))

    assert query in SEARCH_TERMS["dinner"]


def test_search_query_appends_restriction_qualifiers() -> None:
    query = build_search_query(
        "lunch", ["Gluten-Free", "vegetarian", "halal"], random.Random(3)
    )

    base = query.removesuffix(" vegetarian gluten free")
    assert base in SEARCH_TERMS["lunch"]
    assert query.endswith(" vegetarian gluten free")


def test_search_query_is_deterministic_with_seeded_rng() -> None:
    first = build_search_query("breakfast", ["vegan"], random.Random(11))
    second = build_search_query("breakfast", ["vegan"], random.Random(11))

    assert first == second
    assert first.endswith(" vegan")


def test_collect_filters_and_sorts_by_score() -> None:
    source = StaticRecipeSource()
    source.results["lunch"].append(FAILING_RECIPE)
    collector = CandidateCollector(source=source, rng=random.Random(1))

    candidates = asyncio.run(collector.collect(LUNCH_TARGET, []))

    titles = [candidate.recipe.title for candidate in candidates]
    assert "Butter Plate" not in titles
    assert len(candidates) == 2
    assert all(candidate.within_range for candidate in candidates)
    assert all(candidate.macro_score >= 0.7 for candidate in candidates)
    scores = [candidate.macro_score for candidate in candidates]
    assert scores == sorted(scores, reverse=True)


def test_collect_scales_candidates() -> None:
    collector = CandidateCollector(source=StaticRecipeSource(), rng=random.Random(1))

    candidates = asyncio.run(collector.collect(LUNCH_TARGET, []))

    for candidate in candidates:
        nutrition = candidate.adjusted_nutrition
        assert candidate.serving_multiplier == 2
        assert nutrition.calories == (
            nutrition.protein * 4 + nutrition.fat * 9 + nutrition.carbs * 4
        )


def test_collect_drops_recipes_that_fail_to_convert() -> None:
    source = StaticRecipeSource()
    source.results["breakfast"].insert(0, {"broken": True})
    collector = CandidateCollector(source=source, rng=random.Random(1))

    candidates = asyncio.run(collector.collect(BREAKFAST_TARGET, []))

    assert {candidate.recipe.title for candidate in candidates} == {
        "Oat Bowl",
        "Egg Scramble",
    }


def test_collect_falls_back_when_search_is_empty() -> None:
    source = StaticRecipeSource(results={"snacks": []})
    collector = CandidateCollector(source=source, rng=random.Random(1))

    candidates = asyncio.run(collector.collect(SNACK_TARGET, []))

    assert len(candidates) == 1
    fallback = candidates[0]
    assert fallback.is_fallback is True
    assert fallback.macro_score == 1.0
    assert fallback.within_range is True
    assert fallback.recipe.title == "Balanced Snack Plate"


def test_collect_falls_back_when_search_raises() -> None:
    source = StaticRecipeSource(failing_meal_types={"breakfast"})
    collector = CandidateCollector(source=source, rng=random.Random(1))

    candidates = asyncio.run(collector.collect(BREAKFAST_TARGET, ["vegan"]))

    assert len(candidates) == 1
    assert candidates[0].is_fallback is True
    assert source.queries[0].endswith(" vegan")


def test_collect_falls_back_when_nothing_passes() -> None:
    source = StaticRecipeSource(results={"lunch": [FAILING_RECIPE]})
    collector = CandidateCollector(source=source, rng=random.Random(1))

    candidates = asyncio.run(collector.collect(LUNCH_TARGET, []))

    assert [candidate.recipe.title for candidate in candidates] == [
        "Balanced Lunch Plate"
    ]


def test_fallback_macros_follow_fixed_split() -> None:
    fallback = build_fallback_candidate(BREAKFAST_TARGET)
    nutrition = fallback.adjusted_nutrition

    # 95% of 460 kcal split 20/25/55 across protein, fat and carbs.
    assert nutrition.protein == round(437 * 0.20 / 4)
    assert nutrition.fat == round(437 * 0.25 / 9)
    assert nutrition.carbs == round(437 * 0.55 / 4)
    assert nutrition.calories == (
        nutrition.protein * 4 + nutrition.fat * 9 + nutrition.carbs * 4
    )
    assert fallback.serving_multiplier == 1
    assert fallback.recipe.instructions[0].step_number == 1


def test_lunch_fallback_ignores_restrictions() -> None:
    fallback = build_fallback_candidate(LUNCH_TARGET)

    names = [ingredient.name for ingredient in fallback.recipe.ingredients]
    assert "lean protein (chicken/tofu)" in names
