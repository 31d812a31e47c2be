"""Advisory re-ranking of meal candidates by an LLM."""

import logging
from dataclasses import dataclass
from typing import Protocol

from meal_planner.domain.plans import Candidate, PlanPreferences

_logger = logging.getLogger(__name__)

RANKING_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "order": {"type": "array", "items": {"type": "integer"}},
    },
    "required": ["order"],
    "additionalProperties": False,
}


class RankingClient(Protocol):
    """Interface for structured LLM completions."""

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured output matching the schema."""


class Ranker(Protocol):
    """Reorders a meal type's candidates by preference."""

    async def rank(
        self,
        meal_type: str,
        candidates: list[Candidate],
        preferences: PlanPreferences,
    ) -> list[Candidate]:
        """Return the candidates in preferred order."""


@dataclass
class PassthroughRanker(Ranker):
    """Ranker that keeps the macro-score order."""

    async def rank(
        self,
        meal_type: str,
        candidates: list[Candidate],
        preferences: PlanPreferences,
    ) -> list[Candidate]:
        """Return the candidates unchanged."""
        return list(candidates)


@dataclass
class LlmRanker(Ranker):
    """Ranker that asks an LLM for a preferred ordering.

    The ranking is a hint: provider errors and unparseable output leave the
    original order in place, and candidates the model does not mention are
    kept after the ranked ones.
    """

    client: RankingClient
    model: str
    reasoning_effort: str | None = None
    store: bool = False

    async def rank(
        self,
        meal_type: str,
        candidates: list[Candidate],
        preferences: PlanPreferences,
    ) -> list[Candidate]:
        """Return candidates reordered by the model's preference."""
        if len(candidates) <= 1:
            return list(candidates)
        prompt = build_ranking_prompt(meal_type, candidates, preferences)
        try:
            output = await self.client.complete(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                schema=RANKING_SCHEMA,
                prompt=prompt,
            )
            indices = parse_ranking(output)
        except Exception as exc:
            _logger.warning(
                "AI ranking unavailable, keeping score order: meal_type=%s error=%s",
                meal_type,
                exc,
            )
            return list(candidates)
        return merge_ranking(candidates, indices)


def build_ranking_prompt(
    meal_type: str,
    candidates: list[Candidate],
    preferences: PlanPreferences,
) -> str:
    """Describe the candidates and user targets for the ranking model."""
    lines = []
    for index, candidate in enumerate(candidates, start=1):
        nutrition = candidate.adjusted_nutrition
        lines.append(
            f"{index}. {candidate.recipe.title} - "
            f"{round(nutrition.calories)} kcal, "
            f"{round(nutrition.protein)}g protein, "
            f"{round(nutrition.carbs)}g carbs, "
            f"{round(nutrition.fat)}g fat "
            f"(macro score {candidate.macro_score:.2f})"
        )
    restrictions = ", ".join(preferences.dietary_restrictions) or "none"
    return (
        f"Rank these {meal_type} recipes for a user with daily targets of "
        f"{round(preferences.daily_calories)} kcal, "
        f"{round(preferences.protein_goal)}g protein, "
        f"{round(preferences.carbs_goal)}g carbs and "
        f"{round(preferences.fat_goal)}g fat. "
        f"Dietary restrictions: {restrictions}.\n\n"
        + "\n".join(lines)
        + "\n\nReturn the recipe numbers in \"order\", from most to least "
        "preferred, for example [2, 1, 3]."
    )


def parse_ranking(output: dict[str, object]) -> list[int]:
    """Read the 1-based indices from structured ranking output."""
    order = output.get("order")
    if not isinstance(order, list):
        raise ValueError("Ranking output has no order list")
    return [
        value for value in order if isinstance(value, int) and not isinstance(value, bool)
    ]


def merge_ranking(candidates: list[Candidate], indices: list[int]) -> list[Candidate]:
    """Apply a partial 1-based ordering, appending unranked candidates."""
    ranked: list[Candidate] = []
    seen: set[int] = set()
    for index in indices:
        position = index - 1
        if position < 0 or position >= len(candidates) or position in seen:
            continue
        seen.add(position)
        ranked.append(candidates[position])
    ranked.extend(
        candidate
        for position, candidate in enumerate(candidates)
        if position not in seen
    )
    return ranked
