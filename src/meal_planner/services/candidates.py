"""Candidate collection for each meal type."""

import logging
import random
from dataclasses import dataclass, field

from meal_planner.domain.nutrition import (
    CARBS_KCAL_PER_G,
    FAT_KCAL_PER_G,
    PROTEIN_KCAL_PER_G,
    NutritionProfile,
    atwater_calories,
)
from meal_planner.domain.plans import Candidate, MealTarget
from meal_planner.domain.recipes import ConvertedRecipe, Ingredient, InstructionStep
from meal_planner.domain.tuning import (
    BREAKFAST,
    DEFAULT_TUNING,
    DINNER,
    LUNCH,
    SNACKS,
    FallbackSplit,
    PlannerTuning,
)
from meal_planner.services.recipes import RecipeSource
from meal_planner.services.scaling import scale_nutrition
from meal_planner.services.scoring import macro_percentages, score_nutrition

_logger = logging.getLogger(__name__)

SEARCH_TERMS: dict[str, tuple[str, ...]] = {
    BREAKFAST: ("oatmeal", "eggs", "yogurt", "smoothie", "pancakes"),
    LUNCH: ("salad", "sandwich", "bowl", "soup", "wrap"),
    DINNER: ("chicken", "fish", "pasta", "stir fry", "rice"),
    SNACKS: ("nuts", "fruit", "energy balls", "crackers", "cheese"),
}

# Normalized restriction name -> query qualifier, in the order they are appended.
RESTRICTION_QUALIFIERS: dict[str, str] = {
    "vegetarian": "vegetarian",
    "vegan": "vegan",
    "glutenfree": "gluten free",
}


@dataclass(frozen=True)
class _FallbackTemplate:
    title: str
    description: str
    total_time: int
    ingredients: tuple[tuple[str, float, str], ...]
    instructions: tuple[str, ...]


FALLBACK_TEMPLATES: dict[str, _FallbackTemplate] = {
    BREAKFAST: _FallbackTemplate(
        title="Balanced Breakfast Bowl",
        description="Oats, Greek yogurt and berries balanced for your morning.",
        total_time=10,
        ingredients=(
            ("rolled oats", 0.5, "cups"),
            ("Greek yogurt", 0.75, "cups"),
            ("mixed berries", 0.5, "cups"),
            ("chia seeds", 1, "tbsp"),
            ("honey", 1, "tsp"),
        ),
        instructions=(
            "Cook the oats with water or milk until creamy.",
            "Top with Greek yogurt, berries and chia seeds.",
            "Drizzle with honey and serve.",
        ),
    ),
    LUNCH: _FallbackTemplate(
        title="Balanced Lunch Plate",
        description="Lean protein, whole grains and vegetables.",
        total_time=25,
        ingredients=(
            ("lean protein (chicken/tofu)", 4, "ounces"),
            ("brown rice", 0.75, "cups"),
            ("mixed vegetables", 1, "cups"),
            ("olive oil", 1, "tbsp"),
        ),
        instructions=(
            "Cook the brown rice according to package directions.",
            "Sear the protein in olive oil until cooked through.",
            "Steam or saute the vegetables.",
            "Plate the rice, protein and vegetables together.",
        ),
    ),
    DINNER: _FallbackTemplate(
        title="Balanced Dinner Plate",
        description="Baked protein with roasted vegetables and a whole grain.",
        total_time=35,
        ingredients=(
            ("salmon or chicken breast", 5, "ounces"),
            ("quinoa", 0.75, "cups"),
            ("roasted vegetables", 1.5, "cups"),
            ("olive oil", 1, "tbsp"),
        ),
        instructions=(
            "Roast the vegetables with half of the olive oil at 400F.",
            "Bake the protein with the remaining oil until cooked through.",
            "Cook the quinoa and serve everything together.",
        ),
    ),
    SNACKS: _FallbackTemplate(
        title="Balanced Snack Plate",
        description="Fruit, nuts and yogurt for a steady snack.",
        total_time=5,
        ingredients=(
            ("apple", 1, "pieces"),
            ("almonds", 1, "ounces"),
            ("low-fat yogurt", 0.5, "cups"),
        ),
        instructions=(
            "Slice the apple.",
            "Serve with almonds and yogurt on the side.",
        ),
    ),
}


def build_search_query(
    meal_type: str,
    dietary_restrictions: list[str],
    rng: random.Random,
) -> str:
    """Build a recipe search query for a meal type and restrictions."""
    query = rng.choice(SEARCH_TERMS[meal_type])
    present = {_normalize_restriction(value) for value in dietary_restrictions}
    for restriction, qualifier in RESTRICTION_QUALIFIERS.items():
        if restriction in present:
            query = f"{query} {qualifier}"
    return query


def build_fallback_candidate(
    target: MealTarget, split: FallbackSplit | None = None
) -> Candidate:
    """Synthesize an always-passing balanced recipe for a meal type.

    The ingredient templates do not take dietary restrictions into account.
    """
    resolved = split or FallbackSplit()
    template = FALLBACK_TEMPLATES[target.meal_type]
    budget = target.calories * resolved.calorie_factor
    protein = round(budget * resolved.protein_share / PROTEIN_KCAL_PER_G)
    fat = round(budget * resolved.fat_share / FAT_KCAL_PER_G)
    carbs = round(budget * resolved.carbs_share / CARBS_KCAL_PER_G)
    nutrition = NutritionProfile(
        calories=atwater_calories(protein=protein, fat=fat, carbs=carbs),
        protein=protein,
        carbs=carbs,
        fat=fat,
    )
    recipe = ConvertedRecipe(
        title=template.title,
        description=template.description,
        total_time=template.total_time,
        estimated_cost_per_serving=5.0,
        ingredients=[
            Ingredient(name=name, amount=amount, unit=unit)
            for name, amount, unit in template.ingredients
        ],
        instructions=[
            InstructionStep(step_number=index, instruction=text)
            for index, text in enumerate(template.instructions, start=1)
        ],
        nutrition=nutrition,
        servings=1,
        source="fallback",
    )
    return Candidate(
        meal_type=target.meal_type,
        recipe=recipe,
        serving_multiplier=1,
        adjusted_nutrition=nutrition,
        macro_percentages=macro_percentages(nutrition),
        macro_score=1.0,
        within_range=True,
        is_fallback=True,
    )


@dataclass
class CandidateCollector:
    """Searches, scales and scores recipes for one meal type at a time."""

    source: RecipeSource
    tuning: PlannerTuning = DEFAULT_TUNING
    rng: random.Random = field(default_factory=random.Random)

    async def collect(
        self, target: MealTarget, dietary_restrictions: list[str]
    ) -> list[Candidate]:
        """Return passing candidates sorted by score, or a single fallback."""
        query = build_search_query(target.meal_type, dietary_restrictions, self.rng)
        try:
            raw_recipes = await self.source.search(query, self.tuning.search_limit)
        except Exception as exc:
            _logger.warning(
                "Recipe search failed: meal_type=%s query=%s error=%s",
                target.meal_type,
                query,
                exc,
            )
            raw_recipes = []

        candidates: list[Candidate] = []
        for raw in raw_recipes:
            try:
                recipe = self.source.convert(raw)
            except Exception as exc:
                _logger.warning(
                    "Skipping recipe that failed to convert: meal_type=%s error=%s",
                    target.meal_type,
                    exc,
                )
                continue
            candidates.append(self.evaluate(recipe, target))

        passing = [candidate for candidate in candidates if candidate.within_range]
        passing.sort(key=lambda candidate: candidate.macro_score, reverse=True)
        if not passing:
            _logger.info(
                "No passing recipes: meal_type=%s query=%s searched=%s; using fallback",
                target.meal_type,
                query,
                len(raw_recipes),
            )
            return [build_fallback_candidate(target, self.tuning.fallback)]
        return passing

    def evaluate(self, recipe: ConvertedRecipe, target: MealTarget) -> Candidate:
        """Scale and score a converted recipe against a meal target."""
        scaled = scale_nutrition(recipe.nutrition, target.calories, self.tuning.scaling)
        evaluation = score_nutrition(scaled.nutrition, target, self.tuning.scoring)
        return Candidate(
            meal_type=target.meal_type,
            recipe=recipe,
            serving_multiplier=scaled.servings,
            adjusted_nutrition=scaled.nutrition,
            macro_percentages=evaluation.percentages,
            macro_score=evaluation.score,
            within_range=evaluation.within_range,
        )


def _normalize_restriction(value: str) -> str:
    return "".join(char for char in value.lower() if char.isalpha())
