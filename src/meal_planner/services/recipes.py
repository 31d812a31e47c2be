"""Recipe search backed by the FatSecret platform API."""

import logging
from dataclasses import dataclass
from typing import Protocol

from meal_planner.domain.nutrition import NutritionProfile
from meal_planner.domain.recipes import ConvertedRecipe, Ingredient, InstructionStep

_logger = logging.getLogger(__name__)

DEFAULT_COOKING_TIME_MIN = 30
DEFAULT_COST_PER_SERVING = 5.0
DEFAULT_UNIT = "pieces"
_SHORT_ALIAS_LEN = 2

_UNIT_ALIASES: list[tuple[str, str]] = [
    ("tablespoon", "tbsp"),
    ("tbsp", "tbsp"),
    ("teaspoon", "tsp"),
    ("tsp", "tsp"),
    ("cups", "cups"),
    ("cup", "cups"),
    ("ounce", "ounces"),
    ("oz", "ounces"),
    ("pound", "pounds"),
    ("lbs", "pounds"),
    ("lb", "pounds"),
    ("kilogram", "kg"),
    ("kg", "kg"),
    ("milliliter", "ml"),
    ("ml", "ml"),
    ("liter", "liters"),
    ("gram", "grams"),
    ("g", "grams"),
    ("l", "liters"),
]


class RecipeSearchClient(Protocol):
    """Interface for the FatSecret recipe endpoints."""

    async def search_recipes(self, query: str, max_results: int) -> dict[str, object]:
        """Search recipes and return raw API data."""

    async def get_recipe(self, recipe_id: str) -> dict[str, object]:
        """Fetch a recipe by id and return raw API data."""


class RecipeSource(Protocol):
    """Text search returning raw candidate recipes."""

    async def search(self, query: str, max_results: int) -> list[dict[str, object]]:
        """Return raw recipes matching the query; may be empty."""

    def convert(self, raw: dict[str, object]) -> ConvertedRecipe:
        """Convert a raw recipe into the planner's recipe shape."""


@dataclass
class FatSecretRecipeSource(RecipeSource):
    """Recipe source that reads FatSecret search and detail payloads."""

    client: RecipeSearchClient
    debug: bool = False

    async def search(self, query: str, max_results: int) -> list[dict[str, object]]:
        """Search FatSecret recipes."""
        payload = await self.client.search_recipes(query, max_results)
        recipes = _as_list((payload.get("recipes") or {}).get("recipe"))
        if self.debug:
            _logger.info("Recipe search: query=%s results=%s", query, len(recipes))
        return recipes

    async def get_recipe(self, recipe_id: str) -> ConvertedRecipe | None:
        """Fetch and convert a single recipe, if it exists."""
        payload = await self.client.get_recipe(recipe_id)
        raw = payload.get("recipe")
        if not isinstance(raw, dict):
            return None
        return self.convert(raw)

    def convert(self, raw: dict[str, object]) -> ConvertedRecipe:
        """Convert a FatSecret recipe into a planner recipe."""
        if not isinstance(raw, dict):
            raise TypeError(f"Unexpected recipe payload: {type(raw).__name__}")
        ingredients = [
            Ingredient(
                name=str(item.get("food_name") or "Ingredient"),
                amount=_to_float(item.get("number_of_units"), 1.0),
                unit=normalize_unit(str(item.get("measurement_description") or "")),
                source_ref=_optional_str(item.get("food_id")),
            )
            for item in _as_list((raw.get("ingredients") or {}).get("ingredient"))
        ]
        instructions = [
            InstructionStep(
                step_number=_to_int(step.get("direction_number"), 0),
                instruction=str(step.get("direction_description") or ""),
            )
            for step in _as_list((raw.get("directions") or {}).get("direction"))
        ]
        cooking_time = _to_int(raw.get("cooking_time_min"), DEFAULT_COOKING_TIME_MIN)
        recipe_id = _optional_str(raw.get("recipe_id"))
        return ConvertedRecipe(
            title=str(raw.get("recipe_name") or "Untitled Recipe"),
            description=_optional_str(raw.get("recipe_description")),
            total_time=cooking_time,
            estimated_cost_per_serving=DEFAULT_COST_PER_SERVING,
            ingredients=ingredients,
            instructions=instructions,
            nutrition=_extract_nutrition(raw.get("recipe_nutrition")),
            servings=_to_int(raw.get("number_of_servings"), 1),
            image_url=_optional_str(raw.get("recipe_image")),
            source="fatsecret",
            source_ref=f"fatsecret_{recipe_id}" if recipe_id else None,
        )


def normalize_unit(measurement: str) -> str:
    """Map a free-text measurement description to a standard unit."""
    normalized = measurement.lower().strip()
    words = normalized.replace(",", " ").replace("(", " ").replace(")", " ").split()
    for alias, unit in _UNIT_ALIASES:
        if len(alias) <= _SHORT_ALIAS_LEN:
            if alias in words:
                return unit
        elif alias in normalized:
            return unit
    return DEFAULT_UNIT


def _extract_nutrition(raw: object) -> NutritionProfile:
    if not isinstance(raw, dict):
        return NutritionProfile(calories=0.0, protein=0.0, carbs=0.0, fat=0.0)
    return NutritionProfile(
        calories=_to_float(raw.get("calories"), 0.0),
        protein=_to_float(raw.get("protein"), 0.0),
        carbs=_to_float(raw.get("carbohydrate"), 0.0),
        fat=_to_float(raw.get("fat"), 0.0),
        fiber=_to_float(raw.get("fiber"), 0.0),
        sugar=_to_float(raw.get("sugar"), 0.0),
        sodium=_to_float(raw.get("sodium"), 0.0),
    )


def _as_list(value: object) -> list[dict[str, object]]:
    """FatSecret returns a bare object instead of a list for single results."""
    if value is None:
        return []
    if isinstance(value, list):
        return [item for item in value if isinstance(item, dict)]
    if isinstance(value, dict):
        return [value]
    return []


def _to_float(value: object, default: float) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return default
    return default


def _to_int(value: object, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(float(value))
        except (ValueError, OverflowError):
            return default
    return default


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
