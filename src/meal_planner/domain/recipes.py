"""Domain models for recipes."""

from dataclasses import dataclass, field

from meal_planner.domain.nutrition import NutritionProfile


@dataclass(frozen=True)
class Ingredient:
    """Single recipe ingredient."""

    name: str
    amount: float
    unit: str
    source_ref: str | None = None


@dataclass(frozen=True)
class InstructionStep:
    """Single numbered recipe step."""

    step_number: int
    instruction: str


@dataclass(frozen=True)
class ConvertedRecipe:
    """Recipe converted from a provider payload into the planner's shape."""

    title: str
    description: str | None
    total_time: int
    estimated_cost_per_serving: float
    ingredients: list[Ingredient]
    instructions: list[InstructionStep]
    nutrition: NutritionProfile
    servings: int = 1
    image_url: str | None = None
    source: str = "fatsecret"
    source_ref: str | None = None
    dietary_tags: list[str] = field(default_factory=list)
