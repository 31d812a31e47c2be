"""Tuning constants for meal plan generation."""

from dataclasses import dataclass, field

BREAKFAST = "breakfast"
LUNCH = "lunch"
DINNER = "dinner"
SNACKS = "snacks"

MEAL_ORDER = (BREAKFAST, LUNCH, DINNER, SNACKS)

MEAL_TARGET_SHARES: dict[str, float] = {
    BREAKFAST: 0.23,
    LUNCH: 0.32,
    DINNER: 0.32,
    SNACKS: 0.13,
}


@dataclass(frozen=True)
class MacroRange:
    """Inclusive acceptable range for a macro percentage."""

    low: float
    high: float

    @property
    def midpoint(self) -> float:
        """Return the centre of the range."""
        return (self.low + self.high) / 2

    def contains(self, value: float) -> bool:
        """Return whether the value lies within the range."""
        return self.low <= value <= self.high


@dataclass(frozen=True)
class ScoringConfig:
    """Ranges and weights used to score a scaled recipe."""

    protein_range: MacroRange = MacroRange(10, 35)
    fat_range: MacroRange = MacroRange(20, 35)
    carbs_range: MacroRange = MacroRange(45, 65)
    calorie_low_factor: float = 0.75
    calorie_high_factor: float = 1.10
    protein_weight: float = 1.1
    fat_weight: float = 1.0
    carbs_weight: float = 1.0
    calorie_weight: float = 1.2
    score_floor: float = 0.3
    pass_threshold: float = 0.7

    @property
    def total_weight(self) -> float:
        """Return the sum of axis weights."""
        return (
            self.protein_weight
            + self.fat_weight
            + self.carbs_weight
            + self.calorie_weight
        )


@dataclass(frozen=True)
class ScalingConfig:
    """Serving multiplier rules."""

    ratio_factor: float = 0.9
    min_servings: int = 1
    max_servings: int = 3


@dataclass(frozen=True)
class FallbackSplit:
    """Calorie split used for synthesized fallback recipes."""

    calorie_factor: float = 0.95
    protein_share: float = 0.20
    fat_share: float = 0.25
    carbs_share: float = 0.55


@dataclass(frozen=True)
class PlannerTuning:
    """Full tuning table for a generation run."""

    meal_shares: dict[str, float] = field(
        default_factory=lambda: dict(MEAL_TARGET_SHARES)
    )
    scoring: ScoringConfig = ScoringConfig()
    scaling: ScalingConfig = ScalingConfig()
    fallback: FallbackSplit = FallbackSplit()
    search_limit: int = 10
    top_n: int = 3
    daily_variance_threshold: float = 0.15


DEFAULT_TUNING = PlannerTuning()
