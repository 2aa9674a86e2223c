"""
Planning Records

Immutable record shapes passed between the catalog reader, the allocator,
the persister and the retriever, plus the rounding helpers they share.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Tuple

from .errors import ValidationError


def round_half_up(value, digits=0):
    """Round half away from zero for non-negative values (0.125 -> 0.13)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round2(value):
    return round_half_up(value, 2)


@dataclass(frozen=True)
class Macros:
    """Energy and macro amounts: kcal and grams of protein, carbs, fats."""
    kcal: float
    protein: float
    carbs: float
    fats: float

    def scaled(self, factor) -> 'Macros':
        return Macros(
            kcal=self.kcal * factor,
            protein=self.protein * factor,
            carbs=self.carbs * factor,
            fats=self.fats * factor,
        )

    def rounded(self) -> 'Macros':
        return Macros(round2(self.kcal), round2(self.protein), round2(self.carbs), round2(self.fats))

    def __add__(self, other):
        if not isinstance(other, Macros):
            return NotImplemented
        return Macros(
            kcal=self.kcal + other.kcal,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fats=self.fats + other.fats,
        )

    def to_dict(self):
        return {'kcal': self.kcal, 'protein': self.protein, 'carbs': self.carbs, 'fats': self.fats}

    @classmethod
    def zero(cls):
        return cls(0.0, 0.0, 0.0, 0.0)

    @classmethod
    def total(cls, items) -> 'Macros':
        """Sum a sequence of Macros and round the result to 2 decimals."""
        result = cls.zero()
        for item in items:
            result = result + item
        return result.rounded()


@dataclass(frozen=True)
class MacroTarget(Macros):
    """Daily macro target. Every component must be a finite, strictly positive number."""

    def __post_init__(self):
        for name in ('kcal', 'protein', 'carbs', 'fats'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ValidationError(f'Target {name} must be a number', field=name)
            if value <= 0:
                raise ValidationError(f'Target {name} must be greater than zero', field=name)


@dataclass(frozen=True)
class RecipeNutrition:
    """Base (1.0x) nutrition of a recipe, aggregated over its ingredients."""
    recipe_id: int
    name: str
    meal_type: str
    macros: Macros
    prep_minutes: int = 0


@dataclass(frozen=True)
class ChosenMeal:
    """The recipe picked for one slot and the portion it was scaled to."""
    meal_type: str
    recipe_id: int
    recipe_name: str
    scale_factor: float
    base: Macros
    achieved: Macros

    def to_dict(self):
        return {
            'mealType': self.meal_type,
            'recipeId': self.recipe_id,
            'recipeName': self.recipe_name,
            'scaleFactor': self.scale_factor,
            'baseKcal': self.base.kcal,
            'baseProtein': self.base.protein,
            'baseCarbs': self.base.carbs,
            'baseFats': self.base.fats,
            'achievedKcal': self.achieved.kcal,
            'achievedProtein': self.achieved.protein,
            'achievedCarbs': self.achieved.carbs,
            'achievedFats': self.achieved.fats,
        }


@dataclass(frozen=True)
class PersistResult:
    plan_id: int
    totals: Macros


@dataclass(frozen=True)
class MealPlan:
    """A stored plan with its items and achieved totals."""
    id: int
    user_id: int
    plan_date: date
    targets: Macros
    items: Tuple[ChosenMeal, ...]
    achieved: Macros

    def to_dict(self):
        return {
            'mealPlanId': self.id,
            'userId': self.user_id,
            'planDate': self.plan_date.isoformat(),
            'targets': self.targets.to_dict(),
            'achieved': self.achieved.to_dict(),
            'meals': [meal.to_dict() for meal in self.items],
        }


@dataclass(frozen=True)
class TargetDerivation:
    """Result of deriving targets from a profile; warnings are caller-visible."""
    kcal: int
    protein: int
    carbs: int
    fats: int
    bmr: float
    tdee: float
    warnings: List[str] = field(default_factory=list)

    def to_target(self) -> MacroTarget:
        return MacroTarget(self.kcal, self.protein, self.carbs, self.fats)

    def to_dict(self):
        data = {
            'calories': self.kcal,
            'protein': self.protein,
            'carbs': self.carbs,
            'fats': self.fats,
        }
        if self.warnings:
            data['warnings'] = list(self.warnings)
        return data


@dataclass(frozen=True)
class Profile:
    """Validated biometric input for target derivation."""
    age: float
    sex: str
    height: float
    weight: float
    activity_level: str
    goal: str


CandidatesBySlot = Dict[str, List[RecipeNutrition]]
