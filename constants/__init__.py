"""
Constants Package

Fixed tables used by target derivation, meal allocation and input validation.
"""

from .meals import (
    MEAL_ORDER,
    DEFAULT_SPLIT,
    SCORE_WEIGHTS,
    MIN_SCALE,
    MAX_SCALE,
)

from .nutrition import (
    ACTIVITY_FACTORS,
    GOAL_ADJUSTMENTS,
    KCAL_PER_G_PROTEIN,
    KCAL_PER_G_CARBS,
    KCAL_PER_G_FAT,
    PROTEIN_G_PER_KG,
    FAT_G_PER_KG,
)

from .validation import (
    VALID_SEXES,
    VALID_ACTIVITY_LEVELS,
    VALID_GOALS,
    VALID_MEAL_TYPES,
    FIELD_ALIASES,
    VALUE_ALIASES,
    MAX_LENGTHS,
)

__all__ = [
    # Meals
    'MEAL_ORDER',
    'DEFAULT_SPLIT',
    'SCORE_WEIGHTS',
    'MIN_SCALE',
    'MAX_SCALE',
    # Nutrition
    'ACTIVITY_FACTORS',
    'GOAL_ADJUSTMENTS',
    'KCAL_PER_G_PROTEIN',
    'KCAL_PER_G_CARBS',
    'KCAL_PER_G_FAT',
    'PROTEIN_G_PER_KG',
    'FAT_G_PER_KG',
    # Validation
    'VALID_SEXES',
    'VALID_ACTIVITY_LEVELS',
    'VALID_GOALS',
    'VALID_MEAL_TYPES',
    'FIELD_ALIASES',
    'VALUE_ALIASES',
    'MAX_LENGTHS',
]
