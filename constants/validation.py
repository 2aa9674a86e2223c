"""
Validation Constants

Whitelist values for validating request payloads before they reach the
target deriver or the allocator.
"""

from .meals import MEAL_ORDER
from .nutrition import ACTIVITY_FACTORS, GOAL_ADJUSTMENTS

VALID_SEXES = {'male', 'female'}

VALID_ACTIVITY_LEVELS = set(ACTIVITY_FACTORS)

VALID_GOALS = set(GOAL_ADJUSTMENTS)

# Valid meal types for recipes and plan items
VALID_MEAL_TYPES = set(MEAL_ORDER)

# Alternate payload keys accepted for profile fields (alias -> canonical)
FIELD_ALIASES = {
    'gender': 'sex',
    'activity_level': 'activityLevel',
}

# Alternate spellings accepted for enum values
VALUE_ALIASES = {
    'very-active': 'very_active',
    'fat-loss': 'fat_loss',
    'muscle-gain': 'muscle_gain',
}

# Maximum field lengths for catalog data
MAX_LENGTHS = {
    'food_name': 200,
    'recipe_name': 200,
}

# Sanity bounds for biometric input (inclusive)
PROFILE_BOUNDS = {
    'age': (1, 120),
    'height': (50, 272),
    'weight': (20, 650),
}
