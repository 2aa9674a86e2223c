"""
Target Derivation Service

Computes daily calorie and macro targets from a user's biometric profile.
"""

import logging

from constants import (
    ACTIVITY_FACTORS,
    GOAL_ADJUSTMENTS,
    KCAL_PER_G_PROTEIN,
    KCAL_PER_G_CARBS,
    KCAL_PER_G_FAT,
    PROTEIN_G_PER_KG,
    FAT_G_PER_KG,
)
from constants.nutrition import BMR_SEX_OFFSET

from .records import TargetDerivation, round_half_up

logger = logging.getLogger(__name__)


def mifflin_st_jeor(sex, age, height_cm, weight_kg):
    """Basal metabolic rate in kcal/day."""
    return 10 * weight_kg + 6.25 * height_cm - 5 * age + BMR_SEX_OFFSET[sex]


def maintenance_calories(bmr, activity_level):
    return bmr * ACTIVITY_FACTORS[activity_level]


def derive_targets(profile):
    """
    Derive daily targets from a validated Profile.

    Steps:
    - BMR via Mifflin-St Jeor
    - Multiply by the activity factor for maintenance calories (TDEE)
    - Apply the flat goal adjustment (-500 fat loss, +300 muscle gain)
    - Protein 2 g/kg, fats 0.8 g/kg, carbs fill the remaining calories

    Carbs are floored at 0 g when protein and fat alone exceed the calorie
    budget; a warning is attached to the result in that case.

    Returns:
        TargetDerivation with values rounded to whole kcal/grams
    """
    bmr = mifflin_st_jeor(profile.sex, profile.age, profile.height, profile.weight)
    tdee = maintenance_calories(bmr, profile.activity_level)
    calories = tdee + GOAL_ADJUSTMENTS[profile.goal]

    protein_g = profile.weight * PROTEIN_G_PER_KG
    fats_g = profile.weight * FAT_G_PER_KG
    carbs_g = (calories - protein_g * KCAL_PER_G_PROTEIN - fats_g * KCAL_PER_G_FAT) / KCAL_PER_G_CARBS

    warnings = []
    if carbs_g < 0:
        message = (
            f'Protein and fat targets exceed {round_half_up(calories):.0f} kcal; '
            'carbohydrate target floored at 0 g'
        )
        logger.warning('%s (weight=%s, goal=%s)', message, profile.weight, profile.goal)
        warnings.append(message)
        carbs_g = 0.0

    return TargetDerivation(
        kcal=int(round_half_up(calories)),
        protein=int(round_half_up(protein_g)),
        carbs=int(round_half_up(carbs_g)),
        fats=int(round_half_up(fats_g)),
        bmr=bmr,
        tdee=tdee,
        warnings=warnings,
    )
