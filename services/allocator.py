"""
Meal Allocation Service

Picks one recipe per meal slot against the slot's share of the daily target
and scales its portion toward the slot's calories.
"""

import logging

from constants import MEAL_ORDER, DEFAULT_SPLIT, SCORE_WEIGHTS, MIN_SCALE, MAX_SCALE

from .errors import CatalogGapError, ValidationError
from .records import ChosenMeal, MacroTarget, round2

logger = logging.getLogger(__name__)


def clamp(value, min_val, max_val):
    return min(max_val, max(min_val, value))


def slot_target(targets, meal_type):
    """Sub-target for a slot: the daily target times the slot's split."""
    return targets.scaled(DEFAULT_SPLIT[meal_type])


def score_recipe(macros, target):
    """
    Weighted absolute deviation of a recipe's base macros from a slot target.
    Lower is better.
    """
    return (
        SCORE_WEIGHTS['kcal'] * abs(macros.kcal - target.kcal) +
        SCORE_WEIGHTS['protein'] * abs(macros.protein - target.protein) +
        SCORE_WEIGHTS['carbs'] * abs(macros.carbs - target.carbs) +
        SCORE_WEIGHTS['fats'] * abs(macros.fats - target.fats)
    )


def pick_best(candidates, target):
    """Lowest score wins; on a tie the earlier candidate is kept."""
    best = candidates[0]
    best_score = score_recipe(best.macros, target)
    for candidate in candidates[1:]:
        candidate_score = score_recipe(candidate.macros, target)
        if candidate_score < best_score:
            best = candidate
            best_score = candidate_score
    return best, best_score


def compute_scale(target_kcal, recipe_kcal):
    """Portion scale toward the slot calories, clamped to [MIN_SCALE, MAX_SCALE]."""
    raw_scale = target_kcal / (recipe_kcal or 1)
    return clamp(raw_scale, MIN_SCALE, MAX_SCALE)


def _check_targets(targets):
    if targets is None:
        raise ValidationError('Valid macro targets are required')
    if not isinstance(targets, MacroTarget):
        # Re-validate anything that did not come through MacroTarget
        MacroTarget(targets.kcal, targets.protein, targets.carbs, targets.fats)


def allocate(targets, candidates_by_slot):
    """
    Choose one recipe per meal slot.

    Args:
        targets: Daily MacroTarget
        candidates_by_slot: Dict of meal_type -> list of RecipeNutrition in
            catalog order

    Returns:
        List of ChosenMeal in MEAL_ORDER

    Raises:
        ValidationError: targets missing or not strictly positive
        CatalogGapError: a slot has no candidates (no partial result)
    """
    _check_targets(targets)

    # Fail before any selection work if the catalog is missing a slot
    for meal_type in MEAL_ORDER:
        if not candidates_by_slot.get(meal_type):
            raise CatalogGapError(meal_type)

    chosen = []
    for meal_type in MEAL_ORDER:
        target = slot_target(targets, meal_type)
        best, best_score = pick_best(candidates_by_slot[meal_type], target)

        # Achieved macros use the 2dp scale that gets stored with the plan
        scale_factor = round2(compute_scale(target.kcal, best.macros.kcal))
        chosen.append(ChosenMeal(
            meal_type=meal_type,
            recipe_id=best.recipe_id,
            recipe_name=best.name,
            scale_factor=scale_factor,
            base=best.macros.rounded(),
            achieved=best.macros.scaled(scale_factor).rounded(),
        ))
        logger.debug(
            'Allocated %s: recipe %s (%s) score=%.2f scale=%.2f',
            meal_type, best.recipe_id, best.name, best_score, scale_factor,
        )

    return chosen
