"""
Recipe Catalog Service

Reads per-recipe nutrition aggregated from ingredient composition and loads
catalog data (foods and recipes) into the database.
"""

import logging

from sqlalchemy import func

from constants import MEAL_ORDER, VALID_MEAL_TYPES, MAX_LENGTHS
from models import db, Food, Recipe, RecipeItem

from .errors import ValidationError
from .records import Macros, RecipeNutrition

logger = logging.getLogger(__name__)


def _macro_sum(column):
    return func.sum(column * RecipeItem.grams / 100.0)


def recipe_macros_subquery(session):
    """
    Subquery of base (1.0x) macros per recipe:
    SUM(per_100g * grams / 100) over the recipe's items.

    Columns: recipe_id, kcal, protein, carbs, fats
    """
    return (
        session.query(
            RecipeItem.recipe_id.label('recipe_id'),
            _macro_sum(Food.kcal_per_100g).label('kcal'),
            _macro_sum(Food.protein_per_100g).label('protein'),
            _macro_sum(Food.carbs_per_100g).label('carbs'),
            _macro_sum(Food.fats_per_100g).label('fats'),
        )
        .join(Food, Food.id == RecipeItem.food_id)
        .group_by(RecipeItem.recipe_id)
        .subquery()
    )


def read_catalog(session=None):
    """
    Return recipe nutrition grouped by meal slot.

    Every slot in MEAL_ORDER is present in the result (possibly empty).
    Within a slot, recipes are in ascending id order. Recipes without any
    ingredients are not candidates.
    """
    session = session or db.session
    macros = recipe_macros_subquery(session)

    rows = (
        session.query(
            Recipe.id,
            Recipe.name,
            Recipe.meal_type,
            Recipe.prep_minutes,
            macros.c.kcal,
            macros.c.protein,
            macros.c.carbs,
            macros.c.fats,
        )
        .join(macros, macros.c.recipe_id == Recipe.id)
        .order_by(Recipe.id)
        .all()
    )

    by_meal_type = {meal_type: [] for meal_type in MEAL_ORDER}
    for row in rows:
        meal_type = (row.meal_type or '').lower()
        if meal_type not in by_meal_type:
            logger.warning('Skipping recipe %s with unknown meal type %r', row.id, row.meal_type)
            continue
        by_meal_type[meal_type].append(RecipeNutrition(
            recipe_id=row.id,
            name=row.name,
            meal_type=meal_type,
            macros=Macros(
                kcal=float(row.kcal or 0),
                protein=float(row.protein or 0),
                carbs=float(row.carbs or 0),
                fats=float(row.fats or 0),
            ),
            prep_minutes=row.prep_minutes or 0,
        ))

    logger.debug('Catalog read: %s', {k: len(v) for k, v in by_meal_type.items()})
    return by_meal_type


# ============================================
# CATALOG LOADING
# ============================================

def _clean_name(value, kind):
    name = str(value or '').strip()
    if not name:
        raise ValidationError(f'{kind.capitalize()} name is required', field='name')
    return name[:MAX_LENGTHS[f'{kind}_name']]


def _non_negative(value, field):
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be a number', field=field)
    if number < 0:
        raise ValidationError(f'{field} must not be negative', field=field)
    return number


def load_catalog(data, session=None):
    """
    Load foods and recipes from a dict shaped like:

        {
          "foods": [{"name": "Oats", "kcal": 389, "protein": 16.9, "carbs": 66.3, "fats": 6.9}],
          "recipes": [{"name": "Porridge", "mealType": "breakfast", "prepMinutes": 5,
                       "items": [{"food": "Oats", "grams": 80}]}]
        }

    Food macros are per 100 g. Foods and recipes are upserted by name; a
    recipe's items are replaced. Everything is committed at once or not at all.

    Returns:
        (food_count, recipe_count) loaded
    """
    session = session or db.session
    foods_by_name = {}

    try:
        for entry in data.get('foods', []):
            name = _clean_name(entry.get('name'), 'food')
            food = session.query(Food).filter_by(name=name).first()
            if food is None:
                food = Food(name=name)
                session.add(food)
            food.kcal_per_100g = _non_negative(entry.get('kcal', 0), 'kcal')
            food.protein_per_100g = _non_negative(entry.get('protein', 0), 'protein')
            food.carbs_per_100g = _non_negative(entry.get('carbs', 0), 'carbs')
            food.fats_per_100g = _non_negative(entry.get('fats', 0), 'fats')
            foods_by_name[name.lower()] = food
        session.flush()

        recipe_count = 0
        for entry in data.get('recipes', []):
            name = _clean_name(entry.get('name'), 'recipe')
            meal_type = str(entry.get('mealType') or entry.get('meal_type') or '').strip().lower()
            if meal_type not in VALID_MEAL_TYPES:
                raise ValidationError(f'Invalid meal type for recipe "{name}": {meal_type!r}', field='mealType')

            recipe = session.query(Recipe).filter_by(name=name).first()
            if recipe is None:
                recipe = Recipe(name=name)
                session.add(recipe)
            recipe.meal_type = meal_type
            recipe.prep_minutes = int(_non_negative(entry.get('prepMinutes', entry.get('prep_minutes', 0)), 'prepMinutes'))

            recipe.items = []
            for item in entry.get('items', []):
                food_name = str(item.get('food') or '').strip()
                food = foods_by_name.get(food_name.lower())
                if food is None:
                    food = session.query(Food).filter(func.lower(Food.name) == food_name.lower()).first()
                if food is None:
                    raise ValidationError(f'Unknown food "{food_name}" in recipe "{name}"', field='food')
                recipe.items.append(RecipeItem(food=food, grams=_non_negative(item.get('grams'), 'grams')))
            recipe_count += 1

        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info('Loaded %d foods and %d recipes into catalog', len(foods_by_name), recipe_count)
    return len(foods_by_name), recipe_count
