"""
Plan Retrieval Service

Rebuilds a stored plan for display. Item macros are recomputed from the
current recipe composition times the stored scale factor, so a plan always
reflects today's recipe definitions (freshness over immutability).
"""

import logging

from constants import MEAL_ORDER
from models import db, Recipe, UserMealPlan, UserMealPlanItem

from .catalog import recipe_macros_subquery
from .errors import NotFoundError
from .records import ChosenMeal, Macros, MealPlan, round2

logger = logging.getLogger(__name__)


def _slot_position(meal_type):
    try:
        return MEAL_ORDER.index(meal_type)
    except ValueError:
        return len(MEAL_ORDER)


def fetch_plan(user_id, plan_date, session=None):
    """
    Look up the plan for (user_id, plan_date).

    Items are returned in slot order. An item whose recipe no longer has any
    ingredients keeps its slot with zero macros.

    Raises:
        NotFoundError: no plan stored for that user and date
    """
    session = session or db.session

    plan = session.query(UserMealPlan).filter_by(user_id=user_id, plan_date=plan_date).first()
    if plan is None:
        raise NotFoundError('Meal plan not found for date')

    macros = recipe_macros_subquery(session)
    rows = (
        session.query(
            UserMealPlanItem.id,
            UserMealPlanItem.meal_type,
            UserMealPlanItem.recipe_id,
            UserMealPlanItem.scale_factor,
            Recipe.name,
            macros.c.kcal,
            macros.c.protein,
            macros.c.carbs,
            macros.c.fats,
        )
        .join(Recipe, Recipe.id == UserMealPlanItem.recipe_id)
        .outerjoin(macros, macros.c.recipe_id == Recipe.id)
        .filter(UserMealPlanItem.meal_plan_id == plan.id)
        .order_by(UserMealPlanItem.id)
        .all()
    )

    items = []
    for row in sorted(rows, key=lambda r: _slot_position(r.meal_type)):
        base = Macros(
            kcal=float(row.kcal or 0),
            protein=float(row.protein or 0),
            carbs=float(row.carbs or 0),
            fats=float(row.fats or 0),
        )
        scale_factor = round2(row.scale_factor)
        items.append(ChosenMeal(
            meal_type=row.meal_type,
            recipe_id=row.recipe_id,
            recipe_name=row.name,
            scale_factor=scale_factor,
            base=base.rounded(),
            achieved=base.scaled(scale_factor).rounded(),
        ))

    logger.debug('Fetched meal plan %s for user %s with %d items', plan.id, user_id, len(items))
    return MealPlan(
        id=plan.id,
        user_id=plan.user_id,
        plan_date=plan.plan_date,
        targets=Macros(plan.target_kcal, plan.target_protein, plan.target_carbs, plan.target_fats),
        items=tuple(items),
        achieved=Macros.total(item.achieved for item in items),
    )
