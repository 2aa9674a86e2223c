"""
Plan Persistence Service

Writes a user's plan for a date as one atomic unit: upsert the header keyed
by (user_id, plan_date), delete its items, insert the new items.
"""

import logging
import zlib
from contextlib import contextmanager

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from models import db, UserMealPlan, UserMealPlanItem

from .errors import PersistenceError, ValidationError
from .records import Macros, PersistResult

logger = logging.getLogger(__name__)


@contextmanager
def transaction_scope(session):
    """
    Commit on clean exit, roll back on any exception.

    Database errors are re-raised as PersistenceError; anything else is
    re-raised unchanged after the rollback.
    """
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception('Meal plan write rolled back')
        raise PersistenceError('Failed to save meal plan') from e
    except BaseException:
        session.rollback()
        raise


def plan_lock_key(user_id, plan_date):
    """Stable signed 32-bit key for (user_id, plan_date) advisory locks."""
    key = zlib.crc32(f'{user_id}:{plan_date.isoformat()}'.encode('utf-8'))
    return key - (1 << 32) if key >= (1 << 31) else key


def acquire_plan_lock(session, user_id, plan_date):
    """
    Serialize writers for one (user_id, plan_date).

    PostgreSQL gets a transaction-scoped advisory lock, released on commit or
    rollback. Other backends rely on the header row lock taken in
    _upsert_header and their own write serialization (SQLite).
    """
    if session.get_bind(mapper=UserMealPlan).dialect.name == 'postgresql':
        session.execute(
            text('SELECT pg_advisory_xact_lock(:key)'),
            {'key': plan_lock_key(user_id, plan_date)},
        )


def _upsert_header(session, user_id, plan_date, targets):
    plan = (
        session.query(UserMealPlan)
        .filter_by(user_id=user_id, plan_date=plan_date)
        .with_for_update()
        .first()
    )
    if plan is None:
        plan = UserMealPlan(user_id=user_id, plan_date=plan_date)
        session.add(plan)

    plan.target_kcal = targets.kcal
    plan.target_protein = targets.protein
    plan.target_carbs = targets.carbs
    plan.target_fats = targets.fats
    session.flush()
    return plan


def persist_plan(user_id, plan_date, targets, chosen_meals, session=None):
    """
    Create or fully replace the plan for (user_id, plan_date).

    An existing plan keeps its id and gets its targets overwritten; all of
    its items are removed and the new chosen meals are inserted. No retry is
    attempted here; regenerating is idempotent so callers may retry.

    Returns:
        PersistResult(plan_id, totals) where totals is the rounded sum of
        achieved macros

    Raises:
        ValidationError: empty chosen meal list
        PersistenceError: any database failure (already rolled back)
    """
    if not chosen_meals:
        raise ValidationError('At least one chosen meal is required')

    session = session or db.session

    with transaction_scope(session):
        acquire_plan_lock(session, user_id, plan_date)
        plan = _upsert_header(session, user_id, plan_date, targets)
        plan_id = plan.id

        session.query(UserMealPlanItem).filter_by(meal_plan_id=plan_id).delete(synchronize_session=False)
        for meal in chosen_meals:
            session.add(UserMealPlanItem(
                meal_plan_id=plan_id,
                meal_type=meal.meal_type,
                recipe_id=meal.recipe_id,
                scale_factor=meal.scale_factor,
            ))
        session.flush()

    totals = Macros.total(meal.achieved for meal in chosen_meals)
    logger.info(
        'Saved meal plan %s for user %s on %s (%d items)',
        plan_id, user_id, plan_date.isoformat(), len(chosen_meals),
    )
    return PersistResult(plan_id=plan_id, totals=totals)
