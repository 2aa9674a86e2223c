"""
Meal Planning Service

Runs one planning request end to end: read the catalog, allocate one recipe
per slot, then persist the plan as a full replace.
"""

from models import db

from .allocator import allocate
from .catalog import read_catalog
from .persistence import persist_plan
from .records import MealPlan


def generate_plan(user_id, plan_date, targets, session=None):
    """
    Generate and store the plan for (user_id, plan_date).

    Regenerating for the same date replaces the previous plan. Allocation is
    deterministic for a given catalog, so retrying after a PersistenceError
    yields the same plan.

    Returns:
        MealPlan with the chosen meals and achieved totals
    """
    session = session or db.session

    candidates = read_catalog(session)
    chosen = allocate(targets, candidates)
    result = persist_plan(user_id, plan_date, targets, chosen, session=session)

    return MealPlan(
        id=result.plan_id,
        user_id=user_id,
        plan_date=plan_date,
        targets=targets,
        items=tuple(chosen),
        achieved=result.totals,
    )
