"""Tests for atomic plan persistence."""

import threading
from datetime import date
from types import SimpleNamespace

import pytest

from app import create_app
from models import db, Food, Recipe, UserMealPlan, UserMealPlanItem
from services import allocate, load_catalog, persist_plan, read_catalog, transaction_scope
from services.errors import PersistenceError, ValidationError
from services.persistence import acquire_plan_lock, plan_lock_key
from services.records import ChosenMeal, Macros, MacroTarget
from tests.conftest import CATALOG


PLAN_DATE = date(2024, 1, 1)
TARGETS = MacroTarget(kcal=2000, protein=150, carbs=200, fats=60)


def recipe_id(session, name):
    return session.query(Recipe).filter_by(name=name).one().id


def chosen(meal_type, rid, scale, kcal=100.0):
    base = Macros(kcal, 10.0, 10.0, 5.0)
    return ChosenMeal(
        meal_type=meal_type,
        recipe_id=rid,
        recipe_name=f'Recipe {rid}',
        scale_factor=scale,
        base=base,
        achieved=base.scaled(scale).rounded(),
    )


def stored_items(session, plan_id):
    rows = (
        session.query(UserMealPlanItem)
        .filter_by(meal_plan_id=plan_id)
        .order_by(UserMealPlanItem.id)
        .all()
    )
    return [(row.meal_type, row.recipe_id, row.scale_factor) for row in rows]


def test_persist_new_plan(catalog, session):
    meals = allocate(TARGETS, read_catalog(session))
    result = persist_plan(1, PLAN_DATE, TARGETS, meals, session=session)

    plan = session.get(UserMealPlan, result.plan_id)
    assert plan.user_id == 1
    assert plan.plan_date == PLAN_DATE
    assert plan.target_kcal == 2000
    assert stored_items(session, result.plan_id) == [
        (m.meal_type, m.recipe_id, m.scale_factor) for m in meals
    ]

    expected_kcal = sum(m.achieved.kcal for m in meals)
    assert result.totals.kcal == pytest.approx(expected_kcal, abs=0.01)


def test_totals_are_sum_of_achieved(session):
    meals = [chosen('breakfast', 1, 1.5), chosen('lunch', 2, 0.7)]
    result = persist_plan(1, PLAN_DATE, TARGETS, meals, session=session)
    assert result.totals == Macros(220.0, 22.0, 22.0, 11.0)


def test_regenerate_replaces_plan(catalog, session):
    porridge = recipe_id(session, 'Oat Porridge')
    eggs = recipe_id(session, 'Scrambled Eggs')
    bowl = recipe_id(session, 'Chicken Rice Bowl')
    salmon = recipe_id(session, 'Salmon and Rice')
    snack = recipe_id(session, 'Yogurt and Almonds')

    first = [chosen('breakfast', porridge, 1.5), chosen('lunch', bowl, 1.29),
             chosen('dinner', salmon, 1.01), chosen('snack', snack, 0.79)]
    second = [chosen('breakfast', eggs, 1.2), chosen('lunch', bowl, 1.0),
              chosen('dinner', salmon, 0.9)]

    first_result = persist_plan(1, PLAN_DATE, TARGETS, first, session=session)
    new_targets = MacroTarget(1800, 140, 180, 55)
    second_result = persist_plan(1, PLAN_DATE, new_targets, second, session=session)

    assert second_result.plan_id == first_result.plan_id
    assert session.query(UserMealPlan).count() == 1
    assert stored_items(session, second_result.plan_id) == [
        ('breakfast', eggs, 1.2), ('lunch', bowl, 1.0), ('dinner', salmon, 0.9),
    ]
    assert session.query(UserMealPlanItem).count() == 3

    plan = session.get(UserMealPlan, second_result.plan_id)
    assert (plan.target_kcal, plan.target_protein, plan.target_carbs, plan.target_fats) == (1800, 140, 180, 55)


def test_separate_plans_per_user_and_date(session):
    meals = [chosen('breakfast', 1, 1.0)]
    a = persist_plan(1, PLAN_DATE, TARGETS, meals, session=session)
    b = persist_plan(1, date(2024, 1, 2), TARGETS, meals, session=session)
    c = persist_plan(2, PLAN_DATE, TARGETS, meals, session=session)

    assert len({a.plan_id, b.plan_id, c.plan_id}) == 3
    assert session.query(UserMealPlan).count() == 3


def test_failed_write_rolls_back_everything(catalog, session):
    porridge = recipe_id(session, 'Oat Porridge')
    first = [chosen('breakfast', porridge, 1.5)]
    result = persist_plan(1, PLAN_DATE, TARGETS, first, session=session)

    # recipe_id is NOT NULL; the insert fails after header update and item delete
    broken = [chosen('breakfast', porridge, 1.0), chosen('lunch', None, 1.0)]
    with pytest.raises(PersistenceError) as exc:
        persist_plan(1, PLAN_DATE, MacroTarget(1500, 100, 100, 50), broken, session=session)
    assert exc.value.message == 'Failed to save meal plan'
    assert exc.value.__cause__ is not None

    plan = session.get(UserMealPlan, result.plan_id)
    assert plan.target_kcal == 2000
    assert stored_items(session, result.plan_id) == [('breakfast', porridge, 1.5)]


def test_empty_meal_list_rejected(session):
    with pytest.raises(ValidationError):
        persist_plan(1, PLAN_DATE, TARGETS, [], session=session)
    assert session.query(UserMealPlan).count() == 0


def test_transaction_scope_rolls_back_on_any_error(session):
    with pytest.raises(RuntimeError):
        with transaction_scope(session):
            session.add(Food(name='Ghost Pepper', kcal_per_100g=40))
            session.flush()
            raise RuntimeError('request timed out')

    assert session.query(Food).filter_by(name='Ghost Pepper').count() == 0


def test_transaction_scope_commits(session):
    with transaction_scope(session):
        session.add(Food(name='Kale', kcal_per_100g=49))
    session.rollback()
    assert session.query(Food).filter_by(name='Kale').count() == 1


def test_plan_lock_key_stable_and_signed_32bit():
    key = plan_lock_key(1, PLAN_DATE)
    assert key == plan_lock_key(1, date(2024, 1, 1))
    assert key != plan_lock_key(2, PLAN_DATE)
    assert -(1 << 31) <= key < (1 << 31)


class RecordingSession:
    """Stands in for a session bound to the given dialect; records executed SQL."""

    def __init__(self, dialect_name):
        self.bind = SimpleNamespace(dialect=SimpleNamespace(name=dialect_name))
        self.executed = []

    def get_bind(self, mapper=None, clause=None):
        return self.bind

    def execute(self, statement, params=None):
        self.executed.append((str(statement), params))


def test_postgresql_takes_advisory_lock_for_user_and_date():
    session = RecordingSession('postgresql')
    acquire_plan_lock(session, 1, PLAN_DATE)
    assert session.executed == [
        ('SELECT pg_advisory_xact_lock(:key)', {'key': plan_lock_key(1, PLAN_DATE)}),
    ]


def test_sqlite_takes_no_advisory_lock():
    session = RecordingSession('sqlite')
    acquire_plan_lock(session, 1, PLAN_DATE)
    assert session.executed == []


@pytest.fixture
def file_app(tmp_path):
    """App on a file-backed SQLite database so two threads share the data."""
    app = create_app('testing', SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'plans.db'}")
    with app.app_context():
        db.create_all()
        load_catalog(CATALOG)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.mark.parametrize('existing_plan', [False, True])
def test_concurrent_regeneration_keeps_one_consistent_plan(file_app, existing_plan):
    with file_app.app_context():
        breakfast = recipe_id(db.session, 'Oat Porridge')
        lunch = recipe_id(db.session, 'Chicken Rice Bowl')
        dinner = recipe_id(db.session, 'Salmon and Rice')
        snack = recipe_id(db.session, 'Yogurt and Almonds')
        if existing_plan:
            persist_plan(1, PLAN_DATE, TARGETS, [chosen('breakfast', breakfast, 0.5)])

    runs = {
        'first': [chosen('breakfast', breakfast, 1.25), chosen('lunch', lunch, 0.75)],
        'second': [chosen('dinner', dinner, 1.1), chosen('snack', snack, 0.9), chosen('lunch', lunch, 1.5)],
    }
    outcomes = {}
    barrier = threading.Barrier(len(runs))

    def regenerate(name, meals):
        with file_app.app_context():
            barrier.wait()
            try:
                persist_plan(1, PLAN_DATE, TARGETS, meals)
                outcomes[name] = 'saved'
            except PersistenceError:
                outcomes[name] = 'conflict'
            except Exception as e:  # surfaced through the assertions below
                outcomes[name] = repr(e)

    threads = [threading.Thread(target=regenerate, args=item) for item in runs.items()]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    assert set(outcomes.values()) <= {'saved', 'conflict'}, outcomes
    saved = [name for name, outcome in outcomes.items() if outcome == 'saved']
    assert saved

    with file_app.app_context():
        plans = db.session.query(UserMealPlan).filter_by(user_id=1, plan_date=PLAN_DATE).all()
        assert len(plans) == 1
        items = sorted(stored_items(db.session, plans[0].id))
        winners = [sorted((m.meal_type, m.recipe_id, m.scale_factor) for m in runs[name]) for name in saved]
        assert items in winners
