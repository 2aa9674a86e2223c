"""
Shared fixtures: an application in testing config backed by in-memory
SQLite, created fresh for each test, and a small seeded catalog.
"""

import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app  # noqa: E402
from models import db as _db  # noqa: E402
from services import load_catalog  # noqa: E402
from services.records import Macros, RecipeNutrition  # noqa: E402


# Per-100g macros chosen so recipe totals are easy to check by hand:
#   Oat Porridge        (oats 80g)                       304.0 kcal  10.4 P  53.6 C   5.6 F
#   Scrambled Eggs      (egg 150g)                       214.5 kcal  18.9 P   1.05 C 14.25 F
#   Chicken Rice Bowl   (chicken 150g, rice 200g, broccoli 100g)
#                                                        541.5 kcal  54.7 P  63.0 C   6.4 F
#   Salmon and Rice     (salmon 150g, rice 150g, oil 10g) 595.4 kcal 34.05 P 42.0 C  29.95 F
#   Yogurt and Almonds  (yogurt 170g, almonds 15g)       251.75 kcal 18.45 P 9.93 C 16.0 F
CATALOG = {
    'foods': [
        {'name': 'Oats', 'kcal': 380, 'protein': 13, 'carbs': 67, 'fats': 7},
        {'name': 'Egg', 'kcal': 143, 'protein': 12.6, 'carbs': 0.7, 'fats': 9.5},
        {'name': 'Chicken Breast', 'kcal': 165, 'protein': 31, 'carbs': 0, 'fats': 3.6},
        {'name': 'Rice', 'kcal': 130, 'protein': 2.7, 'carbs': 28, 'fats': 0.3},
        {'name': 'Broccoli', 'kcal': 34, 'protein': 2.8, 'carbs': 7, 'fats': 0.4},
        {'name': 'Salmon', 'kcal': 208, 'protein': 20, 'carbs': 0, 'fats': 13},
        {'name': 'Olive Oil', 'kcal': 884, 'protein': 0, 'carbs': 0, 'fats': 100},
        {'name': 'Greek Yogurt', 'kcal': 97, 'protein': 9, 'carbs': 3.9, 'fats': 5},
        {'name': 'Almonds', 'kcal': 579, 'protein': 21, 'carbs': 22, 'fats': 50},
    ],
    'recipes': [
        {'name': 'Oat Porridge', 'mealType': 'breakfast', 'prepMinutes': 5,
         'items': [{'food': 'Oats', 'grams': 80}]},
        {'name': 'Scrambled Eggs', 'mealType': 'breakfast', 'prepMinutes': 10,
         'items': [{'food': 'Egg', 'grams': 150}]},
        {'name': 'Chicken Rice Bowl', 'mealType': 'lunch', 'prepMinutes': 25,
         'items': [{'food': 'Chicken Breast', 'grams': 150}, {'food': 'Rice', 'grams': 200},
                   {'food': 'Broccoli', 'grams': 100}]},
        {'name': 'Salmon and Rice', 'mealType': 'dinner', 'prepMinutes': 30,
         'items': [{'food': 'Salmon', 'grams': 150}, {'food': 'Rice', 'grams': 150},
                   {'food': 'Olive Oil', 'grams': 10}]},
        {'name': 'Yogurt and Almonds', 'mealType': 'snack', 'prepMinutes': 2,
         'items': [{'food': 'Greek Yogurt', 'grams': 170}, {'food': 'Almonds', 'grams': 15}]},
    ],
}

TARGET_PAYLOAD = {
    'targetKcal': 2000,
    'targetProtein': 150,
    'targetCarbs': 200,
    'targetFats': 60,
}


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def session(db):
    return db.session


@pytest.fixture
def catalog(session):
    load_catalog(CATALOG, session)
    return CATALOG


@pytest.fixture
def client(app):
    return app.test_client()


def make_recipe(recipe_id, meal_type, kcal, protein, carbs, fats, name=None):
    """Build a RecipeNutrition without touching the database."""
    return RecipeNutrition(
        recipe_id=recipe_id,
        name=name or f'Recipe {recipe_id}',
        meal_type=meal_type,
        macros=Macros(kcal, protein, carbs, fats),
    )
