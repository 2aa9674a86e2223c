"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .food import Food
from .recipe import Recipe, RecipeItem
from .mealplan import UserMealPlan, UserMealPlanItem

__all__ = [
    'db',
    'Food',
    'Recipe',
    'RecipeItem',
    'UserMealPlan',
    'UserMealPlanItem',
]
