"""
Recipe Models

Contains the Recipe and RecipeItem models. A recipe belongs to one meal
slot and lists foods by weight; its base (1.0x) nutrition is the sum over
its items.
"""

from .base import db


class Recipe(db.Model):
    """Recipe tagged with the meal slot it can fill."""
    __tablename__ = 'recipes'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), unique=True, nullable=False, index=True)
    meal_type = db.Column(db.String(20), nullable=False, index=True)  # breakfast, lunch, dinner, snack
    prep_minutes = db.Column(db.Integer, default=0)
    items = db.relationship('RecipeItem', backref='recipe', lazy=True, cascade='all, delete-orphan')


class RecipeItem(db.Model):
    """Join table linking recipes to foods with a weight in grams."""
    __tablename__ = 'recipe_items'

    id = db.Column(db.Integer, primary_key=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False, index=True)
    food_id = db.Column(db.Integer, db.ForeignKey('foods.id', ondelete='CASCADE'), nullable=False, index=True)
    grams = db.Column(db.Float, nullable=False)
    food = db.relationship('Food')
