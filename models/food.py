"""
Food Model

Contains the Food model: a basic ingredient with its macro composition
per 100 grams. Recipe nutrition is aggregated from these values.
"""

from .base import db


class Food(db.Model):
    """Ingredient with macros per 100 g."""
    __tablename__ = 'foods'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), unique=True, nullable=False, index=True)
    kcal_per_100g = db.Column(db.Float, nullable=False, default=0.0)
    protein_per_100g = db.Column(db.Float, nullable=False, default=0.0)
    carbs_per_100g = db.Column(db.Float, nullable=False, default=0.0)
    fats_per_100g = db.Column(db.Float, nullable=False, default=0.0)
