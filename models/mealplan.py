"""
Meal Plan Models

Contains the UserMealPlan header (one per user per date) and its
UserMealPlanItem line items (one per meal slot).
"""

from .base import db


class UserMealPlan(db.Model):
    """Daily plan header holding the macro targets it was generated for."""
    __tablename__ = 'user_meal_plans'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'plan_date', name='uq_user_meal_plans_user_date'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=False, index=True)
    plan_date = db.Column(db.Date, nullable=False)
    target_kcal = db.Column(db.Float, nullable=False)
    target_protein = db.Column(db.Float, nullable=False)
    target_carbs = db.Column(db.Float, nullable=False)
    target_fats = db.Column(db.Float, nullable=False)
    items = db.relationship('UserMealPlanItem', backref='meal_plan', lazy=True, cascade='all, delete-orphan')


class UserMealPlanItem(db.Model):
    """Chosen recipe for one slot. Macros are not stored, only the scale."""
    __tablename__ = 'user_meal_plan_items'

    id = db.Column(db.Integer, primary_key=True)
    meal_plan_id = db.Column(db.Integer, db.ForeignKey('user_meal_plans.id', ondelete='CASCADE'), nullable=False, index=True)
    meal_type = db.Column(db.String(20), nullable=False)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipes.id'), nullable=False, index=True)
    scale_factor = db.Column(db.Float, nullable=False)
    recipe = db.relationship('Recipe')
