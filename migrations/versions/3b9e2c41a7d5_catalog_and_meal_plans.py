"""Catalog and meal plan tables

Revision ID: 3b9e2c41a7d5
Revises:
Create Date: 2026-10-19 12:40:11.482913

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3b9e2c41a7d5'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'foods',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('kcal_per_100g', sa.Float(), nullable=False),
        sa.Column('protein_per_100g', sa.Float(), nullable=False),
        sa.Column('carbs_per_100g', sa.Float(), nullable=False),
        sa.Column('fats_per_100g', sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_foods')),
    )
    with op.batch_alter_table('foods', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_foods_name'), ['name'], unique=True)

    op.create_table(
        'recipes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('meal_type', sa.String(length=20), nullable=False),
        sa.Column('prep_minutes', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_recipes')),
    )
    with op.batch_alter_table('recipes', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_recipes_name'), ['name'], unique=True)
        batch_op.create_index(batch_op.f('ix_recipes_meal_type'), ['meal_type'], unique=False)

    op.create_table(
        'recipe_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.Column('food_id', sa.Integer(), nullable=False),
        sa.Column('grams', sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(['food_id'], ['foods.id'], name=op.f('fk_recipe_items_food_id_foods'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipes.id'], name=op.f('fk_recipe_items_recipe_id_recipes'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_recipe_items')),
    )
    with op.batch_alter_table('recipe_items', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_recipe_items_recipe_id'), ['recipe_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_recipe_items_food_id'), ['food_id'], unique=False)

    op.create_table(
        'user_meal_plans',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('plan_date', sa.Date(), nullable=False),
        sa.Column('target_kcal', sa.Float(), nullable=False),
        sa.Column('target_protein', sa.Float(), nullable=False),
        sa.Column('target_carbs', sa.Float(), nullable=False),
        sa.Column('target_fats', sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_user_meal_plans')),
        sa.UniqueConstraint('user_id', 'plan_date', name='uq_user_meal_plans_user_date'),
    )
    with op.batch_alter_table('user_meal_plans', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_user_meal_plans_user_id'), ['user_id'], unique=False)

    op.create_table(
        'user_meal_plan_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('meal_plan_id', sa.Integer(), nullable=False),
        sa.Column('meal_type', sa.String(length=20), nullable=False),
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.Column('scale_factor', sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(['meal_plan_id'], ['user_meal_plans.id'], name=op.f('fk_user_meal_plan_items_meal_plan_id_user_meal_plans'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipes.id'], name=op.f('fk_user_meal_plan_items_recipe_id_recipes')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_user_meal_plan_items')),
    )
    with op.batch_alter_table('user_meal_plan_items', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_user_meal_plan_items_meal_plan_id'), ['meal_plan_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_user_meal_plan_items_recipe_id'), ['recipe_id'], unique=False)


def downgrade():
    op.drop_table('user_meal_plan_items')
    op.drop_table('user_meal_plans')
    op.drop_table('recipe_items')
    op.drop_table('recipes')
    op.drop_table('foods')
