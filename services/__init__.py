"""
Services Package

Business logic for target derivation, meal allocation and plan storage.
"""

from .errors import (
    PlannerError,
    ValidationError,
    CatalogGapError,
    PersistenceError,
    NotFoundError,
)

from .records import (
    Macros,
    MacroTarget,
    RecipeNutrition,
    ChosenMeal,
    MealPlan,
    PersistResult,
    Profile,
    TargetDerivation,
)

from .targets import (
    mifflin_st_jeor,
    derive_targets,
)

from .allocator import (
    score_recipe,
    compute_scale,
    allocate,
)

from .catalog import (
    read_catalog,
    load_catalog,
)

from .persistence import (
    transaction_scope,
    persist_plan,
)

from .retrieval import (
    fetch_plan,
)

from .planning import (
    generate_plan,
)

__all__ = [
    # Errors
    'PlannerError',
    'ValidationError',
    'CatalogGapError',
    'PersistenceError',
    'NotFoundError',
    # Records
    'Macros',
    'MacroTarget',
    'RecipeNutrition',
    'ChosenMeal',
    'MealPlan',
    'PersistResult',
    'Profile',
    'TargetDerivation',
    # Targets
    'mifflin_st_jeor',
    'derive_targets',
    # Allocation
    'score_recipe',
    'compute_scale',
    'allocate',
    # Catalog
    'read_catalog',
    'load_catalog',
    # Persistence
    'transaction_scope',
    'persist_plan',
    # Retrieval
    'fetch_plan',
    # Planning
    'generate_plan',
]
