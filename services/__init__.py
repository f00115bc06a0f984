"""
Services Package

Business logic modules for the recipe application.
"""

from .errors import (
    RecipeAppError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ConflictError,
    UnexpectedStorageError,
)

from .fractions import (
    decimal_to_fraction,
    fraction_to_decimal,
    normalize_fractions,
    parse_amount,
)

from .catalog import (
    normalize_name,
    upsert_ingredient,
    upsert_tag,
)

from .recipes import (
    create_recipe,
    update_recipe,
    delete_recipe,
    get_recipe,
    list_recipes,
    recipe_summary,
    recipe_detail,
)

__all__ = [
    # Errors
    'RecipeAppError',
    'ValidationError',
    'AuthenticationError',
    'AuthorizationError',
    'NotFoundError',
    'ConflictError',
    'UnexpectedStorageError',
    # Fractions
    'decimal_to_fraction',
    'fraction_to_decimal',
    'normalize_fractions',
    'parse_amount',
    # Catalog
    'normalize_name',
    'upsert_ingredient',
    'upsert_tag',
    # Recipes
    'create_recipe',
    'update_recipe',
    'delete_recipe',
    'get_recipe',
    'list_recipes',
    'recipe_summary',
    'recipe_detail',
]
