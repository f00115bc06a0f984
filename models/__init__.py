"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .user import User
from .ingredient import Ingredient
from .recipe import Recipe, RecipeIngredient, Step
from .tag import Tag, RecipeTag
from .favorite import Favorite

__all__ = [
    'db',
    'User',
    'Ingredient',
    'Recipe',
    'RecipeIngredient',
    'Step',
    'Tag',
    'RecipeTag',
    'Favorite',
]
