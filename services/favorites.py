"""
Favorites Service

Per-user bookmarks of recipes.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload, selectinload

from models import db, Favorite, Recipe, RecipeTag
from .errors import NotFoundError, ConflictError


def list_favorites(user_id):
    """The user's favorite recipes, most recently favorited first."""
    return (
        Recipe.query
        .join(Favorite, Favorite.recipe_id == Recipe.id)
        .filter(Favorite.user_id == user_id)
        .options(
            joinedload(Recipe.author),
            selectinload(Recipe.recipe_tags).joinedload(RecipeTag.tag),
        )
        .order_by(Favorite.created_at.desc(), Recipe.id.desc())
        .all()
    )


def is_favorited(user_id, recipe_id):
    return db.session.get(Favorite, (user_id, recipe_id)) is not None


def add_favorite(user_id, recipe_id):
    """Favorite a recipe. Favoriting it again is a no-op."""
    if db.session.get(Recipe, recipe_id) is None:
        raise NotFoundError('Recipe not found')
    if is_favorited(user_id, recipe_id):
        return
    db.session.add(Favorite(user_id=user_id, recipe_id=recipe_id))
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        # Losing a race with an identical request is fine; anything else is not
        if not is_favorited(user_id, recipe_id):
            raise ConflictError('Could not add favorite')


def remove_favorite(user_id, recipe_id):
    Favorite.query.filter_by(user_id=user_id, recipe_id=recipe_id).delete()
    db.session.commit()
