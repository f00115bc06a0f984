"""
Catalog Service

Shared ingredient and tag rows: name normalization, insert-or-return-existing
upserts used by the recipe write path, and the admin CRUD around them.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from constants import MAX_LENGTHS
from models import db, Ingredient, Tag, Recipe, RecipeTag
from .errors import ValidationError, NotFoundError, ConflictError, UnexpectedStorageError

logger = logging.getLogger(__name__)


def normalize_name(name):
    """Canonical form for ingredient and tag names: trimmed, lowercase."""
    if name is None:
        return ''
    if not isinstance(name, str):
        raise ValidationError('Name must be a string')
    return ' '.join(name.split()).lower()


def _require_name(name, field):
    normalized = normalize_name(name)
    if not normalized:
        raise ValidationError('Name is required')
    if len(normalized) > MAX_LENGTHS[field]:
        raise ValidationError(f'Name must be at most {MAX_LENGTHS[field]} characters')
    return normalized


def _upsert_by_name(model, normalized):
    """
    Return the row of `model` named `normalized`, inserting it if absent.

    Runs inside the caller's transaction. The insert happens in a SAVEPOINT
    so a concurrent insert of the same name (unique violation) only undoes
    the savepoint, after which the winner's row is read back.
    """
    row = model.query.filter_by(name=normalized).first()
    if row is not None:
        return row
    try:
        with db.session.begin_nested():
            row = model(name=normalized)
            db.session.add(row)
    except IntegrityError:
        logger.info("%s %r inserted concurrently, reusing existing row", model.__name__, normalized)
        row = model.query.filter_by(name=normalized).one()
    return row


def upsert_ingredient(name):
    return _upsert_by_name(Ingredient, _require_name(name, 'ingredient_name'))


def upsert_tag(name):
    return _upsert_by_name(Tag, _require_name(name, 'tag_name'))


def _commit(conflict_message):
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        logger.warning("Unique constraint violation: %s", e.orig)
        raise ConflictError(conflict_message)
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Catalog write failed")
        raise UnexpectedStorageError()


# ============================================
# INGREDIENTS
# ============================================

def list_ingredients():
    return Ingredient.query.order_by(Ingredient.name).all()


def get_ingredient(ingredient_id):
    ingredient = db.session.get(Ingredient, ingredient_id)
    if ingredient is None:
        raise NotFoundError('Ingredient not found')
    return ingredient


def create_ingredient(name):
    normalized = _require_name(name, 'ingredient_name')
    if Ingredient.query.filter_by(name=normalized).first():
        raise ConflictError('Ingredient already exists')
    ingredient = Ingredient(name=normalized)
    db.session.add(ingredient)
    _commit('Ingredient already exists')
    return ingredient


def update_ingredient(ingredient_id, name):
    normalized = _require_name(name, 'ingredient_name')
    ingredient = get_ingredient(ingredient_id)
    ingredient.name = normalized
    _commit('Ingredient name already exists')
    return ingredient


def delete_ingredient(ingredient_id):
    ingredient = get_ingredient(ingredient_id)
    name = ingredient.name
    db.session.delete(ingredient)
    _commit('Ingredient is still referenced')
    logger.info("Deleted ingredient %d (%s)", ingredient_id, name)


# ============================================
# TAGS
# ============================================

def list_tags():
    return Tag.query.order_by(Tag.name).all()


def get_tag(tag_id):
    tag = db.session.get(Tag, tag_id)
    if tag is None:
        raise NotFoundError('Tag not found')
    return tag


def create_tag(name):
    normalized = _require_name(name, 'tag_name')
    if Tag.query.filter_by(name=normalized).first():
        raise ConflictError('Tag already exists')
    tag = Tag(name=normalized)
    db.session.add(tag)
    _commit('Tag already exists')
    return tag


def update_tag(tag_id, name):
    normalized = _require_name(name, 'tag_name')
    tag = get_tag(tag_id)
    tag.name = normalized
    _commit('Tag name already exists')
    return tag


def delete_tag(tag_id):
    tag = get_tag(tag_id)
    name = tag.name
    db.session.delete(tag)
    _commit('Tag is still referenced')
    logger.info("Deleted tag %d (%s)", tag_id, name)


def recipes_for_tag(tag_id):
    """Recipes carrying the tag, newest first. Unknown tag ids give an empty list."""
    return (
        Recipe.query
        .join(RecipeTag, RecipeTag.recipe_id == Recipe.id)
        .filter(RecipeTag.tag_id == tag_id)
        .order_by(Recipe.created_at.desc(), Recipe.id.desc())
        .all()
    )
