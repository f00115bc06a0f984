"""
Recipe Service

The recipe write transaction (create, full-replace update, delete) and the
read path that reassembles a recipe with its ordered ingredients, steps and
tags.

Every write runs as one database transaction: either the recipe and all of
its ingredient, step and tag links are stored, or none of them are.
Child lists are replaced by delete-then-reinsert, which keeps order_index
dense (0..n-1) without diffing. Two concurrent updates of the same recipe's
child lists are not merged; the result of such a race is undefined.
"""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import joinedload, selectinload

from constants import RECIPE_TEXT_FIELDS, RECIPE_INT_FIELDS, MAX_LENGTHS, MAX_INT_FIELD
from models import db, Recipe, RecipeIngredient, Step, RecipeTag
from utils.sanitizer import sanitize_text, sanitize_line, sanitize_url
from .catalog import normalize_name, upsert_ingredient, upsert_tag
from .errors import (
    ValidationError, AuthorizationError, NotFoundError,
    ConflictError, UnexpectedStorageError,
)
from .fractions import parse_amount, decimal_to_fraction

logger = logging.getLogger(__name__)

_SINGLE_LINE_FIELDS = {'title'}
_URL_FIELDS = {'image_url'}


# ============================================
# INPUT NORMALIZATION
# ============================================

def _clean_text_field(field, value):
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f'{field} must be a string')
    if field in _URL_FIELDS:
        if value.strip() and not sanitize_url(value):
            raise ValidationError(f'{field} must be an http(s) URL')
        return sanitize_url(value)[:MAX_LENGTHS[field]]
    if field == 'source' and '://' in value:
        if not sanitize_url(value):
            raise ValidationError('source must be an http(s) URL')
        return sanitize_url(value)[:MAX_LENGTHS[field]]
    if field in _SINGLE_LINE_FIELDS:
        return sanitize_line(value, max_length=MAX_LENGTHS[field])
    return sanitize_text(value, max_length=MAX_LENGTHS[field])


def _clean_int_field(field, value):
    if value is None:
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            value = int(value.strip())
        except ValueError:
            raise ValidationError(f'{field} must be a whole number')
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f'{field} must be a whole number')
    if value < 0 or value > MAX_INT_FIELD:
        raise ValidationError(f'{field} is out of range')
    return value


def normalize_ingredients(items):
    """
    Validate a submitted ingredient list.

    Returns a list of dicts with `name`, `amount` (float or None) and
    `unit` (str or None), in submitted order.
    """
    if not isinstance(items, list):
        raise ValidationError('ingredients must be a list')
    result = []
    for position, item in enumerate(items):
        if isinstance(item, str):
            item = {'name': item}
        if not isinstance(item, dict):
            raise ValidationError(f'Ingredient {position + 1} is malformed')
        name = item.get('name')
        if not isinstance(name, str) or not name.strip():
            raise ValidationError(f'Ingredient {position + 1} needs a name')
        if len(normalize_name(name)) > MAX_LENGTHS['ingredient_name']:
            raise ValidationError(f'Ingredient {position + 1} name is too long')
        unit = item.get('unit')
        if unit is not None and not isinstance(unit, str):
            raise ValidationError(f'Ingredient {position + 1} has an invalid unit')
        unit = sanitize_line(unit, max_length=MAX_LENGTHS['unit']) if unit else None
        result.append({
            'name': name,
            'amount': parse_amount(item.get('amount')),
            'unit': unit or None,
        })
    return result


def normalize_step(step):
    """A step arrives as plain text or as {"instruction": text}; return the text."""
    if isinstance(step, dict):
        step = step.get('instruction')
    if step is None:
        return ''
    if not isinstance(step, str):
        raise ValidationError('Each step must be text or an object with an instruction')
    return sanitize_text(step, max_length=MAX_LENGTHS['step'])


def normalize_steps(items):
    if not isinstance(items, list):
        raise ValidationError('steps must be a list')
    steps = [normalize_step(step) for step in items]
    return [step for step in steps if step]


def normalize_tags(items):
    if not isinstance(items, list):
        raise ValidationError('tags must be a list')
    tags = []
    for tag in items:
        if not isinstance(tag, str):
            raise ValidationError('Each tag must be text')
        if len(normalize_name(tag)) > MAX_LENGTHS['tag_name']:
            raise ValidationError('Tag name is too long')
        if tag.strip():
            tags.append(tag)
    return tags


def _normalize_payload(data):
    """Split a request body into scalar fields and optional child lists."""
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')

    fields = {}
    for field in RECIPE_TEXT_FIELDS:
        if field in data:
            fields[field] = _clean_text_field(field, data[field])
    for field in RECIPE_INT_FIELDS:
        if field in data:
            fields[field] = _clean_int_field(field, data[field])

    children = {}
    if data.get('ingredients') is not None:
        children['ingredients'] = normalize_ingredients(data['ingredients'])
    if data.get('steps') is not None:
        children['steps'] = normalize_steps(data['steps'])
    if data.get('tags') is not None:
        children['tags'] = normalize_tags(data['tags'])
    return fields, children


# ============================================
# CHILD LIST WRITERS
# ============================================

def _insert_ingredients(recipe_id, ingredients):
    for index, ing in enumerate(ingredients):
        ingredient = upsert_ingredient(ing['name'])
        db.session.add(RecipeIngredient(
            recipe_id=recipe_id,
            ingredient_id=ingredient.id,
            amount=ing['amount'],
            unit=ing['unit'],
            order_index=index,
        ))


def _insert_steps(recipe_id, steps):
    for index, instruction in enumerate(steps):
        db.session.add(Step(recipe_id=recipe_id, instruction=instruction, order_index=index))


def _link_tags(recipe_id, tag_names):
    linked = set()
    for name in tag_names:
        tag = upsert_tag(name)
        # "Dinner" and "dinner " land on the same tag; link it once
        if tag.id in linked:
            continue
        linked.add(tag.id)
        db.session.add(RecipeTag(recipe_id=recipe_id, tag_id=tag.id))


def _run_in_transaction(action, work):
    """
    Run `work()` and commit. Any failure rolls the whole write back, so no
    partial recipe, link, step or tag survives.
    """
    try:
        result = work()
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        logger.warning("Recipe %s rolled back on constraint violation: %s", action, e.orig)
        raise ConflictError(f'Failed to {action} recipe: conflicting data')
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Recipe %s rolled back", action)
        raise UnexpectedStorageError(f'Failed to {action} recipe')
    except Exception:
        db.session.rollback()
        raise
    return result


# ============================================
# WRITE PROTOCOLS
# ============================================

def create_recipe(data, identity):
    """
    Create a recipe with its ingredients, steps and tags in one transaction.

    Raises ValidationError before touching the database when the title is
    missing or the payload is malformed.
    """
    fields, children = _normalize_payload(data)
    if not fields.get('title'):
        raise ValidationError('Title is required')

    def work():
        recipe = Recipe(created_by=identity.user_id, **{k: v for k, v in fields.items() if v is not None})
        db.session.add(recipe)
        db.session.flush()

        _insert_ingredients(recipe.id, children.get('ingredients', []))
        _insert_steps(recipe.id, children.get('steps', []))
        _link_tags(recipe.id, children.get('tags', []))
        return recipe

    recipe = _run_in_transaction('create', work)
    logger.info("User %s created recipe %d (%s)", identity.user_id, recipe.id, recipe.title)
    return recipe


def _get_owned_recipe(recipe_id, identity):
    recipe = db.session.get(Recipe, recipe_id)
    if recipe is None:
        raise NotFoundError('Recipe not found')
    if recipe.created_by != identity.user_id and not identity.is_admin:
        raise AuthorizationError('Not authorized to modify this recipe')
    return recipe


def update_recipe(recipe_id, data, identity):
    """
    Update a recipe owned by `identity` (or any recipe for an admin).

    Scalar fields absent from `data` or set to None keep their value. A
    supplied ingredients, steps or tags list replaces the stored one.
    """
    recipe = _get_owned_recipe(recipe_id, identity)
    fields, children = _normalize_payload(data)
    if 'title' in fields and fields['title'] is not None and not fields['title']:
        raise ValidationError('Title cannot be empty')

    def work():
        for field, value in fields.items():
            if value is not None:
                setattr(recipe, field, value)

        if 'ingredients' in children:
            RecipeIngredient.query.filter_by(recipe_id=recipe.id).delete(synchronize_session=False)
            _insert_ingredients(recipe.id, children['ingredients'])
        if 'steps' in children:
            Step.query.filter_by(recipe_id=recipe.id).delete(synchronize_session=False)
            _insert_steps(recipe.id, children['steps'])
        if 'tags' in children:
            RecipeTag.query.filter_by(recipe_id=recipe.id).delete(synchronize_session=False)
            _link_tags(recipe.id, children['tags'])

        if children:
            # Child rows changed behind the ORM collections
            recipe.updated_at = func.now()
            db.session.expire(recipe, ['ingredients', 'steps', 'recipe_tags'])
        return recipe

    recipe = _run_in_transaction('update', work)
    logger.info("User %s updated recipe %d", identity.user_id, recipe.id)
    return recipe


def delete_recipe(recipe_id, identity):
    """Delete a recipe; its links, steps and favorites go with it by cascade."""
    recipe = _get_owned_recipe(recipe_id, identity)

    def work():
        db.session.delete(recipe)

    _run_in_transaction('delete', work)
    logger.info("User %s deleted recipe %d", identity.user_id, recipe_id)


# ============================================
# READ PATH
# ============================================

def get_recipe(recipe_id):
    recipe = Recipe.query.options(
        joinedload(Recipe.author),
        selectinload(Recipe.ingredients).joinedload(RecipeIngredient.ingredient),
        selectinload(Recipe.steps),
        selectinload(Recipe.recipe_tags).joinedload(RecipeTag.tag),
    ).filter(Recipe.id == recipe_id).first()
    if recipe is None:
        raise NotFoundError('Recipe not found')
    return recipe


def list_recipes(q=None, tag_id=None, created_by=None):
    """Recipes newest first, optionally filtered by title text, tag or owner."""
    query = Recipe.query.options(
        joinedload(Recipe.author),
        selectinload(Recipe.recipe_tags).joinedload(RecipeTag.tag),
    )
    if q:
        query = query.filter(Recipe.title.ilike(f'%{q.strip()}%'))
    if tag_id is not None:
        query = query.join(RecipeTag, RecipeTag.recipe_id == Recipe.id).filter(RecipeTag.tag_id == tag_id)
    if created_by is not None:
        query = query.filter(Recipe.created_by == created_by)
    return query.order_by(Recipe.created_at.desc(), Recipe.id.desc()).all()


def _tags_of(recipe):
    tags = sorted((rt.tag for rt in recipe.recipe_tags), key=lambda t: t.name)
    return [{'id': t.id, 'name': t.name} for t in tags]


def recipe_summary(recipe):
    """Flat recipe row with author and tags, as used by listings."""
    data = {
        'id': recipe.id,
        'title': recipe.title,
        'description': recipe.description,
        'prep_time': recipe.prep_time,
        'cook_time': recipe.cook_time,
        'servings': recipe.servings,
        'source': recipe.source,
        'notes': recipe.notes,
        'image_url': recipe.image_url,
        'instructions': recipe.instructions,
        'markdown_content': recipe.markdown_content,
        'created_by': recipe.created_by,
        'author': recipe.author.username if recipe.author else None,
        'created_at': recipe.created_at.isoformat() if recipe.created_at else None,
        'updated_at': recipe.updated_at.isoformat() if recipe.updated_at else None,
    }
    data['tags'] = _tags_of(recipe)
    return data


def recipe_detail(recipe):
    """Recipe with nested ingredients and steps, each ordered by order_index."""
    data = recipe_summary(recipe)
    data['ingredients'] = [
        {
            'id': ri.id,
            'recipe_id': ri.recipe_id,
            'ingredient_id': ri.ingredient_id,
            'name': ri.ingredient.name,
            'amount': ri.amount,
            'amount_display': decimal_to_fraction(ri.amount),
            'unit': ri.unit,
            'order_index': ri.order_index,
        }
        for ri in recipe.ingredients
    ]
    data['steps'] = [
        {
            'id': step.id,
            'recipe_id': step.recipe_id,
            'instruction': step.instruction,
            'order_index': step.order_index,
        }
        for step in recipe.steps
    ]
    return data

