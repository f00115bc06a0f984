from flask import Blueprint, g, jsonify, request

from services import recipes
from utils.auth import login_required
from . import json_body

bp = Blueprint('recipes', __name__)


@bp.route('')
def recipes_list():
    q = request.args.get('q', '').strip() or None
    tag_id = request.args.get('tag', type=int)
    found = recipes.list_recipes(q=q, tag_id=tag_id)
    return jsonify([recipes.recipe_summary(r) for r in found])


@bp.route('/<int:recipe_id>')
def recipe_view(recipe_id):
    return jsonify(recipes.recipe_detail(recipes.get_recipe(recipe_id)))


@bp.route('', methods=['POST'])
@login_required
def recipe_add():
    recipe = recipes.create_recipe(json_body(), g.identity)
    return jsonify(recipes.recipe_detail(recipes.get_recipe(recipe.id))), 201


@bp.route('/<int:recipe_id>', methods=['PUT'])
@login_required
def recipe_edit(recipe_id):
    recipes.update_recipe(recipe_id, json_body(), g.identity)
    return jsonify(recipes.recipe_detail(recipes.get_recipe(recipe_id)))


@bp.route('/<int:recipe_id>', methods=['DELETE'])
@login_required
def recipe_delete(recipe_id):
    recipes.delete_recipe(recipe_id, g.identity)
    return jsonify({'message': 'Recipe deleted successfully'})
