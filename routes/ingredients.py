from flask import Blueprint, jsonify

from services import catalog
from utils.auth import login_required, admin_required
from . import json_body

bp = Blueprint('ingredients', __name__)


@bp.route('')
def ingredients_list():
    return jsonify([i.to_dict() for i in catalog.list_ingredients()])


@bp.route('/<int:ingredient_id>')
def ingredient_view(ingredient_id):
    return jsonify(catalog.get_ingredient(ingredient_id).to_dict())


@bp.route('', methods=['POST'])
@login_required
def ingredient_add():
    ingredient = catalog.create_ingredient(json_body().get('name'))
    return jsonify(ingredient.to_dict()), 201


@bp.route('/<int:ingredient_id>', methods=['PUT'])
@admin_required
def ingredient_edit(ingredient_id):
    ingredient = catalog.update_ingredient(ingredient_id, json_body().get('name'))
    return jsonify(ingredient.to_dict())


@bp.route('/<int:ingredient_id>', methods=['DELETE'])
@admin_required
def ingredient_delete(ingredient_id):
    catalog.delete_ingredient(ingredient_id)
    return jsonify({'message': 'Ingredient deleted successfully'})
