from flask import Blueprint, g, jsonify

from services import favorites
from services.recipes import recipe_summary
from utils.auth import login_required

bp = Blueprint('favorites', __name__)


@bp.route('')
@login_required
def favorites_list():
    found = favorites.list_favorites(g.identity.user_id)
    return jsonify([dict(recipe_summary(r), is_favorited=True) for r in found])


@bp.route('/<int:recipe_id>', methods=['POST'])
@login_required
def favorite_add(recipe_id):
    favorites.add_favorite(g.identity.user_id, recipe_id)
    return jsonify({'message': 'Recipe added to favorites'}), 201


@bp.route('/<int:recipe_id>', methods=['DELETE'])
@login_required
def favorite_delete(recipe_id):
    favorites.remove_favorite(g.identity.user_id, recipe_id)
    return jsonify({'message': 'Recipe removed from favorites'})


@bp.route('/check/<int:recipe_id>')
@login_required
def favorite_check(recipe_id):
    return jsonify({'is_favorited': favorites.is_favorited(g.identity.user_id, recipe_id)})
