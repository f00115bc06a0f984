from flask import Blueprint, g, jsonify

from services import users
from services.recipes import list_recipes, recipe_summary
from utils.auth import login_required, admin_required
from . import json_body

bp = Blueprint('users', __name__)


@bp.route('')
@admin_required
def users_list():
    return jsonify([user.to_dict() for user in users.list_users()])


@bp.route('/<int:user_id>')
@login_required
def user_view(user_id):
    user = users.get_user(user_id)
    include_email = g.identity.user_id == user_id or g.identity.is_admin
    return jsonify(user.to_dict(include_email=include_email))


@bp.route('/by-username/<username>')
def user_by_username(username):
    return jsonify(users.get_user_by_username(username).to_dict(include_email=False))


@bp.route('/<int:user_id>/recipes')
def user_recipes(user_id):
    return jsonify([recipe_summary(r) for r in list_recipes(created_by=user_id)])


@bp.route('/<int:user_id>', methods=['PUT'])
@login_required
def user_update(user_id):
    user = users.update_user(user_id, json_body(), g.identity)
    return jsonify(user.to_dict())


@bp.route('/<int:user_id>', methods=['DELETE'])
@admin_required
def user_delete(user_id):
    users.delete_user(user_id)
    return jsonify({'message': 'User deleted successfully'})
