from flask import Blueprint, jsonify

from services import catalog
from services.recipes import recipe_summary
from utils.auth import login_required, admin_required
from . import json_body

bp = Blueprint('tags', __name__)


@bp.route('')
def tags_list():
    return jsonify([t.to_dict() for t in catalog.list_tags()])


@bp.route('/<int:tag_id>')
def tag_view(tag_id):
    return jsonify(catalog.get_tag(tag_id).to_dict())


@bp.route('/<int:tag_id>/recipes')
def tag_recipes(tag_id):
    return jsonify([recipe_summary(r) for r in catalog.recipes_for_tag(tag_id)])


@bp.route('', methods=['POST'])
@login_required
def tag_add():
    tag = catalog.create_tag(json_body().get('name'))
    return jsonify(tag.to_dict()), 201


@bp.route('/<int:tag_id>', methods=['PUT'])
@admin_required
def tag_edit(tag_id):
    tag = catalog.update_tag(tag_id, json_body().get('name'))
    return jsonify(tag.to_dict())


@bp.route('/<int:tag_id>', methods=['DELETE'])
@admin_required
def tag_delete(tag_id):
    catalog.delete_tag(tag_id)
    return jsonify({'message': 'Tag deleted successfully'})
