from flask import Blueprint, g, jsonify

from services import users
from utils.auth import issue_token, login_required
from . import json_body

bp = Blueprint('auth', __name__)


@bp.route('/register', methods=['POST'])
def register():
    data = json_body()
    user = users.register_user(
        data.get('username'), data.get('email'), data.get('password'),
        avatar_url=data.get('avatar_url'),
    )
    return jsonify({'token': issue_token(user), 'user': user.to_dict()}), 201


@bp.route('/login', methods=['POST'])
def login():
    data = json_body()
    user = users.authenticate_user(data.get('email'), data.get('password'))
    return jsonify({'token': issue_token(user), 'user': user.to_dict()})


@bp.route('/me')
@login_required
def me():
    return jsonify(users.get_user(g.identity.user_id).to_dict())
