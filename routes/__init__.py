"""
Routes Package

JSON API blueprints, all mounted under /api.
"""

from flask import request

from services.errors import ValidationError


def json_body():
    """The request's JSON object body, or a ValidationError."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def register_blueprints(app):
    from .auth import bp as auth_bp
    from .users import bp as users_bp
    from .recipes import bp as recipes_bp
    from .ingredients import bp as ingredients_bp
    from .tags import bp as tags_bp
    from .favorites import bp as favorites_bp
    from .fractions import bp as fractions_bp

    for blueprint in (auth_bp, users_bp, recipes_bp, ingredients_bp, tags_bp, favorites_bp, fractions_bp):
        app.register_blueprint(blueprint, url_prefix=f'/api/{blueprint.name}')
