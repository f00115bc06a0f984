"""
Family Recipes API

Flask application factory: configuration, logging, database, CORS,
blueprints and the JSON error handlers that map service errors to
HTTP status codes.

Usage:
    flask --app app init-db
    flask --app app run
"""

import logging

import click
from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import get_config
from models import db, User
from routes import register_blueprints
from services.errors import RecipeAppError

logger = logging.getLogger(__name__)

migrate = Migrate()


def configure_logging(app):
    logging.basicConfig(
        level=getattr(logging, app.config['LOG_LEVEL'], logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def register_error_handlers(app):
    @app.errorhandler(RecipeAppError)
    def handle_app_error(error):
        if error.status_code >= 500:
            logger.error("%s: %s", type(error).__name__, error.message)
        return jsonify({'error': error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        logger.exception("Unhandled error")
        return jsonify({'error': 'Internal server error'}), 500


def register_commands(app):
    @app.cli.command('init-db')
    def init_db_command():
        """Create all tables."""
        db.create_all()
        click.echo('Initialized the database.')

    @app.cli.command('create-admin')
    @click.argument('username')
    @click.argument('email')
    @click.password_option()
    def create_admin_command(username, email, password):
        """Create an admin account, or promote an existing one."""
        from services.users import register_user

        user = User.query.filter_by(email=email.strip().lower()).first()
        if user is None:
            user = register_user(username, email, password)
        user.is_admin = True
        db.session.commit()
        click.echo(f'Admin "{user.username}" ready.')


def create_app(env=None):
    app = Flask(__name__)
    app.config.from_object(get_config(env))
    app.json.sort_keys = False

    configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)
    CORS(app, resources={r'/api/*': {'origins': app.config['CORS_ORIGINS']}})

    register_blueprints(app)
    register_error_handlers(app)
    register_commands(app)

    @app.route('/health')
    def health():
        return jsonify({'status': 'ok', 'service': 'family-recipes-api'})

    logger.info("Family recipes API configured (debug=%s)", app.debug)
    return app


if __name__ == '__main__':
    app = create_app()
    with app.app_context():
        db.create_all()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(host='0.0.0.0', port=3001, use_reloader=False)
