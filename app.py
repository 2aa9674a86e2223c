"""
Meal Planner Application

Flask application factory: configuration, logging, database, migrations,
JSON error handling, routes and CLI commands.
"""

import json
import logging

import click
from flask import Flask, jsonify
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import get_config
from models import db
from routes import api, health
from services import load_catalog
from services.errors import PlannerError

logger = logging.getLogger(__name__)

migrate = Migrate()


def configure_logging(app):
    """Configure root logging once from LOG_LEVEL."""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )
    logging.getLogger().setLevel(level)
    app.logger.setLevel(level)


def register_error_handlers(app):
    @app.errorhandler(PlannerError)
    def handle_planner_error(e):
        if e.status_code >= 500:
            # Opaque to the client, details stay in the log
            logger.error('Planning request failed: %s', e.message)
        return jsonify({'success': False, 'message': e.message}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({'success': False, 'message': e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.exception('Unhandled error')
        db.session.rollback()
        return jsonify({'success': False, 'message': 'Internal server error'}), 500


def register_commands(app):
    @app.cli.command('init-db')
    def init_db_command():
        """Create database tables."""
        init_db(app)
        click.echo('Database initialized.')

    @app.cli.command('load-catalog')
    @click.argument('path', type=click.Path(exists=True, dir_okay=False))
    def load_catalog_command(path):
        """Load foods and recipes from a JSON file."""
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        food_count, recipe_count = load_catalog(data)
        click.echo(f'Loaded {food_count} foods and {recipe_count} recipes.')


def init_db(app):
    """Create all tables that do not exist yet."""
    with app.app_context():
        db.create_all()


def create_app(config_name=None, **overrides):
    """
    Build the application.

    Args:
        config_name: 'development', 'production' or 'testing'; defaults to FLASK_ENV
        overrides: Config keys applied on top of the selected config
    """
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))
    app.config.update(overrides)
    app.json.sort_keys = False

    configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)

    app.register_blueprint(health)
    app.register_blueprint(api)

    register_error_handlers(app)
    register_commands(app)

    return app


if __name__ == '__main__':
    application = create_app()
    init_db(application)
    application.run(debug=True, host='0.0.0.0', port=5000, use_reloader=False)
