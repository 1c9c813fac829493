from flask import Flask
import click
import logging
import os

from .db import db, AccountDB, TaskDB, ensure_bootstrap_accounts
from .guard import login_manager
from .errors import register_error_handlers
from .credentials import DEFAULT_TOKEN_MAX_AGE

def create_app(testing=False, config=None):
    app = Flask(__name__)
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'dev-insecure-change-me')
    db_url = os.environ.get('TIMELINE_DATABASE_URL') or 'sqlite:///timeline.db'
    app.config['SQLALCHEMY_DATABASE_URI'] = db_url
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['TOKEN_MAX_AGE'] = int(os.environ.get('TOKEN_MAX_AGE', DEFAULT_TOKEN_MAX_AGE))
    app.config['BOOTSTRAP_ACCOUNTS'] = True
    app.json.sort_keys = False
    if testing:
        app.config['TESTING'] = True
        app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite:///:memory:'
    if config:
        app.config.update(config)
    if not app.debug and not app.testing:
        app.logger.setLevel(logging.INFO)

    db.init_app(app)
    login_manager.init_app(app)
    register_error_handlers(app)

    from .auth import auth_bp
    from .tasks import tasks_bp
    app.register_blueprint(auth_bp)
    app.register_blueprint(tasks_bp)

    with app.app_context():
        db.create_all()
        if app.config['BOOTSTRAP_ACCOUNTS']:
            ensure_bootstrap_accounts(db.session, app.logger)

    @app.cli.command('init-db')
    def init_db():
        """Create tables and the bootstrap accounts."""
        db.create_all()
        created = ensure_bootstrap_accounts(db.session, app.logger)
        click.echo(f"Database ready ({len(created)} account(s) created).")

    @app.get('/')
    def index():
        return "Timeline OK"  # simple health indicator

    return app

__all__ = ['create_app', 'db', 'AccountDB', 'TaskDB']
