import os
import logging

import click
from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import config_dict
from models import db
from models.users import User
from classes.errors import QuizAppError
from routes.authentication import auth_bp
from routes.quizzes import quiz_bp
from routes.attempts import attempt_bp
from routes.stats import stats_bp
from utils.helpers import commit_session
from utils.logging_config import configure_logging

load_dotenv()

migrate = Migrate()
logger = logging.getLogger(__name__)


def register_error_handlers(app):
    @app.errorhandler(QuizAppError)
    def handle_quiz_error(error):
        return error.to_response()

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if error.code is None or error.code < 400:
            return error
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        logger.exception("Unhandled error: %s", error)
        return jsonify({"error": "Server error"}), 500


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("create-admin")
    @click.argument("email")
    @click.argument("password")
    @click.option("--name", default="Administrator")
    def create_admin(email, password, name):
        """Create an admin account, or reset the password of an existing one."""
        user = User.query.filter_by(email=email).first()
        if user:
            if user.role != "admin":
                raise click.ClickException(f"{email} exists and is not an admin")
            user.set_password(password)
            message = "Password updated successfully!"
        else:
            user = User(name=name, email=email, role="admin")
            user.set_password(password)
            db.session.add(user)
            message = "Admin created successfully!"
        commit_session()
        click.echo(message)


def create_app(config_name=None):
    env = config_name or os.environ.get("FLASK_ENV", "production")
    config_class = config_dict.get(env)
    if config_class is None:
        raise ValueError(f"Unknown configuration '{env}'")

    app = Flask(__name__)
    app.config.from_object(config_class)
    if not app.config.get("SECRET_KEY"):
        raise RuntimeError("SECRET_KEY must be set")

    configure_logging(app.config["LOG_LEVEL"])
    logger.info("Environment: %s", env)

    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"], "supports_credentials": True}})

    db.init_app(app)
    migrate.init_app(app, db)

    @app.route('/')
    def home():
        return "Welcome to the Quiz App!"

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(quiz_bp, url_prefix='/api/quiz')
    app.register_blueprint(attempt_bp, url_prefix='/api/attempt')
    app.register_blueprint(stats_bp, url_prefix='/api')

    register_error_handlers(app)
    register_commands(app)

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=app.config['DEBUG'])
