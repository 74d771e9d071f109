import os
import atexit
import logging
from flask import Flask, flash, redirect, render_template, request, url_for
from flask_login import LoginManager
from flask_sqlalchemy import SQLAlchemy
from flask_wtf.csrf import CSRFProtect
from dotenv import load_dotenv
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

# Load environment variables from .env
load_dotenv()

from config import config_map, DevelopmentConfig

logger = logging.getLogger(__name__)

# Initialize extensions without app
login_manager = LoginManager()
login_manager.login_view = 'auth.login'
login_manager.login_message = "Please log in to continue."
login_manager.login_message_category = "error"

db = SQLAlchemy()
csrf = CSRFProtect()


def create_app(config_name=None, **overrides):
    app = Flask(__name__)

    # Pick config based on FLASK_ENV
    config_type = (config_name or os.getenv("FLASK_ENV", "development")).lower()
    app.config.from_object(config_map.get(config_type, DevelopmentConfig))
    app.config.update(overrides)

    if config_type == "production" and app.config["SECRET_KEY"] == "dev-only-secret-key":
        raise RuntimeError("SECRET_KEY must be set in production")

    _configure_logging(app)

    # Initialize extensions
    login_manager.init_app(app)
    db.init_app(app)
    csrf.init_app(app)

    # Flask-Login user loader: the stored id is the opaque session token
    @login_manager.user_loader
    def load_user(token):
        from .sessions import load_session
        return load_session(token)

    # Import and register blueprints
    from .routes import main
    from .routes.auth import auth_bp
    app.register_blueprint(main)
    app.register_blueprint(auth_bp)

    _register_error_handlers(app)

    # Initialize database tables
    with app.app_context():
        from . import models  # noqa: F401
        db.create_all()

    if app.config["SCHEDULER_ENABLED"]:
        _start_scheduler(app)

    return app


def _configure_logging(app):
    level = getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO)
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("quillpost").setLevel(level)
    app.logger.setLevel(level)


def _register_error_handlers(app):
    from .errors import StoreUnavailable, Unauthenticated

    # Gate denial: flash the login message and redirect to the login page.
    # Only GET targets are worth returning to after login.
    @app.errorhandler(Unauthenticated)
    def unauthenticated(_error):
        if request.method != "GET":
            flash(login_manager.login_message, login_manager.login_message_category)
            return redirect(url_for(login_manager.login_view))
        return login_manager.unauthorized()

    @app.errorhandler(403)
    def forbidden(error):
        return render_template('errors/403.html', error=error), 403

    @app.errorhandler(404)
    def not_found(error):
        return render_template('errors/404.html', error=error), 404

    @app.errorhandler(StoreUnavailable)
    def store_unavailable(error):
        logger.error("[DB] Request failed: %s", error)
        return render_template('errors/500.html'), 500


def _start_scheduler(app):
    from .sessions import purge_expired

    scheduler = BackgroundScheduler()

    # Wrap job inside app.app_context()
    def job_wrapper():
        with app.app_context():
            purge_expired()

    scheduler.add_job(
        func=job_wrapper,
        trigger=IntervalTrigger(minutes=app.config["SESSION_PURGE_INTERVAL_MINUTES"]),
        id="purge_expired_sessions_job",
        name="Purge expired login sessions",
        max_instances=1,
        coalesce=True
    )

    scheduler.start()
    logger.info("[Scheduler] Started purge_expired_sessions job")

    # Shut down scheduler on exit
    atexit.register(lambda: scheduler.shutdown(wait=False))
    app.extensions["quillpost.scheduler"] = scheduler
