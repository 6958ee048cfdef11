"""
Flask application factory.

This module implements the application factory pattern for creating
Flask application instances with different configurations.
"""

from flask import Flask
import os

from .extensions import db, migrate, limiter
from .config import get_config


def create_app(config_name=None):
    """
    Application factory function.

    Args:
        config_name: Configuration name (development, testing, production)
                    If None, determined from environment

    Returns:
        Flask application instance
    """
    app = Flask(__name__)

    # Apply ProxyFix for correct IP and scheme handling behind reverse proxies
    from werkzeug.middleware.proxy_fix import ProxyFix
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    config_class = get_config(config_name, validate=True)
    app.config.from_object(config_class)

    # Ensure instance directory exists
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    os.makedirs(os.path.join(basedir, "instance"), exist_ok=True)

    # Update database URI to use absolute path
    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///instance/'):
        app.config['SQLALCHEMY_DATABASE_URI'] = f'sqlite:///{os.path.join(basedir, "instance", "cornerstone.db")}'

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    # Enable foreign key constraints for SQLite
    from sqlalchemy import event
    from sqlalchemy.engine import Engine

    @event.listens_for(Engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        """Enable foreign key constraints for SQLite connections"""
        if 'sqlite' in str(type(dbapi_conn)).lower():
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    # Configure logging and error handling
    from cornerstone.error_handlers import setup_logging, register_error_handlers
    setup_logging(app)
    register_error_handlers(app)

    # Initialize database models
    from cornerstone.models import init_models, model_registry
    models = init_models(db)
    model_registry.init_app(app)
    model_registry.register(models)

    # One reschedule tracker per app; routes and the background job share it
    from cornerstone.services.reschedule_tracker import RescheduleTracker
    app.extensions['reschedule_tracker'] = RescheduleTracker()

    register_blueprints(app)

    if app.config.get('AUTO_RESCHEDULE_ENABLED'):
        setup_background_tasks(app)

    return app


def register_blueprints(app):
    """Register all Flask blueprints."""
    from cornerstone.routes import schedule_bp, health_bp

    app.register_blueprint(schedule_bp)
    app.register_blueprint(health_bp)

    limiter.exempt(health_bp)


def setup_background_tasks(app):
    """Setup background tasks and schedulers."""

    from apscheduler.schedulers.background import BackgroundScheduler
    from apscheduler.triggers.interval import IntervalTrigger
    from datetime import datetime
    import atexit

    from cornerstone.models import get_models
    from cornerstone.services.schedule_store import WorkItemStore
    from cornerstone.utils.dates import today_in_timezone

    def daily_reschedule():
        """Background task running the once-per-day reschedule pass."""
        with app.app_context():
            tracker = app.extensions['reschedule_tracker']
            store = WorkItemStore(db.session, get_models())
            try:
                tracker.ensure_daily_reschedule(store, today_in_timezone())
            except Exception as e:
                # Tracker already logged the failure and stays due; next tick retries
                app.logger.warning(f"Daily reschedule did not complete: {e}")
            finally:
                db.session.remove()

    scheduler = BackgroundScheduler()
    scheduler.add_job(
        func=daily_reschedule,
        trigger=IntervalTrigger(seconds=app.config.get('AUTO_RESCHEDULE_INTERVAL_SECONDS', 900)),
        next_run_time=datetime.now(),
        id='daily_reschedule',
        name='Daily CPM reschedule',
        replace_existing=True
    )
    scheduler.start()

    # Ensure scheduler shuts down when app exits
    atexit.register(lambda: scheduler.shutdown())


def init_db(app):
    """Initialize the database."""
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    os.makedirs(os.path.join(basedir, "instance"), exist_ok=True)
    with app.app_context():
        db.create_all()
