from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_talisman import Talisman
from flask_cors import CORS
from flask_mail import Mail
from config import Config

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
jwt = JWTManager()
mail = Mail()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000 per day", "200 per hour"],
    storage_uri="memory://"
)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    jwt.init_app(app)
    mail.init_app(app)
    limiter.init_app(app)

    CORS(app,
         resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}},
         allow_headers=["Content-Type", "Authorization"],
         methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
         supports_credentials=True)

    # Security headers with Talisman (only in production)
    if app.config['FLASK_ENV'] == 'production':
        Talisman(app,
                 content_security_policy={'default-src': "'self'"},
                 force_https=True,
                 strict_transport_security=True,
                 session_cookie_secure=True,
                 session_cookie_samesite='Lax')

    from rentals.services.reminders import ReminderService
    app.reminder_service = ReminderService(db, mail, sender=app.config['MAIL_DEFAULT_SENDER'])

    from rentals import auth as auth_loaders
    auth_loaders.init_auth(login_manager)

    from rentals.routes import main, auth, users, properties, dashboard, settings, activity, reminders
    app.register_blueprint(main.bp)
    app.register_blueprint(auth.bp)
    app.register_blueprint(users.bp)
    app.register_blueprint(properties.bp)
    app.register_blueprint(dashboard.bp)
    app.register_blueprint(settings.bp)
    app.register_blueprint(activity.bp)
    app.register_blueprint(reminders.bp)

    # Structured logging for production
    if app.config['FLASK_ENV'] == 'production':
        import logging
        import sys
        from pythonjsonlogger import jsonlogger

        logHandler = logging.StreamHandler(sys.stdout)
        formatter = jsonlogger.JsonFormatter()
        logHandler.setFormatter(formatter)
        app.logger.addHandler(logHandler)
        app.logger.setLevel(logging.INFO)

    register_error_handlers(app)

    from rentals.scheduler import init_scheduler
    init_scheduler(app)

    return app


def register_error_handlers(app):
    from rentals.services.lease_status import LeaseStatusError
    from rentals.services.properties import ValidationError

    @app.errorhandler(ValidationError)
    def validation_error(error):
        return jsonify(error='validation_failed', messages=error.messages), 400

    @app.errorhandler(LeaseStatusError)
    def lease_status_error(error):
        app.logger.warning(f'Lease status error: {error}')
        return jsonify(error='invalid_lease', messages=[str(error)]), 400

    @app.errorhandler(400)
    def bad_request(error):
        return jsonify(error='bad_request'), 400

    @app.errorhandler(403)
    def forbidden_error(error):
        return jsonify(error='forbidden'), 403

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify(error='not_found'), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify(error='method_not_allowed'), 405

    @app.errorhandler(429)
    def rate_limited(error):
        return jsonify(error='too_many_requests'), 429

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        app.logger.error(f'Server Error: {error}', exc_info=True)
        return jsonify(error='server_error'), 500
