import os
from datetime import timedelta
from pathlib import Path

basedir = Path(__file__).parent.absolute()


def _env_flag(name, default='false'):
    return os.environ.get(name, default).lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        raise ValueError("No SECRET_KEY set for Flask application")

    FLASK_ENV = os.environ.get('FLASK_ENV', 'development')

    # Cloud SQL configuration - construct URI from environment variables
    CLOUD_SQL_CONNECTION_NAME = os.environ.get('CLOUD_SQL_CONNECTION_NAME')
    if CLOUD_SQL_CONNECTION_NAME:
        DB_USER = os.environ.get('DB_USER', 'postgres')
        DB_PASSWORD = os.environ.get('DB_PASSWORD', '')
        DB_NAME = os.environ.get('DB_NAME', 'rentals')
        SQLALCHEMY_DATABASE_URI = (
            f'postgresql+psycopg2://{DB_USER}:{DB_PASSWORD}@/{DB_NAME}'
            f'?host=/cloudsql/{CLOUD_SQL_CONNECTION_NAME}'
        )
    else:
        # Local development or explicit DATABASE_URL
        SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
            'sqlite:///' + os.path.join(str(basedir), 'data', 'rentals.db')

    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 3600,
    }

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Token auth (Authorization: Bearer <token>)
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY', SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=1)

    # Session security settings
    SESSION_COOKIE_SECURE = FLASK_ENV == 'production'  # HTTPS only in production
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 86400  # 24 hours in seconds

    MAX_CONTENT_LENGTH = 1 * 1024 * 1024

    # Comma separated list of origins allowed to call /api/*
    CORS_ORIGINS = [o.strip() for o in
                    os.environ.get('CORS_ORIGINS', 'http://localhost:5173').split(',')
                    if o.strip()]

    # Outgoing mail (Flask-Mail)
    MAIL_SERVER = os.environ.get('MAIL_SERVER', 'localhost')
    MAIL_PORT = int(os.environ.get('MAIL_PORT', 25))
    MAIL_USE_TLS = _env_flag('MAIL_USE_TLS')
    MAIL_USE_SSL = _env_flag('MAIL_USE_SSL')
    MAIL_USERNAME = os.environ.get('MAIL_USERNAME')
    MAIL_PASSWORD = os.environ.get('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = os.environ.get('MAIL_DEFAULT_SENDER', 'no-reply@rentals.local')

    # Reminder sweep
    SCHEDULER_ENABLED = _env_flag('SCHEDULER_ENABLED', 'true')
    REMINDER_SWEEP_HOURS = int(os.environ.get('REMINDER_SWEEP_HOURS', 1))
    DEFAULT_REMINDER_DAYS = int(os.environ.get('DEFAULT_REMINDER_DAYS', 7))

    # Bootstrap administrator created by init_db.py
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL', 'admin@example.com')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')

    # Application settings
    ACTIVITY_PAGE_SIZE = 50
    ACTIVITY_MAX_PAGE_SIZE = 200
    DATE_FORMAT = '%Y-%m-%d'

    APP_VERSION = '1.0.0'
    APP_NAME = 'Rental Tracker'
