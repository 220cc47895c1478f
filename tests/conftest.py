import os
from datetime import date

os.environ.setdefault('SECRET_KEY', 'test-secret-key')

import pytest  # noqa: E402
from rentals import create_app, db as _db  # noqa: E402
from rentals.models import User, Property, ReminderSettings, ROLE_ADMIN, ROLE_MANAGER  # noqa: E402
from config import Config  # noqa: E402


class TestConfig(Config):
    """Test configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET_KEY = 'test-jwt-secret-key-that-is-long-enough'
    RATELIMIT_ENABLED = False
    MAIL_SUPPRESS_SEND = True
    MAIL_DEFAULT_SENDER = 'reminders@example.com'
    SCHEDULER_ENABLED = False
    DEFAULT_REMINDER_DAYS = 7


@pytest.fixture()
def app():
    """Create a fresh app and empty database for each test."""
    app = create_app(TestConfig)
    with app.app_context():
        _db.create_all()
    yield app
    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def client(app):
    """A test client for the app."""
    return app.test_client()


def _create_user(app, email, password, role):
    with app.app_context():
        user = User(email=email, role=role)
        user.set_password(password)
        _db.session.add(user)
        _db.session.commit()
        return {'id': user.id, 'email': email, 'password': password, 'role': role}


@pytest.fixture()
def admin(app):
    return _create_user(app, 'admin@example.com', 'admin-password', ROLE_ADMIN)


@pytest.fixture()
def manager(app):
    return _create_user(app, 'manager@example.com', 'manager-password', ROLE_MANAGER)


@pytest.fixture()
def other_manager(app):
    return _create_user(app, 'other@example.com', 'other-password', ROLE_MANAGER)


@pytest.fixture()
def login(app):
    """Log a user in through the API and return bearer auth headers."""
    def _login(user):
        response = app.test_client().post('/api/login', json={
            'email': user['email'],
            'password': user['password']
        })
        assert response.status_code == 200, response.get_json()
        return {'Authorization': f"Bearer {response.get_json()['token']}"}
    return _login


@pytest.fixture()
def make_property(app):
    """Insert a property directly and return its id."""
    def _make(owner, **overrides):
        values = {
            'name': 'Maple Street 12',
            'address': '12 Maple Street',
            'tenant_name': 'Jane Doe',
            'tenant_email': 'jane@example.com',
            'monthly_rent': 1200.0,
            'start_date': date.today(),
            'months_paid': 0,
        }
        values.update(overrides)
        with app.app_context():
            prop = Property(user_id=owner['id'], **values)
            _db.session.add(prop)
            _db.session.commit()
            return prop.id
    return _make


@pytest.fixture()
def reminder_settings(app):
    """Set the reminder window and switch."""
    def _set(days=7, enabled=True):
        with app.app_context():
            settings = ReminderSettings.get()
            settings.reminder_days = days
            settings.reminders_enabled = enabled
            _db.session.commit()
    return _set
