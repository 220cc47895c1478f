import re
from flask import Blueprint, request, jsonify, current_app
from flask_login import current_user
from rentals.auth import admin_required
from rentals.models import User, ROLES, ROLE_MANAGER
from rentals.services.activity import log_activity
from rentals import db

bp = Blueprint('users', __name__, url_prefix='/api/users')

EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'


def validate_user(email, password, role):
    """Validates new user data."""
    errors = []
    if not email:
        errors.append('Email is required')
    elif not re.match(EMAIL_PATTERN, email):
        errors.append('Invalid email address format')
    elif User.query.filter_by(email=email).first():
        errors.append('Email already registered')

    if not password:
        errors.append('Password is required')
    elif len(password) < 8:
        errors.append('Password must be at least 8 characters long')

    if role not in ROLES:
        errors.append(f'Role must be one of: {", ".join(ROLES)}')
    return errors


@bp.route('', methods=['GET'])
@admin_required
def list_users():
    users = User.query.order_by(User.id).all()
    return jsonify([u.to_dict() for u in users])


@bp.route('', methods=['POST'])
@admin_required
def create_user():
    data = request.get_json(silent=True) or {}
    email = (data.get('email') or '').strip().lower()
    password = data.get('password') or ''
    role = data.get('role') or ROLE_MANAGER

    errors = validate_user(email, password, role)
    if errors:
        return jsonify(error='validation_failed', messages=errors), 400

    try:
        user = User(email=email, role=role)
        user.set_password(password)
        db.session.add(user)
        db.session.flush()
        log_activity('user_created', f'{email} ({role})', current_user)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Error creating user {email}: {e}', exc_info=True)
        return jsonify(error='server_error'), 500

    return jsonify(user.to_dict()), 201
