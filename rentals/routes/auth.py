from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import create_access_token
from flask_login import login_user, logout_user, login_required, current_user
from rentals.models import User
from rentals.services.activity import log_activity
from rentals import db, limiter

bp = Blueprint('auth', __name__, url_prefix='/api')


@bp.route('/login', methods=['POST'])
@limiter.limit("100 per hour")
def login():
    """Exchange email and password for a bearer token and a session"""
    data = request.get_json(silent=True) or {}
    email = (data.get('email') or '').strip().lower()
    password = data.get('password') or ''

    if not email or not password:
        return jsonify(error='Email and password are required'), 400

    user = User.query.filter_by(email=email).first()
    if user is None or not user.check_password(password):
        current_app.logger.info(f'Failed login for {email}')
        return jsonify(error='Invalid credentials'), 401

    if not user.is_active:
        return jsonify(error='This account has been deactivated'), 403

    login_user(user)
    token = create_access_token(identity=str(user.id))
    log_activity('login', None, user)
    db.session.commit()

    return jsonify(token=token, user=user.to_dict())


@bp.route('/logout', methods=['POST'])
@login_required
def logout():
    log_activity('logout', None, current_user)
    db.session.commit()
    logout_user()
    return jsonify(success=True)


@bp.route('/me')
@login_required
def me():
    return jsonify(current_user.to_dict())
