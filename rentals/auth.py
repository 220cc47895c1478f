"""Session and bearer-token authentication wired into Flask-Login."""
from functools import wraps

from flask import abort, jsonify
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from flask_login import current_user, login_required


def init_auth(login_manager):
    from rentals import db
    from rentals.models import User

    @login_manager.user_loader
    def load_user(user_id):
        return _active_user(user_id)

    @login_manager.request_loader
    def load_user_from_token(request):
        # Only consulted when the session carries no user
        if not request.headers.get('Authorization'):
            return None
        verify_jwt_in_request(optional=True)
        identity = get_jwt_identity()
        if identity is None:
            return None
        return _active_user(identity)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify(error='unauthorized'), 401

    def _active_user(user_id):
        try:
            user = db.session.get(User, int(user_id))
        except (TypeError, ValueError):
            return None
        if user is None or not user.is_active:
            return None
        return user


def admin_required(view):
    """Like login_required, but the user must also be an administrator"""
    @wraps(view)
    @login_required
    def wrapped(*args, **kwargs):
        if not current_user.is_admin:
            abort(403)
        return view(*args, **kwargs)
    return wrapped
