from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required, current_user
from rentals.services.activity import recent_activity

bp = Blueprint('activity', __name__, url_prefix='/api/activity')


@bp.route('')
@login_required
def list_activity():
    """Latest activity, everything for admins and own actions for managers"""
    limit = request.args.get('limit', current_app.config['ACTIVITY_PAGE_SIZE'], type=int)
    limit = max(1, min(limit, current_app.config['ACTIVITY_MAX_PAGE_SIZE']))
    entries = recent_activity(current_user, limit)
    return jsonify([e.to_dict() for e in entries])
