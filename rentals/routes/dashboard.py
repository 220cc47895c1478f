from flask import Blueprint, jsonify
from flask_login import login_required, current_user
from rentals.services.properties import PropertyService

bp = Blueprint('dashboard', __name__, url_prefix='/api/dashboard')


@bp.route('/stats')
@login_required
def stats():
    """Totals and status counts for the visible properties"""
    service = PropertyService(current_user)
    return jsonify(service.dashboard_stats())
