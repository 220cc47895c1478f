from flask import Blueprint, jsonify, current_app
from rentals.auth import admin_required

bp = Blueprint('reminders', __name__, url_prefix='/api/reminders')


@bp.route('/run', methods=['POST'])
@admin_required
def run_now():
    """Run a reminder sweep immediately"""
    notified = current_app.reminder_service.run_sweep()
    return jsonify(notified=notified, count=len(notified))
