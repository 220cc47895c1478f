from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required, current_user
from rentals.auth import admin_required
from rentals.models import ReminderSettings
from rentals.services.activity import log_activity
from rentals import db

bp = Blueprint('settings', __name__, url_prefix='/api/settings')


def load_settings():
    """Load the reminder settings row, creating it with defaults"""
    return ReminderSettings.get(current_app.config['DEFAULT_REMINDER_DAYS'])


@bp.route('', methods=['GET'])
@login_required
def get_settings():
    return jsonify(load_settings().to_dict())


@bp.route('', methods=['PUT'])
@admin_required
def update_settings():
    data = request.get_json(silent=True) or {}
    settings = load_settings()
    errors = []

    if 'reminder_days' in data:
        days = data['reminder_days']
        if isinstance(days, bool) or not isinstance(days, int) or days < 0:
            errors.append('reminder_days must be a non-negative integer')
    if 'reminders_enabled' in data:
        enabled = data['reminders_enabled']
        # 0/1 accepted for clients that store the flag as an integer
        if isinstance(enabled, int) and not isinstance(enabled, bool) and enabled in (0, 1):
            data['reminders_enabled'] = bool(enabled)
        elif not isinstance(enabled, bool):
            errors.append('reminders_enabled must be a boolean')

    if errors:
        return jsonify(error='validation_failed', messages=errors), 400

    if 'reminder_days' in data:
        settings.reminder_days = data['reminder_days']
    if 'reminders_enabled' in data:
        settings.reminders_enabled = data['reminders_enabled']

    log_activity('settings_updated',
                 f"reminder_days={settings.reminder_days} enabled={settings.reminders_enabled}",
                 current_user)
    db.session.commit()
    current_app.logger.info(f'Reminder settings updated by {current_user.email}')
    return jsonify(settings.to_dict())
