from datetime import date
from flask import Blueprint, request, jsonify, current_app, abort
from flask_login import login_required, current_user
from rentals.services.properties import PropertyService, ValidationError
from rentals.models import ReminderSettings

bp = Blueprint('properties', __name__, url_prefix='/api/properties')


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def _get_or_404(service, property_id):
    prop = service.get_property(property_id)
    if prop is None:
        abort(404)
    return prop


def _annotated(prop):
    settings = ReminderSettings.get(current_app.config['DEFAULT_REMINDER_DAYS'])
    return prop.to_dict(prop.lease_status(date.today(), settings.reminder_days))


@bp.route('', methods=['GET'])
@login_required
def list_properties():
    """List properties with end_date, days_remaining and status"""
    service = PropertyService(current_user)
    return jsonify(service.list_properties())


@bp.route('', methods=['POST'])
@login_required
def create_property():
    service = PropertyService(current_user)
    prop = service.create_property(_json_body())
    return jsonify(_annotated(prop)), 201


@bp.route('/<int:id>', methods=['GET'])
@login_required
def get_property(id):
    prop = _get_or_404(PropertyService(current_user), id)
    return jsonify(_annotated(prop))


@bp.route('/<int:id>', methods=['PUT'])
@login_required
def update_property(id):
    service = PropertyService(current_user)
    prop = _get_or_404(service, id)
    service.update_property(prop, _json_body())
    return jsonify(_annotated(prop))


@bp.route('/<int:id>', methods=['DELETE'])
@login_required
def delete_property(id):
    service = PropertyService(current_user)
    prop = _get_or_404(service, id)
    service.delete_property(prop)
    return jsonify(success=True)


@bp.route('/<int:id>/payment', methods=['POST'])
@login_required
def record_payment(id):
    """Record a payment of one or more months and re-check reminders for the lease"""
    service = PropertyService(current_user)
    prop = _get_or_404(service, id)
    data = _json_body()
    payment = service.record_payment(prop, data.get('months'),
                                     note=data.get('note'), paid_on=data.get('paid_on'))

    try:
        current_app.reminder_service.run_sweep(property_ids=[prop.id])
    except Exception as e:
        current_app.logger.error(f'Reminder check after payment on property {prop.id} failed: {e}',
                                 exc_info=True)

    return jsonify(success=True, payment=payment.to_dict(), property=_annotated(prop))


@bp.route('/<int:id>/payments', methods=['GET'])
@login_required
def payment_history(id):
    service = PropertyService(current_user)
    prop = _get_or_404(service, id)
    return jsonify([p.to_dict() for p in service.payment_history(prop)])
