import math
import re
from datetime import date

from flask import current_app

from rentals import db
from rentals.models import Property, Payment, ReminderSettings
from rentals.services.activity import log_activity
from rentals.services.lease_status import (
    parse_date, InvalidDateError, UP_TO_DATE, SOON_DUE, LATE
)


class ValidationError(Exception):
    """Raised when submitted data fails validation"""

    def __init__(self, messages):
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        super().__init__('; '.join(self.messages))


def _as_int(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and re.fullmatch(r'-?[0-9]+', value.strip()):
        return int(value.strip())
    return None


def _as_amount(value):
    if isinstance(value, bool):
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    return amount if math.isfinite(amount) else None


def validate_property(data, partial=False):
    """Validates property data. Returns (cleaned, errors)."""
    cleaned = {}
    errors = []

    for field in ('name', 'tenant_name'):
        if field in data or not partial:
            value = data.get(field)
            value = value.strip() if isinstance(value, str) else ''
            if not value:
                errors.append(f'{field} is required')
            else:
                cleaned[field] = value

    for field in ('address', 'tenant_email', 'notes'):
        if field in data:
            value = data.get(field)
            cleaned[field] = value.strip() if isinstance(value, str) and value.strip() else None

    if 'monthly_rent' in data or not partial:
        rent = _as_amount(data.get('monthly_rent'))
        if rent is None or rent <= 0:
            errors.append('monthly_rent must be a positive amount')
        else:
            cleaned['monthly_rent'] = rent

    if 'start_date' in data or not partial:
        try:
            cleaned['start_date'] = parse_date(data.get('start_date'), 'start_date')
        except InvalidDateError as e:
            errors.append(str(e))

    if partial:
        if 'months_paid' in data:
            errors.append('months_paid can only change through /payment')
    else:
        months = _as_int(data.get('months_paid', 0))
        if months is None or months < 0:
            errors.append('months_paid must be a non-negative integer')
        else:
            cleaned['months_paid'] = months

    return cleaned, errors


class PropertyService:
    """Property and lease operations scoped to what a user may see"""

    def __init__(self, user):
        self.user = user

    def _query(self):
        query = Property.query
        if not self.user.is_admin:
            query = query.filter_by(user_id=self.user.id)
        return query

    def _settings(self):
        return ReminderSettings.get(current_app.config.get('DEFAULT_REMINDER_DAYS', 7))

    def get_property(self, property_id):
        return self._query().filter_by(id=property_id).first()

    def list_properties(self, as_of=None):
        """All visible properties annotated with end_date, days_remaining and status"""
        as_of = as_of or date.today()
        threshold = self._settings().reminder_days
        properties = self._query().order_by(Property.id).all()
        return [p.to_dict(p.lease_status(as_of, threshold)) for p in properties]

    def dashboard_stats(self, as_of=None):
        as_of = as_of or date.today()
        threshold = self._settings().reminder_days
        properties = self._query().all()

        counts = {UP_TO_DATE: 0, SOON_DUE: 0, LATE: 0}
        total_rent = 0
        for prop in properties:
            total_rent += prop.monthly_rent
            counts[prop.lease_status(as_of, threshold).status] += 1

        return {
            'totalProperties': len(properties),
            'totalMonthlyRent': total_rent,
            'upToDate': counts[UP_TO_DATE],
            'soonDue': counts[SOON_DUE],
            'late': counts[LATE],
            'thresholdDays': threshold,
            'asOf': as_of.isoformat(),
        }

    def create_property(self, data):
        cleaned, errors = validate_property(data)
        if errors:
            raise ValidationError(errors)

        prop = Property(user_id=self.user.id, **cleaned)
        db.session.add(prop)
        db.session.flush()
        log_activity('property_created', f'{prop.name} (#{prop.id})', self.user)
        db.session.commit()
        current_app.logger.debug(f"Property '{prop.name}' created with ID: {prop.id}")
        return prop

    def update_property(self, prop, data):
        cleaned, errors = validate_property(data, partial=True)
        if errors:
            raise ValidationError(errors)

        for field, value in cleaned.items():
            setattr(prop, field, value)
        log_activity('property_updated', f'{prop.name} (#{prop.id})', self.user)
        db.session.commit()
        return prop

    def delete_property(self, prop):
        log_activity('property_deleted', f'{prop.name} (#{prop.id})', self.user)
        db.session.delete(prop)
        db.session.commit()

    def record_payment(self, prop, months, note=None, paid_on=None):
        """Add `months` paid months to a lease and keep a payment record"""
        months = _as_int(months)
        if months is None or months <= 0:
            raise ValidationError('months must be a positive integer')
        try:
            paid_on = parse_date(paid_on, 'paid_on') if paid_on else date.today()
        except InvalidDateError as e:
            raise ValidationError(str(e))

        # increment in SQL, not from the loaded value
        prop.months_paid = Property.months_paid + months
        payment = Payment(
            property_id=prop.id,
            user_id=self.user.id,
            months=months,
            amount=months * prop.monthly_rent,
            paid_on=paid_on,
            note=note
        )
        db.session.add(payment)
        log_activity('payment_recorded',
                     f'{months} month(s) for {prop.name} (#{prop.id})', self.user)
        db.session.commit()
        return payment

    def payment_history(self, prop):
        return prop.payments.all()
