from datetime import datetime
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from rentals import db
from rentals.services.lease_status import compute_status, ReminderConfig

ROLE_ADMIN = 'admin'
ROLE_MANAGER = 'manager'
ROLES = (ROLE_ADMIN, ROLE_MANAGER)


class User(UserMixin, db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=ROLE_MANAGER)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    is_active = db.Column(db.Boolean, default=True)

    def __repr__(self):
        return f'<User {self.email}>'

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    def set_password(self, password):
        """Hash and set password"""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Check if provided password matches hash"""
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'role': self.role,
            'is_active': self.is_active,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class Property(db.Model):
    """A rented property together with its lease terms"""
    __tablename__ = 'properties'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    name = db.Column(db.String(200), nullable=False)
    address = db.Column(db.String(300), nullable=True)
    tenant_name = db.Column(db.String(200), nullable=False)
    tenant_email = db.Column(db.String(120), nullable=True)
    monthly_rent = db.Column(db.Float, nullable=False)
    start_date = db.Column(db.Date, nullable=False)
    months_paid = db.Column(db.Integer, nullable=False, default=0)
    notes = db.Column(db.Text, nullable=True)
    last_reminder_on = db.Column(db.Date, nullable=True)  # at most one reminder per day
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    user = db.relationship('User', backref='properties')
    payments = db.relationship('Payment', backref='property', lazy='dynamic',
                               cascade='all, delete-orphan',
                               order_by='Payment.id.desc()')

    def __repr__(self):
        return f'<Property {self.name}>'

    def lease_status(self, as_of, threshold_days):
        return compute_status(self.start_date, self.months_paid, as_of, threshold_days)

    def to_dict(self, lease_status=None):
        data = {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'address': self.address,
            'tenant_name': self.tenant_name,
            'tenant_email': self.tenant_email,
            'monthly_rent': self.monthly_rent,
            'start_date': self.start_date.isoformat(),
            'months_paid': self.months_paid,
            'notes': self.notes,
            'last_reminder_on': self.last_reminder_on.isoformat() if self.last_reminder_on else None,
        }
        if lease_status is not None:
            data.update(lease_status.to_dict())
        return data


class Payment(db.Model):
    __tablename__ = 'payments'

    id = db.Column(db.Integer, primary_key=True)
    property_id = db.Column(db.Integer, db.ForeignKey('properties.id', ondelete='CASCADE'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    months = db.Column(db.Integer, nullable=False)
    amount = db.Column(db.Float, nullable=False)  # months * monthly_rent when recorded
    paid_on = db.Column(db.Date, nullable=False)
    note = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    user = db.relationship('User', backref='recorded_payments')

    def __repr__(self):
        return f'<Payment {self.months} month(s) for property {self.property_id}>'

    def to_dict(self):
        return {
            'id': self.id,
            'property_id': self.property_id,
            'user_id': self.user_id,
            'months': self.months,
            'amount': self.amount,
            'paid_on': self.paid_on.isoformat(),
            'note': self.note,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class ActivityLog(db.Model):
    __tablename__ = 'activity_logs'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)  # None for system jobs
    action = db.Column(db.String(50), nullable=False)
    details = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    user = db.relationship('User', backref='activities')

    def __repr__(self):
        return f'<ActivityLog {self.action}>'

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'action': self.action,
            'details': self.details,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class ReminderSettings(db.Model):
    """Single row (id=1) holding the reminder window and on/off switch"""
    __tablename__ = 'settings'

    id = db.Column(db.Integer, primary_key=True)
    reminder_days = db.Column(db.Integer, nullable=False, default=7)
    reminders_enabled = db.Column(db.Boolean, nullable=False, default=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<ReminderSettings {self.reminder_days}d enabled={self.reminders_enabled}>'

    @classmethod
    def get(cls, default_days=7):
        settings = db.session.get(cls, 1)
        if settings is None:
            settings = cls(id=1, reminder_days=default_days, reminders_enabled=True)
            db.session.add(settings)
            db.session.flush()
        return settings

    def to_config(self):
        return ReminderConfig(threshold_days=self.reminder_days, enabled=self.reminders_enabled)

    def to_dict(self):
        return {
            'reminder_days': self.reminder_days,
            'reminders_enabled': self.reminders_enabled,
        }
