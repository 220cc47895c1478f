"""
Reminder sweep: find leases whose paid-up period ends soon and e-mail a
reminder, at most once per lease per day.
"""
import logging
from datetime import date
from typing import Iterable, List, Optional

from flask import current_app
from flask_mail import Message

from rentals.services.lease_status import should_notify, parse_date

logger = logging.getLogger(__name__)

REMINDER_SUBJECT = 'Rent reminder: {name}'

REMINDER_BODY = """Hello {tenant},

This is a reminder that rent for {name}{address} is paid up to {end_date}.
That is {days} day(s) from now. The monthly rent is {rent:,.2f}.

Please arrange the next payment before the due date.
"""


class ReminderService:
    def __init__(self, db, mail, sender=None):
        self.db = db
        self.mail = mail
        self.sender = sender

    def run_sweep(self, as_of=None, property_ids: Optional[Iterable[int]] = None) -> List[int]:
        """
        Evaluate leases and send the reminders that are due.

        Args:
            as_of: day every lease is judged against, today when omitted
            property_ids: restrict the sweep to these properties

        Returns:
            Ids of the properties a reminder was sent for
        """
        from rentals.models import Property, ReminderSettings
        from rentals.services.activity import log_activity

        as_of = parse_date(as_of, 'as_of') if as_of is not None else date.today()
        settings = ReminderSettings.get(current_app.config.get('DEFAULT_REMINDER_DAYS', 7))
        config = settings.to_config()
        if not config.enabled:
            logger.info('Reminder sweep skipped: reminders are disabled')
            return []

        query = Property.query
        if property_ids is not None:
            query = query.filter(Property.id.in_(list(property_ids)))

        notified = []
        for prop in query.order_by(Property.id).all():
            if prop.last_reminder_on == as_of:
                continue
            try:
                status = prop.lease_status(as_of, config.threshold_days)
                if not should_notify(status.status, status.days_remaining, config):
                    continue
                self.send_reminder(prop, status)
            except Exception as e:
                logger.error(f'Reminder for property {prop.id} failed: {e}', exc_info=True)
                continue

            prop.last_reminder_on = as_of
            log_activity('reminder_sent',
                         f'{prop.name} (#{prop.id}) due {status.coverage_end_date.isoformat()}')
            notified.append(prop.id)

        self.db.session.commit()
        logger.info(f'Reminder sweep for {as_of.isoformat()} sent {len(notified)} reminder(s)')
        return notified

    def recipient_for(self, prop):
        if prop.tenant_email:
            return prop.tenant_email
        return prop.user.email if prop.user else None

    def send_reminder(self, prop, status):
        recipient = self.recipient_for(prop)
        if not recipient:
            raise ValueError(f'no e-mail address for property {prop.id}')

        msg = Message(
            subject=REMINDER_SUBJECT.format(name=prop.name),
            recipients=[recipient],
            body=REMINDER_BODY.format(
                tenant=prop.tenant_name,
                name=prop.name,
                address=f' ({prop.address})' if prop.address else '',
                end_date=status.coverage_end_date.isoformat(),
                days=status.days_remaining,
                rent=prop.monthly_rent
            ),
            sender=self.sender
        )
        self.mail.send(msg)
        logger.info(f'Reminder sent to {recipient} for property {prop.id}')
