from rentals import db
from rentals.models import ActivityLog


def log_activity(action, details=None, user=None):
    """Queue an activity entry on the current session; the caller commits."""
    entry = ActivityLog(
        user_id=user.id if user is not None else None,
        action=action,
        details=details
    )
    db.session.add(entry)
    return entry


def recent_activity(user, limit):
    query = ActivityLog.query
    if not user.is_admin:
        query = query.filter_by(user_id=user.id)
    return query.order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc()).limit(limit).all()
