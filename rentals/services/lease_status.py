"""
Lease status engine and reminder policy.

Given when a lease started and how many months have been paid, work out
the date rent is covered until, how many days are left before that date
and whether the lease is up to date, soon due or late. Nothing here
touches the database or the clock beyond defaulting ``as_of`` to today.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

UP_TO_DATE = 'up-to-date'
SOON_DUE = 'soon-due'
LATE = 'late'

STATUSES = (UP_TO_DATE, SOON_DUE, LATE)

DateLike = Union[date, datetime, str]


class LeaseStatusError(ValueError):
    """Base class for invalid lease facts"""


class InvalidDateError(LeaseStatusError):
    pass


class InvalidCountError(LeaseStatusError):
    pass


@dataclass(frozen=True)
class LeaseStatus:
    coverage_end_date: date
    days_remaining: int
    status: str

    def to_dict(self):
        return {
            'end_date': self.coverage_end_date.isoformat(),
            'days_remaining': self.days_remaining,
            'status': self.status,
        }


@dataclass(frozen=True)
class ReminderConfig:
    threshold_days: int = 7
    enabled: bool = True


def parse_date(value: DateLike, field: str = 'date') -> date:
    """Return a calendar date from a date, datetime or ISO string"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), '%Y-%m-%d').date()
        except ValueError:
            raise InvalidDateError(f'{field} must be a valid YYYY-MM-DD date, got {value!r}')
    raise InvalidDateError(f'{field} must be a date, got {type(value).__name__}')


def _check_count(value, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidCountError(f'{field} must be an integer, got {value!r}')
    if value < 0:
        raise InvalidCountError(f'{field} must not be negative, got {value}')
    return value


def coverage_end_date(start_date: DateLike, months_paid: int) -> date:
    """Start date advanced by whole calendar months (Jan 31 + 1 month = Feb 28/29)"""
    start = parse_date(start_date, 'start_date')
    months = _check_count(months_paid, 'months_paid')
    return start + relativedelta(months=months)


def classify(days_remaining: int, threshold_days: int) -> str:
    if days_remaining < 0:
        return LATE
    if days_remaining <= threshold_days:
        return SOON_DUE
    return UP_TO_DATE


def compute_status(start_date: DateLike, months_paid: int,
                   as_of: Optional[DateLike] = None,
                   threshold_days: int = 7) -> LeaseStatus:
    """
    Compute the status snapshot of a lease

    Args:
        start_date: first day of the lease
        months_paid: number of fully paid months, never negative
        as_of: the day to judge against, today when omitted
        threshold_days: size of the "soon due" window in days

    Returns:
        LeaseStatus with coverage end date, signed days remaining and status
    """
    end = coverage_end_date(start_date, months_paid)
    threshold = _check_count(threshold_days, 'threshold_days')
    today = date.today() if as_of is None else parse_date(as_of, 'as_of')

    days_remaining = (end - today).days
    return LeaseStatus(end, days_remaining, classify(days_remaining, threshold))


def should_notify(status: str, days_remaining: int, config: ReminderConfig) -> bool:
    """
    Whether a reminder should go out for a lease.

    True when reminders are enabled and 0 < days_remaining <= threshold,
    so a lease that is already late never qualifies. The policy has no memory of past reminders, so callers must
    de-duplicate the actual dispatch.
    """
    return bool(config.enabled) and 0 < days_remaining <= config.threshold_days
