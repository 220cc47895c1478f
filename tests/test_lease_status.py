from datetime import date, datetime, timedelta

import pytest

from rentals.services.lease_status import (
    compute_status, coverage_end_date, should_notify, parse_date,
    ReminderConfig, LeaseStatus, InvalidDateError, InvalidCountError, LeaseStatusError,
    UP_TO_DATE, SOON_DUE, LATE
)


def test_no_months_paid_ends_on_start_date():
    for start in (date(2024, 2, 29), date(2025, 1, 31), date(2025, 12, 1)):
        assert coverage_end_date(start, 0) == start


@pytest.mark.parametrize('start, months, expected', [
    (date(2025, 1, 31), 1, date(2025, 2, 28)),
    (date(2024, 1, 31), 1, date(2024, 2, 29)),
    (date(2025, 1, 31), 3, date(2025, 4, 30)),
    (date(2025, 1, 1), 1, date(2025, 2, 1)),
    (date(2025, 11, 15), 2, date(2026, 1, 15)),
    (date(2025, 1, 15), 24, date(2027, 1, 15)),
])
def test_coverage_end_date_adds_calendar_months(start, months, expected):
    assert coverage_end_date(start, months) == expected


def test_clamping_is_from_start_date_not_chained():
    # Jan 31 -> Feb 28 -> Mar 28 would be wrong; Mar 31 is expected
    assert coverage_end_date(date(2025, 1, 31), 2) == date(2025, 3, 31)


def test_due_on_coverage_end_date_is_soon_due():
    start = date(2025, 3, 10)
    for months in (0, 1, 5, 12):
        end = coverage_end_date(start, months)
        result = compute_status(start, months, as_of=end, threshold_days=0)
        assert result.days_remaining == 0
        assert result.status == SOON_DUE


def test_more_months_never_reduce_days_remaining():
    start = date(2025, 1, 31)
    as_of = date(2025, 6, 15)
    previous = None
    for months in range(0, 30):
        days = compute_status(start, months, as_of=as_of).days_remaining
        if previous is not None:
            assert days >= previous
        previous = days


@pytest.mark.parametrize('threshold', [0, 7, 30])
def test_threshold_boundaries(threshold):
    start = date(2025, 5, 1)
    end = coverage_end_date(start, 1)

    at_threshold = compute_status(start, 1, end - timedelta(days=threshold), threshold)
    assert at_threshold.days_remaining == threshold
    assert at_threshold.status == SOON_DUE

    past_threshold = compute_status(start, 1, end - timedelta(days=threshold + 1), threshold)
    assert past_threshold.days_remaining == threshold + 1
    assert past_threshold.status == UP_TO_DATE

    one_day_late = compute_status(start, 1, end + timedelta(days=1), threshold)
    assert one_day_late.days_remaining == -1
    assert one_day_late.status == LATE


def test_late_lease_is_not_notified():
    result = compute_status(date(2025, 1, 15), 0, as_of=date(2025, 1, 20), threshold_days=7)
    assert result.days_remaining == -5
    assert result.status == LATE
    assert should_notify(result.status, result.days_remaining, ReminderConfig(7, True)) is False


def test_soon_due_lease_is_notified():
    result = compute_status(date(2025, 1, 1), 1, as_of=date(2025, 1, 28), threshold_days=7)
    assert result == LeaseStatus(date(2025, 2, 1), 4, SOON_DUE)
    assert should_notify(result.status, result.days_remaining, ReminderConfig(7, True)) is True


def test_accepts_iso_strings_and_datetimes():
    result = compute_status('2025-01-01', 1, as_of=datetime(2025, 1, 28, 23, 59), threshold_days=7)
    assert result.coverage_end_date == date(2025, 2, 1)
    assert result.days_remaining == 4


def test_as_of_defaults_to_today():
    today = date.today()
    result = compute_status(today, 0)
    assert result.days_remaining == 0


def test_to_dict_uses_api_field_names():
    result = compute_status(date(2025, 1, 1), 1, as_of=date(2025, 1, 28))
    assert result.to_dict() == {'end_date': '2025-02-01', 'days_remaining': 4, 'status': SOON_DUE}


@pytest.mark.parametrize('bad_date', ['2025-02-30', 'not a date', '', None, 20250101, '01/02/2025'])
def test_invalid_start_date(bad_date):
    with pytest.raises(InvalidDateError):
        compute_status(bad_date, 1, as_of=date(2025, 1, 1))


def test_invalid_as_of():
    with pytest.raises(InvalidDateError):
        compute_status(date(2025, 1, 1), 1, as_of='yesterday')


@pytest.mark.parametrize('bad_count', [-1, 1.5, '3', None, True])
def test_invalid_months_paid(bad_count):
    with pytest.raises(InvalidCountError):
        compute_status(date(2025, 1, 1), bad_count, as_of=date(2025, 1, 1))


def test_negative_threshold_rejected():
    with pytest.raises(InvalidCountError):
        compute_status(date(2025, 1, 1), 1, as_of=date(2025, 1, 1), threshold_days=-1)


def test_errors_are_value_errors():
    assert issubclass(InvalidDateError, LeaseStatusError)
    assert issubclass(InvalidCountError, LeaseStatusError)
    assert issubclass(LeaseStatusError, ValueError)


def test_parse_date():
    assert parse_date('2025-03-04') == date(2025, 3, 4)
    assert parse_date(' 2025-03-04 ') == date(2025, 3, 4)
    assert parse_date(date(2025, 3, 4)) == date(2025, 3, 4)


@pytest.mark.parametrize('status, days, config, expected', [
    (SOON_DUE, 4, ReminderConfig(7, True), True),
    (SOON_DUE, 7, ReminderConfig(7, True), True),
    (UP_TO_DATE, 8, ReminderConfig(7, True), False),
    (SOON_DUE, 0, ReminderConfig(7, True), False),
    (LATE, -1, ReminderConfig(7, True), False),
    (SOON_DUE, 4, ReminderConfig(7, False), False),
    (SOON_DUE, 1, ReminderConfig(0, True), False),
    (SOON_DUE, 30, ReminderConfig(30, True), True),
])
def test_should_notify(status, days, config, expected):
    assert should_notify(status, days, config) is expected


def test_should_notify_is_repeatable():
    config = ReminderConfig(7, True)
    assert [should_notify(SOON_DUE, 3, config) for _ in range(3)] == [True, True, True]


@pytest.mark.parametrize('status', [UP_TO_DATE, SOON_DUE, LATE])
def test_should_notify_depends_only_on_days_and_config(status):
    config = ReminderConfig(7, True)
    assert should_notify(status, 3, config) is True
    assert should_notify(status, -3, config) is False
    assert should_notify(status, 3, ReminderConfig(7, False)) is False
