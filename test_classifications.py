# =============================================================================
# test_classifications.py - Status tag tests
# =============================================================================
# Covers utils/classifications.py with fixed reference days, so results
# never depend on when the tests are run.
#
# Run: pytest test_classifications.py
# =============================================================================

from datetime import date, datetime

import pandas as pd
import pytest

from config import (
    BOOKING_STATUSES,
    COMPLIANCE_EXPIRED,
    COMPLIANCE_EXPIRING_SOON,
    COMPLIANCE_VALID,
    CUSTOMER_STATUSES,
    MAINTENANCE_DONE,
    MAINTENANCE_IN_SHOP,
    MAINTENANCE_OVERDUE,
    MAINTENANCE_SCHEDULED,
    PAYMENT_STATUSES,
    RETURN_DUE_TODAY,
    RETURN_ON_TIME,
    RETURN_OVERDUE,
)
from utils import (
    classify_booking,
    classify_compliance,
    describe_expiry,
    match_status,
    normalize_maintenance_status,
    status_choices,
    status_key,
    to_date,
)


# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def test_status_key_ignores_case_and_separators():
    assert status_key("Pending Pickup") == "pendingpickup"
    assert status_key("PendingPickup") == "pendingpickup"
    assert status_key(" pending_pickup ") == "pendingpickup"
    assert status_key(None) == ""


def test_match_status_finds_stored_spelling():
    assert match_status("PendingPickup", BOOKING_STATUSES) == "Pending Pickup"
    assert match_status("pending_pickup", BOOKING_STATUSES) == "Pending Pickup"
    assert match_status("paid", PAYMENT_STATUSES) == "Paid"
    assert match_status("On Hold", BOOKING_STATUSES) is None
    assert match_status(None, BOOKING_STATUSES) is None
    assert match_status("", PAYMENT_STATUSES) is None


def test_status_choices_preselects_stored_status():
    options, index = status_choices("PendingPickup", BOOKING_STATUSES)
    assert options == BOOKING_STATUSES
    assert options[index] == "Pending Pickup"

    options, index = status_choices("paid", PAYMENT_STATUSES)
    assert options[index] == "Paid"


def test_status_choices_keeps_unknown_status_selectable():
    options, index = status_choices("On Hold", BOOKING_STATUSES)
    assert options == BOOKING_STATUSES + ["On Hold"]
    assert options[index] == "On Hold"
    assert "On Hold" not in BOOKING_STATUSES


def test_status_choices_without_stored_status_picks_first():
    assert status_choices(None, CUSTOMER_STATUSES) == (CUSTOMER_STATUSES, 0)
    assert status_choices("  ", CUSTOMER_STATUSES) == (CUSTOMER_STATUSES, 0)


def test_to_date_drops_time_of_day():
    assert to_date("2024-06-10") == date(2024, 6, 10)
    assert to_date("2024-06-10T23:59:00") == date(2024, 6, 10)
    assert to_date(datetime(2024, 6, 10, 9, 0)) == date(2024, 6, 10)
    assert to_date(pd.Timestamp("2024-06-10 14:30")) == date(2024, 6, 10)


def test_to_date_unreadable_values_give_none():
    assert to_date(None) is None
    assert to_date("") is None
    assert to_date("not a date") is None
    assert to_date(float("nan")) is None
    assert to_date(pd.NaT) is None


# -----------------------------------------------------------------------------
# BOOKINGS
# -----------------------------------------------------------------------------

def test_confirmed_booking_ending_today_is_due_today():
    result = classify_booking({"status": "Confirmed", "end_date": "2024-06-10"}, date(2024, 6, 10))
    assert result["is_due_today"] is True
    assert result["is_overdue"] is False
    assert result["days_overdue"] == 0
    assert result["return_status"] == RETURN_DUE_TODAY


def test_active_booking_past_end_date_is_overdue():
    result = classify_booking({"status": "Active", "end_date": "2024-06-10"}, date(2024, 6, 15))
    assert result["is_overdue"] is True
    assert result["days_overdue"] == 5
    assert result["is_due_today"] is False
    assert result["return_status"] == RETURN_OVERDUE


def test_returned_booking_is_not_overdue():
    result = classify_booking({"status": "Active", "end_date": "2024-06-10"}, date(2024, 6, 15), is_returned=True)
    assert result["is_overdue"] is False
    assert result["days_overdue"] == 0
    assert result["return_status"] == RETURN_ON_TIME


@pytest.mark.parametrize("status", ["Active", "Extended", "Confirmed"])
def test_eligible_statuses_can_be_overdue(status):
    result = classify_booking({"status": status, "end_date": "2024-06-14"}, date(2024, 6, 15))
    assert result["is_overdue"] is True
    assert result["days_overdue"] == 1


@pytest.mark.parametrize("status", ["Completed", "Pending Pickup", "Overdue", None])
def test_other_statuses_are_never_overdue(status):
    result = classify_booking({"status": status, "end_date": "2024-06-01"}, date(2024, 6, 15))
    assert result["is_overdue"] is False
    assert result["days_overdue"] == 0


def test_completed_booking_ending_today_is_not_due_today():
    result = classify_booking({"status": "Completed", "end_date": "2024-06-10"}, date(2024, 6, 10))
    assert result["is_due_today"] is False
    assert result["is_overdue"] is False
    assert result["return_status"] == RETURN_ON_TIME


def test_time_of_day_does_not_matter():
    morning = classify_booking({"status": "Active", "end_date": "2024-06-10T09:00:00"}, datetime(2024, 6, 10, 23, 0))
    evening = classify_booking({"status": "Active", "end_date": "2024-06-10T23:59:00"}, date(2024, 6, 10))
    assert morning == evening
    assert morning["return_status"] == RETURN_DUE_TODAY


def test_booking_without_end_date_is_on_time():
    result = classify_booking({"status": "Active", "end_date": None}, date(2024, 6, 10))
    assert result["return_status"] == RETURN_ON_TIME
    assert result["is_overdue"] is False


# -----------------------------------------------------------------------------
# COMPLIANCE
# -----------------------------------------------------------------------------

def test_compliance_boundaries():
    today = date(2024, 6, 10)

    expires_today = classify_compliance("2024-06-10", today)
    assert expires_today == {"status": COMPLIANCE_EXPIRING_SOON, "days_until_expiry": 0}

    yesterday = classify_compliance("2024-06-09", today)
    assert yesterday == {"status": COMPLIANCE_EXPIRED, "days_until_expiry": -1}

    in_30 = classify_compliance("2024-07-10", today)
    assert in_30 == {"status": COMPLIANCE_EXPIRING_SOON, "days_until_expiry": 30}

    in_31 = classify_compliance("2024-07-11", today)
    assert in_31 == {"status": COMPLIANCE_VALID, "days_until_expiry": 31}


def test_compliance_without_expiry_is_expired():
    result = classify_compliance(None, date(2024, 6, 10))
    assert result["status"] == COMPLIANCE_EXPIRED
    assert result["days_until_expiry"] is None


def test_describe_expiry():
    assert describe_expiry(None) == "No expiry date"
    assert describe_expiry(-3) == "3 days overdue"
    assert describe_expiry(0) == "Expires today"
    assert describe_expiry(12) == "12 days left"


# -----------------------------------------------------------------------------
# MAINTENANCE
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("raw, expected", [
    ("Done", MAINTENANCE_DONE),
    ("completed", MAINTENANCE_DONE),
    ("DONE", MAINTENANCE_DONE),
    ("in_shop", MAINTENANCE_IN_SHOP),
    ("in-shop", MAINTENANCE_IN_SHOP),
    ("In Progress", MAINTENANCE_IN_SHOP),
    (" overdue ", MAINTENANCE_OVERDUE),
    ("scheduled", MAINTENANCE_SCHEDULED),
    ("weird_value", MAINTENANCE_SCHEDULED),
    ("", MAINTENANCE_SCHEDULED),
    (None, MAINTENANCE_SCHEDULED),
])
def test_normalize_maintenance_status(raw, expected):
    assert normalize_maintenance_status(raw) == expected
