# =============================================================================
# utils/classifications.py
# =============================================================================
# PURPOSE:
#   Turns dates and raw status strings into the fixed status tags the
#   screens display:
#   - Booking returns: OVERDUE / DUE TODAY / ON TIME (+ days overdue)
#   - Compliance records: VALID / EXPIRING_SOON / EXPIRED (+ days left)
#   - Maintenance tasks: Scheduled / In Shop / Overdue / Done
#
# THE "TODAY" RULE:
#   Every function takes "today" as an argument. Nothing in here reads the
#   system clock, so the same inputs always give the same tags.
#   Screens pass date.today(); tests pass a fixed date.
#
# DATE-ONLY:
#   Dates are compared at midnight. A booking ending at 09:00 and one ending
#   at 23:59 on the same day are classified the same way.
# =============================================================================

from datetime import date, datetime

import pandas as pd

from config import (
    BOOKING_COMPLETED,
    COMPLIANCE_EXPIRED,
    COMPLIANCE_EXPIRING_SOON,
    COMPLIANCE_VALID,
    ELIGIBLE_OVERDUE_STATUSES,
    EXPIRING_SOON_DAYS,
    MAINTENANCE_SCHEDULED,
    MAINTENANCE_STATUS_SYNONYMS,
    RETURN_DUE_TODAY,
    RETURN_ON_TIME,
    RETURN_OVERDUE,
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def status_key(value):
    """
    Reduce a status string to a comparison key.

    "Pending Pickup", "PendingPickup", "pending_pickup" and " PENDING-PICKUP "
    all give "pendingpickup". Missing values give "".
    """
    if not isinstance(value, str):
        return ""
    key = value.strip().lower()
    for separator in (" ", "_", "-"):
        key = key.replace(separator, "")
    return key


def match_status(value, options):
    """
    The option a stored status spells, compared by status_key().

    EXAMPLE:
        match_status("PendingPickup", BOOKING_STATUSES) → 'Pending Pickup'
        match_status("paid", PAYMENT_STATUSES)          → 'Paid'
        match_status("On Hold", BOOKING_STATUSES)       → None
    """
    key = status_key(value)
    if not key:
        return None
    for option in options:
        if status_key(option) == key:
            return option
    return None


def status_choices(value, options):
    """
    Options and preselected index for a status selectbox.

    The stored value's own option is preselected. A stored value that
    matches no option is appended as it is and preselected, so saving a
    form without touching the box never writes a different status.

    RETURNS:
        tuple: (list of options, index)
    """
    choices = list(options)
    matched = match_status(value, choices)
    if matched is not None:
        return choices, choices.index(matched)
    if isinstance(value, str) and value.strip():
        choices.append(value)
        return choices, len(choices) - 1
    return choices, 0


def to_date(value):
    """
    Convert a date-like value to a datetime.date (time of day dropped).

    ACCEPTS:
        date, datetime, pd.Timestamp, or an ISO string ("2024-06-10",
        "2024-06-10T14:30:00"). Anything else, including None, NaN, NaT and
        unparseable text, gives None.
    """
    if value is None:
        return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            # First 10 chars are YYYY-MM-DD, the rest is an optional time part
            return date.fromisoformat(text[:10])
        except ValueError:
            return None

    # NaN / NaT from pandas rows
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return None

    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return None


# =============================================================================
# BOOKING RETURNS
# =============================================================================

_ELIGIBLE_KEYS = {status_key(s) for s in ELIGIBLE_OVERDUE_STATUSES}


def classify_booking(booking, today, is_returned=False):
    """
    Work out whether a booking is due back today or overdue.

    PARAMETERS:
        booking (dict-like): Needs 'status' and 'end_date'
        today (date): Reference day supplied by the caller
        is_returned (bool): True if a vehicle return has been logged

    RETURNS:
        dict: {
            'is_overdue': bool,
            'days_overdue': int,
            'is_due_today': bool,
            'return_status': 'OVERDUE' | 'DUE TODAY' | 'ON TIME',
        }

    BUSINESS RULES:
        - Due today: any status except Completed, with end_date == today
        - Overdue: not returned, today is past end_date, and the status is
          Active, Extended or Confirmed
        - days_overdue counts whole days past end_date (0 if not overdue)

    EXAMPLE:
        today = 2024-06-15, Active booking ending 2024-06-10, not returned
        → {'is_overdue': True, 'days_overdue': 5, 'is_due_today': False,
           'return_status': 'OVERDUE'}
    """
    result = {
        "is_overdue": False,
        "days_overdue": 0,
        "is_due_today": False,
        "return_status": RETURN_ON_TIME,
    }

    today = to_date(today)
    end_date = to_date(booking.get("end_date"))
    if today is None or end_date is None:
        return result

    status = status_key(booking.get("status"))

    is_due_today = status != status_key(BOOKING_COMPLETED) and end_date == today
    is_overdue = (not is_returned) and today > end_date and status in _ELIGIBLE_KEYS

    result["is_due_today"] = is_due_today
    result["is_overdue"] = is_overdue

    if is_overdue:
        result["days_overdue"] = (today - end_date).days
        result["return_status"] = RETURN_OVERDUE
    elif is_due_today:
        result["return_status"] = RETURN_DUE_TODAY

    return result


# =============================================================================
# COMPLIANCE RECORDS
# =============================================================================

def classify_compliance(expiry_date, today):
    """
    Tier an insurance / registration / safety-sticker record by expiry.

    RETURNS:
        dict: {'status': 'VALID' | 'EXPIRING_SOON' | 'EXPIRED',
               'days_until_expiry': int or None}

    BUSINESS RULES:
        days_until_expiry = expiry_date - today, in days (negative = past)
        - EXPIRED:        days < 0
        - EXPIRING_SOON:  0 <= days <= EXPIRING_SOON_DAYS (30)
        - VALID:          anything later

        Expiring today (0 days) is EXPIRING_SOON, not EXPIRED.
        A record with no readable expiry date can't be shown as valid, so it
        comes back EXPIRED with days_until_expiry = None.
    """
    expiry = to_date(expiry_date)
    today = to_date(today)

    if expiry is None or today is None:
        return {"status": COMPLIANCE_EXPIRED, "days_until_expiry": None}

    days_until_expiry = (expiry - today).days

    if days_until_expiry < 0:
        status = COMPLIANCE_EXPIRED
    elif days_until_expiry <= EXPIRING_SOON_DAYS:
        status = COMPLIANCE_EXPIRING_SOON
    else:
        status = COMPLIANCE_VALID

    return {"status": status, "days_until_expiry": days_until_expiry}


def describe_expiry(days_until_expiry):
    """Short label for the 'Expires' column, e.g. '3 days left'."""
    if days_until_expiry is None:
        return "No expiry date"
    if days_until_expiry < 0:
        return f"{abs(days_until_expiry)} days overdue"
    if days_until_expiry == 0:
        return "Expires today"
    return f"{days_until_expiry} days left"


# =============================================================================
# MAINTENANCE TASKS
# =============================================================================

def normalize_maintenance_status(raw):
    """
    Map a stored maintenance status to one of the four tags.

    Storage has collected several spellings over time ("done", "completed",
    "in_shop", "in-shop", "in progress", "overdue"). The lookup lives in
    config.MAINTENANCE_STATUS_SYNONYMS; matching ignores case and
    surrounding spaces. Anything else, including None, comes back as
    "Scheduled".

    EXAMPLE:
        normalize_maintenance_status("DONE")        → 'Done'
        normalize_maintenance_status("in progress") → 'In Shop'
        normalize_maintenance_status("weird_value") → 'Scheduled'
    """
    if not isinstance(raw, str):
        return MAINTENANCE_SCHEDULED
    return MAINTENANCE_STATUS_SYNONYMS.get(raw.strip().lower(), MAINTENANCE_SCHEDULED)
