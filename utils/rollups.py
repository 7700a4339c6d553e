# =============================================================================
# utils/rollups.py
# =============================================================================
# PURPOSE:
#   Summary numbers for the overview screens: counts per status tag,
#   money totals, and the per-row tables the screens render.
#
# HOW IT FITS:
#   calculations.py     → what is owed (per booking)
#   classifications.py  → what tag a record gets (per record)
#   rollups.py          → counts and sums over those results
#
#   No new business rules live here. Every function is a fold over the
#   per-record results, and every function copes with empty input by
#   returning zeros rather than failing.
# =============================================================================

import pandas as pd

from config import (
    BOOKING_STATUSES,
    COMPLIANCE_EXPIRED,
    COMPLIANCE_EXPIRING_SOON,
    COMPLIANCE_RECORD_TYPES,
    COMPLIANCE_STATUSES,
    MAINTENANCE_OVERDUE,
    MAINTENANCE_STATUSES,
    RETURN_DUE_TODAY,
    RETURN_OVERDUE,
    RETURN_STATUSES,
)
from .calculations import (
    ZERO,
    _records,
    format_amount,
    group_by_booking,
    outstanding_for_booking,
    principal_outstanding,
    to_amount,
)
from .classifications import (
    classify_booking,
    classify_compliance,
    describe_expiry,
    normalize_maintenance_status,
    status_key,
)


# =============================================================================
# COUNTING
# =============================================================================

def count_by(values, tags):
    """
    Count how many times each tag appears.

    PARAMETERS:
        values (iterable): Tags to count
        tags (list): Known tags; each is present in the result even at 0

    RETURNS:
        dict: tag → count. Unknown values are counted under their own key.

    EXAMPLE:
        count_by(["Done", "Done"], ["Scheduled", "Done"])
        → {"Scheduled": 0, "Done": 2}
    """
    counts = {tag: 0 for tag in tags}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    return counts


def booking_status_counts(bookings):
    """Bookings per status. 'PendingPickup' and 'Pending Pickup' count together."""
    canonical = {status_key(s): s for s in BOOKING_STATUSES}
    values = []
    for booking in _records(bookings):
        raw = booking.get("status")
        values.append(canonical.get(status_key(raw), raw))
    return count_by(values, BOOKING_STATUSES)


def return_status_counts(classified_bookings):
    """OVERDUE / DUE TODAY / ON TIME counts from classify_booking() results."""
    return count_by((c["return_status"] for c in classified_bookings), RETURN_STATUSES)


def compliance_tier_counts(classified_records):
    """EXPIRED / EXPIRING_SOON / VALID counts from classify_compliance() results."""
    return count_by((c["status"] for c in classified_records), COMPLIANCE_STATUSES)


def maintenance_tag_counts(tasks):
    """Tasks per tag, normalising the raw stored status first."""
    tags = (normalize_maintenance_status(t.get("status")) for t in _records(tasks))
    return count_by(tags, MAINTENANCE_STATUSES)


# =============================================================================
# MONEY
# =============================================================================

def payment_totals(bookings):
    """
    Principal totals across bookings.

    RETURNS:
        dict: {
            'total_amount':  sum of every booking's total_amount,
            'unpaid_amount': sum of principals not marked Paid,
            'paid_amount':   the difference,
        }
        All Decimal.
    """
    total = ZERO
    unpaid = ZERO
    for booking in _records(bookings):
        total += max(ZERO, to_amount(booking.get("total_amount")))
        unpaid += principal_outstanding(booking)
    return {
        "total_amount": total,
        "unpaid_amount": unpaid,
        "paid_amount": total - unpaid,
    }


# =============================================================================
# SCREEN TABLES
# =============================================================================

def build_booking_ledger(bookings, extensions=None, charges=None, returned_ids=None, today=None):
    """
    One row per booking with its balance and return status added.

    PARAMETERS:
        bookings (DataFrame or list): Bookings to show
        extensions (DataFrame or list): All extensions (any booking)
        charges (DataFrame or list): All extra charges (any booking)
        returned_ids (set): booking_ids that have a vehicle return logged
        today (date): Reference day

    RETURNS:
        pd.DataFrame: Bookings with added columns:
            - outstanding (float, for display; Decimal figures come from
              outstanding_for_booking)
            - extension_count, charge_count
            - is_overdue, days_overdue, is_due_today, return_status
    """
    rows = _records(bookings)
    if len(rows) == 0:
        return pd.DataFrame()

    extensions_by_booking = group_by_booking(extensions)
    charges_by_booking = group_by_booking(charges)
    returned_ids = returned_ids or set()

    result = []
    for booking in rows:
        booking_id = booking.get("booking_id")
        booking_extensions = extensions_by_booking.get(booking_id, [])
        booking_charges = charges_by_booking.get(booking_id, [])

        row = dict(booking)
        row["outstanding"] = float(outstanding_for_booking(booking, booking_extensions, booking_charges))
        row["extension_count"] = len(booking_extensions)
        row["charge_count"] = len(booking_charges)
        row.update(classify_booking(booking, today, is_returned=booking_id in returned_ids))
        result.append(row)

    return pd.DataFrame(result)


def build_compliance_table(records, today):
    """
    Compliance records with status, days_until_expiry and a display label.
    """
    rows = _records(records)
    if len(rows) == 0:
        return pd.DataFrame()

    result = []
    for record in rows:
        row = dict(record)
        row.update(classify_compliance(record.get("expiry_date"), today))
        row["expiry_label"] = describe_expiry(row["days_until_expiry"])
        row["record_label"] = COMPLIANCE_RECORD_TYPES.get(record.get("record_type"), record.get("record_type"))
        result.append(row)

    return pd.DataFrame(result)


def build_maintenance_table(tasks):
    """Maintenance tasks with the normalised status_tag column added."""
    rows = _records(tasks)
    if len(rows) == 0:
        return pd.DataFrame()

    result = []
    for task in rows:
        row = dict(task)
        row["status_tag"] = normalize_maintenance_status(task.get("status"))
        result.append(row)

    return pd.DataFrame(result)


# =============================================================================
# DASHBOARD
# =============================================================================

def dashboard_summary(bookings, extensions, charges, returned_ids, records, tasks, today):
    """
    Everything the Dashboard page shows, in one dict.

    RETURNS:
        dict with:
            booking_count, booking_status_counts, return_status_counts,
            overdue_count, due_today_count,
            compliance_counts, maintenance_counts,
            total_amount, unpaid_amount, outstanding_total (Decimal),
            action_items (list of str)
    """
    booking_rows = _records(bookings)
    returned_ids = returned_ids or set()
    extensions_by_booking = group_by_booking(extensions)
    charges_by_booking = group_by_booking(charges)

    classified_bookings = []
    outstanding_total = ZERO
    owing_count = 0
    for booking in booking_rows:
        booking_id = booking.get("booking_id")
        classified_bookings.append(
            classify_booking(booking, today, is_returned=booking_id in returned_ids)
        )
        owed = outstanding_for_booking(
            booking,
            extensions_by_booking.get(booking_id),
            charges_by_booking.get(booking_id),
        )
        outstanding_total += owed
        if owed > 0:
            owing_count += 1

    classified_records = [
        classify_compliance(r.get("expiry_date"), today) for r in _records(records)
    ]

    returns = return_status_counts(classified_bookings)
    compliance = compliance_tier_counts(classified_records)
    maintenance = maintenance_tag_counts(tasks)
    money = payment_totals(booking_rows)

    # -----------------------------------------------------------------
    # ACTION ITEMS
    # -----------------------------------------------------------------
    action_items = []
    overdue_days = sum(c["days_overdue"] for c in classified_bookings)
    if returns[RETURN_OVERDUE] > 0:
        action_items.append(
            f"{returns[RETURN_OVERDUE]} rentals overdue for return ({overdue_days} days overdue in total)"
        )
    if returns[RETURN_DUE_TODAY] > 0:
        action_items.append(f"{returns[RETURN_DUE_TODAY]} rentals due back today")
    if compliance[COMPLIANCE_EXPIRED] > 0:
        action_items.append(f"{compliance[COMPLIANCE_EXPIRED]} compliance records expired")
    if compliance[COMPLIANCE_EXPIRING_SOON] > 0:
        action_items.append(f"{compliance[COMPLIANCE_EXPIRING_SOON]} compliance records expiring soon")
    if maintenance[MAINTENANCE_OVERDUE] > 0:
        action_items.append(f"{maintenance[MAINTENANCE_OVERDUE]} maintenance tasks overdue")
    if outstanding_total > 0:
        action_items.append(
            f"{owing_count} bookings with a balance ({format_amount(outstanding_total)} outstanding)"
        )

    return {
        "booking_count": len(booking_rows),
        "booking_status_counts": booking_status_counts(booking_rows),
        "return_status_counts": returns,
        "overdue_count": returns[RETURN_OVERDUE],
        "due_today_count": returns[RETURN_DUE_TODAY],
        "compliance_counts": compliance,
        "maintenance_counts": maintenance,
        "total_amount": money["total_amount"],
        "unpaid_amount": money["unpaid_amount"],
        "outstanding_total": outstanding_total,
        "action_items": action_items,
    }
