# =============================================================================
# utils/calculations.py
# =============================================================================
# PURPOSE:
#   Ledger reconciliation: how much is still owed on a booking.
#
#   A booking's balance is made of three parts:
#   - PRINCIPAL:     the original rental charge (total_amount)
#   - EXTENSIONS:    charges for lengthening the rental
#   - EXTRA CHARGES: damage, fuel, late fees...
#
# BUSINESS RULES:
#   - Principal is all-or-nothing. Paid → 0 owed, anything else (including
#     Partial) → the full total_amount is owed.
#   - An extension is settled once it has a receipt number. Without one,
#     its amount_paid figure is what is still owed (the field name is
#     historical, the number is the unreceipted charge).
#   - An extra charge owes amount - amount_paid, never less than 0.
#
#   All amounts come back as Decimal. Missing or garbage numbers count as 0.
#   Nothing here raises for bad data.
# =============================================================================

from collections import defaultdict
from decimal import Decimal, InvalidOperation

import pandas as pd

from config import CURRENCY_SYMBOL, PAYMENT_PAID
from .classifications import status_key

ZERO = Decimal("0")


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def to_amount(value):
    """
    Safely convert a value to a Decimal amount.
    Returns Decimal("0") if conversion fails.

    HANDLES:
        - None, "", NaN, "N/A", "-"   → 0
        - "1,250.00", "$450.00"       → 1250.00, 450.00
        - floats                      → via str(), so 0.1 stays 0.1
        - numpy scalars from pandas   → unwrapped first
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    # numpy types (from pandas)
    if hasattr(value, "item") and not isinstance(value, (int, float, str)):
        return to_amount(value.item())
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return ZERO
        return Decimal(str(value))

    cleaned = str(value).replace(",", "").strip()
    for symbol in (CURRENCY_SYMBOL, "$", "£", "€"):
        cleaned = cleaned.replace(symbol, "")
    cleaned = cleaned.strip()
    if cleaned == "" or cleaned.lower() in ("nan", "none", "n/a", "-"):
        return ZERO
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return ZERO
    return amount if amount.is_finite() else ZERO


def _records(rows):
    """Accept None, a list of dict-likes, or a DataFrame; always give a list."""
    if rows is None:
        return []
    if isinstance(rows, pd.DataFrame):
        return rows.to_dict("records")
    return list(rows)


def _is_blank(value):
    if value is None:
        return True
    # NaN, NaT and pd.NA from pandas rows
    try:
        if pd.isna(value):
            return True
    except (TypeError, ValueError):
        pass
    return str(value).strip() == ""


# =============================================================================
# PER-RECORD CONTRIBUTIONS
# =============================================================================

def principal_outstanding(booking):
    """
    What is owed on the original rental charge.

    RETURNS:
        Decimal: 0 if payment_status is Paid, otherwise total_amount.

    NOTE:
        "Partial" does NOT reduce the principal. A partially paid booking
        still shows its full total_amount here.
    """
    if status_key(booking.get("payment_status")) == status_key(PAYMENT_PAID):
        return ZERO
    return max(ZERO, to_amount(booking.get("total_amount")))


def extension_outstanding(extension):
    """
    What is owed on one extension.

    RETURNS:
        Decimal: 0 if the extension has a receipt_no, otherwise its full
        amount_paid.

    EXAMPLE:
        extension_outstanding({"amount_paid": 120, "receipt_no": "R-881"}) → 0
        extension_outstanding({"amount_paid": 120, "receipt_no": ""})      → 120
    """
    if not _is_blank(extension.get("receipt_no")):
        return ZERO
    return max(ZERO, to_amount(extension.get("amount_paid")))


def extra_charge_outstanding(charge):
    """Shortfall on one extra charge: max(0, amount - amount_paid)."""
    shortfall = to_amount(charge.get("amount")) - to_amount(charge.get("amount_paid"))
    return max(ZERO, shortfall)


# =============================================================================
# BOOKING BALANCE
# =============================================================================

def outstanding_for_booking(booking, extensions=None, extra_charges=None):
    """
    Calculate the outstanding balance for a single booking.

    PARAMETERS:
        booking (dict-like): Needs 'payment_status' and 'total_amount'
        extensions (list or DataFrame): This booking's extensions
        extra_charges (list or DataFrame): This booking's extra charges

    RETURNS:
        Decimal: principal + unreceipted extensions + charge shortfalls.
        Always >= 0.

    EXAMPLE:
        booking  = {"payment_status": "Partial", "total_amount": 500}
        extensions = [{"amount_paid": 100, "receipt_no": None}]
        charges  = [{"amount": 80, "amount_paid": 30}]
        → Decimal("650")   (500 + 100 + 50)
    """
    total = principal_outstanding(booking)

    for extension in _records(extensions):
        total += extension_outstanding(extension)

    for charge in _records(extra_charges):
        total += extra_charge_outstanding(charge)

    return total


# =============================================================================
# ROLLUPS ACROSS BOOKINGS
# =============================================================================

def group_by_booking(rows, key="booking_id"):
    """
    Group flat extension / charge rows by booking.

    RETURNS:
        dict: booking_id → list of rows, the shape rollup() expects.
    """
    grouped = defaultdict(list)
    for row in _records(rows):
        grouped[row.get(key)].append(row)
    return dict(grouped)


def rollup(bookings, extensions_by_booking=None, charges_by_booking=None):
    """
    Total outstanding across many bookings (a customer, a vehicle, the fleet).

    PARAMETERS:
        bookings (list or DataFrame): Bookings to include
        extensions_by_booking (dict): booking_id → extensions
        charges_by_booking (dict): booking_id → extra charges

    RETURNS:
        Decimal: sum of outstanding_for_booking() for each booking.

    NOTE:
        Bookings are not deduplicated. Pass each booking once.
    """
    extensions_by_booking = extensions_by_booking or {}
    charges_by_booking = charges_by_booking or {}

    total = ZERO
    for booking in _records(bookings):
        booking_id = booking.get("booking_id")
        total += outstanding_for_booking(
            booking,
            extensions_by_booking.get(booking_id),
            charges_by_booking.get(booking_id),
        )
    return total


def outstanding_by(bookings, extensions_by_booking=None, charges_by_booking=None, key="customer_id"):
    """
    Outstanding balance per customer (or per vehicle with key="vehicle_id").

    RETURNS:
        dict: key value → Decimal total
    """
    extensions_by_booking = extensions_by_booking or {}
    charges_by_booking = charges_by_booking or {}

    totals = defaultdict(lambda: ZERO)
    for booking in _records(bookings):
        booking_id = booking.get("booking_id")
        totals[booking.get(key)] += outstanding_for_booking(
            booking,
            extensions_by_booking.get(booking_id),
            charges_by_booking.get(booking_id),
        )
    return dict(totals)


def format_amount(amount):
    """Currency string for display, e.g. '$1,250.00'."""
    return f"{CURRENCY_SYMBOL}{to_amount(amount):,.2f}"
