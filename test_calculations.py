# =============================================================================
# test_calculations.py - Outstanding balance tests
# =============================================================================
# Covers utils/calculations.py: what each booking, extension and extra
# charge contributes to the balance, and the totals across bookings.
#
# Run: pytest test_calculations.py
# =============================================================================

from decimal import Decimal

import pandas as pd

from utils import (
    extension_outstanding,
    extra_charge_outstanding,
    format_amount,
    group_by_booking,
    outstanding_by,
    outstanding_for_booking,
    principal_outstanding,
    rollup,
    to_amount,
)


def booking(booking_id=1, payment_status="Unpaid", total_amount=500, customer_id=10, vehicle_id=20):
    return {
        "booking_id": booking_id,
        "customer_id": customer_id,
        "vehicle_id": vehicle_id,
        "payment_status": payment_status,
        "total_amount": total_amount,
    }


# -----------------------------------------------------------------------------
# to_amount
# -----------------------------------------------------------------------------

def test_to_amount_missing_values_are_zero():
    assert to_amount(None) == Decimal("0")
    assert to_amount("") == Decimal("0")
    assert to_amount(float("nan")) == Decimal("0")
    assert to_amount("N/A") == Decimal("0")
    assert to_amount("-") == Decimal("0")


def test_to_amount_parses_currency_text():
    assert to_amount("$1,250.00") == Decimal("1250.00")
    assert to_amount(" 450 ") == Decimal("450")
    assert to_amount("abc") == Decimal("0")


def test_to_amount_float_goes_through_str():
    assert to_amount(0.1) == Decimal("0.1")
    assert to_amount(19.99) + to_amount(0.01) == Decimal("20.00")


def test_to_amount_unwraps_pandas_scalars():
    df = pd.DataFrame([{"amount": 125, "price": 10.5}])
    assert to_amount(df["amount"].iloc[0]) == Decimal("125")
    assert to_amount(df["price"].iloc[0]) == Decimal("10.5")


# -----------------------------------------------------------------------------
# PER-RECORD CONTRIBUTIONS
# -----------------------------------------------------------------------------

def test_paid_booking_without_extras_owes_nothing():
    for total in (0, 1, 500, "999.99"):
        assert outstanding_for_booking(booking(payment_status="Paid", total_amount=total)) == Decimal("0")


def test_partial_payment_does_not_reduce_principal():
    for status in ("Unpaid", "Partial"):
        assert outstanding_for_booking(booking(payment_status=status, total_amount=500)) == Decimal("500")


def test_paid_matching_ignores_case_and_spacing():
    assert principal_outstanding(booking(payment_status="paid")) == Decimal("0")
    assert principal_outstanding(booking(payment_status=" PAID ")) == Decimal("0")


def test_missing_total_amount_counts_as_zero():
    assert principal_outstanding(booking(total_amount=None)) == Decimal("0")
    assert principal_outstanding({"payment_status": "Unpaid"}) == Decimal("0")


def test_extension_with_receipt_contributes_nothing():
    assert extension_outstanding({"amount_paid": 120, "receipt_no": "R-881"}) == Decimal("0")


def test_extension_without_receipt_contributes_amount_paid():
    assert extension_outstanding({"amount_paid": 120, "receipt_no": ""}) == Decimal("120")
    assert extension_outstanding({"amount_paid": 120, "receipt_no": None}) == Decimal("120")
    assert extension_outstanding({"amount_paid": 120, "receipt_no": "   "}) == Decimal("120")
    assert extension_outstanding({"amount_paid": 120}) == Decimal("120")


def test_extension_with_missing_receipt_from_pandas_contributes_amount_paid():
    assert extension_outstanding({"amount_paid": 120, "receipt_no": pd.NA}) == Decimal("120")
    assert extension_outstanding({"amount_paid": 120, "receipt_no": float("nan")}) == Decimal("120")
    assert extension_outstanding({"amount_paid": 120, "receipt_no": pd.NaT}) == Decimal("120")


def test_outstanding_for_booking_accepts_nullable_dtypes():
    extensions = pd.DataFrame([
        {"amount_paid": 90.0, "receipt_no": None},
        {"amount_paid": 70.0, "receipt_no": "R-1"},
    ]).convert_dtypes()
    assert extensions["receipt_no"].isna().iloc[0]
    owed = outstanding_for_booking(booking(payment_status="Paid"), extensions)
    assert owed == Decimal("90")


def test_extra_charge_shortfall_is_clamped_at_zero():
    assert extra_charge_outstanding({"amount": 80, "amount_paid": 30}) == Decimal("50")
    assert extra_charge_outstanding({"amount": 80, "amount_paid": 80}) == Decimal("0")
    assert extra_charge_outstanding({"amount": 200, "amount_paid": 250}) == Decimal("0")
    assert extra_charge_outstanding({"amount": 45}) == Decimal("45")


def test_overpaid_charge_is_not_subtracted_from_total():
    owed = outstanding_for_booking(
        booking(payment_status="Unpaid", total_amount=100),
        extra_charges=[{"amount": 10, "amount_paid": 60}, {"amount": 30, "amount_paid": 0}],
    )
    assert owed == Decimal("130")


def test_outstanding_for_booking_adds_all_three_parts():
    owed = outstanding_for_booking(
        booking(payment_status="Partial", total_amount=500),
        [{"amount_paid": 100, "receipt_no": None}, {"amount_paid": 70, "receipt_no": "R-1"}],
        [{"amount": 80, "amount_paid": 30}],
    )
    assert owed == Decimal("650")


def test_outstanding_for_booking_accepts_dataframes():
    extensions = pd.DataFrame([{"amount_paid": 90.0, "receipt_no": None}])
    charges = pd.DataFrame([{"amount": 45.0, "amount_paid": 0.0}])
    owed = outstanding_for_booking(booking(payment_status="Paid"), extensions, charges)
    assert owed == Decimal("135")


# -----------------------------------------------------------------------------
# ROLLUPS
# -----------------------------------------------------------------------------

def test_rollup_equals_sum_of_individual_balances():
    bookings = [
        booking(1, "Unpaid", 300),
        booking(2, "Paid", 150),
        booking(3, "Partial", 220),
    ]
    extensions = {1: [{"amount_paid": 50, "receipt_no": ""}], 2: [{"amount_paid": 40, "receipt_no": None}]}
    charges = {3: [{"amount": 25, "amount_paid": 5}]}

    individually = sum(
        (outstanding_for_booking(b, extensions.get(b["booking_id"]), charges.get(b["booking_id"])) for b in bookings),
        Decimal("0"),
    )
    assert rollup(bookings, extensions, charges) == individually == Decimal("630")


def test_rollup_does_not_deduplicate():
    single = booking(1, "Unpaid", 100)
    assert rollup([single, single]) == Decimal("200")


def test_rollup_of_nothing_is_zero():
    assert rollup([]) == Decimal("0")
    assert rollup(None) == Decimal("0")
    assert rollup(pd.DataFrame()) == Decimal("0")


def test_group_by_booking():
    rows = [
        {"booking_id": 1, "amount_paid": 10},
        {"booking_id": 2, "amount_paid": 20},
        {"booking_id": 1, "amount_paid": 30},
    ]
    grouped = group_by_booking(rows)
    assert sorted(grouped.keys()) == [1, 2]
    assert [r["amount_paid"] for r in grouped[1]] == [10, 30]


def test_outstanding_by_customer_and_vehicle():
    bookings = [
        booking(1, "Unpaid", 100, customer_id=10, vehicle_id=20),
        booking(2, "Unpaid", 50, customer_id=10, vehicle_id=21),
        booking(3, "Paid", 75, customer_id=11, vehicle_id=20),
    ]
    charges = {3: [{"amount": 30, "amount_paid": 0}]}

    by_customer = outstanding_by(bookings, None, charges)
    assert by_customer == {10: Decimal("150"), 11: Decimal("30")}

    by_vehicle = outstanding_by(bookings, None, charges, key="vehicle_id")
    assert by_vehicle == {20: Decimal("130"), 21: Decimal("50")}


def test_format_amount():
    assert format_amount(Decimal("1755")) == "$1,755.00"
    assert format_amount(None) == "$0.00"
