# =============================================================================
# test_e2e_flow.py - End-to-end test: Seed → Dashboard → Settle up
# =============================================================================
# Runs the app's data flow against a scratch database:
#   1. Create the tables (twice, to prove it is safe)
#   2. Load from the empty database
#   3. Seed the demo fleet around a fixed "today"
#   4. Check the dashboard numbers
#   5. Receipt an extension, log a return, finish a repair
#   6. Check the numbers moved the way they should
#
# Run: pytest test_e2e_flow.py
# =============================================================================

import sqlite3
from datetime import date
from decimal import Decimal

import pytest

import config
import database.queries as queries
from database import (
    init_db,
    get_table_info,
    load_bookings,
    load_booking_by_id,
    load_customers,
    load_extensions,
    load_extra_charges,
    load_returned_booking_ids,
    load_compliance_records,
    load_maintenance_tasks,
    create_booking,
    create_vehicle_return,
    load_vehicle_returns,
    load_vehicles,
    update_booking,
    update_customer,
    update_extension,
    update_extra_charge,
    update_maintenance_status,
    update_vehicle,
)
from seed_data import seed_demo_data
from utils import (
    classify_booking,
    dashboard_summary,
    group_by_booking,
    outstanding_by,
    outstanding_for_booking,
)

TODAY = date(2024, 6, 15)


def summarise():
    return dashboard_summary(
        load_bookings(),
        load_extensions(),
        load_extra_charges(),
        load_returned_booking_ids(),
        load_compliance_records(),
        load_maintenance_tasks(),
        TODAY,
    )


@pytest.fixture
def scratch_db(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DB_PATH", str(tmp_path / "fleet_e2e_test.db"))
    assert init_db(), "init_db failed"
    return config.DB_PATH


@pytest.fixture
def seeded(scratch_db):
    return seed_demo_data(TODAY)


# -----------------------------------------------------------------------------
# 1-2. EMPTY DATABASE
# -----------------------------------------------------------------------------

def test_init_db_is_repeatable(scratch_db):
    assert init_db()
    tables = set(get_table_info())
    assert {
        "customers", "vehicles", "bookings", "booking_extensions", "extra_charges",
        "vehicle_returns", "compliance_records", "maintenance_tasks",
    } <= tables


def test_empty_database_loads(scratch_db):
    assert len(load_customers()) == 0
    assert len(load_bookings()) == 0
    assert len(load_extensions()) == 0
    assert load_returned_booking_ids() == set()
    assert load_booking_by_id(1) is None

    summary = summarise()
    assert summary["booking_count"] == 0
    assert summary["outstanding_total"] == Decimal("0")
    assert summary["action_items"] == []


# -----------------------------------------------------------------------------
# 3-4. SEEDED DASHBOARD
# -----------------------------------------------------------------------------

def test_seed_creates_every_row(seeded):
    assert len(seeded["vehicles"]) == 4
    assert len(seeded["customers"]) == 3
    assert len(seeded["bookings"]) == 5
    assert len(seeded["compliance"]) == 10
    assert len(seeded["maintenance"]) == 6
    assert all(seeded["bookings"])


def test_dashboard_numbers_after_seed(seeded):
    summary = summarise()

    assert summary["booking_count"] == 5
    assert summary["total_amount"] == Decimal("2182")
    assert summary["unpaid_amount"] == Decimal("1590")
    assert summary["outstanding_total"] == Decimal("1755")

    assert summary["return_status_counts"] == {"OVERDUE": 1, "DUE TODAY": 1, "ON TIME": 3}
    assert summary["compliance_counts"] == {"EXPIRED": 1, "EXPIRING_SOON": 3, "VALID": 6}
    assert summary["maintenance_counts"] == {"Overdue": 1, "In Shop": 2, "Scheduled": 1, "Done": 2}

    assert summary["booking_status_counts"]["Pending Pickup"] == 1
    assert "1 rentals overdue for return (5 days overdue in total)" in summary["action_items"]
    assert "3 bookings with a balance ($1,755.00 outstanding)" in summary["action_items"]


def test_balance_per_booking_and_customer(seeded):
    overdue_id, due_today_id, returned_id, completed_id, upcoming_id = seeded["bookings"]
    extensions = group_by_booking(load_extensions())
    charges = group_by_booking(load_extra_charges())

    overdue = load_booking_by_id(overdue_id)
    assert overdue["customer_name"] == "Sarah Johnson"
    assert outstanding_for_booking(overdue, extensions.get(overdue_id), charges.get(overdue_id)) == Decimal("795")

    due_today = load_booking_by_id(due_today_id)
    assert outstanding_for_booking(due_today, extensions.get(due_today_id), charges.get(due_today_id)) == Decimal("0")

    sarah, michael, emily = seeded["customers"]
    by_customer = outstanding_by(load_bookings(), extensions, charges)
    assert by_customer[sarah] == Decimal("795")
    assert by_customer[michael] == Decimal("440")
    assert by_customer[emily] == Decimal("520")


# -----------------------------------------------------------------------------
# 5-6. SETTLING UP
# -----------------------------------------------------------------------------

def test_receipting_extension_clears_it(seeded):
    overdue_id = seeded["bookings"][0]
    unreceipted = seeded["extensions"][1]

    assert update_extension(unreceipted, {"receipt_no": "R-1002"})

    owed = outstanding_for_booking(
        load_booking_by_id(overdue_id),
        load_extensions(overdue_id),
        load_extra_charges(overdue_id),
    )
    assert owed == Decimal("675")
    assert summarise()["outstanding_total"] == Decimal("1635")


def test_logging_return_clears_overdue(seeded):
    overdue_id = seeded["bookings"][0]
    before = classify_booking(load_booking_by_id(overdue_id), TODAY, overdue_id in load_returned_booking_ids())
    assert before["days_overdue"] == 5

    assert create_vehicle_return({"booking_id": overdue_id, "returned_at": TODAY.isoformat()})
    assert overdue_id in load_returned_booking_ids()

    summary = summarise()
    assert summary["overdue_count"] == 0
    assert summary["return_status_counts"]["ON TIME"] == 4


def test_marking_principal_paid(seeded):
    upcoming_id = seeded["bookings"][4]
    assert update_booking(upcoming_id, {"payment_status": "Paid"})
    summary = summarise()
    assert summary["outstanding_total"] == Decimal("1315")
    assert summary["unpaid_amount"] == Decimal("1150")


def test_finishing_repair_moves_task_to_done(seeded):
    overdue_task = seeded["maintenance"][3]
    assert update_maintenance_status(overdue_task, "done")

    counts = summarise()["maintenance_counts"]
    assert counts["Overdue"] == 0
    assert counts["Done"] == 3


def test_booking_ending_before_start_is_rejected(seeded):
    booking_id = create_booking({
        "customer_id": seeded["customers"][0],
        "vehicle_id": seeded["vehicles"][0],
        "start_date": "2024-06-20",
        "end_date": "2024-06-18",
        "total_amount": 100.0,
    })
    assert booking_id is None
    assert len(load_bookings()) == 5


def test_collecting_extra_charge(seeded):
    fuel_charge = seeded["charges"][0]
    assert update_extra_charge(fuel_charge, {"amount_paid": 45.0})
    assert summarise()["outstanding_total"] == Decimal("1710")


def test_return_details_are_stored(seeded):
    returns = load_vehicle_returns()
    assert len(returns) == 1
    row = returns.iloc[0]
    assert int(row["booking_id"]) == seeded["bookings"][2]
    assert row["fuel_level"] == "Full"


def test_customer_and_vehicle_status_updates(seeded):
    emily = seeded["customers"][2]
    assert update_customer(emily, {"status": "Inactive"})
    customers = load_customers()
    assert customers[customers["customer_id"] == emily].iloc[0]["status"] == "Inactive"

    mustang = seeded["vehicles"][3]
    assert update_vehicle(mustang, {"status": "available"})
    assert len(load_vehicles(status="maintenance")) == 0
    assert mustang in set(load_vehicles(status="available")["vehicle_id"])


# -----------------------------------------------------------------------------
# FAILED WRITES
# -----------------------------------------------------------------------------

class ClosingConnection(sqlite3.Connection):
    """sqlite3 connection that remembers whether it was closed."""

    def close(self):
        self.was_closed = True
        super().close()


@pytest.fixture
def opened_connections(scratch_db, monkeypatch):
    opened = []

    def connect():
        conn = sqlite3.connect(config.DB_PATH, factory=ClosingConnection)
        conn.was_closed = False
        opened.append(conn)
        return conn

    monkeypatch.setattr(queries, "get_db_connection", connect)
    return opened


def test_failed_insert_closes_connection(seeded, opened_connections):
    booking_id = create_booking({
        "customer_id": seeded["customers"][0],
        "vehicle_id": seeded["vehicles"][0],
        "start_date": "2024-06-20",
        "end_date": "2024-06-18",
    })
    assert booking_id is None
    assert len(opened_connections) == 1
    assert opened_connections[0].was_closed


def test_failed_update_closes_connection(seeded, opened_connections):
    assert update_booking(seeded["bookings"][0], {"no_such_column": 1}) is False
    assert len(opened_connections) == 1
    assert opened_connections[0].was_closed


def test_failed_load_closes_connection(scratch_db, opened_connections):
    df = queries._load("SELECT * FROM no_such_table", label="missing table")
    assert len(df) == 0
    assert len(opened_connections) == 1
    assert opened_connections[0].was_closed


def test_successful_writes_close_connection(seeded, opened_connections):
    assert update_extension(seeded["extensions"][1], {"receipt_no": "R-1002"})
    assert create_vehicle_return({"booking_id": seeded["bookings"][0], "returned_at": TODAY.isoformat()})
    assert len(load_bookings()) == 5
    assert len(opened_connections) == 3
    assert all(conn.was_closed for conn in opened_connections)


def test_init_db_on_unreachable_path_fails_cleanly(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DB_PATH", str(tmp_path / "missing_dir" / "fleet.db"))
    assert init_db() is False
    assert get_table_info() == {}
