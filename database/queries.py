# =============================================================================
# database/queries.py
# =============================================================================
# PURPOSE:
#   Every read and write against the record store. Screens and scripts call
#   these; nothing outside database/ writes SQL.
#
# ORGANIZATION:
#   Grouped by table: customers, vehicles, bookings, extensions,
#   extra charges, vehicle returns, compliance records, maintenance tasks.
#
# NAMING CONVENTION:
#   - load_X()   → SELECT, returns a DataFrame (empty on error)
#   - create_X() → INSERT, returns the new id (None on error)
#   - update_X() → UPDATE, returns True/False
#
# WHAT IS NOT HERE:
#   Balances and status tags. Loads return stored columns only; utils/
#   computes the rest against the caller's "today".
# =============================================================================

from datetime import datetime

import pandas as pd

from .connection import get_db_connection


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _load(query, params=None, label="records"):
    """
    Run a SELECT and return the rows as a DataFrame.
    On any error, print it and return an empty DataFrame.
    """
    conn = None
    try:
        conn = get_db_connection()
        return pd.read_sql_query(query, conn, params=params if params else None)

    except Exception as e:
        print(f"[ERROR] Error loading {label}: {e}")
        return pd.DataFrame()

    finally:
        if conn is not None:
            conn.close()


def _insert_row(table, data, label):
    """
    INSERT one row built from a dict whose keys match column names.

    RETURNS:
        int: The new row id, or None if failed
    """
    conn = None
    try:
        conn = get_db_connection()
        cursor = conn.cursor()

        row = dict(data)
        row.setdefault("created_at", datetime.now().isoformat())

        columns = ", ".join(row.keys())
        placeholders = ", ".join(["?"] * len(row))
        cursor.execute(
            f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
            list(row.values()),
        )

        new_id = cursor.lastrowid
        conn.commit()

        print(f"[OK] Created {label} #{new_id}")
        return new_id

    except Exception as e:
        print(f"[ERROR] Error creating {label}: {e}")
        return None

    finally:
        if conn is not None:
            conn.close()


def _update_row(table, id_column, row_id, updates, label):
    """UPDATE one row by primary key. Returns True if successful."""
    conn = None
    try:
        conn = get_db_connection()
        cursor = conn.cursor()

        set_clause = ", ".join([f"{k} = ?" for k in updates.keys()])
        values = list(updates.values()) + [row_id]
        cursor.execute(f"UPDATE {table} SET {set_clause} WHERE {id_column} = ?", values)

        conn.commit()
        return True

    except Exception as e:
        print(f"[ERROR] Error updating {label} {row_id}: {e}")
        return False

    finally:
        if conn is not None:
            conn.close()


def _safe_int(value, default=None):
    """
    Safely convert a value to integer.
    Handles numpy types from pandas DataFrames.
    """
    if value is None:
        return default
    if hasattr(value, "item"):
        value = value.item()
    try:
        return int(value)
    except (ValueError, TypeError):
        return default


# =============================================================================
# CUSTOMERS
# =============================================================================

def load_customers(search=None):
    """
    Load customers, optionally filtered by name / email / phone.

    RETURNS:
        pd.DataFrame: Matching customers, ordered by name
    """
    query = "SELECT * FROM customers WHERE 1=1"
    params = []
    if search:
        query += " AND (name LIKE ? OR email LIKE ? OR phone LIKE ?)"
        params.extend([f"%{search}%"] * 3)
    query += " ORDER BY name"
    return _load(query, params, "customers")


def create_customer(customer_data):
    """
    Create a new customer.

    EXAMPLE:
        customer_id = create_customer({
            "name": "Sarah Johnson",
            "email": "sarah.johnson@email.com",
            "license_number": "D1234567",
        })
    """
    row = dict(customer_data)
    row["updated_at"] = datetime.now().isoformat()
    return _insert_row("customers", row, "customer")


def update_customer(customer_id, updates):
    row = dict(updates)
    row["updated_at"] = datetime.now().isoformat()
    return _update_row("customers", "customer_id", customer_id, row, "customer")


# =============================================================================
# VEHICLES
# =============================================================================

def load_vehicles(status=None):
    """Load vehicles, optionally only those with a given status."""
    if status:
        return _load("SELECT * FROM vehicles WHERE status = ? ORDER BY name", [status], "vehicles")
    return _load("SELECT * FROM vehicles ORDER BY name", None, "vehicles")


def create_vehicle(vehicle_data):
    row = dict(vehicle_data)
    row["updated_at"] = datetime.now().isoformat()
    return _insert_row("vehicles", row, "vehicle")


def update_vehicle(vehicle_id, updates):
    row = dict(updates)
    row["updated_at"] = datetime.now().isoformat()
    return _update_row("vehicles", "vehicle_id", vehicle_id, row, "vehicle")


# =============================================================================
# BOOKINGS
# =============================================================================

_BOOKING_SELECT = """
    SELECT b.*,
           c.name AS customer_name,
           c.email AS customer_email,
           v.name AS vehicle_name,
           v.plate AS vehicle_plate
    FROM bookings b
    LEFT JOIN customers c ON c.customer_id = b.customer_id
    LEFT JOIN vehicles v ON v.vehicle_id = b.vehicle_id
    WHERE 1=1
"""


def load_bookings(customer_id=None, vehicle_id=None, status=None):
    """
    Load bookings with customer and vehicle names joined in.

    PARAMETERS:
        customer_id (int): Only this customer's bookings
        vehicle_id (int): Only this vehicle's bookings
        status (str): Only bookings with this status

    RETURNS:
        pd.DataFrame: Bookings, latest end_date first
    """
    query = _BOOKING_SELECT
    params = []
    if customer_id is not None:
        query += " AND b.customer_id = ?"
        params.append(_safe_int(customer_id))
    if vehicle_id is not None:
        query += " AND b.vehicle_id = ?"
        params.append(_safe_int(vehicle_id))
    if status:
        query += " AND b.status = ?"
        params.append(status)
    query += " ORDER BY b.end_date DESC"
    return _load(query, params, "bookings")


def load_booking_by_id(booking_id):
    """
    Load one booking.

    RETURNS:
        dict: Booking data, or None if not found
    """
    df = _load(_BOOKING_SELECT + " AND b.booking_id = ?", [_safe_int(booking_id)], f"booking {booking_id}")
    if len(df) == 0:
        return None
    return df.to_dict("records")[0]


def create_booking(booking_data):
    """
    Create a new booking.

    EXAMPLE:
        booking_id = create_booking({
            "customer_id": 1,
            "vehicle_id": 2,
            "start_date": "2024-06-01",
            "end_date": "2024-06-10",
            "total_amount": 450.0,
        })
    """
    row = dict(booking_data)
    row["updated_at"] = datetime.now().isoformat()
    return _insert_row("bookings", row, "booking")


def update_booking(booking_id, updates):
    """Update status, payment_status, end_date, ... on one booking."""
    row = dict(updates)
    row["updated_at"] = datetime.now().isoformat()
    return _update_row("bookings", "booking_id", _safe_int(booking_id), row, "booking")


# =============================================================================
# BOOKING EXTENSIONS
# =============================================================================

def load_extensions(booking_id=None):
    """Load extensions, for one booking or all of them."""
    if booking_id is not None:
        return _load(
            "SELECT * FROM booking_extensions WHERE booking_id = ? ORDER BY created_at",
            [_safe_int(booking_id)],
            "extensions",
        )
    return _load("SELECT * FROM booking_extensions ORDER BY created_at", None, "extensions")


def create_extension(extension_data):
    """
    Record an extension.

    NOTE:
        Leave receipt_no empty until the extension has been receipted;
        until then amount_paid counts as outstanding.
    """
    return _insert_row("booking_extensions", extension_data, "extension")


def update_extension(extension_id, updates):
    """e.g. update_extension(4, {"receipt_no": "R-1042"}) once it is receipted."""
    return _update_row("booking_extensions", "extension_id", extension_id, updates, "extension")


# =============================================================================
# EXTRA CHARGES
# =============================================================================

def load_extra_charges(booking_id=None):
    """Load extra charges, for one booking or all of them."""
    if booking_id is not None:
        return _load(
            "SELECT * FROM extra_charges WHERE booking_id = ? ORDER BY created_at",
            [_safe_int(booking_id)],
            "extra charges",
        )
    return _load("SELECT * FROM extra_charges ORDER BY created_at", None, "extra charges")


def create_extra_charge(charge_data):
    return _insert_row("extra_charges", charge_data, "extra charge")


def update_extra_charge(charge_id, updates):
    return _update_row("extra_charges", "charge_id", charge_id, updates, "extra charge")


# =============================================================================
# VEHICLE RETURNS
# =============================================================================

def load_vehicle_returns():
    return _load("SELECT * FROM vehicle_returns ORDER BY returned_at DESC", None, "vehicle returns")


def load_returned_booking_ids():
    """
    Booking ids that have at least one return logged.

    RETURNS:
        set: booking_id ints (empty set on error)
    """
    df = _load("SELECT DISTINCT booking_id FROM vehicle_returns", None, "returned bookings")
    if len(df) == 0:
        return set()
    return {_safe_int(v) for v in df["booking_id"].dropna()}


def create_vehicle_return(return_data):
    """Log that a booking's vehicle has physically come back."""
    return _insert_row("vehicle_returns", return_data, "vehicle return")


# =============================================================================
# COMPLIANCE RECORDS
# =============================================================================

def load_compliance_records(record_type=None):
    """
    Load insurance / registration / safety-sticker records with vehicle
    name and plate, soonest expiry first.
    """
    query = """
        SELECT r.*, v.name AS vehicle_name, v.plate AS vehicle_plate
        FROM compliance_records r
        LEFT JOIN vehicles v ON v.vehicle_id = r.vehicle_id
        WHERE 1=1
    """
    params = []
    if record_type:
        query += " AND r.record_type = ?"
        params.append(record_type)
    query += " ORDER BY r.expiry_date ASC"
    return _load(query, params, "compliance records")


def create_compliance_record(record_data):
    return _insert_row("compliance_records", record_data, "compliance record")


# =============================================================================
# MAINTENANCE TASKS
# =============================================================================

def load_maintenance_tasks(vehicle_id=None):
    """Load maintenance tasks with vehicle name and VIN, by scheduled date."""
    query = """
        SELECT t.*, v.name AS vehicle_name, v.vin AS vehicle_vin
        FROM maintenance_tasks t
        LEFT JOIN vehicles v ON v.vehicle_id = t.vehicle_id
        WHERE 1=1
    """
    params = []
    if vehicle_id is not None:
        query += " AND t.vehicle_id = ?"
        params.append(_safe_int(vehicle_id))
    query += " ORDER BY t.scheduled_date ASC"
    return _load(query, params, "maintenance tasks")


def create_maintenance_task(task_data):
    row = dict(task_data)
    row["updated_at"] = datetime.now().isoformat()
    return _insert_row("maintenance_tasks", row, "maintenance task")


def update_maintenance_status(task_id, status):
    """Store a new raw status string on a task."""
    return _update_row(
        "maintenance_tasks",
        "task_id",
        task_id,
        {"status": status, "updated_at": datetime.now().isoformat()},
        "maintenance task",
    )
