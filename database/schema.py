# =============================================================================
# database/schema.py
# =============================================================================
# PURPOSE:
#   Table definitions for the fleet record store.
#
# DATA MODEL:
#   Bookings are the hub for money; vehicles are the hub for compliance
#   and maintenance.
#
#   [CUSTOMERS] ──┐
#                 ├── [BOOKINGS] ←── one rental of one vehicle
#   [VEHICLES] ───┤      ├── [BOOKING_EXTENSIONS] ←── longer rental, extra charge
#                 │      ├── [EXTRA_CHARGES] ←── damage, fuel, late fees...
#                 │      └── [VEHICLE_RETURNS] ←── the car came back
#                 ├── [COMPLIANCE_RECORDS] ←── insurance / registration / sticker
#                 └── [MAINTENANCE_TASKS] ←── workshop work orders
#
# WHAT IS NOT STORED:
#   Outstanding balances, overdue flags, expiry tiers and normalised
#   maintenance tags. Those are computed by utils/ on every read.
#
# DATES AND MONEY:
#   Dates are ISO text (YYYY-MM-DD). Amounts are REAL.
# =============================================================================

from .connection import get_db_connection


def init_db():
    """
    Create every table and index that doesn't exist yet.

    Safe to call on every page load: CREATE ... IF NOT EXISTS leaves
    existing tables and their data alone.

    RETURNS:
        bool: True if successful, False if error
    """
    conn = None
    try:
        conn = get_db_connection()
        cursor = conn.cursor()

        # =====================================================================
        # TABLE 1: CUSTOMERS
        # =====================================================================
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS customers (
                customer_id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                email TEXT,
                phone TEXT,
                address TEXT,

                -- Driving licence
                license_number TEXT,
                license_state TEXT,
                license_expiry TEXT,

                status TEXT DEFAULT 'Active',
                internal_notes TEXT,

                created_at TEXT,
                updated_at TEXT
            )
        """)

        # =====================================================================
        # TABLE 2: VEHICLES
        # =====================================================================
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS vehicles (
                vehicle_id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,        -- e.g. "2024 Tesla Model 3"
                year TEXT,
                trim TEXT,
                plate TEXT UNIQUE,
                vin TEXT,
                status TEXT DEFAULT 'available',
                location TEXT,
                mileage INTEGER DEFAULT 0,
                daily_rate REAL DEFAULT 0,

                created_at TEXT,
                updated_at TEXT
            )
        """)

        # =====================================================================
        # TABLE 3: BOOKINGS
        # =====================================================================
        # payment_status covers the principal (total_amount) only.
        # Extensions and extra charges carry their own payment state.
        # =====================================================================
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS bookings (
                booking_id INTEGER PRIMARY KEY AUTOINCREMENT,
                customer_id INTEGER NOT NULL,
                vehicle_id INTEGER NOT NULL,

                start_date TEXT NOT NULL,
                end_date TEXT NOT NULL,
                duration_days INTEGER,

                status TEXT DEFAULT 'Confirmed',
                payment_status TEXT DEFAULT 'Unpaid',
                total_amount REAL DEFAULT 0,

                notes TEXT,
                created_at TEXT,
                updated_at TEXT,

                FOREIGN KEY(customer_id) REFERENCES customers(customer_id),
                FOREIGN KEY(vehicle_id) REFERENCES vehicles(vehicle_id),
                CHECK (end_date >= start_date)
            )
        """)

        # =====================================================================
        # TABLE 4: BOOKING_EXTENSIONS
        # =====================================================================
        # amount_paid is the extension charge. It only counts as settled once
        # receipt_no is filled in.
        # =====================================================================
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS booking_extensions (
                extension_id INTEGER PRIMARY KEY AUTOINCREMENT,
                booking_id INTEGER NOT NULL,
                previous_end_date TEXT,
                new_end_date TEXT,
                amount_paid REAL DEFAULT 0,
                receipt_no TEXT,
                notes TEXT,
                created_at TEXT,
                FOREIGN KEY(booking_id) REFERENCES bookings(booking_id)
            )
        """)

        # =====================================================================
        # TABLE 5: EXTRA_CHARGES
        # =====================================================================
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS extra_charges (
                charge_id INTEGER PRIMARY KEY AUTOINCREMENT,
                booking_id INTEGER NOT NULL,
                charge_type TEXT,
                description TEXT,
                amount REAL DEFAULT 0,       -- what is owed
                amount_paid REAL DEFAULT 0,  -- what has been collected
                created_at TEXT,
                FOREIGN KEY(booking_id) REFERENCES bookings(booking_id)
            )
        """)

        # =====================================================================
        # TABLE 6: VEHICLE_RETURNS
        # =====================================================================
        # The retrieval log. A row here means the car is physically back,
        # whatever the booking status says.
        # =====================================================================
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS vehicle_returns (
                return_id INTEGER PRIMARY KEY AUTOINCREMENT,
                booking_id INTEGER NOT NULL,
                returned_at TEXT NOT NULL,
                odometer INTEGER,
                fuel_level TEXT,
                notes TEXT,
                created_at TEXT,
                FOREIGN KEY(booking_id) REFERENCES bookings(booking_id)
            )
        """)

        # =====================================================================
        # TABLE 7: COMPLIANCE_RECORDS
        # =====================================================================
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS compliance_records (
                record_id INTEGER PRIMARY KEY AUTOINCREMENT,
                vehicle_id INTEGER NOT NULL,
                record_type TEXT NOT NULL,  -- insurance / registration / safety_sticker
                date_renewed TEXT,
                expiry_date TEXT NOT NULL,
                provider TEXT,
                policy_number TEXT,
                cost REAL,
                notes TEXT,
                created_at TEXT,
                FOREIGN KEY(vehicle_id) REFERENCES vehicles(vehicle_id)
            )
        """)

        # =====================================================================
        # TABLE 8: MAINTENANCE_TASKS
        # =====================================================================
        # status is kept exactly as written; older rows use several spellings.
        # =====================================================================
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS maintenance_tasks (
                task_id INTEGER PRIMARY KEY AUTOINCREMENT,
                vehicle_id INTEGER NOT NULL,
                service_type TEXT NOT NULL,
                scheduled_date TEXT,
                status TEXT DEFAULT 'scheduled',
                cost_estimate REAL,
                assignee_name TEXT,
                arrival_mileage INTEGER,
                notes TEXT,
                created_at TEXT,
                updated_at TEXT,
                FOREIGN KEY(vehicle_id) REFERENCES vehicles(vehicle_id)
            )
        """)

        # =====================================================================
        # INDEXES
        # =====================================================================
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_bookings_customer ON bookings(customer_id)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_bookings_vehicle ON bookings(vehicle_id)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_bookings_status ON bookings(status)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_extensions_booking ON booking_extensions(booking_id)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_charges_booking ON extra_charges(booking_id)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_returns_booking ON vehicle_returns(booking_id)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_compliance_vehicle ON compliance_records(vehicle_id)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_compliance_expiry ON compliance_records(expiry_date)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_maintenance_vehicle ON maintenance_tasks(vehicle_id)")

        conn.commit()
        return True

    except Exception as e:
        print(f"[ERROR] Database initialization error: {e}")
        return False

    finally:
        if conn is not None:
            conn.close()


def get_table_info():
    """
    Column details for every table, for the schema viewer and debugging.

    RETURNS:
        dict: table name → list of (cid, name, type, notnull, default, pk)
    """
    conn = None
    try:
        conn = get_db_connection()
        cursor = conn.cursor()
        cursor.execute("""
            SELECT name FROM sqlite_master
            WHERE type='table' AND name NOT LIKE 'sqlite_%'
            ORDER BY name
        """)
        tables = [row[0] for row in cursor.fetchall()]

        table_info = {}
        for table in tables:
            cursor.execute(f"PRAGMA table_info({table})")
            table_info[table] = cursor.fetchall()

        return table_info

    except Exception as e:
        print(f"[ERROR] Error getting table info: {e}")
        return {}

    finally:
        if conn is not None:
            conn.close()
