# =============================================================================
# database/__init__.py
# =============================================================================
# PURPOSE:
#   Re-exports the connection, schema and query functions so callers write:
#       from database import init_db, load_bookings
#   instead of importing from each submodule.
# =============================================================================

from .connection import get_db_connection

from .schema import init_db, get_table_info

from .queries import (
    # Customers
    load_customers,
    create_customer,
    update_customer,

    # Vehicles
    load_vehicles,
    create_vehicle,
    update_vehicle,

    # Bookings
    load_bookings,
    load_booking_by_id,
    create_booking,
    update_booking,

    # Extensions and extra charges
    load_extensions,
    create_extension,
    update_extension,
    load_extra_charges,
    create_extra_charge,
    update_extra_charge,

    # Returns (the "is returned" signal)
    load_vehicle_returns,
    load_returned_booking_ids,
    create_vehicle_return,

    # Compliance
    load_compliance_records,
    create_compliance_record,

    # Maintenance
    load_maintenance_tasks,
    create_maintenance_task,
    update_maintenance_status,
)
