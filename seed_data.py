# =============================================================================
# seed_data.py - Fill a fresh database with demo fleet data
# =============================================================================
# Creates a small fleet so every screen has something to show:
#   - 4 vehicles, 3 customers
#   - 5 bookings covering overdue, due today, returned, completed and
#     upcoming rentals, with extensions and extra charges
#   - compliance records in every tier (expired / expiring soon / valid)
#   - maintenance tasks written with the old status spellings
#
# Dates are relative to the "today" passed in, so the demo always has
# something overdue and something expiring.
#
# Run: python seed_data.py
# =============================================================================

import sys
from datetime import date, timedelta

from database import (
    init_db,
    load_customers,
    create_customer,
    create_vehicle,
    create_booking,
    create_extension,
    create_extra_charge,
    create_vehicle_return,
    create_compliance_record,
    create_maintenance_task,
)

VEHICLES = [
    {"name": "2024 Tesla Model 3", "year": "2024", "trim": "Long Range", "plate": "DEMO-001",
     "vin": "5YJ3E1EA1PF000001", "status": "rented", "location": "Los Angeles, CA",
     "mileage": 12500, "daily_rate": 89.0},
    {"name": "2023 BMW X5", "year": "2023", "trim": "xDrive40i", "plate": "DEMO-002",
     "vin": "5UXCR6C55P9000002", "status": "rented", "location": "San Diego, CA",
     "mileage": 28400, "daily_rate": 129.0},
    {"name": "2024 Toyota Camry", "year": "2024", "trim": "XSE", "plate": "DEMO-003",
     "vin": "4T1BZ1HK5PU000003", "status": "available", "location": "Los Angeles, CA",
     "mileage": 8200, "daily_rate": 65.0},
    {"name": "2023 Ford Mustang", "year": "2023", "trim": "GT Premium", "plate": "DEMO-004",
     "vin": "1FA6P8CF5P5000004", "status": "maintenance", "location": "Service Center",
     "mileage": 15800, "daily_rate": 110.0},
]

CUSTOMERS = [
    {"name": "Sarah Johnson", "email": "sarah.johnson@email.com", "phone": "+1 (555) 234-5678",
     "address": "456 Oak Avenue, Los Angeles, CA 90012", "license_number": "D1234567",
     "license_state": "CA", "license_expiry": "2027-08-15", "status": "Active"},
    {"name": "Michael Chen", "email": "michael.chen@email.com", "phone": "+1 (555) 876-5432",
     "address": "789 Pine Street, San Diego, CA 92101", "license_number": "D7654321",
     "license_state": "CA", "license_expiry": "2026-11-20", "status": "Active"},
    {"name": "Emily Davis", "email": "emily.davis@email.com", "phone": "+1 (555) 345-9012",
     "address": "12 Harbor Blvd, Long Beach, CA 90802", "license_number": "D5550123",
     "license_state": "CA", "license_expiry": "2028-02-01", "status": "Active"},
]


def _iso(day):
    return day.isoformat()


def seed_demo_data(today):
    """
    Insert the demo fleet. Assumes the tables exist (call init_db() first).

    PARAMETERS:
        today (date): Day the demo dates are laid out around

    RETURNS:
        dict: Lists of created ids per table
    """
    created = {
        "vehicles": [], "customers": [], "bookings": [], "extensions": [],
        "charges": [], "returns": [], "compliance": [], "maintenance": [],
    }

    for vehicle in VEHICLES:
        created["vehicles"].append(create_vehicle(vehicle))
    for customer in CUSTOMERS:
        created["customers"].append(create_customer(customer))

    tesla, bmw, camry, mustang = created["vehicles"]
    sarah, michael, emily = created["customers"]

    # -------------------------------------------------------------------------
    # Bookings
    # -------------------------------------------------------------------------
    bookings = [
        # Overdue: ended 5 days ago, not returned, partly paid
        {"customer_id": sarah, "vehicle_id": bmw, "start_date": _iso(today - timedelta(days=12)),
         "end_date": _iso(today - timedelta(days=5)), "duration_days": 7,
         "status": "Extended", "payment_status": "Partial", "total_amount": 630.0},
        # Due back today, fully paid
        {"customer_id": michael, "vehicle_id": tesla, "start_date": _iso(today - timedelta(days=3)),
         "end_date": _iso(today), "duration_days": 3,
         "status": "Confirmed", "payment_status": "Paid", "total_amount": 267.0},
        # Ended two days ago but the car is back
        {"customer_id": emily, "vehicle_id": camry, "start_date": _iso(today - timedelta(days=10)),
         "end_date": _iso(today - timedelta(days=2)), "duration_days": 8,
         "status": "Active", "payment_status": "Unpaid", "total_amount": 520.0},
        # Finished last month
        {"customer_id": sarah, "vehicle_id": camry, "start_date": _iso(today - timedelta(days=30)),
         "end_date": _iso(today - timedelta(days=25)), "duration_days": 5,
         "status": "Completed", "payment_status": "Paid", "total_amount": 325.0},
        # Upcoming pickup
        {"customer_id": michael, "vehicle_id": mustang, "start_date": _iso(today + timedelta(days=2)),
         "end_date": _iso(today + timedelta(days=6)), "duration_days": 4,
         "status": "Pending Pickup", "payment_status": "Unpaid", "total_amount": 440.0},
    ]
    for booking in bookings:
        created["bookings"].append(create_booking(booking))

    overdue_booking, due_today_booking, returned_booking, _, _ = created["bookings"]

    # -------------------------------------------------------------------------
    # Extensions: one receipted, one not
    # -------------------------------------------------------------------------
    created["extensions"].append(create_extension({
        "booking_id": overdue_booking,
        "previous_end_date": _iso(today - timedelta(days=8)),
        "new_end_date": _iso(today - timedelta(days=7)),
        "amount_paid": 90.0,
        "receipt_no": "R-1001",
    }))
    created["extensions"].append(create_extension({
        "booking_id": overdue_booking,
        "previous_end_date": _iso(today - timedelta(days=7)),
        "new_end_date": _iso(today - timedelta(days=5)),
        "amount_paid": 120.0,
        "receipt_no": None,
    }))

    # -------------------------------------------------------------------------
    # Extra charges: one unpaid, one overpaid
    # -------------------------------------------------------------------------
    created["charges"].append(create_extra_charge({
        "booking_id": overdue_booking, "charge_type": "Fuel",
        "description": "Returned tank refill", "amount": 45.0, "amount_paid": 0.0,
    }))
    created["charges"].append(create_extra_charge({
        "booking_id": due_today_booking, "charge_type": "Damage",
        "description": "Scratched bumper", "amount": 200.0, "amount_paid": 250.0,
    }))

    created["returns"].append(create_vehicle_return({
        "booking_id": returned_booking,
        "returned_at": _iso(today - timedelta(days=1)),
        "odometer": 8650,
        "fuel_level": "Full",
    }))

    # -------------------------------------------------------------------------
    # Compliance records
    # -------------------------------------------------------------------------
    insurance_offsets = [-15, 20, 200, 240]
    registration_offsets = [100, 130, 160, 0]
    providers = ["State Farm", "Geico", "Progressive", "Allstate"]

    for index, vehicle_id in enumerate(created["vehicles"]):
        insurance_expiry = today + timedelta(days=insurance_offsets[index])
        created["compliance"].append(create_compliance_record({
            "vehicle_id": vehicle_id, "record_type": "insurance",
            "date_renewed": _iso(insurance_expiry - timedelta(days=365)),
            "expiry_date": _iso(insurance_expiry),
            "provider": providers[index], "policy_number": f"POL-{100000 + index}",
            "cost": 800.0 + index * 150,
        }))

        registration_expiry = today + timedelta(days=registration_offsets[index])
        created["compliance"].append(create_compliance_record({
            "vehicle_id": vehicle_id, "record_type": "registration",
            "date_renewed": _iso(registration_expiry - timedelta(days=365)),
            "expiry_date": _iso(registration_expiry),
            "provider": "DMV", "policy_number": f"REG-{VEHICLES[index]['plate']}",
            "cost": 150.0 + index * 25,
        }))

    # Safety stickers either side of the 30-day window
    for index, offset in ((0, 31), (1, 30)):
        sticker_expiry = today + timedelta(days=offset)
        created["compliance"].append(create_compliance_record({
            "vehicle_id": created["vehicles"][index], "record_type": "safety_sticker",
            "date_renewed": _iso(sticker_expiry - timedelta(days=365)),
            "expiry_date": _iso(sticker_expiry),
            "provider": "State Inspection", "policy_number": f"INS-{200000 + index}",
            "cost": 35.0,
        }))

    # -------------------------------------------------------------------------
    # Maintenance tasks (old and new status spellings)
    # -------------------------------------------------------------------------
    tasks = [
        (mustang, "Brake Pad Replacement", "in_shop", 450.0, "Tony Martinez", 0),
        (bmw, "Oil Change & Filter", "scheduled", 185.0, "Mike Wilson", 7),
        (tesla, "Tire Rotation", "done", 75.0, "Tony Martinez", -20),
        (mustang, "Annual Inspection", "overdue", 120.0, "Service Dept", -3),
        (camry, "Wiper Blades", "Completed", 40.0, "Mike Wilson", -40),
        (camry, "AC Recharge", "in progress", 210.0, "Tony Martinez", -1),
    ]
    for vehicle_id, service_type, status, cost, assignee, offset in tasks:
        created["maintenance"].append(create_maintenance_task({
            "vehicle_id": vehicle_id, "service_type": service_type,
            "scheduled_date": _iso(today + timedelta(days=offset)),
            "status": status, "cost_estimate": cost, "assignee_name": assignee,
        }))

    return created


def main():
    print("=" * 60)
    print("FLEET COMMAND - DEMO DATA")
    print("=" * 60)

    if not init_db():
        print("[ERROR] Could not initialise the database")
        return 1

    if len(load_customers()) > 0:
        print("[WARN] Database already has customers; not seeding twice.")
        return 0

    created = seed_demo_data(date.today())
    for table, ids in created.items():
        print(f"    {table}: {len(ids)}")

    print("\nRefresh the dashboard in your browser to see the data.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
