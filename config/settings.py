# =============================================================================
# config/settings.py
# =============================================================================
# PURPOSE:
#   Central configuration for the Fleet Command admin dashboard.
#   Status vocabularies, classifier tags, thresholds and UI constants
#   all live here so the screens and the calculation code agree on them.
#
# HOW TO OVERRIDE:
#   - DB_PATH can be pointed elsewhere with the FLEET_DB_PATH env variable.
#   - Tests assign config.DB_PATH directly; the connection reads it per call.
# =============================================================================

import os

# -----------------------------------------------------------------------------
# DATABASE CONFIGURATION
# -----------------------------------------------------------------------------
# SQLite file standing in for the hosted record store
DB_PATH = os.environ.get("FLEET_DB_PATH", "fleet.db")

# -----------------------------------------------------------------------------
# MONEY
# -----------------------------------------------------------------------------
# Single currency, no conversion. Only used when formatting for display.
CURRENCY_SYMBOL = "$"

# -----------------------------------------------------------------------------
# BOOKING STATUS OPTIONS
# -----------------------------------------------------------------------------
# Lifecycle of a rental. Transitions happen outside the calculation code
# (pickup, return, extension).
BOOKING_CONFIRMED = "Confirmed"
BOOKING_PENDING_PICKUP = "Pending Pickup"
BOOKING_ACTIVE = "Active"
BOOKING_EXTENDED = "Extended"
BOOKING_COMPLETED = "Completed"
BOOKING_OVERDUE = "Overdue"

BOOKING_STATUSES = [
    BOOKING_CONFIRMED,
    BOOKING_PENDING_PICKUP,
    BOOKING_ACTIVE,
    BOOKING_EXTENDED,
    BOOKING_COMPLETED,
    BOOKING_OVERDUE,
]

# Only these can be flagged as an overdue return
ELIGIBLE_OVERDUE_STATUSES = [
    BOOKING_ACTIVE,
    BOOKING_EXTENDED,
    BOOKING_CONFIRMED,
]

# -----------------------------------------------------------------------------
# PAYMENT STATUS OPTIONS
# -----------------------------------------------------------------------------
PAYMENT_UNPAID = "Unpaid"
PAYMENT_PARTIAL = "Partial"
PAYMENT_PAID = "Paid"

PAYMENT_STATUSES = [
    PAYMENT_UNPAID,
    PAYMENT_PARTIAL,
    PAYMENT_PAID,
]

# -----------------------------------------------------------------------------
# RETURN STATUS TAGS (derived, never stored)
# -----------------------------------------------------------------------------
RETURN_OVERDUE = "OVERDUE"
RETURN_DUE_TODAY = "DUE TODAY"
RETURN_ON_TIME = "ON TIME"

RETURN_STATUSES = [
    RETURN_OVERDUE,
    RETURN_DUE_TODAY,
    RETURN_ON_TIME,
]

# -----------------------------------------------------------------------------
# EXTRA CHARGE TYPES
# -----------------------------------------------------------------------------
# Ad-hoc charges unrelated to rental length
EXTRA_CHARGE_TYPES = [
    "Damage",
    "Fuel",
    "Late Fee",
    "Cleaning",
    "Tolls",
    "Other",
]

# -----------------------------------------------------------------------------
# COMPLIANCE (INSURANCE / REGISTRATION / SAFETY STICKER)
# -----------------------------------------------------------------------------
COMPLIANCE_RECORD_TYPES = {
    "insurance": "Insurance",
    "registration": "Registration",
    "safety_sticker": "Safety Sticker",
}

COMPLIANCE_VALID = "VALID"
COMPLIANCE_EXPIRING_SOON = "EXPIRING_SOON"
COMPLIANCE_EXPIRED = "EXPIRED"

COMPLIANCE_STATUSES = [
    COMPLIANCE_EXPIRED,
    COMPLIANCE_EXPIRING_SOON,
    COMPLIANCE_VALID,
]

# Inclusive: a record expiring in exactly this many days is still "soon"
EXPIRING_SOON_DAYS = 30

# -----------------------------------------------------------------------------
# MAINTENANCE STATUS
# -----------------------------------------------------------------------------
MAINTENANCE_SCHEDULED = "Scheduled"
MAINTENANCE_IN_SHOP = "In Shop"
MAINTENANCE_OVERDUE = "Overdue"
MAINTENANCE_DONE = "Done"

MAINTENANCE_STATUSES = [
    MAINTENANCE_OVERDUE,
    MAINTENANCE_IN_SHOP,
    MAINTENANCE_SCHEDULED,
    MAINTENANCE_DONE,
]

# Historical spellings found in storage -> tag.
# Keys are lowercase; anything not listed falls back to MAINTENANCE_SCHEDULED.
MAINTENANCE_STATUS_SYNONYMS = {
    "done": MAINTENANCE_DONE,
    "completed": MAINTENANCE_DONE,
    "in_shop": MAINTENANCE_IN_SHOP,
    "in-shop": MAINTENANCE_IN_SHOP,
    "in progress": MAINTENANCE_IN_SHOP,
    "overdue": MAINTENANCE_OVERDUE,
}

# Raw value written by the screens when a task is created
MAINTENANCE_RAW_STATUSES = [
    "scheduled",
    "in_shop",
    "overdue",
    "done",
]

# -----------------------------------------------------------------------------
# CUSTOMERS AND VEHICLES
# -----------------------------------------------------------------------------
CUSTOMER_STATUSES = [
    "Active",
    "Pending",
    "Inactive",
    "Banned",
]

VEHICLE_STATUSES = [
    "available",
    "rented",
    "maintenance",
]

# -----------------------------------------------------------------------------
# UI CONFIGURATION
# -----------------------------------------------------------------------------
PAGE_TITLE = "Fleet Command"
PAGE_ICON = "🚗"
LAYOUT = "wide"
