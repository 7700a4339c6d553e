# =============================================================================
# utils/__init__.py
# =============================================================================
# PURPOSE:
#   The calculation core of the dashboard, importable in one line:
#       from utils import outstanding_for_booking, classify_booking
#
# WHAT LIVES HERE:
#   - calculations.py     → outstanding balances (ledger reconciliation)
#   - classifications.py  → date / status tags
#   - rollups.py          → counts and totals for the overview screens
#
#   None of these touch the database or the clock. Screens load the records,
#   pass them in together with today's date, and render what comes back.
# =============================================================================

from .calculations import (
    to_amount,
    principal_outstanding,
    extension_outstanding,
    extra_charge_outstanding,
    outstanding_for_booking,
    group_by_booking,
    rollup,
    outstanding_by,
    format_amount,
)
from .classifications import (
    status_key,
    match_status,
    status_choices,
    to_date,
    classify_booking,
    classify_compliance,
    describe_expiry,
    normalize_maintenance_status,
)
from .rollups import (
    count_by,
    booking_status_counts,
    return_status_counts,
    compliance_tier_counts,
    maintenance_tag_counts,
    payment_totals,
    build_booking_ledger,
    build_compliance_table,
    build_maintenance_table,
    dashboard_summary,
)
