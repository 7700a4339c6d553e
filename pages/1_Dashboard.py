# =============================================================================
# pages/1_Dashboard.py
# =============================================================================
# PURPOSE:
#   Fleet overview at a glance.
#
# WHAT IT SHOWS:
#   - Quick stats (bookings, money owed, overdue returns)
#   - Booking status breakdown
#   - Compliance and maintenance health
#   - Action items (what needs attention today)
#   - Returns due today / overdue
#
#   All figures come from utils.dashboard_summary(); this page only loads
#   records and lays the numbers out.
# =============================================================================

from datetime import date

import streamlit as st

from config import (
    BOOKING_STATUSES,
    COMPLIANCE_EXPIRED,
    COMPLIANCE_EXPIRING_SOON,
    COMPLIANCE_VALID,
    MAINTENANCE_STATUSES,
    RETURN_DUE_TODAY,
    RETURN_OVERDUE,
)
from database import (
    init_db,
    load_bookings,
    load_extensions,
    load_extra_charges,
    load_returned_booking_ids,
    load_compliance_records,
    load_maintenance_tasks,
)
from utils import build_booking_ledger, dashboard_summary, format_amount
from utils.styling import apply_minimal_style, badge

# -----------------------------------------------------------------------------
# PAGE CONFIGURATION
# -----------------------------------------------------------------------------
st.set_page_config(
    page_title="Dashboard - Fleet Command",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded"
)

apply_minimal_style()
init_db()

today = date.today()

st.title("Dashboard")
st.caption(f"Fleet overview for {today:%b %d, %Y}")

# -----------------------------------------------------------------------------
# LOAD DATA
# -----------------------------------------------------------------------------
bookings_df = load_bookings()
extensions_df = load_extensions()
charges_df = load_extra_charges()
returned_ids = load_returned_booking_ids()
compliance_df = load_compliance_records()
maintenance_df = load_maintenance_tasks()

summary = dashboard_summary(
    bookings_df,
    extensions_df,
    charges_df,
    returned_ids,
    compliance_df,
    maintenance_df,
    today,
)

# -----------------------------------------------------------------------------
# QUICK STATS ROW
# -----------------------------------------------------------------------------
st.write("### Quick Stats")

col1, col2, col3, col4, col5 = st.columns(5)

with col1:
    st.metric("📅 Bookings", summary["booking_count"], help="All bookings on record")

with col2:
    st.metric(
        "🔑 Active Rentals",
        summary["booking_status_counts"].get("Active", 0) + summary["booking_status_counts"].get("Extended", 0),
    )

with col3:
    st.metric(
        "⏰ Overdue Returns",
        summary["overdue_count"],
        delta=f"-{summary['overdue_count']}" if summary["overdue_count"] > 0 else None,
        delta_color="inverse",
    )

with col4:
    st.metric("↩️ Due Back Today", summary["due_today_count"])

with col5:
    st.metric(
        "💰 Outstanding",
        format_amount(summary["outstanding_total"]),
        help="Principal not marked Paid + unreceipted extensions + unpaid extra charges",
    )

# -----------------------------------------------------------------------------
# BOOKINGS AND MONEY
# -----------------------------------------------------------------------------
if summary["booking_count"] > 0:
    st.write("---")
    st.write("### Bookings")

    col1, col2 = st.columns(2)

    with col1:
        st.write("**By status**")
        for status in BOOKING_STATUSES:
            st.write(f"- {status}: {summary['booking_status_counts'].get(status, 0)}")

    with col2:
        st.write("**Rental revenue**")
        st.write(f"- Booked: {format_amount(summary['total_amount'])}")
        st.write(f"- Not yet paid: {format_amount(summary['unpaid_amount'])}")
        total = float(summary["total_amount"])
        if total > 0:
            paid_pct = 1 - float(summary["unpaid_amount"]) / total
            st.caption(f"{paid_pct * 100:.0f}% of booked revenue marked paid")
            st.progress(paid_pct)

# -----------------------------------------------------------------------------
# FLEET HEALTH
# -----------------------------------------------------------------------------
st.write("---")
st.write("### Fleet Health")

col1, col2 = st.columns(2)

with col1:
    st.write("**Insurance & registration**")
    compliance = summary["compliance_counts"]
    c1, c2, c3 = st.columns(3)
    c1.metric("Expired", compliance[COMPLIANCE_EXPIRED])
    c2.metric("Expiring Soon", compliance[COMPLIANCE_EXPIRING_SOON])
    c3.metric("Valid", compliance[COMPLIANCE_VALID])

with col2:
    st.write("**Maintenance**")
    maintenance = summary["maintenance_counts"]
    for tag, column in zip(MAINTENANCE_STATUSES, st.columns(len(MAINTENANCE_STATUSES))):
        column.metric(tag, maintenance[tag])

# -----------------------------------------------------------------------------
# ACTION REQUIRED
# -----------------------------------------------------------------------------
st.write("---")
st.write("### Action Required")

if summary["action_items"]:
    for action in summary["action_items"]:
        st.warning(action)
elif summary["booking_count"] > 0:
    st.success("All caught up! No immediate actions needed.")
else:
    st.info("No data yet. Run `python seed_data.py` or add bookings on the Bookings page.")

# -----------------------------------------------------------------------------
# RETURNS TO CHASE
# -----------------------------------------------------------------------------
ledger_df = build_booking_ledger(bookings_df, extensions_df, charges_df, returned_ids, today)

if len(ledger_df) > 0:
    chase = ledger_df[ledger_df["return_status"].isin([RETURN_OVERDUE, RETURN_DUE_TODAY])]
    if len(chase) > 0:
        st.write("---")
        st.write("### Returns to Chase")
        for _, row in chase.sort_values("days_overdue", ascending=False).iterrows():
            line = f"{badge(row['return_status'])} | {row['customer_name']} | {row['vehicle_name']} ({row['vehicle_plate']}) | due {row['end_date']}"
            if row["is_overdue"]:
                line += f" | {row['days_overdue']} days late"
            st.write(line)

# -----------------------------------------------------------------------------
# QUICK NAVIGATION
# -----------------------------------------------------------------------------
st.write("---")
st.write("### Quick Actions")

col1, col2, col3, col4 = st.columns(4)

with col1:
    if st.button("Bookings", width="stretch"):
        st.switch_page("pages/2_Bookings.py")

with col2:
    if st.button("Customers", width="stretch"):
        st.switch_page("pages/3_Customers.py")

with col3:
    if st.button("Insurance", width="stretch"):
        st.switch_page("pages/4_Insurance.py")

with col4:
    if st.button("Maintenance", width="stretch"):
        st.switch_page("pages/5_Maintenance.py")
