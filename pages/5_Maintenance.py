# =============================================================================
# pages/5_Maintenance.py
# =============================================================================
# PURPOSE:
#   Service work per vehicle, and the fleet list itself.
#
# FEATURES:
#   - Task counts per tag (Overdue / In Shop / Scheduled / Done)
#   - Tabs per tag, with the stored status shown next to its tag
#   - Update a task's status
#   - New task form
#   - Fleet: vehicles, their balance across bookings, new vehicle form
#
# NOTE:
#   Stored statuses come in several spellings ("completed", "in progress",
#   "in_shop"...). The tag shown is always normalize_maintenance_status()
#   of the stored value; the stored value itself is never rewritten here.
# =============================================================================

from datetime import date

import streamlit as st

from config import (
    MAINTENANCE_RAW_STATUSES,
    MAINTENANCE_STATUSES,
    VEHICLE_STATUSES,
)
from database import (
    init_db,
    load_bookings,
    load_extensions,
    load_extra_charges,
    load_maintenance_tasks,
    load_vehicles,
    create_maintenance_task,
    create_vehicle,
    update_maintenance_status,
    update_vehicle,
)
from utils import (
    build_maintenance_table,
    format_amount,
    group_by_booking,
    maintenance_tag_counts,
    outstanding_by,
)
from utils.styling import apply_minimal_style, badge

# -----------------------------------------------------------------------------
# PAGE CONFIGURATION
# -----------------------------------------------------------------------------
st.set_page_config(
    page_title="Maintenance - Fleet Command",
    page_icon="🔧",
    layout="wide",
    initial_sidebar_state="expanded"
)

apply_minimal_style()
init_db()

today = date.today()

st.title("Maintenance")
st.caption("Service schedule and fleet")

# -----------------------------------------------------------------------------
# LOAD DATA
# -----------------------------------------------------------------------------
tasks_df = load_maintenance_tasks()
vehicles_df = load_vehicles()
tasks_table = build_maintenance_table(tasks_df)
counts = maintenance_tag_counts(tasks_df)

cols = st.columns(len(MAINTENANCE_STATUSES) + 1)
cols[0].metric("🔧 Tasks", len(tasks_table))
for column, tag in zip(cols[1:], MAINTENANCE_STATUSES):
    column.metric(badge(tag), counts[tag])

# -----------------------------------------------------------------------------
# SECTION 1: TASKS BY TAG
# -----------------------------------------------------------------------------
st.write("---")

if len(tasks_table) > 0:
    tasks_table["tag"] = tasks_table["status_tag"].apply(badge)
    display_cols = [
        "task_id", "vehicle_name", "vehicle_vin", "service_type", "scheduled_date",
        "tag", "status", "assignee_name", "cost_estimate",
    ]

    tabs = st.tabs(["All"] + MAINTENANCE_STATUSES)
    with tabs[0]:
        st.dataframe(tasks_table[display_cols], width="stretch", hide_index=True)
    for tab, tag in zip(tabs[1:], MAINTENANCE_STATUSES):
        with tab:
            subset = tasks_table[tasks_table["status_tag"] == tag]
            if len(subset) > 0:
                st.dataframe(subset[display_cols], width="stretch", hide_index=True)
            else:
                st.info(f"No {tag.lower()} tasks.")

    # -------------------------------------------------------------------------
    # UPDATE STATUS
    # -------------------------------------------------------------------------
    st.write("### 🔄 Update status")

    task_options = {
        int(r["task_id"]): f"#{int(r['task_id'])} {r['service_type']} - {r['vehicle_name']} ({r['status_tag']})"
        for _, r in tasks_table.iterrows()
    }

    with st.form("update_task_form"):
        col_a, col_b = st.columns(2)
        with col_a:
            task_id = st.selectbox("Task", list(task_options.keys()), format_func=lambda x: task_options[x])
        with col_b:
            new_status = st.selectbox("New status", MAINTENANCE_RAW_STATUSES)
        submitted = st.form_submit_button("Update")

        if submitted:
            if update_maintenance_status(task_id, new_status):
                st.success("Status updated.")
                st.rerun()
            else:
                st.error("Update failed.")
else:
    st.info("No maintenance tasks yet.")

# -----------------------------------------------------------------------------
# SECTION 2: NEW TASK
# -----------------------------------------------------------------------------
st.write("---")
st.write("### ➕ New task")

if len(vehicles_df) == 0:
    st.info("Add a vehicle below first.")
else:
    vehicle_options = {int(r["vehicle_id"]): f"{r['name']} ({r['plate']})" for _, r in vehicles_df.iterrows()}

    with st.form("new_task_form"):
        col_a, col_b = st.columns(2)
        with col_a:
            vehicle_id = st.selectbox("Vehicle *", list(vehicle_options.keys()), format_func=lambda x: vehicle_options[x])
            service_type = st.text_input("Service type *", placeholder="Oil change, tyre rotation...")
            scheduled_date = st.date_input("Scheduled date", value=today)
            status = st.selectbox("Status", MAINTENANCE_RAW_STATUSES)
        with col_b:
            assignee_name = st.text_input("Assignee")
            cost_estimate = st.number_input("Cost estimate", min_value=0.0, step=10.0)
            arrival_mileage = st.number_input("Arrival mileage", min_value=0, step=100)
            notes = st.text_area("Notes", height=60)
        submitted = st.form_submit_button("💾 Save task")

        if submitted:
            if not service_type.strip():
                st.error("Service type is required.")
            else:
                task_id = create_maintenance_task({
                    "vehicle_id": vehicle_id,
                    "service_type": service_type.strip(),
                    "scheduled_date": scheduled_date.isoformat(),
                    "status": status,
                    "assignee_name": assignee_name or None,
                    "cost_estimate": float(cost_estimate) if cost_estimate else None,
                    "arrival_mileage": int(arrival_mileage) if arrival_mileage else None,
                    "notes": notes or None,
                })
                if task_id:
                    st.success(f"Task #{task_id} created.")
                    st.rerun()
                else:
                    st.error("Failed to save.")

# -----------------------------------------------------------------------------
# SECTION 3: FLEET
# -----------------------------------------------------------------------------
st.write("---")
st.write("### 🚗 Fleet")

if len(vehicles_df) > 0:
    bookings_df = load_bookings()
    balances = outstanding_by(
        bookings_df,
        group_by_booking(load_extensions()),
        group_by_booking(load_extra_charges()),
        key="vehicle_id",
    )
    fleet = vehicles_df.copy()
    fleet["outstanding"] = fleet["vehicle_id"].apply(lambda vid: float(balances.get(vid, 0)))
    st.dataframe(
        fleet[["vehicle_id", "name", "plate", "vin", "status", "location", "mileage", "daily_rate", "outstanding"]],
        width="stretch",
        hide_index=True,
    )
    st.caption(f"Owed on bookings across the fleet: {format_amount(fleet['outstanding'].sum())}")

    fleet_options = {int(r["vehicle_id"]): f"{r['name']} ({r['plate']})" for _, r in vehicles_df.iterrows()}
    with st.form("vehicle_status_form"):
        col_a, col_b = st.columns(2)
        with col_a:
            fleet_vehicle = st.selectbox("Vehicle", list(fleet_options.keys()), format_func=lambda x: fleet_options[x])
        with col_b:
            fleet_status = st.selectbox("Vehicle status", VEHICLE_STATUSES)
        if st.form_submit_button("Set status"):
            if update_vehicle(fleet_vehicle, {"status": fleet_status}):
                st.success("Vehicle updated.")
                st.rerun()
            else:
                st.error("Update failed.")
else:
    st.info("No vehicles yet.")

with st.expander("➕ Add vehicle"):
    with st.form("new_vehicle_form"):
        col_a, col_b = st.columns(2)
        with col_a:
            name = st.text_input("Name *", placeholder="2024 Toyota Camry")
            plate = st.text_input("Plate")
            vin = st.text_input("VIN")
            vehicle_status = st.selectbox("Status", VEHICLE_STATUSES)
        with col_b:
            location = st.text_input("Location")
            mileage = st.number_input("Mileage", min_value=0, step=100)
            daily_rate = st.number_input("Daily rate", min_value=0.0, step=5.0)
        submitted = st.form_submit_button("💾 Save vehicle")

        if submitted:
            if not name.strip():
                st.error("Name is required.")
            else:
                vehicle_id = create_vehicle({
                    "name": name.strip(),
                    "plate": plate or None,
                    "vin": vin or None,
                    "status": vehicle_status,
                    "location": location or None,
                    "mileage": int(mileage),
                    "daily_rate": float(daily_rate),
                })
                if vehicle_id:
                    st.success(f"Vehicle #{vehicle_id} created.")
                    st.rerun()
                else:
                    st.error("Failed to save. Is the plate already in use?")
