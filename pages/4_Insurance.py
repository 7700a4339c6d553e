# =============================================================================
# pages/4_Insurance.py
# =============================================================================
# PURPOSE:
#   Insurance, registration and safety-sticker tracking per vehicle.
#
# FEATURES:
#   - Expired / Expiring Soon / Valid counts
#   - Tabs per tier, filter by record type, search by vehicle or policy
#   - New record form
#
#   Tiers are computed against today's date on every load (see
#   utils.classify_compliance); nothing about expiry is stored.
# =============================================================================

from datetime import date, timedelta

import streamlit as st

from config import (
    COMPLIANCE_EXPIRED,
    COMPLIANCE_EXPIRING_SOON,
    COMPLIANCE_RECORD_TYPES,
    COMPLIANCE_VALID,
    EXPIRING_SOON_DAYS,
)
from database import (
    init_db,
    load_compliance_records,
    load_vehicles,
    create_compliance_record,
)
from utils import build_compliance_table, compliance_tier_counts
from utils.styling import apply_minimal_style, badge

# -----------------------------------------------------------------------------
# PAGE CONFIGURATION
# -----------------------------------------------------------------------------
st.set_page_config(
    page_title="Insurance - Fleet Command",
    page_icon="🛡️",
    layout="wide",
    initial_sidebar_state="expanded"
)

apply_minimal_style()
init_db()

today = date.today()

st.title("Insurance & Registration")
st.caption(f"Records expiring within {EXPIRING_SOON_DAYS} days are flagged for renewal")

# -----------------------------------------------------------------------------
# LOAD DATA
# -----------------------------------------------------------------------------
records_df = build_compliance_table(load_compliance_records(), today)
vehicles_df = load_vehicles()

counts = compliance_tier_counts(records_df.to_dict("records") if len(records_df) > 0 else [])

col1, col2, col3, col4 = st.columns(4)
col1.metric("📄 Records", len(records_df))
col2.metric("🔴 Expired", counts[COMPLIANCE_EXPIRED])
col3.metric("🟡 Expiring Soon", counts[COMPLIANCE_EXPIRING_SOON])
col4.metric("✅ Valid", counts[COMPLIANCE_VALID])

# -----------------------------------------------------------------------------
# SECTION 1: RECORDS BY TIER
# -----------------------------------------------------------------------------
st.write("---")

if len(records_df) > 0:
    col_a, col_b = st.columns([1, 2])
    with col_a:
        type_options = {"all": "All types", **COMPLIANCE_RECORD_TYPES}
        record_type = st.selectbox("Record type", list(type_options.keys()), format_func=lambda x: type_options[x])
    with col_b:
        search = st.text_input("🔍 Search", placeholder="Vehicle, plate, provider or policy number")

    view = records_df.copy()
    if record_type != "all":
        view = view[view["record_type"] == record_type]
    if search:
        needle = search.lower()
        haystack = (
            view[["vehicle_name", "vehicle_plate", "provider", "policy_number"]]
            .fillna("")
            .astype(str)
            .agg(" ".join, axis=1)
            .str.lower()
        )
        view = view[haystack.str.contains(needle, regex=False)]

    view["tier"] = view["status"].apply(badge)
    display_cols = [
        "vehicle_name", "vehicle_plate", "record_label", "provider", "policy_number",
        "date_renewed", "expiry_date", "expiry_label", "tier", "cost",
    ]

    tab_all, tab_expired, tab_soon, tab_valid = st.tabs(["All Records", "Expired", "Expiring Soon", "Valid"])
    for tab, tier in (
        (tab_all, None),
        (tab_expired, COMPLIANCE_EXPIRED),
        (tab_soon, COMPLIANCE_EXPIRING_SOON),
        (tab_valid, COMPLIANCE_VALID),
    ):
        with tab:
            subset = view if tier is None else view[view["status"] == tier]
            if len(subset) > 0:
                st.dataframe(subset[display_cols], width="stretch", hide_index=True)
            else:
                st.info("No records in this tab.")
else:
    st.info("No compliance records yet. Add one below.")

# -----------------------------------------------------------------------------
# SECTION 2: NEW RECORD
# -----------------------------------------------------------------------------
st.write("---")
st.write("### ➕ New record")

if len(vehicles_df) == 0:
    st.info("Add a vehicle on the Maintenance page first.")
else:
    vehicle_options = {int(r["vehicle_id"]): f"{r['name']} ({r['plate']})" for _, r in vehicles_df.iterrows()}

    with st.form("new_compliance_form"):
        col_a, col_b = st.columns(2)
        with col_a:
            vehicle_id = st.selectbox("Vehicle *", list(vehicle_options.keys()), format_func=lambda x: vehicle_options[x])
            record_type = st.selectbox(
                "Record type *", list(COMPLIANCE_RECORD_TYPES.keys()), format_func=lambda x: COMPLIANCE_RECORD_TYPES[x]
            )
            date_renewed = st.date_input("Date renewed", value=today)
            expiry_date = st.date_input("Expiry date *", value=today + timedelta(days=365))
        with col_b:
            provider = st.text_input("Provider")
            policy_number = st.text_input("Policy / reference number")
            cost = st.number_input("Cost", min_value=0.0, step=1.0)
            notes = st.text_area("Notes", height=60)
        submitted = st.form_submit_button("💾 Save record")

        if submitted:
            record_id = create_compliance_record({
                "vehicle_id": vehicle_id,
                "record_type": record_type,
                "date_renewed": date_renewed.isoformat(),
                "expiry_date": expiry_date.isoformat(),
                "provider": provider or None,
                "policy_number": policy_number or None,
                "cost": float(cost) if cost else None,
                "notes": notes or None,
            })
            if record_id:
                st.success("Record saved.")
                st.rerun()
            else:
                st.error("Failed to create record. Please try again.")
