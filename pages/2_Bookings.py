# =============================================================================
# pages/2_Bookings.py
# =============================================================================
# PURPOSE:
#   Rentals: create bookings, extend them, add extra charges, log returns,
#   and see what each booking still owes.
#
# FEATURES:
#   - Stats row (active, pending pickup, confirmed, overdue)
#   - Booking ledger table with balance and return status
#   - New booking form
#   - Booking detail: extensions, extra charges, return, payment status
# =============================================================================

from datetime import date, timedelta

import pandas as pd
import streamlit as st

from config import (
    BOOKING_ACTIVE,
    BOOKING_CONFIRMED,
    BOOKING_EXTENDED,
    BOOKING_PENDING_PICKUP,
    BOOKING_STATUSES,
    EXTRA_CHARGE_TYPES,
    PAYMENT_STATUSES,
    RETURN_OVERDUE,
    RETURN_STATUSES,
)
from database import (
    init_db,
    load_bookings,
    load_booking_by_id,
    load_customers,
    load_vehicles,
    load_extensions,
    load_extra_charges,
    load_returned_booking_ids,
    load_vehicle_returns,
    create_booking,
    update_booking,
    create_extension,
    update_extension,
    create_extra_charge,
    update_extra_charge,
    create_vehicle_return,
)
from utils import (
    booking_status_counts,
    build_booking_ledger,
    classify_booking,
    extension_outstanding,
    extra_charge_outstanding,
    format_amount,
    outstanding_for_booking,
    principal_outstanding,
    return_status_counts,
    status_choices,
    status_key,
    to_amount,
)
from utils.styling import apply_minimal_style, badge

# -----------------------------------------------------------------------------
# PAGE CONFIGURATION
# -----------------------------------------------------------------------------
st.set_page_config(
    page_title="Bookings - Fleet Command",
    page_icon="📅",
    layout="wide",
    initial_sidebar_state="expanded"
)

apply_minimal_style()
init_db()

today = date.today()

st.title("Bookings")
st.caption("Rentals, extensions, extra charges and returns")

# -----------------------------------------------------------------------------
# LOAD DATA
# -----------------------------------------------------------------------------
bookings_df = load_bookings()
extensions_df = load_extensions()
charges_df = load_extra_charges()
returned_ids = load_returned_booking_ids()
customers_df = load_customers()
vehicles_df = load_vehicles()

ledger_df = build_booking_ledger(bookings_df, extensions_df, charges_df, returned_ids, today)

# -----------------------------------------------------------------------------
# STATS ROW
# -----------------------------------------------------------------------------
status_counts = booking_status_counts(bookings_df)
classified = ledger_df[["return_status"]].to_dict("records") if len(ledger_df) > 0 else []
return_counts = return_status_counts(classified)

col1, col2, col3, col4 = st.columns(4)
col1.metric("🔑 Active Rentals", status_counts[BOOKING_ACTIVE] + status_counts[BOOKING_EXTENDED])
col2.metric("🕒 Pending Pickups", status_counts[BOOKING_PENDING_PICKUP])
col3.metric("✅ Confirmed", status_counts[BOOKING_CONFIRMED])
col4.metric("⚠️ Overdue", return_counts[RETURN_OVERDUE])

# -----------------------------------------------------------------------------
# SECTION 1: BOOKING LEDGER
# -----------------------------------------------------------------------------
st.write("---")
st.write("### 📋 All bookings")

if len(ledger_df) > 0:
    col_a, col_b, col_c = st.columns(3)
    with col_a:
        status_filter = st.selectbox("Status", ["All"] + BOOKING_STATUSES, key="status_filter")
    with col_b:
        return_filter = st.selectbox("Return", ["All"] + RETURN_STATUSES, key="return_filter")
    with col_c:
        owing_only = st.checkbox("Only bookings with a balance", key="owing_only")

    view = ledger_df.copy()
    if status_filter != "All":
        view = view[view["status"].apply(status_key) == status_key(status_filter)]
    if return_filter != "All":
        view = view[view["return_status"] == return_filter]
    if owing_only:
        view = view[view["outstanding"] > 0]

    view["return"] = view["return_status"].apply(badge)
    display_cols = [
        "booking_id", "customer_name", "vehicle_name", "vehicle_plate", "start_date", "end_date",
        "status", "payment_status", "total_amount", "outstanding", "return", "days_overdue",
    ]
    st.dataframe(
        view[[c for c in display_cols if c in view.columns]],
        width="stretch",
        hide_index=True,
    )
    st.caption(f"{len(view)} booking(s) | {format_amount(view['outstanding'].sum())} outstanding")
else:
    st.info("No bookings yet. Create one below.")

# -----------------------------------------------------------------------------
# SECTION 2: NEW BOOKING
# -----------------------------------------------------------------------------
st.write("---")
st.write("### ➕ New booking")

if len(customers_df) == 0 or len(vehicles_df) == 0:
    st.info("Add at least one customer (Customers page) and one vehicle before booking.")
else:
    customer_options = {int(r["customer_id"]): r["name"] for _, r in customers_df.iterrows()}
    vehicle_options = {
        int(r["vehicle_id"]): f"{r['name']} ({r['plate']})" for _, r in vehicles_df.iterrows()
    }

    with st.form("new_booking_form"):
        col_a, col_b = st.columns(2)
        with col_a:
            customer_id = st.selectbox("Customer", list(customer_options.keys()), format_func=lambda x: customer_options[x])
            start_date = st.date_input("Pickup date", value=today)
            status = st.selectbox("Status", BOOKING_STATUSES)
        with col_b:
            vehicle_id = st.selectbox("Vehicle", list(vehicle_options.keys()), format_func=lambda x: vehicle_options[x])
            end_date = st.date_input("Return date", value=today + timedelta(days=3))
            payment_status = st.selectbox("Payment status", PAYMENT_STATUSES)
        total_amount = st.number_input("Total amount", min_value=0.0, step=1.0)
        notes = st.text_area("Notes (optional)", height=60)
        submitted = st.form_submit_button("💾 Save booking")

        if submitted:
            if end_date < start_date:
                st.error("Return date can't be before the pickup date.")
            else:
                booking_id = create_booking({
                    "customer_id": customer_id,
                    "vehicle_id": vehicle_id,
                    "start_date": start_date.isoformat(),
                    "end_date": end_date.isoformat(),
                    "duration_days": (end_date - start_date).days,
                    "status": status,
                    "payment_status": payment_status,
                    "total_amount": float(total_amount),
                    "notes": notes,
                })
                if booking_id:
                    st.success(f"Booking #{booking_id} created.")
                    st.rerun()
                else:
                    st.error("Failed to save.")

# -----------------------------------------------------------------------------
# SECTION 3: BOOKING DETAIL
# -----------------------------------------------------------------------------
if len(bookings_df) > 0:
    st.write("---")
    st.write("### 🔎 Booking detail")

    booking_options = {
        int(r["booking_id"]): f"#{int(r['booking_id'])} - {r['customer_name']} | {r['vehicle_name']} | {r['start_date']} → {r['end_date']}"
        for _, r in bookings_df.iterrows()
    }
    selected_id = st.selectbox(
        "Select booking",
        list(booking_options.keys()),
        format_func=lambda x: booking_options[x],
        key="booking_detail_select",
    )
    booking = load_booking_by_id(selected_id)

    if booking is None:
        st.error("Booking not found.")
    else:
        booking_extensions = load_extensions(selected_id)
        booking_charges = load_extra_charges(selected_id)
        is_returned = selected_id in returned_ids
        result = classify_booking(booking, today, is_returned=is_returned)
        owed = outstanding_for_booking(booking, booking_extensions, booking_charges)

        col1, col2, col3 = st.columns(3)
        col1.metric("Outstanding", format_amount(owed))
        col2.metric("Principal owed", format_amount(principal_outstanding(booking)))
        col3.metric("Return", badge(result["return_status"]),
                    delta=f"{result['days_overdue']} days late" if result["is_overdue"] else None,
                    delta_color="inverse")
        if is_returned:
            returns_df = load_vehicle_returns()
            returns_df = returns_df[returns_df["booking_id"] == selected_id]
            if len(returns_df) > 0:
                latest = returns_df.iloc[0]
                odometer = int(latest["odometer"]) if pd.notna(latest.get("odometer")) else "-"
                st.caption(f"Returned {latest['returned_at']} | odometer {odometer} | fuel {latest.get('fuel_level') or '-'}")

        # ---------------------------------------------------------------------
        # Payment status / booking status
        # ---------------------------------------------------------------------
        status_options, status_index = status_choices(booking["status"], BOOKING_STATUSES)
        payment_options, payment_index = status_choices(booking["payment_status"], PAYMENT_STATUSES)

        with st.form("booking_status_form"):
            col_a, col_b = st.columns(2)
            with col_a:
                new_status = st.selectbox(
                    "Booking status", status_options, index=status_index, key=f"detail_booking_status_{selected_id}",
                )
            with col_b:
                new_payment = st.selectbox(
                    "Payment status", payment_options, index=payment_index, key=f"detail_payment_status_{selected_id}",
                )
            if st.form_submit_button("Update booking", key=f"detail_update_booking_{selected_id}"):
                # Only changed fields are written; stored spellings stay as they are
                updates = {}
                if status_key(new_status) != status_key(booking["status"]):
                    updates["status"] = new_status
                if status_key(new_payment) != status_key(booking["payment_status"]):
                    updates["payment_status"] = new_payment

                if not updates:
                    st.info("Nothing to update.")
                elif update_booking(selected_id, updates):
                    st.success("Booking updated.")
                    st.rerun()
                else:
                    st.error("Failed to update.")

        col_ext, col_chg = st.columns(2)

        # ---------------------------------------------------------------------
        # Extensions
        # ---------------------------------------------------------------------
        with col_ext:
            st.write("**Extensions**")
            if len(booking_extensions) > 0:
                for _, ext in booking_extensions.iterrows():
                    owed_ext = extension_outstanding(ext)
                    receipt = ext.get("receipt_no")
                    label = f"Receipt {receipt}" if owed_ext == 0 else "Not receipted"
                    st.write(f"→ {ext.get('new_end_date') or '?'} | {format_amount(ext.get('amount_paid'))} | {label}")
                    if owed_ext > 0:
                        receipt_no = st.text_input(
                            "Receipt no.", key=f"receipt_{int(ext['extension_id'])}", placeholder="e.g. R-1042"
                        )
                        if st.button("Mark receipted", key=f"receipt_btn_{int(ext['extension_id'])}"):
                            if receipt_no.strip() and update_extension(int(ext["extension_id"]), {"receipt_no": receipt_no.strip()}):
                                st.rerun()
                            else:
                                st.error("Enter a receipt number.")
            else:
                st.caption("No extensions.")

            with st.form("new_extension_form"):
                current_end = pd.to_datetime(booking["end_date"]).date()
                new_end = st.date_input("New return date", value=current_end + timedelta(days=1))
                amount = st.number_input("Extension charge", min_value=0.0, step=1.0)
                receipt_no = st.text_input("Receipt no. (leave empty if not yet paid)")
                if st.form_submit_button("Extend booking"):
                    if new_end <= current_end:
                        st.error("New return date must be after the current one.")
                    else:
                        ext_id = create_extension({
                            "booking_id": selected_id,
                            "previous_end_date": current_end.isoformat(),
                            "new_end_date": new_end.isoformat(),
                            "amount_paid": float(amount),
                            "receipt_no": receipt_no.strip() or None,
                        })
                        if ext_id and update_booking(selected_id, {"end_date": new_end.isoformat(), "status": BOOKING_EXTENDED}):
                            st.success("Booking extended.")
                            st.rerun()
                        else:
                            st.error("Failed to save extension.")

        # ---------------------------------------------------------------------
        # Extra charges
        # ---------------------------------------------------------------------
        with col_chg:
            st.write("**Extra charges**")
            if len(booking_charges) > 0:
                for _, charge in booking_charges.iterrows():
                    st.write(
                        f"{charge.get('charge_type') or 'Other'} | {format_amount(charge.get('amount'))} "
                        f"(paid {format_amount(charge.get('amount_paid'))}) | owes {format_amount(extra_charge_outstanding(charge))}"
                    )
                    if charge.get("description"):
                        st.caption(charge["description"])
                    if extra_charge_outstanding(charge) > 0:
                        charge_id = int(charge["charge_id"])
                        collected = st.number_input(
                            "Collected now", min_value=0.0, step=1.0, key=f"collect_{charge_id}"
                        )
                        if st.button("Record payment", key=f"collect_btn_{charge_id}"):
                            paid = float(to_amount(charge.get("amount_paid"))) + collected
                            if collected > 0 and update_extra_charge(charge_id, {"amount_paid": paid}):
                                st.rerun()
                            else:
                                st.error("Enter the amount collected.")
            else:
                st.caption("No extra charges.")

            with st.form("new_charge_form"):
                charge_type = st.selectbox("Type", EXTRA_CHARGE_TYPES)
                description = st.text_input("Description")
                col_a, col_b = st.columns(2)
                with col_a:
                    amount = st.number_input("Amount", min_value=0.0, step=1.0)
                with col_b:
                    amount_paid = st.number_input("Collected so far", min_value=0.0, step=1.0)
                if st.form_submit_button("Add charge"):
                    if amount <= 0:
                        st.error("Please enter a valid amount.")
                    elif create_extra_charge({
                        "booking_id": selected_id,
                        "charge_type": charge_type,
                        "description": description,
                        "amount": float(amount),
                        "amount_paid": float(amount_paid),
                    }):
                        st.success("Charge added.")
                        st.rerun()
                    else:
                        st.error("Failed to save.")

        # ---------------------------------------------------------------------
        # Return
        # ---------------------------------------------------------------------
        if not is_returned:
            st.write("**Log vehicle return**")
            with st.form("return_form"):
                col_a, col_b = st.columns(2)
                with col_a:
                    returned_at = st.date_input("Returned on", value=today)
                    odometer = st.number_input("Odometer", min_value=0, step=1)
                with col_b:
                    fuel_level = st.selectbox("Fuel level", ["Full", "3/4", "1/2", "1/4", "Empty"])
                    notes = st.text_input("Notes")
                if st.form_submit_button("Log return"):
                    if create_vehicle_return({
                        "booking_id": selected_id,
                        "returned_at": returned_at.isoformat(),
                        "odometer": int(odometer),
                        "fuel_level": fuel_level,
                        "notes": notes,
                    }):
                        st.success("Return logged.")
                        st.rerun()
                    else:
                        st.error("Failed to save.")
