# =============================================================================
# pages/3_Customers.py
# =============================================================================
# PURPOSE:
#   Customer records and what each customer owes across all their bookings.
#
# FEATURES:
#   - Customer list with total outstanding per customer
#   - Customer profile: licence, booking history, balance per booking
#   - New customer form
# =============================================================================

from datetime import date

import streamlit as st

from config import CUSTOMER_STATUSES
from database import (
    init_db,
    load_customers,
    load_bookings,
    load_extensions,
    load_extra_charges,
    load_returned_booking_ids,
    create_customer,
    update_customer,
)
from utils import (
    build_booking_ledger,
    format_amount,
    group_by_booking,
    outstanding_by,
    rollup,
    status_choices,
    status_key,
)
from utils.styling import apply_minimal_style, badge

# -----------------------------------------------------------------------------
# PAGE CONFIGURATION
# -----------------------------------------------------------------------------
st.set_page_config(
    page_title="Customers - Fleet Command",
    page_icon="👥",
    layout="wide",
    initial_sidebar_state="expanded"
)

apply_minimal_style()
init_db()

today = date.today()

st.title("Customers")
st.caption("Customer records and balances")

# -----------------------------------------------------------------------------
# LOAD DATA
# -----------------------------------------------------------------------------
search = st.text_input("🔍 Search", placeholder="Name, email or phone")
customers_df = load_customers(search=search or None)
bookings_df = load_bookings()
extensions_by_booking = group_by_booking(load_extensions())
charges_by_booking = group_by_booking(load_extra_charges())
returned_ids = load_returned_booking_ids()

balances = outstanding_by(bookings_df, extensions_by_booking, charges_by_booking, key="customer_id")

# -----------------------------------------------------------------------------
# SECTION 1: CUSTOMER LIST
# -----------------------------------------------------------------------------
st.write("---")
st.write("### 📋 Customers")

if len(customers_df) > 0:
    table = customers_df.copy()
    table["outstanding"] = table["customer_id"].apply(lambda cid: float(balances.get(cid, 0)))
    table["bookings"] = table["customer_id"].apply(
        lambda cid: int((bookings_df["customer_id"] == cid).sum()) if len(bookings_df) > 0 else 0
    )
    st.dataframe(
        table[["customer_id", "name", "email", "phone", "status", "license_expiry", "bookings", "outstanding"]],
        width="stretch",
        hide_index=True,
    )
    st.caption(f"Total owed by listed customers: {format_amount(table['outstanding'].sum())}")
else:
    st.info("No customers found.")

# -----------------------------------------------------------------------------
# SECTION 2: CUSTOMER PROFILE
# -----------------------------------------------------------------------------
if len(customers_df) > 0:
    st.write("---")
    st.write("### 👤 Customer profile")

    customer_options = {int(r["customer_id"]): r["name"] for _, r in customers_df.iterrows()}
    selected_id = st.selectbox(
        "Select customer",
        list(customer_options.keys()),
        format_func=lambda x: customer_options[x],
    )
    customer = customers_df[customers_df["customer_id"] == selected_id].iloc[0]
    customer_bookings = load_bookings(customer_id=selected_id)

    col1, col2 = st.columns([1, 2])

    with col1:
        st.write(f"**{customer['name']}**")
        st.write(f"📧 {customer.get('email') or '-'}")
        st.write(f"📞 {customer.get('phone') or '-'}")
        st.write(f"🏠 {customer.get('address') or '-'}")
        st.write("**Driving licence**")
        st.write(f"{customer.get('license_state') or ''} {customer.get('license_number') or 'N/A'}")
        st.caption(f"Expires {customer.get('license_expiry') or 'N/A'}")

        current = customer.get("status")
        status_options, status_index = status_choices(current, CUSTOMER_STATUSES)
        new_status = st.selectbox(
            "Status",
            status_options,
            index=status_index,
            key=f"customer_status_{selected_id}",
        )
        if status_key(new_status) != status_key(current) and st.button("Save status", key=f"customer_status_btn_{selected_id}"):
            if update_customer(selected_id, {"status": new_status}):
                st.rerun()
            else:
                st.error("Failed to update.")

    with col2:
        owed = rollup(customer_bookings, extensions_by_booking, charges_by_booking)
        st.metric("Outstanding", format_amount(owed))

        ledger = build_booking_ledger(
            customer_bookings,
            [e for rows in extensions_by_booking.values() for e in rows],
            [c for rows in charges_by_booking.values() for c in rows],
            returned_ids,
            today,
        )
        if len(ledger) > 0:
            ledger["return"] = ledger["return_status"].apply(badge)
            st.dataframe(
                ledger[["booking_id", "vehicle_name", "start_date", "end_date", "status",
                        "payment_status", "total_amount", "outstanding", "return"]],
                width="stretch",
                hide_index=True,
            )
        else:
            st.info("No bookings for this customer yet.")

# -----------------------------------------------------------------------------
# SECTION 3: NEW CUSTOMER
# -----------------------------------------------------------------------------
st.write("---")
st.write("### ➕ New customer")

with st.form("new_customer_form"):
    col_a, col_b = st.columns(2)
    with col_a:
        name = st.text_input("Full name *")
        email = st.text_input("Email")
        phone = st.text_input("Phone")
        status = st.selectbox("Status", CUSTOMER_STATUSES)
    with col_b:
        license_number = st.text_input("Licence number")
        license_state = st.text_input("Licence state")
        license_expiry = st.date_input("Licence expiry", value=None)
        address = st.text_input("Address")
    submitted = st.form_submit_button("💾 Save customer")

    if submitted:
        if not name.strip():
            st.error("Name is required.")
        else:
            customer_id = create_customer({
                "name": name.strip(),
                "email": email,
                "phone": phone,
                "address": address,
                "license_number": license_number,
                "license_state": license_state,
                "license_expiry": license_expiry.isoformat() if license_expiry else None,
                "status": status,
            })
            if customer_id:
                st.success(f"Customer #{customer_id} created.")
                st.rerun()
            else:
                st.error("Failed to save.")
