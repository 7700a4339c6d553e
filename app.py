# =============================================================================
# app.py - MAIN ENTRY POINT
# =============================================================================
# PURPOSE:
#   Entry point for the Fleet Command admin dashboard.
#   Sets up the page, creates the tables if needed, then hands over to the
#   Dashboard page.
#
# TO RUN THE APP:
#   streamlit run app.py
#
# DEMO DATA:
#   python seed_data.py
# =============================================================================

import streamlit as st

from config import LAYOUT, PAGE_ICON, PAGE_TITLE
from database import init_db
from utils.sidebar_nav import inject_sidebar_collapsed

# Must be the first Streamlit command in the script
st.set_page_config(
    page_title=PAGE_TITLE,
    page_icon=PAGE_ICON,
    layout=LAYOUT,
)

inject_sidebar_collapsed()

# Safe on every run; existing data is left alone
init_db()

st.switch_page("pages/1_Dashboard.py")
