"""
Shared page styling and status badges for the dashboard screens.
"""
import streamlit as st

from config import (
    COMPLIANCE_EXPIRED,
    COMPLIANCE_EXPIRING_SOON,
    MAINTENANCE_DONE,
    MAINTENANCE_IN_SHOP,
    MAINTENANCE_OVERDUE,
    RETURN_DUE_TODAY,
    RETURN_OVERDUE,
)
from utils.sidebar_nav import inject_sidebar_collapsed

# Tag → emoji prefix used in tables and lists
STATUS_BADGES = {
    RETURN_OVERDUE: "🔴",
    RETURN_DUE_TODAY: "🟡",
    COMPLIANCE_EXPIRED: "🔴",
    COMPLIANCE_EXPIRING_SOON: "🟡",
    MAINTENANCE_OVERDUE: "🔴",
    MAINTENANCE_IN_SHOP: "🔵",
    MAINTENANCE_DONE: "✅",
}


def badge(tag):
    """'🔴 OVERDUE' style label; unknown tags get a grey dot."""
    return f"{STATUS_BADGES.get(tag, '⚪')} {tag}"


def apply_minimal_style():
    """Page CSS plus the icon sidebar."""
    inject_sidebar_collapsed()
    st.markdown("""
    <style>
        .main {
            padding: 4rem 6rem;
            max-width: 1400px;
        }

        h1 {
            font-size: 3rem;
            font-weight: 700;
            color: #0f172a;
            letter-spacing: -0.03em;
            margin-bottom: 0.25rem;
        }

        h3 {
            font-size: 1.25rem;
            font-weight: 600;
            color: #0f172a;
            margin-top: 2.5rem;
            margin-bottom: 1.25rem;
        }

        .stCaption {
            color: #64748b;
            font-size: 0.9rem;
        }

        .stButton > button {
            background-color: #137fec;
            color: white;
            border: none;
            border-radius: 6px;
            padding: 0.6rem 1.5rem;
            font-weight: 500;
        }

        .stButton > button:hover {
            background-color: #0f66bd;
        }

        hr {
            border: none;
            border-top: 1px solid #e2e8f0;
            margin: 3rem 0;
        }
    </style>
    """, unsafe_allow_html=True)
