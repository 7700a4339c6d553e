"""
Icon sidebar that widens on hover, with page links driven by st.switch_page.
"""
import streamlit as st

SIDEBAR_BG = "#1E3A5F"

# Outline SVG icon paths (24x24 viewBox, stroke only)
ICONS_SVG = {
    "layout-grid": '<path d="M3 3h7v7H3zM14 3h7v7h-7zM14 14h7v7h-7zM3 14h7v7H3z"/>',
    "home": '<path d="M3 9l9-7 9 7v11a2 2 0 0 1-2 2H5a2 2 0 0 1-2-2z"/><polyline points="9 22 9 12 15 12 15 22"/>',
    "calendar": '<rect x="3" y="4" width="18" height="18" rx="2"/><line x1="16" y1="2" x2="16" y2="6"/><line x1="8" y1="2" x2="8" y2="6"/><line x1="3" y1="10" x2="21" y2="10"/>',
    "users": '<path d="M17 21v-2a4 4 0 0 0-4-4H5a4 4 0 0 0-4 4v2"/><circle cx="9" cy="7" r="4"/><path d="M23 21v-2a4 4 0 0 0-3-3.87"/><path d="M16 3.13a4 4 0 0 1 0 7.75"/>',
    "shield": '<path d="M12 22s8-4 8-10V5l-8-3-8 3v7c0 6 8 10 8 10z"/>',
    "wrench": '<path d="M14.7 6.3a1 1 0 0 0 0 1.4l1.6 1.6a1 1 0 0 0 1.4 0l3.77-3.77a6 6 0 0 1-7.94 7.94l-6.91 6.91a2.12 2.12 0 0 1-3-3l6.91-6.91a6 6 0 0 1 7.94-7.94l-3.76 3.76z"/>',
}

# (icon key, label, path) - ASCII paths so switch_page resolves them
PAGES = [
    ("home", "Dashboard", "pages/1_Dashboard.py"),
    ("calendar", "Bookings", "pages/2_Bookings.py"),
    ("users", "Customers", "pages/3_Customers.py"),
    ("shield", "Insurance", "pages/4_Insurance.py"),
    ("wrench", "Maintenance", "pages/5_Maintenance.py"),
]


def svg_icon(name: str, size: int = 24, stroke_width: float = 2) -> str:
    """Inline SVG markup for one of ICONS_SVG."""
    path = ICONS_SVG.get(name, ICONS_SVG["layout-grid"])
    return f'''<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="{stroke_width}" stroke-linecap="round" stroke-linejoin="round">{path}</svg>'''


def get_sidebar_css():
    """CSS for a 70px sidebar that opens to 250px on hover or focus."""
    return f"""
<style>
    [data-testid="stSidebar"] {{
        width: 70px !important;
        min-width: 70px !important;
        transition: width 0.25s ease 0.35s, min-width 0.25s ease 0.35s;
        background-color: {SIDEBAR_BG} !important;
        overflow-x: hidden !important;
    }}

    [data-testid="stSidebar"]:hover,
    [data-testid="stSidebar"]:focus-within {{
        width: 250px !important;
        min-width: 250px !important;
        transition: width 0.25s ease 0s, min-width 0.25s ease 0s;
    }}

    [data-testid="stSidebar"] [data-testid="stSidebarContent"] {{
        padding-left: 14px !important;
        padding-right: 14px !important;
    }}

    /* Built-in page list is replaced by the buttons below */
    [data-testid="stSidebarNav"] {{
        display: none !important;
    }}

    [data-testid="stSidebar"] .nav-icon-wrap {{
        display: flex !important;
        align-items: center !important;
        justify-content: center !important;
        padding: 4px 0 !important;
    }}

    [data-testid="stSidebar"] .nav-icon-wrap svg {{
        color: rgba(255,255,255,0.9) !important;
    }}

    [data-testid="stSidebar"] .stButton > button {{
        width: 100% !important;
        min-height: 48px !important;
        border-radius: 8px !important;
        background: transparent !important;
        border: none !important;
        color: rgba(255,255,255,0.9) !important;
        font-weight: 500 !important;
        justify-content: flex-start !important;
    }}

    [data-testid="stSidebar"] .stButton > button:hover {{
        background-color: rgba(255,255,255,0.12) !important;
    }}

    [data-testid="stSidebar"]:not(:hover):not(:focus-within) .stButton > button {{
        color: transparent !important;
        overflow: hidden !important;
    }}
</style>
"""


# Set by a button callback, consumed on the next run
NAV_TARGET_KEY = "nav_target"


def _go(path: str) -> None:
    """Button callback: remember the target page (switch_page is a no-op inside callbacks)."""
    st.session_state[NAV_TARGET_KEY] = path


def inject_sidebar_collapsed():
    """Render the icon sidebar, switching page first if a nav button was clicked last run."""
    target = st.session_state.pop(NAV_TARGET_KEY, None)
    if target:
        st.switch_page(target)
        return

    st.markdown(get_sidebar_css(), unsafe_allow_html=True)

    with st.sidebar:
        st.markdown("<div style='height: 0.5rem'></div>", unsafe_allow_html=True)
        for i, (icon_key, label, path) in enumerate(PAGES):
            col_icon, col_link = st.columns([1, 3], gap="small")
            with col_icon:
                st.markdown(f'<div class="nav-icon-wrap">{svg_icon(icon_key)}</div>', unsafe_allow_html=True)
            with col_link:
                st.button(label, key=f"nav_{i}", width="stretch", on_click=_go, args=(path,))
