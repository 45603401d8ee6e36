# app.py
"""
Lead Generator Tracker - Main Entry Point (Dashboard)

Current-week data entry per lead generator plus a 52-week timeline.
Other views live in pages/ (Performance, Master Tracker).

Run locally: streamlit run app.py

Version: 1.0.0
"""

import streamlit as st
import logging

from utils.config import config
from utils.session import TrackerSession
from utils.lead_tracker import LeadTrackerCharts
from utils.lead_tracker.fragments import (
    render_year_selector,
    render_week_navigation,
    render_add_generator_form,
    render_current_week,
    render_timeline,
)

# Configure logging
logging.basicConfig(
    level=config.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# ==================== PAGE CONFIGURATION ====================

APP_NAME = "Lead Generator Tracker"
APP_ICON = "📊"
APP_VERSION = "1.0.0"

st.set_page_config(
    page_title=APP_NAME,
    page_icon=APP_ICON,
    layout="wide",
    initial_sidebar_state="expanded"
)

# ==================== INITIALIZATION ====================

session = TrackerSession()
store = session.store
engine = session.engine

# ==================== SIDEBAR ====================

render_year_selector(
    session,
    first_year=config.get_app_setting("FIRST_YEAR", 2020),
    years_ahead=config.get_app_setting("YEARS_AHEAD", 5)
)

with st.sidebar:
    st.caption(f"💾 {config.get_data_path()}")
    st.caption(f"{len(store.generators)} lead generators")

# ==================== MAIN ====================


def main():
    """Dashboard view: current week + timeline"""
    st.title(f"{APP_ICON} {APP_NAME}")
    session.show_save_status()

    render_add_generator_form(store)

    st.markdown("### 🗓️ Current Week")
    render_week_navigation(session)
    render_current_week(store, session)

    st.markdown("---")
    st.markdown(f"### 📅 {session.year} Timeline")

    if store.generators:
        st.altair_chart(
            LeadTrackerCharts.build_weekly_timeline_chart(
                engine.weekly_timeline(session.year),
                current_week=session.week,
                title=""
            ),
            use_container_width=True
        )

    render_timeline(store, engine, session)

    st.markdown(f"""
    <div style="text-align:center;color:#888;padding:1rem;margin-top:3rem;border-top:1px solid #eee;font-size:0.9rem;">
        <strong>{APP_NAME}</strong> v{APP_VERSION}
    </div>
    """, unsafe_allow_html=True)


if __name__ == "__main__":
    main()
