# keeptrack_ui/main.py

import streamlit as st
from dotenv import load_dotenv
from keeptrack_ui.ui.login import login_page, logout, restore_session
from keeptrack_ui.ui.assets import assets_page
from keeptrack_ui.ui.asset_detail import asset_detail_page
from keeptrack_ui.ui.upcoming import upcoming_page


load_dotenv()


PAGES = {
    "assets": assets_page,
    "asset_detail": asset_detail_page,
    "upcoming": upcoming_page,
}


def main_page():
    user = st.session_state.get("user") or {}
    st.sidebar.markdown(f"## 👋 {user.get('name', '')}")
    st.sidebar.caption(user.get("email", ""))

    if st.sidebar.button("📦 Assets"):
        st.session_state["page"] = "assets"
    if st.sidebar.button("📅 Upcoming maintenances"):
        st.session_state["page"] = "upcoming"
    if st.sidebar.button("🔓 Log out"):
        logout()
        st.rerun()

    page = st.session_state.get("page", "assets")
    PAGES.get(page, assets_page)()


if restore_session():
    main_page()
else:
    login_page()
