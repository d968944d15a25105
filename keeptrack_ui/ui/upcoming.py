# keeptrack_ui/ui/upcoming.py

from datetime import date

import streamlit as st
from keeptrack_ui.services.api import get_upcoming
from keeptrack_ui.ui.assets import handle_result


def describe_due_date(due, today=None):
    """
    Returns (weekday, status) for a 'YYYY-MM-DD' due date.
    """
    today = today or date.today()
    due_date = date.fromisoformat(due)
    days = (due_date - today).days

    if days < 0:
        status = f"overdue by {-days} day{'s' if days != -1 else ''}"
    elif days == 0:
        status = "due today"
    else:
        status = f"in {days} day{'s' if days != 1 else ''}"
    return due_date.strftime("%A"), status


def upcoming_page():
    st.title("📅 Upcoming Maintenances")
    token = st.session_state["access_token"]

    upcoming = get_upcoming(token)
    if not handle_result(upcoming):
        return

    if not upcoming:
        st.info("No upcoming maintenance records found.")
        return

    for entry in upcoming:
        weekday, status = describe_due_date(entry["next_maintenance_date"])
        with st.container(border=True):
            col1, col2 = st.columns([8, 2])
            with col1:
                st.markdown(f"**{entry['asset_name']}** · {entry['service_type']}")
                line = f"📆 {entry['next_maintenance_date']} ({weekday}), {status}"
                if status.startswith("overdue"):
                    st.error(line)
                else:
                    st.write(line)
                if entry.get("next_maintenance_notes"):
                    st.caption(entry["next_maintenance_notes"])
                st.caption(f"Last service: {entry['service_date']}")
            with col2:
                if st.button("Open asset", key=f"upcoming-{entry['id']}"):
                    st.session_state["selected_asset"] = entry["asset_id"]
                    st.session_state["page"] = "asset_detail"
                    st.rerun()
