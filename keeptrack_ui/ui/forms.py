# keeptrack_ui/ui/forms.py

import streamlit as st
from keeptrack_ui.services.api import is_error


# -------------------------------
# Saving flag
# -------------------------------

def start_saving():
    """
    on_click callback for submit and delete buttons. Callbacks run before
    the rerun, so the run that sends the request draws its controls disabled.
    """
    st.session_state["saving"] = True


def is_saving():
    return st.session_state.get("saving", False)


def finish_saving(result=None, success_message=None, error=None):
    """
    Clears the saving flag and queues the outcome for the next run, which
    the caller triggers with st.rerun(). Returns True on success.
    """
    st.session_state["saving"] = False

    if error is None and is_error(result):
        error = result["error"]
    if error:
        st.session_state["flash_error"] = error
        return False

    if success_message:
        st.session_state["flash"] = success_message
    return True


def show_flash():
    flash = st.session_state.pop("flash", None)
    if flash:
        st.success(flash)
    error = st.session_state.pop("flash_error", None)
    if error:
        st.error(error)


# -------------------------------
# Maintenance record form
# -------------------------------

def record_form_error(service_type, service_date, next_date):
    if not (service_type or "").strip():
        return "Service type is required."
    if service_date is None:
        return "Service date is required."
    if next_date and next_date < service_date:
        return "Next maintenance date cannot be earlier than the service date."
    return None


def record_payload(service_type, service_date, description, cost, performed_by, next_date, next_notes):
    # A cost of 0 is a real value; only an empty input means no cost.
    return {
        "service_type": service_type.strip(),
        "service_date": service_date.isoformat(),
        "description": description or None,
        "cost": cost,
        "performed_by": performed_by or None,
        "next_maintenance_date": next_date.isoformat() if next_date else None,
        "next_maintenance_notes": next_notes or None,
    }
