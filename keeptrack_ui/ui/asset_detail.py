# keeptrack_ui/ui/asset_detail.py

from datetime import date

import streamlit as st
from keeptrack_ui.services.api import (
    create_record,
    delete_record,
    get_asset,
    list_records,
    update_record,
)
from keeptrack_ui.ui.assets import complete, handle_result
from keeptrack_ui.ui.forms import (
    finish_saving,
    is_saving,
    record_form_error,
    record_payload,
    show_flash,
    start_saving,
)


def asset_detail_page():
    token = st.session_state["access_token"]
    asset_id = st.session_state.get("selected_asset")

    if st.button("← Back to assets"):
        st.session_state["page"] = "assets"
        st.session_state.pop("selected_asset", None)
        st.rerun()

    if asset_id is None:
        st.info("Select an asset first.")
        return

    asset = get_asset(asset_id, token)
    if not handle_result(asset):
        return

    st.title(f"🔧 {asset['name']}")
    if asset.get("description"):
        st.write(asset["description"])
    st.caption(f"Created {asset['created_at'][:10]} · Updated {asset['updated_at'][:10]}")

    show_flash()

    records = list_records(asset_id, token)
    if not handle_result(records):
        return

    if st.button("➕ New maintenance record"):
        st.session_state["show_add_record"] = not st.session_state.get("show_add_record", False)
        st.session_state.pop("editing_record", None)

    if st.session_state.get("show_add_record"):
        handle_record_form(token, asset_id)

    st.markdown("### 📋 Maintenance history")
    if not records:
        st.info("No maintenance records yet.")
        return

    for record in records:
        render_record(token, asset_id, record)


def _to_date(value):
    return date.fromisoformat(value) if value else None


def handle_record_form(token, asset_id, record=None):
    saving = is_saving()
    key = f"record_form_{record['id']}" if record else "record_form_new"
    existing = record or {}

    with st.form(key):
        service_type = st.text_input("Service type", value=existing.get("service_type") or "")
        service_date = st.date_input(
            "Service date",
            value=_to_date(record["service_date"]) if record else date.today()
        )
        description = st.text_area("Description", value=existing.get("description") or "")
        # An empty input means no cost; 0 is kept as a real value.
        cost = st.number_input(
            "Cost",
            min_value=0.0,
            step=0.01,
            value=existing.get("cost"),
        )
        performed_by = st.text_input("Performed by", value=existing.get("performed_by") or "")
        next_date = st.date_input(
            "Next maintenance date",
            value=_to_date(existing.get("next_maintenance_date")),
        )
        next_notes = st.text_area("Next maintenance notes", value=existing.get("next_maintenance_notes") or "")
        submitted = st.form_submit_button("💾 Save", disabled=saving, on_click=start_saving)
        cancelled = st.form_submit_button("Cancel", disabled=saving)

    if cancelled:
        st.session_state.pop("show_add_record", None)
        st.session_state.pop("editing_record", None)
        st.rerun()

    if not submitted:
        return

    error = record_form_error(service_type, service_date, next_date)
    if error:
        finish_saving(error=error)
        st.rerun()

    payload = record_payload(
        service_type, service_date, description, cost, performed_by, next_date, next_notes
    )
    if record:
        result = update_record(record["id"], payload, token)
        ok = complete(result, "✅ Record updated.")
    else:
        result = create_record(dict(payload, asset_id=asset_id), token)
        ok = complete(result, "✅ Record created.")

    if ok:
        st.session_state.pop("show_add_record", None)
        st.session_state.pop("editing_record", None)
    st.rerun()


def render_record(token, asset_id, record):
    saving = is_saving()
    with st.container(border=True):
        col1, col2, col3 = st.columns([8, 1, 1])
        with col1:
            st.markdown(f"**{record['service_type']}** · {record['service_date']}")
            details = []
            if record.get("performed_by"):
                details.append(f"by {record['performed_by']}")
            if record.get("cost") is not None:
                details.append(f"cost {record['cost']:.2f}")
            if details:
                st.caption(" · ".join(details))
            if record.get("description"):
                st.write(record["description"])
            if record.get("next_maintenance_date"):
                note = f" · {record['next_maintenance_notes']}" if record.get("next_maintenance_notes") else ""
                st.markdown(f"⏭️ Next: **{record['next_maintenance_date']}**{note}")
        with col2:
            if st.button("✏️", key=f"edit-record-{record['id']}", help="Edit"):
                st.session_state["editing_record"] = record["id"]
                st.session_state.pop("show_add_record", None)
                st.rerun()
        with col3:
            if st.button("🗑️", key=f"delete-record-{record['id']}", help="Delete"):
                st.session_state["confirm_delete_record"] = record["id"]

        if st.session_state.get("editing_record") == record["id"]:
            handle_record_form(token, asset_id, record)

        if st.session_state.get("confirm_delete_record") == record["id"]:
            st.warning("⚠️ Delete this maintenance record?")
            c1, c2 = st.columns(2)
            with c1:
                if st.button("Delete", key=f"confirm-delete-record-{record['id']}",
                             disabled=saving, on_click=start_saving):
                    result = delete_record(record["id"], token)
                    st.session_state.pop("confirm_delete_record", None)
                    complete(result, "🗑️ Record deleted.")
                    st.rerun()
            with c2:
                if st.button("Cancel", key=f"cancel-delete-record-{record['id']}", disabled=saving):
                    st.session_state.pop("confirm_delete_record", None)
                    st.rerun()
