# keeptrack_ui/ui/assets.py

import streamlit as st
from keeptrack_ui.services.api import (
    create_asset,
    delete_asset,
    is_auth_error,
    is_error,
    list_assets,
    update_asset,
)
from keeptrack_ui.ui.forms import finish_saving, is_saving, show_flash, start_saving
from keeptrack_ui.ui.login import force_logout


def handle_result(result):
    """
    Shows the server's error for a page load, logging out on a rejected token.
    Returns True when the call succeeded.
    """
    if is_auth_error(result):
        force_logout()
    if is_error(result):
        st.error(result["error"])
        return False
    return True


def complete(result, success_message=None):
    """
    Ends a save started by start_saving, logging out on a rejected token.
    """
    ok = finish_saving(result, success_message)
    if is_auth_error(result):
        force_logout()
    return ok


def assets_page():
    st.title("📦 My Assets")
    token = st.session_state["access_token"]

    show_flash()

    assets = list_assets(token)
    if not handle_result(assets):
        return

    if st.button("➕ New asset"):
        st.session_state["show_add_asset"] = not st.session_state.get("show_add_asset", False)
        st.session_state.pop("editing_asset", None)

    if st.session_state.get("show_add_asset"):
        handle_asset_form(token)

    editing = st.session_state.get("editing_asset")
    if editing:
        asset = next((a for a in assets if a["id"] == editing), None)
        if asset:
            handle_asset_form(token, asset)

    if not assets:
        st.info("You have no assets yet. Create one to start tracking maintenance.")
        return

    for asset in assets:
        render_asset_row(token, asset)


def handle_asset_form(token, asset=None):
    saving = is_saving()
    key = f"asset_form_{asset['id']}" if asset else "asset_form_new"

    with st.form(key):
        st.subheader("✏️ Edit asset" if asset else "➕ New asset")
        name = st.text_input("Name", value=asset["name"] if asset else "")
        description = st.text_area(
            "Description",
            value=(asset.get("description") or "") if asset else ""
        )
        submitted = st.form_submit_button("💾 Save", disabled=saving, on_click=start_saving)
        cancelled = st.form_submit_button("Cancel", disabled=saving)

    if cancelled:
        st.session_state.pop("show_add_asset", None)
        st.session_state.pop("editing_asset", None)
        st.rerun()

    if not submitted:
        return

    if not name.strip():
        finish_saving(error="Asset name is required.")
        st.rerun()

    if asset:
        result = update_asset(asset["id"], {"name": name, "description": description or None}, token)
        ok = complete(result, "✅ Asset updated.")
    else:
        result = create_asset(name, description, token)
        ok = complete(result, "✅ Asset created.")

    if ok:
        st.session_state.pop("show_add_asset", None)
        st.session_state.pop("editing_asset", None)
    st.rerun()


def render_asset_row(token, asset):
    saving = is_saving()
    col1, col2, col3, col4 = st.columns([6, 1, 1, 1])
    with col1:
        st.markdown(f"**{asset['name']}**")
        if asset.get("description"):
            st.caption(asset["description"])
    with col2:
        if st.button("🔍", key=f"open-{asset['id']}", help="Open"):
            st.session_state["selected_asset"] = asset["id"]
            st.session_state["page"] = "asset_detail"
            st.rerun()
    with col3:
        if st.button("✏️", key=f"edit-{asset['id']}", help="Edit"):
            st.session_state["editing_asset"] = asset["id"]
            st.session_state.pop("show_add_asset", None)
            st.rerun()
    with col4:
        if st.button("🗑️", key=f"delete-{asset['id']}", help="Delete"):
            st.session_state["confirm_delete_asset"] = asset["id"]

    if st.session_state.get("confirm_delete_asset") == asset["id"]:
        st.warning(f"⚠️ Delete '{asset['name']}' and all of its maintenance records?")
        c1, c2 = st.columns(2)
        with c1:
            if st.button("Delete", key=f"confirm-delete-{asset['id']}", disabled=saving, on_click=start_saving):
                result = delete_asset(asset["id"], token)
                st.session_state.pop("confirm_delete_asset", None)
                complete(result, f"🗑️ '{asset['name']}' deleted.")
                st.rerun()
        with c2:
            if st.button("Cancel", key=f"cancel-delete-{asset['id']}", disabled=saving):
                st.session_state.pop("confirm_delete_asset", None)
                st.rerun()
