# keeptrack_ui/ui/login.py

import os
import streamlit as st
from dotenv import load_dotenv
from streamlit_cookies_manager import EncryptedCookieManager
from keeptrack_ui.services.api import get_profile, is_error, login_user, logout_user, register_user

load_dotenv()

COOKIE_PASSWORD = os.getenv("COOKIE_PASSWORD", "keeptrack-cookie-secret")

cookies = EncryptedCookieManager(prefix="keeptrack/", password=COOKIE_PASSWORD)
if not cookies.ready():
    st.stop()


def start_session(user, token):
    st.session_state["access_token"] = token
    st.session_state["user"] = user
    cookies["access_token"] = token
    cookies.save()


def logout(message=None):
    """
    Drops the session and the stored token.
    """
    token = st.session_state.get("access_token")
    if token:
        logout_user(token)
    cookies["access_token"] = ""
    cookies.save()
    st.session_state.clear()
    if message:
        st.session_state["flash"] = message


def force_logout():
    logout("Your session has expired. Please log in again.")
    st.rerun()


def restore_session():
    """
    Reuses a token from the cookie once the server confirms it is still valid.
    """
    if "access_token" in st.session_state:
        return True

    token = cookies.get("access_token")
    if not token:
        return False

    result = get_profile(token)
    if is_error(result):
        cookies["access_token"] = ""
        cookies.save()
        return False

    st.session_state["access_token"] = token
    st.session_state["user"] = result["user"]
    return True


def login_page():
    st.title("🔐 KeepTrack")

    flash = st.session_state.pop("flash", None)
    if flash:
        st.info(flash)

    if "show_register" not in st.session_state:
        st.session_state["show_register"] = False

    if st.session_state["show_register"]:
        show_register_form()
    else:
        show_login_form()


def show_login_form():
    with st.form("login_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Log in")

    if submitted:
        with st.spinner("Logging in..."):
            result = login_user(email, password)
            if is_error(result):
                st.error(f"❌ Login failed: {result['error']}")
            else:
                start_session(result["user"], result["token"])
                st.success("✅ Logged in!")
                st.rerun()

    if st.button("Create an account"):
        st.session_state["show_register"] = True
        st.rerun()


def show_register_form():
    st.subheader("📝 Register")

    with st.form("register_form"):
        name = st.text_input("Name")
        email = st.text_input("Email")
        password = st.text_input(
            "Password",
            type="password",
            help="At least 6 characters with a lowercase letter, an uppercase letter and a number."
        )
        confirm = st.text_input("Confirm password", type="password")
        submitted = st.form_submit_button("Register")

    if submitted:
        if password != confirm:
            st.error("❌ Passwords do not match.")
        else:
            with st.spinner("Creating account..."):
                result = register_user(name, email, password)
                if is_error(result):
                    st.error(f"❌ Registration failed: {result['error']}")
                else:
                    start_session(result["user"], result["token"])
                    st.session_state["show_register"] = False
                    st.rerun()

    if st.button("← Back to login"):
        st.session_state["show_register"] = False
        st.rerun()
