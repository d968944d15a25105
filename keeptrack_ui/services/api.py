# keeptrack_ui/services/api.py

import os
import requests
from dotenv import load_dotenv

load_dotenv()

# Base URL of the KeepTrack API, including its prefix
API_URL = os.getenv("KEEPTRACK_API_URL", "http://localhost:8000/api")

REQUEST_TIMEOUT = 10

AUTH_ERROR_STATUSES = (401, 403)


def _auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


def _handle(response, fallback):
    """
    Returns the decoded body on success, otherwise {"error", "status"}
    carrying the server's error message when it sent one.
    """
    try:
        data = response.json()
    except ValueError:
        data = None

    if response.ok:
        return data

    message = fallback
    if isinstance(data, dict) and data.get("error"):
        message = data["error"]
    return {"error": message, "status": response.status_code}


def _request(method, path, fallback, token=None, **kwargs):
    headers = _auth_headers(token) if token else {}
    try:
        res = requests.request(
            method,
            f"{API_URL}{path}",
            headers=headers,
            timeout=REQUEST_TIMEOUT,
            **kwargs
        )
    except requests.RequestException as e:
        return {"error": f"{fallback}: {e}", "status": 0}
    return _handle(res, fallback)


def is_error(result):
    return isinstance(result, dict) and "error" in result and "status" in result


def is_auth_error(result):
    """
    True when the server rejected the token, which forces a logout.
    """
    return is_error(result) and result["status"] in AUTH_ERROR_STATUSES


# -------------------------------
# Authentication-related functions
# -------------------------------

def login_user(email, password):
    """
    Logs in a user and returns {"user", "token"}.
    """
    return _request("POST", "/auth/login", "Login failed", json={"email": email, "password": password})


def register_user(name, email, password):
    return _request(
        "POST",
        "/auth/register",
        "Registration failed",
        json={"name": name, "email": email, "password": password},
    )


def get_profile(token):
    """
    Retrieves the current user; used to validate a stored token.
    """
    return _request("GET", "/auth/me", "Failed to fetch user profile", token=token)


def logout_user(token):
    return _request("POST", "/auth/logout", "Logout failed", token=token)


# -------------------------
# Assets
# -------------------------

def list_assets(token):
    return _request("GET", "/assets", "Failed to fetch assets", token=token)


def get_asset(asset_id, token):
    return _request("GET", f"/assets/{asset_id}", "Failed to fetch asset", token=token)


def create_asset(name, description, token):
    payload = {"name": name, "description": description or None}
    return _request("POST", "/assets", "Failed to create asset", token=token, json=payload)


def update_asset(asset_id, changes, token):
    return _request("PUT", f"/assets/{asset_id}", "Failed to update asset", token=token, json=changes)


def delete_asset(asset_id, token):
    return _request("DELETE", f"/assets/{asset_id}", "Failed to delete asset", token=token)


# -------------------------
# Maintenance Records
# -------------------------

def list_records(asset_id, token):
    """
    Lists the records of one asset, newest service first.
    """
    return _request(
        "GET",
        f"/assets/{asset_id}/maintenance-records",
        "Failed to fetch maintenance records",
        token=token,
    )


def get_record(record_id, token):
    return _request("GET", f"/maintenance-records/{record_id}", "Failed to fetch maintenance record", token=token)


def create_record(payload, token):
    return _request("POST", "/maintenance-records", "Failed to create maintenance record", token=token, json=payload)


def update_record(record_id, changes, token):
    return _request(
        "PUT",
        f"/maintenance-records/{record_id}",
        "Failed to update maintenance record",
        token=token,
        json=changes,
    )


def delete_record(record_id, token):
    return _request("DELETE", f"/maintenance-records/{record_id}", "Failed to delete maintenance record", token=token)


def get_upcoming(token):
    return _request(
        "GET",
        "/maintenance-records/panel/upcoming",
        "Failed to load upcoming maintenances",
        token=token,
    )
