import pytest


@pytest.fixture
def owner(register, make_asset):
    _, headers = register()
    asset = make_asset(headers, name="Car")
    return headers, asset


def test_create_record(client, owner):
    headers, asset = owner

    response = client.post("/api/maintenance-records", json={
        "asset_id": asset["id"],
        "service_type": "Oil change",
        "service_date": "2024-01-10",
        "description": "Synthetic 5W-30",
        "cost": 89.9,
        "performed_by": "Garage Joe",
        "next_maintenance_date": "2024-07-10",
        "next_maintenance_notes": "Check filters too",
    }, headers=headers)
    assert response.status_code == 201

    data = response.json()
    assert data["message"] == "Maintenance record created successfully"
    record = data["record"]
    assert record["asset_id"] == asset["id"]
    assert record["service_date"] == "2024-01-10"
    assert record["next_maintenance_date"] == "2024-07-10"
    assert record["cost"] == pytest.approx(89.9)
    assert record["performed_by"] == "Garage Joe"

    fetched = client.get(f"/api/maintenance-records/{record['id']}", headers=headers)
    assert fetched.status_code == 200
    assert fetched.json() == record


def test_create_record_normalizes_timestamps_to_dates(client, owner, make_record):
    headers, asset = owner

    record = make_record(headers, asset["id"], service_date="2024-03-05T14:30:00")
    assert record["service_date"] == "2024-03-05"

    # Offsets are resolved to UTC before the time is dropped.
    late_evening = make_record(headers, asset["id"], service_date="2024-03-05T23:30:00-05:00")
    assert late_evening["service_date"] == "2024-03-06"


@pytest.mark.parametrize("fields, error", [
    ({"service_type": ""}, "Service type is required."),
    ({"service_type": "   "}, "Service type is required."),
    ({"service_date": None}, "Service date is required."),
    ({"service_date": "not-a-date"}, "Invalid service date."),
    ({"service_date": "2024-13-45"}, "Invalid service date."),
    ({"next_maintenance_date": "someday"}, "Invalid next maintenance date."),
    ({"next_maintenance_date": "2024-01-09"}, "Next maintenance date cannot be earlier than the service date."),
])
def test_create_record_validation(client, owner, fields, error):
    headers, asset = owner
    payload = {"asset_id": asset["id"], "service_type": "Oil change", "service_date": "2024-01-10"}
    payload.update(fields)

    response = client.post("/api/maintenance-records", json=payload, headers=headers)
    assert response.status_code == 400
    assert response.json() == {"error": error}


def test_next_date_may_equal_service_date(client, owner, make_record):
    headers, asset = owner

    record = make_record(headers, asset["id"], service_date="2024-01-10", next_maintenance_date="2024-01-10")
    assert record["next_maintenance_date"] == "2024-01-10"


def test_create_record_for_foreign_asset(client, owner, register):
    _, asset = owner
    _, bob = register(email="bob@example.com", name="Bob")

    response = client.post("/api/maintenance-records", json={
        "asset_id": asset["id"], "service_type": "Oil change", "service_date": "2024-01-10"
    }, headers=bob)
    assert response.status_code == 404
    assert response.json() == {"error": "Asset not found or does not belong to the user."}

    missing = client.post("/api/maintenance-records", json={
        "asset_id": 999, "service_type": "Oil change", "service_date": "2024-01-10"
    }, headers=bob)
    assert missing.status_code == 404


def test_foreign_and_missing_records_look_the_same(client, owner, register, make_record):
    headers, asset = owner
    record = make_record(headers, asset["id"])
    _, bob = register(email="bob@example.com", name="Bob")

    foreign = client.get(f"/api/maintenance-records/{record['id']}", headers=bob)
    missing = client.get("/api/maintenance-records/999", headers=bob)

    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json() == {"error": "Maintenance record not found."}

    assert client.put(f"/api/maintenance-records/{record['id']}", json={"cost": 1}, headers=bob).status_code == 404
    assert client.delete(f"/api/maintenance-records/{record['id']}", headers=bob).status_code == 404
    assert client.get(f"/api/assets/{asset['id']}/maintenance-records", headers=bob).status_code == 404


def test_list_records_newest_first(client, owner, make_record):
    headers, asset = owner
    first = make_record(headers, asset["id"], service_date="2024-01-10")
    latest = make_record(headers, asset["id"], service_date="2024-03-01")
    same_day = make_record(headers, asset["id"], service_date="2024-03-01", service_type="Tyres")

    response = client.get(f"/api/assets/{asset['id']}/maintenance-records", headers=headers)
    assert response.status_code == 200
    assert [r["id"] for r in response.json()] == [same_day["id"], latest["id"], first["id"]]


def test_explicit_null_next_date_persists_and_omission_keeps_value(client, owner, make_record):
    headers, asset = owner

    record = make_record(headers, asset["id"], next_maintenance_date=None)
    assert record["next_maintenance_date"] is None

    dated = make_record(headers, asset["id"], next_maintenance_date="2024-06-01")
    response = client.put(f"/api/maintenance-records/{dated['id']}", json={"description": "Topped up"}, headers=headers)
    assert response.status_code == 200
    updated = response.json()["record"]
    assert updated["description"] == "Topped up"
    assert updated["next_maintenance_date"] == "2024-06-01"
    assert updated["service_type"] == "Oil change"

    cleared = client.put(
        f"/api/maintenance-records/{dated['id']}",
        json={"next_maintenance_date": None},
        headers=headers
    )
    assert cleared.json()["record"]["next_maintenance_date"] is None


def test_update_with_empty_next_date_keeps_stored_value(client, owner, make_record):
    headers, asset = owner
    record = make_record(headers, asset["id"], next_maintenance_date="2024-06-01")

    response = client.put(
        f"/api/maintenance-records/{record['id']}",
        json={"next_maintenance_date": "", "performed_by": "Garage Joe"},
        headers=headers
    )
    assert response.status_code == 200
    updated = response.json()["record"]
    assert updated["next_maintenance_date"] == "2024-06-01"
    assert updated["performed_by"] == "Garage Joe"


def test_update_checks_date_order_against_stored_dates(client, owner, make_record):
    headers, asset = owner
    record = make_record(
        headers, asset["id"], service_date="2024-01-10", next_maintenance_date="2024-02-01"
    )

    response = client.put(
        f"/api/maintenance-records/{record['id']}",
        json={"service_date": "2024-02-15"},
        headers=headers
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Next maintenance date cannot be earlier than the service date."}

    unchanged = client.get(f"/api/maintenance-records/{record['id']}", headers=headers).json()
    assert unchanged["service_date"] == "2024-01-10"

    early_next = client.put(
        f"/api/maintenance-records/{record['id']}",
        json={"next_maintenance_date": "2024-01-01"},
        headers=headers
    )
    assert early_next.status_code == 400

    both = client.put(
        f"/api/maintenance-records/{record['id']}",
        json={"service_date": "2024-02-15", "next_maintenance_date": "2024-08-15"},
        headers=headers
    )
    assert both.status_code == 200
    assert both.json()["record"]["service_date"] == "2024-02-15"


@pytest.mark.parametrize("changes, error", [
    ({"service_type": " "}, "Service type cannot be empty."),
    ({"service_type": None}, "Service type cannot be empty."),
    ({"service_date": None}, "Service date is required."),
    ({"service_date": "yesterday"}, "Invalid service date."),
])
def test_update_record_validation(client, owner, make_record, changes, error):
    headers, asset = owner
    record = make_record(headers, asset["id"])

    response = client.put(f"/api/maintenance-records/{record['id']}", json=changes, headers=headers)
    assert response.status_code == 400
    assert response.json() == {"error": error}


def test_update_with_no_fields_returns_record(client, owner, make_record):
    headers, asset = owner
    record = make_record(headers, asset["id"])

    response = client.put(f"/api/maintenance-records/{record['id']}", json={}, headers=headers)
    assert response.status_code == 200
    assert response.json()["record"] == record


def test_delete_record(client, owner, make_record):
    headers, asset = owner
    record = make_record(headers, asset["id"])

    response = client.delete(f"/api/maintenance-records/{record['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Maintenance record deleted successfully."}
    assert client.get(f"/api/maintenance-records/{record['id']}", headers=headers).status_code == 404


# -------------------------------
# Upcoming panel
# -------------------------------

def test_upcoming_uses_latest_record_per_asset_and_type(client, owner, make_record):
    headers, asset = owner
    make_record(headers, asset["id"], service_date="2024-01-01", next_maintenance_date="2024-03-01")
    latest = make_record(headers, asset["id"], service_date="2024-02-01", next_maintenance_date="2024-04-01")

    response = client.get("/api/maintenance-records/panel/upcoming", headers=headers)
    assert response.status_code == 200

    entries = response.json()
    assert len(entries) == 1
    assert entries[0]["id"] == latest["id"]
    assert entries[0]["next_maintenance_date"] == "2024-04-01"
    assert entries[0]["asset_name"] == "Car"


def test_upcoming_skips_pairs_whose_latest_record_has_no_next_date(client, owner, make_record):
    headers, asset = owner
    make_record(headers, asset["id"], service_date="2024-01-01", next_maintenance_date="2024-03-01")
    make_record(headers, asset["id"], service_date="2024-02-01", next_maintenance_date=None)

    response = client.get("/api/maintenance-records/panel/upcoming", headers=headers)
    assert response.json() == []


def test_upcoming_breaks_service_date_ties_by_highest_id(client, owner, make_record):
    headers, asset = owner
    make_record(headers, asset["id"], service_date="2024-02-01", next_maintenance_date="2024-05-01")
    newest = make_record(headers, asset["id"], service_date="2024-02-01", next_maintenance_date="2024-06-01")

    entries = client.get("/api/maintenance-records/panel/upcoming", headers=headers).json()
    assert [e["id"] for e in entries] == [newest["id"]]


def test_upcoming_sorted_soonest_first(client, owner, make_asset, make_record):
    headers, car = owner
    boiler = make_asset(headers, name="Boiler")
    tyres = make_record(headers, car["id"], service_type="Tyres", next_maintenance_date="2024-09-01")
    oil = make_record(headers, car["id"], service_type="Oil change", next_maintenance_date="2024-04-01")
    service = make_record(headers, boiler["id"], service_type="Annual service", next_maintenance_date="2024-06-01")

    entries = client.get("/api/maintenance-records/panel/upcoming", headers=headers).json()
    assert [e["id"] for e in entries] == [oil["id"], service["id"], tyres["id"]]
    assert [e["asset_name"] for e in entries] == ["Car", "Boiler", "Car"]


def test_upcoming_is_scoped_to_caller(client, owner, register, make_asset, make_record):
    headers, asset = owner
    make_record(headers, asset["id"], next_maintenance_date="2024-04-01")

    _, bob = register(email="bob@example.com", name="Bob")
    bobs_asset = make_asset(bob, name="Bike")
    bobs_record = make_record(bob, bobs_asset["id"], next_maintenance_date="2024-05-01")

    entries = client.get("/api/maintenance-records/panel/upcoming", headers=bob).json()
    assert [e["id"] for e in entries] == [bobs_record["id"]]


def test_upcoming_route_is_not_shadowed_by_record_id(client, owner):
    headers, _ = owner

    response = client.get("/api/maintenance-records/panel/upcoming", headers=headers)
    assert response.status_code == 200
    assert response.json() == []
