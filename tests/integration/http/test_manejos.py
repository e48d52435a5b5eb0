from __future__ import annotations


async def create_manejo(client, **payload) -> dict:
    body = {"title": "vermifugação", "planned_date": "2024-01-01", **payload}
    response = await client.post("/api/v1/manejos/", json=body)
    assert response.status_code == 201, response.text
    return response.json()


async def test_recurring_manejo_flow(client):
    created = await create_manejo(
        client, rule={"recurrence": "WEEKLY", "weekdays": [1], "duration_days": 21}
    )
    assert created["title"] == "VERMIFUGAÇÃO"
    assert created["rule"]["recurrence"] == "WEEKLY"
    assert created["rule"]["reference_start_date"] == "2024-01-01"

    calendar = await client.get(
        "/api/v1/manejos/calendar", params={"start": "2024-01-01", "end": "2024-03-31"}
    )
    assert calendar.status_code == 200
    dates = [occ["date"] for occ in calendar.json()["occurrences"]]
    assert dates == ["2024-01-01", "2024-01-08", "2024-01-15", "2024-01-22"]
    assert calendar.json()["monthly_totals"] == {"2024-01": 4}

    done = await client.post(
        f"/api/v1/manejos/{created['id']}/complete",
        json={"execution_date": "2024-01-01", "collaborator": "ana"},
    )
    assert done.status_code == 200
    body = done.json()
    assert body["completed"]["status"] == "DONE"
    assert body["next_manejo"]["planned_date"] == "2024-01-08"
    assert body["next_manejo"]["rule"]["occurrence_count"] == 1

    again = await client.post(f"/api/v1/manejos/{created['id']}/complete", json={})
    assert again.status_code == 409


async def test_create_rejects_date_that_breaks_rule(client):
    response = await client.post(
        "/api/v1/manejos/",
        json={
            "title": "tosquia",
            "planned_date": "2024-01-02",
            "rule": {"recurrence": "MONTHLY", "day_of_month": 15},
        },
    )
    assert response.status_code == 422
    body = response.json()
    assert body["details"]["reason"] == "day_of_month_mismatch"
    assert body["details"]["suggested_date"] == "2024-02-15"


async def test_validate_date_endpoint(client):
    response = await client.post(
        "/api/v1/manejos/validate-date",
        json={"rule": {"recurrence": "YEARLY", "months": [4]}, "date": "2024-01-10"},
    )
    assert response.status_code == 200
    assert response.json() == {
        "valid": False,
        "reason": "month_not_selected",
        "suggested_date": "2024-05-01",
    }


async def test_update_and_delete(client):
    created = await create_manejo(client, rule={"recurrence": "DAILY", "interval_days": 2})
    updated = await client.put(
        f"/api/v1/manejos/{created['id']}",
        json={"planned_time": "14:30", "rule": {"recurrence": "DAILY", "interval_days": 3}},
    )
    assert updated.status_code == 200
    body = updated.json()
    assert body["planned_time"] == "14:30"
    assert body["rule"]["interval_days"] == 3
    assert body["edited_by_manager"] is True

    listed = await client.get("/api/v1/manejos/", params={"view": "all"})
    assert [m["id"] for m in listed.json()] == [created["id"]]

    deleted = await client.delete(f"/api/v1/manejos/{created['id']}")
    assert deleted.status_code == 204
    assert (await client.get(f"/api/v1/manejos/{created['id']}")).status_code == 404


async def test_targets_default_to_active_flock(client):
    for tag, status in (("001", "ACTIVE"), ("002", "DECEASED")):
        response = await client.post(
            "/api/v1/sheep/", json={"tag": tag, "sex": "FEMALE", "status": status}
        )
        assert response.status_code == 201
    created = await create_manejo(client)
    targets = await client.get(f"/api/v1/manejos/{created['id']}/targets")
    assert targets.status_code == 200
    assert [s["tag"] for s in targets.json()] == ["001"]


async def test_unknown_rule_is_rejected(client):
    response = await client.post(
        "/api/v1/manejos/",
        json={"title": "x", "planned_date": "2024-01-01", "rule": {"recurrence": "HOURLY"}},
    )
    assert response.status_code == 422
