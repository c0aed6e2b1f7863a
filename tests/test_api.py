"""HTTP API tests through FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from crewboard.main import app

MONDAY = "2024-06-03"


@pytest.fixture
def client():
    """Fresh in-memory board per test (the lifespan builds a new store)"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def team_id(client):
    response = client.post("/teams", json={"name": "Install Team A"})
    assert response.status_code == 200
    return response.json()["id"]


@pytest.fixture
def booking(client, team_id):
    response = client.post(
        "/bookings",
        json={"date": MONDAY, "teamId": team_id, "startTime": "09:00", "customerName": "Smith Residence"},
    )
    assert response.status_code == 200
    return response.json()


class TestHealth:
    def test_root_and_health(self, client):
        assert client.get("/").status_code == 200
        assert client.get("/health").json() == {"status": "healthy"}

    def test_slots(self, client):
        data = client.get("/schedule/slots").json()
        assert data["slots"][0] == "08:00"
        assert data["slots"][-1] == "17:30"
        assert data["slotMinutes"] == 30


class TestBookings:
    def test_create_uses_default_duration(self, booking):
        assert booking["id"]
        assert booking["durationHours"] == 1.5
        assert booking["jobType"] == "other"

    def test_create_conflict(self, client, team_id, booking):
        response = client.post("/bookings", json={"date": MONDAY, "teamId": team_id, "startTime": "10:00"})
        assert response.status_code == 409
        assert response.json()["detail"] == "This team already has a booking at that time."

    def test_create_outside_hours(self, client, team_id):
        response = client.post(
            "/bookings", json={"date": MONDAY, "teamId": team_id, "startTime": "17:30", "durationHours": 1}
        )
        assert response.status_code == 409
        assert response.json()["detail"] == "Outside working hours."

    def test_create_for_unknown_team(self, client):
        response = client.post("/bookings", json={"date": MONDAY, "teamId": "team-missing", "startTime": "09:00"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Team not found"

    def test_invalid_fields_are_422(self, client, team_id):
        base = {"date": MONDAY, "teamId": team_id, "startTime": "09:00"}
        assert client.post("/bookings", json={**base, "startTime": "25:00"}).status_code == 422
        assert client.post("/bookings", json={**base, "durationHours": 0}).status_code == 422
        assert client.post("/bookings", json={**base, "clientEmail": "not-an-email"}).status_code == 422

    def test_decimal_comma_duration(self, client, team_id):
        response = client.post(
            "/bookings", json={"date": MONDAY, "teamId": team_id, "startTime": "13:00", "durationHours": "2,5"}
        )
        assert response.status_code == 200
        assert response.json()["durationHours"] == 2.5

    def test_week_listing(self, client, booking):
        listed = client.get("/bookings", params={"date": "2024-06-07"}).json()
        assert [b["id"] for b in listed] == [booking["id"]]
        assert client.get("/bookings", params={"date": "2024-06-10"}).json() == []

    def test_patch_changes_only_sent_fields(self, client, booking):
        response = client.patch(f"/bookings/{booking['id']}", json={"notes": "Gate code 1234"})
        assert response.status_code == 200
        data = response.json()
        assert data["notes"] == "Gate code 1234"
        assert data["customerName"] == "Smith Residence"
        assert data["startTime"] == "09:00"

    def test_patch_into_conflict(self, client, team_id, booking):
        other = client.post("/bookings", json={"date": MONDAY, "teamId": team_id, "startTime": "11:00"}).json()
        response = client.patch(f"/bookings/{other['id']}", json={"startTime": "10:00"})
        assert response.status_code == 409
        assert client.get(f"/bookings/{other['id']}").json()["startTime"] == "11:00"

    @pytest.mark.parametrize("field", ["date", "teamId", "startTime", "durationHours", "crew", "products", "jobType"])
    def test_patch_cannot_clear_a_field(self, client, booking, field):
        response = client.patch(f"/bookings/{booking['id']}", json={field: None})
        assert response.status_code == 422
        assert client.get(f"/bookings/{booking['id']}").json() == booking

    def test_patch_with_blank_start_time(self, client, booking):
        assert client.patch(f"/bookings/{booking['id']}", json={"startTime": ""}).status_code == 422
        assert client.get(f"/bookings/{booking['id']}").json()["startTime"] == "09:00"

    @pytest.mark.parametrize("hours", ["nan", "inf", "-inf", "NaN", "two"])
    def test_duration_must_be_a_finite_number(self, client, team_id, booking, hours):
        response = client.post(
            "/bookings", json={"date": MONDAY, "teamId": team_id, "startTime": "13:00", "durationHours": hours}
        )
        assert response.status_code == 422
        assert client.patch(f"/bookings/{booking['id']}", json={"durationHours": hours}).status_code == 422
        assert client.get(f"/bookings/{booking['id']}").json()["durationHours"] == 1.5
        assert [b["id"] for b in client.get("/bookings", params={"date": MONDAY}).json()] == [booking["id"]]

    def test_delete(self, client, booking):
        assert client.delete(f"/bookings/{booking['id']}").status_code == 200
        assert client.get(f"/bookings/{booking['id']}").status_code == 404
        assert client.delete(f"/bookings/{booking['id']}").status_code == 404


class TestReschedule:
    def test_move(self, client, team_id, booking):
        response = client.post(
            f"/bookings/{booking['id']}/move", json={"date": MONDAY, "teamId": team_id, "startTime": "13:00"}
        )
        assert response.status_code == 200
        assert response.json()["startTime"] == "13:00"
        assert response.json()["durationHours"] == 1.5

    def test_move_onto_another_booking(self, client, team_id, booking):
        client.post("/bookings", json={"date": MONDAY, "teamId": team_id, "startTime": "13:00"})
        response = client.post(
            f"/bookings/{booking['id']}/move", json={"date": MONDAY, "teamId": team_id, "startTime": "13:30"}
        )
        assert response.status_code == 409
        assert response.json()["detail"] == "Overlaps with another booking for that team."

    def test_resize_and_step(self, client, booking):
        resized = client.post(f"/bookings/{booking['id']}/resize", json={"span": 4})
        assert resized.json()["durationHours"] == 2
        stepped = client.post(f"/bookings/{booking['id']}/step", json={"direction": -1})
        assert stepped.json()["durationHours"] == 1.5

    def test_invalid_resize_and_step(self, client, booking):
        assert client.post(f"/bookings/{booking['id']}/resize", json={"span": 0}).status_code == 422
        assert client.post(f"/bookings/{booking['id']}/step", json={"direction": 2}).status_code == 422

    def test_resize_past_closing(self, client, team_id):
        late = client.post(
            "/bookings", json={"date": MONDAY, "teamId": team_id, "startTime": "17:30", "durationHours": 0.5}
        ).json()
        response = client.post(f"/bookings/{late['id']}/resize", json={"span": 2})
        assert response.status_code == 409
        assert client.get(f"/bookings/{late['id']}").json()["durationHours"] == 0.5


class TestSchedule:
    def test_week_grid(self, client, team_id, booking):
        data = client.get("/schedule", params={"date": "2024-06-05", "view": "week"}).json()
        assert data["label"] == "Week of Mon 3 Jun - Sat 8 Jun"
        assert data["weekStart"] == MONDAY
        assert len(data["days"]) == 6

        column = data["days"][0]["columns"][team_id]
        assert column[2]["kind"] == "occupied-start"
        assert column[2]["rowSpan"] == 3
        assert column[2]["booking"]["id"] == booking["id"]
        assert column[3]["kind"] == "occupied-continuation"
        assert column[5]["kind"] == "empty"

    def test_day_grid(self, client, team_id):
        data = client.get("/schedule", params={"date": MONDAY}).json()
        assert data["label"] == "Mon 3 Jun 2024"
        assert [day["date"] for day in data["days"]] == [MONDAY]
        assert [team["id"] for team in data["teams"]] == [team_id]

    def test_crew_availability(self, client, team_id):
        other_team = client.post("/teams", json={"name": "Install Team B"}).json()["id"]
        person = client.post("/people", json={"name": "Alice"}).json()["id"]
        client.post(
            "/bookings", json={"date": MONDAY, "teamId": other_team, "startTime": "09:00", "crew": [person]}
        )
        data = client.get("/schedule/crew-availability", params={"date": MONDAY, "teamId": team_id}).json()
        assert data["unavailable"] == [person]
        data = client.get("/schedule/crew-availability", params={"date": MONDAY, "teamId": other_team}).json()
        assert data["unavailable"] == []


class TestReferenceData:
    def test_team_delete_cascades(self, client, team_id, booking):
        assert client.delete(f"/teams/{team_id}").status_code == 200
        assert client.get("/teams").json() == []
        assert client.get("/bookings", params={"date": MONDAY}).json() == []
        assert client.delete(f"/teams/{team_id}").status_code == 404

    def test_team_members_and_lead(self, client):
        alice = client.post("/people", json={"name": "Alice", "phone": "+61 400 123 456"}).json()
        ben = client.post("/people", json={"name": "Ben"}).json()
        assert alice["phone"] == "+61400123456"

        team = client.post("/teams", json={"name": "A", "teamLeadId": alice["id"], "memberIds": [ben["id"]]}).json()
        assert team["memberIds"] == [ben["id"], alice["id"]]
        assert [m["name"] for m in team["members"]] == ["Ben", "Alice"]

        renamed = client.patch(f"/teams/{team['id']}", json={"name": "Install Team A"}).json()
        assert renamed["name"] == "Install Team A"
        assert renamed["teamLeadId"] == alice["id"]

        client.delete(f"/people/{alice['id']}")
        team = client.get(f"/teams/{team['id']}").json()
        assert team["memberIds"] == [ben["id"]]
        assert team["teamLeadId"] is None

    def test_people_update(self, client):
        person = client.post("/people", json={"name": "Sam", "role": "sales"}).json()
        updated = client.patch(f"/people/{person['id']}", json={"role": "admin"}).json()
        assert updated["name"] == "Sam"
        assert updated["role"] == "admin"
        assert client.patch("/people/p-missing", json={"role": "admin"}).status_code == 404

    def test_products_crud(self, client):
        product = client.post("/products", json={"name": "Roller Blind", "category": "Blinds"}).json()
        updated = client.patch(f"/products/{product['id']}", json={"subType": "Blockout"}).json()
        assert updated["category"] == "Blinds"
        assert updated["subType"] == "Blockout"
        assert [p["name"] for p in client.get("/products").json()] == ["Roller Blind"]
        assert client.delete(f"/products/{product['id']}").status_code == 200
        assert client.get("/products").json() == []

    def test_blank_names_are_rejected(self, client):
        assert client.post("/people", json={"name": "  "}).status_code == 422
        assert client.post("/products", json={"name": ""}).status_code == 422

    def test_blank_names_cannot_be_set_by_update(self, client, team_id):
        person = client.post("/people", json={"name": "Sam"}).json()
        product = client.post("/products", json={"name": "Roller Blind"}).json()

        assert client.patch(f"/people/{person['id']}", json={"name": "  "}).status_code == 422
        assert client.patch(f"/products/{product['id']}", json={"name": ""}).status_code == 422
        assert client.patch(f"/teams/{team_id}", json={"name": " "}).status_code == 422

        assert client.get("/people").json()[0]["name"] == "Sam"
        assert client.get("/products").json()[0]["name"] == "Roller Blind"
        assert client.get(f"/teams/{team_id}").json()["name"] == "Install Team A"
