# =============================================================================
# tests/test_canvasser_portal.py - Canvasser Portal Tests
# =============================================================================
# Everything under /canvasser is scoped to the signed-in, active canvasser:
# profile, visit logging, door-to-door leads, the daily route and the time
# clock.
# =============================================================================

from datetime import datetime, timedelta, timezone

from app.modules.canvasser_portal.service import CanvasserPortalService

PORTAL = "/api/v1/canvasser"


class TestPortalAccess:

    def test_me_returns_own_profile(self, client, canvasser, canvasser_headers):
        response = client.get(f"{PORTAL}/me", headers=canvasser_headers)

        assert response.status_code == 200
        assert response.json()["id"] == canvasser["id"]

    def test_admin_without_canvasser_row_is_403(self, client, admin_headers):
        response = client.get(f"{PORTAL}/me", headers=admin_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "You need canvasser access to view this area."

    def test_no_token(self, client):
        assert client.get(f"{PORTAL}/me").status_code in (401, 403)


class TestFieldActivities:
    """/canvasser/activities"""

    def test_log_visit_updates_own_stats(self, client, fake_db, canvasser, canvasser_headers):
        response = client.post(
            f"{PORTAL}/activities", json={"address": "4 Pine Ct", "result": "Call Back"}, headers=canvasser_headers
        )

        assert response.status_code == 201
        assert response.json()["canvasser_id"] == canvasser["id"]
        stored = fake_db.tables["canvassers"][0]
        assert (stored["total_visits"], stored["leads_generated"]) == (1, 1)

    def test_canvasser_id_in_body_is_ignored(self, client, fake_db, canvasser, canvasser_headers):
        other = fake_db.seed("canvassers", name="Other", email="other@pines.test", active=True)

        body = client.post(f"{PORTAL}/activities", json={
            "address": "4 Pine Ct", "result": "maybe", "canvasser_id": other["id"]
        }, headers=canvasser_headers).json()

        assert body["canvasser_id"] == canvasser["id"]

    def test_lists_only_own_activities(self, client, fake_db, canvasser, canvasser_headers):
        fake_db.seed("canvassing_activities", canvasser_id="someone-else", address="9 Elm", result="maybe",
                     visit_date="2025-01-01T00:00:00+00:00")
        client.post(f"{PORTAL}/activities", json={"address": "4 Pine Ct", "result": "not_home"},
                    headers=canvasser_headers)

        mine = client.get(f"{PORTAL}/activities", headers=canvasser_headers).json()

        assert [a["address"] for a in mine] == ["4 Pine Ct"]


class TestFieldLeads:
    """POST /canvasser/leads"""

    def _lead(self, **overrides):
        data = {
            "address": "77 Birch Rd",
            "name": "Homer Owner",
            "email": "homer@example.com",
            "phone": "555-0142",
            "service": "Roofing",
        }
        data.update(overrides)
        return data

    def test_creates_lead_and_activity(self, client, fake_db, canvasser, canvasser_headers):
        response = client.post(f"{PORTAL}/leads", json=self._lead(), headers=canvasser_headers)

        assert response.status_code == 201
        lead = fake_db.tables["leads"][0]
        activity = fake_db.tables["canvassing_activities"][0]
        assert response.json() == {"lead_id": lead["id"], "activity_id": activity["id"]}
        assert lead["canvasser_id"] == canvasser["id"]
        assert lead["status"] == "New"
        assert lead["message"] == "Canvassed at 77 Birch Rd"
        assert activity["notes"] == "Lead generated: Homer Owner - Roofing"
        assert activity["requires_followup"] is True
        assert fake_db.tables["canvassers"][0]["leads_generated"] == 1

    def test_callback_result_does_not_require_followup(self, client, fake_db, canvasser_headers):
        client.post(f"{PORTAL}/leads", json=self._lead(result="callback", message="Call after 5pm"),
                    headers=canvasser_headers)

        assert fake_db.tables["leads"][0]["message"] == "Call after 5pm"
        assert fake_db.tables["canvassing_activities"][0]["requires_followup"] is False

    def test_invalid_result_creates_nothing(self, client, fake_db, canvasser_headers):
        response = client.post(f"{PORTAL}/leads", json=self._lead(result="unsure"), headers=canvasser_headers)

        assert response.status_code == 400
        assert fake_db.tables.get("leads", []) == []


class TestSchedule:
    """/canvasser/schedule"""

    def test_returns_own_items_for_day(self, client, fake_db, canvasser, canvasser_headers):
        fake_db.seed("daily_schedules", canvasser_id=canvasser["id"], address="1 A St",
                     assigned_date="2025-03-10", status="pending")
        fake_db.seed("daily_schedules", canvasser_id=canvasser["id"], address="2 B St",
                     assigned_date="2025-03-11", status="pending")
        fake_db.seed("daily_schedules", canvasser_id="someone-else", address="3 C St",
                     assigned_date="2025-03-10", status="pending")

        items = client.get(f"{PORTAL}/schedule", params={"date": "2025-03-10"}, headers=canvasser_headers).json()

        assert [i["address"] for i in items] == ["1 A St"]

    def test_complete_item(self, client, fake_db, canvasser, canvasser_headers):
        item = fake_db.seed("daily_schedules", canvasser_id=canvasser["id"], address="1 A St",
                            assigned_date="2025-03-10", status="pending")

        response = client.post(f"{PORTAL}/schedule/{item['id']}", json={"status": "completed", "notes": " done "},
                               headers=canvasser_headers)

        assert response.status_code == 200
        assert response.json()["status"] == "completed"
        assert response.json()["notes"] == "done"
        assert response.json()["completion_time"] is not None

    def test_already_finished_item_is_409(self, client, fake_db, canvasser, canvasser_headers):
        item = fake_db.seed("daily_schedules", canvasser_id=canvasser["id"], address="1 A St",
                            assigned_date="2025-03-10", status="skipped")

        response = client.post(f"{PORTAL}/schedule/{item['id']}", json={"status": "completed"},
                               headers=canvasser_headers)

        assert response.status_code == 409

    def test_other_canvassers_item_is_404(self, client, fake_db, canvasser_headers):
        item = fake_db.seed("daily_schedules", canvasser_id="someone-else", address="1 A St",
                            assigned_date="2025-03-10", status="pending")

        response = client.post(f"{PORTAL}/schedule/{item['id']}", json={"status": "completed"},
                               headers=canvasser_headers)

        assert response.status_code == 404

    def test_invalid_status_is_400(self, client, fake_db, canvasser, canvasser_headers):
        item = fake_db.seed("daily_schedules", canvasser_id=canvasser["id"], address="1 A St",
                            assigned_date="2025-03-10", status="pending")

        response = client.post(f"{PORTAL}/schedule/{item['id']}", json={"status": "pending"},
                               headers=canvasser_headers)

        assert response.status_code == 400


class TestTimeClock:
    """/canvasser/time"""

    def test_clock_in_and_out(self, client, fake_db, canvasser_headers):
        clocked_in = client.post(f"{PORTAL}/time/clock-in", headers=canvasser_headers)
        clocked_out = client.post(f"{PORTAL}/time/clock-out", headers=canvasser_headers)

        assert clocked_in.status_code == 201
        assert clocked_out.status_code == 200
        assert clocked_out.json()["clock_out"] is not None
        assert clocked_out.json()["total_hours"] >= 0

    def test_double_clock_in_is_409(self, client, canvasser_headers):
        client.post(f"{PORTAL}/time/clock-in", headers=canvasser_headers)

        response = client.post(f"{PORTAL}/time/clock-in", headers=canvasser_headers)

        assert response.status_code == 409
        assert response.json()["detail"] == "Already clocked in"

    def test_clock_out_without_open_entry_is_409(self, client, canvasser_headers):
        response = client.post(f"{PORTAL}/time/clock-out", headers=canvasser_headers)

        assert response.status_code == 409
        assert response.json()["detail"] == "Not clocked in"

    def test_hours_are_rounded(self, fake_db, canvasser):
        service = CanvasserPortalService(fake_db, canvasser)
        start = datetime(2025, 3, 10, 8, 0, tzinfo=timezone.utc)

        service.clock_in(now=start)
        entry = service.clock_out(now=start + timedelta(hours=2, minutes=20))

        assert entry.total_hours == 2.33

    def test_summary_counts_open_session(self, fake_db, canvasser):
        service = CanvasserPortalService(fake_db, canvasser)
        day = datetime(2025, 3, 10, 8, 0, tzinfo=timezone.utc)
        service.clock_in(now=day - timedelta(days=1))
        service.clock_out(now=day - timedelta(days=1) + timedelta(hours=5))
        service.clock_in(now=day)
        service.clock_out(now=day + timedelta(hours=3))
        service.clock_in(now=day + timedelta(hours=4))

        summary = service.time_summary(now=day + timedelta(hours=5, minutes=30))

        assert summary.active_entry is not None
        assert len(summary.entries) == 3
        assert summary.today_hours == 4.5

    def test_summary_endpoint(self, client, canvasser_headers):
        client.post(f"{PORTAL}/time/clock-in", headers=canvasser_headers)

        body = client.get(f"{PORTAL}/time", headers=canvasser_headers).json()

        assert body["active_entry"] is not None
        assert body["today_hours"] >= 0
