# =============================================================================
# tests/test_tasks.py - Task Tests
# =============================================================================

TASKS = "/api/v1/tasks"


class TestTasks:
    """/tasks"""

    def _create(self, client, headers, salesperson_id, **overrides):
        data = {"salesperson_id": salesperson_id, "title": "Call back about estimate"}
        data.update(overrides)
        return client.post(TASKS, json=data, headers=headers)

    def test_create_defaults(self, client, admin_headers, salesperson, lead):
        response = self._create(client, admin_headers, salesperson["id"], lead_id=lead["id"], due_date="2025-03-01")

        assert response.status_code == 201
        body = response.json()
        assert body["completed"] is False
        assert body["priority"] == 2
        assert body["due_date"] == "2025-03-01"

    def test_priority_out_of_range_is_422(self, client, admin_headers, salesperson):
        assert self._create(client, admin_headers, salesperson["id"], priority=4).status_code == 422

    def test_blank_title_is_400(self, client, admin_headers, salesperson):
        assert self._create(client, admin_headers, salesperson["id"], title="   ").status_code == 400

    def test_unknown_salesperson_is_404(self, client, admin_headers):
        response = self._create(client, admin_headers, "missing")

        assert response.status_code == 404
        assert response.json()["detail"] == "Salesperson not found"

    def test_unknown_lead_is_404(self, client, admin_headers, salesperson):
        response = self._create(client, admin_headers, salesperson["id"], lead_id="missing")
        assert response.json()["detail"] == "Lead not found"

    def test_status_filter_and_due_date_order(self, client, admin_headers, salesperson):
        later = self._create(client, admin_headers, salesperson["id"], title="Later", due_date="2025-05-01").json()
        self._create(client, admin_headers, salesperson["id"], title="Sooner", due_date="2025-04-01")
        self._create(client, admin_headers, salesperson["id"], title="Someday")
        client.post(f"{TASKS}/{later['id']}/toggle-complete", headers=admin_headers)

        pending = client.get(TASKS, params={"status": "pending"}, headers=admin_headers).json()
        completed = client.get(TASKS, params={"status": "completed"}, headers=admin_headers).json()

        assert [t["title"] for t in pending] == ["Sooner", "Someday"]
        assert [t["title"] for t in completed] == ["Later"]

    def test_invalid_status_filter_is_400(self, client, admin_headers):
        assert client.get(TASKS, params={"status": "overdue"}, headers=admin_headers).status_code == 400

    def test_toggle_flips_back(self, client, admin_headers, salesperson):
        task = self._create(client, admin_headers, salesperson["id"]).json()

        first = client.post(f"{TASKS}/{task['id']}/toggle-complete", headers=admin_headers).json()
        second = client.post(f"{TASKS}/{task['id']}/toggle-complete", headers=admin_headers).json()

        assert first["completed"] is True
        assert second["completed"] is False

    def test_update_cannot_unassign(self, client, admin_headers, salesperson):
        task = self._create(client, admin_headers, salesperson["id"]).json()

        response = client.put(f"{TASKS}/{task['id']}", json={"salesperson_id": ""}, headers=admin_headers)

        assert response.status_code == 400

    def test_update_and_delete(self, client, admin_headers, salesperson):
        task = self._create(client, admin_headers, salesperson["id"]).json()

        updated = client.put(f"{TASKS}/{task['id']}", json={"priority": 3}, headers=admin_headers).json()
        assert updated["priority"] == 3

        assert client.delete(f"{TASKS}/{task['id']}", headers=admin_headers).status_code == 204
        assert client.get(f"{TASKS}/{task['id']}", headers=admin_headers).status_code == 404
