# =============================================================================
# tests/test_leads.py - Lead Management Tests
# =============================================================================

LEADS = "/api/v1/leads"


def _new_lead(**overrides):
    data = {
        "name": "Pat Porch",
        "email": "pat@example.com",
        "phone": "555-0199",
        "service": "Custom Home Building",
        "message": "Looking to build on a lot we own",
    }
    data.update(overrides)
    return data


class TestCreateLead:
    """POST /leads"""

    def test_new_lead_starts_in_status_new(self, client, admin_headers):
        response = client.post(LEADS, json=_new_lead(), headers=admin_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "New"
        assert body["canvasser_id"] is None

    def test_unknown_salesperson_is_404(self, client, admin_headers):
        response = client.post(LEADS, json=_new_lead(salesperson_id="missing"), headers=admin_headers)
        assert response.status_code == 404

    def test_invalid_email_is_rejected(self, client, admin_headers):
        response = client.post(LEADS, json=_new_lead(email="not-an-email"), headers=admin_headers)
        assert response.status_code == 422

    def test_requires_permission(self, client, outsider_headers):
        assert client.post(LEADS, json=_new_lead(), headers=outsider_headers).status_code == 403


class TestListLeads:
    """GET /leads"""

    def test_newest_first(self, client, admin_headers):
        client.post(LEADS, json=_new_lead(name="First"), headers=admin_headers)
        client.post(LEADS, json=_new_lead(name="Second"), headers=admin_headers)

        names = [lead["name"] for lead in client.get(LEADS, headers=admin_headers).json()]

        assert names == ["Second", "First"]

    def test_search_matches_name_email_or_service(self, client, admin_headers):
        client.post(LEADS, json=_new_lead(name="Alice Deck", email="a@example.com", service="Interior Finishing"), headers=admin_headers)
        client.post(LEADS, json=_new_lead(name="Bob Barn", email="bob@barns.com", service="Commercial Construction"), headers=admin_headers)

        by_name = client.get(LEADS, params={"search": "alice"}, headers=admin_headers).json()
        by_email = client.get(LEADS, params={"search": "barns"}, headers=admin_headers).json()
        by_service = client.get(LEADS, params={"search": "interior"}, headers=admin_headers).json()

        assert [lead["name"] for lead in by_name] == ["Alice Deck"]
        assert [lead["name"] for lead in by_email] == ["Bob Barn"]
        assert [lead["name"] for lead in by_service] == ["Alice Deck"]

    def test_search_ignores_filter_syntax(self, client, admin_headers, lead):
        response = client.get(LEADS, params={"search": "jane),status.eq.(x"}, headers=admin_headers)
        assert response.status_code == 200

    def test_status_filter(self, client, fake_db, admin_headers, lead):
        fake_db.seed("leads", name="Won", email="w@example.com", message="m", status="Completed")

        completed = client.get(LEADS, params={"status": "Completed"}, headers=admin_headers).json()
        everything = client.get(LEADS, params={"status": "all"}, headers=admin_headers).json()

        assert [lead["name"] for lead in completed] == ["Won"]
        assert len(everything) == 2

    def test_unknown_status_filter_is_400(self, client, admin_headers):
        assert client.get(LEADS, params={"status": "Sold"}, headers=admin_headers).status_code == 400


class TestUpdateLead:
    """PUT/PATCH /leads/{id}"""

    def test_status_change(self, client, admin_headers, lead):
        response = client.patch(f"{LEADS}/{lead['id']}/status", json={"status": "Quoted"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["status"] == "Quoted"

    def test_invalid_status_is_400(self, client, admin_headers, lead):
        response = client.patch(f"{LEADS}/{lead['id']}/status", json={"status": "Paid"}, headers=admin_headers)
        assert response.status_code == 400

    def test_partial_update_keeps_other_fields(self, client, admin_headers, lead):
        response = client.put(f"{LEADS}/{lead['id']}", json={"phone": "555-0111"}, headers=admin_headers)

        body = response.json()
        assert body["phone"] == "555-0111"
        assert body["name"] == "Jane Homeowner"

    def test_assign_and_clear_salesperson(self, client, admin_headers, lead, salesperson):
        assigned = client.patch(
            f"{LEADS}/{lead['id']}/salesperson", json={"salesperson_id": salesperson["id"]}, headers=admin_headers
        ).json()
        cleared = client.patch(
            f"{LEADS}/{lead['id']}/salesperson", json={"salesperson_id": None}, headers=admin_headers
        ).json()

        assert assigned["salesperson_id"] == salesperson["id"]
        assert cleared["salesperson_id"] is None

    def test_update_missing_lead_is_404(self, client, admin_headers):
        assert client.put(f"{LEADS}/missing", json={"phone": "1"}, headers=admin_headers).status_code == 404


class TestDeleteLead:
    """DELETE /leads/{id}"""

    def test_delete(self, client, fake_db, admin_headers, lead):
        assert client.delete(f"{LEADS}/{lead['id']}", headers=admin_headers).status_code == 204
        assert fake_db.tables["leads"] == []

    def test_delete_missing_is_404(self, client, admin_headers):
        assert client.delete(f"{LEADS}/missing", headers=admin_headers).status_code == 404

    def test_get_missing_is_404(self, client, admin_headers):
        assert client.get(f"{LEADS}/missing", headers=admin_headers).status_code == 404
