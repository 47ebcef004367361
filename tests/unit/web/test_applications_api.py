"""API tests for application tracking, interviews, contacts and stats."""
import pytest


def _create(client, auth, user, **overrides):
    body = {
        "userId": str(user.id),
        "jobTitle": "Data Engineer",
        "company": "Acme",
        "location": "Austin, TX",
        "applicationDate": "2026-09-14T15:00:00Z",
        "status": "applied",
    }
    body.update(overrides)
    return client.post("/api/applications", json=body, headers=auth)


@pytest.fixture
def application(client, auth, user):
    response = _create(client, auth, user)
    assert response.status_code == 201
    return response.json()


class TestCrud:

    def test_create(self, application):
        assert application["status"] == "applied"
        assert application["applicationDate"] == "2026-09-14T15:00:00+00:00"
        assert [(h["fromStatus"], h["toStatus"]) for h in application["statusHistory"]] == [(None, "applied")]

    def test_default_status_is_saved(self, client, auth, user):
        body ={"userId": str(user.id), "jobTitle": "Analyst", "company": "Globex"}

        data = client.post("/api/applications", json=body, headers=auth).json()
        assert data["status"] == "saved"

    def test_invalid_status_is_422(self, client, auth, user):
        assert _create(client, auth, user, status="ghosted").status_code == 422

    def test_unknown_resume_reference_is_400(self, client, auth, user):
        response = _create(client, auth, user, resumeId="6f1c9a52-3d1e-4b8e-9f0a-1c2d3e4f5a6b")
        assert response.status_code == 400

    def test_status_change_is_recorded(self, client, auth, application):
        url = f"/api/applications/{application['id']}"

        data = client.put(url, json={"status": "interview", "statusNote": "Recruiter call booked"},
                          headers=auth).json()

        assert data["status"] == "interview"
        last = data["statusHistory"][-1]
        assert (last["fromStatus"], last["toStatus"], last["note"]) == ("applied", "interview",
                                                                        "Recruiter call booked")

        unchanged = client.put(url, json={"status": "interview", "notes": "Prep STAR stories"},
                               headers=auth).json()
        assert len(unchanged["statusHistory"]) == 2
        assert unchanged["notes"] == "Prep STAR stories"

    def test_list_with_filters(self, client, auth, user, application):
        _create(client, auth, user, company="Globex", status="offer", applicationDate="2026-10-01T09:00:00Z")

        everything = client.get("/api/applications", params={"userId": str(user.id)}, headers=auth).json()
        assert [a["company"] for a in everything] == ["Globex", "Acme"]

        offers = client.get("/api/applications", params={"userId": str(user.id), "status": "offer"},
                            headers=auth).json()
        assert [a["company"] for a in offers] == ["Globex"]

        september = client.get("/api/applications", headers=auth, params={
            "userId": str(user.id), "start": "2026-09-01T00:00:00Z", "end": "2026-09-30T23:59:59Z",
        }).json()
        assert [a["company"] for a in september] == ["Acme"]

    def test_inverted_date_range_is_400(self, client, auth, user):
        response = client.get("/api/applications", headers=auth, params={
            "userId": str(user.id), "start": "2026-10-01T00:00:00Z", "end": "2026-09-01T00:00:00Z",
        })
        assert response.status_code == 400

    def test_delete(self, client, auth, application):
        url = f"/api/applications/{application['id']}"

        assert client.delete(url, headers=auth).json() == {"success": True}
        assert client.get(url, headers=auth).status_code == 404

    def test_other_user_is_403(self, client, other_user, application):
        response = client.get(f"/api/applications/{application['id']}",
                              headers={"X-User-Id": str(other_user.id)})
        assert response.status_code == 403


class TestInterviewsAndContacts:

    def test_add_interview_with_contacts(self, client, auth, application):
        response = client.post(f"/api/applications/{application['id']}/interviews", headers=auth, json={
            "date": "2026-09-20T14:00:00-05:00",
            "type": "phone screen",
            "contacts": [{"name": "Pat Lee", "title": "Recruiter"}],
        })

        assert response.status_code == 201
        interview = response.json()["interviews"][0]
        assert interview["date"] == "2026-09-20T19:00:00+00:00"
        assert interview["contacts"][0]["name"] == "Pat Lee"

    def test_add_contact(self, client, auth, application):
        response = client.post(f"/api/applications/{application['id']}/contacts", headers=auth,
                               json={"name": "Sam Roe", "email": "sam@acme.com"})

        contact = response.json()["contacts"][0]
        assert contact["name"] == "Sam Roe"
        assert contact["id"]

    def test_contact_requires_name(self, client, auth, application):
        response = client.post(f"/api/applications/{application['id']}/contacts", headers=auth,
                               json={"name": ""})
        assert response.status_code == 422


class TestStats:

    def test_rates_exclude_saved(self, client, auth, user):
        _create(client, auth, user, company="Acme", status="applied", applicationDate="2026-08-03T10:00:00Z")
        _create(client, auth, user, company="Acme", status="interview", applicationDate="2026-09-03T10:00:00Z")
        _create(client, auth, user, company="Globex", status="offer", applicationDate="2026-09-10T10:00:00Z")
        _create(client, auth, user, company="Initech", status="rejected", applicationDate="2026-09-12T10:00:00Z")
        _create(client, auth, user, company="Umbrella", status="saved", applicationDate="2026-10-01T10:00:00Z")

        stats = client.get("/api/applications/stats", params={"userId": str(user.id)}, headers=auth).json()

        assert stats["totalApplications"] == 5
        assert stats["byStatus"]["applied"] == 1
        assert stats["byCompany"]["Acme"] == 2
        assert stats["byMonth"] == {"2026-08": 1, "2026-09": 3, "2026-10": 1}
        assert stats["interviewRate"] == 50.0
        assert stats["offerRate"] == 25.0

    def test_no_applications(self, client, auth, user):
        stats = client.get("/api/applications/stats", params={"userId": str(user.id)}, headers=auth).json()

        assert stats["totalApplications"] == 0
        assert stats["interviewRate"] == 0.0
