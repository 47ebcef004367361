"""
API tests for the retirement endpoints: documents, plans, advisor slots and
incentives.
"""
import pytest

from botocore.exceptions import ClientError

SLOT = "2026-11-02T10:00:00Z"


def _upload(client, auth, user, name="statement.pdf", content=b"%PDF-1.4 statement"):
    return client.post(
        "/api/retirement/document/upload",
        headers=auth,
        files={"file": (name, content, "application/pdf")},
        data={"userId": str(user.id)},
    )


def _plan_body(user, document_id, slot=SLOT, **overrides):
    body = {
        "userId": str(user.id),
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane.doe@example.com",
        "phone": "555-123-4567",
        "age": 55,
        "retirementAge": 65,
        "currentSavings": 250000,
        "hasAdvisor": False,
        "documentIds": [document_id],
        "appointmentDateTime": slot,
    }
    body.update(overrides)
    return body


@pytest.fixture
def document_id(client, auth, user):
    response = _upload(client, auth, user)
    assert response.status_code == 201
    return response.json()["id"]


class TestAuthentication:

    def test_health(self, client):
        response = client.get("/health")
        assert response.json() == {"status": "healthy", "service": "maxjoboffers-api"}

    def test_missing_header_is_401(self, client, user):
        response = client.get(f"/api/retirement/plans/user/{user.id}")

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Not authorized",
                                   "type": "AuthenticationException"}

    def test_unknown_user_is_401(self, client):
        response = client.get("/api/retirement/incentives",
                              headers={"X-User-Id": "00000000-0000-0000-0000-000000000000"})
        # Incentives are public
        assert response.status_code == 200

        response = client.get("/api/retirement/plans/user/00000000-0000-0000-0000-000000000000",
                              headers={"X-User-Id": "00000000-0000-0000-0000-000000000000"})
        assert response.status_code == 401

    def test_other_users_plans_are_403(self, client, auth, other_user):
        response = client.get(f"/api/retirement/plans/user/{other_user.id}", headers=auth)
        assert response.status_code == 403


class TestDocumentUpload:

    def test_upload_stores_under_user_prefix(self, client, auth, user, uploader):
        response = _upload(client, auth, user)

        assert response.status_code == 201
        data = response.json()
        assert data["fileName"] == "statement.pdf"
        assert data["fileSize"] == len(b"%PDF-1.4 statement")
        assert data["fileUrl"].startswith(
            f"https://test-bucket.s3.amazonaws.com/retirement-documents/{user.id}/")

        key = uploader.upload_bytes.call_args[0][1]
        assert key.startswith(f"retirement-documents/{user.id}/")
        assert key.endswith(".pdf")

    def test_disallowed_extension_is_400(self, client, auth, user, uploader):
        response = _upload(client, auth, user, name="payload.exe")

        assert response.status_code == 400
        uploader.upload_bytes.assert_not_called()

    def test_empty_file_is_400(self, client, auth, user):
        assert _upload(client, auth, user, content=b"").status_code == 400

    def test_upload_for_other_user_is_403(self, client, auth, other_user):
        response = _upload(client, auth, other_user)
        assert response.status_code == 403

    def test_storage_failure_is_502(self, client, auth, user, uploader):
        uploader.upload_bytes.side_effect = ClientError(
            {"Error": {"Code": "NoSuchBucket", "Message": "missing"}}, "PutObject")

        response = _upload(client, auth, user)
        assert response.status_code == 502
        assert response.json()["type"] == "StorageException"


class TestPlans:

    def test_create_plan_starts_pending(self, client, auth, user, document_id):
        response = client.post("/api/retirement/plan", json=_plan_body(user, document_id), headers=auth)

        assert response.status_code == 201
        plan = response.json()
        assert plan["status"] == "pending"
        assert plan["appointmentConfirmed"] is False
        assert plan["appointmentDateTime"] == "2026-11-02T10:00:00+00:00"
        assert plan["documentIds"] == [document_id]
        assert plan["currentSavings"] == 250000.0

    def test_plan_requires_documents(self, client, auth, user):
        body = _plan_body(user, "x")
        body["documentIds"] = []

        assert client.post("/api/retirement/plan", json=body, headers=auth).status_code == 422

    def test_unknown_document_is_400(self, client, auth, user):
        body = _plan_body(user, "6f1c9a52-3d1e-4b8e-9f0a-1c2d3e4f5a6b")
        assert client.post("/api/retirement/plan", json=body, headers=auth).status_code == 400

    def test_retirement_age_must_exceed_age(self, client, auth, user, document_id):
        body = _plan_body(user, document_id, age=66, retirementAge=65)
        assert client.post("/api/retirement/plan", json=body, headers=auth).status_code == 422

    def test_get_and_list(self, client, auth, user, document_id):
        created = client.post("/api/retirement/plan", json=_plan_body(user, document_id), headers=auth).json()

        fetched = client.get(f"/api/retirement/plan/{created['id']}", headers=auth)
        assert fetched.json()["email"] == "jane.doe@example.com"

        listed = client.get(f"/api/retirement/plans/user/{user.id}", headers=auth).json()
        assert [p["id"] for p in listed] == [created["id"]]

    def test_invalid_plan_id_is_400(self, client, auth):
        assert client.get("/api/retirement/plan/not-a-uuid", headers=auth).status_code == 400

    def test_missing_plan_is_404(self, client, auth):
        response = client.get("/api/retirement/plan/6f1c9a52-3d1e-4b8e-9f0a-1c2d3e4f5a6b", headers=auth)
        assert response.status_code == 404

    def test_update_plan(self, client, auth, user, document_id):
        plan_id = client.post("/api/retirement/plan", json=_plan_body(user, document_id), headers=auth).json()["id"]

        response = client.put(f"/api/retirement/plan/{plan_id}",
                              json={"phone": "555-999-0000", "status": "scheduled"}, headers=auth)

        assert response.status_code == 200
        assert response.json()["phone"] == "555-999-0000"
        assert response.json()["status"] == "scheduled"

    def test_update_rejects_age_inversion(self, client, auth, user, document_id):
        plan_id = client.post("/api/retirement/plan", json=_plan_body(user, document_id), headers=auth).json()["id"]

        response = client.put(f"/api/retirement/plan/{plan_id}", json={"retirementAge": 50}, headers=auth)
        assert response.status_code == 400

    def test_update_rejects_malformed_email(self, client, auth, user, document_id):
        plan_id = client.post("/api/retirement/plan", json=_plan_body(user, document_id), headers=auth).json()["id"]

        response = client.put(f"/api/retirement/plan/{plan_id}", json={"email": "not-an-email"}, headers=auth)

        assert response.status_code == 422
        plan = client.get(f"/api/retirement/plan/{plan_id}", headers=auth).json()
        assert plan["email"] == "jane.doe@example.com"

    def test_completed_plan_cannot_be_cancelled(self, client, auth, user, document_id):
        plan_id = client.post("/api/retirement/plan", json=_plan_body(user, document_id), headers=auth).json()["id"]
        completed = client.put(f"/api/retirement/plan/{plan_id}", json={"status": "completed"}, headers=auth)
        assert completed.status_code == 200

        response = client.post(f"/api/retirement/plan/{plan_id}/cancel", headers=auth)

        assert response.status_code == 400
        assert response.json()["type"] == "ValidationException"
        plan = client.get(f"/api/retirement/plan/{plan_id}", headers=auth).json()
        assert plan["status"] == "completed"

    def test_other_user_cannot_read_plan(self, client, auth, user, other_user, document_id):
        plan_id = client.post("/api/retirement/plan", json=_plan_body(user, document_id), headers=auth).json()["id"]

        response = client.get(f"/api/retirement/plan/{plan_id}", headers={"X-User-Id": str(other_user.id)})
        assert response.status_code == 403


class TestScheduling:

    def test_time_slots_for_day(self, client):
        slots = client.get("/api/retirement/timeslots", params={"date": "2026-11-02"}).json()

        assert len(slots) == 16
        assert slots[0]["time"] == "9:00"
        assert slots[-1]["time"] == "16:30"
        assert all(s["available"] for s in slots)

    def test_booked_slot_is_unavailable(self, client, auth, user, document_id):
        client.post("/api/retirement/plan", json=_plan_body(user, document_id), headers=auth)

        slots = client.get("/api/retirement/timeslots", params={"date": "2026-11-02"}).json()
        taken = [s["time"] for s in slots if not s["available"]]
        assert taken == ["10:00"]

    def test_double_booking_is_409(self, client, auth, user, other_user, document_id):
        first = client.post("/api/retirement/plan", json=_plan_body(user, document_id), headers=auth)
        assert first.status_code == 201

        response = client.post(
            "/api/retirement/appointment",
            json={"userId": str(other_user.id), "dateTime": SLOT},
            headers={"X-User-Id": str(other_user.id)},
        )
        assert response.status_code == 409
        assert response.json()["type"] == "SlotUnavailableException"

    def test_slot_outside_hours_is_409(self, client, auth, user):
        response = client.post("/api/retirement/appointment",
                               json={"userId": str(user.id), "dateTime": "2026-11-02T20:00:00Z"},
                               headers=auth)
        assert response.status_code == 409

    def test_offset_times_are_normalized_to_utc(self, client, auth, user):
        response = client.post("/api/retirement/appointment",
                               json={"userId": str(user.id), "dateTime": "2026-11-02T06:30:00-04:00"},
                               headers=auth)

        assert response.status_code == 201
        assert response.json()["dateTime"] == "2026-11-02T10:30:00+00:00"
        assert response.json()["confirmed"] is False

    def test_cancel_releases_slot(self, client, auth, user, other_user, document_id):
        plan_id = client.post("/api/retirement/plan", json=_plan_body(user, document_id), headers=auth).json()["id"]

        cancelled = client.post(f"/api/retirement/plan/{plan_id}/cancel", headers=auth)
        assert cancelled.json()["status"] == "cancelled"

        response = client.post(
            "/api/retirement/appointment",
            json={"userId": str(other_user.id), "dateTime": SLOT},
            headers={"X-User-Id": str(other_user.id)},
        )
        assert response.status_code == 201

    def test_cancelled_plan_cannot_reopen(self, client, auth, user, document_id):
        plan_id = client.post("/api/retirement/plan", json=_plan_body(user, document_id), headers=auth).json()["id"]
        client.post(f"/api/retirement/plan/{plan_id}/cancel", headers=auth)

        response = client.put(f"/api/retirement/plan/{plan_id}", json={"status": "pending"}, headers=auth)
        assert response.status_code == 400

    def test_rescheduling_plan_moves_booking(self, client, auth, user, document_id):
        plan_id = client.post("/api/retirement/plan", json=_plan_body(user, document_id), headers=auth).json()["id"]

        response = client.post("/api/retirement/appointment",
                               json={"userId": str(user.id), "dateTime": "2026-11-02T11:00:00Z",
                                     "planId": plan_id},
                               headers=auth)
        assert response.status_code == 201

        slots = client.get("/api/retirement/timeslots", params={"date": "2026-11-02"}).json()
        assert [s["time"] for s in slots if not s["available"]] == ["11:00"]
        plan = client.get(f"/api/retirement/plan/{plan_id}", headers=auth).json()
        assert plan["appointmentDateTime"] == "2026-11-02T11:00:00+00:00"

    def test_update_with_new_time_moves_booking(self, client, auth, user, document_id):
        plan_id = client.post("/api/retirement/plan", json=_plan_body(user, document_id), headers=auth).json()["id"]

        response = client.put(f"/api/retirement/plan/{plan_id}",
                              json={"appointmentDateTime": "2026-11-02T11:00:00Z"}, headers=auth)

        assert response.status_code == 200
        assert response.json()["appointmentDateTime"] == "2026-11-02T11:00:00+00:00"
        slots = client.get("/api/retirement/timeslots", params={"date": "2026-11-02"}).json()
        assert [s["time"] for s in slots if not s["available"]] == ["11:00"]

    def test_update_to_taken_time_is_409(self, client, auth, user, other_user, document_id):
        plan_id = client.post("/api/retirement/plan", json=_plan_body(user, document_id), headers=auth).json()["id"]
        client.post("/api/retirement/appointment",
                    json={"userId": str(other_user.id), "dateTime": "2026-11-02T11:00:00Z"},
                    headers={"X-User-Id": str(other_user.id)})

        response = client.put(f"/api/retirement/plan/{plan_id}",
                              json={"appointmentDateTime": "2026-11-02T11:00:00Z"}, headers=auth)

        assert response.status_code == 409
        plan = client.get(f"/api/retirement/plan/{plan_id}", headers=auth).json()
        assert plan["appointmentDateTime"] == "2026-11-02T10:00:00+00:00"

    def test_cancelled_plan_cannot_take_a_slot(self, client, auth, user, document_id):
        plan_id = client.post("/api/retirement/plan", json=_plan_body(user, document_id), headers=auth).json()["id"]
        client.post(f"/api/retirement/plan/{plan_id}/cancel", headers=auth)

        response = client.post("/api/retirement/appointment",
                               json={"userId": str(user.id), "dateTime": "2026-11-02T11:00:00Z",
                                     "planId": plan_id},
                               headers=auth)
        assert response.status_code == 400

        moved = client.put(f"/api/retirement/plan/{plan_id}",
                           json={"appointmentDateTime": "2026-11-02T11:00:00Z"}, headers=auth)
        assert moved.status_code == 400

        slots = client.get("/api/retirement/timeslots", params={"date": "2026-11-02"}).json()
        assert all(s["available"] for s in slots)

    def test_completed_plan_cannot_take_a_slot(self, client, auth, user, document_id):
        plan_id = client.post("/api/retirement/plan", json=_plan_body(user, document_id), headers=auth).json()["id"]
        client.put(f"/api/retirement/plan/{plan_id}", json={"status": "completed"}, headers=auth)

        response = client.post("/api/retirement/appointment",
                               json={"userId": str(user.id), "dateTime": "2026-11-02T11:00:00Z",
                                     "planId": plan_id},
                               headers=auth)

        assert response.status_code == 400
        slots = client.get("/api/retirement/timeslots", params={"date": "2026-11-02"}).json()
        assert [s["time"] for s in slots if not s["available"]] == ["10:00"]

    def test_plan_can_request_its_own_slot_again(self, client, auth, user, document_id):
        plan_id = client.post("/api/retirement/plan", json=_plan_body(user, document_id), headers=auth).json()["id"]

        response = client.post("/api/retirement/appointment",
                               json={"userId": str(user.id), "dateTime": SLOT, "planId": plan_id},
                               headers=auth)

        assert response.status_code == 201
        assert response.json()["dateTime"] == "2026-11-02T10:00:00+00:00"
        slots = client.get("/api/retirement/timeslots", params={"date": "2026-11-02"}).json()
        assert [s["time"] for s in slots if not s["available"]] == ["10:00"]


class TestIncentives:

    def test_schedule(self, client):
        data = client.get("/api/retirement/incentives").json()

        assert [data[f"tier{i}Amount"] for i in range(1, 6)] == [500, 1000, 2000, 3000, 4000]
        assert data["holdingPeriodMonths"] == 12
        assert data["tiers"][0] == {"minAmount": 50000, "maxAmount": 100000, "incentive": 500}
        assert data["tiers"][-1]["maxAmount"] is None

    @pytest.mark.parametrize("amount,expected", [
        (49999.99, 0),
        (50000, 500),
        (249999, 1000),
        (250000, 2000),
        (1000000, 4000),
    ])
    def test_calculate(self, client, amount, expected):
        data = client.get("/api/retirement/incentives/calculate", params={"amount": amount}).json()

        assert data["incentive"] == expected
        assert data["amount"] == amount

    @pytest.mark.parametrize("amount", ["inf", "-inf", "nan"])
    def test_non_finite_amount_is_422(self, client, amount):
        response = client.get("/api/retirement/incentives/calculate", params={"amount": amount})
        assert response.status_code == 422
