"""
tests/test_api.py — HTTP-level tests for the assessment routes.

The `client` fixture (conftest.py) overrides get_db with the in-memory
SQLite session and get_mailer with a recording mailer.
"""

from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from app.db.models import Assessment
from app.services.errors import NotificationError


SUBMIT_URL = "/api/submit-assessment"


class TestSubmitAssessment:
    def test_success_response(self, client, sample_payload):
        response = client.post(SUBMIT_URL, json=sample_payload)
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert isinstance(body["assessmentId"], int)
        assert body["totalScore"] == 68
        assert body["readinessLevel"] == "Advanced Level"
        assert "Check your email" in body["message"]

    def test_request_metadata_is_stored(self, client, db, sample_payload):
        response = client.post(
            SUBMIT_URL,
            json=sample_payload,
            headers={
                "X-Session-Id": "abc123",
                "User-Agent": "QuizWidget/2.0",
                "X-Forwarded-For": "198.51.100.4, 10.0.0.1",
            },
        )
        stored = db.get(Assessment, response.json()["assessmentId"])
        assert stored.session_id == "abc123"
        assert stored.user_agent == "QuizWidget/2.0"
        assert stored.ip_address == "198.51.100.4"

    def test_missing_session_header_defaults_to_unknown(self, client, db, sample_payload):
        response = client.post(SUBMIT_URL, json=sample_payload)
        stored = db.get(Assessment, response.json()["assessmentId"])
        assert stored.session_id == "unknown"

    def test_missing_required_field(self, client, db, sample_payload):
        del sample_payload["role"]
        response = client.post(SUBMIT_URL, json=sample_payload)
        assert response.status_code == 400
        assert response.json() == {
            "error": "Missing required field",
            "message": "Missing required field: role",
            "field": "role",
        }
        assert db.query(Assessment).count() == 0

    def test_empty_required_field(self, client, sample_payload):
        sample_payload["email"] = ""
        response = client.post(SUBMIT_URL, json=sample_payload)
        assert response.status_code == 400
        assert response.json()["field"] == "email"

    def test_odd_optional_values_are_tolerated(self, client, sample_payload):
        sample_payload.update(ai_level=7, company_size=None, objectives="not-a-list")
        response = client.post(SUBMIT_URL, json=sample_payload)
        assert response.status_code == 200
        # 0 + 25 + 0 + 7 with the neutral multiplier
        assert response.json()["totalScore"] == 32
        assert response.json()["readinessLevel"] == "Foundation Level"

    def test_objective_items_are_stored_as_strings(self, client, db, sample_payload):
        sample_payload["objectives"] = [1, "b"]
        response = client.post(SUBMIT_URL, json=sample_payload)
        assert response.status_code == 200
        stored = db.get(Assessment, response.json()["assessmentId"])
        assert stored.objectives_list == ["1", "b"]

    def test_oversized_values_are_accepted(self, client, db, sample_payload):
        sample_payload["company"] = "C" * 300
        session_id = "s" * 300
        forwarded_for = "x" * 300
        response = client.post(
            SUBMIT_URL,
            json=sample_payload,
            headers={"X-Session-Id": session_id, "X-Forwarded-For": forwarded_for},
        )
        assert response.status_code == 200
        stored = db.get(Assessment, response.json()["assessmentId"])
        assert stored.company == "C" * 300
        assert stored.session_id == session_id
        assert stored.ip_address == forwarded_for

    def test_non_object_body_is_rejected(self, client):
        response = client.post(SUBMIT_URL, json=["not", "an", "object"])
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"

    def test_get_not_allowed(self, client):
        assert client.get(SUBMIT_URL).status_code == 405

    def test_persistence_failure_is_generic_500(self, client, sample_payload, recording_mailer):
        with patch(
            "app.services.assessment_service.repository.create_assessment",
            side_effect=OperationalError("INSERT", {}, Exception("password authentication failed")),
        ):
            response = client.post(SUBMIT_URL, json=sample_payload)
        assert response.status_code == 500
        body = response.json()
        assert body == {
            "error": "Internal server error",
            "message": "Failed to submit assessment. Please try again.",
        }
        assert "password" not in response.text
        assert recording_mailer.sent == []

    def test_unexpected_failure_is_generic_500(self, client, sample_payload):
        with patch(
            "app.services.assessment_service.calculate_score",
            side_effect=KeyError("secret-internal-detail"),
        ):
            response = client.post(SUBMIT_URL, json=sample_payload)
        assert response.status_code == 500
        assert "secret-internal-detail" not in response.text

    def test_notification_failure_still_succeeds(self, client, db, sample_payload, recording_mailer):
        recording_mailer.error = NotificationError("SMTP unavailable")
        response = client.post(SUBMIT_URL, json=sample_payload)
        assert response.status_code == 200
        body = response.json()
        assert body["totalScore"] == 68
        stored = db.get(Assessment, body["assessmentId"])
        assert stored is not None
        assert stored.email_sent is False

    def test_cors_preflight(self, client):
        response = client.options(
            SUBMIT_URL,
            headers={
                "Origin": "https://quiz.example.com",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers


class TestAssessmentQueries:
    def test_get_by_id(self, client, sample_payload, admin_headers):
        created = client.post(SUBMIT_URL, json=sample_payload).json()
        response = client.get(f"/api/assessments/{created['assessmentId']}", headers=admin_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["company"] == "Acme"
        assert body["objectives"] == ["a", "b"]
        assert body["readiness_level"] == "Advanced Level"
        assert body["email_sent"] is True

    def test_get_unknown_is_404(self, client, admin_headers):
        assert client.get("/api/assessments/12345", headers=admin_headers).status_code == 404

    def test_list_and_filter(self, client, sample_payload, admin_headers):
        client.post(SUBMIT_URL, json=sample_payload)
        low = {**sample_payload, "company": "Tiny", "ai_level": None, "data_infrastructure": None}
        client.post(SUBMIT_URL, json=low)

        all_rows = client.get("/api/assessments", headers=admin_headers).json()
        assert len(all_rows) == 2

        foundation = client.get(
            "/api/assessments",
            params={"readiness_level": "Foundation Level"},
            headers=admin_headers,
        ).json()
        assert [row["company"] for row in foundation] == ["Tiny"]

    def test_stats(self, client, sample_payload, admin_headers):
        client.post(SUBMIT_URL, json=sample_payload)
        stats = client.get("/api/assessments/stats", headers=admin_headers).json()
        assert stats["Advanced Level"] == 1
        assert stats["Foundation Level"] == 0
        assert stats["total"] == 1


class TestAdminKeyRequired:
    def test_cross_origin_list_without_key_is_rejected(self, client, sample_payload):
        client.post(SUBMIT_URL, json=sample_payload)
        response = client.get("/api/assessments", headers={"Origin": "https://evil.example"})
        assert response.status_code == 401
        assert "ada@x.com" not in response.text

    def test_wrong_key_is_rejected(self, client, sample_payload):
        client.post(SUBMIT_URL, json=sample_payload)
        response = client.get("/api/assessments", headers={"X-Admin-Key": "guess"})
        assert response.status_code == 401

    def test_stats_without_key_is_rejected(self, client):
        assert client.get("/api/assessments/stats").status_code == 401

    def test_get_by_id_without_key_is_rejected(self, client, sample_payload):
        created = client.post(SUBMIT_URL, json=sample_payload).json()
        response = client.get(f"/api/assessments/{created['assessmentId']}")
        assert response.status_code == 401
        assert "Acme" not in response.text

    def test_unconfigured_key_disables_reads(self, client, admin_headers):
        with patch("api.endpoints.assessment_routes.settings.admin_api_key", ""):
            response = client.get("/api/assessments", headers=admin_headers)
        assert response.status_code == 401

    def test_submit_needs_no_key(self, client, sample_payload):
        assert client.post(SUBMIT_URL, json=sample_payload).status_code == 200


class TestSystemRoutes:
    def test_health(self, client):
        assert client.get("/health").json()["status"] == "ok"
