"""Tests for the students roster with request counts."""
from request_tracker.auth import CurrentUser
from request_tracker.errors import AuthorizationError
from request_tracker.models.user import Role
from request_tracker.services.request_query import RequestQueryService
from tests.conftest import auth_headers, create_test_request, create_test_student, create_test_user

import pytest


class TestStudentsRoster:
    def test_counts_by_status_bucket(self, client, db):
        busy = create_test_student(db, first_name="Ana", last_name="Bautista", student_no="2024-0100")
        idle = create_test_student(db, first_name="Ben", last_name="Cruz", student_no="2024-0200")
        staff = create_test_user(db, Role.STAFF)
        chair = create_test_user(db, Role.CHAIR)

        first, second, third, fourth = (create_test_request(client, busy)["request_id"] for _ in range(4))
        client.patch(f"/api/requests/{second}/status", headers=auth_headers(staff), json={"status": "PENDING"})
        client.patch(f"/api/requests/{third}/status", headers=auth_headers(chair), json={"status": "APPROVED"})
        client.patch(f"/api/requests/{fourth}/status", headers=auth_headers(staff), json={"status": "DISCREPANCY"})

        resp = client.get("/api/students/", headers=auth_headers(staff))
        assert resp.status_code == 200
        students = {s["student_no"]: s for s in resp.json()["students"]}

        assert students["2024-0100"]["request_counts"] == {"pending": 2, "approved": 1, "total": 4}
        assert students["2024-0200"]["request_counts"] == {"pending": 0, "approved": 0, "total": 0}
        assert students["2024-0100"]["email"] == busy.email
        assert students["2024-0100"]["first_name"] == "Ana"
        assert students["2024-0200"]["user_id"] == idle.user_id
        assert students["2024-0200"]["role"] == "STUDENT"

    def test_students_cannot_list_roster(self, client, db):
        student = create_test_student(db)
        resp = client.get("/api/students/", headers=auth_headers(student))
        assert resp.status_code == 403

    @pytest.mark.parametrize("role", [Role.STAFF, Role.CHAIR, Role.ADMIN])
    def test_reviewers_may_list(self, client, db, role):
        create_test_student(db)
        reviewer = create_test_user(db, role)
        resp = client.get("/api/students/", headers=auth_headers(reviewer))
        assert resp.status_code == 200
        assert len(resp.json()["students"]) == 1


def test_service_rejects_students(db):
    with pytest.raises(AuthorizationError):
        RequestQueryService(db).list_students_with_request_counts(CurrentUser(user_id="s-1", role=Role.STUDENT))
