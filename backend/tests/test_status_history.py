"""Tests for the status history route."""
from request_tracker.models.user import Role
from tests.conftest import auth_headers, create_test_request, create_test_student, create_test_user


def test_history_lists_every_transition(client, db):
    student = create_test_student(db)
    staff = create_test_user(db, Role.STAFF)
    chair = create_test_user(db, Role.CHAIR)
    request_id = create_test_request(client, student)["request_id"]

    client.patch(f"/api/requests/{request_id}/status", headers=auth_headers(staff),
                 json={"status": "PENDING", "remarks": "needs documents"})
    client.patch(f"/api/requests/{request_id}/status", headers=auth_headers(chair),
                 json={"status": "APPROVED", "remarks": "ok"})

    resp = client.get(f"/api/status/{request_id}/history", headers=auth_headers(student))
    assert resp.status_code == 200
    history = resp.json()["history"]
    assert [(e["status"], e["remark"]) for e in history] == [
        ("APPROVED", "ok"),
        ("PENDING", "needs documents"),
        ("FOR_EVALUATION", "Submitted for evaluation"),
    ]
    assert [e["changed_by_id"] for e in history] == [chair.user_id, staff.user_id, student.user_id]


def test_history_hidden_from_other_students(client, db):
    owner = create_test_student(db)
    other = create_test_student(db)
    request_id = create_test_request(client, owner)["request_id"]

    resp = client.get(f"/api/status/{request_id}/history", headers=auth_headers(other))
    assert resp.status_code == 403


def test_history_unknown_request(client, db):
    staff = create_test_user(db, Role.STAFF)
    resp = client.get("/api/status/missing/history", headers=auth_headers(staff))
    assert resp.status_code == 404
