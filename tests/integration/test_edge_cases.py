from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.models.certificate import Certificate
from app.models.enrollment import Enrollment


def test_duplicate_enrollment_prevention(client: TestClient, db_session: Session, instructor, student,
                                         course_factory, auth_headers):
    print("\n[TEST] Duplicate enrollment prevention")
    course = course_factory(instructor, lessons=1)
    headers = auth_headers(student)

    print("[1] First enrollment attempt")
    first = client.post("/enrollments/enroll", headers=headers, json={"course_id": course.id})
    assert first.status_code == 201, first.text

    print("[2] Second enrollment attempt (should fail)")
    second = client.post("/enrollments/enroll", headers=headers, json={"course_id": course.id})
    assert second.status_code == 409, second.text

    print("[3] Verify student only enrolled once")
    count = db_session.query(Enrollment).filter_by(user_id=student.id, course_id=course.id).count()
    assert count == 1
    print("[OK] Single enrollment row")


def test_instructor_cannot_enroll_in_own_course(client: TestClient, instructor, course_factory, auth_headers):
    course = course_factory(instructor)

    response = client.post("/enrollments/enroll", headers=auth_headers(instructor), json={"course_id": course.id})

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "You cannot enroll in your own course"


def test_double_completion_keeps_first_timestamp(client: TestClient, db_session: Session, instructor, student,
                                                 course_factory, auth_headers):
    print("\n[TEST] Completing twice")
    course = course_factory(instructor, lessons=2)
    headers = auth_headers(student)
    enrollment_id = client.post(
        "/enrollments/enroll", headers=headers, json={"course_id": course.id}
    ).json()["data"]["id"]

    first = client.patch(f"/enrollments/{enrollment_id}/complete", headers=headers)
    assert first.status_code == 200
    completed_at = first.json()["data"]["completed_at"]

    second = client.patch(f"/enrollments/{enrollment_id}/complete", headers=headers)
    assert second.status_code == 400

    detail = client.get(f"/enrollments/{enrollment_id}", headers=headers).json()["data"]
    assert detail["enrollment"]["completed_at"] == completed_at
    assert db_session.query(Certificate).filter_by(user_id=student.id, course_id=course.id).count() == 1
    print("[OK] Completion unchanged")


def test_watch_time_update_keeps_completion(client: TestClient, instructor, student, course_factory, lesson_ids,
                                            auth_headers):
    course = course_factory(instructor, lessons=2)
    headers = auth_headers(student)
    client.post("/enrollments/enroll", headers=headers, json={"course_id": course.id})
    lesson_id = lesson_ids(course)[0]

    completed = client.put(f"/progress/lessons/{lesson_id}/progress", headers=headers, json={"is_completed": True})
    stamped = completed.json()["data"]["completed_at"]

    response = client.put(f"/progress/lessons/{lesson_id}/progress", headers=headers, json={"watch_time": 240})

    data = response.json()["data"]
    assert data["is_completed"] is True
    assert data["watch_time"] == 240
    assert data["completed_at"] == stamped


def test_review_without_enrollment(client: TestClient, instructor, student, course_factory, auth_headers):
    course = course_factory(instructor)

    response = client.post("/reviews", headers=auth_headers(student), json={"course_id": course.id, "rating": 5})

    assert response.status_code == 403


def test_course_without_lessons_reports_zero(client: TestClient, instructor, student, course_factory, auth_headers):
    course = course_factory(instructor, lessons=0)
    headers = auth_headers(student)
    client.post("/enrollments/enroll", headers=headers, json={"course_id": course.id})

    overview = client.get(f"/progress/courses/{course.id}/progress", headers=headers).json()["data"]

    assert overview["overall_progress"] == 0.0
    assert overview["total_lessons"] == 0
    assert overview["enrollment"]["is_completed"] is False


def test_error_envelope_carries_request_id(client: TestClient, student, auth_headers):
    response = client.get(
        "/progress/courses/999999/progress", headers={**auth_headers(student), "X-Request-ID": "req-abc-123"}
    )

    body = response.json()
    assert response.status_code == 404
    assert body["success"] is False
    assert body["path"] == "/progress/courses/999999/progress"
    assert body["request_id"] == "req-abc-123"
    assert response.headers["X-Request-ID"] == "req-abc-123"
