from fastapi.testclient import TestClient

from app.schemas.review import CourseReviews
from tests.helpers.asserts import api_call, assert_error, data_of
from tests.helpers.contract import validate_response_schema


def _enroll(client, headers, course_id):
    api_call(client, "POST", "/enrollments/enroll", headers=headers, json={"course_id": course_id})


def test_create_review(client: TestClient, instructor, student, course_factory, auth_headers):
    course = course_factory(instructor)
    _enroll(client, auth_headers(student), course.id)

    response = api_call(client, "POST", "/reviews", headers=auth_headers(student), json={
        "course_id": course.id, "rating": 5, "comment": "Loved the exercises"
    })

    assert response.status_code == 201
    data = data_of(response)
    assert data["rating"] == 5
    assert data["user"]["name"] == "Ada Student"


def test_review_requires_enrollment(client: TestClient, instructor, student, course_factory, auth_headers):
    course = course_factory(instructor)

    response = client.post("/reviews", headers=auth_headers(student), json={"course_id": course.id, "rating": 4})

    assert_error(response, 403, message="You must be enrolled in this course to leave a review")


def test_duplicate_review(client: TestClient, instructor, student, course_factory, auth_headers):
    course = course_factory(instructor)
    _enroll(client, auth_headers(student), course.id)
    api_call(client, "POST", "/reviews", headers=auth_headers(student), json={"course_id": course.id, "rating": 4})

    response = client.post("/reviews", headers=auth_headers(student), json={"course_id": course.id, "rating": 2})

    assert_error(response, 409, code="CONFLICT")


def test_rating_out_of_range(client: TestClient, instructor, student, course_factory, auth_headers):
    course = course_factory(instructor)

    response = client.post("/reviews", headers=auth_headers(student), json={"course_id": course.id, "rating": 6})

    assert_error(response, 422)


def test_course_reviews_are_public(client: TestClient, instructor, user_factory, course_factory, auth_headers):
    course = course_factory(instructor)
    for rating in (4, 2):
        reviewer = user_factory()
        _enroll(client, auth_headers(reviewer), course.id)
        api_call(client, "POST", "/reviews", headers=auth_headers(reviewer), json={"course_id": course.id, "rating": rating})

    data = data_of(client.get(f"/reviews/course/{course.id}"))

    validate_response_schema(data, CourseReviews)
    assert data["total"] == 2
    assert data["stats"]["average_rating"] == 3.0
    assert data["stats"]["rating_distribution"]["4"]["percentage"] == 50.0

    course_data = data_of(client.get(f"/courses/{course.id}"))
    assert course_data["reviews_count"] == 2
    assert course_data["average_rating"] == 3.0


def test_update_delete_and_list_my_reviews(
    client: TestClient, instructor, student, user_factory, course_factory, auth_headers
):
    course = course_factory(instructor)
    _enroll(client, auth_headers(student), course.id)
    review = data_of(api_call(
        client, "POST", "/reviews", headers=auth_headers(student), json={"course_id": course.id, "rating": 3}
    ))

    assert_error(client.put(f"/reviews/{review['id']}", headers=auth_headers(user_factory()), json={"rating": 1}), 403)

    updated = data_of(api_call(
        client, "PUT", f"/reviews/{review['id']}", headers=auth_headers(student), json={"rating": 5}
    ))
    assert updated["rating"] == 5

    mine = data_of(client.get("/reviews/my-reviews", headers=auth_headers(student)))
    assert [r["id"] for r in mine] == [review["id"]]

    api_call(client, "DELETE", f"/reviews/{review['id']}", headers=auth_headers(student))
    assert data_of(client.get("/reviews/my-reviews", headers=auth_headers(student))) == []
