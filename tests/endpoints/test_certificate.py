from fastapi.testclient import TestClient

from tests.helpers.asserts import api_call, assert_error, data_of


def _completed_enrollment(client, instructor, student, course_factory, auth_headers):
    course = course_factory(instructor, lessons=1, title="Certified Course Title")
    enrollment = data_of(api_call(
        client, "POST", "/enrollments/enroll", headers=auth_headers(student), json={"course_id": course.id}
    ))
    api_call(client, "PATCH", f"/enrollments/{enrollment['id']}/complete", headers=auth_headers(student))
    return course, enrollment["id"]


def test_generate_and_download(client: TestClient, instructor, student, course_factory, auth_headers):
    course, enrollment_id = _completed_enrollment(client, instructor, student, course_factory, auth_headers)

    certificate = data_of(api_call(
        client, "POST", f"/certificates/generate/{enrollment_id}", headers=auth_headers(student)
    ))
    assert certificate["course_id"] == course.id
    assert certificate["certificate_url"] == f"/certificates/{certificate['id']}/download"

    download = client.get(f"/certificates/{certificate['id']}/download", headers=auth_headers(student))
    assert download.status_code == 200
    assert download.headers["content-type"] == "application/pdf"
    assert download.content.startswith(b"%PDF")


def test_generate_before_completion(client: TestClient, instructor, student, course_factory, auth_headers):
    course = course_factory(instructor, lessons=1)
    enrollment = data_of(api_call(
        client, "POST", "/enrollments/enroll", headers=auth_headers(student), json={"course_id": course.id}
    ))

    response = client.post(f"/certificates/generate/{enrollment['id']}", headers=auth_headers(student))

    assert_error(response, 400, code="INVALID_STATE", message="Course must be completed to generate certificate")


def test_download_before_render(client: TestClient, instructor, student, course_factory, auth_headers):
    _completed_enrollment(client, instructor, student, course_factory, auth_headers)
    certificate = data_of(client.get("/certificates/my-certificates", headers=auth_headers(student)))[0]

    response = client.get(f"/certificates/{certificate['id']}/download", headers=auth_headers(student))

    assert_error(response, 404, message="Certificate file not found")


def test_my_certificates_include_course(client: TestClient, instructor, student, course_factory, auth_headers):
    course, _ = _completed_enrollment(client, instructor, student, course_factory, auth_headers)

    certificates = data_of(client.get("/certificates/my-certificates", headers=auth_headers(student)))

    assert len(certificates) == 1
    assert certificates[0]["course"]["title"] == "Certified Course Title"
    assert certificates[0]["course"]["id"] == course.id


def test_only_admin_deletes_certificates(client: TestClient, instructor, student, admin, course_factory, auth_headers):
    _completed_enrollment(client, instructor, student, course_factory, auth_headers)
    certificate_id = data_of(client.get("/certificates/my-certificates", headers=auth_headers(student)))[0]["id"]

    assert_error(client.delete(f"/certificates/{certificate_id}", headers=auth_headers(student)), 403)

    api_call(client, "DELETE", f"/certificates/{certificate_id}", headers=auth_headers(admin))
    assert data_of(client.get("/certificates/my-certificates", headers=auth_headers(student))) == []
