import os
from datetime import datetime

import pytest

from app.core.exceptions import EnrollmentNotFoundException, ForbiddenException, NotCompletedException, NotFoundException
from app.models.certificate import Certificate
from app.schemas.certificate import CertificateData
from app.services.certificate import CertificateRenderer, certificate_service
from app.services.enrollment import enrollment_service


@pytest.fixture
def completed_enrollment(db_session, student, instructor, course_factory, context_for):
    course = course_factory(instructor, lessons=2, title="Practical Data Pipelines")
    enrollment = enrollment_service.enroll(db_session, course.id, context_for(student))
    enrollment_service.complete_course(db_session, enrollment.id, context_for(student))
    return enrollment


def test_render_html_contains_certificate_fields():
    renderer = CertificateRenderer(output_dir="unused")
    html = renderer.render_html(CertificateData(
        certificate_id=17,
        student_name="Ada Student",
        course_title="Practical Data Pipelines",
        instructor_name="Grace Instructor",
        completed_at=datetime(2026, 3, 5, 14, 30),
        issuer_name="SmartLearn E-Learning Platform",
    ))

    assert "CERTIFICATE OF COMPLETION" in html
    assert "SmartLearn E-Learning Platform" in html
    assert "This is to certify that" in html
    assert "Ada Student" in html
    assert "has successfully completed the course" in html
    assert "Practical Data Pipelines" in html
    assert "Instructor: Grace Instructor" in html
    assert "Completed on March 5, 2026" in html
    assert "Certificate ID: 17" in html


def test_render_html_escapes_names():
    renderer = CertificateRenderer(output_dir="unused")
    html = renderer.render_html(CertificateData(
        certificate_id=1,
        student_name="<script>alert(1)</script>",
        course_title="Course",
        instructor_name="Instructor",
        completed_at=datetime(2026, 1, 1),
        issuer_name="Issuer",
    ))

    assert "<script>" not in html


def test_generate_renders_pdf_for_completed_enrollment(
    db_session, student, completed_enrollment, context_for, rendered_certificates
):
    certificate = certificate_service.generate_certificate(db_session, completed_enrollment.id, context_for(student))

    assert certificate.certificate_url == f"/certificates/{certificate.id}/download"
    assert len(rendered_certificates) == 1
    rendered = rendered_certificates[0]
    assert rendered["path"].endswith(f"certificate-{certificate.id}.pdf")
    assert os.path.exists(rendered["path"])
    assert "Ada Student" in rendered["html"]
    assert "Practical Data Pipelines" in rendered["html"]
    assert "Instructor: Grace Instructor" in rendered["html"]


def test_generate_is_idempotent(db_session, student, completed_enrollment, context_for, rendered_certificates):
    first = certificate_service.generate_certificate(db_session, completed_enrollment.id, context_for(student))
    second = certificate_service.generate_certificate(db_session, completed_enrollment.id, context_for(student))

    assert first.id == second.id
    assert db_session.query(Certificate).filter_by(user_id=student.id).count() == 1
    assert rendered_certificates[0]["path"] == rendered_certificates[1]["path"]


def test_generate_requires_completion(db_session, student, instructor, course_factory, context_for):
    course = course_factory(instructor, lessons=2)
    enrollment = enrollment_service.enroll(db_session, course.id, context_for(student))

    with pytest.raises(NotCompletedException):
        certificate_service.generate_certificate(db_session, enrollment.id, context_for(student))


def test_generate_requires_owner(db_session, completed_enrollment, admin, context_for):
    with pytest.raises(ForbiddenException):
        certificate_service.generate_certificate(db_session, completed_enrollment.id, context_for(admin))


def test_generate_for_missing_enrollment(db_session, student, context_for):
    with pytest.raises(EnrollmentNotFoundException):
        certificate_service.generate_certificate(db_session, 424242, context_for(student))


def test_certificate_file_access(db_session, student, admin, user_factory, completed_enrollment, context_for):
    certificate = certificate_service.generate_certificate(db_session, completed_enrollment.id, context_for(student))

    assert certificate_service.get_certificate_file(db_session, certificate.id, context_for(student)).endswith(".pdf")
    assert certificate_service.get_certificate_file(db_session, certificate.id, context_for(admin)).endswith(".pdf")
    with pytest.raises(ForbiddenException):
        certificate_service.get_certificate_file(db_session, certificate.id, context_for(user_factory()))


def test_issued_but_unrendered_certificate_has_no_file(db_session, student, completed_enrollment, context_for):
    certificate = db_session.query(Certificate).filter_by(user_id=student.id).one()

    with pytest.raises(NotFoundException) as exc_info:
        certificate_service.get_certificate_file(db_session, certificate.id, context_for(student))
    assert exc_info.value.detail == "Certificate file not found"


def test_user_certificates_and_delete(db_session, student, completed_enrollment, context_for):
    certificate = certificate_service.generate_certificate(db_session, completed_enrollment.id, context_for(student))
    path = certificate_service.renderer.file_path(certificate.id)

    assert [c.id for c in certificate_service.get_user_certificates(db_session, context_for(student))] == [certificate.id]

    certificate_service.delete_certificate(db_session, certificate.id)

    assert not os.path.exists(path)
    assert certificate_service.get_user_certificates(db_session, context_for(student)) == []
    with pytest.raises(NotFoundException):
        certificate_service.delete_certificate(db_session, certificate.id)
