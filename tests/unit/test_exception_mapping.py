from app.core.exceptions import (
    AlreadyCompletedException, AlreadyEnrolledException, ConflictException, CourseNotAvailableException,
    CourseNotFoundException, ForbiddenException, InvalidStateException, NotCompletedException,
    NotEnrolledException, NotFoundException, SelfEnrollmentException, UnauthorizedException, ValidationException,
)


def test_base_exceptions_carry_their_status_codes():
    assert NotFoundException().status_code == 404
    assert ForbiddenException().status_code == 403
    assert UnauthorizedException().status_code == 401
    assert ConflictException().status_code == 409
    assert InvalidStateException("bad state").status_code == 400
    assert ValidationException("bad input").status_code == 422


def test_error_codes():
    assert NotFoundException().error_code == "NOT_FOUND"
    assert ConflictException().error_code == "CONFLICT"
    assert InvalidStateException("x").error_code == "INVALID_STATE"
    assert ValidationException("x").error_code == "VALIDATION_ERROR"


def test_enrollment_state_errors_are_bad_requests():
    for exc in (CourseNotAvailableException(), SelfEnrollmentException(),
                AlreadyCompletedException(), NotCompletedException()):
        assert isinstance(exc, InvalidStateException)
        assert exc.status_code == 400


def test_already_enrolled_is_a_conflict():
    exc = AlreadyEnrolledException()
    assert isinstance(exc, ConflictException)
    assert exc.status_code == 409


def test_not_enrolled_is_a_state_error_reported_as_forbidden():
    exc = NotEnrolledException()
    assert isinstance(exc, InvalidStateException)
    assert exc.status_code == 403
    assert exc.detail == "You must be enrolled in this course to track progress"


def test_course_not_found_mentions_the_id():
    assert CourseNotFoundException(42).detail == "Course with id 42 not found"
    assert CourseNotFoundException().detail == "Course not found"
