from typing import Any, Optional

from fastapi import HTTPException, status


class CustomHTTPException(HTTPException):
    error_code: str = "BAD_REQUEST"

    def __init__(self, detail: str, status_code: int = 400, details: Optional[Any] = None):
        super().__init__(status_code=status_code, detail=detail)
        self.details = details


class NotFoundException(CustomHTTPException):
    error_code = "NOT_FOUND"

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(detail=detail, status_code=status.HTTP_404_NOT_FOUND)


class ForbiddenException(CustomHTTPException):
    error_code = "FORBIDDEN"

    def __init__(self, detail: str = "You do not have permission to perform this action"):
        super().__init__(detail=detail, status_code=status.HTTP_403_FORBIDDEN)


class UnauthorizedException(CustomHTTPException):
    error_code = "UNAUTHORIZED"

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(detail=detail, status_code=status.HTTP_401_UNAUTHORIZED)


class ConflictException(CustomHTTPException):
    error_code = "CONFLICT"

    def __init__(self, detail: str = "Resource already exists"):
        super().__init__(detail=detail, status_code=status.HTTP_409_CONFLICT)


class InvalidStateException(CustomHTTPException):
    error_code = "INVALID_STATE"

    def __init__(self, detail: str, status_code: int = status.HTTP_400_BAD_REQUEST, details: Optional[Any] = None):
        super().__init__(detail=detail, status_code=status_code, details=details)


class ValidationException(CustomHTTPException):
    error_code = "VALIDATION_ERROR"

    def __init__(self, detail: str, details: Optional[Any] = None):
        super().__init__(detail=detail, status_code=422, details=details)


class CourseNotFoundException(NotFoundException):
    def __init__(self, course_id: int = None):
        detail = f"Course with id {course_id} not found" if course_id else "Course not found"
        super().__init__(detail=detail)


class LessonNotFoundException(NotFoundException):
    def __init__(self, lesson_id: int = None):
        detail = f"Lesson with id {lesson_id} not found" if lesson_id else "Lesson not found"
        super().__init__(detail=detail)


class EnrollmentNotFoundException(NotFoundException):
    def __init__(self, detail: str = "Enrollment not found"):
        super().__init__(detail=detail)


class CourseNotAvailableException(InvalidStateException):
    def __init__(self):
        super().__init__(detail="Course is not available for enrollment")


class SelfEnrollmentException(InvalidStateException):
    def __init__(self):
        super().__init__(detail="You cannot enroll in your own course")


class AlreadyEnrolledException(ConflictException):
    def __init__(self):
        super().__init__(detail="You are already enrolled in this course")


class NotEnrolledException(InvalidStateException):
    """Not enrolled is a state error but is reported to clients as 403."""
    def __init__(self, detail: str = "You must be enrolled in this course to track progress"):
        super().__init__(detail=detail, status_code=status.HTTP_403_FORBIDDEN)


class AlreadyCompletedException(InvalidStateException):
    def __init__(self):
        super().__init__(detail="Course is already completed")


class NotCompletedException(InvalidStateException):
    def __init__(self):
        super().__init__(detail="Course must be completed to generate certificate")
