import logging
from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.orm import Session

from app.core.constants import EnrollmentStatusFilter, PROGRESS_MAX, PROGRESS_MIN
from app.core.exceptions import (
    AlreadyCompletedException, AlreadyEnrolledException, CourseNotAvailableException,
    CourseNotFoundException, EnrollmentNotFoundException, ForbiddenException, SelfEnrollmentException,
)
from app.crud.certificate import certificate as crud_certificate
from app.crud.course import course as crud_course
from app.crud.enrollment import enrollment as crud_enrollment
from app.crud.lesson_progress import lesson_progress as crud_lesson_progress
from app.models.enrollment import Enrollment as EnrollmentModel
from app.models.lesson import Lesson as LessonModel
from app.models.lesson_progress import LessonProgress as LessonProgressModel
from app.schemas.course import Course as CourseSchema
from app.schemas.enrollment import Enrollment as EnrollmentSchema, EnrollmentWithCourse
from app.schemas.lesson_progress import EnrollmentDetail, LessonProgressState, LessonWithProgress
from app.schemas.user import UserContext
from app.utils.permission import PermissionHelper as permission_helper

logger = logging.getLogger(__name__)


def merge_lessons_with_progress(
    lessons: Iterable[LessonModel], records: Iterable[LessonProgressModel]
) -> List[LessonWithProgress]:
    """Pair each lesson, in course order, with the user's record or a not-started default."""
    by_lesson = {record.lesson_id: record for record in records}
    merged = []
    for lesson in sorted(lessons, key=lambda l: l.order):
        record = by_lesson.get(lesson.id)
        state = LessonProgressState.model_validate(record) if record else LessonProgressState()
        merged.append(LessonWithProgress(
            id=lesson.id,
            title=lesson.title,
            duration=lesson.duration,
            lesson_type=lesson.lesson_type,
            order=lesson.order,
            is_preview=lesson.is_preview,
            progress=state,
        ))
    return merged


class EnrollmentService:

    def _get_owned_enrollment(self, db: Session, enrollment_id: int, current_user_context: UserContext,
                              error_message: str) -> EnrollmentModel:
        enrollment = crud_enrollment.get(db, id=enrollment_id)
        if not enrollment:
            raise EnrollmentNotFoundException()
        permission_helper.require_owner(current_user_context, enrollment.user_id, error_message)
        return enrollment

    def enroll(self, db: Session, course_id: int, current_user_context: UserContext) -> EnrollmentModel:
        course = crud_course.get(db, id=course_id)
        if not course:
            raise CourseNotFoundException(course_id)

        if not course.is_open_for_enrollment:
            raise CourseNotAvailableException()

        if course.instructor_id == current_user_context.user_id:
            raise SelfEnrollmentException()

        existing = crud_enrollment.get_by_user_and_course(
            db, user_id=current_user_context.user_id, course_id=course_id
        )
        if existing:
            raise AlreadyEnrolledException()

        enrollment = crud_enrollment.create(db, obj_in={
            "user_id": current_user_context.user_id,
            "course_id": course_id,
            "progress": 0.0,
            "is_completed": False,
        })
        logger.info(f"User {current_user_context.user_id} enrolled in course {course_id} (enrollment {enrollment.id})")
        return enrollment

    def update_progress_manually(
        self, db: Session, enrollment_id: int, progress: float, current_user_context: UserContext
    ) -> EnrollmentModel:
        enrollment = self._get_owned_enrollment(
            db, enrollment_id, current_user_context, "You can only update your own enrollment progress"
        )
        if enrollment.is_completed:
            raise AlreadyCompletedException()

        clamped = min(PROGRESS_MAX, max(PROGRESS_MIN, float(progress)))
        return crud_enrollment.set_progress(db, enrollment=enrollment, progress=clamped)

    def complete_course(self, db: Session, enrollment_id: int, current_user_context: UserContext) -> EnrollmentModel:
        enrollment = self._get_owned_enrollment(
            db, enrollment_id, current_user_context, "You can only complete your own enrollments"
        )
        if enrollment.is_completed:
            raise AlreadyCompletedException()

        if not self.try_transition_to_completed(db, enrollment):
            # Lost a race against a concurrent completion of the same enrollment.
            raise AlreadyCompletedException()
        return enrollment

    def try_transition_to_completed(self, db: Session, enrollment: EnrollmentModel) -> bool:
        """Move an enrollment to Completed exactly once.

        The flip is a single conditional UPDATE on ``is_completed = false``;
        only the caller that changes the row issues the certificate. Returns
        whether this call performed the transition.
        """
        if not crud_enrollment.mark_completed_if_pending(db, enrollment_id=enrollment.id):
            return False

        db.refresh(enrollment)
        certificate, created = crud_certificate.get_or_create(
            db, user_id=enrollment.user_id, course_id=enrollment.course_id
        )
        logger.info(
            f"Enrollment {enrollment.id} completed; certificate {certificate.id} "
            f"{'issued' if created else 'already present'}"
        )
        return True

    def get_user_enrollments(
        self,
        db: Session,
        current_user_context: UserContext,
        status: Optional[EnrollmentStatusFilter] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        result = crud_enrollment.get_by_user(
            db, user_id=current_user_context.user_id, status=status, page=page, size=limit
        )
        result["items"] = [EnrollmentWithCourse.model_validate(e) for e in result["items"]]
        return result

    def get_enrollment(self, db: Session, enrollment_id: int, current_user_context: UserContext) -> EnrollmentDetail:
        enrollment = crud_enrollment.get(db, id=enrollment_id)
        if not enrollment:
            raise EnrollmentNotFoundException()

        course = enrollment.course
        if enrollment.user_id != current_user_context.user_id and not permission_helper.can_manage_course(
            current_user_context, course
        ):
            raise ForbiddenException(detail="You do not have access to this enrollment")

        records = crud_lesson_progress.get_by_user_and_course(
            db, user_id=enrollment.user_id, course_id=course.id
        )
        return EnrollmentDetail(
            enrollment=EnrollmentSchema.model_validate(enrollment),
            course=CourseSchema.model_validate(course),
            lessons=merge_lessons_with_progress(course.lessons, records),
        )

    def get_course_enrollments(
        self, db: Session, course_id: int, current_user_context: UserContext, page: int = 1, limit: int = 20
    ) -> Dict[str, Any]:
        course = crud_course.get(db, id=course_id)
        if not course:
            raise CourseNotFoundException(course_id)
        permission_helper.require_course_management_permission(
            current_user_context, course, "You can only view enrollments for your own courses"
        )

        result = crud_enrollment.get_by_course(db, course_id=course_id, page=page, size=limit)
        result["items"] = [EnrollmentSchema.model_validate(e) for e in result["items"]]
        return result


enrollment_service = EnrollmentService()
