import logging
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from sqlalchemy.orm import Session

from app.core.constants import PROGRESS_MAX, PROGRESS_UNFINISHED_MAX
from app.core.exceptions import EnrollmentNotFoundException, LessonNotFoundException, NotEnrolledException
from app.crud.certificate import certificate as crud_certificate
from app.crud.enrollment import enrollment as crud_enrollment
from app.crud.lesson import lesson as crud_lesson
from app.crud.lesson_progress import lesson_progress as crud_lesson_progress
from app.models.enrollment import Enrollment as EnrollmentModel
from app.models.lesson_progress import LessonProgress as LessonProgressModel
from app.schemas.enrollment import Enrollment as EnrollmentSchema, EnrollmentWithCourse
from app.schemas.lesson_progress import CourseProgressOverview, LearningStats, LessonProgressUpdate
from app.schemas.user import UserContext
from app.services.enrollment import enrollment_service, merge_lessons_with_progress

logger = logging.getLogger(__name__)


def round_half_up(value, places: str = "0.1") -> float:
    return float(Decimal(str(value)).quantize(Decimal(places), rounding=ROUND_HALF_UP))


def calculate_progress(completed_lessons: int, total_lessons: int) -> float:
    """Percentage of completed lessons, rounded half-up to one decimal.

    A course without lessons has progress 0. Only a fully completed course
    reaches 100; anything short of that is capped at 99.9.
    """
    if total_lessons <= 0:
        return 0.0
    progress = round_half_up(Decimal(100) * completed_lessons / total_lessons)
    if completed_lessons < total_lessons:
        return min(progress, PROGRESS_UNFINISHED_MAX)
    return progress


class CourseProgressService:

    def _get_enrollment_or_raise(self, db: Session, user_id: int, course_id: int) -> EnrollmentModel:
        enrollment = crud_enrollment.get_by_user_and_course(db, user_id=user_id, course_id=course_id)
        if not enrollment:
            raise NotEnrolledException()
        return enrollment

    def upsert_lesson_progress(
        self, db: Session, lesson_id: int, progress_in: LessonProgressUpdate, current_user_context: UserContext
    ) -> LessonProgressModel:
        lesson = crud_lesson.get(db, id=lesson_id)
        if not lesson:
            raise LessonNotFoundException(lesson_id)

        user_id = current_user_context.user_id
        self._get_enrollment_or_raise(db, user_id, lesson.course_id)

        record = crud_lesson_progress.get_by_user_and_lesson(db, user_id=user_id, lesson_id=lesson_id)
        update_data = progress_in.model_dump(exclude_unset=True, exclude_none=True)

        if record is None:
            is_completed = bool(update_data.get("is_completed", False))
            record = crud_lesson_progress.create(db, obj_in={
                "user_id": user_id,
                "lesson_id": lesson_id,
                "is_completed": is_completed,
                "watch_time": update_data.get("watch_time", 0),
                "completed_at": datetime.now(timezone.utc) if is_completed else None,
            })
        else:
            if update_data.get("is_completed") and not record.is_completed:
                update_data["completed_at"] = datetime.now(timezone.utc)
            elif update_data.get("is_completed") is False and record.is_completed:
                update_data["completed_at"] = None
            if update_data:
                record = crud_lesson_progress.update(db, db_obj=record, obj_in=update_data)

        logger.info(
            f"Lesson progress recorded: user={user_id} lesson={lesson_id} "
            f"completed={record.is_completed} watch_time={record.watch_time}"
        )
        self.recompute_course_progress(db, user_id=user_id, course_id=lesson.course_id)
        return record

    def recompute_course_progress(self, db: Session, *, user_id: int, course_id: int) -> Optional[EnrollmentModel]:
        """Derive Enrollment.progress from completed lessons and complete the course at 100%."""
        enrollment = crud_enrollment.get_by_user_and_course(db, user_id=user_id, course_id=course_id)
        if not enrollment:
            return None

        # Completed is terminal; its progress stays at 100.
        if enrollment.is_completed:
            return enrollment

        total = crud_lesson.count_by_course(db, course_id=course_id)
        completed = crud_lesson_progress.count_completed_in_course(db, user_id=user_id, course_id=course_id)
        progress = calculate_progress(completed, total)

        enrollment = crud_enrollment.set_progress(db, enrollment=enrollment, progress=progress)

        if progress == PROGRESS_MAX:
            enrollment_service.try_transition_to_completed(db, enrollment)
        return enrollment

    def mark_lesson_complete(self, db: Session, lesson_id: int, current_user_context: UserContext) -> LessonProgressModel:
        return self.upsert_lesson_progress(
            db, lesson_id, LessonProgressUpdate(is_completed=True), current_user_context
        )

    def get_lesson_progress(self, db: Session, lesson_id: int, current_user_context: UserContext) -> Optional[LessonProgressModel]:
        lesson = crud_lesson.get(db, id=lesson_id)
        if not lesson:
            raise LessonNotFoundException(lesson_id)
        self._get_enrollment_or_raise(db, current_user_context.user_id, lesson.course_id)
        return crud_lesson_progress.get_by_user_and_lesson(
            db, user_id=current_user_context.user_id, lesson_id=lesson_id
        )

    def get_course_progress_overview(
        self, db: Session, course_id: int, current_user_context: UserContext
    ) -> CourseProgressOverview:
        user_id = current_user_context.user_id
        enrollment = crud_enrollment.get_by_user_and_course(db, user_id=user_id, course_id=course_id)
        if not enrollment:
            raise EnrollmentNotFoundException(detail="You are not enrolled in this course")

        lessons = crud_lesson.get_by_course(db, course_id=course_id)
        records = crud_lesson_progress.get_by_user_and_course(db, user_id=user_id, course_id=course_id)
        merged = merge_lessons_with_progress(lessons, records)
        completed = sum(1 for lesson in merged if lesson.progress.is_completed)

        return CourseProgressOverview(
            enrollment=EnrollmentSchema.model_validate(enrollment),
            overall_progress=enrollment.progress,
            total_lessons=len(merged),
            completed_lessons=completed,
            lessons=merged,
        )

    def get_learning_stats(self, db: Session, current_user_context: UserContext) -> LearningStats:
        user_id = current_user_context.user_id
        enrollments = crud_enrollment.get_all_by_user(db, user_id=user_id)
        completed_courses = sum(1 for e in enrollments if e.is_completed)
        average = round_half_up(sum(e.progress for e in enrollments) / len(enrollments)) if enrollments else 0.0
        watch_seconds = crud_lesson_progress.total_watch_time_by_user(db, user_id=user_id)

        return LearningStats(
            total_enrollments=len(enrollments),
            completed_courses=completed_courses,
            in_progress_courses=len(enrollments) - completed_courses,
            total_lessons_completed=crud_lesson_progress.count_completed_by_user(db, user_id=user_id),
            total_study_time_minutes=int(watch_seconds) // 60,
            certificates_earned=crud_certificate.count_by_user(db, user_id=user_id),
            average_progress=average,
            recent_courses=[EnrollmentWithCourse.model_validate(e) for e in enrollments[:5]],
        )


course_progress_service = CourseProgressService()
