import logging
from typing import List
from sqlalchemy.orm import Session

from app.core.exceptions import CourseNotFoundException, ForbiddenException, InvalidStateException, LessonNotFoundException
from app.crud.course import course as crud_course
from app.crud.enrollment import enrollment as crud_enrollment
from app.crud.lesson import lesson as crud_lesson
from app.models.lesson import Lesson as LessonModel
from app.schemas.lesson import LessonCreate, LessonUpdate
from app.schemas.user import UserContext
from app.utils.permission import PermissionHelper

logger = logging.getLogger(__name__)


class LessonService:

    def _get_lesson_or_404(self, db: Session, lesson_id: int) -> LessonModel:
        lesson = crud_lesson.get(db, id=lesson_id)
        if not lesson:
            raise LessonNotFoundException(lesson_id)
        return lesson

    def _ensure_order_free(self, db: Session, course_id: int, order: int, lesson_id: int = None):
        existing = crud_lesson.get_by_course_and_order(db, course_id=course_id, order=order)
        if existing and existing.id != lesson_id:
            raise InvalidStateException(detail=f"A lesson with order {order} already exists in this course")

    def create_lesson(self, db: Session, lesson_in: LessonCreate, current_user_context: UserContext) -> LessonModel:
        course = crud_course.get(db, id=lesson_in.course_id)
        if not course:
            raise CourseNotFoundException(lesson_in.course_id)

        PermissionHelper.require_course_management_permission(
            current_user_context, course, "You can only create lessons for your own courses"
        )
        self._ensure_order_free(db, course.id, lesson_in.order)

        new_lesson = crud_lesson.create(db, obj_in=lesson_in)
        logger.info(f"Lesson {new_lesson.id} added to course {course.id} at position {new_lesson.order}")
        return new_lesson

    def get_lesson(self, db: Session, lesson_id: int, current_user_context: UserContext) -> LessonModel:
        lesson = self._get_lesson_or_404(db, lesson_id)
        if lesson.is_preview:
            return lesson

        course = lesson.course
        if PermissionHelper.can_manage_course(current_user_context, course):
            return lesson

        enrollment = crud_enrollment.get_by_user_and_course(
            db, user_id=current_user_context.user_id, course_id=course.id
        )
        if not enrollment:
            raise ForbiddenException(detail="You must be enrolled in this course to view this lesson")
        return lesson

    def get_course_lessons(self, db: Session, course_id: int) -> List[LessonModel]:
        if not crud_course.get(db, id=course_id):
            raise CourseNotFoundException(course_id)
        return crud_lesson.get_by_course(db, course_id=course_id)

    def update_lesson(
        self, db: Session, lesson_id: int, lesson_in: LessonUpdate, current_user_context: UserContext
    ) -> LessonModel:
        lesson = self._get_lesson_or_404(db, lesson_id)
        PermissionHelper.require_course_management_permission(
            current_user_context, lesson.course, "You can only update lessons in your own courses"
        )
        if lesson_in.order is not None and lesson_in.order != lesson.order:
            self._ensure_order_free(db, lesson.course_id, lesson_in.order, lesson_id=lesson.id)

        return crud_lesson.update(db, db_obj=lesson, obj_in=lesson_in)

    def delete_lesson(self, db: Session, lesson_id: int, current_user_context: UserContext) -> LessonModel:
        lesson = self._get_lesson_or_404(db, lesson_id)
        PermissionHelper.require_course_management_permission(
            current_user_context, lesson.course, "You can only delete lessons from your own courses"
        )
        crud_lesson.delete(db, id=lesson.id)
        logger.info(f"Lesson {lesson_id} removed from course {lesson.course_id}")
        return lesson


lesson_service = LessonService()
