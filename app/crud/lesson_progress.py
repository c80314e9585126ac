from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List, Optional

from app.crud.base import CRUDBase
from app.models.lesson import Lesson
from app.models.lesson_progress import LessonProgress
from app.schemas.lesson_progress import LessonProgressUpdate


class CRUDLessonProgress(CRUDBase[LessonProgress, LessonProgressUpdate, LessonProgressUpdate]):

    def get_by_user_and_lesson(self, db: Session, *, user_id: int, lesson_id: int) -> Optional[LessonProgress]:
        return (
            db.query(LessonProgress)
            .filter(LessonProgress.user_id == user_id, LessonProgress.lesson_id == lesson_id)
            .first()
        )

    def get_by_user_and_course(self, db: Session, *, user_id: int, course_id: int) -> List[LessonProgress]:
        return (
            db.query(LessonProgress)
            .join(Lesson, LessonProgress.lesson_id == Lesson.id)
            .filter(LessonProgress.user_id == user_id, Lesson.course_id == course_id)
            .all()
        )

    def count_completed_in_course(self, db: Session, *, user_id: int, course_id: int) -> int:
        return (
            db.query(func.count(LessonProgress.id))
            .join(Lesson, LessonProgress.lesson_id == Lesson.id)
            .filter(
                LessonProgress.user_id == user_id,
                Lesson.course_id == course_id,
                LessonProgress.is_completed.is_(True),
            )
            .scalar()
            or 0
        )

    def count_completed_by_user(self, db: Session, *, user_id: int) -> int:
        return (
            db.query(func.count(LessonProgress.id))
            .filter(LessonProgress.user_id == user_id, LessonProgress.is_completed.is_(True))
            .scalar()
            or 0
        )

    def total_watch_time_by_user(self, db: Session, *, user_id: int) -> int:
        return (
            db.query(func.coalesce(func.sum(LessonProgress.watch_time), 0))
            .filter(LessonProgress.user_id == user_id)
            .scalar()
            or 0
        )


lesson_progress = CRUDLessonProgress(LessonProgress)
