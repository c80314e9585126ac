from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List, Optional

from app.crud.base import CRUDBase
from app.models.lesson import Lesson
from app.schemas.lesson import LessonCreate, LessonUpdate


class CRUDLesson(CRUDBase[Lesson, LessonCreate, LessonUpdate]):

    def get_by_course(self, db: Session, *, course_id: int) -> List[Lesson]:
        return (
            db.query(Lesson)
            .filter(Lesson.course_id == course_id)
            .order_by(Lesson.order.asc())
            .all()
        )

    def get_by_course_and_order(self, db: Session, *, course_id: int, order: int) -> Optional[Lesson]:
        return (
            db.query(Lesson)
            .filter(Lesson.course_id == course_id, Lesson.order == order)
            .first()
        )

    def count_by_course(self, db: Session, *, course_id: int) -> int:
        return db.query(func.count(Lesson.id)).filter(Lesson.course_id == course_id).scalar() or 0


lesson = CRUDLesson(Lesson)
