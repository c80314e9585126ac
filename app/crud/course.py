from sqlalchemy.orm import Session, selectinload
from sqlalchemy import or_
from typing import Any, Dict, List, Optional

from app.core.constants import CourseLevelEnum, CourseStatusEnum
from app.crud.base import CRUDBase, paginate
from app.models.course import Course
from app.schemas.course import CourseCreate, CourseUpdate


class CRUDCourse(CRUDBase[Course, CourseCreate, CourseUpdate]):

    def _query_with_relationships(self, db: Session):
        return db.query(Course).options(
            selectinload(Course.instructor),
            selectinload(Course.lessons),
        )

    def get(self, db: Session, id: int) -> Optional[Course]:
        return self._query_with_relationships(db).filter(Course.id == id).first()

    def create_for_instructor(self, db: Session, *, obj_in: CourseCreate, instructor_id: int) -> Course:
        course_data = obj_in.model_dump()
        course_data["instructor_id"] = instructor_id
        course_data["status"] = CourseStatusEnum.DRAFT
        course_data["is_published"] = False
        return self.create(db, obj_in=course_data)

    def get_published(
        self,
        db: Session,
        *,
        search: Optional[str] = None,
        category: Optional[str] = None,
        level: Optional[CourseLevelEnum] = None,
        page: int = 1,
        size: int = 12,
    ) -> Dict[str, Any]:
        query = (
            self._query_with_relationships(db)
            .filter(Course.status == CourseStatusEnum.PUBLISHED)
            .filter(Course.is_published.is_(True))
        )
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Course.title.ilike(pattern), Course.description.ilike(pattern)))
        if category:
            query = query.filter(Course.category == category)
        if level:
            query = query.filter(Course.level == level)
        return paginate(query.order_by(Course.created_at.desc(), Course.id.desc()), page, size)

    def get_by_instructor(self, db: Session, *, instructor_id: int) -> List[Course]:
        return (
            self._query_with_relationships(db)
            .filter(Course.instructor_id == instructor_id)
            .order_by(Course.created_at.desc(), Course.id.desc())
            .all()
        )

    def get_filtered(
        self,
        db: Session,
        *,
        search: Optional[str] = None,
        status: Optional[CourseStatusEnum] = None,
        category: Optional[str] = None,
        page: int = 1,
        size: int = 20,
    ) -> Dict[str, Any]:
        query = self._query_with_relationships(db)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Course.title.ilike(pattern), Course.description.ilike(pattern)))
        if status:
            query = query.filter(Course.status == status)
        if category:
            query = query.filter(Course.category == category)
        return paginate(query.order_by(Course.created_at.desc(), Course.id.desc()), page, size)

    def get_by_status(self, db: Session, *, status: CourseStatusEnum) -> List[Course]:
        return (
            self._query_with_relationships(db)
            .filter(Course.status == status)
            .order_by(Course.updated_at.desc(), Course.id.desc())
            .all()
        )

    def set_status(
        self, db: Session, *, course: Course, status: CourseStatusEnum, rejection_reason: Optional[str] = None
    ) -> Course:
        update_data = {
            "status": status,
            "is_published": status == CourseStatusEnum.PUBLISHED,
        }
        if status == CourseStatusEnum.DRAFT and rejection_reason:
            update_data["rejection_reason"] = rejection_reason
        elif status == CourseStatusEnum.PUBLISHED:
            update_data["rejection_reason"] = None
        return self.update(db, db_obj=course, obj_in=update_data)


course = CRUDCourse(Course)
