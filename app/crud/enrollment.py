from datetime import datetime, timezone
from sqlalchemy.orm import Session, selectinload
from typing import Any, Dict, List, Optional

from app.core.constants import EnrollmentStatusFilter
from app.crud.base import CRUDBase, paginate
from app.models.course import Course
from app.models.enrollment import Enrollment
from app.schemas.enrollment import EnrollmentCreate, EnrollmentProgressUpdate


class CRUDEnrollment(CRUDBase[Enrollment, EnrollmentCreate, EnrollmentProgressUpdate]):

    def _query_with_relationships(self, db: Session):
        return db.query(Enrollment).options(
            selectinload(Enrollment.course).selectinload(Course.lessons),
            selectinload(Enrollment.course).selectinload(Course.instructor),
        )

    def get(self, db: Session, id: int) -> Optional[Enrollment]:
        return self._query_with_relationships(db).filter(Enrollment.id == id).first()

    def get_by_user_and_course(self, db: Session, *, user_id: int, course_id: int) -> Optional[Enrollment]:
        return (
            db.query(Enrollment)
            .filter(Enrollment.user_id == user_id, Enrollment.course_id == course_id)
            .first()
        )

    def get_by_user(
        self,
        db: Session,
        *,
        user_id: int,
        status: Optional[EnrollmentStatusFilter] = None,
        page: int = 1,
        size: int = 10,
    ) -> Dict[str, Any]:
        query = self._query_with_relationships(db).filter(Enrollment.user_id == user_id)
        if status == EnrollmentStatusFilter.COMPLETED:
            query = query.filter(Enrollment.is_completed.is_(True))
        elif status == EnrollmentStatusFilter.ACTIVE:
            query = query.filter(Enrollment.is_completed.is_(False))
        return paginate(query.order_by(Enrollment.enrolled_at.desc(), Enrollment.id.desc()), page, size)

    def get_all_by_user(self, db: Session, *, user_id: int) -> List[Enrollment]:
        return (
            self._query_with_relationships(db)
            .filter(Enrollment.user_id == user_id)
            .order_by(Enrollment.updated_at.desc(), Enrollment.id.desc())
            .all()
        )

    def get_by_course(self, db: Session, *, course_id: int, page: int = 1, size: int = 20) -> Dict[str, Any]:
        query = (
            db.query(Enrollment)
            .options(selectinload(Enrollment.user))
            .filter(Enrollment.course_id == course_id)
            .order_by(Enrollment.enrolled_at.desc(), Enrollment.id.desc())
        )
        return paginate(query, page, size)

    def count_by_course(self, db: Session, *, course_id: int) -> int:
        return db.query(Enrollment).filter(Enrollment.course_id == course_id).count()

    def set_progress(self, db: Session, *, enrollment: Enrollment, progress: float) -> Enrollment:
        return self.update(db, db_obj=enrollment, obj_in={"progress": progress})

    def mark_completed_if_pending(self, db: Session, *, enrollment_id: int) -> bool:
        """Flip is_completed false -> true in one conditional UPDATE.

        Returns True only for the caller whose statement changed the row, so
        concurrent callers cannot both observe the transition.
        """
        rowcount = (
            db.query(Enrollment)
            .filter(Enrollment.id == enrollment_id, Enrollment.is_completed.is_(False))
            .update(
                {
                    Enrollment.is_completed: True,
                    Enrollment.progress: 100.0,
                    Enrollment.completed_at: datetime.now(timezone.utc),
                },
                synchronize_session="fetch",
            )
        )
        db.flush()
        return rowcount == 1


enrollment = CRUDEnrollment(Enrollment)
