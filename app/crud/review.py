from sqlalchemy.orm import Session, selectinload
from sqlalchemy import func
from typing import Any, Dict, List, Optional

from app.crud.base import CRUDBase, paginate
from app.models.review import Review
from app.schemas.review import ReviewCreate, ReviewUpdate


class CRUDReview(CRUDBase[Review, ReviewCreate, ReviewUpdate]):

    def _query_with_relationships(self, db: Session):
        return db.query(Review).options(
            selectinload(Review.user),
            selectinload(Review.course),
        )

    def get(self, db: Session, id: int) -> Optional[Review]:
        return self._query_with_relationships(db).filter(Review.id == id).first()

    def get_by_user_and_course(self, db: Session, *, user_id: int, course_id: int) -> Optional[Review]:
        return (
            db.query(Review)
            .filter(Review.user_id == user_id, Review.course_id == course_id)
            .first()
        )

    def get_by_course(
        self, db: Session, *, course_id: int, rating: Optional[int] = None, page: int = 1, size: int = 10
    ) -> Dict[str, Any]:
        query = self._query_with_relationships(db).filter(Review.course_id == course_id)
        if rating:
            query = query.filter(Review.rating == rating)
        return paginate(query.order_by(Review.created_at.desc(), Review.id.desc()), page, size)

    def get_by_user(self, db: Session, *, user_id: int) -> List[Review]:
        return (
            self._query_with_relationships(db)
            .filter(Review.user_id == user_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .all()
        )

    def get_average_rating(self, db: Session, *, course_id: int) -> float:
        result = (
            db.query(func.avg(Review.rating))
            .filter(Review.course_id == course_id)
            .scalar()
        )
        return round(float(result), 1) if result else 0.0

    def get_review_count(self, db: Session, *, course_id: int) -> int:
        return db.query(Review).filter(Review.course_id == course_id).count()

    def get_rating_distribution(self, db: Session, *, course_id: int) -> Dict[int, int]:
        results = (
            db.query(Review.rating, func.count(Review.id))
            .filter(Review.course_id == course_id)
            .group_by(Review.rating)
            .all()
        )

        distribution = {1: 0, 2: 0, 3: 0, 4: 0, 5: 0}
        for rating, count in results:
            distribution[int(rating)] = count

        return distribution


review = CRUDReview(Review)
