import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictException, CourseNotFoundException, ForbiddenException, NotFoundException
from app.crud.course import course as crud_course
from app.crud.enrollment import enrollment as crud_enrollment
from app.crud.review import review as crud_review
from app.models.review import Review as ReviewModel
from app.schemas.review import CourseReviews, RatingBucket, Review as ReviewSchema, ReviewCreate, ReviewStats, ReviewUpdate
from app.schemas.user import UserContext
from app.utils.permission import PermissionHelper as permission_helper

logger = logging.getLogger(__name__)


class ReviewService:

    def _get_review_or_404(self, db: Session, review_id: int) -> ReviewModel:
        review = crud_review.get(db, id=review_id)
        if not review:
            raise NotFoundException(detail="Review not found")
        return review

    def create_review(self, db: Session, review_in: ReviewCreate, current_user_context: UserContext) -> ReviewModel:
        course = crud_course.get(db, id=review_in.course_id)
        if not course:
            raise CourseNotFoundException(review_in.course_id)

        enrollment = crud_enrollment.get_by_user_and_course(
            db, user_id=current_user_context.user_id, course_id=course.id
        )
        if not enrollment:
            raise ForbiddenException(detail="You must be enrolled in this course to leave a review")

        existing_review = crud_review.get_by_user_and_course(
            db, user_id=current_user_context.user_id, course_id=course.id
        )
        if existing_review:
            raise ConflictException(detail="You have already reviewed this course. Use update instead.")

        review_data = review_in.model_dump()
        review_data["user_id"] = current_user_context.user_id
        review = crud_review.create(db, obj_in=review_data)
        logger.info(f"User {current_user_context.user_id} reviewed course {course.id} with rating {review.rating}")
        return review

    def update_review(
        self, db: Session, review_id: int, review_in: ReviewUpdate, current_user_context: UserContext
    ) -> ReviewModel:
        review = self._get_review_or_404(db, review_id)
        permission_helper.require_owner(current_user_context, review.user_id, "You can only update your own reviews")

        update_data = review_in.model_dump(exclude_unset=True)
        if "comment" in update_data and update_data["comment"] is not None:
            update_data["comment"] = update_data["comment"].strip() or None
        if update_data.get("rating") is None:
            update_data.pop("rating", None)
        return crud_review.update(db, db_obj=review, obj_in=update_data)

    def delete_review(self, db: Session, review_id: int, current_user_context: UserContext) -> ReviewModel:
        review = self._get_review_or_404(db, review_id)
        permission_helper.require_owner(current_user_context, review.user_id, "You can only delete your own reviews")

        crud_review.delete(db, id=review.id)
        return review

    def get_course_review_stats(self, db: Session, course_id: int) -> ReviewStats:
        total = crud_review.get_review_count(db, course_id=course_id)
        distribution = crud_review.get_rating_distribution(db, course_id=course_id)
        return ReviewStats(
            average_rating=crud_review.get_average_rating(db, course_id=course_id),
            total_reviews=total,
            rating_distribution={
                rating: RatingBucket(
                    count=count,
                    percentage=round(count / total * 100, 1) if total > 0 else 0.0,
                )
                for rating, count in distribution.items()
            },
        )

    def get_course_reviews(
        self, db: Session, course_id: int, rating: Optional[int] = None, page: int = 1, limit: int = 10
    ) -> CourseReviews:
        if not crud_course.get(db, id=course_id):
            raise CourseNotFoundException(course_id)

        result = crud_review.get_by_course(db, course_id=course_id, rating=rating, page=page, size=limit)
        return CourseReviews(
            reviews=[ReviewSchema.model_validate(r) for r in result["items"]],
            stats=self.get_course_review_stats(db, course_id),
            total=result["total"],
            page=result["page"],
            size=result["size"],
            pages=result["pages"],
        )

    def get_user_reviews(self, db: Session, current_user_context: UserContext) -> List[ReviewModel]:
        return crud_review.get_by_user(db, user_id=current_user_context.user_id)


review_service = ReviewService()
