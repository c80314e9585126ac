from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.schemas.response import APIResponse
from app.schemas.review import CourseReviews, Review, ReviewCreate, ReviewUpdate
from app.schemas.user import UserContext
from app.services.review import review_service
from app.utils import deps

router = APIRouter()


@router.post("", response_model=APIResponse[Review], status_code=status.HTTP_201_CREATED)
def create_review(
    *,
    db: Session = Depends(deps.get_transactional_db),
    review_in: ReviewCreate,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    review = review_service.create_review(db, review_in=review_in, current_user_context=context)
    return APIResponse(message="Review created successfully", data=Review.model_validate(review))


@router.get("/my-reviews", response_model=APIResponse[List[Review]])
def get_my_reviews(
    *,
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    reviews = review_service.get_user_reviews(db, current_user_context=context)
    return APIResponse(message="Reviews retrieved successfully", data=[Review.model_validate(r) for r in reviews])


@router.get("/course/{course_id}", response_model=APIResponse[CourseReviews])
def get_course_reviews(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int,
    rating: Optional[int] = Query(None, ge=1, le=5),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50)
):
    reviews = review_service.get_course_reviews(db, course_id=course_id, rating=rating, page=page, limit=limit)
    return APIResponse(message="Course reviews retrieved successfully", data=reviews)


@router.put("/{review_id}", response_model=APIResponse[Review])
def update_review(
    *,
    db: Session = Depends(deps.get_transactional_db),
    review_id: int,
    review_in: ReviewUpdate,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    review = review_service.update_review(db, review_id=review_id, review_in=review_in, current_user_context=context)
    return APIResponse(message="Review updated successfully", data=Review.model_validate(review))


@router.delete("/{review_id}", response_model=APIResponse[None])
def delete_review(
    *,
    db: Session = Depends(deps.get_transactional_db),
    review_id: int,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    review_service.delete_review(db, review_id=review_id, current_user_context=context)
    return APIResponse(message="Review deleted successfully", data=None)
