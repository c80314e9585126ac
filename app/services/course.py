import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from app.core.constants import CourseLevelEnum, CoursePublishAction, CourseStatusEnum
from app.core.exceptions import CourseNotFoundException, InvalidStateException
from app.crud.course import course as crud_course
from app.crud.enrollment import enrollment as crud_enrollment
from app.crud.review import review as crud_review
from app.models.course import Course as CourseModel
from app.schemas.course import CourseCreate, CourseUpdate, Course as CourseSchema, CourseDetail
from app.schemas.user import UserContext
from app.utils.permission import PermissionHelper as permission_helper

logger = logging.getLogger(__name__)


class CourseService:

    def _get_course_or_404(self, db: Session, course_id: int) -> CourseModel:
        course = crud_course.get(db, id=course_id)
        if not course:
            raise CourseNotFoundException(course_id)
        return course

    def list_published_courses(
        self,
        db: Session,
        *,
        search: Optional[str] = None,
        category: Optional[str] = None,
        level: Optional[CourseLevelEnum] = None,
        page: int = 1,
        limit: int = 12,
    ) -> Dict[str, Any]:
        result = crud_course.get_published(
            db, search=search, category=category, level=level, page=page, size=limit
        )
        result["items"] = [CourseSchema.model_validate(c) for c in result["items"]]
        return result

    def get_course_detail(self, db: Session, course_id: int) -> CourseDetail:
        course = self._get_course_or_404(db, course_id)
        detail = CourseDetail.model_validate(course)
        detail.students_count = crud_enrollment.count_by_course(db, course_id=course.id)
        detail.reviews_count = crud_review.get_review_count(db, course_id=course.id)
        detail.average_rating = crud_review.get_average_rating(db, course_id=course.id)
        return detail

    def get_instructor_courses(self, db: Session, current_user_context: UserContext) -> List[CourseModel]:
        return crud_course.get_by_instructor(db, instructor_id=current_user_context.user_id)

    def create_course(self, db: Session, course_in: CourseCreate, current_user_context: UserContext) -> CourseModel:
        course = crud_course.create_for_instructor(
            db, obj_in=course_in, instructor_id=current_user_context.user_id
        )
        logger.info(f"Course {course.id} created by instructor {current_user_context.user_id}")
        return course

    def update_course(
        self, db: Session, course_id: int, course_in: CourseUpdate, current_user_context: UserContext
    ) -> CourseModel:
        course = self._get_course_or_404(db, course_id)
        permission_helper.require_course_management_permission(
            current_user_context, course, "You can only edit your own courses"
        )
        return crud_course.update(db, db_obj=course, obj_in=course_in)

    def delete_course(self, db: Session, course_id: int, current_user_context: UserContext) -> CourseModel:
        course = self._get_course_or_404(db, course_id)
        permission_helper.require_course_management_permission(
            current_user_context, course, "You can only delete your own courses"
        )
        if crud_enrollment.count_by_course(db, course_id=course.id) > 0:
            raise InvalidStateException(detail="Cannot delete course with active enrollments")

        crud_course.delete(db, id=course.id)
        logger.info(f"Course {course_id} deleted by user {current_user_context.user_id}")
        return course

    def _validate_for_submission(self, course: CourseModel) -> List[str]:
        errors = []
        if not course.title or len(course.title) < 10:
            errors.append("Title must be at least 10 characters")
        if not course.description or len(course.description) < 50:
            errors.append("Description must be at least 50 characters")
        if len(course.lessons) == 0:
            errors.append("Course must have at least one lesson")
        if not course.category:
            errors.append("Category is required")
        if not course.level:
            errors.append("Level is required")
        if course.price is None or course.price <= 0:
            errors.append("Price must be greater than 0")
        return errors

    def submit_for_approval(self, db: Session, course_id: int, current_user_context: UserContext) -> CourseModel:
        course = self._get_course_or_404(db, course_id)
        permission_helper.require_owner(
            current_user_context, course.instructor_id, "You can only submit your own courses for approval"
        )

        errors = self._validate_for_submission(course)
        if errors:
            raise InvalidStateException(detail="Course validation failed", details=errors)

        if course.status != CourseStatusEnum.DRAFT:
            raise InvalidStateException(detail="Only draft courses can be submitted for approval")

        course = crud_course.set_status(db, course=course, status=CourseStatusEnum.PENDING_APPROVAL)
        logger.info(f"Course {course.id} submitted for approval")
        return course

    def toggle_publish(
        self, db: Session, course_id: int, action: CoursePublishAction, current_user_context: UserContext
    ) -> CourseModel:
        """Publish a course straight away or take it back to DRAFT."""
        course = self._get_course_or_404(db, course_id)
        permission_helper.require_course_management_permission(
            current_user_context, course, "You can only publish your own courses"
        )

        publish = action == CoursePublishAction.PUBLISH
        if publish and len(course.lessons) == 0:
            raise InvalidStateException(detail="Course must have at least one lesson before publishing")

        status = CourseStatusEnum.PUBLISHED if publish else CourseStatusEnum.DRAFT
        course = crud_course.set_status(db, course=course, status=status)
        logger.info(f"Course {course.id} {action.value}ed by user {current_user_context.user_id}")
        return course

    def list_all_courses(
        self,
        db: Session,
        *,
        search: Optional[str] = None,
        status: Optional[CourseStatusEnum] = None,
        category: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Dict[str, Any]:
        result = crud_course.get_filtered(
            db, search=search, status=status, category=category, page=page, size=limit
        )
        result["items"] = [CourseSchema.model_validate(c) for c in result["items"]]
        return result

    def get_pending_approvals(self, db: Session) -> List[CourseModel]:
        return crud_course.get_by_status(db, status=CourseStatusEnum.PENDING_APPROVAL)

    def update_course_status(
        self,
        db: Session,
        course_id: int,
        status: CourseStatusEnum,
        rejection_reason: Optional[str] = None,
    ) -> CourseModel:
        course = self._get_course_or_404(db, course_id)
        course = crud_course.set_status(db, course=course, status=status, rejection_reason=rejection_reason)
        logger.info(f"Course {course.id} moved to {status.value}")
        return course


course_service = CourseService()
