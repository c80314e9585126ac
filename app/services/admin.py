import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from app.core.constants import CourseStatusEnum, RoleEnum, UserStatusFilter
from app.core.exceptions import ForbiddenException, InvalidStateException, NotFoundException
from app.crud.user import user as crud_user
from app.models.course import Course as CourseModel
from app.models.user import User as UserModel
from app.schemas.user import User as UserSchema, UserContext
from app.services.course import course_service

logger = logging.getLogger(__name__)


class AdminService:

    def _get_user_or_404(self, db: Session, user_id: int) -> UserModel:
        user = crud_user.get(db, id=user_id)
        if not user:
            raise NotFoundException(detail="User not found")
        return user

    def get_pending_approvals(self, db: Session) -> List[CourseModel]:
        return course_service.get_pending_approvals(db)

    def list_courses(
        self,
        db: Session,
        *,
        search: Optional[str] = None,
        status: Optional[CourseStatusEnum] = None,
        category: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Dict[str, Any]:
        return course_service.list_all_courses(
            db, search=search, status=status, category=category, page=page, limit=limit
        )

    def update_course_status(
        self,
        db: Session,
        course_id: int,
        status: CourseStatusEnum,
        current_user_context: UserContext,
        rejection_reason: Optional[str] = None,
    ) -> CourseModel:
        course = course_service.update_course_status(db, course_id, status, rejection_reason=rejection_reason)
        logger.info(f"Admin {current_user_context.user_id} set course {course_id} to {status.value}")
        return course

    def list_users(
        self,
        db: Session,
        *,
        search: Optional[str] = None,
        role: Optional[RoleEnum] = None,
        status: Optional[UserStatusFilter] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Dict[str, Any]:
        is_active = None if status is None else status == UserStatusFilter.ACTIVE
        result = crud_user.get_filtered(db, search=search, role=role, is_active=is_active, page=page, size=limit)
        result["items"] = [UserSchema.model_validate(u) for u in result["items"]]
        return result

    def update_user_status(
        self, db: Session, user_id: int, is_active: bool, current_user_context: UserContext
    ) -> UserModel:
        if user_id == current_user_context.user_id:
            raise ForbiddenException(detail="You cannot change your own account status")

        user = self._get_user_or_404(db, user_id)
        user = crud_user.set_active(db, user=user, is_active=is_active)
        logger.info(f"Admin {current_user_context.user_id} set user {user_id} active={is_active}")
        return user

    def delete_user(self, db: Session, user_id: int, current_user_context: UserContext) -> UserModel:
        """Soft delete: the account is deactivated and its row kept."""
        user = self._get_user_or_404(db, user_id)
        if user.id == current_user_context.user_id:
            raise InvalidStateException(detail="You cannot delete your own account")

        user = crud_user.soft_delete(db, user=user)
        logger.info(f"Admin {current_user_context.user_id} deleted user {user_id}")
        return user


admin_service = AdminService()
