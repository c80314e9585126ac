from app.core.constants import RoleEnum
from app.core.exceptions import ForbiddenException
from app.models.course import Course
from app.schemas.user import UserContext


class PermissionHelper:
    @staticmethod
    def is_admin(context: UserContext) -> bool:
        return context.role == RoleEnum.ADMIN

    @staticmethod
    def owns_course(context: UserContext, course: Course) -> bool:
        return course.instructor_id == context.user_id

    @staticmethod
    def can_manage_course(context: UserContext, course: Course) -> bool:
        if PermissionHelper.is_admin(context):
            return True
        return PermissionHelper.owns_course(context, course)

    @staticmethod
    def require_course_management_permission(context: UserContext, course: Course, error_message: str = None):
        if not PermissionHelper.can_manage_course(context, course):
            raise ForbiddenException(detail=error_message or "You do not have permission to manage this course")

    @staticmethod
    def require_owner(context: UserContext, owner_id: int, error_message: str):
        if owner_id != context.user_id:
            raise ForbiddenException(detail=error_message)

    @staticmethod
    def require_owner_or_admin(context: UserContext, owner_id: int, error_message: str):
        if owner_id != context.user_id and not PermissionHelper.is_admin(context):
            raise ForbiddenException(detail=error_message)
