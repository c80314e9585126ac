import logging
from sqlalchemy.orm import Session

from app.core.exceptions import (
    ConflictException, InvalidStateException, UnauthorizedException,
)
from app.core.security import get_password_hash, verify_password, create_access_token
from app.crud.user import user as crud_user
from app.models.user import User
from app.schemas.token import AuthResponse, Token
from app.schemas.user import User as UserSchema, UserContext, UserCreate, UserUpdate, PasswordChange

logger = logging.getLogger(__name__)


class AuthService:
    def _issue_token(self, user: User) -> Token:
        token_payload = {"user_id": user.id, "role": user.role.value}
        access_token = create_access_token(data=token_payload, email=user.email)
        return Token(access_token=access_token, token_type="bearer")

    def register(self, db: Session, *, user_in: UserCreate) -> AuthResponse:
        if crud_user.get_by_email(db, email=user_in.email):
            raise ConflictException(detail="User already exists with this email")

        user = crud_user.create_with_password(
            db, obj_in=user_in, hashed_password=get_password_hash(user_in.password)
        )
        logger.info(f"Registered user {user.id} with role {user.role.value}")
        return AuthResponse(user=UserSchema.model_validate(user), token=self._issue_token(user))

    def login(self, db: Session, *, email: str, password: str) -> AuthResponse:
        user = crud_user.get_by_email(db, email=email)
        if not user or not verify_password(password, user.hashed_password):
            raise UnauthorizedException(detail="Invalid email or password")

        if not user.is_active:
            raise UnauthorizedException(detail="Account is deactivated")

        return AuthResponse(user=UserSchema.model_validate(user), token=self._issue_token(user))

    def get_profile(self, db: Session, *, current_user_context: UserContext) -> User:
        user = crud_user.get(db, id=current_user_context.user_id)
        if not user:
            raise UnauthorizedException(detail="User not found")
        return user

    def update_profile(self, db: Session, *, user_in: UserUpdate, current_user_context: UserContext) -> User:
        user = self.get_profile(db, current_user_context=current_user_context)
        update_data = user_in.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in update_data:
            update_data["name"] = update_data["name"].strip()
        return crud_user.update(db, db_obj=user, obj_in=update_data)

    def change_password(self, db: Session, *, password_in: PasswordChange, current_user_context: UserContext) -> None:
        user = self.get_profile(db, current_user_context=current_user_context)
        if not verify_password(password_in.current_password, user.hashed_password):
            raise InvalidStateException(detail="Current password is incorrect")
        if password_in.current_password == password_in.new_password:
            raise InvalidStateException(detail="New password must be different from the current password")

        crud_user.set_password(db, user=user, hashed_password=get_password_hash(password_in.new_password))
        logger.info(f"Password changed for user {user.id}")


auth_service = AuthService()
