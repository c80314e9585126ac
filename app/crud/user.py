from typing import Any, Dict, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.constants import RoleEnum
from app.crud.base import CRUDBase, paginate
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate

DELETED_EMAIL_PREFIX = "deleted_"


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):

    def get_by_email(self, db: Session, *, email: str) -> User | None:
        return db.query(User).filter(User.email == email.lower()).first()

    def create_with_password(self, db: Session, *, obj_in: UserCreate, hashed_password: str) -> User:
        user_data = obj_in.model_dump(exclude={"password"})
        user_data["email"] = obj_in.email.lower()
        user_data["hashed_password"] = hashed_password
        return self.create(db, obj_in=user_data)

    def set_password(self, db: Session, *, user: User, hashed_password: str) -> User:
        return self.update(db, db_obj=user, obj_in={"hashed_password": hashed_password})

    def set_active(self, db: Session, *, user: User, is_active: bool) -> Optional[User]:
        return self.update(db, db_obj=user, obj_in={"is_active": is_active})

    def get_filtered(
        self,
        db: Session,
        *,
        search: Optional[str] = None,
        role: Optional[RoleEnum] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        size: int = 20,
    ) -> Dict[str, Any]:
        query = db.query(User)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(User.name.ilike(pattern), User.email.ilike(pattern)))
        if role:
            query = query.filter(User.role == role)
        if is_active is not None:
            query = query.filter(User.is_active.is_(is_active))
        return paginate(query.order_by(User.created_at.desc(), User.id.desc()), page, size)

    def soft_delete(self, db: Session, *, user: User) -> User:
        """Deactivate the account and free its email for a new registration."""
        email = user.email
        if not email.startswith(DELETED_EMAIL_PREFIX):
            email = f"{DELETED_EMAIL_PREFIX}{email}"
        return self.update(db, db_obj=user, obj_in={"is_active": False, "email": email})


user = CRUDUser(User)
