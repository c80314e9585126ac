from pydantic import BaseModel, EmailStr, field_validator, ConfigDict, model_validator
from typing import Optional, Any
from datetime import datetime

from app.core.constants import RoleEnum

class UserBase(BaseModel):
    """Base user schema with common fields."""
    name: str
    email: EmailStr
    avatar: Optional[str] = None

class UserCreate(UserBase):
    """Schema for registering a new user, includes password."""
    password: str
    role: RoleEnum = RoleEnum.STUDENT

    @field_validator("name")
    def validate_name(cls, v):
        v = v.strip()
        if len(v) < 2 or len(v) > 50:
            raise ValueError("Name must be between 2 and 50 characters")
        return v

    @field_validator("password")
    def validate_password(cls, v):
        if not v or not v.strip():
            raise ValueError("Password cannot be empty or contain only whitespace.")
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters long.")
        return v

    @field_validator("role")
    def validate_role(cls, v):
        if v not in [RoleEnum.STUDENT, RoleEnum.INSTRUCTOR]:
            raise ValueError("Role must be either STUDENT or INSTRUCTOR")
        return v

class UserUpdate(BaseModel):
    """Schema for updating a user's profile."""
    name: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None

    @field_validator("name")
    def not_empty(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Name cannot be empty")
        return v

    @field_validator("bio")
    def bio_length(cls, v):
        if v is not None and len(v) > 500:
            raise ValueError("Bio must not exceed 500 characters")
        return v

    @model_validator(mode='before')
    @classmethod
    def at_least_one_value(cls, data: Any):
        if isinstance(data, dict) and not any(data.values()):
            raise ValueError("At least one field must be provided for update")
        return data

class PasswordChange(BaseModel):
    current_password: str
    new_password: str

    @field_validator("new_password")
    def validate_password(cls, v):
        if len(v) < 8:
            raise ValueError("New password must be at least 8 characters long.")
        return v

class User(UserBase):
    """Main user schema for reading user data."""
    id: int
    role: RoleEnum
    bio: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

class UserSummary(BaseModel):
    id: int
    name: str
    avatar: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)

class UserStatusUpdate(BaseModel):
    """Schema for updating a user's active status."""
    is_active: bool

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "is_active": False
            }
        }
    )

class UserContext(BaseModel):
    """The authenticated user acting on a request."""
    user: User
    model_config = ConfigDict(from_attributes=True)

    @property
    def user_id(self) -> int:
        return self.user.id

    @property
    def role(self) -> RoleEnum:
        return self.user.role
