from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.schemas.response import APIResponse
from app.schemas.token import AuthResponse, LoginRequest
from app.schemas.user import PasswordChange, User, UserContext, UserCreate, UserUpdate
from app.services.auth import auth_service
from app.utils import deps

router = APIRouter()


@router.post("/register", response_model=APIResponse[AuthResponse], status_code=status.HTTP_201_CREATED)
def register(
    *,
    db: Session = Depends(deps.get_transactional_db),
    user_in: UserCreate
):
    result = auth_service.register(db, user_in=user_in)
    return APIResponse(message="User registered successfully", data=result)


@router.post("/login", response_model=APIResponse[AuthResponse])
def login(
    request: LoginRequest,
    db: Session = Depends(deps.get_db)
):
    result = auth_service.login(db, email=request.email, password=request.password)
    return APIResponse(message="Login successful", data=result)


@router.get("/profile", response_model=APIResponse[User])
def get_profile(
    *,
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    user = auth_service.get_profile(db, current_user_context=context)
    return APIResponse(message="Profile retrieved successfully", data=User.model_validate(user))


@router.put("/profile", response_model=APIResponse[User])
def update_profile(
    *,
    db: Session = Depends(deps.get_transactional_db),
    user_in: UserUpdate,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    user = auth_service.update_profile(db, user_in=user_in, current_user_context=context)
    return APIResponse(message="Profile updated successfully", data=User.model_validate(user))


@router.put("/change-password", response_model=APIResponse[None])
def change_password(
    *,
    db: Session = Depends(deps.get_transactional_db),
    password_in: PasswordChange,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    auth_service.change_password(db, password_in=password_in, current_user_context=context)
    return APIResponse(message="Password changed successfully", data=None)
