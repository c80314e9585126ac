from pydantic import BaseModel, EmailStr
from .user import User

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class TokenPayload(BaseModel):
    user_id: int | None = None
    role: str | None = None
    sub: str | None = None
    jti: str | None = None
    exp: int | None = None

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class AuthResponse(BaseModel):
    """Response for register and login."""
    user: User
    token: Token
