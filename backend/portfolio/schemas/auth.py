"""Auth schemas."""
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=1)
    company_name: str = Field(..., min_length=1, max_length=255)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    id: str
    company_id: str
    name: str
    email: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class CurrentUserResponse(UserResponse):
    company_name: str


class Token(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserResponse
