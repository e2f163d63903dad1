from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class RegisterRequest(BaseModel):
    email:         EmailStr
    password:      str = Field(min_length=6)
    first_name:    str = Field(alias="firstName", min_length=1)
    last_name:     str = Field(alias="lastName", min_length=1)
    hospital_name: Optional[str] = Field(default=None, alias="hospitalName")

    class Config:
        populate_by_name = True


class LoginRequest(BaseModel):
    email:    EmailStr
    password: str


class UserResponse(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    hospital_name: Optional[str] = None
    role: str

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    token: str
    user: UserResponse
