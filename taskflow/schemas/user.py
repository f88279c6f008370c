from typing import Optional
from pydantic import BaseModel, Field, field_validator


class LoginRequest(BaseModel):
    # Presence is checked by the auth handler so a missing field is a 400
    username: Optional[str] = None
    password: Optional[str] = None


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)
    phone: Optional[str] = Field(None, max_length=32)
    profile_completed: bool = Field(False, alias="profileCompleted")
    profile_picture_url: Optional[str] = Field(None, max_length=1024, alias="profilePictureUrl")

    @field_validator("username")
    @classmethod
    def strip_username(cls, value):
        value = value.strip()
        if not value:
            raise ValueError("username may not be blank")
        return value

    class Config:
        populate_by_name = True


class UserOut(BaseModel):
    id: str
    username: str

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    user: UserOut
