"""
Request/response schemas for users and authentication.
"""

from typing import Optional

from pydantic import Field, field_validator

from app.core.timezone import ApiDateTime
from app.modules.users.models import UserRole
from app.shared.schemas import CamelModel, Email, Phone, RequiredStr

PIN_PATTERN = r"^\d{4}$"
OTP_PATTERN = r"^\d{6}$"


class RegisterRequest(CamelModel):
    name: str = Field(min_length=2, max_length=100)
    phone: Phone
    email: Email
    pin: str = Field(pattern=PIN_PATTERN, description="Exactly 4 digits")
    address: Optional[str] = None
    role: UserRole = UserRole.OWNER

    @field_validator("role")
    @classmethod
    def self_service_role(cls, value: UserRole) -> UserRole:
        if value not in (UserRole.OWNER, UserRole.NOMINEE):
            raise ValueError("must be 'owner' or 'nominee'")
        return value


class AdminCreateUserRequest(CamelModel):
    name: str = Field(min_length=2, max_length=100)
    phone: Phone
    email: Email
    pin: str = Field(pattern=PIN_PATTERN)
    address: Optional[str] = None
    role: UserRole = UserRole.ADMIN

    @field_validator("role")
    @classmethod
    def not_super_admin(cls, value: UserRole) -> UserRole:
        if value == UserRole.SUPER_ADMIN:
            raise ValueError("super-admin accounts cannot be created through the API")
        return value


class SendOtpRequest(CamelModel):
    phone: RequiredStr


class VerifyOtpRequest(CamelModel):
    phone: RequiredStr
    otp: str = Field(pattern=OTP_PATTERN, description="Exactly 6 digits")


# POST /api/auth/login takes the same body as verify-otp
LoginRequest = VerifyOtpRequest


class VerifyPinRequest(CamelModel):
    user_id: int
    pin: str = Field(pattern=PIN_PATTERN)


class UserOut(CamelModel):
    id: int
    name: str
    phone: str
    email: str
    address: Optional[str] = None
    role: UserRole
    is_active: bool
    created_at: ApiDateTime
    updated_at: ApiDateTime


class AuthResponse(CamelModel):
    success: bool = True
    user: UserOut
    token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    message: Optional[str] = None


class OtpResponse(CamelModel):
    success: bool = True
    message: str
    user_id: int
