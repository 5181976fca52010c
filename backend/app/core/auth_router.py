"""
Authentication API routes.

Login is two-step: send-otp/verify-otp by phone, then verify-pin with the
returned user id. /login collapses phone + OTP into a single call.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.auth import get_current_user, issue_token
from app.core.database import get_db
from app.modules.users import services
from app.modules.users.models import User
from app.modules.users.schemas import (
    AuthResponse,
    LoginRequest,
    OtpResponse,
    RegisterRequest,
    SendOtpRequest,
    UserOut,
    VerifyOtpRequest,
    VerifyPinRequest,
)

router = APIRouter()


def _auth_response(user: User, message: str) -> AuthResponse:
    return AuthResponse(user=UserOut.model_validate(user), message=message, **issue_token(user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """Create an owner or nominee account and log it in."""
    user = services.create_user(
        db,
        name=request.name,
        phone=request.phone,
        email=request.email,
        pin=request.pin,
        role=request.role,
        address=request.address,
    )
    return _auth_response(user, "User registered successfully")


@router.post("/send-otp", response_model=OtpResponse)
async def send_otp(request: SendOtpRequest, db: Session = Depends(get_db)):
    """Request a login OTP for a registered phone."""
    user = services.send_otp(db, request.phone)
    return OtpResponse(message="OTP sent successfully", user_id=user.id)


@router.post("/verify-otp", response_model=OtpResponse)
async def verify_otp(request: VerifyOtpRequest, db: Session = Depends(get_db)):
    """Verify the OTP; the client follows up with verify-pin."""
    user = services.verify_otp(db, request.phone, request.otp)
    return OtpResponse(message="OTP verified successfully", user_id=user.id)


@router.post("/verify-pin", response_model=AuthResponse)
async def verify_pin(request: VerifyPinRequest, db: Session = Depends(get_db)):
    """Verify the PIN and issue a token."""
    user = services.verify_user_pin(db, request.user_id, request.pin)
    services.record_login(db, user)
    return _auth_response(user, "Login successful")


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, db: Session = Depends(get_db)):
    """Phone + OTP login in a single call."""
    user = services.verify_otp(db, request.phone, request.otp)
    services.record_login(db, user)
    return _auth_response(user, "Login successful")


@router.post("/logout")
async def logout(response: Response):
    """
    Logout - client should discard the token.
    This endpoint is mainly for logging/audit purposes.
    """
    return {"success": True, "message": "Logged out successfully"}


@router.get("/me", response_model=UserOut)
async def get_me(user: User = Depends(get_current_user)):
    """Get current user info."""
    return user
