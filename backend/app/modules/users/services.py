"""
User account services: registration, lookup, PIN hashing, deactivation.
"""

import hashlib
import hmac
import logging
import re
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError, ValidationError
from app.modules.users.models import User, UserRole
from app.shared.models.audit import AuditAction, AuditResource
from app.shared.repository import commit_or_raise
from app.shared.services.audit import record_audit

logger = logging.getLogger(__name__)

PHONE_SEPARATORS = re.compile(r"[\s\-().]")
DEFAULT_COUNTRY_CODE = "+91"


def normalize_phone(phone: str) -> str:
    """
    Canonical phone form used for storage and lookup.

    '98765 43210' -> '+919876543210', '919876543210' -> '+919876543210'.
    Numbers that already carry a '+' prefix are kept (separators removed).
    """
    cleaned = PHONE_SEPARATORS.sub("", phone or "")
    if cleaned.startswith("+"):
        return cleaned
    if len(cleaned) == 10:
        return DEFAULT_COUNTRY_CODE + cleaned
    if len(cleaned) == 12 and cleaned.startswith("91"):
        return "+" + cleaned
    return cleaned


def hash_pin(pin: str) -> str:
    """Hash a PIN using SHA-256 with the secret key as salt."""
    salted = f"{settings.SECRET_KEY}:{pin}"
    return hashlib.sha256(salted.encode()).hexdigest()


def verify_pin(pin: str, pin_hash: str) -> bool:
    """Constant-time comparison of a PIN against its stored hash."""
    return hmac.compare_digest(hash_pin(pin), pin_hash or "")


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_active_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id, User.is_active.is_(True)).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_active_user_by_phone(db: Session, phone: str) -> User:
    user = db.query(User).filter(
        User.phone == normalize_phone(phone),
        User.is_active.is_(True),
    ).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


def create_user(
    db: Session,
    name: str,
    phone: str,
    email: str,
    pin: str,
    role: UserRole = UserRole.OWNER,
    address: Optional[str] = None,
    created_by: Optional[int] = None,
) -> User:
    """Insert a new user. Phone and email must both be unused."""
    phone = normalize_phone(phone)
    email = email.strip().lower()

    existing = db.query(User).filter(or_(User.phone == phone, User.email == email)).first()
    if existing:
        raise ConflictError("User with this phone or email already exists")

    user = User(
        name=name,
        phone=phone,
        email=email,
        address=address,
        pin_hash=hash_pin(pin),
        role=role,
        is_active=True,
    )
    db.add(user)
    db.flush()
    record_audit(
        db, AuditAction.CREATE, AuditResource.USER,
        user_id=created_by or user.id, resource_id=user.id,
        description=f"Registered {role.value} account",
    )
    commit_or_raise(db, "user")
    db.refresh(user)

    logger.info(f"Created {role.value} user {user.id}")
    return user


def deactivate_user(db: Session, user_id: int, acting_user: User) -> User:
    """
    Soft-delete: the account stays but can no longer authenticate.

    Only a super-admin may deactivate another super-admin.
    """
    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    if user.id == acting_user.id:
        raise ValidationError.for_field("userId", "cannot deactivate your own account")
    if user.role == UserRole.SUPER_ADMIN and acting_user.role != UserRole.SUPER_ADMIN:
        logger.warning(f"User {acting_user.id} ({acting_user.role.value}) tried to deactivate super-admin {user.id}")
        raise ForbiddenError("Only a super-admin can deactivate a super-admin")

    user.is_active = False
    record_audit(
        db, AuditAction.USER_DEACTIVATE, AuditResource.USER,
        user_id=acting_user.id, resource_id=user.id,
        description="Deactivated user",
    )
    commit_or_raise(db, "user")
    db.refresh(user)

    logger.info(f"User {user.id} deactivated by {acting_user.id}")
    return user


def ensure_default_admin(db: Session) -> Optional[User]:
    """Create the configured bootstrap super-admin if it doesn't exist yet."""
    if not settings.DEFAULT_ADMIN_PHONE:
        return None

    phone = normalize_phone(settings.DEFAULT_ADMIN_PHONE)
    existing = db.query(User).filter(User.phone == phone).first()
    if existing:
        logger.info(f"Admin user {existing.id} already exists")
        return existing

    if not settings.DEFAULT_ADMIN_EMAIL or not settings.DEFAULT_ADMIN_PIN:
        logger.warning("DEFAULT_ADMIN_PHONE is set but DEFAULT_ADMIN_EMAIL/DEFAULT_ADMIN_PIN are missing")
        return None

    return create_user(
        db,
        name=settings.DEFAULT_ADMIN_NAME,
        phone=phone,
        email=settings.DEFAULT_ADMIN_EMAIL,
        pin=settings.DEFAULT_ADMIN_PIN,
        role=UserRole.SUPER_ADMIN,
    )


def send_otp(db: Session, phone: str) -> User:
    """Start a phone login. No SMS gateway is wired up; the OTP is DEMO_OTP."""
    user = get_active_user_by_phone(db, phone)
    record_audit(db, AuditAction.OTP_SEND, AuditResource.AUTH, user_id=user.id, resource_id=user.id)
    commit_or_raise(db, "audit log")

    logger.info(f"OTP requested for user {user.id}")
    return user


def verify_otp(db: Session, phone: str, otp: str) -> User:
    """Check the OTP for a phone and return the matching active user."""
    user = get_active_user_by_phone(db, phone)
    if not hmac.compare_digest(otp.encode(), settings.DEMO_OTP.encode()):
        logger.warning(f"Invalid OTP for user {user.id}")
        raise UnauthorizedError("Invalid OTP")

    record_audit(db, AuditAction.OTP_VERIFY, AuditResource.AUTH, user_id=user.id, resource_id=user.id)
    commit_or_raise(db, "audit log")
    return user


def verify_user_pin(db: Session, user_id: int, pin: str) -> User:
    """Second login factor: compare the PIN against the stored hash."""
    user = get_active_user(db, user_id)
    if not verify_pin(pin, user.pin_hash):
        logger.warning(f"Invalid PIN for user {user.id}")
        raise UnauthorizedError("Invalid PIN")

    record_audit(db, AuditAction.PIN_VERIFY, AuditResource.AUTH, user_id=user.id, resource_id=user.id)
    commit_or_raise(db, "audit log")
    return user


def record_login(db: Session, user: User) -> None:
    record_audit(db, AuditAction.LOGIN, AuditResource.AUTH, user_id=user.id, resource_id=user.id)
    commit_or_raise(db, "audit log")
    logger.info(f"User {user.id} logged in")
