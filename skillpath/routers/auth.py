"""Auth routes: register (with role selection), login, current profile."""
import re

import structlog
from fastapi import APIRouter, HTTPException, status
from sqlalchemy import select

from skillpath.core.security import create_access_token, hash_password, verify_password
from skillpath.models.profile import Profile
from skillpath.models.user import User
from skillpath.routers.deps import CurrentProfile, DbSession
from skillpath.schemas.auth import LoginSchema, RegisterSchema, TokenOutSchema
from skillpath.schemas.profile import ProfileOutSchema
from skillpath.services.gamification import touch_activity

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = structlog.get_logger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_BYTES = 72  # bcrypt hard limit


def _normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def _token_response(profile: Profile) -> TokenOutSchema:
    return TokenOutSchema(
        access_token=create_access_token(profile.user_id, {"role": profile.role}),
        profile=ProfileOutSchema.model_validate(profile),
    )


@router.post("/register", response_model=TokenOutSchema, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterSchema, db: DbSession):
    """Create user and profile; return a token."""
    email_norm = _normalize_email(body.email)
    pwd = body.password or ""

    if not email_norm or not EMAIL_RE.match(email_norm):
        raise HTTPException(status_code=400, detail="Invalid email format")
    if len(pwd) < MIN_PASSWORD_LENGTH:
        raise HTTPException(status_code=400, detail="Password must be at least 8 characters")
    if len(pwd.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise HTTPException(status_code=400, detail="Password is too long")

    result = await db.execute(select(User.id).where(User.email == email_norm))
    if result.first() is not None:
        raise HTTPException(status_code=409, detail="Email already registered")

    user = User(email=email_norm, hashed_password=hash_password(pwd))
    db.add(user)
    await db.flush()

    is_student = body.role == "student"
    profile = Profile(
        user_id=user.id,
        full_name=body.full_name.strip() or "User",
        email=email_norm,
        role=body.role,
        skill_level=body.skill_level,
        form=body.form if is_student else None,
        subject=body.subject if is_student else None,
        total_points=0,
        streak_days=0,
    )
    db.add(profile)
    await db.commit()
    await db.refresh(profile)

    logger.info("user_registered", user_id=user.id, role=body.role)
    return _token_response(profile)


@router.post("/login", response_model=TokenOutSchema)
async def login(body: LoginSchema, db: DbSession):
    """Authenticate and return a token; counts as activity for the streak."""
    email_norm = _normalize_email(body.email)
    result = await db.execute(select(User).where(User.email == email_norm))
    user = result.scalar_one_or_none()
    if not user or not verify_password(body.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    result = await db.execute(select(Profile).where(Profile.user_id == user.id))
    profile = result.scalar_one()
    touch_activity(profile)
    await db.commit()

    logger.info("user_logged_in", user_id=user.id)
    return _token_response(profile)


@router.get("/me", response_model=ProfileOutSchema)
async def me(profile: CurrentProfile):
    return profile
