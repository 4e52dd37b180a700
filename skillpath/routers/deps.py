"""Request dependencies: current user/profile from the bearer token and role checks."""
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillpath.core.errors import PermissionDenied
from skillpath.core.security import user_id_from_token
from skillpath.db.session import get_db
from skillpath.models.profile import Profile

bearer_scheme = HTTPBearer(auto_error=False)

DbSession = Annotated[AsyncSession, Depends(get_db)]


def _unauthorized(detail: str = "Not authenticated") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_profile(
    db: DbSession,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> Profile:
    """Profile of the authenticated user; 401 if the token is missing or invalid."""
    if credentials is None:
        raise _unauthorized()
    user_id = user_id_from_token(credentials.credentials)
    if user_id is None:
        raise _unauthorized("Invalid or expired token")

    result = await db.execute(select(Profile).where(Profile.user_id == user_id))
    profile = result.scalar_one_or_none()
    if profile is None:
        raise _unauthorized("Unknown user")
    return profile


CurrentProfile = Annotated[Profile, Depends(get_current_profile)]


async def require_teacher(profile: CurrentProfile) -> Profile:
    if profile.role != "teacher":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Teachers only")
    return profile


async def require_student(profile: CurrentProfile) -> Profile:
    if profile.role != "student":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Students only")
    return profile


def ensure_owner(profile: Profile, user_id: int) -> None:
    """Rows scoped to a user are readable by that user only."""
    if profile.user_id != user_id:
        raise PermissionDenied("Not allowed to access this user")


TeacherProfile = Annotated[Profile, Depends(require_teacher)]
StudentProfile = Annotated[Profile, Depends(require_student)]
