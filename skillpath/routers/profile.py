"""Profile routes: read and update the caller's own profile."""
from fastapi import APIRouter, HTTPException

from skillpath.routers.deps import CurrentProfile, DbSession
from skillpath.schemas.profile import ProfileOutSchema, ProfileUpdateSchema

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("", response_model=ProfileOutSchema)
async def get_profile(profile: CurrentProfile):
    return profile


@router.patch("", response_model=ProfileOutSchema)
async def update_profile(body: ProfileUpdateSchema, profile: CurrentProfile, db: DbSession):
    """Update editable fields; points, streak and role are server-managed."""
    changes = body.model_dump(exclude_unset=True)
    if profile.role != "student":
        changes.pop("form", None)
        changes.pop("subject", None)
    for field, value in changes.items():
        if field == "full_name":
            value = value.strip()
            if not value:
                raise HTTPException(status_code=400, detail="Full name cannot be empty")
        setattr(profile, field, value)
    await db.commit()
    await db.refresh(profile)
    return profile
