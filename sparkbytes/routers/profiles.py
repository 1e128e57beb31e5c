"""Profile API routes."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sparkbytes.auth import CurrentUser, get_current_user
from sparkbytes.database import get_db
from sparkbytes.errors import NotFoundError
from sparkbytes.models.profile import Profile
from sparkbytes.schemas.profile import ProfileUpsert, ProfileResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    profile = db.query(Profile).filter(Profile.user_id == user.user_id).first()
    if not profile:
        raise NotFoundError("Profile not found")
    return {"profile": profile}


@router.post("/", response_model=ProfileResponse)
def upsert_profile(
    payload: ProfileUpsert,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create or update the caller's profile; name and email default to the token's claims."""
    profile = db.query(Profile).filter(Profile.user_id == user.user_id).first()
    created = profile is None
    if created:
        profile = Profile(user_id=user.user_id, name=user.name, email=user.email)
        db.add(profile)

    for field, value in payload.model_dump(exclude_unset=True).items():
        if field == "email" and value:
            value = value.strip().lower()
        setattr(profile, field, value)
    if profile.email:
        profile.email = profile.email.lower()

    db.commit()
    db.refresh(profile)
    logger.info("%s profile for user %s", "Created" if created else "Updated", user.user_id)
    return {"profile": profile}


@router.get("/user/{user_id}", response_model=ProfileResponse)
def get_profile(user_id: str, db: Session = Depends(get_db)):
    profile = db.query(Profile).filter(Profile.user_id == user_id).first()
    if not profile:
        raise NotFoundError("Profile not found")
    return {"profile": profile}
