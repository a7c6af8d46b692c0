from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.services.user_service import UserService
from app.schemas.user import PublicDoctorOut

router = APIRouter(prefix="/doctors", tags=["Doctors"])


@router.get("/{slug}", response_model=PublicDoctorOut)
def public_profile(slug: str, db: Session = Depends(get_db)):
    return UserService.require_by_slug(db, slug)
