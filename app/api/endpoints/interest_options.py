from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.models.user import User
from app.api.services.interest_option_service import InterestOptionService
from app.api.services.user_service import UserService
from app.core.security import get_current_user
from app.schemas.interest_option import InterestOptionFullOut, InterestOptionIn, InterestOptionOut

router = APIRouter(prefix="/interest-options", tags=["Interest Options"])


@router.get("", response_model=List[InterestOptionFullOut])
def list_options(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return InterestOptionService.list_for_user(db, current_user.id)


@router.post("", response_model=InterestOptionFullOut, status_code=201)
def create_option(
    payload: InterestOptionIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return InterestOptionService.create(db, current_user, payload)


@router.put("", response_model=InterestOptionFullOut)
def update_option(
    payload: InterestOptionIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return InterestOptionService.update(db, current_user, payload)


@router.delete("", status_code=204)
def delete_option(
    option_id: Optional[int] = Query(None, alias="id"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    InterestOptionService.delete(db, current_user, option_id)
    return Response(status_code=204)


@router.get("/{user_slug}", response_model=List[InterestOptionOut])
def public_options(user_slug: str, db: Session = Depends(get_db)):
    user = UserService.require_by_slug(db, user_slug)
    return InterestOptionService.list_for_user(db, user.id)
