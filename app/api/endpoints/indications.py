from typing import List

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.models.user import User
from app.api.services.indication_service import IndicationService
from app.core.security import get_current_user
from app.core.utils import client_ip
from app.schemas.indication import (
    GenerateLinkIn,
    GenerateLinkOut,
    IndicationCreate,
    IndicationDetail,
    IndicationOut,
    IndicationStatsOut,
    IndicationUpdate,
    IndicationWithCounts,
    PublicIndicationOut,
)

router = APIRouter(prefix="/indications", tags=["Indications"])


@router.get("", response_model=List[IndicationWithCounts])
def list_indications(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return IndicationService.list_for_user(db, current_user)


@router.post("", response_model=IndicationOut, status_code=201)
def create_indication(
    payload: IndicationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return IndicationService.create(db, current_user, payload)


@router.post("/generate", response_model=GenerateLinkOut)
def generate_link(
    payload: GenerateLinkIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return IndicationService.generate_link(db, current_user, payload)


@router.get("/stats", response_model=IndicationStatsOut)
def stats(
    period: str = Query("month", pattern="^(day|week|month|year|all)$"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return IndicationService.stats(db, current_user, period)


@router.get("/{slug}", response_model=IndicationDetail)
def get_indication(slug: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    indication = IndicationService.require_owned(db, current_user, slug)
    return IndicationService.detail(db, indication)


@router.put("/{slug}", response_model=IndicationOut)
def update_indication(
    slug: str,
    payload: IndicationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    indication = IndicationService.require_owned(db, current_user, slug)
    return IndicationService.update(db, indication, payload.name)


@router.get("/{user_slug}/{indication_slug}", response_model=PublicIndicationOut)
def public_indication(user_slug: str, indication_slug: str, request: Request, db: Session = Depends(get_db)):
    return IndicationService.resolve_public(
        db,
        user_slug,
        indication_slug,
        ip=client_ip(request.headers),
        user_agent=request.headers.get("user-agent", "unknown"),
    )
