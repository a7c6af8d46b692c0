## Prospecção ativa de médicos/clínicas (outbound)
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.models.user import User
from app.api.services.outbound_service import OutboundService
from app.core.security import get_current_user
from app.schemas.outbound import (
    ClinicOut,
    InteractionIn,
    InteractionOut,
    OutboundCreate,
    OutboundOut,
    OutboundUpdate,
)

router = APIRouter(prefix="/outbound", tags=["Outbound"])


@router.get("", response_model=List[OutboundOut])
def list_outbound(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return OutboundService.list_for_user(db, current_user)


@router.post("", response_model=OutboundOut, status_code=201)
def create_outbound(
    payload: OutboundCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return OutboundService.create(db, current_user, payload)


@router.get("/{outbound_id}", response_model=OutboundOut)
def get_outbound(outbound_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return OutboundService.get_owned(db, current_user, outbound_id)


@router.put("/{outbound_id}", response_model=OutboundOut)
def update_outbound(
    outbound_id: int,
    payload: OutboundUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    outbound = OutboundService.get_owned(db, current_user, outbound_id)
    return OutboundService.update(db, current_user, outbound, payload)


@router.delete("/{outbound_id}", status_code=204)
def delete_outbound(outbound_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    outbound = OutboundService.get_owned(db, current_user, outbound_id)
    OutboundService.delete(db, outbound)
    return Response(status_code=204)


@router.get("/{outbound_id}/clinics", response_model=List[ClinicOut])
def list_clinics(outbound_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return OutboundService.get_owned(db, current_user, outbound_id).clinics


@router.get("/{outbound_id}/interactions", response_model=List[InteractionOut])
def list_interactions(
    outbound_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    outbound = OutboundService.get_owned(db, current_user, outbound_id)
    return OutboundService.list_interactions(db, outbound)


@router.post("/{outbound_id}/interactions", response_model=InteractionOut, status_code=201)
def add_interaction(
    outbound_id: int,
    payload: InteractionIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    outbound = OutboundService.get_owned(db, current_user, outbound_id)
    return OutboundService.add_interaction(db, outbound, payload)


@router.delete("/{outbound_id}/interactions", status_code=204)
def delete_interaction(
    outbound_id: int,
    interaction_id: Optional[int] = Query(None, alias="interactionId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    outbound = OutboundService.get_owned(db, current_user, outbound_id)
    OutboundService.delete_interaction(db, outbound, interaction_id)
    return Response(status_code=204)


@router.patch("/{outbound_id}", response_model=OutboundOut)
def patch_outbound(
    outbound_id: int,
    payload: OutboundUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    outbound = OutboundService.get_owned(db, current_user, outbound_id)
    return OutboundService.update(db, current_user, outbound, payload)
