## Rotas de leads do dashboard + captura pública (/lead)
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.models.user import User
from app.api.services.lead_service import LeadService, read_csv_rows
from app.core.security import get_current_user
from app.core.utils import client_ip
from app.schemas.lead import (
    LeadImportIn,
    LeadImportOut,
    LeadNotesIn,
    LeadNotesOut,
    LeadOut,
    LeadUpdate,
    PublicLeadIn,
)

router = APIRouter(prefix="/leads", tags=["Leads"])
public_router = APIRouter(tags=["Leads"])


@router.get("", response_model=List[LeadOut])
def list_leads(
    user_id: Optional[int] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if user_id is not None and user_id != current_user.id:
        raise HTTPException(403, "Acesso negado")
    return LeadService.list_for_user(db, current_user)


@router.patch("", response_model=LeadOut)
def update_lead_by_query(
    payload: LeadUpdate,
    lead_id: Optional[int] = Query(None, alias="leadId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if lead_id is None:
        raise HTTPException(400, "ID do lead é obrigatório")
    lead = LeadService.get_owned(db, current_user, lead_id)
    return LeadService.update(db, current_user, lead, payload)


@router.post("/import", response_model=LeadImportOut)
def import_leads(
    payload: LeadImportIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if payload.leads is not None:
        rows = payload.leads
    elif payload.csv:
        rows = read_csv_rows(payload.csv)
    else:
        raise HTTPException(400, "Envie 'leads' ou 'csv'")
    return LeadService.import_rows(db, current_user, rows)


@router.get("/{lead_id}", response_model=LeadOut)
def get_lead(lead_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return LeadService.get_owned(db, current_user, lead_id)


@router.patch("/{lead_id}", response_model=LeadOut)
def update_lead(
    lead_id: int,
    payload: LeadUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    lead = LeadService.get_owned(db, current_user, lead_id)
    return LeadService.update(db, current_user, lead, payload)


@router.delete("/{lead_id}", status_code=204)
def delete_lead(lead_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    lead = LeadService.get_owned(db, current_user, lead_id)
    LeadService.delete(db, lead)
    return Response(status_code=204)


def _notes_out(lead) -> dict:
    return {
        "id": lead.id,
        "name": lead.name,
        "medical_notes": lead.medical_notes or "",
        "last_updated": lead.updated_at,
    }


@router.get("/{lead_id}/notes", response_model=LeadNotesOut)
def get_notes(lead_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _notes_out(LeadService.get_owned(db, current_user, lead_id))


@router.post("/{lead_id}/notes", response_model=LeadNotesOut)
def set_notes(
    lead_id: int,
    payload: LeadNotesIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    lead = LeadService.get_owned(db, current_user, lead_id)
    return _notes_out(LeadService.set_notes(db, lead, payload.medical_notes))


@public_router.post("/lead", response_model=LeadOut)
def capture_lead(payload: PublicLeadIn, request: Request, response: Response, db: Session = Depends(get_db)):
    lead, created = LeadService.capture(
        db,
        payload,
        ip=client_ip(request.headers),
        user_agent=request.headers.get("user-agent", "unknown"),
    )
    response.status_code = 201 if created else 200
    return lead
