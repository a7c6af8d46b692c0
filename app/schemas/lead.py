from datetime import datetime
from typing import Any, Dict, List, Optional

from app.core.constants import LeadStatus
from app.schemas.base import CamelModel


class IndicationBrief(CamelModel):
    id: int
    name: Optional[str] = None
    slug: str


class LeadFields(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    interest: Optional[str] = None
    indication_id: Optional[int] = None
    status: Optional[LeadStatus] = None
    potential_value: Optional[float] = None
    appointment_date: Optional[datetime] = None
    medical_notes: Optional[str] = None
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    utm_term: Optional[str] = None
    utm_content: Optional[str] = None


class LeadCreate(LeadFields):
    pass


class LeadUpdate(LeadFields):
    pass


class LeadOut(CamelModel):
    id: int
    user_id: int
    indication_id: Optional[int] = None
    name: str
    phone: str
    email: Optional[str] = None
    interest: Optional[str] = None
    status: str
    source: Optional[str] = None
    potential_value: Optional[float] = None
    appointment_date: Optional[datetime] = None
    medical_notes: Optional[str] = None
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    utm_term: Optional[str] = None
    utm_content: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    indication: Optional[IndicationBrief] = None


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class LeadPageOut(CamelModel):
    data: List[LeadOut]
    pagination: Pagination


class LeadNotesIn(CamelModel):
    medical_notes: Any = None


class LeadNotesOut(CamelModel):
    id: int
    name: str
    medical_notes: str
    last_updated: datetime


class LeadImportIn(CamelModel):
    leads: Optional[List[Dict[str, Any]]] = None
    csv: Optional[str] = None


class LeadImportOut(CamelModel):
    success: bool
    imported: int
    total: int


class PublicLeadIn(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    interest: Optional[str] = None
    user_slug: Optional[str] = None
    indication_slug: Optional[str] = None
    source: Optional[str] = None
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    utm_term: Optional[str] = None
    utm_content: Optional[str] = None
