from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr

from app.core.constants import InteractionType, OutboundStatus
from app.schemas.base import CamelModel


class ClinicIn(CamelModel):
    id: Optional[int] = None
    nome: str
    localizacao: Optional[str] = None
    media_de_medicos: Optional[int] = None
    instagram: Optional[str] = None
    site: Optional[str] = None
    link_bio: Optional[str] = None
    contato: Optional[str] = None
    email: Optional[str] = None
    whatsapp: Optional[str] = None
    observacoes: Optional[str] = None


class OutboundCreate(CamelModel):
    nome: str
    especialidade: Optional[str] = None
    instagram: Optional[str] = None
    whatsapp: Optional[str] = None
    email: Optional[EmailStr] = None
    status: Optional[OutboundStatus] = None
    observacoes: Optional[str] = None
    endereco: Optional[str] = None
    clinics: Optional[List[ClinicIn]] = None


class OutboundUpdate(CamelModel):
    nome: Optional[str] = None
    especialidade: Optional[str] = None
    instagram: Optional[str] = None
    whatsapp: Optional[str] = None
    email: Optional[EmailStr] = None
    status: Optional[OutboundStatus] = None
    observacoes: Optional[str] = None
    endereco: Optional[str] = None
    clinics: Optional[List[ClinicIn]] = None


class ClinicOut(CamelModel):
    id: int
    nome: str
    localizacao: Optional[str] = None
    media_de_medicos: Optional[int] = None
    instagram: Optional[str] = None
    site: Optional[str] = None
    link_bio: Optional[str] = None
    contato: Optional[str] = None
    email: Optional[str] = None
    whatsapp: Optional[str] = None
    observacoes: Optional[str] = None


class OutboundOut(CamelModel):
    id: int
    user_id: int
    nome: str
    especialidade: Optional[str] = None
    instagram: Optional[str] = None
    whatsapp: Optional[str] = None
    email: Optional[str] = None
    status: str
    observacoes: Optional[str] = None
    endereco: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    clinics: List[ClinicOut] = []


class InteractionIn(CamelModel):
    content: Optional[str] = None
    type: Optional[str] = None


class InteractionOut(CamelModel):
    id: int
    outbound_id: int
    type: InteractionType
    content: str
    created_at: datetime
    updated_at: datetime
