import csv
import io
import logging
import math
from typing import Any, Dict, Iterable, List, Optional, Tuple

from dateutil import parser as date_parser
from fastapi import HTTPException
from sqlalchemy.orm import Session, joinedload

from app.api.models.indication import Indication
from app.api.models.lead import Lead
from app.api.models.user import User
from app.api.services.event_service import EventService
from app.core.constants import EventType, LeadStatus
from app.core.utils import only_digits, slugify
from app.schemas.lead import LeadCreate, LeadUpdate, PublicLeadIn

logger = logging.getLogger("leads")

# Cabeçalhos de planilha -> campo do lead. A ordem importa: o primeiro que casar vence.
IMPORT_COLUMN_ALIASES = [
    ("email", ("email", "mail")),
    ("phone", ("telefone", "phone", "celular", "whatsapp", "fone", "tel")),
    ("name", ("nome", "name", "paciente", "cliente")),
    ("interest", ("interesse", "interest", "procedimento")),
    ("status", ("status", "etapa", "situacao")),
    ("appointment_date", ("agendamento", "appointment", "consulta", "data")),
]

# os campos abaixo não são apagados quando chegam vazios
NON_BLANK_FIELDS = ("name", "phone", "status")


def match_import_column(header: str) -> Optional[str]:
    key = slugify(header).replace("-", "")
    if not key:
        return None

    for field, aliases in IMPORT_COLUMN_ALIASES:
        if key in aliases:
            return field
    for field, aliases in IMPORT_COLUMN_ALIASES:
        if any(alias in key for alias in aliases):
            return field
    return None


def parse_import_status(value: Any) -> str:
    text = str(value or "").strip().lower()
    for status in LeadStatus:
        if status.value.lower() == text:
            return status.value
    return LeadStatus.NOVO.value


def parse_import_date(value: Any):
    if not value:
        return None
    try:
        return date_parser.parse(str(value), dayfirst=True)
    except (ValueError, OverflowError):
        return None


def read_csv_rows(text: str) -> List[Dict[str, str]]:
    sample = text[:2048]
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters=",;\t")
    except csv.Error:
        dialect = csv.excel
    return list(csv.DictReader(io.StringIO(text), dialect=dialect))


def map_import_row(row: Dict[str, Any]) -> Dict[str, Any]:
    mapped: Dict[str, Any] = {}
    for header, value in row.items():
        if header is None:
            continue
        field = match_import_column(header)
        if field and field not in mapped:
            mapped[field] = value.strip() if isinstance(value, str) else value
    return mapped


class LeadService:

    @staticmethod
    def _base_query(db: Session):
        return db.query(Lead).options(joinedload(Lead.indication))

    @staticmethod
    def list_for_user(db: Session, user: User) -> List[Lead]:
        return (
            LeadService._base_query(db)
            .filter(Lead.user_id == user.id)
            .order_by(Lead.created_at.desc(), Lead.id.desc())
            .all()
        )

    @staticmethod
    def paginate(
        db: Session,
        user: User,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> dict:
        page = max(page, 1)
        limit = max(limit, 1)

        query = db.query(Lead).filter(Lead.user_id == user.id)
        if status:
            query = query.filter(Lead.status == status)

        total = query.count()
        leads = (
            query.options(joinedload(Lead.indication))
            .order_by(Lead.created_at.desc(), Lead.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )

        return {
            "data": leads,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": math.ceil(total / limit),
            },
        }

    @staticmethod
    def get_owned(db: Session, user: User, lead_id: int) -> Lead:
        lead = LeadService._base_query(db).filter(Lead.id == lead_id).first()

        if not lead:
            raise HTTPException(404, "Lead não encontrado")
        if lead.user_id != user.id:
            raise HTTPException(403, "Acesso negado")
        return lead

    @staticmethod
    def find_by_phone(db: Session, user_id: int, phone: str) -> Optional[Lead]:
        return (
            db.query(Lead)
            .filter(Lead.user_id == user_id, Lead.phone == only_digits(phone))
            .order_by(Lead.id.asc())
            .first()
        )

    @staticmethod
    def _check_indication(db: Session, user: User, indication_id: Optional[int]) -> None:
        if indication_id is None:
            return
        indication = db.get(Indication, indication_id)
        if not indication or indication.user_id != user.id:
            raise HTTPException(404, "Indicação não encontrada")

    @staticmethod
    def _apply(lead: Lead, values: Dict[str, Any]) -> None:
        for field, value in values.items():
            if field in NON_BLANK_FIELDS and not value:
                continue
            if field == "phone":
                value = only_digits(value)
            elif field == "status":
                value = LeadStatus(value).value
            setattr(lead, field, value)

    @staticmethod
    def create_or_update(db: Session, user: User, data: LeadCreate) -> Tuple[Lead, bool]:
        """
        Cria o lead do médico. Se já existir um lead com o mesmo telefone para
        este médico, ele é atualizado no lugar de criar uma duplicata.
        Retorna (lead, created).
        """
        if not (data.name or "").strip() or not only_digits(data.phone):
            raise HTTPException(400, "Nome e telefone são obrigatórios")

        LeadService._check_indication(db, user, data.indication_id)

        values = data.model_dump(exclude_unset=True)
        existing = LeadService.find_by_phone(db, user.id, data.phone)

        if existing:
            LeadService._apply(existing, {k: v for k, v in values.items() if v is not None})
            EventService.record(
                db, user_id=user.id, type=EventType.LEAD_UPDATE.value,
                indication_id=existing.indication_id, commit=False,
            )
            db.commit()
            db.refresh(existing)
            logger.info("LEAD_DEDUP_UPDATE: user_id=%s lead_id=%s", user.id, existing.id)
            return existing, False

        lead = Lead(user_id=user.id, status=LeadStatus.NOVO.value)
        LeadService._apply(lead, values)
        db.add(lead)
        db.flush()
        EventService.record(
            db, user_id=user.id, type=EventType.LEAD_CREATE.value,
            indication_id=lead.indication_id, commit=False,
        )
        db.commit()
        db.refresh(lead)
        return lead, True

    @staticmethod
    def update(db: Session, user: User, lead: Lead, data: LeadUpdate) -> Lead:
        values = data.model_dump(exclude_unset=True)
        if "indication_id" in values:
            LeadService._check_indication(db, user, values["indication_id"])

        LeadService._apply(lead, values)
        EventService.record(
            db, user_id=user.id, type=EventType.LEAD_UPDATE.value,
            indication_id=lead.indication_id, commit=False,
        )
        db.commit()
        db.refresh(lead)
        return lead

    @staticmethod
    def delete(db: Session, lead: Lead) -> None:
        db.delete(lead)
        db.commit()

    @staticmethod
    def set_notes(db: Session, lead: Lead, medical_notes: Any) -> Lead:
        if not isinstance(medical_notes, str):
            raise HTTPException(400, "Anotações médicas devem ser fornecidas como texto")
        lead.medical_notes = medical_notes
        db.commit()
        db.refresh(lead)
        return lead

    @staticmethod
    def import_rows(db: Session, user: User, rows: Iterable[Dict[str, Any]]) -> dict:
        valid = []
        for row in rows:
            mapped = map_import_row(row)
            name = str(mapped.get("name") or "").strip()
            phone = only_digits(str(mapped.get("phone") or ""))
            if name and phone:
                valid.append((name, phone, mapped))

        if not valid:
            raise HTTPException(400, "Nenhum lead válido encontrado")

        existing_phones = {
            phone for (phone,) in db.query(Lead.phone).filter(Lead.user_id == user.id).all()
        }

        imported = 0
        for name, phone, mapped in valid:
            if phone in existing_phones:
                continue
            existing_phones.add(phone)
            db.add(Lead(
                user_id=user.id,
                name=name,
                phone=phone,
                email=mapped.get("email") or None,
                interest=mapped.get("interest") or None,
                status=parse_import_status(mapped.get("status")),
                appointment_date=parse_import_date(mapped.get("appointment_date")),
                source="import",
            ))
            imported += 1

        db.commit()
        logger.info("LEADS_IMPORTED: user_id=%s imported=%s total=%s", user.id, imported, len(valid))
        return {"success": True, "imported": imported, "total": len(valid)}

    @staticmethod
    def capture(db: Session, data: PublicLeadIn, ip: str, user_agent: str) -> Tuple[Lead, bool]:
        """Lead vindo de um link público (formulário, página, indicação)."""
        if not (data.name or "").strip() or not only_digits(data.phone) or not data.user_slug:
            raise HTTPException(400, "Campos obrigatórios: name, phone, userSlug")

        user = db.query(User).filter(User.slug == data.user_slug).first()
        if not user:
            raise HTTPException(404, "Médico não encontrado")

        indication = None
        if data.indication_slug:
            indication = (
                db.query(Indication)
                .filter(Indication.user_id == user.id, Indication.slug == data.indication_slug)
                .first()
            )

        utm = {
            "utm_source": data.utm_source,
            "utm_medium": data.utm_medium,
            "utm_campaign": data.utm_campaign,
            "utm_term": data.utm_term,
            "utm_content": data.utm_content,
        }

        lead = LeadService.find_by_phone(db, user.id, data.phone)
        created = lead is None
        if created:
            lead = Lead(user_id=user.id, phone=only_digits(data.phone), status=LeadStatus.NOVO.value)
            db.add(lead)

        lead.name = data.name.strip()
        if data.interest:
            lead.interest = data.interest
        if data.source:
            lead.source = data.source
        if indication:
            lead.indication_id = indication.id
        for field, value in utm.items():
            if value:
                setattr(lead, field, value)

        EventService.record(
            db, user_id=user.id, type=EventType.LEAD.value,
            indication_id=indication.id if indication else None,
            ip=ip, user_agent=user_agent, commit=False,
        )
        db.commit()
        db.refresh(lead)
        return lead, created
