import logging
from typing import List, Optional
from urllib.parse import urlencode

from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.api.models.event import Event
from app.api.models.indication import Indication
from app.api.models.lead import Lead
from app.api.models.page import Page
from app.api.models.quiz import Quiz
from app.api.models.user import User
from app.api.services.event_service import EventService
from app.core.config import settings
from app.core.constants import EventType
from app.core.utils import conversion_rate, slugify, unique_slug
from app.schemas.indication import GenerateLinkIn, IndicationCreate

logger = logging.getLogger("indications")

STATS_PERIOD_DAYS = {
    "day": 1,
    "week": 7,
    "month": 30,
    "year": 365,
}


def build_utm_link(base_url: str, **utm: Optional[str]) -> str:
    params = [
        (key, value)
        for key, value in (
            ("utm_source", utm.get("utm_source")),
            ("utm_medium", utm.get("utm_medium")),
            ("utm_campaign", utm.get("utm_campaign")),
            ("utm_term", utm.get("utm_term")),
            ("utm_content", utm.get("utm_content")),
        )
        if value
    ]
    return f"{base_url}?{urlencode(params)}" if params else base_url


class IndicationService:

    @staticmethod
    def _click_count(db: Session, indication_id: int, since=None) -> int:
        query = db.query(func.count(Event.id)).filter(
            Event.indication_id == indication_id,
            Event.type == EventType.CLICK.value,
        )
        if since is not None:
            query = query.filter(Event.created_at >= since)
        return query.scalar() or 0

    @staticmethod
    def _lead_count(db: Session, indication_id: int, since=None) -> int:
        query = db.query(func.count(Lead.id)).filter(Lead.indication_id == indication_id)
        if since is not None:
            query = query.filter(Lead.created_at >= since)
        return query.scalar() or 0

    @staticmethod
    def with_counts(db: Session, indication: Indication) -> dict:
        data = {c.name: getattr(indication, c.name) for c in Indication.__table__.columns}
        data["count"] = {
            "clicks": IndicationService._click_count(db, indication.id),
            "leads": IndicationService._lead_count(db, indication.id),
        }
        return data

    @staticmethod
    def list_for_user(db: Session, user: User) -> List[dict]:
        indications = (
            db.query(Indication)
            .filter(Indication.user_id == user.id)
            .order_by(Indication.created_at.desc(), Indication.id.desc())
            .all()
        )
        return [IndicationService.with_counts(db, i) for i in indications]

    @staticmethod
    def get_by_slug(db: Session, user_id: int, slug: str) -> Optional[Indication]:
        return (
            db.query(Indication)
            .filter(Indication.user_id == user_id, Indication.slug == slug)
            .first()
        )

    @staticmethod
    def require_owned(db: Session, user: User, slug: str) -> Indication:
        indication = IndicationService.get_by_slug(db, user.id, slug)
        if not indication:
            raise HTTPException(404, "Indicação não encontrada")
        return indication

    @staticmethod
    def public_link(user: User, slug: str) -> str:
        return f"{settings.LANDING_PAGE_URL}/{user.slug}/{slug}"

    @staticmethod
    def create(db: Session, user: User, data: IndicationCreate) -> Indication:
        slug = slugify(data.slug)
        if not slug:
            raise HTTPException(400, "Campos obrigatórios: slug")

        if IndicationService.get_by_slug(db, user.id, slug):
            raise HTTPException(409, "Já existe uma indicação com este slug")

        if data.quiz_id is not None:
            quiz = db.get(Quiz, data.quiz_id)
            if not quiz or quiz.user_id != user.id:
                raise HTTPException(404, "Questionário não encontrado")
        if data.page_id is not None:
            page = db.get(Page, data.page_id)
            if not page or page.user_id != user.id:
                raise HTTPException(404, "Página não encontrada")

        indication = Indication(
            user_id=user.id,
            slug=slug,
            name=data.name,
            type=data.type or "link",
            quiz_id=data.quiz_id,
            page_id=data.page_id,
            full_link=IndicationService.public_link(user, slug),
        )
        db.add(indication)
        db.commit()
        db.refresh(indication)
        return indication

    @staticmethod
    def create_unique(
        db: Session,
        user: User,
        base: str,
        name: str,
        type: str,
        full_link_prefix: str,
        quiz_id: Optional[int] = None,
        page_id: Optional[int] = None,
    ) -> Indication:
        """Cria uma indicação com slug livre; não faz commit."""
        slug = unique_slug(
            slugify(base),
            lambda s: IndicationService.get_by_slug(db, user.id, s) is not None,
            fallback=type,
        )
        indication = Indication(
            user_id=user.id,
            slug=slug,
            name=name,
            type=type,
            quiz_id=quiz_id,
            page_id=page_id,
            full_link=f"{full_link_prefix}/{user.slug}/{slug}",
        )
        db.add(indication)
        return indication

    @staticmethod
    def update(db: Session, indication: Indication, name: Optional[str]) -> Indication:
        indication.name = name
        db.commit()
        db.refresh(indication)
        return indication

    @staticmethod
    def detail(db: Session, indication: Indication) -> dict:
        data = IndicationService.with_counts(db, indication)
        data["click_stats"] = EventService.click_days(
            db, EventService.since_days(30), indication_id=indication.id
        )
        data["recent_leads"] = (
            db.query(Lead)
            .filter(Lead.indication_id == indication.id)
            .order_by(Lead.created_at.desc(), Lead.id.desc())
            .limit(10)
            .all()
        )
        return data

    @staticmethod
    def generate_link(db: Session, user: User, data: GenerateLinkIn) -> dict:
        if not data.indication_id:
            raise HTTPException(400, "ID da indicação é obrigatório")

        indication = db.get(Indication, data.indication_id)
        if not indication or indication.user_id != user.id:
            raise HTTPException(404, "Indicação não encontrada")

        utm = data.model_dump(exclude={"indication_id"})
        link = build_utm_link(IndicationService.public_link(user, indication.slug), **utm)

        EventService.record(
            db,
            user_id=user.id,
            type=EventType.LINK_GENERATED.value,
            indication_id=indication.id,
            **utm,
        )

        return {
            "success": True,
            "indication": indication,
            "link": link,
            "utm_params": utm,
        }

    @staticmethod
    def stats(db: Session, user: User, period: str = "month") -> dict:
        if period == "all":
            since = None
        else:
            since = EventService.since_days(STATS_PERIOD_DAYS.get(period, 30))

        indications = db.query(Indication).filter(Indication.user_id == user.id).all()

        rows = []
        total_clicks = 0
        total_leads = 0
        for indication in indications:
            clicks = IndicationService._click_count(db, indication.id, since)
            leads = IndicationService._lead_count(db, indication.id, since)
            total_clicks += clicks
            total_leads += leads
            rows.append({
                "id": indication.id,
                "slug": indication.slug,
                "name": indication.name,
                "clicks": clicks,
                "leads": leads,
                "conversion_rate": conversion_rate(leads, clicks),
            })

        # melhor desempenho primeiro
        rows.sort(key=lambda r: r["leads"], reverse=True)

        thirty_days_ago = EventService.since_days(30)
        lead_days = [
            created_at
            for (created_at,) in db.query(Lead.created_at)
            .filter(Lead.user_id == user.id, Lead.created_at >= thirty_days_ago)
            .all()
        ]

        return {
            "overall": {
                "total_indications": len(indications),
                "total_clicks": total_clicks,
                "total_leads": total_leads,
                "overall_conversion_rate": conversion_rate(total_leads, total_clicks),
                "period": period,
            },
            "indications": rows,
            "daily_stats": {
                "clicks": EventService.click_days(db, thirty_days_ago, user_id=user.id),
                "leads": EventService.daily_counts(lead_days),
            },
        }

    @staticmethod
    def resolve_public(db: Session, user_slug: str, indication_slug: str, ip: str, user_agent: str) -> dict:
        user = db.query(User).filter(User.slug == user_slug).first()
        if not user:
            raise HTTPException(404, "Usuário não encontrado")

        indication = IndicationService.get_by_slug(db, user.id, indication_slug)
        if not indication:
            raise HTTPException(404, "Indicação não encontrada")

        EventService.record(
            db,
            user_id=user.id,
            type=EventType.LINK_VIEW.value,
            indication_id=indication.id,
            ip=ip,
            user_agent=user_agent,
        )

        data = {c.name: getattr(indication, c.name) for c in Indication.__table__.columns}
        data["user"] = user
        return data
