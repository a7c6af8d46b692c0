## logica de negocios para usuários (perfil, plano, estatísticas)
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.api.models.event import Event
from app.api.models.indication import Indication
from app.api.models.lead import Lead
from app.api.models.user import User
from app.core.constants import EventType
from app.core.security import get_password_hash, verify_password
from app.core.utils import conversion_rate
from app.schemas.user import MobileProfileUpdate, ProfileUpdate


class UserService:

    @staticmethod
    def get_by_slug(db: Session, slug: str) -> Optional[User]:
        return db.query(User).filter(User.slug == slug).first()

    @staticmethod
    def require_by_slug(db: Session, slug: Optional[str], detail: str = "Médico não encontrado") -> User:
        user = UserService.get_by_slug(db, slug) if slug else None
        if not user:
            raise HTTPException(404, detail)
        return user

    @staticmethod
    def update_profile(db: Session, user: User, data: ProfileUpdate) -> User:
        # campos vazios não apagam o valor atual
        for field, value in data.model_dump(exclude_unset=True).items():
            if value:
                setattr(user, field, value)

        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def update_mobile_profile(db: Session, user: User, data: MobileProfileUpdate) -> User:
        changes = {}
        for field in ("name", "phone", "specialty"):
            value = getattr(data, field)
            if value is not None:
                changes[field] = value

        if data.new_password:
            if not data.current_password:
                raise HTTPException(400, "É necessário fornecer a senha atual para alterá-la")
            if not verify_password(data.current_password, user.password_hash):
                raise HTTPException(401, "Senha atual incorreta")
            try:
                changes["password_hash"] = get_password_hash(data.new_password)
            except ValueError as e:
                raise HTTPException(400, str(e))

        if not changes:
            raise HTTPException(400, "Nenhum campo para atualizar")

        for field, value in changes.items():
            setattr(user, field, value)

        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def profile_stats(db: Session, user: User, days: int = 30) -> dict:
        since = datetime.utcnow() - timedelta(days=days)

        total_indications = db.query(Indication).filter(Indication.user_id == user.id).count()
        total_leads = db.query(Lead).filter(Lead.user_id == user.id).count()

        recent_clicks = (
            db.query(Event)
            .filter(
                Event.user_id == user.id,
                Event.type == EventType.CLICK.value,
                Event.created_at >= since,
            )
            .count()
        )
        recent_leads = (
            db.query(Lead)
            .filter(Lead.user_id == user.id, Lead.created_at >= since)
            .count()
        )

        return {
            "total_indications": total_indications,
            "total_leads": total_leads,
            "recent_clicks": recent_clicks,
            "recent_leads": recent_leads,
            "conversion_rate": conversion_rate(recent_leads, recent_clicks),
        }

    @staticmethod
    def dashboard(db: Session, user: User) -> dict:
        total_leads = db.query(Lead).filter(Lead.user_id == user.id).count()
        total_indications = db.query(Indication).filter(Indication.user_id == user.id).count()
        total_clicks = (
            db.query(Event)
            .filter(Event.user_id == user.id, Event.type == EventType.CLICK.value)
            .count()
        )
        recent_leads = (
            db.query(Lead)
            .filter(Lead.user_id == user.id)
            .order_by(Lead.created_at.desc(), Lead.id.desc())
            .limit(5)
            .all()
        )

        return {
            "total_leads": total_leads,
            "total_indications": total_indications,
            "total_clicks": total_clicks,
            "conversion_rate": conversion_rate(total_leads, total_clicks),
            "recent_leads": recent_leads,
        }

    @staticmethod
    def plan(user: User) -> dict:
        return {
            "plan": user.plan,
            "plan_expires_at": user.plan_expires_at,
            "is_premium": user.is_premium,
        }
