import base64
import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.api.models.event import Event
from app.api.models.indication import Indication
from app.api.models.user import User
from app.core.constants import EventType

logger = logging.getLogger("events")

UTM_FIELDS = ("utm_source", "utm_medium", "utm_campaign", "utm_term", "utm_content")

# GIF transparente 1x1 para tracking via <img>
TRANSPARENT_GIF = base64.b64decode("R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7")


class EventService:

    @staticmethod
    def record(
        db: Session,
        user_id: int,
        type: str,
        indication_id: Optional[int] = None,
        ip: Optional[str] = None,
        user_agent: Optional[str] = None,
        commit: bool = True,
        **utm: Optional[str],
    ) -> Event:
        event = Event(
            user_id=user_id,
            indication_id=indication_id,
            type=type,
            ip=ip,
            user_agent=user_agent,
            **{k: v for k, v in utm.items() if k in UTM_FIELDS},
        )
        db.add(event)
        if commit:
            db.commit()
        return event

    @staticmethod
    def track(
        db: Session,
        user_slug: Optional[str],
        indication_slug: Optional[str] = None,
        type: str = EventType.CLICK.value,
        ip: str = "unknown",
        user_agent: str = "unknown",
        **utm: Optional[str],
    ) -> Optional[Event]:
        """Registra um evento público. Slugs desconhecidos são ignorados."""
        if not user_slug:
            return None

        user = db.query(User).filter(User.slug == user_slug).first()
        if not user:
            logger.info("TRACK_IGNORED: unknown user_slug=%s", user_slug)
            return None

        indication = None
        if indication_slug:
            indication = (
                db.query(Indication)
                .filter(Indication.user_id == user.id, Indication.slug == indication_slug)
                .first()
            )

        return EventService.record(
            db,
            user_id=user.id,
            type=type or EventType.CLICK.value,
            indication_id=indication.id if indication else None,
            ip=ip,
            user_agent=user_agent,
            **utm,
        )

    @staticmethod
    def daily_counts(rows: List[datetime]) -> List[Dict[str, object]]:
        """Agrupa timestamps por dia (AAAA-MM-DD), em ordem cronológica."""
        counts: Dict[str, int] = {}
        for created_at in rows:
            day = created_at.strftime("%Y-%m-%d")
            counts[day] = counts.get(day, 0) + 1
        return [{"date": day, "count": counts[day]} for day in sorted(counts)]

    @staticmethod
    def click_days(db: Session, since: datetime, user_id: int = None, indication_id: int = None):
        query = db.query(Event.created_at).filter(
            Event.type == EventType.CLICK.value,
            Event.created_at >= since,
        )
        if user_id is not None:
            query = query.filter(Event.user_id == user_id)
        if indication_id is not None:
            query = query.filter(Event.indication_id == indication_id)
        return EventService.daily_counts([row[0] for row in query.all()])

    @staticmethod
    def since_days(days: int) -> datetime:
        return datetime.utcnow() - timedelta(days=days)
