## Tracking público: nunca devolve erro para quem está navegando
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.db.session import get_db
from app.api.services.event_service import TRANSPARENT_GIF, EventService
from app.core.utils import client_ip
from app.schemas.indication import TrackIn

logger = logging.getLogger("track")

router = APIRouter(prefix="/track", tags=["Track"])

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _track(db: Session, data: TrackIn, request: Request) -> None:
    try:
        EventService.track(
            db,
            user_slug=data.user_slug,
            indication_slug=data.indication_slug,
            type=data.type.value,
            ip=client_ip(request.headers),
            user_agent=request.headers.get("user-agent", "unknown"),
            **data.model_dump(include={"utm_source", "utm_medium", "utm_campaign", "utm_term", "utm_content"}),
        )
    except Exception:
        db.rollback()
        logger.exception("TRACK_FAILED: user_slug=%s", data.user_slug)


@router.post("", status_code=204)
async def track_post(request: Request, db: Session = Depends(get_db)):
    try:
        data = TrackIn.model_validate(await request.json())
    except ValueError:
        logger.info("TRACK_IGNORED: corpo inválido")
        return Response(status_code=204)

    # consultas do SQLAlchemy são bloqueantes
    await run_in_threadpool(_track, db, data, request)
    return Response(status_code=204)


@router.get("")
def track_pixel(
    request: Request,
    user_slug: Optional[str] = Query(None, alias="userSlug"),
    indication_slug: Optional[str] = Query(None, alias="indicationSlug"),
    type: str = Query("click"),
    utm_source: Optional[str] = None,
    utm_medium: Optional[str] = None,
    utm_campaign: Optional[str] = None,
    utm_term: Optional[str] = None,
    utm_content: Optional[str] = None,
    db: Session = Depends(get_db),
):
    try:
        data = TrackIn(
            type=type,
            user_slug=user_slug,
            indication_slug=indication_slug,
            utm_source=utm_source,
            utm_medium=utm_medium,
            utm_campaign=utm_campaign,
            utm_term=utm_term,
            utm_content=utm_content,
        )
    except ValueError:
        logger.info("TRACK_IGNORED: tipo inválido type=%s", type)
    else:
        _track(db, data, request)
    return Response(content=TRANSPARENT_GIF, media_type="image/gif", headers=NO_CACHE_HEADERS)
