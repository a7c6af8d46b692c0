## Página pública do médico (link na bio)
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.services.page_service import PageService
from app.schemas.page import PageOut

router = APIRouter(prefix="/content", tags=["Content"])


@router.get("/{user_slug}/{slug}", response_model=PageOut)
def public_page(user_slug: str, slug: str, db: Session = Depends(get_db)):
    return PageService.public(db, user_slug, slug)
