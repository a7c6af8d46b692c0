## Questionário público: exibição e envio de respostas
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.services.quiz_service import QuizService
from app.core.utils import client_ip
from app.schemas.quiz import PublicQuizOut, QuizSubmitIn, QuizSubmitOut

router = APIRouter(prefix="/quiz", tags=["Quiz"])


@router.post("/submit", response_model=QuizSubmitOut)
def submit(payload: QuizSubmitIn, request: Request, db: Session = Depends(get_db)):
    return QuizService.submit(
        db,
        payload,
        ip=client_ip(request.headers),
        user_agent=request.headers.get("user-agent", "unknown"),
    )


@router.get("/{user_slug}/{quiz_slug}", response_model=PublicQuizOut)
def public_quiz(user_slug: str, quiz_slug: str, request: Request, db: Session = Depends(get_db)):
    return QuizService.public(
        db,
        user_slug,
        quiz_slug,
        ip=client_ip(request.headers),
        user_agent=request.headers.get("user-agent", "unknown"),
    )
