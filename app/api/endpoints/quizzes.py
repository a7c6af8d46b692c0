from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.api.models.user import User
from app.api.services.quiz_service import QuizService
from app.core.security import get_current_user
from app.schemas.quiz import QuizCreate, QuizOut, QuizResponseOut, QuizSummaryOut, QuizUpdate

router = APIRouter(prefix="/quizzes", tags=["Quizzes"])


@router.get("", response_model=List[QuizSummaryOut])
def list_quizzes(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return QuizService.list_for_user(db, current_user)


@router.post("", response_model=QuizOut, status_code=201)
def create_quiz(payload: QuizCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return QuizService.create(db, current_user, payload)


@router.get("/{quiz_id}", response_model=QuizOut)
def get_quiz(quiz_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return QuizService.get_owned(db, current_user, quiz_id)


@router.put("/{quiz_id}", response_model=QuizOut)
def update_quiz(
    quiz_id: int,
    payload: QuizUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    quiz = QuizService.get_owned(db, current_user, quiz_id)
    return QuizService.update(db, current_user, quiz, payload)


@router.delete("/{quiz_id}", status_code=204)
def delete_quiz(quiz_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    quiz = QuizService.get_owned(db, current_user, quiz_id)
    QuizService.delete(db, quiz)
    return Response(status_code=204)


@router.get("/{quiz_id}/responses", response_model=List[QuizResponseOut])
def quiz_responses(quiz_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    quiz = QuizService.get_owned(db, current_user, quiz_id)
    return QuizService.responses(db, quiz)
