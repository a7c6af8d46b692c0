import json
import logging
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session, selectinload

from app.api.models.indication import Indication
from app.api.models.lead import Lead
from app.api.models.quiz import Quiz, QuizQuestion
from app.api.models.user import User
from app.api.services.event_service import EventService
from app.api.services.indication_service import IndicationService
from app.api.services.lead_service import LeadService
from app.api.services.quiz_answers import (
    answers_metadata,
    normalize_options,
    process_answers,
    validate_question,
)
from app.core.config import settings
from app.core.constants import (
    DEFAULT_COMPLETION_SCREEN,
    DEFAULT_OPENING_SCREEN,
    EventType,
    LeadStatus,
)
from app.core.utils import only_digits
from app.schemas.quiz import QuizCreate, QuizSubmitIn, QuizUpdate

logger = logging.getLogger("quizzes")


class QuizService:

    @staticmethod
    def _screens(quiz: Quiz) -> None:
        if not quiz.opening_screen:
            quiz.opening_screen = dict(DEFAULT_OPENING_SCREEN)
        if not quiz.completion_screen:
            quiz.completion_screen = dict(DEFAULT_COMPLETION_SCREEN)

    @staticmethod
    def list_for_user(db: Session, user: User) -> List[dict]:
        quizzes = (
            db.query(Quiz)
            .options(selectinload(Quiz.questions), selectinload(Quiz.indications))
            .filter(Quiz.user_id == user.id)
            .order_by(Quiz.created_at.desc(), Quiz.id.desc())
            .all()
        )

        result = []
        for quiz in quizzes:
            indication = quiz.indications[0] if quiz.indications else None
            result.append({
                "id": quiz.id,
                "name": quiz.name,
                "description": quiz.description,
                "is_published": quiz.is_published,
                "created_at": quiz.created_at,
                "indication_id": indication.id if indication else None,
                "indication_slug": indication.slug if indication else None,
                "question_count": len(quiz.questions),
            })
        return result

    @staticmethod
    def create(db: Session, user: User, data: QuizCreate) -> Quiz:
        if not (data.name or "").strip():
            raise HTTPException(400, "Nome do questionário é obrigatório")

        quiz = Quiz(
            user_id=user.id,
            name=data.name.strip(),
            description=data.description,
            is_published=False,
            opening_screen=dict(DEFAULT_OPENING_SCREEN),
            completion_screen=dict(DEFAULT_COMPLETION_SCREEN),
        )
        db.add(quiz)
        db.commit()
        db.refresh(quiz)
        return quiz

    @staticmethod
    def get_owned(db: Session, user: User, quiz_id: int) -> Quiz:
        quiz = db.get(Quiz, quiz_id)
        if not quiz or quiz.user_id != user.id:
            raise HTTPException(404, "Questionário não encontrado")
        QuizService._screens(quiz)
        return quiz

    @staticmethod
    def update(db: Session, user: User, quiz: Quiz, data: QuizUpdate) -> Quiz:
        if data.questions is not None:
            for index, question in enumerate(data.questions):
                error = validate_question(
                    question.text,
                    question.variable_name or f"question_{index + 1}",
                    question.type.value,
                    question.options,
                )
                if error:
                    raise HTTPException(400, f"Pergunta {index + 1}: {error}")

        if data.name is not None:
            if not data.name.strip():
                raise HTTPException(400, "Nome do questionário é obrigatório")
            quiz.name = data.name.strip()
        if data.description is not None:
            quiz.description = data.description
        if data.is_published is not None:
            quiz.is_published = data.is_published
        if data.opening_screen is not None:
            quiz.opening_screen = {**DEFAULT_OPENING_SCREEN, **data.opening_screen}
        if data.completion_screen is not None:
            quiz.completion_screen = {**DEFAULT_COMPLETION_SCREEN, **data.completion_screen}

        if data.questions is not None:
            # substitui todas as perguntas; a ordem é a posição na lista
            quiz.questions.clear()
            db.flush()
            for index, question in enumerate(data.questions):
                quiz.questions.append(QuizQuestion(
                    text=question.text.strip(),
                    type=question.type.value,
                    required=question.required,
                    variable_name=question.variable_name or f"question_{index + 1}",
                    options=normalize_options(question.options),
                    order=index,
                ))

        if data.create_indication_if_missing and not quiz.indications:
            indication = IndicationService.create_unique(
                db,
                user,
                base=quiz.name,
                name=quiz.name,
                type="quiz",
                full_link_prefix=f"{settings.NEXT_PUBLIC_APP_URL}/quiz",
                quiz_id=quiz.id,
            )
            logger.info("QUIZ_INDICATION_CREATED: quiz_id=%s slug=%s", quiz.id, indication.slug)

        db.commit()
        db.refresh(quiz)
        QuizService._screens(quiz)
        return quiz

    @staticmethod
    def delete(db: Session, quiz: Quiz) -> None:
        for indication in list(quiz.indications):
            indication.quiz_id = None
        db.flush()
        db.delete(quiz)
        db.commit()

    @staticmethod
    def public(db: Session, user_slug: str, quiz_slug: str, ip: str, user_agent: str) -> dict:
        user = db.query(User).filter(User.slug == user_slug).first()
        if not user:
            raise HTTPException(404, "Médico não encontrado")

        indication = IndicationService.get_by_slug(db, user.id, quiz_slug)
        if not indication:
            raise HTTPException(404, "Questionário não encontrado")

        EventService.record(
            db,
            user_id=user.id,
            type=EventType.PAGE_VIEW.value,
            indication_id=indication.id,
            ip=ip,
            user_agent=user_agent,
        )

        quiz = indication.quiz
        if quiz is not None:
            QuizService._screens(quiz)

        return {"indication": indication, "user": user, "quiz": quiz}

    @staticmethod
    def submit(db: Session, data: QuizSubmitIn, ip: Optional[str] = None, user_agent: Optional[str] = None) -> dict:
        name = (data.name or "").strip()
        phone = only_digits(data.phone)
        if not name or not phone:
            raise HTTPException(400, "Nome e telefone são obrigatórios")

        indication = db.get(Indication, data.indication_id) if data.indication_id else None
        if not indication:
            raise HTTPException(404, "Indicação não encontrada")

        quiz = indication.quiz
        if quiz is None:
            raise HTTPException(400, "Questionário não encontrado para esta indicação")

        processed = process_answers(
            {answer.question_id: answer.value for answer in data.answers},
            quiz.questions,
        )
        notes = json.dumps(answers_metadata(processed), ensure_ascii=False)

        lead = LeadService.find_by_phone(db, indication.user_id, phone)
        is_update = lead is not None
        if lead is None:
            lead = Lead(
                user_id=indication.user_id,
                phone=phone,
                status=LeadStatus.NOVO.value,
                source="quiz",
                utm_source="quiz",
                utm_medium=indication.slug,
            )
            db.add(lead)

        lead.name = name
        lead.indication_id = indication.id
        lead.medical_notes = notes

        EventService.record(
            db,
            user_id=indication.user_id,
            type=EventType.QUIZ_SUBMIT.value,
            indication_id=indication.id,
            ip=ip,
            user_agent=user_agent,
            commit=False,
        )
        db.commit()
        db.refresh(lead)

        logger.info(
            "QUIZ_SUBMIT: quiz_id=%s lead_id=%s is_update=%s", quiz.id, lead.id, is_update
        )

        return {
            "success": True,
            "message": "Respostas atualizadas com sucesso" if is_update else "Respostas enviadas com sucesso",
            "lead_id": lead.id,
            "is_update": is_update,
        }

    @staticmethod
    def responses(db: Session, quiz: Quiz) -> List[dict]:
        indication_ids = [i.id for i in quiz.indications]
        if not indication_ids:
            return []

        leads = (
            db.query(Lead)
            .filter(Lead.indication_id.in_(indication_ids))
            .order_by(Lead.updated_at.desc(), Lead.id.desc())
            .all()
        )

        result = []
        for lead in leads:
            try:
                answers = json.loads(lead.medical_notes or "{}")
            except ValueError:
                # anotação em texto livre, não veio do questionário
                continue
            if not isinstance(answers, dict):
                continue
            result.append({
                "lead_id": lead.id,
                "name": lead.name,
                "phone": lead.phone,
                "indication_slug": lead.indication.slug if lead.indication else None,
                "answers": answers,
                "updated_at": lead.updated_at,
            })
        return result
