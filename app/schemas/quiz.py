from datetime import datetime
from typing import Any, Dict, List, Optional

from app.core.constants import QuestionType
from app.schemas.base import CamelModel
from app.schemas.indication import IndicationOut
from app.schemas.user import PublicDoctorOut


class QuizCreate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None


class QuestionIn(CamelModel):
    text: str
    type: QuestionType
    required: bool = False
    variable_name: Optional[str] = None
    options: List[Any] = []


class QuizUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    is_published: Optional[bool] = None
    questions: Optional[List[QuestionIn]] = None
    create_indication_if_missing: bool = False
    opening_screen: Optional[Dict[str, Any]] = None
    completion_screen: Optional[Dict[str, Any]] = None


class QuestionOut(CamelModel):
    id: int
    text: str
    type: str
    required: bool
    variable_name: str
    options: List[Any] = []
    order: int


class QuizSummaryOut(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    is_published: bool
    created_at: datetime
    indication_id: Optional[int] = None
    indication_slug: Optional[str] = None
    question_count: int


class QuizOut(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    is_published: bool
    opening_screen: Dict[str, Any]
    completion_screen: Dict[str, Any]
    questions: List[QuestionOut]
    indications: List[IndicationOut] = []


class PublicQuizOut(CamelModel):
    indication: IndicationOut
    user: PublicDoctorOut
    quiz: Optional[QuizOut] = None


class AnswerIn(CamelModel):
    question_id: int
    question_text: Optional[str] = None
    variable_name: Optional[str] = None
    value: Any = None


class QuizSubmitIn(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    indication_id: Optional[int] = None
    answers: List[AnswerIn] = []


class QuizSubmitOut(CamelModel):
    success: bool
    message: str
    lead_id: int
    is_update: bool


class QuizResponseOut(CamelModel):
    lead_id: int
    name: str
    phone: str
    indication_slug: Optional[str] = None
    answers: Dict[str, Any]
    updated_at: datetime
