from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Sequence

from app.api.services.quiz_answers import normalize_answer_value

OPENING = "opening"
QUESTION = "question"
COMPLETION = "completion"


class QuizSubmissionError(ValueError):
    pass


class QuizRunner:
    """
    Navegação linear de um questionário: abertura -> pergunta[i] -> conclusão.

    `questions` são objetos (ou dicts) com id, text, type, required e
    variable_name. Não há ramificação nem pontuação.
    """

    def __init__(self, questions: Sequence[Any], indication_id: Optional[int] = None):
        self.questions = [self._as_obj(q) for q in questions]
        self.indication_id = indication_id
        self.screen = OPENING
        self.index = 0
        self.answers: Dict[Any, Any] = {}

    @staticmethod
    def _as_obj(question):
        if isinstance(question, dict):
            return SimpleNamespace(
                id=question["id"],
                text=question.get("text", ""),
                type=question.get("type", "text"),
                required=question.get("required", False),
                variable_name=question.get("variable_name") or question.get("variableName"),
            )
        return question

    @property
    def current_question(self):
        if self.screen != QUESTION:
            return None
        return self.questions[self.index]

    @property
    def progress(self) -> float:
        if not self.questions or self.screen == OPENING:
            return 0.0
        if self.screen == COMPLETION:
            return 1.0
        return self.index / len(self.questions)

    def start(self) -> str:
        if self.screen != OPENING:
            return self.screen
        self.index = 0
        self.screen = QUESTION if self.questions else COMPLETION
        return self.screen

    def answer(self, value: Any) -> Any:
        question = self.current_question
        if question is None:
            raise QuizSubmissionError("Nenhuma pergunta ativa")
        normalized = normalize_answer_value(value, question.type)
        self.answers[question.id] = normalized
        return normalized

    def _is_answered(self, question) -> bool:
        value = self.answers.get(question.id)
        if value is None or value == "" or value == []:
            return False
        return True

    def can_advance(self) -> bool:
        question = self.current_question
        if question is None:
            return False
        return not question.required or self._is_answered(question)

    def next(self) -> str:
        if self.screen != QUESTION:
            return self.screen
        if not self.can_advance():
            raise QuizSubmissionError("Esta pergunta é obrigatória")

        if self.index + 1 < len(self.questions):
            self.index += 1
        else:
            self.screen = COMPLETION
        return self.screen

    def back(self) -> str:
        if self.screen == COMPLETION and self.questions:
            self.screen = QUESTION
            self.index = len(self.questions) - 1
        elif self.screen == QUESTION:
            if self.index == 0:
                self.screen = OPENING
            else:
                self.index -= 1
        return self.screen

    def build_submission(self, name: Optional[str], phone: Optional[str]) -> Dict[str, Any]:
        """Monta o corpo do POST /quiz/submit. Nome e telefone são sempre exigidos."""
        if not (name or "").strip() or not (phone or "").strip():
            raise QuizSubmissionError("Nome e telefone são obrigatórios")

        answers: List[Dict[str, Any]] = []
        for question in self.questions:
            if question.id in self.answers:
                answers.append({
                    "questionId": question.id,
                    "questionText": question.text,
                    "variableName": question.variable_name,
                    "value": self.answers[question.id],
                })

        return {
            "name": name.strip(),
            "phone": phone.strip(),
            "indicationId": self.indication_id,
            "answers": answers,
        }
