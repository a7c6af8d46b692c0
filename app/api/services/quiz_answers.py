"""
Normalização das respostas de questionário.

As respostas chegam do formulário como strings, listas ou valores crus; cada
pergunta declara o tipo esperado e o valor é convertido para ele antes de ser
salvo nas anotações do lead.
"""
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from app.core.constants import QUESTION_TYPES_WITH_OPTIONS, QuestionType

TRUE_STRINGS = ("sim", "true")
LIST_TYPES = (QuestionType.CHECKBOX.value, QuestionType.MULTISELECT.value)

VARIABLE_NAME_RE = re.compile(r"^[a-z0-9_]+$", re.IGNORECASE)


def normalize_answer_value(value: Any, question_type: str) -> Any:
    if value is None:
        return None

    if question_type == QuestionType.NUMBER.value:
        if value == "":
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        return number

    if question_type == QuestionType.BOOLEAN.value:
        if isinstance(value, str):
            return value.strip().lower() in TRUE_STRINGS
        return bool(value)

    if question_type in LIST_TYPES:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value] if value else []

    return value


def display_value(value: Any, question_type: str) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if question_type == QuestionType.BOOLEAN.value:
        return "Sim" if value is True else "Não"
    if question_type in LIST_TYPES and isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return str(value)


def process_answers(answers: Mapping[Any, Any], questions: Iterable[Any]) -> List[Dict[str, Any]]:
    """
    `answers` é {question_id: valor cru}. Respostas para perguntas que não
    pertencem ao questionário são descartadas.
    """
    questions_by_id = {q.id: q for q in questions}
    processed = []

    for question_id, raw in answers.items():
        question = questions_by_id.get(question_id)
        if question is None:
            continue

        value = normalize_answer_value(raw, question.type)
        processed.append({
            "question_id": question_id,
            "question_text": question.text,
            "variable_name": question.variable_name,
            "value": value,
            "display_value": display_value(value, question.type),
            "type": question.type,
        })

    return processed


def answers_metadata(processed: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    metadata: Dict[str, Any] = {}

    for answer in processed:
        key = answer["variable_name"] or f"question_{answer['question_id']}"
        metadata[key] = {
            "value": answer["value"],
            "text": answer["question_text"],
            "displayValue": answer["display_value"],
            "type": answer["type"],
        }
        # formato plano mantido para as telas antigas
        metadata[f"{key}_value"] = answer["value"]
        metadata[f"{key}_text"] = answer["question_text"]
        metadata[f"{key}_display"] = answer["display_value"]

    return metadata


def validate_question(text: Optional[str], variable_name: Optional[str], type: str, options: list) -> Optional[str]:
    """Retorna a mensagem de erro ou None."""
    if not (text or "").strip():
        return "O texto da pergunta é obrigatório"

    if not (variable_name or "").strip():
        return "O nome da variável é obrigatório"

    if not VARIABLE_NAME_RE.match(variable_name):
        return "O nome da variável deve conter apenas letras, números e underscores"

    if type in [t.value for t in QUESTION_TYPES_WITH_OPTIONS] and not options:
        return "Este tipo de pergunta requer pelo menos uma opção"

    return None


def normalize_options(options: Optional[list]) -> list:
    if not options:
        return []
    if isinstance(options[0], dict) and "value" in options[0]:
        return list(options)
    return [
        {"id": f"option_{index}", "value": option, "label": option, "order": index}
        for index, option in enumerate(options)
    ]
