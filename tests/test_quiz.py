import json

import pytest

from app.api.models.event import Event
from app.api.models.lead import Lead
from app.api.services.quiz_answers import (
    answers_metadata,
    display_value,
    normalize_answer_value,
    validate_question,
)
from app.api.services.quiz_runner import QuizRunner, QuizSubmissionError
from app.core.config import settings

QUESTIONS = [
    {"text": "Qual sua idade?", "type": "number", "variableName": "idade", "required": True},
    {"text": "Fumante?", "type": "boolean", "variableName": "fumante"},
    {"text": "Sintomas", "type": "checkbox", "variableName": "sintomas", "options": ["Dor", "Febre"]},
]


@pytest.fixture()
def published_quiz(client, doctor):
    user, headers = doctor
    quiz_id = client.post("/quizzes", json={"name": "Avaliação Inicial"}, headers=headers).json()["id"]
    r = client.put(
        f"/quizzes/{quiz_id}",
        json={"questions": QUESTIONS, "isPublished": True, "createIndicationIfMissing": True},
        headers=headers,
    )
    assert r.status_code == 200, r.text
    return user, headers, r.json()


def test_normalize_answer_value():
    assert normalize_answer_value("42", "number") == 42.0
    assert normalize_answer_value("", "number") is None
    assert normalize_answer_value("Sim", "boolean") is True
    assert normalize_answer_value("true", "boolean") is True
    assert normalize_answer_value("não", "boolean") is False
    assert normalize_answer_value("Dor, Febre", "checkbox") == ["Dor", "Febre"]
    assert normalize_answer_value(["a"], "multiselect") == ["a"]
    assert normalize_answer_value("livre", "text") == "livre"
    assert normalize_answer_value(None, "text") is None


def test_display_value():
    assert display_value(42.0, "number") == "42"
    assert display_value(True, "boolean") == "Sim"
    assert display_value(False, "boolean") == "Não"
    assert display_value(["Dor", "Febre"], "checkbox") == "Dor, Febre"


def test_answers_metadata_flat_and_nested_keys():
    metadata = answers_metadata([{
        "question_id": 7,
        "question_text": "Fumante?",
        "variable_name": None,
        "value": True,
        "display_value": "Sim",
        "type": "boolean",
    }])
    assert metadata["question_7"] == {"value": True, "text": "Fumante?", "displayValue": "Sim", "type": "boolean"}
    assert metadata["question_7_display"] == "Sim"


def test_validate_question():
    assert validate_question("", "x", "text", []) == "O texto da pergunta é obrigatório"
    assert validate_question("Idade", "minha idade", "text", []) is not None
    assert validate_question("Cor", "cor", "select", []) == "Este tipo de pergunta requer pelo menos uma opção"
    assert validate_question("Cor", "Cor_1", "select", ["Azul"]) is None


def test_runner_flow():
    runner = QuizRunner([
        {"id": 1, "text": "Idade", "type": "number", "required": True, "variable_name": "idade"},
        {"id": 2, "text": "Obs", "type": "text"},
    ], indication_id=9)

    assert runner.screen == "opening"
    assert runner.start() == "question"
    assert runner.current_question.id == 1

    runner.answer("")
    assert runner.can_advance() is False
    with pytest.raises(QuizSubmissionError):
        runner.next()

    runner.answer("30")
    assert runner.next() == "question"
    assert runner.current_question.id == 2
    assert runner.next() == "completion"
    assert runner.progress == 1.0

    assert runner.back() == "question"
    assert runner.current_question.id == 2
    runner.back()
    assert runner.back() == "opening"

    submission = runner.build_submission(" Maria ", "34999990000")
    assert submission["name"] == "Maria"
    assert submission["indicationId"] == 9
    assert submission["answers"] == [
        {"questionId": 1, "questionText": "Idade", "variableName": "idade", "value": 30.0}
    ]


def test_runner_accepts_camel_case_question_dicts():
    runner = QuizRunner([{"id": 7, "text": "Fumante?", "type": "boolean", "variableName": "fumante"}])
    question = runner.questions[0]
    assert (question.id, question.type, question.required, question.variable_name) == (7, "boolean", False, "fumante")

    runner.start()
    runner.answer("sim")
    runner.next()
    assert runner.build_submission("Maria", "34999990000")["answers"] == [
        {"questionId": 7, "questionText": "Fumante?", "variableName": "fumante", "value": True}
    ]


@pytest.mark.parametrize("name,phone", [("", "34999990000"), ("Maria", "  "), (None, None)])
def test_runner_requires_name_and_phone(name, phone):
    runner = QuizRunner([])
    runner.start()
    with pytest.raises(QuizSubmissionError):
        runner.build_submission(name, phone)


def test_quiz_crud_and_default_screens(client, doctor):
    _, headers = doctor
    assert client.post("/quizzes", json={}, headers=headers).status_code == 400

    quiz = client.post("/quizzes", json={"name": "Triagem"}, headers=headers).json()
    assert quiz["openingScreen"]["startButtonText"] == "Começar"
    assert quiz["completionScreen"]["title"] == "Obrigado por participar!"

    listed = client.get("/quizzes", headers=headers).json()
    assert listed[0]["questionCount"] == 0
    assert listed[0]["indicationSlug"] is None

    assert client.delete(f"/quizzes/{quiz['id']}", headers=headers).status_code == 204
    assert client.get(f"/quizzes/{quiz['id']}", headers=headers).status_code == 404


def test_update_rejects_invalid_questions(client, doctor):
    _, headers = doctor
    quiz_id = client.post("/quizzes", json={"name": "Triagem"}, headers=headers).json()["id"]

    r = client.put(
        f"/quizzes/{quiz_id}",
        json={"questions": [{"text": "Cor", "type": "select", "variableName": "cor"}]},
        headers=headers,
    )
    assert r.status_code == 400

    r = client.put(
        f"/quizzes/{quiz_id}",
        json={"questions": [{"text": "Cor", "type": "cor-favorita"}]},
        headers=headers,
    )
    assert r.status_code == 400


def test_update_creates_quiz_indication(published_quiz):
    user, _, quiz = published_quiz
    assert [q["order"] for q in quiz["questions"]] == [0, 1, 2]
    assert quiz["questions"][2]["options"][0]["value"] == "Dor"

    indication = quiz["indications"][0]
    assert indication["type"] == "quiz"
    assert indication["slug"] == "avaliacao-inicial"
    assert indication["fullLink"] == f"{settings.NEXT_PUBLIC_APP_URL}/quiz/{user['slug']}/avaliacao-inicial"


def test_public_quiz_records_page_view(client, published_quiz, db_session):
    user, _, quiz = published_quiz
    r = client.get(f"/quiz/{user['slug']}/avaliacao-inicial")
    assert r.status_code == 200
    assert r.json()["quiz"]["id"] == quiz["id"]
    assert r.json()["user"]["slug"] == user["slug"]
    assert db_session.query(Event).filter(Event.type == "page_view").count() == 1


def test_submit_creates_then_updates_lead(client, published_quiz, db_session):
    _, _, quiz = published_quiz
    indication_id = quiz["indications"][0]["id"]
    q_idade, q_fumante, q_sintomas = [q["id"] for q in quiz["questions"]]

    payload = {
        "name": "Maria",
        "phone": "(34) 98888-7777",
        "indicationId": indication_id,
        "answers": [
            {"questionId": q_idade, "value": "42"},
            {"questionId": q_fumante, "value": "sim"},
            {"questionId": q_sintomas, "value": "Dor, Febre"},
        ],
    }
    first = client.post("/quiz/submit", json=payload).json()
    assert first["success"] is True
    assert first["isUpdate"] is False

    second = client.post("/quiz/submit", json={**payload, "phone": "34988887777"}).json()
    assert second["isUpdate"] is True
    assert second["leadId"] == first["leadId"]

    lead = db_session.get(Lead, first["leadId"])
    notes = json.loads(lead.medical_notes)
    assert notes["idade"]["value"] == 42
    assert notes["fumante"]["displayValue"] == "Sim"
    assert notes["sintomas_value"] == ["Dor", "Febre"]
    assert lead.indication_id == indication_id
    assert lead.utm_source == "quiz"
    assert lead.utm_medium == quiz["indications"][0]["slug"]
    assert db_session.query(Lead).count() == 1
    assert db_session.query(Event).filter(Event.type == "quiz_submit").count() == 2


@pytest.mark.parametrize("name,phone", [("", "34999990000"), ("Maria", ""), ("  ", "  ")])
def test_submit_requires_name_and_phone(client, published_quiz, db_session, name, phone):
    _, _, quiz = published_quiz
    r = client.post(
        "/quiz/submit",
        json={"name": name, "phone": phone, "indicationId": quiz["indications"][0]["id"], "answers": []},
    )
    assert r.status_code == 400
    assert db_session.query(Lead).count() == 0


def test_submit_unknown_indication_and_without_quiz(client, doctor):
    _, headers = doctor
    r = client.post("/quiz/submit", json={"name": "Maria", "phone": "34999990000", "indicationId": 999})
    assert r.status_code == 404

    indication_id = client.post("/indications", json={"slug": "site"}, headers=headers).json()["id"]
    r = client.post("/quiz/submit", json={"name": "Maria", "phone": "34999990000", "indicationId": indication_id})
    assert r.status_code == 400


def test_quiz_responses(client, published_quiz):
    _, headers, quiz = published_quiz
    client.post(
        "/quiz/submit",
        json={"name": "Maria", "phone": "34999990000", "indicationId": quiz["indications"][0]["id"], "answers": []},
    )
    body = client.get(f"/quizzes/{quiz['id']}/responses", headers=headers).json()
    assert body[0]["name"] == "Maria"
    assert body[0]["indicationSlug"] == "avaliacao-inicial"


def test_delete_quiz_keeps_indication(client, published_quiz):
    _, headers, quiz = published_quiz
    assert client.delete(f"/quizzes/{quiz['id']}", headers=headers).status_code == 204

    indication = client.get("/indications/avaliacao-inicial", headers=headers).json()
    assert indication["quizId"] is None
