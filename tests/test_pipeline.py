import requests

from app.client.pipeline_board import PipelineBoard


def _lead(client, headers, name, phone):
    return client.post(
        "/api/mobile/doctor/leads", json={"name": name, "phone": phone}, headers=headers
    ).json()["id"]


def _statuses(client, headers):
    return {lead["id"]: lead["status"] for lead in client.get("/leads", headers=headers).json()}


def test_lead_board_columns(client, doctor):
    _, headers = doctor
    lead_id = _lead(client, headers, "Ana", "34999990001")

    body = client.get("/pipeline/leads", headers=headers).json()
    assert [c["id"] for c in body["columns"]] == ["novos", "agendados", "compareceram", "fechados", "naoVieram"]
    assert body["columns"][4]["status"] == "Não veio"
    assert [item["id"] for item in body["columns"][0]["items"]] == [lead_id]


def test_move_updates_only_that_card(client, doctor):
    _, headers = doctor
    ids = [_lead(client, headers, f"Paciente {i}", f"3499999000{i}") for i in range(3)]

    r = client.post(
        "/pipeline/leads/move",
        json={"cardId": ids[1], "sourceColumn": "novos", "destinationColumn": "agendados"},
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json() == {"moved": True, "cardId": ids[1], "status": "Agendado"}

    statuses = _statuses(client, headers)
    assert statuses == {ids[0]: "Novo", ids[1]: "Agendado", ids[2]: "Novo"}


def test_move_same_column_is_noop(client, doctor):
    _, headers = doctor
    lead_id = _lead(client, headers, "Ana", "34999990001")

    r = client.post(
        "/pipeline/leads/move",
        json={"cardId": lead_id, "sourceColumn": "novos", "destinationColumn": "novos"},
        headers=headers,
    )
    assert r.json()["moved"] is False
    assert _statuses(client, headers)[lead_id] == "Novo"


def test_move_errors(client, doctor, other_doctor):
    _, headers = doctor
    _, other_headers = other_doctor
    lead_id = _lead(client, headers, "Ana", "34999990001")

    r = client.post(
        "/pipeline/leads/move",
        json={"cardId": lead_id, "destinationColumn": "perdidos"},
        headers=headers,
    )
    assert r.status_code == 400

    r = client.post(
        "/pipeline/leads/move",
        json={"cardId": lead_id, "destinationColumn": "fechados"},
        headers=other_headers,
    )
    assert r.status_code == 404
    assert _statuses(client, headers)[lead_id] == "Novo"


def test_outbound_board_move(client, doctor):
    _, headers = doctor
    outbound_id = client.post("/outbound", json={"nome": "Dr. Pedro"}, headers=headers).json()["id"]

    r = client.post(
        "/pipeline/outbound/move",
        json={"cardId": outbound_id, "destinationColumn": "publicou link"},
        headers=headers,
    )
    assert r.json()["status"] == "publicou link"

    body = client.get("/pipeline/outbound", headers=headers).json()
    column = next(c for c in body["columns"] if c["id"] == "publicou link")
    assert [item["id"] for item in column["items"]] == [outbound_id]


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def json(self):
        return self.payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    def __init__(self, columns, patch_status=200):
        self.columns = columns
        self.patch_status = patch_status
        self.patches = []

    def get(self, url, headers=None, timeout=None):
        return FakeResponse({"columns": self.columns})

    def patch(self, url, json=None, headers=None, timeout=None):
        self.patches.append((url, json))
        return FakeResponse(status_code=self.patch_status)


def _columns():
    return [
        {"id": "novos", "title": "Novos", "status": "Novo", "items": [{"id": 1, "status": "Novo"}, {"id": 2, "status": "Novo"}]},
        {"id": "agendados", "title": "Agendados", "status": "Agendado", "items": []},
    ]


def test_client_moves_optimistically_with_one_patch():
    session = FakeSession(_columns())
    board = PipelineBoard("http://api.local/", "tok", session=session)
    board.load()

    assert board.move(2, "novos", "agendados") is True
    assert session.patches == [("http://api.local/leads/2", {"status": "Agendado"})]
    assert [i["id"] for i in board.column("novos")["items"]] == [1]
    assert board.column("agendados")["items"] == [{"id": 2, "status": "Agendado"}]


def test_client_keeps_move_when_patch_fails():
    session = FakeSession(_columns(), patch_status=500)
    board = PipelineBoard("http://api.local", "tok", session=session)
    board.load()

    assert board.move(1, "novos", "agendados") is False
    assert board.last_error
    assert [i["id"] for i in board.column("agendados")["items"]] == [1]


def test_client_same_column_sends_nothing():
    session = FakeSession(_columns())
    board = PipelineBoard("http://api.local", "tok", session=session)
    board.load()

    assert board.move(1, "novos", "novos") is False
    assert session.patches == []
