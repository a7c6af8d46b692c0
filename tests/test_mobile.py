from datetime import timedelta

import pytest

from app.api.models.lead import Lead
from app.api.models.user import User
from app.core.security import criar_token
from tests.helpers import auth

PROTECTED_ROUTES = [
    ("get", "/api/mobile/doctor/profile"),
    ("put", "/api/mobile/doctor/profile"),
    ("get", "/api/mobile/profile"),
    ("put", "/api/mobile/profile"),
    ("get", "/api/mobile/doctor/leads"),
    ("post", "/api/mobile/doctor/leads"),
    ("get", "/api/mobile/doctor/leads/1"),
    ("put", "/api/mobile/doctor/leads/1"),
    ("delete", "/api/mobile/doctor/leads/1"),
]


@pytest.mark.parametrize("method,path", PROTECTED_ROUTES)
def test_protected_routes_without_token(client, method, path):
    kwargs = {"json": {}} if method in ("post", "put") else {}
    r = getattr(client, method)(path, **kwargs)
    assert r.status_code == 401
    assert r.json()["error"] == "Acesso não autorizado"


@pytest.mark.parametrize("method,path", PROTECTED_ROUTES)
def test_protected_routes_with_bad_token(client, method, path):
    kwargs = {"json": {}} if method in ("post", "put") else {}
    r = getattr(client, method)(path, headers=auth("nao-e-um-jwt"), **kwargs)
    assert r.status_code == 401
    assert r.json()["error"] == "Token inválido ou expirado"


def test_expired_token_is_rejected(client, doctor, db_session):
    user, _ = doctor
    token = criar_token(db_session.get(User, user["id"]), expires_delta=timedelta(hours=-1))
    r = client.get("/api/mobile/profile", headers=auth(token))
    assert r.status_code == 401


def test_token_for_deleted_user(client, doctor, db_session):
    user, headers = doctor
    db_session.delete(db_session.get(User, user["id"]))
    db_session.commit()

    r = client.get("/api/mobile/profile", headers=headers)
    assert r.status_code == 401
    assert r.json()["error"] == "Usuário não encontrado"


def test_mobile_register_and_login(client):
    r = client.post(
        "/api/mobile/auth/register",
        json={"name": "Dr. Caio", "email": "caio@med1.com.br", "password": "segredo123"},
    )
    assert r.status_code == 201
    assert r.json()["user"]["slug"] == "dr-caio"

    r = client.post(
        "/api/mobile/auth/register",
        json={"name": "Dr. Caio", "email": "caio@med1.com.br", "password": "segredo123"},
    )
    assert r.status_code == 409

    r = client.post("/api/mobile/auth/login", json={"email": "caio@med1.com.br", "password": "segredo123"})
    assert r.status_code == 200
    assert r.json()["token"]


def test_verify(client, doctor):
    _, headers = doctor
    body = client.get("/api/mobile/auth/verify", headers=headers).json()
    assert body["valid"] is True
    assert body["user"]["email"] == "ana@med1.com.br"

    r = client.get("/api/mobile/auth/verify")
    assert r.status_code == 401
    assert r.json() == {"valid": False, "error": "Acesso não autorizado"}


def test_refresh_keeps_token_with_time_left(client, doctor):
    _, headers = doctor
    token = headers["Authorization"].split(" ")[1]

    body = client.post("/api/mobile/auth/refresh", json={"token": token}).json()
    assert body["token"] == token
    assert body["message"] == "Token ainda é válido"


def test_refresh_renews_token_close_to_expiry(client, doctor, db_session):
    user, _ = doctor
    token = criar_token(db_session.get(User, user["id"]), expires_delta=timedelta(hours=2))

    body = client.post("/api/mobile/auth/refresh", json={"token": token}).json()
    assert body["token"] != token
    assert body["user"]["id"] == user["id"]

    r = client.get("/api/mobile/profile", headers=auth(body["token"]))
    assert r.status_code == 200


def test_refresh_accepts_expired_token(client, doctor, db_session):
    user, _ = doctor
    token = criar_token(db_session.get(User, user["id"]), expires_delta=timedelta(days=-3))
    r = client.post("/api/mobile/auth/refresh", json={"token": token})
    assert r.status_code == 200
    assert r.json()["token"] != token


def test_refresh_errors(client):
    assert client.post("/api/mobile/auth/refresh", json={}).status_code == 400
    assert client.post("/api/mobile/auth/refresh", json={"token": "x"}).status_code == 401


def test_profile_stats_and_update(client, doctor):
    _, headers = doctor
    body = client.get("/api/mobile/profile", headers=headers).json()
    assert body["plan"] == "free"
    assert body["stats"] == {
        "totalIndications": 0,
        "totalLeads": 0,
        "recentClicks": 0,
        "recentLeads": 0,
        "conversionRate": 0,
    }

    r = client.put("/api/mobile/profile", json={}, headers=headers)
    assert r.status_code == 400

    r = client.put("/api/mobile/profile", json={"phone": "34988887777"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["phone"] == "34988887777"


def test_profile_password_change(client, doctor):
    _, headers = doctor

    r = client.put("/api/mobile/profile", json={"newPassword": "nova12345"}, headers=headers)
    assert r.status_code == 400

    r = client.put(
        "/api/mobile/profile",
        json={"newPassword": "nova12345", "currentPassword": "errada"},
        headers=headers,
    )
    assert r.status_code == 401

    r = client.put(
        "/api/mobile/profile",
        json={"newPassword": "nova12345", "currentPassword": "segredo123"},
        headers=headers,
    )
    assert r.status_code == 200

    r = client.post("/api/mobile/auth/login", json={"email": "ana@med1.com.br", "password": "nova12345"})
    assert r.status_code == 200


def test_doctor_profile_update(client, doctor):
    _, headers = doctor
    r = client.put("/api/mobile/doctor/profile", json={"specialty": "Cardiologia"}, headers=headers)
    assert r.status_code == 200
    assert client.get("/api/mobile/doctor/profile", headers=headers).json()["specialty"] == "Cardiologia"


def test_create_lead_dedupes_by_phone(client, doctor, db_session):
    _, headers = doctor

    r = client.post(
        "/api/mobile/doctor/leads",
        json={"name": "Maria", "phone": "(34) 99999-0000"},
        headers=headers,
    )
    assert r.status_code == 201
    lead_id = r.json()["id"]

    r = client.post(
        "/api/mobile/doctor/leads",
        json={"name": "Maria Silva", "phone": "34999990000", "interest": "Botox"},
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json()["id"] == lead_id
    assert r.json()["name"] == "Maria Silva"
    assert r.json()["interest"] == "Botox"

    assert db_session.query(Lead).count() == 1


def test_create_lead_requires_name_and_phone(client, doctor):
    _, headers = doctor
    r = client.post("/api/mobile/doctor/leads", json={"name": "Maria"}, headers=headers)
    assert r.status_code == 400


def test_same_phone_for_other_doctor_is_a_new_lead(client, doctor, other_doctor, db_session):
    _, headers = doctor
    _, other_headers = other_doctor
    client.post("/api/mobile/doctor/leads", json={"name": "Maria", "phone": "34999990000"}, headers=headers)
    r = client.post(
        "/api/mobile/doctor/leads", json={"name": "Maria", "phone": "34999990000"}, headers=other_headers
    )
    assert r.status_code == 201
    assert db_session.query(Lead).count() == 2


def test_list_leads_paginated(client, doctor):
    _, headers = doctor
    for i in range(5):
        client.post(
            "/api/mobile/doctor/leads",
            json={"name": f"Paciente {i}", "phone": f"3499999000{i}"},
            headers=headers,
        )
    lead_id = client.get("/api/mobile/doctor/leads", headers=headers).json()["data"][0]["id"]
    client.put(f"/api/mobile/doctor/leads/{lead_id}", json={"status": "Agendado"}, headers=headers)

    body = client.get("/api/mobile/doctor/leads?page=2&limit=2", headers=headers).json()
    assert body["pagination"] == {"page": 2, "limit": 2, "total": 5, "pages": 3}
    assert len(body["data"]) == 2

    body = client.get("/api/mobile/doctor/leads?status=Agendado", headers=headers).json()
    assert body["pagination"]["total"] == 1
    assert body["data"][0]["id"] == lead_id


def test_lead_of_other_doctor_is_forbidden(client, doctor, other_doctor):
    _, headers = doctor
    _, other_headers = other_doctor
    lead_id = client.post(
        "/api/mobile/doctor/leads", json={"name": "Maria", "phone": "34999990000"}, headers=headers
    ).json()["id"]

    assert client.get(f"/api/mobile/doctor/leads/{lead_id}", headers=other_headers).status_code == 403
    assert client.delete(f"/api/mobile/doctor/leads/{lead_id}", headers=other_headers).status_code == 403
    assert client.get("/api/mobile/doctor/leads/9999", headers=headers).status_code == 404

    assert client.delete(f"/api/mobile/doctor/leads/{lead_id}", headers=headers).json() == {"success": True}
    assert client.get(f"/api/mobile/doctor/leads/{lead_id}", headers=headers).status_code == 404
