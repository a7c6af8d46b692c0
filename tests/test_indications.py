from urllib.parse import parse_qs, urlparse

from app.api.endpoints import track
from app.api.models.event import Event
from app.api.services.indication_service import build_utm_link
from app.core.config import settings


def test_build_utm_link():
    assert build_utm_link("https://med1.app/ana/insta") == "https://med1.app/ana/insta"

    link = build_utm_link(
        "https://med1.app/ana/insta",
        utm_source="instagram",
        utm_campaign="black friday",
        utm_medium=None,
    )
    query = parse_qs(urlparse(link).query)
    assert query == {"utm_source": ["instagram"], "utm_campaign": ["black friday"]}


def test_create_and_list_indications(client, doctor):
    user, headers = doctor
    r = client.post("/indications", json={"slug": "Instagram Bio", "name": "Bio"}, headers=headers)
    assert r.status_code == 201
    assert r.json()["slug"] == "instagram-bio"
    assert r.json()["fullLink"] == f"{settings.LANDING_PAGE_URL}/{user['slug']}/instagram-bio"

    assert client.post("/indications", json={"slug": "instagram-bio"}, headers=headers).status_code == 409
    assert client.post("/indications", json={"name": "Sem slug"}, headers=headers).status_code == 400

    listed = client.get("/indications", headers=headers).json()
    assert listed[0]["count"] == {"clicks": 0, "leads": 0}


def test_indication_detail_and_update(client, doctor):
    user, headers = doctor
    client.post("/indications", json={"slug": "insta"}, headers=headers)
    client.post("/track", json={"userSlug": user["slug"], "indicationSlug": "insta"})
    client.post("/lead", json={"name": "Ana", "phone": "34999990000", "userSlug": user["slug"], "indicationSlug": "insta"})

    body = client.get("/indications/insta", headers=headers).json()
    assert body["count"] == {"clicks": 1, "leads": 1}
    assert body["clickStats"][0]["count"] == 1
    assert body["recentLeads"][0]["name"] == "Ana"

    r = client.put("/indications/insta", json={"name": "Instagram"}, headers=headers)
    assert r.json()["name"] == "Instagram"
    assert client.get("/indications/nada", headers=headers).status_code == 404


def test_generate_link_records_event(client, doctor, db_session):
    user, headers = doctor
    indication_id = client.post("/indications", json={"slug": "insta"}, headers=headers).json()["id"]

    r = client.post(
        "/indications/generate",
        json={"indicationId": indication_id, "utmSource": "instagram", "utmMedium": "bio"},
        headers=headers,
    )
    assert r.status_code == 200
    body = r.json()
    assert body["link"] == f"{settings.LANDING_PAGE_URL}/{user['slug']}/insta?utm_source=instagram&utm_medium=bio"
    assert body["utmParams"]["utmSource"] == "instagram"
    assert db_session.query(Event).filter(Event.type == "link_generated").count() == 1

    assert client.post("/indications/generate", json={}, headers=headers).status_code == 400
    assert client.post("/indications/generate", json={"indicationId": 999}, headers=headers).status_code == 404


def test_stats(client, doctor):
    user, headers = doctor
    client.post("/indications", json={"slug": "a"}, headers=headers)
    client.post("/indications", json={"slug": "b"}, headers=headers)
    for _ in range(4):
        client.post("/track", json={"userSlug": user["slug"], "indicationSlug": "a"})
    client.post("/lead", json={"name": "Ana", "phone": "34999990000", "userSlug": user["slug"], "indicationSlug": "b"})

    body = client.get("/indications/stats?period=week", headers=headers).json()
    assert body["overall"]["totalClicks"] == 4
    assert body["overall"]["totalLeads"] == 1
    assert body["overall"]["overallConversionRate"] == 25
    assert body["indications"][0]["slug"] == "b"
    assert body["dailyStats"]["clicks"][0]["count"] == 4

    assert client.get("/indications/stats?period=decade", headers=headers).status_code == 400


def test_public_indication_records_link_view(client, doctor, db_session):
    user, headers = doctor
    client.post("/indications", json={"slug": "insta"}, headers=headers)

    r = client.get(f"/indications/{user['slug']}/insta")
    assert r.status_code == 200
    assert r.json()["user"]["slug"] == user["slug"]
    assert db_session.query(Event).filter(Event.type == "link_view").count() == 1
    assert client.get(f"/indications/{user['slug']}/nada").status_code == 404


def test_track_post_always_204(client, doctor, db_session):
    user, _ = doctor
    r = client.post("/track", json={"userSlug": user["slug"], "utm_source": "google"})
    assert r.status_code == 204
    event = db_session.query(Event).one()
    assert event.type == "click"
    assert event.utm_source == "google"

    assert client.post("/track", json={"userSlug": "ninguem"}).status_code == 204
    assert client.post("/track", content=b"{quebrado", headers={"content-type": "application/json"}).status_code == 204
    assert client.post("/track", json=[1, 2]).status_code == 204
    assert db_session.query(Event).count() == 1


def test_track_pixel(client, doctor, db_session):
    user, _ = doctor
    r = client.get(f"/track?userSlug={user['slug']}&type=page_view")
    assert r.status_code == 200
    assert r.headers["content-type"] == "image/gif"
    assert r.content.startswith(b"GIF89a")
    assert "no-cache" in r.headers["cache-control"]
    assert db_session.query(Event).filter(Event.type == "page_view").count() == 1

    assert client.get("/track").status_code == 200


def test_track_ignores_unknown_event_type(client, doctor, db_session):
    user, _ = doctor
    assert client.post("/track", json={"userSlug": user["slug"], "type": "qualquer"}).status_code == 204

    r = client.get(f"/track?userSlug={user['slug']}&type=qualquer")
    assert r.status_code == 200
    assert r.content.startswith(b"GIF89a")
    assert db_session.query(Event).count() == 0


def test_track_post_runs_database_work_in_threadpool(client, doctor, db_session, monkeypatch):
    user, _ = doctor
    calls = []
    original = track.run_in_threadpool

    async def spy(func, *args, **kwargs):
        calls.append(func.__name__)
        return await original(func, *args, **kwargs)

    monkeypatch.setattr(track, "run_in_threadpool", spy)
    assert client.post("/track", json={"userSlug": user["slug"]}).status_code == 204
    assert calls == ["_track"]
    assert db_session.query(Event).count() == 1


def test_indication_cannot_point_to_another_doctors_quiz_or_page(client, doctor, other_doctor):
    _, headers = doctor
    other, other_headers = other_doctor

    quiz_id = client.post("/quizzes", json={"name": "Privado"}, headers=headers).json()["id"]
    page_id = client.post("/pages", json={"title": "Minha Página"}, headers=headers).json()["id"]

    r = client.post("/indications", json={"slug": "roubo", "quizId": quiz_id}, headers=other_headers)
    assert r.status_code == 404
    r = client.post("/indications", json={"slug": "roubo", "pageId": page_id}, headers=other_headers)
    assert r.status_code == 404
    assert client.get("/indications", headers=other_headers).json() == []
    assert client.get(f"/quiz/{other['slug']}/roubo").status_code == 404

    r = client.post("/indications", json={"slug": "meu-quiz", "quizId": quiz_id, "pageId": page_id}, headers=headers)
    assert r.status_code == 201
    assert r.json()["quizId"] == quiz_id
