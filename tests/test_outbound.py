def test_outbound_crud_with_clinics(client, doctor, other_doctor):
    _, headers = doctor
    _, other_headers = other_doctor

    r = client.post(
        "/outbound",
        json={"nome": "Dr. Pedro", "email": "pedro@clinica.com.br", "clinics": [{"nome": "Clínica Vida"}]},
        headers=headers,
    )
    assert r.status_code == 201
    outbound = r.json()
    assert outbound["status"] == "prospectado"
    assert outbound["clinics"][0]["nome"] == "Clínica Vida"

    r = client.put(f"/outbound/{outbound['id']}", json={"especialidade": "Ortopedia"}, headers=headers)
    assert r.json()["clinics"][0]["nome"] == "Clínica Vida"

    r = client.put(f"/outbound/{outbound['id']}", json={"clinics": []}, headers=headers)
    assert r.json()["clinics"] == []
    assert client.get(f"/outbound/{outbound['id']}/clinics", headers=headers).json() == []

    assert client.get(f"/outbound/{outbound['id']}", headers=other_headers).status_code == 404
    assert client.delete(f"/outbound/{outbound['id']}", headers=headers).status_code == 204
    assert client.get("/outbound", headers=headers).json() == []


def test_outbound_validation(client, doctor):
    _, headers = doctor
    assert client.post("/outbound", json={"nome": "X", "status": "perdido"}, headers=headers).status_code == 400
    assert client.post("/outbound", json={"nome": "X", "email": "nao-e-email"}, headers=headers).status_code == 400
    assert client.post("/outbound", json={}, headers=headers).status_code == 400


def test_interactions(client, doctor):
    _, headers = doctor
    outbound_id = client.post("/outbound", json={"nome": "Dr. Pedro"}, headers=headers).json()["id"]
    url = f"/outbound/{outbound_id}/interactions"

    first = client.post(url, json={"type": "whatsapp", "content": "Primeiro contato"}, headers=headers).json()
    second = client.post(url, json={"type": "call", "content": "Ligação"}, headers=headers).json()

    assert [i["id"] for i in client.get(url, headers=headers).json()] == [second["id"], first["id"]]

    assert client.post(url, json={"type": "fax", "content": "x"}, headers=headers).status_code == 400
    assert client.post(url, json={"type": "email"}, headers=headers).status_code == 400

    assert client.delete(url, headers=headers).status_code == 400
    assert client.delete(f"{url}?interactionId=999", headers=headers).status_code == 404
    assert client.delete(f"{url}?interactionId={first['id']}", headers=headers).status_code == 204
    assert [i["id"] for i in client.get(url, headers=headers).json()] == [second["id"]]


def test_clinic_update_by_id_is_restricted_to_owner(client, doctor, other_doctor):
    _, headers = doctor
    _, other_headers = other_doctor

    outbound = client.post(
        "/outbound", json={"nome": "Dr. Pedro", "clinics": [{"nome": "Clínica A"}]}, headers=headers
    ).json()
    clinic_id = outbound["clinics"][0]["id"]

    r = client.put(
        f"/outbound/{outbound['id']}",
        json={"clinics": [{"id": clinic_id, "nome": "Clínica A Centro"}]},
        headers=headers,
    )
    assert r.status_code == 200
    assert [(c["id"], c["nome"]) for c in r.json()["clinics"]] == [(clinic_id, "Clínica A Centro")]

    own_id = client.post("/outbound", json={"nome": "Dra. Carla"}, headers=other_headers).json()["id"]
    r = client.put(
        f"/outbound/{own_id}",
        json={"clinics": [{"id": clinic_id, "nome": "Alterada"}]},
        headers=other_headers,
    )
    assert r.status_code == 404
    assert r.json() == {"error": "Clínica não encontrada"}

    r = client.post("/outbound", json={"nome": "Dr. X", "clinics": [{"id": clinic_id, "nome": "Y"}]}, headers=other_headers)
    assert r.status_code == 404

    clinics = client.get(f"/outbound/{outbound['id']}/clinics", headers=headers).json()
    assert [c["nome"] for c in clinics] == ["Clínica A Centro"]
