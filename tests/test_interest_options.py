def test_default_is_exclusive(client, doctor):
    _, headers = doctor
    first = client.post("/interest-options", json={"label": "Botox", "isDefault": True}, headers=headers).json()
    second = client.post(
        "/interest-options", json={"label": "Preenchimento", "isDefault": True}, headers=headers
    ).json()
    assert first["value"] == "botox"

    options = {o["id"]: o["isDefault"] for o in client.get("/interest-options", headers=headers).json()}
    assert options == {first["id"]: False, second["id"]: True}

    client.put("/interest-options", json={"id": first["id"], "isDefault": True}, headers=headers)
    options = {o["id"]: o["isDefault"] for o in client.get("/interest-options", headers=headers).json()}
    assert options == {first["id"]: True, second["id"]: False}


def test_duplicate_value(client, doctor, other_doctor):
    _, headers = doctor
    _, other_headers = other_doctor
    client.post("/interest-options", json={"label": "Botox"}, headers=headers)

    r = client.post("/interest-options", json={"label": "Botox de novo", "value": "botox"}, headers=headers)
    assert r.status_code == 400
    r = client.post("/interest-options", json={"label": "Botox"}, headers=other_headers)
    assert r.status_code == 201


def test_public_list_and_delete(client, doctor):
    user, headers = doctor
    option = client.post(
        "/interest-options",
        json={"label": "Consulta", "redirectUrl": "https://wa.me/5534"},
        headers=headers,
    ).json()

    public = client.get(f"/interest-options/{user['slug']}").json()
    assert public == [{
        "id": option["id"],
        "label": "Consulta",
        "value": "consulta",
        "redirectUrl": "https://wa.me/5534",
        "isDefault": False,
    }]

    assert client.delete("/interest-options", headers=headers).status_code == 400
    assert client.delete(f"/interest-options?id={option['id']}", headers=headers).status_code == 204
    assert client.get(f"/interest-options/{user['slug']}").json() == []
    assert client.get("/interest-options/ninguem").status_code == 404
