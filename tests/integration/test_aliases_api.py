def _create(client, **payload):
    return client.post("/api/v1/aliases", json=payload)


def test_create_and_list_aliases(client):
    response = _create(client, alias_term="키트루다", language="ko", english_brand="keytruda")

    assert response.status_code == 201
    assert response.json()["english_brand"] == "KEYTRUDA"

    _create(client, alias_term="キイトルーダ", language="ja", english_brand="KEYTRUDA")
    assert len(client.get("/api/v1/aliases").json()) == 2
    assert [a["alias_term"] for a in client.get("/api/v1/aliases", params={"language": "ja"}).json()] == ["キイトルーダ"]


def test_create_rejects_unknown_language(client):
    response = _create(client, alias_term="Keytruda", language="en", english_brand="KEYTRUDA")

    assert response.status_code == 422


def test_list_with_invalid_language_filter(client):
    response = client.get("/api/v1/aliases", params={"language": "fr"})

    assert response.status_code == 400
    assert response.json()["detail"]["error"]["code"] == "INVALID_INPUT"


def test_update_alias(client):
    alias_id = _create(client, alias_term="옵디보", language="ko", english_brand="OPDIVO").json()["id"]

    response = client.put(f"/api/v1/aliases/{alias_id}", json={"generic_name": "nivolumab"})

    assert response.status_code == 200
    assert response.json()["generic_name"] == "nivolumab"
    assert response.json()["english_brand"] == "OPDIVO"


def test_update_and_delete_missing_alias(client):
    assert client.put("/api/v1/aliases/42", json={"notes": "x"}).status_code == 404
    response = client.delete("/api/v1/aliases/42")

    assert response.status_code == 404
    assert response.json()["detail"]["error"]["code"] == "ALIAS_NOT_FOUND"


def test_delete_alias(client):
    alias_id = _create(client, alias_term="티쎈트릭", language="ko", english_brand="TECENTRIQ").json()["id"]

    assert client.delete(f"/api/v1/aliases/{alias_id}").status_code == 204
    assert client.get("/api/v1/aliases").json() == []


def test_spreadsheet_import(client):
    client.post("/api/v1/dictionary", json={"brand": "KEYTRUDA", "generic": "Pembrolizumab"})
    content = (
        "alias_term,language,english_brand,generic_name,notes\n"
        "키트루다,ko,Keytruda,,\n"
        "임핀지,ko,Imfinzi,durvalumab,\n"
        "Opdivo,en,OPDIVO,,\n"
    ).encode("utf-8")

    response = client.post(
        "/api/v1/aliases/import/spreadsheet",
        files={"file": ("aliases.csv", content, "text/csv")},
    )

    body = response.json()
    assert body["imported"] == 2
    assert body["errors"] == [{"row": 4, "message": 'Invalid language "en". Allowed: ko, ja, zh-cn, zh-tw.'}]
    assert body["warnings"] == [{"row": 3, "message": 'Linked brand "IMFINZI" not found in dictionary.'}]

    formatted = client.post("/api/v1/format", json={"text": "키트루다, 임핀지"}).json()
    assert formatted["plain_text"] == "KEYTRUDA (Pembrolizumab), IMFINZI (Durvalumab)"


def test_list_languages(client):
    response = client.get("/api/v1/aliases/languages")

    assert response.status_code == 200
    assert [item["code"] for item in response.json()] == ["ko", "ja", "zh-cn", "zh-tw"]


def test_download_template(client):
    response = client.get("/api/v1/aliases/import/template")

    assert response.status_code == 200
    assert "drug_language_aliases.xlsx" in response.headers["content-disposition"]


def test_update_alias_onto_existing_pair_returns_400(client):
    _create(client, alias_term="옵디보", language="ko", english_brand="OPDIVO")
    other_id = _create(client, alias_term="키트루다", language="ko", english_brand="KEYTRUDA").json()["id"]

    response = client.put(f"/api/v1/aliases/{other_id}", json={"alias_term": "옵디보"})

    assert response.status_code == 400
    assert response.json()["detail"]["error"]["code"] == "INVALID_INPUT"
