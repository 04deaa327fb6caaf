def test_scenario_upload_fetch_list_delete(client, auth):
    json_headers = {**auth, "Accept": "application/json"}

    resp = client.post("/upload/notes_1", content=b"# Title\nhello", headers=auth)
    assert resp.status_code == 200

    page = client.get("/publish/notes_1")
    assert page.status_code == 200
    assert page.text.startswith("<!DOCTYPE html><html><body>")
    assert "<h1>Title</h1>" in page.text
    assert "<p>hello</p>" in page.text

    assert "notes_1" in client.get("/upload_list", headers=json_headers).json()["documents"]

    assert client.get("/delete/notes_1", headers=auth).status_code == 200

    gone = client.get("/publish/notes_1")
    assert gone.status_code == 200
    assert gone.text == "error"
    assert "notes_1" not in client.get("/upload_list", headers=json_headers).json()["documents"]


def test_fetch_unknown_returns_placeholder(client):
    resp = client.get("/publish/nothing")
    assert resp.status_code == 200
    assert resp.text == "error"


def test_fetch_invalid_name_returns_placeholder(client):
    resp = client.get("/publish/bad.name")
    assert resp.status_code == 200
    assert resp.text == "error"


def test_fetch_is_deterministic(client, auth):
    client.post("/upload/doc", content=b"# Same\n\n- a\n- b", headers=auth)
    first = client.get("/publish/doc").text
    client.post("/upload/doc", content=b"# Same\n\n- a\n- b", headers=auth)
    second = client.get("/publish/doc").text
    assert first == second


def test_fetch_source_without_rendered(client, auth, settings):
    client.post("/upload/doc", content=b"# Title", headers=auth)
    (settings.rendered_dir / "doc.html").unlink()
    assert client.get("/publish/doc").text == "error"
    assert (settings.source_dir / "doc.md").exists()


def test_root_and_health(client):
    assert client.get("/").json()["service"] == "markdown-publish"
    assert client.get("/health").json() == {"status": "ok"}


def test_fetch_encoded_slash_returns_placeholder(client):
    resp = client.get("/publish/a%2Fb")
    assert resp.status_code == 200
    assert resp.text == "error"
