def test_upload_ok(client, auth, settings):
    resp = client.post("/upload/notes_1", content=b"# Title\nhello", headers=auth)
    assert resp.status_code == 200
    assert resp.json() == {"name": "notes_1", "status": "published"}
    assert (settings.source_dir / "notes_1.md").read_bytes() == b"# Title\nhello"
    html = (settings.rendered_dir / "notes_1.html").read_text(encoding="utf-8")
    assert "<h1>Title</h1>" in html
    assert "<p>hello</p>" in html


def test_upload_name_with_space(client, auth, settings):
    resp = client.post("/upload/my notes", content=b"text", headers=auth)
    assert resp.status_code == 200
    assert (settings.source_dir / "my notes.md").exists()


def test_upload_overwrites_existing(client, auth, settings):
    client.post("/upload/doc", content=b"# One", headers=auth)
    resp = client.post("/upload/doc", content=b"# Two", headers=auth)
    assert resp.status_code == 200
    html = (settings.rendered_dir / "doc.html").read_text(encoding="utf-8")
    assert "Two" in html and "One" not in html


def test_upload_rejects_invalid_name(client, auth, settings):
    resp = client.post("/upload/bad.name", content=b"x", headers=auth)
    assert resp.status_code == 422
    assert list(settings.source_dir.iterdir()) == []


def test_upload_rejects_oversized_body(client, auth, settings):
    resp = client.post("/upload/big", content=b"a" * (settings.max_upload_bytes + 1), headers=auth)
    assert resp.status_code == 422
    assert not (settings.source_dir / "big.md").exists()
    assert not (settings.rendered_dir / "big.html").exists()
    assert client.get("/publish/big").text == "error"


def test_upload_at_cap_is_accepted(client, auth, settings):
    resp = client.post("/upload/full", content=b"a" * settings.max_upload_bytes, headers=auth)
    assert resp.status_code == 200


def test_upload_render_failure_rolls_back(monkeypatch, client, auth, app, settings):
    def broken(_text):
        raise RuntimeError("renderer exploded")

    monkeypatch.setattr(app.state.publisher, "render", broken)
    resp = client.post("/upload/doc", content=b"# Title", headers=auth)
    assert resp.status_code == 422
    assert not (settings.source_dir / "doc.md").exists()
    assert not (settings.rendered_dir / "doc.html").exists()


def test_failed_reupload_leaves_no_orphaned_html(monkeypatch, client, auth, app, settings):
    assert client.post("/upload/doc", content=b"# One", headers=auth).status_code == 200

    def broken(_text):
        raise RuntimeError("renderer exploded")

    monkeypatch.setattr(app.state.publisher, "render", broken)
    resp = client.post("/upload/doc", content=b"# Two", headers=auth)
    assert resp.status_code == 422

    assert not (settings.source_dir / "doc.md").exists()
    assert not (settings.rendered_dir / "doc.html").exists()
    listed = client.get("/upload_list", headers={**auth, "Accept": "application/json"}).json()
    assert listed["documents"] == []
    assert client.get("/publish/doc").text == "error"


def test_upload_rejects_encoded_slash(client, auth, settings):
    resp = client.post("/upload/a%2Fb", content=b"x", headers=auth)
    assert resp.status_code == 422
    assert list(settings.source_dir.iterdir()) == []
