import pytest
from fastapi.testclient import TestClient

API_KEY = "test-secret"


@pytest.fixture()
def settings(tmp_path):
    from markdown_publish.config import Settings

    # Use a temp data dir so every test starts from empty storage
    return Settings(api_key=API_KEY, data_dir=tmp_path / "data", max_upload_bytes=1024)


@pytest.fixture()
def app(settings):
    from markdown_publish.main import create_app

    return create_app(settings)


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def auth() -> dict[str, str]:
    return {"x-api-key": API_KEY}


@pytest.fixture()
def snapshot():
    """Relative paths and contents of every file under a directory."""

    def _snapshot(data_dir):
        return {
            str(p.relative_to(data_dir)): p.read_bytes()
            for p in sorted(data_dir.rglob("*"))
            if p.is_file()
        }

    return _snapshot
