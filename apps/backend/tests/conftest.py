import pytest
from fastapi.testclient import TestClient

from app.rate_limit import limiter

SEED_COUNT = 40


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv("JOBS_DB_FILE", str(tmp_path / "jobs-db.json"))
    monkeypatch.setenv("SEED_COUNT", str(SEED_COUNT))
    monkeypatch.setenv("SEED_VALUE", "250")
    monkeypatch.setenv("TOKEN_SECRET", "test-secret")
    monkeypatch.delenv("CERTJOBS_ENV", raising=False)
    for name in ("RATE_LIMIT_SEARCH", "RATE_LIMIT_SUBMIT", "RATE_LIMIT_LOGIN"):
        monkeypatch.delenv(name, raising=False)
    limiter.reset()
    yield


@pytest.fixture
def client():
    from main import app
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register(client):
    def _register(email, role="seeker", password="correct-horse"):
        response = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "role": role},
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _register


@pytest.fixture
def auth_header():
    return lambda token: {"Authorization": f"Bearer {token}"}


@pytest.fixture
def company(register):
    return register("hiring@orbit.example", role="company")


@pytest.fixture
def seeker(register):
    return register("dana@example.com")
