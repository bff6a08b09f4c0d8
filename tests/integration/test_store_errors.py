import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pymongo.errors import ServerSelectionTimeoutError

from moviehub.dependencies import get_db
from moviehub.limiter import limiter
from moviehub.main import app


class FailingCollection:
    def __init__(self, error):
        self.error = error

    def find(self, *args, **kwargs):
        raise self.error

    async def find_one(self, *args, **kwargs):
        raise self.error


class FailingDatabase:
    def __init__(self, error):
        self.error = error

    def __getitem__(self, name):
        return FailingCollection(self.error)


@pytest_asyncio.fixture
async def failing_client():
    """Client whose store raises the given error on every read."""
    clients = []

    async def make(error):
        app.dependency_overrides[get_db] = lambda: FailingDatabase(error)
        # 500s are re-raised by Starlette after the response is sent
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        ac = AsyncClient(transport=transport, base_url="http://test")
        clients.append(ac)
        return ac

    limiter.enabled = False
    yield make
    limiter.enabled = True
    for ac in clients:
        await ac.aclose()
    app.dependency_overrides = {}


@pytest.mark.asyncio
async def test_unreachable_store_is_a_503(failing_client):
    client = await failing_client(ServerSelectionTimeoutError("No servers available"))

    response = await client.get("/api/recommendations/trending", headers={"X-Request-ID": "req-503"})

    assert response.status_code == 503
    assert response.json() == {
        "error": "Service Unavailable",
        "message": "The data store is temporarily unavailable.",
        "request_id": "req-503",
    }
    assert response.headers["X-Request-ID"] == "req-503"


@pytest.mark.asyncio
async def test_store_failure_on_lookup_by_id_is_a_503(failing_client):
    client = await failing_client(ServerSelectionTimeoutError("No servers available"))

    response = await client.get("/api/recommendations/similar/5f1d7c2e9b1e8a3d4c5b6a79")

    assert response.status_code == 503
    assert response.json()["error"] == "Service Unavailable"
    assert response.json()["request_id"] == response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_unexpected_error_is_an_opaque_500(failing_client):
    client = await failing_client(RuntimeError("boom"))

    response = await client.get("/api/recommendations/trending", headers={"X-Request-ID": "req-500"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Internal Server Error"
    assert body["request_id"] == "req-500"
    assert "boom" not in response.text
