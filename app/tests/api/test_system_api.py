import pytest
from fastapi.testclient import TestClient

from api.routes.system import router as system_router
from infrastructure.configuration import Settings
from infrastructure.services.providers import get_settings
from utils.tests import create_test_app, rate_limiting_helper


@pytest.fixture
def client():
    app = create_test_app(
        system_router,
        dependency_overrides={get_settings: lambda: Settings(GIT_SHA="Unknown")},
    )
    return TestClient(app)


def test_get_version_unknown(client):
    response = client.get("/version")
    assert response.status_code == 200
    assert response.json() == {"version": "Unknown"}


def test_get_version_known():
    app = create_test_app(
        system_router,
        dependency_overrides={get_settings: lambda: Settings(GIT_SHA="foo")},
    )
    response = TestClient(app).get("/version")
    assert response.status_code == 200
    assert response.json() == {"version": "foo"}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_health_rate_limited():
    app = create_test_app(system_router)
    await rate_limiting_helper(app, "/health", request_limit=50)
