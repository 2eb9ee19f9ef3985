import json
import os
import tempfile
from pathlib import Path
from typing import Optional

import pytest

TEST_PROVIDERS_JSON = json.dumps(
    [
        {
            "host": "gemini",
            "base_url": "https://generativelanguage.googleapis.com/v1beta/openai/",
            "api_key_env": "GEMINI_API_KEY",
            "models": [
                {"id": "gemini-2.5-pro", "name": "Gemini 2.5 Pro"},
                {"id": "gemini-2.5-flash", "name": "Gemini 2.5 Flash"},
            ],
        }
    ]
)

_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="urbix-test-"))
TEST_DB_URL = f"sqlite:///{_TEST_DB_DIR / 'urbix.db'}"
os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ["PROVIDERS"] = TEST_PROVIDERS_JSON
os.environ.setdefault("SECRET_KEY", "test-secret")

from fastapi.testclient import TestClient  # noqa: E402

from urbix.api.deps import (  # noqa: E402
    get_analyzer,
    get_pulse_tracker,
    get_report_store,
    get_user_directory,
    reset_dependencies,
)
from urbix.core.providers import reset_provider_registry  # noqa: E402
from urbix.db.repository import MemoryCollectionRepository  # noqa: E402
from urbix.main import app  # noqa: E402
from urbix.models.analysis import FALLBACK_ANALYSIS, ReportAnalysis  # noqa: E402
from urbix.models.enums import Category, Priority, Sentiment, UserRole  # noqa: E402
from urbix.services.auth_service import register_user  # noqa: E402
from urbix.services.pulse_service import PulseTracker  # noqa: E402
from urbix.services.report_store import ReportStore  # noqa: E402
from urbix.services.user_directory import UserDirectory  # noqa: E402


def make_analysis(**overrides) -> ReportAnalysis:
    values = {
        'title': 'Broken Streetlight',
        'description': 'A streetlight on the corner is out.',
        'category': Category.ELECTRICITY,
        'department': 'Electrical Works',
        'sentiment': Sentiment.NEGATIVE,
        'summary': 'Dark corner creates a safety risk at night.',
        'priority': Priority.HIGH,
    }
    values.update(overrides)
    return ReportAnalysis(**values)


class StubAnalyzer:
    """Stands in for ReportAnalyzer; records calls and never touches the network."""

    def __init__(
        self,
        analysis: Optional[ReportAnalysis] = None,
        *,
        fail: bool = False,
        pulse: Optional[str] = None,
    ) -> None:
        self.analysis = analysis or make_analysis()
        self.fail = fail
        self.pulse = pulse
        self.calls: list[tuple[str, Optional[str]]] = []
        self.pulse_calls = 0

    async def try_analyze(self, description, image=None):
        self.calls.append((description, image))
        if self.fail:
            return None
        return self.analysis

    async def analyze(self, description, image=None):
        result = await self.try_analyze(description, image)
        return result if result is not None else FALLBACK_ANALYSIS.model_copy()

    async def summarize_pulse(self, reports):
        self.pulse_calls += 1
        return self.pulse


@pytest.fixture(autouse=True, scope="session")
def _configure_providers():
    reset_provider_registry()
    yield
    reset_provider_registry()


@pytest.fixture
def repository() -> MemoryCollectionRepository:
    return MemoryCollectionRepository()


@pytest.fixture
def store(repository) -> ReportStore:
    return ReportStore(repository)


@pytest.fixture
def directory(repository) -> UserDirectory:
    return UserDirectory(repository)


@pytest.fixture
def analyzer() -> StubAnalyzer:
    return StubAnalyzer()


@pytest.fixture
def client(store, directory, analyzer):
    tracker = PulseTracker(analyzer)
    app.dependency_overrides[get_report_store] = lambda: store
    app.dependency_overrides[get_user_directory] = lambda: directory
    app.dependency_overrides[get_analyzer] = lambda: analyzer
    app.dependency_overrides[get_pulse_tracker] = lambda: tracker
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
        reset_dependencies()


def login_headers(client: TestClient, username: str, password: str) -> dict:
    response = client.post('/api/v1/auth/login', json={'username': username, 'password': password})
    assert response.status_code == 200, response.text
    return {'Authorization': f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def citizen_headers(client) -> dict:
    client.post(
        '/api/v1/auth/register',
        json={'username': 'citizen_jo', 'password': 'secret123', 'email': 'jo@example.com'},
    )
    return login_headers(client, 'citizen_jo', 'secret123')


@pytest.fixture
def admin_headers(client, directory) -> dict:
    register_user(directory, 'city_admin', 'admin-pass', role=UserRole.ADMIN)
    return login_headers(client, 'city_admin', 'admin-pass')
