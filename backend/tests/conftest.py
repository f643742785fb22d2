import pytest
from fastapi.testclient import TestClient

from contact_relay.core.settings import Settings
from contact_relay.main import create_app

ENV_VARS = [
    "PORT", "HOST", "API_TITLE", "CORS_ORIGINS", "LOG_LEVEL",
    "EMAIL_HOST", "EMAIL_PORT", "EMAIL_SECURE", "EMAIL_USER", "EMAIL_PASS",
    "RECEIVER_EMAIL", "SENDER_NAME", "EMAIL_SUBJECT",
]


class RecordingTransport:
    def __init__(self):
        self.sent = []

    async def send(self, message):
        self.sent.append(message)


class FailingTransport:
    def __init__(self, exc):
        self.exc = exc
        self.attempts = []

    async def send(self, message):
        self.attempts.append(message)
        raise self.exc


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def make_settings(clean_env):
    def _make(**env) -> Settings:
        values = {
            "EMAIL_HOST": "smtp.example.com",
            "EMAIL_USER": "contato@example.com",
            "EMAIL_PASS": "secret",
            "RECEIVER_EMAIL": "inbox@example.com",
        }
        values.update(env)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def settings(make_settings):
    return make_settings()


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def failing_transport():
    return FailingTransport


@pytest.fixture
def make_client(make_settings):
    def _make(transport, **env) -> TestClient:
        return TestClient(create_app(make_settings(**env), transport))

    return _make
