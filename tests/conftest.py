from typing import Callable, Iterator

import pytest
import requests
from dependency_injector import providers
from fastapi import FastAPI
from fastapi.testclient import TestClient

from di_showcase_api.app.core.config import Settings
from di_showcase_api.app.core.wiring import build_container
from di_showcase_api.app.main import create_app


class FailingSession:
    """Stands in for ``requests.Session`` when the email relay is down."""

    def __init__(self) -> None:
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append((url, json, timeout))
        raise requests.ConnectionError("relay unreachable")

    def close(self) -> None:
        pass


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=str(tmp_path / "showcase.db"),
        log_level="DEBUG",
        log_file="",
        email_backend="outbox",
        email_default_sender="no-reply@example.com",
        email_webhook_url="",
        notification_channels="email,log",
        welcome_subject="Welcome aboard",
    )


@pytest.fixture
def make_client() -> Iterator[Callable[..., TestClient]]:
    """Build a started ``TestClient`` for ``create_app(*args, **kwargs)``."""
    clients = []

    def _make(*args, **kwargs) -> TestClient:
        app: FastAPI = create_app(*args, **kwargs)
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in reversed(clients):
        client.__exit__(None, None, None)


@pytest.fixture
def client(settings, make_client) -> TestClient:
    return make_client(settings)


@pytest.fixture
def make_webhook_client(settings, make_client) -> Callable[..., TestClient]:
    """Build a client whose webhook email backend posts through ``session``."""

    def _make(session) -> TestClient:
        settings.email_backend = "webhook"
        settings.email_webhook_url = "http://relay.test/send"
        container = build_container(settings)
        container.http_session.override(providers.Object(session))
        return make_client(settings, container)

    return _make


@pytest.fixture
def failing_session() -> FailingSession:
    return FailingSession()
