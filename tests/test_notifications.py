import pytest
from dependency_injector import providers

from di_showcase_api.app.core.wiring import RequestScope, build_container
from di_showcase_api.app.services.logging_service import LoggingService
from di_showcase_api.app.services.notification_service import NotificationChannel


class PagerChannel(NotificationChannel):
    """A channel added without touching the service or the API."""

    name = "pager"
    pages = []

    def __init__(self, log: LoggingService) -> None:
        self.log = log

    def notify(self, recipient: str, message: str) -> str:
        PagerChannel.pages.append((recipient, message, self.log.request_id))
        return "paged"


class PagerScope(RequestScope):
    pager_channel = providers.Factory(PagerChannel, log=RequestScope.log)


def test_default_channels(client):
    assert client.get("/api/v1/notifications/channels").json() == ["email", "log"]


def test_notify_uses_every_channel(client):
    response = client.post(
        "/api/v1/notifications/",
        json={"recipient": "ada@example.com", "message": "Build finished"},
    )
    assert response.status_code == 200
    report = response.json()
    assert [(r["channel"], r["status"]) for r in report["results"]] == [
        ("email", "delivered"),
        ("log", "delivered"),
    ]
    assert report["results"][0]["detail"] == "outbox: queued"

    outbox = client.get("/api/v1/emails/outbox").json()
    assert outbox[0]["subject"] == "Notification"
    assert outbox[0]["request_id"] == report["request_id"]


def test_failing_channel_does_not_stop_others(client):
    report = client.post(
        "/api/v1/notifications/",
        json={"recipient": "ada", "message": "Hello"},
    ).json()
    results = {r["channel"]: r for r in report["results"]}
    assert results["email"]["status"] == "failed"
    assert "Invalid email address" in results["email"]["detail"]
    assert results["log"]["status"] == "delivered"

    history = client.get("/api/v1/notifications/", params={"recipient": "ada"}).json()
    assert sorted((h["channel"], h["status"]) for h in history) == [
        ("email", "failed"),
        ("log", "delivered"),
    ]


def test_notify_selected_channels_only(client):
    report = client.post(
        "/api/v1/notifications/",
        json={"recipient": "ada@example.com", "message": "Hi", "channels": ["log"]},
    ).json()
    assert [r["channel"] for r in report["results"]] == ["log"]
    assert client.get("/api/v1/emails/outbox").json() == []


def test_unknown_channel_is_rejected(client):
    response = client.post(
        "/api/v1/notifications/",
        json={"recipient": "ada@example.com", "message": "Hi", "channels": ["sms"]},
    )
    assert response.status_code == 422
    assert "sms" in response.json()["detail"]


def test_channels_follow_configuration(settings, make_client):
    settings.notification_channels = "log"
    client = make_client(settings)
    assert client.get("/api/v1/notifications/channels").json() == ["log"]


def test_new_channel_is_plugged_in_by_one_provider(settings, make_client):
    PagerChannel.pages = []
    settings.notification_channels = "email,log,pager"
    client = make_client(settings, build_container(settings, scope_class=PagerScope))

    assert client.get("/api/v1/notifications/channels").json() == ["email", "log", "pager"]
    report = client.post(
        "/api/v1/notifications/",
        json={"recipient": "ada@example.com", "message": "Disk full", "channels": ["pager"]},
    ).json()
    assert report["results"] == [{"channel": "pager", "status": "delivered", "detail": "paged"}]
    assert PagerChannel.pages == [("ada@example.com", "Disk full", report["request_id"])]


def test_channel_needs_a_provider(settings):
    settings.notification_channels = "pager"
    with pytest.raises(ValueError, match="pager"):
        build_container(settings)
