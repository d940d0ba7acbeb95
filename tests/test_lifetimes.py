from dependency_injector import providers

from di_showcase_api.app.core.wiring import build_container


def test_lifetimes_within_one_request(client):
    report = client.get("/api/v1/lifetimes/").json()

    assert report["transient"]["same_instance"] is False
    assert report["transient"]["first"] != report["transient"]["second"]
    assert report["scoped"]["same_instance"] is True
    assert report["singleton"]["same_instance"] is True
    assert report["scoped"]["lifetime"] == "scoped"


def test_lifetimes_across_requests(client):
    first = client.get("/api/v1/lifetimes/").json()
    second = client.get("/api/v1/lifetimes/").json()

    assert first["request_id"] != second["request_id"]
    assert first["scoped"]["first"] != second["scoped"]["first"]
    assert first["singleton"]["first"] == second["singleton"]["first"]


def test_separate_applications_have_separate_singletons(settings, make_client):
    first = make_client(settings).get("/api/v1/lifetimes/").json()
    second = make_client(settings).get("/api/v1/lifetimes/").json()
    assert first["singleton"]["first"] != second["singleton"]["first"]


def test_service_catalog_lists_providers(client, settings):
    catalog = client.get("/api/v1/services/").json()
    assert catalog["project"] == settings.project_name
    by_service = {entry["service"]: entry for entry in catalog["services"]}

    assert by_service["email_sender"] == {
        "service": "email_sender",
        "implementation": "OutboxEmailSender",
        "lifetime": "scoped",
    }
    assert by_service["settings"]["implementation"] == "Settings"
    assert by_service["database"]["lifetime"] == "singleton"
    assert by_service["registration_service"]["lifetime"] == "scoped"
    assert by_service["email_service"]["lifetime"] == "transient"
    assert by_service["email_channel"]["implementation"] == "EmailNotificationChannel"
    assert "context" not in by_service


def test_service_catalog_reports_overrides(settings, make_client):
    class RecordingSession:
        def close(self) -> None:
            pass

    settings.email_backend = "console"
    container = build_container(settings)
    container.http_session.override(providers.Object(RecordingSession()))
    catalog = make_client(settings, container).get("/api/v1/services/").json()
    by_service = {entry["service"]: entry for entry in catalog["services"]}

    assert by_service["email_sender"]["implementation"] == "ConsoleEmailSender"
    assert by_service["http_session"] == {
        "service": "http_session",
        "implementation": "RecordingSession",
        "lifetime": "singleton",
    }
