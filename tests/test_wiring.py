import pytest

from di_showcase_api.app.core.config import Settings
from di_showcase_api.app.core.db import Database, resolve_database_path
from di_showcase_api.app.core.wiring import build_container, describe_services, open_request_scope
from di_showcase_api.app.services.email_service import ConsoleEmailSender


def test_unknown_email_backend_fails_at_startup(settings):
    settings.email_backend = "pigeon"
    with pytest.raises(ValueError, match="pigeon"):
        build_container(settings)


def test_webhook_backend_requires_url(settings):
    settings.email_backend = "webhook"
    with pytest.raises(ValueError, match="EMAIL_WEBHOOK_URL"):
        build_container(settings)


def test_unknown_channel_fails_at_startup(settings):
    settings.notification_channels = "email,carrier"
    with pytest.raises(ValueError, match="carrier"):
        build_container(settings)


def test_empty_welcome_subject_fails_at_startup(settings):
    settings.welcome_subject = "  "
    with pytest.raises(ValueError, match="WELCOME_SUBJECT"):
        build_container(settings)


def test_channel_names_are_normalised():
    settings = Settings(notification_channels=" Log, email,log ,")
    assert settings.enabled_channels() == ["log", "email"]


def test_backend_selection(settings):
    settings.email_backend = " Console"
    container = build_container(settings)

    scope = open_request_scope(container)
    assert isinstance(scope.email_sender(), ConsoleEmailSender)
    entries = {entry["service"]: entry for entry in describe_services(container)}
    assert entries["email_sender"]["implementation"] == "ConsoleEmailSender"


def test_database_is_migrated_once(settings):
    database = Database(settings)
    assert database.init_db() == 2
    assert database.init_db() == 2
    with database.cursor() as cursor:
        versions = [row["version"] for row in cursor.execute("SELECT version FROM migrations ORDER BY version")]
    assert versions == [1, 2]


def test_relative_database_path_is_resolved_against_project_root(tmp_path):
    assert resolve_database_path(str(tmp_path / "x.db")) == str(tmp_path / "x.db")
    resolved = resolve_database_path("data/app.db")
    assert resolved.endswith("data/app.db") or resolved.endswith("data\\app.db")
