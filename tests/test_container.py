import pytest
from dependency_injector import errors, providers

from di_showcase_api.app.core.config import Settings
from di_showcase_api.app.core.context import RequestContext
from di_showcase_api.app.core.db import Database
from di_showcase_api.app.core.wiring import RequestScope, build_container, open_request_scope
from di_showcase_api.app.services.email_service import EmailOutbox, EmailService, OutboxEmailSender
from di_showcase_api.app.services.notification_service import (
    EmailNotificationChannel,
    LogNotificationChannel,
)
from di_showcase_api.app.services.registration_service import RegistrationService


class TaggedOutbox(EmailOutbox):
    """Inherits its constructor from a module using postponed annotations."""


@pytest.fixture
def container(settings):
    container = build_container(settings)
    container.database().init_db()
    yield container
    container.shutdown_resources()


def test_transient_providers_build_a_new_instance_each_time(container):
    scope = open_request_scope(container)
    assert scope.transient_probe() is not scope.transient_probe()
    assert scope.email_service() is not scope.email_service()


def test_scoped_providers_are_shared_within_a_scope_only(container):
    first = open_request_scope(container)
    second = open_request_scope(container)

    assert first.scoped_probe() is first.scoped_probe()
    assert first.log() is first.log()
    assert first.scoped_probe() is not second.scoped_probe()
    assert first.log() is not second.log()


def test_singletons_are_shared_by_every_scope(container):
    first = open_request_scope(container)
    second = open_request_scope(container)

    assert first.singleton_probe() is second.singleton_probe()
    assert first.database() is container.database()
    assert first.settings() is container.settings()


def test_separate_containers_have_separate_singletons(settings):
    assert build_container(settings).singleton_probe() is not build_container(settings).singleton_probe()


def test_registration_graph(container):
    context = RequestContext(method="POST", path="/api/v1/users/")
    scope = open_request_scope(container, context)

    registration = scope.registration_service()
    assert isinstance(registration, RegistrationService)
    assert registration.database is container.database()
    assert registration.log.context is context
    assert isinstance(registration.email, EmailService)
    assert registration.email.log is registration.log
    assert isinstance(registration.email.sender, OutboxEmailSender)
    assert registration.email.sender.outbox is scope.email_outbox()


def test_channels_follow_configuration_order(settings):
    settings.notification_channels = "log,email"
    scope = open_request_scope(build_container(settings))

    channels = scope.notification_service().channels
    assert [type(channel) for channel in channels] == [LogNotificationChannel, EmailNotificationChannel]


def test_scope_without_context_creates_one(container):
    scope = open_request_scope(container)
    assert scope.log().request_id == scope.context().request_id


def test_unbound_context_is_an_error(container):
    scope = RequestScope(core=container)
    with pytest.raises(errors.Error):
        scope.log()


def test_overriding_a_scoped_provider_rewires_its_consumers(container):
    scope = open_request_scope(container)
    scope.email_outbox.override(
        providers.Singleton(TaggedOutbox, database=scope.database, context=scope.context)
    )

    sender = scope.email_sender()
    assert isinstance(sender.outbox, TaggedOutbox)
    assert sender.outbox.add("a@example.com", "b@example.com", "Hi", "")["request_id"] == scope.context().request_id


def test_app_override_reaches_every_scope(container, tmp_path):
    other = Database(Settings(database_url=str(tmp_path / "other.db")))
    with container.database.override(providers.Object(other)):
        assert open_request_scope(container).log().database is other
    assert open_request_scope(container).log().database is not other
