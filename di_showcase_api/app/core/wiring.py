"""
Composition root.

This is the only module that knows which concrete class implements
which capability and how long each instance lives.  The wiring is
declared with ``dependency_injector`` containers:

* ``AppContainer`` holds everything that lives as long as the
  application: settings, the database, the HTTP session and the
  singleton probe.
* ``RequestScope`` is instantiated once per request.  Its
  ``Singleton`` providers are therefore scoped to that request and its
  ``Factory`` providers are transient.

Tests replace collaborators with ``provider.override(...)`` or extend
``RequestScope`` by subclassing it.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Type

import requests
from dependency_injector import containers, providers

from .config import Settings
from .context import RequestContext
from .db import Database
from ..services.email_service import (
    ConsoleEmailSender,
    EmailOutbox,
    EmailService,
    OutboxEmailSender,
    WebhookEmailSender,
)
from ..services.lifetime_service import ScopedProbe, SingletonProbe, TransientProbe
from ..services.logging_service import LoggingService
from ..services.notification_service import (
    EmailNotificationChannel,
    LogNotificationChannel,
    NotificationService,
)
from ..services.registration_service import RegistrationService


logger = logging.getLogger(__name__)


EMAIL_BACKENDS = ("outbox", "console", "webhook")


def open_http_session() -> Iterator[requests.Session]:
    """Resource initializer for the shared outbound HTTP session."""
    session = requests.Session()
    try:
        yield session
    finally:
        session.close()


class RequestScope(containers.DeclarativeContainer):
    """Services of one request.

    A notification channel named ``x`` is the provider ``x_channel``;
    ``open_request_scope`` collects the enabled ones into
    ``notification_channels``.
    """

    core = providers.DependenciesContainer()
    context = providers.Dependency(instance_of=RequestContext)

    # Application lifetime, shared with every scope.
    settings = core.settings
    database = core.database
    singleton_probe = core.singleton_probe

    # One per request.
    log = providers.Singleton(LoggingService, database=database, context=context)
    email_outbox = providers.Singleton(EmailOutbox, database=database, context=context)
    email_sender = providers.Selector(
        core.email_backend,
        outbox=providers.Singleton(OutboxEmailSender, outbox=email_outbox, log=log),
        console=providers.Singleton(ConsoleEmailSender, log=log),
        webhook=providers.Singleton(
            WebhookEmailSender,
            settings=settings,
            session=core.http_session,
            log=log,
        ),
    )
    scoped_probe = providers.Singleton(ScopedProbe)

    # New instance per resolution.
    email_service = providers.Factory(EmailService, sender=email_sender, settings=settings, log=log)
    transient_probe = providers.Factory(TransientProbe)

    # One per request, like the services it coordinates.
    registration_service = providers.Singleton(
        RegistrationService,
        database=database,
        email=email_service,
        log=log,
        settings=settings,
    )

    email_channel = providers.Factory(EmailNotificationChannel, email=email_service)
    log_channel = providers.Factory(LogNotificationChannel, log=log)
    notification_channels = providers.List()
    notification_service = providers.Factory(
        NotificationService,
        channels=notification_channels,
        database=database,
        log=log,
    )


class AppContainer(containers.DeclarativeContainer):
    """Services living as long as the application."""

    settings = providers.Dependency(instance_of=Settings)
    email_backend = providers.Callable(Settings.email_backend_name, settings)
    scope_class = providers.Object(RequestScope)

    database = providers.ThreadSafeSingleton(Database, settings=settings)
    http_session = providers.Resource(open_http_session)
    singleton_probe = providers.ThreadSafeSingleton(SingletonProbe)


def channel_provider_name(channel: str) -> str:
    return f"{channel}_channel"


def build_container(settings: Settings, scope_class: Type[RequestScope] = RequestScope) -> AppContainer:
    """Create the application container for ``settings``.

    Raises ``ValueError`` for an unknown ``EMAIL_BACKEND``, a webhook
    backend without URL, an empty welcome subject or an unknown
    notification channel, so misconfiguration fails at startup rather
    than on the first request.
    """
    backend = settings.email_backend_name()
    if backend not in EMAIL_BACKENDS:
        raise ValueError(
            f"Unknown email backend {settings.email_backend!r}; "
            f"expected one of {', '.join(sorted(EMAIL_BACKENDS))}"
        )
    if backend == "webhook" and not settings.email_webhook_url:
        raise ValueError("EMAIL_WEBHOOK_URL must be set for the webhook email backend")
    if not settings.welcome_subject.strip():
        raise ValueError("WELCOME_SUBJECT must not be empty")
    channel_names = settings.enabled_channels()
    unknown = [name for name in channel_names if channel_provider_name(name) not in scope_class.providers]
    if unknown:
        raise ValueError(f"Unknown notification channel(s): {', '.join(unknown)}")

    container = AppContainer(
        settings=providers.Object(settings),
        scope_class=providers.Object(scope_class),
    )
    logger.info(
        "Configured container (email backend: %s, channels: %s)",
        backend,
        ", ".join(channel_names) or "none",
    )
    return container


def open_request_scope(container: AppContainer, context: Optional[RequestContext] = None) -> RequestScope:
    """Create the services container of one unit of work.

    Outside of HTTP handling a fresh ``RequestContext`` is created.
    """
    scope_class = container.scope_class()
    scope = scope_class(
        core=container,
        context=providers.Object(context or RequestContext()),
    )
    for name in container.settings().enabled_channels():
        scope.notification_channels.add_args(getattr(scope, channel_provider_name(name)))
    return scope


def _lifetime(provider: providers.Provider, scoped: bool) -> Optional[str]:
    if isinstance(provider, providers.DependenciesContainer):
        return None
    if isinstance(provider, providers.Factory):
        return "transient"
    if isinstance(provider, (providers.BaseSingleton, providers.Selector)):
        return "scoped" if scoped else "singleton"
    if isinstance(provider, (providers.Resource, providers.Object)):
        return "singleton"
    return None


def _implementation(provider: providers.Provider, container: AppContainer) -> str:
    if isinstance(provider, providers.Selector):
        provider = provider.providers[container.email_backend()]
    if isinstance(provider, providers.Object):
        return type(provider()).__name__
    provides = getattr(provider, "provides", None)
    return getattr(provides, "__name__", type(provider).__name__)


def describe_services(container: AppContainer) -> List[Dict[str, Any]]:
    """List what requests resolve from ``container``: name, implementation, lifetime.

    Overridden providers are reported with their replacement.
    """
    entries = []
    sections = (
        (container.providers, False),
        (container.scope_class().providers, True),
    )
    for provider_map, scoped in sections:
        for name, provider in provider_map.items():
            provider = provider.last_overriding or provider
            lifetime = _lifetime(provider, scoped)
            if lifetime is None or name == "scope_class":
                continue
            entries.append(
                {
                    "service": name,
                    "implementation": _implementation(provider, container),
                    "lifetime": lifetime,
                }
            )
    return entries
