"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from share_viewer.adapters.content_client import HttpxContentClient
from share_viewer.adapters.document_directory import HttpxDocumentDirectory
from share_viewer.config import Settings, normalize_base_url
from share_viewer.services.access_policy import AccessPolicy
from share_viewer.services.content_loader import ContentLoader
from share_viewer.services.expiry_monitor import ExpiryMonitor
from share_viewer.services.share_resolver import ShareResolver
from share_viewer.services.viewer_session import SessionRegistry, ViewerSession


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_registry: SessionRegistry
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    directory_base_url = normalize_base_url(resolved_settings.document_directory_url)
    directory = HttpxDocumentDirectory.create(
        base_url=directory_base_url,
        timeout_seconds=resolved_settings.directory_timeout_seconds,
    )
    content_client = HttpxContentClient.create(
        timeout_seconds=resolved_settings.content_timeout_seconds
    )
    content_loader = ContentLoader(content_client)
    expiry_monitor = ExpiryMonitor(
        interval_seconds=resolved_settings.expiry_poll_seconds
    )

    def session_factory(origin: str) -> ViewerSession:
        bound_directory = (
            directory
            if directory_base_url is not None
            else directory.with_base_url(origin)
        )
        return ViewerSession(
            policy=AccessPolicy(ShareResolver(bound_directory)),
            content_loader=content_loader,
            expiry_monitor=expiry_monitor,
        )

    session_registry = SessionRegistry(
        factory=session_factory,
        max_sessions=resolved_settings.max_sessions,
        idle_seconds=resolved_settings.session_idle_seconds,
    )

    async def close_resources() -> None:
        session_registry.close_all()
        await directory.close()
        await content_client.close()

    return AppContainer(
        settings=resolved_settings,
        session_registry=session_registry,
        close_resources=close_resources,
    )
