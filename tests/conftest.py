"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from share_viewer.adapters.content_client import ContentClient
from share_viewer.adapters.document_directory import DocumentDirectory
from share_viewer.config import Settings
from share_viewer.containers import AppContainer
from share_viewer.domain.content import FetchedContent
from share_viewer.domain.records import DocumentRecord
from share_viewer.errors import AccessDeniedError
from share_viewer.services.access_policy import AccessPolicy
from share_viewer.services.content_loader import ContentLoader
from share_viewer.services.expiry_monitor import ExpiryMonitor
from share_viewer.services.share_resolver import ShareResolver
from share_viewer.services.viewer_session import SessionRegistry, ViewerSession

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


def record_payload(share_id: str = "share-1", **overrides: object) -> dict[str, object]:
    """Build a directory payload the way the document service returns it."""
    payload: dict[str, object] = {
        "share_id": share_id,
        "document_id": "doc-42",
        "s3_url": "https://files.example.com/docs/report.pdf",
        "shared_by": "alice@example.com",
        "expiry_date": None,
        "view_once": False,
        "no_download": False,
        "no_screenshots": False,
        "watermark_enabled": False,
    }
    payload.update(overrides)
    return payload


def make_record(**overrides: object) -> DocumentRecord:
    values: dict[str, object] = {
        "share_id": "share-1",
        "document_id": "doc-42",
        "content_url": "https://files.example.com/docs/report.pdf",
        "shared_by": "alice@example.com",
        "expiry_instant": None,
    }
    values.update(overrides)
    return DocumentRecord(**values)  # type: ignore[arg-type]


@dataclass
class FixedClock:
    """Controllable clock for expiry checks."""

    now: datetime = NOW

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@dataclass
class FakeDocumentDirectory(DocumentDirectory):
    """In-memory directory that records lookups."""

    payloads: dict[str, dict[str, object]] = field(default_factory=dict)
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    async def fetch_shared(self, share_id: str) -> dict[str, object]:
        self.calls.append(share_id)
        if self.error is not None:
            raise self.error
        if share_id not in self.payloads:
            raise AccessDeniedError()
        return self.payloads[share_id]


@dataclass
class FakeContentClient(ContentClient):
    """Content client returning static bytes."""

    content: FetchedContent = field(
        default_factory=lambda: FetchedContent(
            data=b"%PDF-1.7 fake", media_type="application/pdf"
        )
    )
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    async def fetch(self, url: str) -> FetchedContent:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.content


def make_session(
    directory: FakeDocumentDirectory,
    content_client: FakeContentClient,
    clock: FixedClock | None = None,
    poll_seconds: float = 60,
) -> ViewerSession:
    resolved_clock = clock or FixedClock()
    return ViewerSession(
        policy=AccessPolicy(ShareResolver(directory)),
        content_loader=ContentLoader(content_client),
        expiry_monitor=ExpiryMonitor(
            interval_seconds=poll_seconds, clock=resolved_clock
        ),
        clock=resolved_clock,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        document_directory_url="https://directory.example.com",
        environment="test",
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def directory() -> FakeDocumentDirectory:
    return FakeDocumentDirectory(payloads={"share-1": record_payload()})


@pytest.fixture
def content_client() -> FakeContentClient:
    return FakeContentClient()


@pytest.fixture
def container(
    settings: Settings,
    directory: FakeDocumentDirectory,
    content_client: FakeContentClient,
    clock: FixedClock,
) -> AppContainer:
    origins: list[str] = []

    def session_factory(origin: str) -> ViewerSession:
        origins.append(origin)
        return make_session(directory, content_client, clock)

    registry = SessionRegistry(factory=session_factory)

    async def close_resources() -> None:
        registry.close_all()

    return AppContainer(
        settings=settings,
        session_registry=registry,
        close_resources=close_resources,
    )
