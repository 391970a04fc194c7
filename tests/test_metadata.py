"""Tests for display metadata and the expiry countdown."""

from datetime import UTC, datetime, timedelta

from share_viewer.services.countdown import format_time_left, time_left
from share_viewer.services.metadata import (
    clean_document_title,
    display_document_id,
    document_metadata,
    document_title,
)
from tests.conftest import NOW, make_record


def test_clean_title_strips_extension_and_uuid() -> None:
    raw = "Quarterly%20Report_3f2b8c1e-1a2b-4c3d-9e8f-0123456789ab.pdf"

    assert clean_document_title(raw) == "Quarterly Report"


def test_clean_title_strips_hex_suffix() -> None:
    assert (
        clean_document_title("invoice-0123456789abcdef0123456789abcdef.png")
        == "invoice"
    )


def test_clean_title_keeps_name_when_only_uuid() -> None:
    raw = "3f2b8c1e-1a2b-4c3d-9e8f-0123456789ab.pdf"

    assert clean_document_title(raw) == "3f2b8c1e-1a2b-4c3d-9e8f-0123456789ab"


def test_clean_title_defaults() -> None:
    assert clean_document_title(None) == "Shared Document"


def test_document_title_uses_content_url_without_query() -> None:
    record = make_record(content_url="https://cdn.example.com/a/Lease.pdf?sig=xyz")

    assert document_title(record) == "Lease"


def test_display_document_id_falls_back_to_share() -> None:
    record = make_record(document_id=None, share_id="abcdef123456")

    assert display_document_id(record) == "DOC-ABCDEF12"


def test_document_metadata_fields() -> None:
    record = make_record(
        shared_by=None,
        view_once=True,
        expiry_instant=datetime(2025, 3, 1, 15, 30, tzinfo=UTC),
    )

    metadata = document_metadata(record)

    assert metadata["shared_by"] == "Anonymous"
    assert metadata["access_type"] == "View Once"
    assert metadata["expires"] == "Mar 01, 2025, 03:30 PM"


def test_document_metadata_never_expires() -> None:
    assert document_metadata(make_record())["expires"] == "Never"


def test_countdown_under_a_day() -> None:
    expiry = NOW + timedelta(hours=2, minutes=3, seconds=4)

    assert format_time_left(expiry, NOW) == "02:03:04"


def test_countdown_with_days() -> None:
    expiry = NOW + timedelta(days=3, hours=1, seconds=9)

    assert format_time_left(expiry, NOW) == "3d 01:00:09"


def test_countdown_expired() -> None:
    remaining = time_left(NOW, NOW)

    assert remaining.expired
    assert format_time_left(NOW - timedelta(seconds=1), NOW) == "EXPIRED"
