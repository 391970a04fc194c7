"""Domain models for shared document records."""

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from share_viewer.domain.expiry import parse_expiry


@dataclass(frozen=True)
class DocumentRecord:
    """A shared document as described by the directory."""

    share_id: str
    document_id: str | None
    content_url: str
    shared_by: str | None
    expiry_instant: datetime | None
    view_once: bool = False
    no_download: bool = False
    no_screenshots: bool = False
    watermark_enabled: bool = False
    document_name: str | None = None


class DirectoryRecordPayload(BaseModel):
    """Raw directory response for a share lookup."""

    model_config = ConfigDict(extra="ignore")

    share_id: str | None = None
    document_id: str | None = None
    s3_url: str
    shared_by: str | None = None
    owner: str | None = None
    expiry_date: datetime | None = None
    view_once: bool = False
    no_download: bool = False
    no_screenshots: bool = False
    watermark_enabled: bool = False
    document_name: str | None = Field(default=None)

    @field_validator("expiry_date", mode="before")
    @classmethod
    def _normalize_expiry(cls, value: object) -> datetime | None:
        if value is None or isinstance(value, str | datetime):
            return parse_expiry(value)
        raise ValueError("expiry_date must be an ISO-8601 string")

    @field_validator("document_id", mode="before")
    @classmethod
    def _stringify_document_id(cls, value: object) -> str | None:
        if value is None or value == "":
            return None
        return str(value)

    def to_record(self, requested_share_id: str) -> DocumentRecord:
        """Convert the payload into an immutable record.

        Directories may omit ``share_id``; the token used for the lookup is
        used instead.
        """
        return DocumentRecord(
            share_id=self.share_id or requested_share_id,
            document_id=self.document_id,
            content_url=self.s3_url,
            shared_by=self.shared_by or self.owner,
            expiry_instant=self.expiry_date,
            view_once=self.view_once,
            no_download=self.no_download,
            no_screenshots=self.no_screenshots,
            watermark_enabled=self.watermark_enabled,
            document_name=self.document_name,
        )
