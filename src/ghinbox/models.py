"""Notification records as returned by the GitHub notifications API."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any


class SubjectType(StrEnum):
    PULL_REQUEST = "PullRequest"
    ISSUE = "Issue"
    RELEASE = "Release"
    DISCUSSION = "Discussion"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: str | None) -> SubjectType:
        """Map an API subject type to a SubjectType, defaulting to OTHER."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


_TYPE_LABELS = {
    SubjectType.PULL_REQUEST: "pr",
    SubjectType.ISSUE: "issue",
    SubjectType.RELEASE: "release",
    SubjectType.DISCUSSION: "discuss",
    SubjectType.OTHER: "other",
}


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 API timestamp (e.g. 2026-01-24T12:34:56Z)."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass(frozen=True)
class NotificationRecord:
    """A single notification thread."""

    id: str
    unread: bool
    reason: str
    repository: str
    subject_type: SubjectType
    title: str
    url: str
    updated_at: datetime | None = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> NotificationRecord:
        """Create a record from one notification thread object."""
        repository = payload.get("repository") or {}
        subject = payload.get("subject") or {}
        return cls(
            id=str(payload.get("id", "")),
            unread=bool(payload.get("unread", False)),
            reason=payload.get("reason") or "",
            repository=repository.get("full_name") or "",
            subject_type=SubjectType.parse(subject.get("type")),
            title=subject.get("title") or "",
            url=subject.get("url") or "",
            updated_at=parse_timestamp(payload.get("updated_at")),
        )

    @property
    def status_icon(self) -> str:
        return "●" if self.unread else "○"

    @property
    def type_label(self) -> str:
        return _TYPE_LABELS[self.subject_type]

    @property
    def formatted_date(self) -> str:
        if self.updated_at is None:
            return ""
        return self.updated_at.strftime("%m-%d %H:%M")
