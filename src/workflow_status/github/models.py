from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import pendulum

logger = logging.getLogger(__name__)


def parse_timestamp(value: str | None) -> pendulum.DateTime | None:
    if not value:
        return None
    try:
        return pendulum.parse(value)
    except (pendulum.parsing.exceptions.ParserError, TypeError, ValueError) as exc:
        logger.warning("Could not parse timestamp %r: %s", value, exc)
        return None


@dataclass(slots=True)
class RepositoryRef:
    full_name: str
    html_url: str
    url: str

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "RepositoryRef":
        return cls(
            full_name=payload.get("full_name") or "",
            html_url=payload.get("html_url") or "",
            url=payload.get("url") or "",
        )


@dataclass(slots=True)
class PullRequestRef:
    number: int
    head_ref: str
    base_ref: str
    base_repo_url: str

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "PullRequestRef":
        head = payload.get("head") or {}
        base = payload.get("base") or {}
        return cls(
            number=int(payload.get("number") or 0),
            head_ref=head.get("ref") or "",
            base_ref=base.get("ref") or "",
            base_repo_url=(base.get("repo") or {}).get("url") or "",
        )


@dataclass(slots=True)
class HeadCommit:
    message: str
    author_email: str

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "HeadCommit":
        author = payload.get("author") or {}
        return cls(
            message=payload.get("message") or "",
            author_email=author.get("email") or "",
        )


@dataclass(slots=True)
class RunInfo:
    id: int
    html_url: str
    run_number: int
    head_branch: str
    repository: RepositoryRef
    actor: str = ""
    event: str = ""
    created_at: pendulum.DateTime | None = None
    updated_at: pendulum.DateTime | None = None
    pull_requests: list[PullRequestRef] = field(default_factory=list)
    head_commit: HeadCommit | None = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "RunInfo":
        head_commit = payload.get("head_commit")
        return cls(
            id=int(payload.get("id") or 0),
            html_url=payload.get("html_url") or "",
            run_number=int(payload.get("run_number") or 0),
            head_branch=payload.get("head_branch") or "",
            repository=RepositoryRef.from_api(payload.get("repository") or {}),
            actor=(payload.get("actor") or {}).get("login") or "",
            event=payload.get("event") or "",
            created_at=parse_timestamp(payload.get("created_at")),
            updated_at=parse_timestamp(payload.get("updated_at")),
            pull_requests=[
                PullRequestRef.from_api(pr) for pr in payload.get("pull_requests") or []
            ],
            head_commit=HeadCommit.from_api(head_commit) if head_commit else None,
        )


@dataclass(slots=True)
class JobSummary:
    name: str
    status: str
    conclusion: str
    html_url: str
    started_at: pendulum.DateTime | None = None
    completed_at: pendulum.DateTime | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "JobSummary":
        return cls(
            name=payload.get("name") or "",
            status=payload.get("status") or "",
            conclusion=payload.get("conclusion") or "",
            html_url=payload.get("html_url") or "",
            started_at=parse_timestamp(payload.get("started_at")),
            completed_at=parse_timestamp(payload.get("completed_at")),
        )
