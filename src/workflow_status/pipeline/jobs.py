from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..github.models import JobSummary
from .durations import compute_duration

MAX_NAME_LENGTH = 63

# Checked in order; first match wins.
PRIORITY_TAGS = (
    ("Build Init", 1),
    ("[STG]", 2),
    ("[PROD]", 3),
)
DEFAULT_PRIORITY = 4

ICON_SUCCESS = "✓"
ICON_CANCELLED = "⃠"
ICON_FAILED = "✗"


@dataclass(slots=True)
class JobRow:
    name: str
    text: str


def job_priority(name: str) -> int:
    for tag, priority in PRIORITY_TAGS:
        if tag in name:
            return priority
    return DEFAULT_PRIORITY


def sort_jobs(jobs: Iterable[JobSummary]) -> list[JobSummary]:
    # sorted() is stable, so jobs sharing a priority keep their API order.
    return sorted(
        (job for job in jobs if job.conclusion != "skipped"),
        key=lambda job: job_priority(job.name),
    )


def status_icon(conclusion: str) -> str:
    if conclusion == "success":
        return ICON_SUCCESS
    if conclusion in {"cancelled", "skipped"}:
        return ICON_CANCELLED
    return ICON_FAILED


def truncate(text: str, max_length: int = MAX_NAME_LENGTH) -> str:
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


def format_job_row(job: JobSummary) -> JobRow:
    duration = compute_duration(job.started_at, job.completed_at)
    text = (
        f"{status_icon(job.conclusion)} [{truncate(job.name)}]({job.html_url}) "
        f"({duration})"
    )
    return JobRow(name=job.name, text=text)


def build_job_rows(jobs: Iterable[JobSummary]) -> list[JobRow]:
    return [format_job_row(job) for job in sort_jobs(jobs)]
