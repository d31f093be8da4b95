from __future__ import annotations

from enum import Enum
from typing import Iterable

from ..github.models import JobSummary

COLOR_GOOD = "good"
COLOR_WARNING = "warning"
COLOR_DANGER = "danger"

SUCCESS_CONCLUSIONS = frozenset({"success", "skipped"})


class IncludeJobs(str, Enum):
    ALWAYS = "true"
    NEVER = "false"
    ON_FAILURE = "on-failure"

    @classmethod
    def parse(cls, raw: str) -> "IncludeJobs":
        try:
            return cls(raw.strip().lower())
        except ValueError:
            allowed = ", ".join(mode.value for mode in cls)
            raise ValueError(
                f"Input 'include_jobs' must be one of {allowed}, got {raw!r}"
            ) from None


def classify(jobs: Iterable[JobSummary]) -> tuple[str, str]:
    """Return the (color, message) pair describing the run outcome.

    A cancelled job wins over a failed one: the cancellation check runs
    before falling back to failure.
    """
    jobs = list(jobs)
    if all(job.conclusion in SUCCESS_CONCLUSIONS for job in jobs):
        return COLOR_GOOD, "Success:"
    if any(job.conclusion == "cancelled" for job in jobs):
        return COLOR_WARNING, "Cancelled:"
    return COLOR_DANGER, "Failed:"


def select_jobs(
    jobs: Iterable[JobSummary], color: str, mode: IncludeJobs
) -> list[JobSummary]:
    if mode is IncludeJobs.NEVER:
        return []
    if mode is IncludeJobs.ON_FAILURE and color != COLOR_DANGER:
        return []
    return list(jobs)
