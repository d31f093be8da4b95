from __future__ import annotations

import logging
from typing import Any, Iterable

import requests

from ..config import DEFAULT_API_URL, Secret
from ..errors import GitHubAPIError
from .models import JobSummary, RunInfo

logger = logging.getLogger(__name__)

API_VERSION = "2022-11-28"


def completed_jobs(jobs: Iterable[JobSummary]) -> list[JobSummary]:
    """Jobs still queued or in progress have no conclusion yet and are left out."""
    return [job for job in jobs if job.is_completed]


class GitHubClient:
    def __init__(
        self,
        token: Secret,
        api_url: str = DEFAULT_API_URL,
        timeout: int = 20,
        session: requests.Session | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {token.reveal()}",
                "X-GitHub-Api-Version": API_VERSION,
            }
        )

    def close(self) -> None:
        self._session.close()

    def get_workflow_run(self, owner: str, repo: str, run_id: int) -> RunInfo:
        data = self._get(f"/repos/{owner}/{repo}/actions/runs/{run_id}")
        run = RunInfo.from_api(data)
        logger.info("Fetched workflow run #%s (%s)", run.run_number, run.html_url)
        return run

    def list_jobs_for_workflow_run(
        self, owner: str, repo: str, run_id: int, per_page: int = 30
    ) -> list[JobSummary]:
        data = self._get(
            f"/repos/{owner}/{repo}/actions/runs/{run_id}/jobs",
            params={"per_page": per_page},
        )
        jobs = [JobSummary.from_api(job) for job in data.get("jobs") or []]
        logger.info("Fetched %d job(s) for workflow run %s", len(jobs), run_id)
        return jobs

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self.api_url}{path}"
        logger.debug("GET %s params=%s", url, params)
        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise GitHubAPIError(message=str(exc), path=path) from exc

        if not response.ok:
            raise GitHubAPIError(
                message=_error_message(response),
                status_code=response.status_code,
                path=path,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise GitHubAPIError(
                message=f"Invalid JSON in response: {exc}",
                status_code=response.status_code,
                path=path,
            ) from exc
        if not isinstance(body, dict):
            raise GitHubAPIError(
                message=f"Unexpected response type {type(body).__name__}",
                status_code=response.status_code,
                path=path,
            )
        return body


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text.strip()
