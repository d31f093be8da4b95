"""
Shared fixtures: GitHub API payloads shaped like the Actions REST responses
and a runner environment with every action input set.
"""

import copy
from datetime import datetime, timedelta, timezone

import pytest

REPO_API_URL = "https://api.github.com/repos/acme/deploy"
REPO_HTML_URL = "https://github.com/acme/deploy"
JOB_STARTED_AT = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)

RUN_PAYLOAD = {
    "id": 9001,
    "html_url": f"{REPO_HTML_URL}/actions/runs/9001",
    "run_number": 14,
    "head_branch": "main",
    "event": "push",
    "actor": {"login": "octocat"},
    "created_at": "2024-05-01T10:00:00Z",
    "updated_at": "2024-05-01T10:01:30Z",
    "repository": {
        "full_name": "acme/deploy",
        "html_url": REPO_HTML_URL,
        "url": REPO_API_URL,
    },
    "pull_requests": [],
    "head_commit": {
        "message": "Bump terraform modules",
        "author": {"email": "dev@example.com"},
    },
}


def _iso(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def job_payload(name, conclusion="success", status="completed", seconds=90):
    return {
        "name": name,
        "status": status,
        "conclusion": conclusion if status == "completed" else None,
        "html_url": f"{REPO_HTML_URL}/actions/runs/9001/job/{sum(map(ord, name))}",
        "started_at": _iso(JOB_STARTED_AT),
        "completed_at": _iso(JOB_STARTED_AT + timedelta(seconds=seconds)),
    }


@pytest.fixture
def run_payload():
    return copy.deepcopy(RUN_PAYLOAD)


@pytest.fixture
def make_job():
    """Factory for JobSummary objects built from API-shaped payloads."""
    from workflow_status.github.models import JobSummary

    def _make(name, conclusion="success", status="completed", seconds=90):
        return JobSummary.from_api(job_payload(name, conclusion, status, seconds))

    return _make


@pytest.fixture
def action_env(monkeypatch, tmp_path):
    """Runner environment with all required inputs present."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)

    values = {
        "INPUT_SLACK_WEBHOOK_URL": "https://open.larksuite.com/hook/s3cr3t-hook",
        "INPUT_REPO_TOKEN": "ghs_s3cr3tt0ken",
        "INPUT_JOBS_TO_FETCH": "30",
        "INPUT_INCLUDE_JOBS": "true",
        "INPUT_INCLUDE_COMMIT_MESSAGE": "true",
        "INPUT_NAME": "Terraform Prod",
        "GITHUB_REPOSITORY": "acme/deploy",
        "GITHUB_RUN_ID": "9001",
        "GITHUB_ACTOR": "octocat",
        "GITHUB_EVENT_NAME": "push",
        "GITHUB_WORKFLOW": "Deploy",
    }
    for key, value in values.items():
        monkeypatch.setenv(key, value)
    for key in ("INPUT_CHANNEL", "INPUT_ICON_URL", "INPUT_ICON_EMOJI", "INPUT_MENTION_EMAIL_DOMAIN", "GITHUB_API_URL"):
        monkeypatch.delenv(key, raising=False)
    return values
