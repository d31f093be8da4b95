from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .errors import ConfigurationError
from .pipeline.classify import IncludeJobs

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_MENTION_DOMAIN = "traveloka.com"
TRUTHY = {"1", "true", "yes"}

REQUIRED_INPUTS = (
    "slack_webhook_url",
    "repo_token",
    "jobs_to_fetch",
    "include_jobs",
    "include_commit_message",
)


def load_environment() -> None:
    """Load environment variables from a .env file if present."""
    env_file = os.getenv("ENV_FILE", ".env")
    env_path = Path(env_file)
    if env_path.is_file():
        load_dotenv(env_path)
    else:
        # Fallback: load .env in current working directory if ENV_FILE is missing
        default_path = Path(".env")
        if default_path.is_file():
            load_dotenv(default_path)


def get_input(name: str) -> str:
    """Read an action input from its ``INPUT_<NAME>`` environment variable."""
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return os.getenv(key, "").strip()


class Secret:
    """String wrapper that never renders its value."""

    __slots__ = ("_value",)

    def __init__(self, value: str) -> None:
        self._value = value

    def reveal(self) -> str:
        return self._value

    def __bool__(self) -> bool:
        return bool(self._value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Secret) and other._value == self._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return "Secret('***')"

    def __str__(self) -> str:
        return "***"


def _parse_jobs_to_fetch(raw: str) -> int:
    try:
        value = int(raw, 10)
    except ValueError as exc:
        raise ConfigurationError(
            f"Input 'jobs_to_fetch' must be an integer, got {raw!r}"
        ) from exc
    if value <= 0:
        raise ConfigurationError(
            f"Input 'jobs_to_fetch' must be a positive integer, got {value}"
        )
    return value


@dataclass(frozen=True)
class RunContext:
    owner: str
    repo: str
    run_id: int
    actor: str = ""
    event_name: str = ""
    workflow: str = ""
    api_url: str = DEFAULT_API_URL

    @classmethod
    def from_env(cls) -> "RunContext":
        repository = os.getenv("GITHUB_REPOSITORY", "").strip()
        run_id = os.getenv("GITHUB_RUN_ID", "").strip()

        missing = [
            name
            for name, value in {
                "GITHUB_REPOSITORY": repository,
                "GITHUB_RUN_ID": run_id,
            }.items()
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variable(s): {', '.join(missing)}"
            )

        owner, _, repo = repository.partition("/")
        if not owner or not repo:
            raise ConfigurationError(
                f"GITHUB_REPOSITORY must look like 'owner/repo', got {repository!r}"
            )
        if not run_id.isdigit():
            raise ConfigurationError(f"GITHUB_RUN_ID must be numeric, got {run_id!r}")

        return cls(
            owner=owner,
            repo=repo,
            run_id=int(run_id),
            actor=os.getenv("GITHUB_ACTOR", ""),
            event_name=os.getenv("GITHUB_EVENT_NAME", ""),
            workflow=os.getenv("GITHUB_WORKFLOW", ""),
            api_url=os.getenv("GITHUB_API_URL") or DEFAULT_API_URL,
        )


@dataclass(frozen=True)
class Settings:
    webhook_url: Secret
    repo_token: Secret
    jobs_to_fetch: int
    include_jobs: IncludeJobs
    include_commit_message: bool
    context: RunContext
    channel: str = ""
    name: str = ""
    icon_url: str = ""
    icon_emoji: str = ""
    mention_domain: str = DEFAULT_MENTION_DOMAIN
    timeout: int = 20

    @classmethod
    def from_env(cls) -> "Settings":
        load_environment()

        values = {name: get_input(name) for name in REQUIRED_INPUTS}
        missing = [name for name, value in values.items() if not value]
        if missing:
            raise ConfigurationError(
                f"Missing required input(s): {', '.join(missing)}"
            )

        try:
            include_jobs = IncludeJobs.parse(values["include_jobs"])
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc

        return cls(
            webhook_url=Secret(values["slack_webhook_url"]),
            repo_token=Secret(values["repo_token"]),
            jobs_to_fetch=_parse_jobs_to_fetch(values["jobs_to_fetch"]),
            include_jobs=include_jobs,
            include_commit_message=values["include_commit_message"].lower() in TRUTHY,
            context=RunContext.from_env(),
            channel=get_input("channel"),
            name=get_input("name"),
            icon_url=get_input("icon_url"),
            icon_emoji=get_input("icon_emoji"),
            mention_domain=get_input("mention_email_domain") or DEFAULT_MENTION_DOMAIN,
        )
