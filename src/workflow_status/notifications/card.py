from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable

from ..github.models import PullRequestRef, RunInfo
from ..pipeline.durations import compute_duration
from ..pipeline.jobs import JobRow

FOOTER_IMAGE_KEY = "img_v3_02j1_2053c27a-0a23-4cbf-830b-c62d7c2962hu"
HEADER_TEMPLATES = {
    "good": "green",
    "warning": "orange",
    "danger": "red",
}
# A blank line precedes the first row carrying each tag.
STAGE_TAGS = ("[STG]", "[PROD]")


@dataclass(slots=True)
class NotificationCard:
    title: str
    color: str
    status_line: str
    details_line: str
    footer: str
    commit_line: str | None = None
    job_rows: list[JobRow] = field(default_factory=list)

    @property
    def text(self) -> str:
        lines = [self.status_line, self.details_line]
        if self.commit_line:
            lines.append(self.commit_line)
        return "\n".join(lines)

    def job_column(self) -> str:
        content = ""
        seen: set[str] = set()
        for row in self.job_rows:
            for tag in STAGE_TAGS:
                if tag in row.text and tag not in seen:
                    content += "\n"
                    seen.add(tag)
            content += row.text + "\n"
        return content

    def to_payload(self) -> dict[str, Any]:
        card = {
            "config": {"wide_screen_mode": True},
            "header": {
                "template": HEADER_TEMPLATES.get(self.color, "green"),
                "title": {"content": self.title, "tag": "plain_text"},
            },
            "elements": [
                {"tag": "markdown", "content": self.text},
                {
                    "tag": "column_set",
                    "flex_mode": "none",
                    "background_style": "grey",
                    "columns": [
                        {
                            "tag": "column",
                            "width": "weighted",
                            "weight": 1,
                            "vertical_align": "top",
                            "elements": [
                                {"tag": "markdown", "content": self.job_column()}
                            ],
                        }
                    ],
                },
                {
                    "tag": "note",
                    "elements": [
                        {
                            "tag": "img",
                            "img_key": FOOTER_IMAGE_KEY,
                            "alt": {"tag": "plain_text", "content": ""},
                        },
                        {"tag": "lark_md", "content": self.footer},
                    ],
                },
            ],
        }
        return {"msg_type": "interactive", "card": card}

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), ensure_ascii=False)


def same_repository_pull_requests(run: RunInfo) -> list[PullRequestRef]:
    """Drop pull requests opened from forks or other repositories."""
    return [pr for pr in run.pull_requests if pr.base_repo_url == run.repository.url]


def pull_request_summary(run: RunInfo) -> str:
    html_url = run.repository.html_url
    return ", ".join(
        f"<{html_url}/pull/{pr.number}|#{pr.number}> from `{pr.head_ref}` to `{pr.base_ref}`"
        for pr in same_repository_pull_requests(run)
    )


def status_line(run: RunInfo, message: str, actor: str, event_name: str) -> str:
    pull_requests = pull_request_summary(run)
    if pull_requests:
        return (
            f"{message} <text_tag color='blue'>{actor}'s</text_tag> "
            f"`pull_request` {pull_requests}"
        )
    branch = run.head_branch
    branch_url = f"[**{branch}**]({run.repository.html_url}/tree/{branch})"
    return f"{message} {actor}'s **{event_name}** on **{branch_url}**"


def details_line(run: RunInfo, workflow: str) -> str:
    duration = compute_duration(run.created_at, run.updated_at)
    run_url = f"[#{run.run_number}]({run.html_url})"
    return f"Workflow: {workflow} {run_url} completed in **{duration}**"


def commit_line(run: RunInfo, mention_domain: str) -> str | None:
    commit = run.head_commit
    if commit is None:
        return None
    line = f"Commit: {commit.message}"
    if mention_domain and mention_domain in commit.author_email:
        line += (
            f" <text_tag color='neutral'>by</text_tag> "
            f"<at email={commit.author_email}></at>"
        )
    return line


def repository_link(run: RunInfo) -> str:
    return f"**[{run.repository.full_name}]({run.repository.html_url})**"


def build_card(
    run: RunInfo,
    rows: Iterable[JobRow],
    color: str,
    message: str,
    *,
    actor: str = "",
    event_name: str = "",
    workflow: str = "",
    title: str = "",
    include_commit_message: bool = True,
    mention_domain: str = "",
) -> NotificationCard:
    return NotificationCard(
        title=title,
        color=color,
        status_line=status_line(run, message, actor or run.actor, event_name or run.event),
        details_line=details_line(run, workflow),
        commit_line=commit_line(run, mention_domain) if include_commit_message else None,
        job_rows=list(rows),
        footer=repository_link(run),
    )
