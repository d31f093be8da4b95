from __future__ import annotations

import logging
from dataclasses import dataclass

from ..actions.host import ActionsHost
from ..config import Settings
from ..github.client import GitHubClient, completed_jobs
from ..notifications.card import build_card
from ..notifications.webhook import WebhookClient
from .classify import classify, select_jobs
from .jobs import build_job_rows

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class NotificationResult:
    color: str
    message: str
    completed: int
    rows: int
    data: str
    response: str | None


def run_notification(
    settings: Settings,
    host: ActionsHost,
    github: GitHubClient | None = None,
    webhook: WebhookClient | None = None,
    dry_run: bool = False,
) -> NotificationResult:
    context = settings.context
    if settings.channel or settings.icon_url or settings.icon_emoji:
        logger.debug(
            "Ignoring Slack-only inputs for the card: channel=%r icon_url=%r icon_emoji=%r",
            settings.channel,
            settings.icon_url,
            settings.icon_emoji,
        )

    client = github or GitHubClient(
        token=settings.repo_token,
        api_url=context.api_url,
        timeout=settings.timeout,
    )
    try:
        run = client.get_workflow_run(context.owner, context.repo, context.run_id)
        jobs = client.list_jobs_for_workflow_run(
            context.owner, context.repo, context.run_id, per_page=settings.jobs_to_fetch
        )
    finally:
        client.close()

    completed = completed_jobs(jobs)
    color, message = classify(completed)
    logger.info(
        "Classified %d completed job(s) of %d as %s", len(completed), len(jobs), color
    )

    rows = build_job_rows(select_jobs(completed, color, settings.include_jobs))
    card = build_card(
        run,
        rows,
        color,
        message,
        actor=context.actor,
        event_name=context.event_name,
        workflow=context.workflow,
        title=settings.name,
        include_commit_message=settings.include_commit_message,
        mention_domain=settings.mention_domain,
    )

    data = card.to_json()
    host.set_output("data", data)

    response = None
    if dry_run:
        logger.info("Dry run; skipping webhook delivery.")
    else:
        sender = webhook or WebhookClient(settings.webhook_url, timeout=settings.timeout)
        try:
            response = sender.send(data)
        finally:
            sender.close()
        logger.info("Webhook response: %s", response)
        host.set_output("response", response)

    return NotificationResult(
        color=color,
        message=message,
        completed=len(completed),
        rows=len(rows),
        data=data,
        response=response,
    )
