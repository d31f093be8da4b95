from __future__ import annotations

import argparse
import logging
import sys

from .actions.host import ActionsHost
from .config import Settings
from .errors import NotifierError
from .pipeline.notify import NotificationResult, run_notification

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Post a workflow run status card to a Lark webhook."
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Build the card and record the 'data' output without posting it.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args(argv)


def log_result(result: NotificationResult) -> None:
    logging.info(
        "%s (%s) %d completed job(s); %d row(s) in the card; %s.",
        result.message,
        result.color,
        result.completed,
        result.rows,
        "not delivered (dry run)" if result.response is None else "delivered",
    )


def main(argv: list[str] | None = None, host: ActionsHost | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    host = host or ActionsHost()
    try:
        settings = Settings.from_env()
        host.set_secret(settings.repo_token.reveal())
        host.set_secret(settings.webhook_url.reveal())
        result = run_notification(settings, host, dry_run=args.dry_run)
    except NotifierError as exc:
        logging.error("%s", host.mask(str(exc)))
        host.set_failed(str(exc))
        return host.exit_code
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unhandled error")
        host.set_failed(str(exc) or f"Unhandled Error: {exc!r}")
        return host.exit_code

    log_result(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
