from __future__ import annotations

import logging
import os
import sys
import uuid
from typing import TextIO

logger = logging.getLogger(__name__)

MASK = "***"


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


class ActionsHost:
    """Workflow-command surface of the GitHub Actions runner.

    Secrets registered through :meth:`set_secret` are masked by the runner
    and redacted from every message emitted here.
    """

    def __init__(self, stream: TextIO | None = None, output_path: str | None = None) -> None:
        self.stream = stream or sys.stdout
        self.output_path = output_path or os.getenv("GITHUB_OUTPUT") or None
        self.failure_message: str | None = None
        self._secrets: list[str] = []

    @property
    def failed(self) -> bool:
        return self.failure_message is not None

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def mask(self, text: str) -> str:
        # Longest first so a secret containing another is fully hidden.
        for secret in sorted(self._secrets, key=len, reverse=True):
            text = text.replace(secret, MASK)
        return text

    def set_secret(self, value: str) -> None:
        if not value or value in self._secrets:
            return
        self._secrets.append(value)
        self._issue("add-mask", value)

    def set_output(self, name: str, value: str) -> None:
        if self.output_path:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            if delimiter in name or delimiter in value:
                raise ValueError("Output delimiter collided with output content")
            with open(self.output_path, "a", encoding="utf-8") as handle:
                handle.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            self._issue("set-output", value, name=name)
        logger.debug("Recorded output %r (%d chars)", name, len(value))

    def error(self, message: str) -> None:
        self._issue("error", self.mask(message))

    def set_failed(self, message: str) -> None:
        """Report a terminal failure; only the first report is kept."""
        if self.failed:
            logger.debug("Ignoring additional failure report")
            return
        self.failure_message = self.mask(message)
        self.error(message)

    def _issue(self, command: str, message: str, **properties: str) -> None:
        line = f"::{command}"
        if properties:
            line += " " + ",".join(
                f"{key}={escape_property(value)}" for key, value in properties.items()
            )
        line += f"::{escape_data(message)}"
        print(line, file=self.stream, flush=True)
