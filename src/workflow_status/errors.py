from __future__ import annotations

from dataclasses import dataclass


class NotifierError(RuntimeError):
    """Base class for failures that end a notification run."""


class ConfigurationError(NotifierError):
    pass


@dataclass(eq=False)
class GitHubAPIError(NotifierError):
    message: str
    status_code: int | None = None
    path: str = ""

    def __str__(self) -> str:
        summary = "GitHub API request failed"
        if self.status_code:
            summary += f" ({self.status_code})"
        if self.path:
            summary += f": GET {self.path}"
        return f"{summary}\n{self.message}" if self.message else summary


@dataclass(eq=False)
class DeliveryError(NotifierError):
    message: str
    status_code: int | None = None
    body: str = ""

    def __str__(self) -> str:
        if self.body:
            return f"{self.message}\n{self.body}"
        return self.message
