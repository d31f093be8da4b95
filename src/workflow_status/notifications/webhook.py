from __future__ import annotations

import json
import logging
from typing import Any

import requests

from ..config import Secret
from ..errors import DeliveryError

logger = logging.getLogger(__name__)

HEADERS = {"Content-Type": "application/json"}


class WebhookClient:
    """Posts serialized cards to a chat webhook."""

    def __init__(
        self,
        url: Secret,
        timeout: int = 20,
        session: requests.Session | None = None,
    ) -> None:
        self._url = url
        self.timeout = timeout
        self._session = session or requests.Session()

    def close(self) -> None:
        self._session.close()

    def send(self, data: str) -> str:
        """POST ``data`` and return the serialized response body."""
        try:
            response = self._session.post(
                self._url.reveal(),
                data=data.encode("utf-8"),
                headers=HEADERS,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            # The exception text can contain the webhook URL.
            raise DeliveryError(
                message=f"Webhook request failed: {exc.__class__.__name__}"
            ) from None

        body = _decode_body(response)
        if not response.ok:
            raise DeliveryError(
                message=f"Webhook responded with HTTP {response.status_code}",
                status_code=response.status_code,
                body=json.dumps(body, indent=4, ensure_ascii=False),
            )
        if isinstance(body, dict) and body.get("code") not in (None, 0):
            raise DeliveryError(
                message=f"Webhook rejected the card (code {body.get('code')})",
                status_code=response.status_code,
                body=json.dumps(body, indent=4, ensure_ascii=False),
            )

        logger.info("Webhook accepted the card (HTTP %s)", response.status_code)
        return json.dumps(body, ensure_ascii=False)


def _decode_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
