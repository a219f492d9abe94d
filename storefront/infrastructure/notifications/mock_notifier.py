from __future__ import annotations

import logging
import time
from typing import Any

from storefront.application.ports.notifier import NotificationPort


class MockNotifier(NotificationPort):
    """Logs notifications instead of delivering them. Keeps a record for inspection."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.sent: list[dict[str, Any]] = []

    def send(self, template: str, recipient: str, data: dict[str, Any]) -> str:
        message_id = f"mock-{int(time.time() * 1000)}-{len(self.sent) + 1}"
        self.sent.append({"id": message_id, "template": template, "to": recipient, "data": dict(data)})
        self._logger.info(
            "Mock notification sent",
            extra={"template": template, "recipient": recipient, "message_id": message_id},
        )
        return message_id
