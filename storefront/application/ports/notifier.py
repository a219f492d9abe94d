from abc import ABC, abstractmethod
from typing import Any


class NotificationPort(ABC):
    @abstractmethod
    def send(self, template: str, recipient: str, data: dict[str, Any]) -> str:
        """Hand a templated notification to the provider. Returns a message id."""
        raise NotImplementedError
