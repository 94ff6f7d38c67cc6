from dataclasses import dataclass, asdict
from enum import Enum
from typing import List

from invix.core.logger import logger


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    severity: Severity = Severity.INFO

    def to_dict(self) -> dict:
        data = asdict(self)
        data["severity"] = self.severity.value
        return data


class NotificationChannel:
    """Toast kuyruğu: gönderen hiçbir zaman onay beklemez."""

    def __init__(self):
        self._items: List[Notification] = []

    def notify(self, title: str, description: str, severity: Severity = Severity.INFO) -> None:
        self._items.append(Notification(title, description, severity))
        logger.info(f"NOTIFY | {severity.value} | {title} | {description}")

    @property
    def items(self) -> List[Notification]:
        return list(self._items)

    def drain(self) -> List[dict]:
        items = [n.to_dict() for n in self._items]
        self._items.clear()
        return items
