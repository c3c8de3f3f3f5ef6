from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from objectives.domain.collaborators import NotificationSurface


@dataclass(frozen=True)
class Notification:
    message: str
    duration_ms: int


class InMemoryNotificationSurface(NotificationSurface):
    def __init__(self) -> None:
        self.shown: List[Notification] = []
        self._logger = logging.getLogger(__name__)

    def show(self, message: str, duration_ms: int) -> None:
        self.shown.append(Notification(message=str(message), duration_ms=int(duration_ms)))
        self._logger.info(message)

    @property
    def messages(self) -> List[str]:
        return [row.message for row in self.shown]

    def drain(self) -> List[Notification]:
        rows, self.shown = self.shown, []
        return rows
