from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from objectives.domain.collaborators import RewardLedger

MAX_SANITY = 3


@dataclass(frozen=True)
class ExperienceAward:
    amount: int
    label: str


class InMemoryRewardLedger(RewardLedger):
    def __init__(self, experience: int = 0, sanity: int = MAX_SANITY, max_sanity: int = MAX_SANITY) -> None:
        self.max_sanity = max(0, int(max_sanity))
        self.experience = max(0, int(experience))
        self.sanity = self._clamp(sanity)
        self.awards: List[ExperienceAward] = []
        self._logger = logging.getLogger(__name__)

    def award_experience(self, amount: int, label: str) -> None:
        amount = max(0, int(amount))
        if amount <= 0:
            return
        self.experience += amount
        self.awards.append(ExperienceAward(amount=amount, label=str(label)))
        self._logger.info("Experience awarded", extra={"amount": amount, "label": label})

    def increase_sanity(self, amount: int) -> None:
        self.sanity = self._clamp(self.sanity + int(amount))

    def decrease_sanity(self, amount: int) -> None:
        self.sanity = self._clamp(self.sanity - int(amount))

    def _clamp(self, value: int) -> int:
        return max(0, min(self.max_sanity, int(value)))
