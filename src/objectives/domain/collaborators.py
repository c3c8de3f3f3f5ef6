from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

from objectives.domain.models.entity_constraint import EntityConstraint
from objectives.domain.models.vocabulary import Region


@dataclass(frozen=True)
class RitualSite:
    x: float
    y: float


@dataclass(frozen=True)
class ContextActionRegistration:
    objective_id: int
    action_id: str
    with_object: Optional[str] = None
    entity_constraint: Optional[EntityConstraint] = None


class LocationClassifier(ABC):
    @abstractmethod
    def is_player_in_region(self, region: Region) -> bool:
        raise NotImplementedError

    @abstractmethod
    def is_position_inside_someone_elses_home(self, x: float, y: float) -> bool:
        raise NotImplementedError

    def building_id_at(self, x: float, y: float) -> Optional[str]:
        """Identity of the building containing the position, if known."""
        return None


class RewardLedger(ABC):
    @abstractmethod
    def award_experience(self, amount: int, label: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def increase_sanity(self, amount: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def decrease_sanity(self, amount: int) -> None:
        raise NotImplementedError


class NotificationSurface(ABC):
    @abstractmethod
    def show(self, message: str, duration_ms: int) -> None:
        raise NotImplementedError


class ContextActionRegistry(ABC):
    @abstractmethod
    def register_action(self, kind: str, registration: ContextActionRegistration) -> None:
        raise NotImplementedError

    @abstractmethod
    def unregister_all_for(self, objective_id: int) -> None:
        raise NotImplementedError


class RitualSiteProvider(ABC):
    @abstractmethod
    def get_all_sites(self) -> Sequence[RitualSite]:
        raise NotImplementedError


class RegionHighlighter(ABC):
    @abstractmethod
    def highlight_region(self, region: Region) -> None:
        raise NotImplementedError

    @abstractmethod
    def highlight_site(self, site: RitualSite) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear_highlights(self) -> None:
        raise NotImplementedError


class WorldState(ABC):
    @abstractmethod
    def has_prisoner_available(self) -> bool:
        raise NotImplementedError
