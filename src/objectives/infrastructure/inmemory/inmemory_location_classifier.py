from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Set

from objectives.domain.collaborators import LocationClassifier
from objectives.domain.models.vocabulary import Region


@dataclass(frozen=True)
class HomeFootprint:
    building_id: str
    x: float
    y: float
    width: float
    height: float

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


class StaticLocationClassifier(LocationClassifier):
    """Answers location questions from a fixed set of regions and home footprints."""

    def __init__(
        self,
        player_regions: Iterable[Region] = (),
        homes: Iterable[HomeFootprint] = (),
    ) -> None:
        self._player_regions: Set[Region] = {Region(region) for region in player_regions}
        self._homes: List[HomeFootprint] = list(homes)

    def move_player(self, *regions: Region) -> None:
        self._player_regions = {Region(region) for region in regions}

    def add_home(self, home: HomeFootprint) -> None:
        self._homes.append(home)

    def is_player_in_region(self, region: Region) -> bool:
        try:
            return Region(region) in self._player_regions
        except ValueError:
            return False

    def is_position_inside_someone_elses_home(self, x: float, y: float) -> bool:
        return self._home_at(x, y) is not None

    def building_id_at(self, x: float, y: float) -> Optional[str]:
        home = self._home_at(x, y)
        return home.building_id if home is not None else None

    def _home_at(self, x: float, y: float) -> HomeFootprint | None:
        for home in self._homes:
            if home.contains(float(x), float(y)):
                return home
        return None
