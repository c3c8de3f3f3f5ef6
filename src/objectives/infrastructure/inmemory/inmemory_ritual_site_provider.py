from __future__ import annotations

from typing import Iterable, List, Sequence

from objectives.domain.collaborators import RitualSite, RitualSiteProvider


class InMemoryRitualSiteProvider(RitualSiteProvider):
    def __init__(self, sites: Iterable[RitualSite] = ()) -> None:
        self._sites: List[RitualSite] = list(sites)

    def add_site(self, x: float, y: float) -> RitualSite:
        site = RitualSite(x=float(x), y=float(y))
        self._sites.append(site)
        return site

    def get_all_sites(self) -> Sequence[RitualSite]:
        return tuple(self._sites)
