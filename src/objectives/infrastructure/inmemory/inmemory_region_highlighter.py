from __future__ import annotations

from typing import List

from objectives.domain.collaborators import RegionHighlighter, RitualSite
from objectives.domain.models.vocabulary import Region


class InMemoryRegionHighlighter(RegionHighlighter):
    def __init__(self) -> None:
        self.regions: List[Region] = []
        self.sites: List[RitualSite] = []
        self.clear_count = 0

    def highlight_region(self, region: Region) -> None:
        self.regions.append(region)

    def highlight_site(self, site: RitualSite) -> None:
        self.sites.append(site)

    def clear_highlights(self) -> None:
        self.regions = []
        self.sites = []
        self.clear_count += 1

    @property
    def is_highlighting(self) -> bool:
        return bool(self.regions or self.sites)
