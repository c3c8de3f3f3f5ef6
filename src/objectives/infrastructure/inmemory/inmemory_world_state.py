from objectives.domain.collaborators import WorldState


class InMemoryWorldState(WorldState):
    def __init__(self, prisoner_count: int = 0) -> None:
        self.prisoner_count = max(0, int(prisoner_count))

    def has_prisoner_available(self) -> bool:
        return self.prisoner_count > 0
