# line_sim/domain/entities/rider_set.py
from collections.abc import Callable, Iterator

from line_sim.domain.entities.rider import Rider


class RiderSet:
    """
    Riders keyed by identifier. Owned by exactly one vehicle.
    Iteration order is unspecified.
    """

    def __init__(self, riders: dict[str, Rider] | None = None):
        self._riders: dict[str, Rider] = dict(riders or {})

    def __len__(self) -> int:
        return len(self._riders)

    def __contains__(self, rider_id: object) -> bool:
        return rider_id in self._riders

    def __iter__(self) -> Iterator[Rider]:
        return iter(list(self._riders.values()))

    def insert(self, rider: Rider) -> None:
        # same id overwrites: re-boarding is idempotent
        self._riders[rider.rider_id] = rider

    def remove(self, rider_id: str) -> Rider | None:
        return self._riders.pop(rider_id, None)

    def find(self, rider_id: str) -> Rider | None:
        return self._riders.get(rider_id)

    def for_each(self, visitor: Callable[[Rider], None]) -> None:
        # snapshot, so visitors may remove riders from this set
        for rider in list(self._riders.values()):
            visitor(rider)

    def for_each_mutable(self, visitor: Callable[[Rider], Rider]) -> None:
        """
        Call visitor for every rider and keep what it returns in the rider's place.
        Results go into a fresh mapping that replaces the current one once the
        traversal is done. Visitors must not change the identifier.
        """
        updated: dict[str, Rider] = {}
        for rider_id, rider in list(self._riders.items()):
            updated[rider_id] = visitor(rider)
        self._riders = updated

    def manifest(self) -> set[str]:
        return set(self._riders)
