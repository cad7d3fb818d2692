# line_sim/domain/entities/rider.py
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from line_sim.domain.entities.stop import Stop


@dataclass(frozen=True)
class Rider:
    rider_id: str  # last two characters encode the age
    destination: Stop
    seat: int | None = None
    has_valid_ticket: bool = False


@dataclass(frozen=True)
class WaitingRider:
    """A rider-to-be, waiting at a stop for a vehicle heading to `destination`."""

    rider_id: str
    destination: Stop

    def to_rider(self) -> Rider:
        return Rider(rider_id=self.rider_id, destination=self.destination)
