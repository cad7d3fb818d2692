from datetime import date
from typing import Protocol, runtime_checkable

from line_sim.domain.entities.rider import Rider

# --------------- Policies -------------------------


@runtime_checkable
class FarePolicy(Protocol):
    """Ticket price for a rider, in the local currency."""

    def price_for(self, rider: Rider) -> float: ...


@runtime_checkable
class FareSource(Protocol):
    """
    Responsibilities:
      • Pick the fare policy in force on a given service day.
    The day is always passed in; implementations must not read the wall clock.
    """

    def select(self, today: date) -> FarePolicy: ...
