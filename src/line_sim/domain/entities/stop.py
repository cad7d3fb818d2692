# line_sim/domain/entities/stop.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from line_sim.domain.entities.rider import WaitingRider
from line_sim.domain.errors import MalformedIdentifierError
from line_sim.sim.hooks import LineHooks, NoopHooks

if TYPE_CHECKING:
    from line_sim.domain.entities.vehicle import Vehicle

OnMalformed = Literal["raise", "skip"]


@dataclass(eq=False)
class Stop:
    name: str
    waiting: list[WaitingRider] = field(default_factory=list)
    # vehicles known to pass here, by name; resolved through `fleet`
    vehicle_names: list[str] = field(default_factory=list)
    fleet: Mapping[str, Vehicle] = field(default_factory=dict, repr=False)
    hooks: LineHooks = field(default_factory=NoopHooks, repr=False)
    # "raise" aborts boarding at this stop: riders queued after the bad one keep waiting
    on_malformed: OnMalformed = "raise"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Stop):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def know_vehicle(self, vehicle_name: str) -> None:
        if vehicle_name not in self.vehicle_names:
            self.vehicle_names.append(vehicle_name)

    def register_waiting_rider(self, w: WaitingRider) -> None:
        self.waiting.append(w)
        for name in list(self.vehicle_names):
            vehicle = self.fleet.get(name)
            if vehicle is None:
                self.hooks.error(reason="unknown_vehicle", stop=self.name, vehicle=name)
                continue
            if vehicle.stops_at(w.destination):
                vehicle.boarding_intent(self)

    def on_vehicle_arrival(self, vehicle: Vehicle) -> None:
        # 1) alight
        for rider in vehicle.riders:
            if rider.destination == self:
                vehicle.remove(rider.rider_id, stop=self)

        # 2) board
        policy = vehicle.pricing()
        for w in list(self.waiting):
            if not vehicle.stops_at(w.destination):
                continue
            try:
                vehicle.board(w.to_rider(), policy)
            except MalformedIdentifierError as exc:
                if self.on_malformed == "raise":
                    raise
                self.hooks.error(
                    reason="malformed_identifier", stop=self.name, rider_id=exc.rider_id
                )
                continue
            # a waiting rider boards exactly once
            self.waiting.remove(w)
