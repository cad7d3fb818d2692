# line_sim/domain/state.py
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from line_sim.app.protocols import FareSource
from line_sim.domain.entities.rider import WaitingRider
from line_sim.domain.entities.stop import OnMalformed, Stop
from line_sim.domain.entities.vehicle import Vehicle
from line_sim.policy.pricing import FareSchedule
from line_sim.sim.hooks import LineHooks, NoopHooks


@dataclass
class LineState:
    """Stops and vehicles of the line, by name. Stops look vehicles up here."""

    hooks: LineHooks = field(default_factory=NoopHooks)
    on_malformed: OnMalformed = "raise"
    stops: dict[str, Stop] = field(default_factory=dict)
    vehicles: dict[str, Vehicle] = field(default_factory=dict)

    def add_stop(self, name: str) -> Stop:
        if name in self.stops:
            raise ValueError(f"duplicate stop {name!r}")
        stop = Stop(name, fleet=self.vehicles, hooks=self.hooks, on_malformed=self.on_malformed)
        self.stops[name] = stop
        return stop

    def add_vehicle(
        self,
        name: str,
        *,
        service_date: date,
        fares: FareSource | None = None,
        route: Iterable[str] = (),
    ) -> Vehicle:
        if name in self.vehicles:
            raise ValueError(f"duplicate vehicle {name!r}")
        v = Vehicle(
            name, service_date=service_date, fares=fares or FareSchedule(), hooks=self.hooks
        )
        self.vehicles[name] = v
        for stop_name in route:
            v.add_stop(self.stops[stop_name])
        return v

    def announce(self, vehicle_name: str, stop_name: str) -> None:
        """Make a stop aware of a vehicle passing by, without adding it to the route."""
        self.stops[stop_name].know_vehicle(vehicle_name)

    def wait(self, rider_id: str, *, origin: str, destination: str) -> WaitingRider:
        w = WaitingRider(rider_id, self.stops[destination])
        self.stops[origin].register_waiting_rider(w)
        return w
