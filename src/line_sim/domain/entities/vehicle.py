# line_sim/domain/entities/vehicle.py
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from line_sim.app.protocols import FarePolicy, FareSource
from line_sim.domain.entities.rider import Rider
from line_sim.domain.entities.rider_set import RiderSet
from line_sim.domain.entities.stop import Stop
from line_sim.domain.errors import RouteStateError
from line_sim.policy.pricing import FareSchedule, charge
from line_sim.sim.hooks import LineHooks, NoopHooks


# ------------- Route states --------------------
@dataclass(frozen=True)
class NotStarted:
    position: int = -1


@dataclass(frozen=True)
class EnRoute:
    position: int


@dataclass(frozen=True)
class Finished:
    position: int


RouteState = NotStarted | EnRoute | Finished


@dataclass
class Vehicle:
    """
    Carries riders along an append-only route, one stop per `advance()`.

    The last stop of the route is the terminal: arriving there unboards everybody
    and finishes the route. Stops added after departure go to the end of the
    route, even when a stop further back would be the natural place for them.
    """

    name: str
    service_date: date
    fares: FareSource = field(default_factory=FareSchedule)
    riders: RiderSet = field(default_factory=RiderSet)
    route: list[Stop] = field(default_factory=list)
    state: RouteState = field(default_factory=NotStarted)
    hooks: LineHooks = field(default_factory=NoopHooks, repr=False)

    @property
    def position(self) -> int:
        return self.state.position

    @property
    def last_index(self) -> int:
        return len(self.route) - 1

    @property
    def finished(self) -> bool:
        return isinstance(self.state, Finished)

    # ------------ route --------------

    def add_stop(self, stop: Stop) -> None:
        self.route.append(stop)
        stop.know_vehicle(self.name)

    def stops_at(self, stop: Stop) -> bool:
        return any(s == stop for s in self.route)

    def boarding_intent(self, stop: Stop) -> None:
        if self.stops_at(stop):
            return  # already stopping there
        self.add_stop(stop)

    def current_stop(self) -> Stop:
        if isinstance(self.state, NotStarted):
            raise RouteStateError(f"{self.name}: has not left for its first stop yet")
        if not 0 <= self.position < len(self.route):
            raise RouteStateError(
                f"{self.name}: position {self.position} outside route of {len(self.route)} stops"
            )
        return self.route[self.position]

    def advance(self) -> bool:
        """Move to the next stop. Returns True while more stops remain."""
        if self.finished:
            return False
        position = self.position + 1
        if position >= self.last_index:
            # empty and single-stop routes end here too, without boarding anyone
            self._finish(position)
            return False

        self.state = EnRoute(position)
        stop = self.route[position]
        if position == 0:
            self.hooks.route_started(vehicle=self.name, stop=stop.name)
        else:
            self.hooks.heading_out(vehicle=self.name, riders=len(self.riders))
        self.hooks.arrived(vehicle=self.name, stop=stop.name, position=position)
        stop.on_vehicle_arrival(self)
        return position < self.last_index

    def notify_arrival(self) -> None:
        """Run the arrival protocol again at the current stop."""
        self.current_stop().on_vehicle_arrival(self)

    def _finish(self, position: int) -> None:
        # an empty route finishes at -1, off the route
        position = min(position, self.last_index)
        terminal = self.route[position] if 0 <= position < len(self.route) else None
        unboarded = len(self.riders)
        self.riders.for_each(lambda r: self.remove(r.rider_id, stop=terminal, forced=True))
        self.state = Finished(position)
        self.hooks.route_finished(
            vehicle=self.name,
            stop=terminal.name if terminal else None,
            unboarded=unboarded,
        )

    # ------------ riders --------------

    def pricing(self) -> FarePolicy:
        return self.fares.select(self.service_date)

    def board(self, rider: Rider, policy: FarePolicy) -> Rider:
        """Charge rider (unless already ticketed) and take them on board."""
        if not rider.has_valid_ticket:
            rider = charge(rider, policy.price_for(rider), self.hooks)
        self.riders.insert(rider)
        self.hooks.rider_boarded(
            vehicle=self.name, rider_id=rider.rider_id, destination=rider.destination.name
        )
        return rider

    def remove(self, rider_id: str, *, stop: Stop | None = None, forced: bool = False) -> None:
        if self.riders.remove(rider_id) is None:
            return
        self.hooks.rider_alighted(
            vehicle=self.name,
            rider_id=rider_id,
            stop=stop.name if stop else None,
            forced=forced,
        )

    def find_rider(self, rider_id: str) -> Rider | None:
        return self.riders.find(rider_id)

    def manifest(self) -> set[str]:
        return self.riders.manifest()

    def for_each_rider(self, visitor: Callable[[Rider], None]) -> None:
        self.riders.for_each(visitor)

    def update_riders(self, visitor: Callable[[Rider], Rider]) -> None:
        self.riders.for_each_mutable(visitor)
