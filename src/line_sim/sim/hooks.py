# sim/hooks.py
from typing import Protocol


class LineHooks(Protocol):
    def route_started(self, *, vehicle: str, stop: str): ...
    def heading_out(self, *, vehicle: str, riders: int): ...
    def arrived(self, *, vehicle: str, stop: str, position: int): ...
    def rider_boarded(self, *, vehicle: str, rider_id: str, destination: str): ...
    def rider_alighted(self, *, vehicle: str, rider_id: str, stop: str | None, forced: bool): ...
    def fare_charged(self, *, rider_id: str, amount: float): ...
    def route_finished(self, *, vehicle: str, stop: str | None, unboarded: int): ...
    def error(self, *, reason: str, **kw): ...


class NoopHooks:
    def route_started(self, **_):
        pass

    def heading_out(self, **_):
        pass

    def arrived(self, **_):
        pass

    def rider_boarded(self, **_):
        pass

    def rider_alighted(self, **_):
        pass

    def fare_charged(self, **_):
        pass

    def route_finished(self, **_):
        pass

    def error(self, **_):
        pass
