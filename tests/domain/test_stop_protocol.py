from datetime import date

import pytest

from line_sim.domain.entities.rider import WaitingRider
from line_sim.domain.entities.stop import Stop
from line_sim.domain.errors import MalformedIdentifierError
from line_sim.domain.state import LineState
from line_sim.sim.hooks import NoopHooks

SATURDAY = date(2025, 1, 4)
WEDNESDAY = date(2025, 1, 1)


class TraceHooks(NoopHooks):
    def __init__(self):
        self.events = []

    def rider_boarded(self, *, vehicle, rider_id, destination):
        self.events.append(("boarded", rider_id, destination))

    def rider_alighted(self, *, vehicle, rider_id, stop, forced):
        self.events.append(("alighted", rider_id, stop))

    def fare_charged(self, *, rider_id, amount):
        self.events.append(("charged", rider_id, amount))

    def error(self, *, reason, **kw):
        self.events.append(("error", reason, kw.get("rider_id") or kw.get("vehicle")))


def make_line(*names, route=None, hooks=None, on_malformed="raise", day=WEDNESDAY):
    line = LineState(hooks=hooks or NoopHooks(), on_malformed=on_malformed)
    for n in names:
        line.add_stop(n)
    v = line.add_vehicle("Bus 1", service_date=day, route=route if route is not None else names)
    return line, v


def test_stops_compare_by_name_only():
    assert Stop("Downtown") == Stop("Downtown", waiting=[WaitingRider("a-10", Stop("X"))])
    assert Stop("Downtown") != Stop("Uptown")
    assert len({Stop("Downtown"), Stop("Downtown")}) == 1


def test_arrival_alights_then_boards_and_charges():
    hooks = TraceHooks()
    line, v = make_line("A", "B", "C", hooks=hooks)
    line.wait("x-10", origin="A", destination="B")
    line.wait("y-70", origin="B", destination="C")

    v.advance()  # A
    assert v.manifest() == {"x-10"}
    hooks.events.clear()

    v.advance()  # B: x-10 leaves before y-70 gets on
    assert hooks.events == [
        ("alighted", "x-10", "B"),
        ("charged", "y-70", 4.5),
        ("boarded", "y-70", "C"),
    ]
    assert v.manifest() == {"y-70"}


def test_weekend_fares_follow_the_service_date():
    hooks = TraceHooks()
    line, v = make_line("A", "B", hooks=hooks, day=SATURDAY)
    line.add_stop("C")
    v.add_stop(line.stops["C"])
    line.wait("x-10", origin="A", destination="B")
    line.wait("y-70", origin="A", destination="C")
    v.advance()
    charges = sorted(e for e in hooks.events if e[0] == "charged")
    assert charges == [("charged", "x-10", 5.0), ("charged", "y-70", 3.5)]


def test_waiting_rider_only_boards_when_destination_is_on_route():
    line, v = make_line("A", "B", "C", "Nowhere", route=["A", "B", "C"])
    line.wait("x-10", origin="A", destination="Nowhere")
    v.advance()
    assert len(v.riders) == 0
    assert [w.rider_id for w in line.stops["A"].waiting] == ["x-10"]


def test_boarded_riders_leave_the_waiting_list():
    line, v = make_line("A", "B", "C")
    line.wait("x-10", origin="A", destination="C")
    v.advance()
    assert line.stops["A"].waiting == []
    assert v.find_rider("x-10").has_valid_ticket


def test_waiting_rider_makes_announced_vehicle_stop_here():
    line, v = make_line("A", "B", "C", "Side", route=["A", "B", "C"])
    line.announce("Bus 1", "Side")
    line.wait("x-10", origin="Side", destination="C")
    # appended, not inserted in visiting order
    assert [s.name for s in v.route] == ["A", "B", "C", "Side"]
    assert "Bus 1" in line.stops["Side"].vehicle_names


def test_unreachable_destination_leaves_route_alone():
    line, v = make_line("A", "B", "Side", "Far", route=["A", "B"])
    line.announce("Bus 1", "Side")
    line.wait("x-10", origin="Side", destination="Far")
    assert [s.name for s in v.route] == ["A", "B"]


def test_unknown_vehicle_name_is_reported_not_fatal():
    hooks = TraceHooks()
    line, v = make_line("A", "B", hooks=hooks)
    line.announce("Ghost", "A")
    line.wait("x-10", origin="A", destination="B")
    assert ("error", "unknown_vehicle", "Ghost") in hooks.events


def test_malformed_identifier_raises_by_default():
    line, v = make_line("A", "B", "C")
    line.wait("bad-id", origin="A", destination="B")
    with pytest.raises(MalformedIdentifierError):
        v.advance()


def test_malformed_identifier_can_be_skipped():
    hooks = TraceHooks()
    line, v = make_line("A", "B", "C", hooks=hooks, on_malformed="skip")
    line.wait("bad-id", origin="A", destination="B")
    line.wait("x-10", origin="A", destination="B")
    v.advance()
    assert v.manifest() == {"x-10"}
    assert ("error", "malformed_identifier", "bad-id") in hooks.events
    assert [w.rider_id for w in line.stops["A"].waiting] == ["bad-id"]


def test_duplicate_names_are_rejected():
    line, _ = make_line("A", "B")
    with pytest.raises(ValueError):
        line.add_stop("A")
    with pytest.raises(ValueError):
        line.add_vehicle("Bus 1", service_date=WEDNESDAY)


def test_raising_on_malformed_identifier_stops_boarding_at_that_stop():
    line, v = make_line("A", "B", "C")
    line.wait("bad-id", origin="A", destination="B")
    line.wait("ok-10", origin="A", destination="B")
    with pytest.raises(MalformedIdentifierError):
        v.advance()
    assert v.manifest() == set()
    assert [w.rider_id for w in line.stops["A"].waiting] == ["bad-id", "ok-10"]
