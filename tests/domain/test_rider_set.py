from dataclasses import replace

from line_sim.domain.entities.rider import Rider, WaitingRider
from line_sim.domain.entities.rider_set import RiderSet
from line_sim.domain.entities.stop import Stop

UNI = Stop("The University")
VILLAGE = Stop("The Village")


def test_insert_same_id_overwrites():
    rs = RiderSet()
    rs.insert(Rider("12345612-22", UNI))
    rs.insert(Rider("12345612-22", VILLAGE, has_valid_ticket=True))
    assert len(rs) == 1
    found = rs.find("12345612-22")
    assert found.destination == VILLAGE
    assert found.has_valid_ticket


def test_find_and_remove_absent_return_none():
    rs = RiderSet()
    assert rs.find("nobody-00") is None
    assert rs.remove("nobody-00") is None
    assert "nobody-00" not in rs


def test_manifest_lists_every_identifier():
    rs = RiderSet()
    for rid in ("a-10", "b-20", "c-70"):
        rs.insert(Rider(rid, UNI))
    assert rs.manifest() == {"a-10", "b-20", "c-70"}
    rs.remove("b-20")
    assert rs.manifest() == {"a-10", "c-70"}


def test_for_each_tolerates_removal_during_traversal():
    rs = RiderSet()
    for rid in ("a-10", "b-20", "c-70"):
        rs.insert(Rider(rid, UNI))
    seen = []

    def visit(r: Rider):
        seen.append(r.rider_id)
        rs.remove(r.rider_id)

    rs.for_each(visit)
    assert sorted(seen) == ["a-10", "b-20", "c-70"]
    assert len(rs) == 0


def test_for_each_mutable_swaps_in_replacements():
    rs = RiderSet()
    rs.insert(Rider("a-10", UNI))
    rs.insert(Rider("b-20", VILLAGE))
    before = list(rs)
    seat = iter(range(1, 10))

    rs.for_each_mutable(lambda r: replace(r, seat=next(seat)))

    assert sorted(r.seat for r in rs) == [1, 2]
    # the snapshot taken before the traversal is untouched
    assert all(r.seat is None for r in before)
    assert rs.manifest() == {"a-10", "b-20"}


def test_waiting_rider_converts_without_ticket_or_seat():
    r = WaitingRider("11223322-67", VILLAGE).to_rider()
    assert r.rider_id == "11223322-67"
    assert r.destination == VILLAGE
    assert r.seat is None
    assert r.has_valid_ticket is False
