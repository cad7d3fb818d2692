# line_sim/io/business_events.py

from dataclasses import dataclass


# Accounting/analytics records, one per observable business event
@dataclass
class BizEvent:
    run_id: str
    seq: int  # emission order within the run
    name: str  # stable event name


@dataclass
class RouteStartedBiz(BizEvent):
    vehicle: str
    stop: str


@dataclass
class RiderBoardedBiz(BizEvent):
    vehicle: str
    rider_id: str
    destination: str


@dataclass
class RiderAlightedBiz(BizEvent):
    vehicle: str
    rider_id: str
    stop: str | None
    forced: bool = False  # unboarded at the terminal


@dataclass
class FareChargedBiz(BizEvent):
    rider_id: str
    amount: float


@dataclass
class RouteFinishedBiz(BizEvent):
    vehicle: str
    stop: str | None
    unboarded: int = 0
