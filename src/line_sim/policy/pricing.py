# line_sim/policy/pricing.py
import logging
from dataclasses import replace
from datetime import date
from enum import Enum

from line_sim.app.protocols import FarePolicy, FareSource
from line_sim.domain.entities.rider import Rider
from line_sim.domain.errors import MalformedIdentifierError
from line_sim.sim.hooks import LineHooks

log = logging.getLogger("line_sim.pricing")

SENIOR_AGE = 65


def age_of(rider_id: str) -> int:
    """Age encoded in the last two characters of the identifier."""
    digits = rider_id[-2:]
    if len(digits) != 2 or not (digits.isascii() and digits.isdigit()):
        raise MalformedIdentifierError(rider_id)
    return int(digits, 10)


def is_senior(rider: Rider, senior_age: int = SENIOR_AGE) -> bool:
    return age_of(rider.rider_id) >= senior_age


class DayType(Enum):
    WEEKDAY = "weekday"
    WEEKEND = "weekend"

    @classmethod
    def of(cls, day: date) -> "DayType":
        # Mon=0 .. Sat=5, Sun=6
        return cls.WEEKEND if day.weekday() >= 5 else cls.WEEKDAY


class AgeBandPricing(FarePolicy):
    def __init__(self, regular: float, senior: float, senior_age: int = SENIOR_AGE):
        self.regular = regular
        self.senior = senior
        self.senior_age = senior_age

    def price_for(self, rider: Rider) -> float:
        return self.senior if is_senior(rider, self.senior_age) else self.regular


class WeekdayPricing(AgeBandPricing):
    def __init__(self, regular: float = 6.0, senior: float = 4.5, senior_age: int = SENIOR_AGE):
        super().__init__(regular, senior, senior_age)


class WeekendPricing(AgeBandPricing):
    def __init__(self, regular: float = 5.0, senior: float = 3.5, senior_age: int = SENIOR_AGE):
        super().__init__(regular, senior, senior_age)


class FlatPricing(FarePolicy):
    def __init__(self, fare: float = 0.0):
        self.fare = fare

    def price_for(self, rider: Rider) -> float:
        return self.fare


class FareSchedule(FareSource):
    """Weekday prices Monday to Friday, weekend prices on Saturday and Sunday."""

    def __init__(self, weekday: FarePolicy | None = None, weekend: FarePolicy | None = None):
        self.policies: dict[DayType, FarePolicy] = {
            DayType.WEEKDAY: weekday or WeekdayPricing(),
            DayType.WEEKEND: weekend or WeekendPricing(),
        }

    def select(self, today: date) -> FarePolicy:
        return self.policies[DayType.of(today)]


class FlatSchedule(FareSource):
    def __init__(self, policy: FlatPricing):
        self.policy = policy

    def select(self, today: date) -> FarePolicy:
        return self.policy


_DEFAULT_SCHEDULE = FareSchedule()


def price_for(rider: Rider, day_type: DayType) -> float:
    return _DEFAULT_SCHEDULE.policies[day_type].price_for(rider)


def charge(rider: Rider, amount: float, hooks: LineHooks | None = None) -> Rider:
    """
    Return a ticketed copy of rider, reporting the charge to hooks.
    Without hooks the charge is logged at DEBUG on the `line_sim.pricing` logger.
    Riders that already hold a valid ticket are returned unchanged and not charged again.
    """
    if rider.has_valid_ticket:
        return rider
    if hooks is None:
        log.debug("charged %s %.2f", rider.rider_id, amount)
    else:
        hooks.fare_charged(rider_id=rider.rider_id, amount=amount)
    return replace(rider, has_valid_ticket=True)
