from line_sim.app.protocols import FareSource
from line_sim.config.models import PricingFlatModel, PricingUnion, PricingWeekdayWeekendModel
from line_sim.policy.pricing import (
    FareSchedule,
    FlatPricing,
    FlatSchedule,
    WeekdayPricing,
    WeekendPricing,
)


def make_fare_source(cfg: PricingUnion) -> FareSource:
    if isinstance(cfg, PricingWeekdayWeekendModel):
        fs = FareSchedule(
            weekday=WeekdayPricing(
                regular=cfg.weekday_regular, senior=cfg.weekday_senior, senior_age=cfg.senior_age
            ),
            weekend=WeekendPricing(
                regular=cfg.weekend_regular, senior=cfg.weekend_senior, senior_age=cfg.senior_age
            ),
        )
        return fs
    elif isinstance(cfg, PricingFlatModel):
        return FlatSchedule(FlatPricing(fare=cfg.fare))
    else:
        raise TypeError(cfg)
