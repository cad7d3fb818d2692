import os
from datetime import date
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ------------------ PRICING -----------------------------


class PricingWeekdayWeekendModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["weekday_weekend"] = "weekday_weekend"
    weekday_regular: float = 6.0
    weekday_senior: float = 4.5
    weekend_regular: float = 5.0
    weekend_senior: float = 3.5
    senior_age: int = 65

    @field_validator("weekday_regular", "weekday_senior", "weekend_regular", "weekend_senior")
    def _nonneg(cls, v: float, info: ValidationInfo) -> float:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v


class PricingFlatModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["flat"] = "flat"
    fare: float = 0.0

    @field_validator("fare")
    def _nonneg(cls, v: float, info: ValidationInfo) -> float:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v


PricingUnion = Annotated[
    PricingWeekdayWeekendModel | PricingFlatModel, Field(discriminator="kind")
]


# ------------------ LINE -----------------------------


class VehicleModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    route: list[str] = Field(default_factory=list)  # stop names, in visiting order
    announced_at: list[str] = Field(default_factory=list)  # stops that know the vehicle


class WaitingRiderModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    rider_id: str
    origin: str
    destination: str


class LineModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str = "local"
    service_date: date
    log: LogModel = LogModel()
    stops: list[str]
    vehicle: VehicleModel
    pricing: PricingUnion = Field(default_factory=PricingWeekdayWeekendModel)
    riders: list[WaitingRiderModel] = Field(default_factory=list)
    on_malformed: Literal["raise", "skip"] = "raise"

    @field_validator("stops")
    @classmethod
    def _unique_stops(cls, v: list[str]) -> list[str]:
        seen: set[str] = set()
        for name in v:
            if name in seen:
                raise ValueError(f"duplicate stop {name!r}")
            seen.add(name)
        return v

    @model_validator(mode="after")
    def _check_references(self):
        known = set(self.stops)
        for name in self.vehicle.route + self.vehicle.announced_at:
            if name not in known:
                raise ValueError(f"vehicle {self.vehicle.name!r} references unknown stop {name!r}")
        for r in self.riders:
            for name in (r.origin, r.destination):
                if name not in known:
                    raise ValueError(f"rider {r.rider_id!r} references unknown stop {name!r}")
        return self


def load_line(path: str) -> LineModel:
    with open(os.path.expandvars(os.path.expanduser(path)), encoding="utf-8") as fp:
        return LineModel.model_validate_json(fp.read())
