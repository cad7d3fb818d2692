# io/line_logging.py
import json
import logging
import sys

from line_sim.io.business_events import (
    FareChargedBiz,
    RiderAlightedBiz,
    RiderBoardedBiz,
    RouteFinishedBiz,
    RouteStartedBiz,
)
from line_sim.io.recorder import Recorder
from line_sim.sim.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload)


def _default_json_logger(name="line_sim", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class LineLogging(NoopHooks):
    """
    Structured logs for everything the vehicle and its stops do, plus
    accounting records for the recorder (boardings, alightings, charges).
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.recorder = recorder
        self.log = logger or _default_json_logger(level="DEBUG" if debug else level)
        self._seq = 0

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def _biz(self, cls, name: str, **fields):
        self._seq += 1
        if self.recorder:
            self.recorder.emit(cls(run_id=self.run_id, seq=self._seq, name=name, **fields))

    # --------------------------------------------------------

    # route lifecycle

    def route_started(self, *, vehicle: str, stop: str):
        self._emit("INFO", "route_started", vehicle=vehicle, stop=stop)
        self._biz(RouteStartedBiz, "route_started", vehicle=vehicle, stop=stop)

    def heading_out(self, *, vehicle: str, riders: int):
        self._emit("INFO", "heading_out", vehicle=vehicle, riders=riders)

    def arrived(self, *, vehicle: str, stop: str, position: int):
        self._emit("INFO", "arrived", vehicle=vehicle, stop=stop, position=position)

    def route_finished(self, *, vehicle: str, stop: str | None, unboarded: int):
        self._emit("INFO", "route_finished", vehicle=vehicle, stop=stop, unboarded=unboarded)
        self._biz(
            RouteFinishedBiz, "route_finished", vehicle=vehicle, stop=stop, unboarded=unboarded
        )

    # riders

    def rider_boarded(self, *, vehicle: str, rider_id: str, destination: str):
        self._emit(
            "INFO", "rider_boarded", vehicle=vehicle, rider_id=rider_id, destination=destination
        )
        self._biz(
            RiderBoardedBiz,
            "rider_boarded",
            vehicle=vehicle,
            rider_id=rider_id,
            destination=destination,
        )

    def rider_alighted(self, *, vehicle: str, rider_id: str, stop: str | None, forced: bool):
        self._emit(
            "INFO", "rider_alighted", vehicle=vehicle, rider_id=rider_id, stop=stop, forced=forced
        )
        self._biz(
            RiderAlightedBiz,
            "rider_alighted",
            vehicle=vehicle,
            rider_id=rider_id,
            stop=stop,
            forced=forced,
        )

    def fare_charged(self, *, rider_id: str, amount: float):
        self._emit("INFO", "fare_charged", rider_id=rider_id, amount=round(amount, 2))
        self._biz(FareChargedBiz, "fare_charged", rider_id=rider_id, amount=amount)

    def error(self, *, reason: str, **kw):
        self._emit("ERROR", "line_error", reason=reason, **kw)
