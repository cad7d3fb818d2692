# main.py
import logging
import sys
from datetime import date

from line_sim.app.build import build, run_line
from line_sim.config.models import LineModel, load_line
from line_sim.domain.entities.vehicle import Vehicle
from line_sim.domain.errors import LineSimError

log = logging.getLogger("line_sim")

EXPRESS_LINE = {
    "name": "express",
    "run_id": "express-local",
    "service_date": date.today(),
    "stops": ["Downtown", "The University", "The Village"],
    "vehicle": {
        "name": "Express Line",
        "route": ["Downtown", "The University", "The Village"],
    },
    "riders": [
        {"rider_id": "12345612-22", "origin": "Downtown", "destination": "The University"},
        {"rider_id": "11223322-67", "origin": "Downtown", "destination": "The Village"},
    ],
}


def report(vehicle: Vehicle) -> None:
    vehicle.for_each_rider(
        lambda r: log.info(
            "on_board",
            extra={"extra": {"rider_id": r.rider_id, "destination": r.destination.name}},
        )
    )


def run(cfg: LineModel | dict) -> int:
    app = build(cfg)
    try:
        steps = run_line(app, on_step=report)
    except LineSimError as exc:
        log.error("simulation_aborted", extra={"extra": {"error": str(exc)}})
        return 1
    log.info("simulation_done", extra={"extra": {"steps": steps}})
    return 0


if __name__ == "__main__":
    cfg = load_line(sys.argv[1]) if len(sys.argv) > 1 else EXPRESS_LINE
    sys.exit(run(cfg))
