# line_sim/app/build.py
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from line_sim.config.models import LineModel
from line_sim.domain.entities.vehicle import Vehicle
from line_sim.domain.state import LineState
from line_sim.io.line_logging import LineLogging
from line_sim.io.recorder import JsonlSink, Recorder, Sink
from line_sim.runtime.policy_factory import make_fare_source
from line_sim.sim.hooks import LineHooks, NoopHooks


@dataclass
class App:
    line: LineState
    vehicle: Vehicle
    hooks: LineHooks
    recorder: Recorder | None


def build(
    cfg: LineModel | Mapping,
    *,
    use_logging: bool = True,
    sinks: tuple[Sink, ...] | None = None,
    hooks: LineHooks | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, LineModel) else LineModel.model_validate(cfg)

    # 1) Hooks (logging + accounting records)
    recorder = None
    if hooks is None:
        if use_logging:
            recorder = Recorder(*(sinks or (JsonlSink(),)))
            hooks = LineLogging(
                run_id=model.run_id,
                recorder=recorder,
                level=model.log.level,
                debug=model.log.debug,
            )
        else:
            hooks = NoopHooks()

    # 2) Stops, then the vehicle and its route
    line = LineState(hooks=hooks, on_malformed=model.on_malformed)
    for name in model.stops:
        line.add_stop(name)
    vehicle = line.add_vehicle(
        model.vehicle.name,
        service_date=model.service_date,
        fares=make_fare_source(model.pricing),
        route=model.vehicle.route,
    )
    for name in model.vehicle.announced_at:
        line.announce(vehicle.name, name)

    # 3) Riders waiting at their origin
    for r in model.riders:
        line.wait(r.rider_id, origin=r.origin, destination=r.destination)

    return App(line, vehicle, hooks, recorder)


def run_line(app: App, on_step: Callable[[Vehicle], None] | None = None) -> int:
    """Advance the vehicle until the end of the line. Returns the number of advances."""
    steps = 0
    while True:
        steps += 1
        more = app.vehicle.advance()
        if not more:
            return steps
        if on_step:
            on_step(app.vehicle)
