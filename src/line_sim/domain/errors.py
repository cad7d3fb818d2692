# line_sim/domain/errors.py


class LineSimError(Exception):
    """Base class for errors raised by the line simulation."""


class MalformedIdentifierError(LineSimError, ValueError):
    """Rider identifier does not end in two decimal digits (the rider's age)."""

    def __init__(self, rider_id: str):
        super().__init__(f"invalid rider identifier: {rider_id!r}")
        self.rider_id = rider_id


class RouteStateError(LineSimError, IndexError):
    """Route position accessed while the vehicle is not at a stop."""
