# line_sim/io/recorder.py
import json
import logging
import sys
from collections import Counter
from dataclasses import asdict
from typing import Protocol, TextIO

from line_sim.io.business_events import BizEvent, FareChargedBiz

log = logging.getLogger("line_sim.recorder")


class Sink(Protocol):
    def write(self, ev: BizEvent) -> None: ...


class JsonlSink:
    """One JSON object per accounting record."""

    def __init__(self, fp: TextIO = sys.stdout, flush: bool = False):
        self.fp, self.flush = fp, flush

    def write(self, ev: BizEvent) -> None:
        self.fp.write(json.dumps(asdict(ev), default=str) + "\n")
        if self.flush:
            self.fp.flush()


class MemorySink:
    def __init__(self):
        self.events: list[BizEvent] = []

    def write(self, ev: BizEvent) -> None:
        self.events.append(ev)

    def named(self, name: str) -> list[BizEvent]:
        return [ev for ev in self.events if ev.name == name]

    def fares_total(self) -> float:
        return sum(ev.amount for ev in self.events if isinstance(ev, FareChargedBiz))


class Recorder:
    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)
        self.failures: Counter[str] = Counter()  # sink class name -> failed writes

    def emit(self, ev: BizEvent) -> None:
        for s in self.sinks:
            try:
                s.write(ev)
            except Exception:
                # a broken sink must not stop the line
                self.failures[type(s).__name__] += 1
                log.exception("sink %s failed on %s", type(s).__name__, ev.name)
