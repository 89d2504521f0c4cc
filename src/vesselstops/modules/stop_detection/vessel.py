import logging
from dataclasses import dataclass
from typing import Optional

from vesselstops.core.config import StopDetectionConfig
from vesselstops.core.distance import haversine_km, speed_knots
from vesselstops.core.event import StopEvent
from vesselstops.core.position import Position, PositionReport

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = StopDetectionConfig()


@dataclass(frozen=True)
class Sample:
    position: Position
    timestamp: int

    @classmethod
    def from_report(cls, report: PositionReport) -> "Sample":
        return cls(position=report.position, timestamp=report.timestamp)


@dataclass
class SampleWindow:
    """
    The last two samples of a vessel, in processing order.
    """
    previous: Sample
    current: Sample

    def push(self, sample: Sample):
        self.current = sample

    def roll(self):
        self.previous = self.current


class VesselState:
    """
    Stop detection state for a single vessel.

    Every sample updates distance, elapsed time and speed against the previous
    sample. While the speed stays under the stop threshold the elapsed time is
    accumulated; when the vessel moves again a stop is reported if the
    accumulated time reached the minimum duration.
    """

    def __init__(self, vessel_id: int, first: Sample, config: StopDetectionConfig = DEFAULT_CONFIG):
        self.vessel_id = vessel_id
        self.config = config

        # Both slots start on the first sample, so the first delta is zero
        self.window = SampleWindow(previous=first, current=first)

        self.delta_distance_m: float = 0.0
        self.delta_time_s: int = 0
        self.speed_knots: float = 0.0

        self.is_stopped = False
        self.stopped_seconds = 0
        self.run_start: Optional[Sample] = None
        self.samples_processed = 1

    @classmethod
    def from_report(cls, report: PositionReport, config: StopDetectionConfig = DEFAULT_CONFIG) -> "VesselState":
        return cls(report.vessel_id, Sample.from_report(report), config)

    @property
    def qualifies(self) -> bool:
        return self.stopped_seconds >= self.config.min_stop_seconds

    def update(self, report: PositionReport) -> Optional[StopEvent]:
        """
        Processes the next sample for this vessel.
        Returns the stop that just ended, if it lasted long enough.
        """
        self.window.push(Sample.from_report(report))
        previous, current = self.window.previous, self.window.current

        self.delta_distance_m = haversine_km(previous.position, current.position, self.config.earth_radius_km) * 1000.0
        self.delta_time_s = abs(current.timestamp - previous.timestamp)
        self.speed_knots = speed_knots(self.delta_distance_m, self.delta_time_s)

        event = None
        if self.speed_knots < self.config.stop_speed_knots:
            if not self.is_stopped:
                self.run_start = previous
            self.stopped_seconds += self.delta_time_s
            self.is_stopped = True
        else:
            if self.qualifies:
                event = self._make_event()
            self._reset_run()

        self.window.roll()
        self.samples_processed += 1
        return event

    def flush(self) -> Optional[StopEvent]:
        """
        Reports a stop still in progress when the stream ends.
        """
        if self.is_stopped and self.qualifies:
            return self._make_event()
        return None

    def _reset_run(self):
        self.stopped_seconds = 0
        self.is_stopped = False
        self.run_start = None

    def _make_event(self) -> StopEvent:
        start = self.run_start or self.window.previous
        event = StopEvent(
            vessel_id=self.vessel_id,
            position=start.position,
            duration_seconds=int(self.stopped_seconds),
            start_timestamp=start.timestamp,
            end_timestamp=self.window.previous.timestamp,
        )
        logger.debug(
            "Stop for vessel %d: %ds from %d, %d samples, last delta %ds",
            self.vessel_id, event.duration_seconds, event.start_timestamp,
            self.samples_processed, self.delta_time_s,
        )
        return event

    def __repr__(self):
        return (
            f"VesselState(vessel_id={self.vessel_id}, speed_knots={self.speed_knots:.3f}, "
            f"is_stopped={self.is_stopped}, stopped_seconds={self.stopped_seconds}, "
            f"samples_processed={self.samples_processed})"
        )
