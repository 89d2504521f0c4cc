from dataclasses import dataclass
from datetime import datetime, timezone

from .position import Position


@dataclass(frozen=True)
class StopEvent:
    """
    A vessel that stayed below the stop speed for at least the minimum duration.

    position and start_timestamp describe the sample the stop run started from,
    end_timestamp is the last sample still inside the run.
    """
    vessel_id: int
    position: Position
    duration_seconds: int
    start_timestamp: int
    end_timestamp: int

    @property
    def start_time(self) -> datetime:
        return datetime.fromtimestamp(self.start_timestamp, tz=timezone.utc)

    @property
    def end_time(self) -> datetime:
        return datetime.fromtimestamp(self.end_timestamp, tz=timezone.utc)
