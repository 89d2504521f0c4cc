from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class Position:
    """
    A point on the Earth's surface in decimal degrees.
    Range is not validated, out-of-range values are treated as plain floats.
    """
    lat: float
    lon: float


@dataclass(frozen=True)
class PositionReport:
    """
    A single decoded AIS position sample (vessel, t, lat/lon).
    frozen=True so a report can be handed around while streaming without copies.
    """
    message_type: int
    vessel_id: int
    timestamp: int
    position: Position

    @property
    def lat(self) -> float:
        return self.position.lat

    @property
    def lon(self) -> float:
        return self.position.lon

    @property
    def time_utc(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)
