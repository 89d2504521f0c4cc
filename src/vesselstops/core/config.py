from dataclasses import dataclass, field
from typing import FrozenSet

# AIS position reports: class A (1, 2, 3), class B (18, 19) and long range (27)
POSITION_MESSAGE_TYPES: FrozenSet[int] = frozenset({1, 2, 3, 18, 19, 27})

EARTH_RADIUS_KM = 6372.8
MS_TO_KNOTS = 1.9438


@dataclass(frozen=True)
class StopDetectionConfig:
    """
    Thresholds for the stop detector.

    Args:
        stop_speed_knots: A vessel slower than this is considered stopped.
        min_stop_seconds: Minimum accumulated stop time for a stop to be reported.
        relevant_message_types: AIS message ids that carry a usable position.
        earth_radius_km: Sphere radius used by the haversine distance.
    """
    stop_speed_knots: float = 1.0
    min_stop_seconds: int = 3600
    relevant_message_types: FrozenSet[int] = field(default=POSITION_MESSAGE_TYPES)
    earth_radius_km: float = EARTH_RADIUS_KM

    def __post_init__(self):
        if self.stop_speed_knots <= 0:
            raise ValueError("stop_speed_knots must be positive.")
        if self.min_stop_seconds <= 0:
            raise ValueError("min_stop_seconds must be positive.")
        if self.earth_radius_km <= 0:
            raise ValueError("earth_radius_km must be positive.")
        # accept any iterable of ids, store it frozen
        object.__setattr__(self, "relevant_message_types", frozenset(self.relevant_message_types))

    def is_relevant(self, message_type: int) -> bool:
        return message_type in self.relevant_message_types
