from vesselstops.core.config import StopDetectionConfig
from vesselstops.core.event import StopEvent
from vesselstops.core.position import Position, PositionReport
from vesselstops.modules.stop_detection import StopDetector, VesselState

__all__ = [
    "Position",
    "PositionReport",
    "StopDetectionConfig",
    "StopDetector",
    "StopEvent",
    "VesselState",
]
