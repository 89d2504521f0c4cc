from .detector import StopDetector, StopSink
from .vessel import Sample, SampleWindow, VesselState

__all__ = ["Sample", "SampleWindow", "StopDetector", "StopSink", "VesselState"]
