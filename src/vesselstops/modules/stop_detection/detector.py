import logging
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Protocol

from vesselstops.core.config import StopDetectionConfig
from vesselstops.core.event import StopEvent
from vesselstops.core.position import PositionReport
from .vessel import VesselState

logger = logging.getLogger(__name__)


class StopSink(Protocol):
    """Anything that can receive stop events, e.g. a report writer."""

    def add(self, event: StopEvent) -> None: ...

    def close(self) -> None: ...


class StopDetector:
    """
    Online stop detection over a multi-vessel AIS stream.

    Records are filtered by message type and dispatched to a per-vessel
    VesselState, created on the first sighting of a vessel. Stops are emitted
    as soon as the vessel moves again; flush() reports the vessels still
    stopped when the stream ends.
    """

    def __init__(
        self,
        config: Optional[StopDetectionConfig] = None,
        on_new_vessel: Optional[Callable[[VesselState], None]] = None,
        on_stop: Optional[Callable[[StopEvent, VesselState], None]] = None,
    ):
        """
        Args:
            config: Detection thresholds. Defaults to 1 knot / 1 hour.
            on_new_vessel: Called with the state of every newly seen vessel.
            on_stop: Called with every emitted stop and the vessel state it came from.
        """
        self.config = config or StopDetectionConfig()
        self.on_new_vessel = on_new_vessel
        self.on_stop = on_stop

        self._registry: Dict[int, VesselState] = {}
        self._vessel_count = 0
        self._stop_count = 0

    @property
    def vessels(self) -> Mapping[int, VesselState]:
        return MappingProxyType(self._registry)

    @property
    def vessel_count(self) -> int:
        return self._vessel_count

    @property
    def stop_count(self) -> int:
        return self._stop_count

    def process_report(self, report: PositionReport) -> Optional[StopEvent]:
        """
        Processes a newly arrived report, returning the stop it closed, if any.
        """
        if not self.config.is_relevant(report.message_type):
            return None

        state = self._registry.get(report.vessel_id)
        if state is None:
            # first sighting only seeds the window
            state = VesselState.from_report(report, self.config)
            self._registry[report.vessel_id] = state
            self._vessel_count += 1
            logger.debug("New vessel %d, %d tracked", report.vessel_id, len(self._registry))
            if self.on_new_vessel is not None:
                self.on_new_vessel(state)
            return None

        event = state.update(report)
        if event is not None:
            self._emit(event, state)
        return event

    def flush(self) -> List[StopEvent]:
        """
        Emits the stops still in progress upon termination of the stream
        and resets the tracked vessels, so the detector can take a new stream.
        """
        events = []
        for state in self._registry.values():
            event = state.flush()
            if event is not None:
                self._emit(event, state)
                events.append(event)

        self._registry = {}
        logger.info("%d vessels tracked, %d stops found", self.vessel_count, self._stop_count)
        return events

    def stream(self, reports: Iterable[PositionReport]) -> Iterator[StopEvent]:
        """
        Yields stops as they close, then the ones still open at the end of the stream.
        """
        for report in reports:
            event = self.process_report(report)
            if event is not None:
                yield event

        yield from self.flush()

    def process(self, reports: Iterable[PositionReport]) -> List[StopEvent]:
        """
        Batch-processing helper for testing/benchmarking.
        """
        return list(self.stream(reports))

    def run(self, reports: Iterable[PositionReport], sink: StopSink) -> int:
        """
        Feeds every stop into sink and closes it once the stream is exhausted.
        Returns the number of stops written.
        """
        count = 0
        for event in self.stream(reports):
            sink.add(event)
            count += 1
        sink.close()
        return count

    def _emit(self, event: StopEvent, state: VesselState):
        self._stop_count += 1
        if self.on_stop is not None:
            self.on_stop(event, state)
