from typing import Iterable, List, Optional

import numpy as np
import pandas as pd

from vesselstops.core.config import MS_TO_KNOTS, StopDetectionConfig
from vesselstops.core.event import StopEvent
from vesselstops.core.position import Position, PositionReport


def haversine_km_vectorized(lat1, lon1, lat2, lon2, radius_km: float) -> np.ndarray:
    """
    Element-wise haversine distance in kilometers. Inputs in degrees.
    """
    phi1 = np.radians(lat1)
    phi2 = np.radians(lat2)
    d_phi = phi2 - phi1
    d_lambda = np.radians(lon2) - np.radians(lon1)

    h = 0.5 * (1.0 - np.cos(d_phi)) + np.cos(phi1) * np.cos(phi2) * 0.5 * (1.0 - np.cos(d_lambda))
    h = np.clip(h, 0.0, 1.0)
    return 2.0 * radius_km * np.arcsin(np.sqrt(h))


class BatchStopOracle:
    """
    Offline stop detection over a complete set of reports.
    Computes all per-vessel deltas at once with pandas/numpy, then walks each
    vessel's speed series. Reference for the streaming StopDetector.
    """

    def __init__(self, config: Optional[StopDetectionConfig] = None):
        self.config = config or StopDetectionConfig()

    def to_frame(self, reports: Iterable[PositionReport]) -> pd.DataFrame:
        df = pd.DataFrame(
            [(r.message_type, r.vessel_id, r.timestamp, r.lat, r.lon) for r in reports],
            columns=["message_type", "vessel_id", "timestamp", "lat", "lon"],
        )
        df = df[df["message_type"].isin(sorted(self.config.relevant_message_types))].reset_index(drop=True)
        if df.empty:
            return df.assign(dist_m=[], dt_s=[], speed_kn=[])

        grouped = df.groupby("vessel_id", sort=False)
        prev_lat = grouped["lat"].shift(1).fillna(df["lat"])
        prev_lon = grouped["lon"].shift(1).fillna(df["lon"])
        prev_ts = grouped["timestamp"].shift(1).fillna(df["timestamp"])

        df["dist_m"] = haversine_km_vectorized(
            prev_lat.to_numpy(), prev_lon.to_numpy(),
            df["lat"].to_numpy(), df["lon"].to_numpy(),
            self.config.earth_radius_km,
        ) * 1000.0
        df["dt_s"] = (df["timestamp"] - prev_ts).abs().astype(np.int64)

        dt = df["dt_s"].to_numpy(dtype=float)
        with np.errstate(divide="ignore", invalid="ignore"):
            speed = np.where(dt == 0, 0.0, np.abs(df["dist_m"].to_numpy() / dt) * MS_TO_KNOTS)
        df["speed_kn"] = speed
        return df

    def process(self, reports: Iterable[PositionReport]) -> List[StopEvent]:
        df = self.to_frame(reports)
        if df.empty:
            return []

        events: List[StopEvent] = []
        for vessel_id, track in df.groupby("vessel_id", sort=False):
            events.extend(self._process_track(int(vessel_id), track))
        return events

    def _process_track(self, vessel_id: int, track: pd.DataFrame) -> List[StopEvent]:
        events = []
        lats = track["lat"].to_numpy()
        lons = track["lon"].to_numpy()
        stamps = track["timestamp"].to_numpy()
        dts = track["dt_s"].to_numpy()
        speeds = track["speed_kn"].to_numpy()

        run_start = None
        accumulated = 0

        # row 0 only seeds the vessel
        for i in range(1, len(track)):
            if speeds[i] < self.config.stop_speed_knots:
                if run_start is None:
                    run_start = i - 1
                accumulated += int(dts[i])
                continue

            if run_start is not None and accumulated >= self.config.min_stop_seconds:
                events.append(self._event(vessel_id, lats, lons, stamps, run_start, i - 1, accumulated))
            run_start = None
            accumulated = 0

        if run_start is not None and accumulated >= self.config.min_stop_seconds:
            events.append(self._event(vessel_id, lats, lons, stamps, run_start, len(track) - 1, accumulated))
        return events

    @staticmethod
    def _event(vessel_id, lats, lons, stamps, start: int, end: int, duration: int) -> StopEvent:
        return StopEvent(
            vessel_id=vessel_id,
            position=Position(lat=float(lats[start]), lon=float(lons[start])),
            duration_seconds=int(duration),
            start_timestamp=int(stamps[start]),
            end_timestamp=int(stamps[end]),
        )
