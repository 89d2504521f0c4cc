import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

import geopandas as gpd
from shapely.geometry import Point as ShapelyPoint, mapping

from vesselstops.core.event import StopEvent

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def stop_event_properties(event: StopEvent) -> Dict[str, Any]:
    return {
        "name": event.vessel_id,
        "duration_sec": event.duration_seconds,
        "date_UTC": event.start_time.strftime(DATE_FORMAT),
    }


def stop_event_feature(event: StopEvent) -> Dict[str, Any]:
    """
    GeoJSON Feature for a single stop, a Point at (lon, lat).
    """
    geometry = mapping(ShapelyPoint(event.position.lon, event.position.lat))
    return {
        "type": "Feature",
        "geometry": {"type": geometry["type"], "coordinates": list(geometry["coordinates"])},
        "properties": stop_event_properties(event),
    }


def feature_collection(events: Iterable[StopEvent]) -> Dict[str, Any]:
    return {
        "type": "FeatureCollection",
        "features": [stop_event_feature(e) for e in events],
    }


def to_geodataframe(events: Iterable[StopEvent]) -> gpd.GeoDataFrame:
    """
    Stops as a GeoDataFrame in EPSG:4326, one row per stop.
    """
    rows = []
    for event in events:
        row = stop_event_properties(event)
        row["geometry"] = ShapelyPoint(event.position.lon, event.position.lat)
        rows.append(row)

    if not rows:
        return gpd.GeoDataFrame(
            columns=["name", "duration_sec", "date_UTC", "geometry"],
            geometry="geometry", crs="EPSG:4326",
        )
    return gpd.GeoDataFrame(rows, geometry="geometry", crs="EPSG:4326")


class GeoJsonReport:
    """
    Collects stop events and writes them as a GeoJSON FeatureCollection on close().
    """

    def __init__(self, filepath: str | Path):
        self.filepath = Path(filepath)
        self.events: List[StopEvent] = []
        self.closed = False

    def add(self, event: StopEvent):
        if self.closed:
            raise ValueError(f"Report {self.filepath} is already written")
        self.events.append(event)

    def close(self):
        if self.closed:
            return
        with open(self.filepath, mode="w", encoding="utf-8") as f:
            json.dump(feature_collection(self.events), f)
            f.write("\n")
        self.closed = True
        logger.info("Wrote %d stops to %s", len(self.events), self.filepath)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.close()
