import json
import pytest

from vesselstops.core.event import StopEvent
from vesselstops.core.position import Position
from vesselstops.report import GeoJsonReport, feature_collection, stop_event_feature, to_geodataframe

@pytest.fixture
def events():
    return [
        StopEvent(vessel_id=416004341, position=Position(lat=-7.5, lon=171.25),
                  duration_seconds=4000, start_timestamp=1588636800, end_timestamp=1588640800),
        StopEvent(vessel_id=200, position=Position(lat=10.0, lon=20.0),
                  duration_seconds=3600, start_timestamp=0, end_timestamp=3600),
    ]

def test_feature(events):
    feature = stop_event_feature(events[0])
    assert feature == {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [171.25, -7.5]},
        "properties": {"name": 416004341, "duration_sec": 4000, "date_UTC": "2020-05-05T00:00:00Z"},
    }

def test_feature_collection_empty():
    assert feature_collection([]) == {"type": "FeatureCollection", "features": []}

def test_report_written_on_close(tmp_path, events):
    out = tmp_path / "stops.geojson"
    report = GeoJsonReport(out)
    for e in events:
        report.add(e)
    assert not out.exists()

    report.close()
    data = json.loads(out.read_text())
    assert data["type"] == "FeatureCollection"
    assert len(data["features"]) == 2
    assert data["features"][1]["geometry"]["coordinates"] == [20.0, 10.0]
    assert data["features"][1]["properties"]["date_UTC"] == "1970-01-01T00:00:00Z"

def test_report_rejects_late_events(tmp_path, events):
    report = GeoJsonReport(tmp_path / "stops.geojson")
    report.close()
    with pytest.raises(ValueError, match="already written"):
        report.add(events[0])

def test_report_context_manager(tmp_path, events):
    out = tmp_path / "stops.geojson"
    with GeoJsonReport(out) as report:
        report.add(events[1])
    assert len(json.loads(out.read_text())["features"]) == 1

def test_to_geodataframe(events):
    gdf = to_geodataframe(events)
    assert len(gdf) == 2
    assert gdf.crs.to_epsg() == 4326
    assert list(gdf["name"]) == [416004341, 200]
    assert gdf.geometry.iloc[0].x == 171.25
    assert gdf.geometry.iloc[0].y == -7.5

def test_to_geodataframe_empty():
    gdf = to_geodataframe([])
    assert gdf.empty
    assert gdf.crs.to_epsg() == 4326
