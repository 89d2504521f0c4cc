import json
import pytest

from vesselstops.core.position import Position
from vesselstops.core.stream import AisJsonStream, RecordDecodeError

def write_lines(path, rows):
    path.write_text("".join(json.dumps(row) + "\n" for row in rows))
    return path

@pytest.fixture
def sample_json(tmp_path):
    rows = [
        {"Message": {"MessageID": 18, "RepeatIndicator": 0, "UserID": 416004341, "Valid": True, "Sog": 6.8,
                     "Longitude": 171.32811666666666, "Latitude": -7.578556666666667, "Cog": 272},
         "UTCTimeStamp": 1588636800},
        {"Message": {"MessageID": 5, "UserID": 416004341, "Name": "SOME VESSEL"},
         "UTCTimeStamp": 1588636801},
        {"Message": {"MessageID": 1, "UserID": 229000000, "Longitude": 10.5, "Latitude": 59.25},
         "UTCTimeStamp": 1588636900},
    ]
    return write_lines(tmp_path / "ais.json", rows)

def test_stream_reports(sample_json):
    reports = list(AisJsonStream(sample_json).stream())
    assert len(reports) == 3

    first = reports[0]
    assert first.message_type == 18
    assert first.vessel_id == 416004341
    assert first.timestamp == 1588636800
    assert first.position == Position(lat=-7.578556666666667, lon=171.32811666666666)

    assert [r.vessel_id for r in reports] == [416004341, 416004341, 229000000]
    assert reports[2].time_utc.isoformat() == "2020-05-05T00:01:40+00:00"

def test_missing_fields_default_to_zero(sample_json):
    static = list(AisJsonStream(sample_json))[1]
    assert static.message_type == 5
    assert static.position == Position(lat=0.0, lon=0.0)

def test_small_chunks_keep_order(sample_json):
    reports = list(AisJsonStream(sample_json, chunksize=1))
    assert [r.timestamp for r in reports] == [1588636800, 1588636801, 1588636900]

def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        AisJsonStream(tmp_path / "nope.json")

def test_empty_file(tmp_path):
    p = tmp_path / "empty.json"
    p.write_text("")
    assert list(AisJsonStream(p)) == []

def test_malformed_file(tmp_path):
    p = tmp_path / "bad.json"
    p.write_text('{"Message": {"MessageID": 1, "UserID": 1}, "UTCTimeStamp": 0}\n{not json at all\n')
    with pytest.raises(RecordDecodeError):
        list(AisJsonStream(p))

def test_bad_field_type(tmp_path):
    p = write_lines(tmp_path / "bad_type.json", [
        {"Message": {"MessageID": 1, "UserID": "abc", "Latitude": 1.0, "Longitude": 1.0}, "UTCTimeStamp": 0},
    ])
    with pytest.raises(RecordDecodeError, match="integer"):
        list(AisJsonStream(p))

def test_invalid_chunksize(sample_json):
    with pytest.raises(ValueError, match="chunksize"):
        AisJsonStream(sample_json, chunksize=0)
