import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import pandas as pd

from .position import Position, PositionReport

logger = logging.getLogger(__name__)


class RecordDecodeError(ValueError):
    """Raised when the input stream cannot be decoded. Fatal for the whole run."""


class AisJsonStream:
    """
    Reads decoded AIS messages from a JSON-lines file, one record per line:

        {"Message": {"MessageID": 18, "UserID": 416004341, "Longitude": ..., "Latitude": ...},
         "UTCTimeStamp": 1588636800}

    Records are yielded in file order. Fields missing from a record default to zero,
    the same way the upstream decoder fills in absent values.
    """
    def __init__(
        self,
        filepath: str | Path,
        chunksize: int = 1000,
        col_mapping: Optional[Dict[str, str]] = None,
    ):
        self.filepath = Path(filepath)
        if not self.filepath.exists():
            raise FileNotFoundError(f"File not found: {self.filepath}")
        if chunksize < 1:
            raise ValueError("chunksize must be at least 1.")
        self.chunksize = chunksize

        self.mapping = col_mapping or {
            'message': 'Message',
            'timestamp': 'UTCTimeStamp',
            'message_type': 'MessageID',
            'vessel_id': 'UserID',
            'lat': 'Latitude',
            'lon': 'Longitude',
        }

    def __iter__(self) -> Iterator[PositionReport]:
        return self.stream()

    def stream(self) -> Iterator[PositionReport]:
        """
        Yields position reports from the file one by one.
        """
        if self.filepath.stat().st_size == 0:
            logger.debug("Input %s is empty", self.filepath)
            return

        count = 0
        try:
            with pd.read_json(
                self.filepath,
                lines=True,
                chunksize=self.chunksize,
                dtype=False,
                precise_float=True,
                convert_dates=False,
            ) as reader:
                for chunk in reader:
                    messages = chunk[self.mapping['message']] if self.mapping['message'] in chunk.columns else [None] * len(chunk)
                    stamps = chunk[self.mapping['timestamp']] if self.mapping['timestamp'] in chunk.columns else [None] * len(chunk)

                    for message, stamp in zip(messages, stamps):
                        count += 1
                        yield self._to_report(message, stamp)
        except ValueError as e:
            if isinstance(e, RecordDecodeError):
                raise
            raise RecordDecodeError(f"Cannot decode {self.filepath} after {count} records: {e}") from e

        logger.debug("Decoded %d records from %s", count, self.filepath)

    def _to_report(self, message: Any, stamp: Any) -> PositionReport:
        if not isinstance(message, dict):
            message = {}

        return PositionReport(
            message_type=_as_int(message.get(self.mapping['message_type'])),
            vessel_id=_as_int(message.get(self.mapping['vessel_id'])),
            timestamp=_as_int(stamp),
            position=Position(
                lat=_as_float(message.get(self.mapping['lat'])),
                lon=_as_float(message.get(self.mapping['lon'])),
            ),
        )


def _as_int(value: Any) -> int:
    if value is None or pd.isna(value):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise RecordDecodeError(f"Expected an integer, got {value!r}") from e


def _as_float(value: Any) -> float:
    if value is None or pd.isna(value):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise RecordDecodeError(f"Expected a number, got {value!r}") from e
