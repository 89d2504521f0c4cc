import argparse
import logging
import sys
from typing import List, Optional

from vesselstops.core.config import StopDetectionConfig
from vesselstops.core.event import StopEvent
from vesselstops.core.stream import AisJsonStream, RecordDecodeError
from vesselstops.modules.stop_detection import StopDetector, VesselState
from vesselstops.report import GeoJsonReport


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vessel-stops",
        description="Find vessels stopped for at least one hour in an AIS JSON-lines file and write them as GeoJSON.",
    )
    parser.add_argument("-in", "--in", dest="input", required=True, help="Input AIS JSON-lines file.")
    parser.add_argument("-out", "--out", dest="output", required=True, help="Output GeoJSON file.")
    parser.add_argument(
        "--min-stop-seconds",
        type=int,
        default=3600,
        help="Minimum continuous stop time to report (default: 3600).",
    )
    parser.add_argument(
        "--stop-speed",
        type=float,
        default=1.0,
        help="Speed in knots under which a vessel counts as stopped (default: 1.0).",
    )
    parser.add_argument("--quiet", action="store_true", help="Only print the final summary.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = StopDetectionConfig(
            stop_speed_knots=args.stop_speed,
            min_stop_seconds=args.min_stop_seconds,
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    print(f"Input file = {args.input}")
    print(f"Output file = {args.output}")

    def on_new_vessel(state: VesselState):
        if not args.quiet:
            print(f"New vessel found {state.vessel_id}, current vessel count = {detector.vessel_count}...")

    def on_stop(event: StopEvent, state: VesselState):
        if not args.quiet:
            print(
                f"Found stop #{detector.stop_count} : ID {event.vessel_id}"
                f" Date {event.start_time:%Y-%m-%d %H:%M:%S} UTC"
                f" row-count {state.samples_processed}"
                f" last delta-time {state.delta_time_s}s, total zero speed time = {event.duration_seconds}s"
            )

    detector = StopDetector(config=config, on_new_vessel=on_new_vessel, on_stop=on_stop)

    try:
        stream = AisJsonStream(args.input)
        report = GeoJsonReport(args.output)
        detector.run(stream, report)
    except (FileNotFoundError, RecordDecodeError) as e:
        print(f"Error: {e}")
        return 1
    except OSError as e:
        print(f"Error: cannot write {args.output}: {e}")
        return 1

    print(f"\nFinal vessel count = {detector.vessel_count}, {detector.stop_count} stopped position found.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
