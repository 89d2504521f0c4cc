import os
import sys
import argparse
from datetime import datetime
import matplotlib.pyplot as plt
import matplotlib.lines as mlines

# Add project root to sys.path to find src
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.join(current_dir, "..")
sys.path.append(os.path.join(project_root, "src"))

from vesselstops.core.stream import AisJsonStream
from vesselstops.modules.stop_detection import StopDetector
from vesselstops.report import GeoJsonReport, to_geodataframe


def plot_stops(gdf_stops, output_img, title=""):
    """Plots stop positions over a basemap, marker size scaled by stop duration."""
    import contextily as ctx

    fig, ax = plt.subplots(figsize=(12, 10))

    if gdf_stops.empty:
        print("No stops to plot.")
        plt.close(fig)
        return

    gdf_web = gdf_stops.to_crs(epsg=3857)
    hours = gdf_web["duration_sec"] / 3600.0
    sizes = 20 + 30 * hours.clip(upper=24)

    gdf_web.plot(ax=ax, color='black', markersize=sizes, alpha=0.7, zorder=5)

    try:
        ctx.add_basemap(ax, source=ctx.providers.CartoDB.Positron)
    except Exception as e:
        print(f"Basemap not available: {e}")

    ax.set_axis_off()
    ax.set_title(title)
    black_dot = mlines.Line2D([], [], color='black', marker='o', linestyle='None', markersize=8, label='Stop (>= 1h)')
    ax.legend(handles=[black_dot])

    plt.tight_layout()
    plt.savefig(output_img, dpi=300, bbox_inches='tight')
    plt.close(fig)
    print(f"Visualization saved to {output_img}")


def main():
    parser = argparse.ArgumentParser(description="Detect vessel stops in an AIS file and plot them.")
    parser.add_argument(
        "--input",
        type=str,
        default=os.path.join(project_root, "data", "raw", "ais.json"),
        help="Path to the AIS JSON-lines file."
    )
    args = parser.parse_args()
    data_path = args.input

    if not os.path.exists(data_path):
        print(f"Error: Input file {data_path} not found.")
        sys.exit(1)

    # Create output directory
    script_name = "plot_stops"
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    input_filename = os.path.splitext(os.path.basename(data_path))[0]
    output_dir = os.path.join(project_root, "data", "processed", script_name, f"{timestamp}_{input_filename}")
    os.makedirs(output_dir, exist_ok=True)

    print(f"Streaming reports from {data_path}...")
    detector = StopDetector()
    output_json = os.path.join(output_dir, "stops.geojson")
    report = GeoJsonReport(output_json)
    detector.run(AisJsonStream(data_path), report)
    print(f"Tracked {detector.vessel_count} vessels, found {detector.stop_count} stops.")
    print(f"Report saved to {output_json}")

    output_img = os.path.join(output_dir, "stops.png")
    plot_stops(to_geodataframe(report.events), output_img, title=f"Vessel stops - {input_filename}")


if __name__ == "__main__":
    main()
