# scripts/cluster_markers.py
"""
Script for clustering a set of map markers for one viewport.

This script loads markers from a CSV file with ``lat`` and ``lng`` columns
(and an optional ``title`` column), clusters them as a map of the given size,
center and zoom would, prints a per-cluster report and optionally saves a
plot of the result.

Example usage:
    python cluster_markers.py markers.csv --center 48.85 2.35 --zoom 12 --plot out/clusters.png
"""

import argparse
import sys
from typing import List, Optional

import pandas as pd

from markercluster.analysis import summarize_clusters, summarize_markers
from markercluster.core.exceptions.services.clustering import ClustererError
from markercluster.core.models.geo import LatLng, LatLngBounds, Marker
from markercluster.core.services.clustering import ClustererOptions, MarkerClusterer
from markercluster.core.services.surface import MercatorMap
from markercluster.utils.logging import get_logger, setup_logging
from markercluster.utils.visualization import plot_clusters

# Initialize logger
logger = get_logger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        argparse.Namespace: Parsed command line arguments
    """
    parser = argparse.ArgumentParser(
        description="Cluster map markers for a single viewport",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "markers_file", type=str, help="CSV file with lat, lng and optional title columns"
    )
    parser.add_argument(
        "--center",
        type=float,
        nargs=2,
        metavar=("LAT", "LNG"),
        default=None,
        help="Viewport center (default: fit the viewport to all markers)",
    )
    parser.add_argument("--zoom", type=int, default=10, help="Zoom level")
    parser.add_argument("--width", type=int, default=1024, help="Viewport width in pixels")
    parser.add_argument("--height", type=int, default=768, help="Viewport height in pixels")
    parser.add_argument(
        "--options", type=str, default=None, help="JSON file with clusterer options"
    )
    parser.add_argument(
        "--grid-size", type=int, default=None, help="Grid size in pixels (overrides --options)"
    )
    parser.add_argument(
        "--min-cluster-size",
        type=int,
        default=None,
        help="Minimum cluster size (overrides --options)",
    )
    parser.add_argument(
        "--markers-report",
        type=str,
        default=None,
        help="Write the per-marker assignment table to this CSV file",
    )
    parser.add_argument(
        "--plot", type=str, default=None, help="Save a plot of the clusters to this path"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    return parser.parse_args()


def load_markers(path: str) -> List[Marker]:
    """Load markers from a CSV file.

    Args:
        path: CSV file with ``lat`` and ``lng`` columns

    Returns:
        List[Marker]: One marker per row

    Raises:
        ValueError: If a required column is missing
    """
    df = pd.read_csv(path)
    missing = {"lat", "lng"} - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns in {path}: {sorted(missing)}")

    has_title = "title" in df.columns
    markers = []
    for row in df.itertuples(index=False):
        title = str(row.title) if has_title and pd.notna(row.title) else None
        markers.append(Marker.at(float(row.lat), float(row.lng), title=title))
    logger.info(f"Loaded {len(markers)} markers from {path}")
    return markers


def build_options(args: argparse.Namespace) -> ClustererOptions:
    """Build clusterer options from an options file and command line overrides."""
    options = ClustererOptions.from_file(args.options) if args.options else ClustererOptions()
    overrides = {}
    if args.grid_size is not None:
        overrides["grid_size"] = args.grid_size
    if args.min_cluster_size is not None:
        overrides["min_cluster_size"] = args.min_cluster_size
    if overrides:
        options = ClustererOptions.from_dict({**options.to_dict(), **overrides})
    return options


def main() -> Optional[int]:
    """Main function to cluster markers and report the result.

    Returns:
        Optional[int]: Exit code (0 for success, 1 for error)
    """
    args = parse_args()
    setup_logging(log_level=args.log_level)

    try:
        markers = load_markers(args.markers_file)
        options = build_options(args)

        if args.center is not None:
            center = LatLng(*args.center)
        elif markers:
            center = LatLngBounds.from_points(m.position for m in markers).get_center()
        else:
            center = LatLng(0.0, 0.0)
        surface = MercatorMap(center, zoom=args.zoom, width=args.width, height=args.height)

        with MarkerClusterer(surface, markers, options=options) as clusterer:
            if args.center is None:
                clusterer.fit_map_to_markers()

            report = summarize_clusters(clusterer)
            logger.info(
                f"{clusterer.total_markers} markers in {clusterer.total_clusters} "
                f"clusters at zoom {surface.get_zoom()}"
            )
            print(report.to_string(index=False))

            if args.markers_report:
                summarize_markers(clusterer).to_csv(args.markers_report, index=False)
                logger.info(f"Saved marker report to {args.markers_report}")

            if args.plot:
                plot_clusters(clusterer, output_path=args.plot)

        return 0

    except FileNotFoundError as e:
        logger.error(f"File not found: {str(e)}")
        return 1
    except (ClustererError, ValueError) as e:
        logger.error(f"Error clustering {args.markers_file}: {str(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
