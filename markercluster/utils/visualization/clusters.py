"""Utilities for visualizing clustering results."""

# Standard Library Imports
from pathlib import Path
from typing import Optional, Tuple

# Third Party Imports
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

# Internal Imports
from markercluster.core.services.clustering.marker_clusterer import MarkerClusterer
from markercluster.utils.logging import get_logger

# Initialize logger
logger = get_logger(__name__)


def plot_clusters(
    clusterer: MarkerClusterer,
    title: Optional[str] = None,
    output_path: Optional[str] = None,
    fig_size: Tuple[int, int] = (8, 8),
    show_viewport: bool = True,
) -> plt.Figure:
    """Plot what the map would show: individual markers and aggregate icons.

    Markers on the map are drawn as points, hidden markers as faint crosses
    and every visible aggregate icon as a circle sized by its style tier and
    labelled with its summary text. Longitude is on the x axis.

    Args:
        clusterer: The clusterer to plot
        title: Plot title (optional)
        output_path: Path to save the figure (optional)
        fig_size: Figure size (width, height) in inches
        show_viewport: Outline the surface's current viewport

    Returns:
        plt.Figure: The created figure
    """
    fig, ax = plt.subplots(figsize=fig_size)

    shown = [m for m in clusterer.markers if m.on_map]
    hidden = [m for m in clusterer.markers if not m.on_map]
    if shown:
        ax.scatter(
            [m.position.lng for m in shown],
            [m.position.lat for m in shown],
            c="tab:blue",
            s=12,
            label="Markers",
        )
    if hidden:
        ax.scatter(
            [m.position.lng for m in hidden],
            [m.position.lat for m in hidden],
            c="lightgray",
            marker="x",
            s=8,
            label="Hidden markers",
        )

    icons = [c.icon for c in clusterer.clusters if c.icon.visible]
    if icons:
        ax.scatter(
            [icon.center.lng for icon in icons],
            [icon.center.lat for icon in icons],
            s=[(icon.style.width if icon.style else 40) * 6 for icon in icons],
            c=[icon.summary.index for icon in icons],
            cmap="viridis",
            alpha=0.6,
            edgecolors="black",
            label="Clusters",
        )
        for icon in icons:
            ax.annotate(
                icon.text,
                (icon.center.lng, icon.center.lat),
                ha="center",
                va="center",
                fontsize=9,
                fontweight="bold",
            )

    if show_viewport and getattr(clusterer.surface, "loaded", True):
        viewport = clusterer.surface.get_bounds()
        if not viewport.is_empty and not viewport.crosses_antimeridian:
            ax.add_patch(
                Rectangle(
                    (viewport.sw.lng, viewport.sw.lat),
                    viewport.ne.lng - viewport.sw.lng,
                    viewport.ne.lat - viewport.sw.lat,
                    fill=False,
                    linestyle="--",
                    edgecolor="gray",
                )
            )

    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_title(
        title or f"{clusterer.total_markers} markers, {clusterer.total_clusters} clusters"
    )
    if shown or hidden or icons:
        ax.legend(loc="upper right")

    if output_path is not None:
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, bbox_inches="tight")
        logger.info(f"Saved cluster plot to {output_path}")

    return fig
