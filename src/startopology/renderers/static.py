"""Matplotlib static PNG renderer for the three pairwise matrices."""

from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from startopology.models import METRICS, Catalog

_TITLES = {
    "distance": "R (distance, ly)",
    "probability": "P (topological probability)",
    "entropy": "H (entropy)",
}


def render_heatmaps(catalog: Catalog, panel_size: int = 5) -> Figure:
    """Render the distance, probability and entropy matrices as heatmaps.

    Args:
        catalog: Fully computed catalog.
        panel_size: Width/height of each panel in inches.

    Returns:
        matplotlib Figure object with one panel per matrix.
    """
    fig, axes = plt.subplots(1, len(METRICS), figsize=(panel_size * len(METRICS), panel_size))
    labels = [s.name for s in catalog]
    show_labels = len(labels) <= 30

    for ax, metric in zip(axes, METRICS):
        image = ax.imshow(catalog.matrix(metric), cmap="magma", interpolation="nearest")
        ax.set_title(_TITLES[metric])
        if show_labels:
            ticks = range(len(labels))
            ax.set_xticks(ticks, labels, rotation=90, fontsize=7)
            ax.set_yticks(ticks, labels, fontsize=7)
        else:
            ax.set_xticks([])
            ax.set_yticks([])
        fig.colorbar(image, ax=ax, fraction=0.046, pad=0.04)

    fig.tight_layout()
    return fig


def save_heatmaps(catalog: Catalog, output_path: Path | None = None) -> Path:
    """Save the matrix heatmaps as a PNG file.

    Args:
        catalog: Fully computed catalog.
        output_path: Destination path. Defaults to ./matrices.png.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        output_path = Path("matrices.png")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_heatmaps(catalog)
    fig.savefig(output_path)
    plt.close(fig)
    return output_path
