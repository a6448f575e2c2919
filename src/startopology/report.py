"""Report output — matrix text files and the per-star console summary."""

import logging
import math
from collections.abc import Iterator
from pathlib import Path

from startopology.i18n import t
from startopology.models import Catalog, StarState

logger = logging.getLogger(__name__)

CELL_SEPARATOR = "   "

# Output file name per metric.
MATRIX_FILES: dict[str, str] = {
    "distance": "R.txt",
    "probability": "P.txt",
    "entropy": "H.txt",
}


def format_cell(value: float) -> str:
    """Round to two decimals; whole numbers print without a fractional part."""
    if not math.isfinite(value):
        return "NaN" if math.isnan(value) else ("Infinity" if value > 0 else "-Infinity")
    rounded = round(value, 2)
    if rounded == int(rounded):
        return str(int(rounded))
    return repr(rounded)


def format_number(value: float) -> str:
    """Shortest round-trip text of a float, locale independent."""
    if math.isnan(value):
        return "NaN"
    return repr(float(value))


def write_matrix(catalog: Catalog, metric: str, path: Path) -> Path:
    """Write one N×N matrix, one star's row per line."""
    matrix = catalog.matrix(metric)
    with path.open("w", encoding="utf-8", newline="\n") as f:
        for row in matrix:
            f.write("".join(format_cell(float(v)) + CELL_SEPARATOR for v in row))
            f.write("\n")
    logger.info("Wrote %s matrix to %s", metric, path)
    return path


def write_matrices(catalog: Catalog, output_dir: Path) -> list[Path]:
    """Write R.txt, P.txt and H.txt into output_dir, overwriting existing files.

    Returns:
        Paths of the written files, in distance/probability/entropy order.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    return [
        write_matrix(catalog, metric, output_dir / filename)
        for metric, filename in MATRIX_FILES.items()
    ]


def summary_line(star: StarState) -> str:
    assert star.distance_stats and star.probability_stats and star.entropy_stats
    return (
        f"Num = {star.number}, Name = {star.name}: "
        f"dR = {format_number(star.distance_stats.spread)}, "
        f"dP = {format_number(star.probability_stats.spread)}, "
        f"dH = {format_number(star.entropy_stats.spread)}, "
        f"Hsum = {format_number(star.entropy_stats.total)}"
    )


def summary_lines(catalog: Catalog) -> Iterator[str]:
    for star in catalog:
        yield summary_line(star)


def print_summary(catalog: Catalog, lang: str = "en") -> None:
    for line in summary_lines(catalog):
        print(line)
    print(t("done", lang))
