"""Computation layer — coordinate conversion and the pairwise distance/probability/entropy passes."""

import logging
import math
from pathlib import Path

import numpy as np

from startopology.catalog import load_catalog
from startopology.models import Catalog, RowStats, StarRecord, StarState

logger = logging.getLogger(__name__)


class DegenerateRowError(ArithmeticError):
    """A star's distance row sums to zero, so its spread statistic is undefined."""

    def __init__(self, star: StarState) -> None:
        self.star = star
        super().__init__(
            f"Star {star.number} ({star.name}) has a zero distance sum; "
            "spread statistics are undefined"
        )


def to_radians(
    record: StarRecord, n: int, conventional_declination: bool = False
) -> tuple[float, float]:
    """Convert a record's RA/Dec sub-fields to radians.

    Right ascension uses ``(h + m/60 + s/360) * 2π/24``. Declination divides
    minutes by the catalog size ``n`` and seconds by ``n²``; pass
    ``conventional_declination=True`` to use 60 and 3600 instead.

    Returns:
        (ra_rad, dec_rad)
    """
    ra = (record.ra_hours + record.ra_minutes / 60 + record.ra_seconds / 360) * 2 * math.pi / 24
    minutes_div, seconds_div = (60, 3600) if conventional_declination else (n, n * n)
    dec = (
        (record.dec_degrees + record.dec_minutes / minutes_div + record.dec_seconds / seconds_div)
        * math.pi
        / 180
    )
    return ra, dec


def to_cartesian(dec_rad: float, ra_rad: float, distance: float) -> tuple[float, float, float]:
    """Spherical → Cartesian, with declination measured as the polar angle."""
    x = distance * math.sin(dec_rad) * math.cos(ra_rad)
    y = distance * math.sin(dec_rad) * math.sin(ra_rad)
    z = distance * math.cos(dec_rad)
    return x, y, z


def transform(star: StarState, n: int, conventional_declination: bool = False) -> None:
    """Fill in a star's radian coordinates and Cartesian position in place."""
    star.ra_rad, star.dec_rad = to_radians(star.record, n, conventional_declination)
    star.position = to_cartesian(star.dec_rad, star.ra_rad, star.record.distance_ly)


def transform_catalog(catalog: Catalog, conventional_declination: bool = False) -> None:
    n = len(catalog)
    for star in catalog:
        transform(star, n, conventional_declination)


def row_stats(row: np.ndarray, n: int) -> RowStats:
    """Sum, nonzero max/min, and spread ``(max - min) / (sum / n²)`` of one row."""
    total = float(row.sum())
    nonzero = row[row != 0]
    if nonzero.size:
        maximum, minimum = float(nonzero.max()), float(nonzero.min())
    else:
        maximum = minimum = 0.0
    spread = (maximum - minimum) / (total / (n * n)) if total != 0 else math.nan
    return RowStats(total=total, maximum=maximum, minimum=minimum, spread=spread)


def compute_distances(catalog: Catalog) -> None:
    """Pairwise Euclidean distances. Requires every star to be transformed."""
    n = len(catalog)
    positions = catalog.positions()
    diff = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
    matrix = np.sqrt((diff * diff).sum(axis=2))
    for i, star in enumerate(catalog):
        star.distance_row = matrix[i].copy()
        star.distance_stats = row_stats(star.distance_row, n)
    logger.debug("Distance pass complete for %d stars", n)


def compute_probabilities(catalog: Catalog) -> None:
    """Row-normalized distances. A zero-sum row yields all zeros."""
    n = len(catalog)
    for star in catalog:
        assert star.distance_row is not None and star.distance_stats is not None
        if star.degenerate:
            logger.warning(
                "Star %d (%s): zero distance sum, spread statistics set to NaN",
                star.number,
                star.name,
            )
            star.probability_row = np.zeros(n)
        else:
            star.probability_row = star.distance_row / star.distance_stats.total
        star.probability_stats = row_stats(star.probability_row, n)
    logger.debug("Probability pass complete for %d stars", n)


def compute_entropies(catalog: Catalog) -> None:
    """Binary entropy term p(1 - p) per pairwise probability."""
    n = len(catalog)
    for star in catalog:
        assert star.probability_row is not None
        p = star.probability_row
        star.entropy_row = p * (1 - p)
        star.entropy_stats = row_stats(star.entropy_row, n)
    logger.debug("Entropy pass complete for %d stars", n)


def compute_metrics(catalog: Catalog, strict: bool = False) -> None:
    """Run the three passes in order; each finishes for all stars before the next.

    Args:
        catalog: Transformed catalog. Mutated in place.
        strict: Raise instead of recording NaN spreads for zero-sum rows.

    Raises:
        DegenerateRowError: In strict mode, for the first zero-sum row.
    """
    compute_distances(catalog)
    if strict:
        for star in catalog:
            if star.degenerate:
                raise DegenerateRowError(star)
    compute_probabilities(catalog)
    compute_entropies(catalog)


def run(
    path: Path, conventional_declination: bool = False, strict: bool = False
) -> Catalog:
    """Top-level entry point: load, transform, and compute a catalog file.

    Args:
        path: Catalog text file.
        conventional_declination: Use 60/3600 declination divisors.
        strict: Treat zero-sum distance rows as fatal.

    Returns:
        Fully computed Catalog.
    """
    catalog = load_catalog(path)
    transform_catalog(catalog, conventional_declination)
    compute_metrics(catalog, strict=strict)
    return catalog
