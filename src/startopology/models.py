"""Data model definitions — explicit boundaries between load, compute, and report layers."""

from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np

METRICS = ("distance", "probability", "entropy")


@dataclass(frozen=True)
class StarRecord:
    """A single catalog row as read from the input table. Never mutated."""

    name: str
    number: int  # Catalog number (last column)
    ra_hours: int
    ra_minutes: int
    ra_seconds: float
    dec_degrees: int
    dec_minutes: int
    dec_seconds: float
    distance_ly: int  # Distance in light-years


@dataclass(frozen=True)
class RowStats:
    """Aggregates of one matrix row.

    Min/max are taken over nonzero entries only; both stay 0.0 for an all-zero row.
    ``spread`` is NaN when the row sum is zero.
    """

    total: float
    maximum: float
    minimum: float
    spread: float


@dataclass
class StarState:
    """A star moving through the pipeline. Each stage fills in its own fields."""

    record: StarRecord
    ra_rad: float = 0.0
    dec_rad: float = 0.0
    position: tuple[float, float, float] = (0.0, 0.0, 0.0)  # Cartesian, light-years
    distance_row: np.ndarray | None = None
    probability_row: np.ndarray | None = None
    entropy_row: np.ndarray | None = None
    distance_stats: RowStats | None = None
    probability_stats: RowStats | None = None
    entropy_stats: RowStats | None = None

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def number(self) -> int:
        return self.record.number

    @property
    def degenerate(self) -> bool:
        """True when the distance row sums to zero (no spread is defined)."""
        return self.distance_stats is not None and self.distance_stats.total == 0.0


@dataclass
class Catalog:
    """Ordered star collection. Its length is fixed by the header count."""

    stars: list[StarState] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.stars)

    def __iter__(self) -> Iterator[StarState]:
        return iter(self.stars)

    def __getitem__(self, index: int) -> StarState:
        return self.stars[index]

    def positions(self) -> np.ndarray:
        """Return an (N, 3) array of Cartesian positions."""
        return np.array([s.position for s in self.stars], dtype=float).reshape(-1, 3)

    def matrix(self, metric: str) -> np.ndarray:
        """Stack one metric's rows into an N×N array.

        Args:
            metric: One of ``"distance"``, ``"probability"``, ``"entropy"``.

        Raises:
            ValueError: Unknown metric, or rows not computed yet.
        """
        if metric not in METRICS:
            raise ValueError(f"Unknown metric: {metric}")
        rows = [getattr(s, f"{metric}_row") for s in self.stars]
        if any(row is None for row in rows):
            raise ValueError(f"{metric} rows have not been computed")
        return np.vstack(rows) if rows else np.zeros((0, 0))
