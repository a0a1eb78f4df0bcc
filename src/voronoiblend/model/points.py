"""
Points and Point Generation
===========================
A point is a site of the Voronoi diagram: fixed coordinates plus a color.
Its identity is its position in the ordered collection held by the store.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from typing import Optional, Sequence

import numpy as np

from voronoiblend.config import DEFAULT_PALETTE, HEIGHT, WIDTH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Point:
    coords: tuple[float, float]
    color: str

    @property
    def x(self) -> float:
        return self.coords[0]

    @property
    def y(self) -> float:
        return self.coords[1]

    def with_color(self, color: str) -> Point:
        return replace(self, color=color)


def _check_palette(palette: Sequence[str]) -> None:
    if len(palette) == 0:
        raise ValueError("Palette must contain at least one color.")


def generate_points(
    n: int,
    palette: Sequence[str] = DEFAULT_PALETTE,
    width: float = WIDTH,
    height: float = HEIGHT,
    rng: Optional[np.random.Generator] = None,
) -> list[Point]:
    """
    Generate ``n`` randomly placed, randomly colored points.

    Coordinates are uniform in [0, width) x [0, height); every color is drawn
    independently from ``palette``.

    Args:
        n: Number of points.
        palette: Colors to sample from.
        width: Width of the bounded plane.
        height: Height of the bounded plane.
        rng: Random generator, pass a seeded one for reproducible output.

    Returns:
        List of new points.
    """
    if n < 0:
        raise ValueError(f"Number of points must be non-negative, got {n}.")
    _check_palette(palette)
    rng = rng if rng is not None else np.random.default_rng()

    xs = rng.uniform(0.0, width, size=n)
    ys = rng.uniform(0.0, height, size=n)
    color_ids = rng.integers(0, len(palette), size=n)

    points = [
        Point(coords=(float(x), float(y)), color=palette[int(c)])
        for x, y, c in zip(xs, ys, color_ids)
    ]
    logger.debug(f"Generated {len(points)} points on a {width:g}x{height:g} plane.")
    return points


def resample_colors(
    points: Sequence[Point],
    palette: Sequence[str] = DEFAULT_PALETTE,
    rng: Optional[np.random.Generator] = None,
) -> list[Point]:
    """Keep coordinates, draw a fresh random palette color for every point."""
    _check_palette(palette)
    rng = rng if rng is not None else np.random.default_rng()

    color_ids = rng.integers(0, len(palette), size=len(points))
    return [p.with_color(palette[int(c)]) for p, c in zip(points, color_ids)]
