"""
Configuration
=============
Central registry for the constants that define the diagram: the bounded
plane, the seed palette, the default number of points and the similarity
threshold that triggers a merge.

Values can be overridden from the environment (``DiagramConfig.from_env``)
and, on top of that, from the command line (see ``voronoiblend.main``).

Exports:
    WIDTH, HEIGHT: Size of the bounded plane.
    DEFAULT_PALETTE: Colors used to seed points.
    DiagramConfig: Frozen bundle of the settings above.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import os
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

# Global Constants
WIDTH: float = 500.0
HEIGHT: float = 500.0
DEFAULT_POINT_COUNT: int = 10
SIMILARITY_THRESHOLD: float = 50.0

DEFAULT_PALETTE: tuple[str, ...] = (
    "#CB4533", "#E9B3BB", "#9580B5", "#BCC692", "#A4BFDD",
    "#EFD4EA", "#FAD424", "#68A4E7", "#7CB145", "#E9FEFE",
)

ENV_POINTS = "VORONOIBLEND_POINTS"
ENV_THRESHOLD = "VORONOIBLEND_THRESHOLD"
ENV_SEED = "VORONOIBLEND_SEED"


@dataclass(frozen=True)
class DiagramConfig:
    width: float = WIDTH
    height: float = HEIGHT
    point_count: int = DEFAULT_POINT_COUNT
    threshold: float = SIMILARITY_THRESHOLD
    palette: tuple[str, ...] = DEFAULT_PALETTE
    seed: Optional[int] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> DiagramConfig:
        """
        Build a config from environment variables, falling back to defaults.

        Unparseable values are logged and ignored.
        """
        env = os.environ if environ is None else environ
        config = cls()

        points = _parse(env, ENV_POINTS, int)
        if points is not None and points >= 0:
            config = replace(config, point_count=points)
        threshold = _parse(env, ENV_THRESHOLD, float)
        if threshold is not None and threshold > 0:
            config = replace(config, threshold=threshold)
        seed = _parse(env, ENV_SEED, int)
        if seed is not None:
            config = replace(config, seed=seed)

        return config


def _parse(env: Mapping[str, str], key: str, kind: type):
    raw = env.get(key)
    if raw is None or raw == "":
        return None
    try:
        return kind(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid value {raw!r} for {key}.")
        return None
