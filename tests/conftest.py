from __future__ import annotations

import numpy as np
import pytest
from PySide6.QtCore import QCoreApplication

from voronoiblend.model.points import Point


@pytest.fixture(scope="session")
def qapp() -> QCoreApplication:
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def make_points():
    """Factory for points on a diagonal, one per color."""
    def _make(colors: list[str]) -> list[Point]:
        return [Point(coords=(10.0 * i + 5.0, 10.0 * i + 5.0), color=c) for i, c in enumerate(colors)]
    return _make
