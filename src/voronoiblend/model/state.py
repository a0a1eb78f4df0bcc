"""
Diagram State (Data Model)
==========================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the current ordered collection of points in one
   place. Index in the collection is the identity of a cell.
2. Publishing: Every operation replaces the whole (immutable) state and
   announces it once, so views never see a half-applied change.
3. Decoupling: Views read snapshots; the controller writes through the
   store's operations only.

Classes:
    DiagramState: Immutable snapshot of the diagram.
    DiagramStore: Owner of the current snapshot, emits ``state_changed``.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Sequence

import numpy as np
from PySide6.QtCore import QObject, Signal

from voronoiblend.config import HEIGHT, WIDTH, DiagramConfig
from voronoiblend.model.colors import normalize_hex
from voronoiblend.model.partition import Partition
from voronoiblend.model.points import Point, generate_points, resample_colors

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

StateObserver = Callable[["DiagramState"], None]


@dataclass(frozen=True)
class DiagramState:
    """One published version of the diagram."""
    points: tuple[Point, ...] = ()
    width: float = WIDTH
    height: float = HEIGHT
    revision: int = 0

    def __len__(self) -> int:
        return len(self.points)

    @property
    def colors(self) -> list[str]:
        return [p.color for p in self.points]

    @property
    def coords(self) -> npt.NDArray[np.float64]:
        """(n, 2) array of point coordinates."""
        return np.array([p.coords for p in self.points], dtype=np.float64).reshape(-1, 2)

    def color_at(self, index: int) -> str:
        return self.points[index].color

    def partition(self) -> Partition:
        return Partition.from_points(self.coords, self.width, self.height)


class DiagramStore(QObject):
    """Single source of truth for the diagram, with a signal for view sync."""
    state_changed = Signal(object)

    def __init__(
        self,
        config: Optional[DiagramConfig] = None,
        rng: Optional[np.random.Generator] = None,
        points: Optional[Sequence[Point]] = None,
    ) -> None:
        super().__init__()
        self.config = config or DiagramConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self._observers: list[StateObserver] = []

        if points is None:
            points = generate_points(
                self.config.point_count,
                self.config.palette,
                self.config.width,
                self.config.height,
                rng=self.rng,
            )
        self._state = DiagramState(
            points=tuple(points),
            width=self.config.width,
            height=self.config.height,
        )

    @property
    def state(self) -> DiagramState:
        return self._state

    # ------------------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------------------

    def subscribe(self, callback: StateObserver) -> Callable[[], None]:
        """
        Register a plain callable to be called with every new state.

        Returns:
            A function that removes the subscription.
        """
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def _publish(self, points: Iterable[Point], reason: str) -> DiagramState:
        self._state = DiagramState(
            points=tuple(points),
            width=self._state.width,
            height=self._state.height,
            revision=self._state.revision + 1,
        )
        logger.debug(f"State revision {self._state.revision} ({reason}): {len(self._state)} points.")
        self.state_changed.emit(self._state)
        for callback in list(self._observers):
            callback(self._state)
        return self._state

    # ------------------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------------------

    def regenerate(self, n: Optional[int] = None) -> DiagramState:
        """Discard the current points and generate new ones."""
        n = self.config.point_count if n is None else n
        points = generate_points(
            n,
            self.config.palette,
            self._state.width,
            self._state.height,
            rng=self.rng,
        )
        logger.info(f"Regenerated diagram with {n} points.")
        return self._publish(points, "regenerate")

    def reset_colors(self) -> DiagramState:
        """Keep coordinates, draw a fresh random palette color for every point."""
        points = resample_colors(self._state.points, self.config.palette, rng=self.rng)
        logger.info("Colors have been reset.")
        return self._publish(points, "reset colors")

    def remove_at(self, indices: Iterable[int]) -> DiagramState:
        """
        Remove the points at ``indices``.

        The remaining points keep their relative order; their indices shift
        down to close the gaps. Indices outside the collection are ignored.
        """
        to_remove = set(indices)
        n = len(self._state)
        ignored = sorted(i for i in to_remove if not 0 <= i < n)
        if ignored:
            logger.warning(f"Ignoring out-of-range indices {ignored} (size {n}).")

        points = [p for i, p in enumerate(self._state.points) if i not in to_remove]
        logger.info(f"Removed {n - len(points)} points, {len(points)} remaining.")
        return self._publish(points, "remove")

    def set_color_at(self, index: int, color: str) -> DiagramState:
        if not 0 <= index < len(self._state):
            raise ValueError(f"Point index {index} out of range (size {len(self._state)}).")
        canonical = normalize_hex(color)
        if canonical is None:
            raise ValueError(f"Invalid color '{color}'.")

        points = list(self._state.points)
        points[index] = points[index].with_color(canonical)
        return self._publish(points, "set color")

    def replace(self, points: Sequence[Point], reason: str = "replace") -> DiagramState:
        """Publish a whole new collection of points in one step."""
        return self._publish(points, reason)
