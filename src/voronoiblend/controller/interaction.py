"""
Cell Interaction
================
Handles a click on a Voronoi cell: the clicked color is blended into each
neighbor in turn, and the first neighbor whose blend lands close enough to the
clicked color is merged away together with the clicked cell.

Why is this file needed?
------------------------
1. Logic: ``blend_with_neighbors`` is a pure function from (points, click) to
   the next points, so it can be tested without Qt.
2. Atomicity: ``CellInteractionController`` computes the whole click first and
   commits it to the store as a single published state.

Classes:
    ClickOutcome: What a click did.
    CellInteractionController: Connects clicks to the store.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Callable, Iterable, Optional, Sequence

from voronoiblend.model.colors import average_hex_colors, colors_are_similar
from voronoiblend.model.partition import Partition
from voronoiblend.model.points import Point
from voronoiblend.model.state import DiagramState, DiagramStore

logger = logging.getLogger(__name__)

PartitionFactory = Callable[[DiagramState], Partition]


@dataclass(frozen=True)
class ClickOutcome:
    """Result of processing one click."""
    clicked_index: int
    points: tuple[Point, ...]
    # neighbor index -> new color, in processing order
    blended: dict[int, str] = field(default_factory=dict)
    removed: frozenset[int] = frozenset()
    converged_with: Optional[int] = None

    @property
    def converged(self) -> bool:
        return self.converged_with is not None

    @property
    def changed(self) -> bool:
        return bool(self.blended) or bool(self.removed)


def blend_with_neighbors(
    points: Sequence[Point],
    clicked_index: int,
    neighbor_indices: Iterable[int],
    threshold: float,
) -> ClickOutcome:
    """
    Blend the clicked cell's color into its neighbors.

    Neighbors are visited in the given order. Each one gets the average of its
    own color and the clicked cell's ORIGINAL color. If that average is similar
    to the clicked color, both cells are removed and the remaining neighbors
    are not visited. The clicked cell's color itself never changes.

    Args:
        points: Current points, not modified.
        clicked_index: Index of the clicked cell.
        neighbor_indices: Neighbor indices as reported by the partition; the
            boundary sentinel and out-of-range indices are skipped.
        threshold: Similarity threshold (RGB distance).

    Returns:
        ClickOutcome with the resulting points.
    """
    working = list(points)
    n = len(working)
    if not 0 <= clicked_index < n:
        logger.warning(f"Click on index {clicked_index} ignored (size {n}).")
        return ClickOutcome(clicked_index=clicked_index, points=tuple(working))

    clicked_color = working[clicked_index].color
    blended: dict[int, str] = {}

    for j in neighbor_indices:
        if not 0 <= j < n or j == clicked_index:
            logger.debug(f"Skipping invalid neighbor {j} of cell {clicked_index}.")
            continue

        new_color = average_hex_colors([clicked_color, working[j].color])
        working[j] = working[j].with_color(new_color)
        blended[j] = new_color
        logger.debug(f"Cell {j} blended with cell {clicked_index}: {new_color}")

        if colors_are_similar(new_color, clicked_color, threshold):
            removed = frozenset((clicked_index, j))
            remaining = tuple(p for i, p in enumerate(working) if i not in removed)
            logger.info(f"Cells {clicked_index} and {j} converged ({new_color} ~ {clicked_color}), merged.")
            return ClickOutcome(
                clicked_index=clicked_index,
                points=remaining,
                blended=blended,
                removed=removed,
                converged_with=j,
            )

    return ClickOutcome(clicked_index=clicked_index, points=tuple(working), blended=blended)


class CellInteractionController:
    """Stateless click handler over the diagram store."""

    def __init__(
        self,
        store: DiagramStore,
        partition_factory: Optional[PartitionFactory] = None,
        threshold: Optional[float] = None,
    ) -> None:
        self.store = store
        self.partition_factory: PartitionFactory = partition_factory or DiagramState.partition
        self.threshold = store.config.threshold if threshold is None else threshold

    def on_cell_clicked(
        self,
        clicked_index: int,
        neighbor_indices: Optional[Iterable[int]] = None,
    ) -> ClickOutcome:
        """
        Process a click and publish the resulting state.

        If ``neighbor_indices`` is not given, the neighbors are taken from the
        partition that ``partition_factory`` builds from the store's current
        state.
        """
        state = self.store.state
        if neighbor_indices is None:
            neighbor_indices = self.partition_factory(state).neighbors(clicked_index)
        neighbor_indices = list(neighbor_indices)
        logger.debug(f"Cell {clicked_index} clicked, neighbors: {neighbor_indices}")

        outcome = blend_with_neighbors(state.points, clicked_index, neighbor_indices, self.threshold)
        if outcome.changed:
            reason = "merge" if outcome.converged else "blend"
            self.store.replace(outcome.points, reason=reason)
        return outcome
