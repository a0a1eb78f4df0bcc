from __future__ import annotations

import pytest

from voronoiblend.config import DiagramConfig
from voronoiblend.controller.interaction import CellInteractionController, blend_with_neighbors
from voronoiblend.model.partition import BOUNDARY, Partition
from voronoiblend.model.points import Point
from voronoiblend.model.state import DiagramStore


@pytest.fixture
def scenario_points(make_points):
    # index 2 is clicked, 0/1/5 are its neighbors
    return make_points(["#00FF00", "#FF0200", "#FF0000", "#123456", "#654321", "#0000FF"])


class TestBlendWithNeighbors:
    def test_convergence_removes_clicked_and_neighbor(self, scenario_points):
        outcome = blend_with_neighbors(scenario_points, 2, [0, 1, 5], threshold=50.0)

        assert outcome.converged_with == 1
        assert outcome.removed == frozenset({1, 2})
        assert outcome.blended == {0: "#808000", 1: "#FF0100"}
        assert len(outcome.points) == len(scenario_points) - 2
        assert [p.color for p in outcome.points] == ["#808000", "#123456", "#654321", "#0000FF"]

    def test_neighbor_after_convergence_is_untouched(self, scenario_points):
        outcome = blend_with_neighbors(scenario_points, 2, [0, 1, 5], threshold=50.0)
        assert 5 not in outcome.blended
        assert outcome.points[-1] == scenario_points[5]

    def test_short_circuit_skips_later_similar_neighbor(self, make_points):
        points = make_points(["#FF0000", "#FE0000", "#FD0000"])
        outcome = blend_with_neighbors(points, 0, [1, 2], threshold=50.0)
        assert outcome.converged_with == 1
        assert list(outcome.blended) == [1]
        assert outcome.points == (points[2],)

    def test_no_convergence_only_recolors_neighbors(self, make_points):
        points = make_points(["#0000FF", "#FF0000", "#000000"])
        outcome = blend_with_neighbors(points, 1, [0, 2], threshold=50.0)

        assert not outcome.converged
        assert outcome.removed == frozenset()
        assert [p.color for p in outcome.points] == ["#800080", "#FF0000", "#800000"]
        assert [p.coords for p in outcome.points] == [p.coords for p in points]

    def test_later_neighbors_blend_with_original_clicked_color(self, make_points):
        points = make_points(["#FF0000", "#000000", "#000000"])
        outcome = blend_with_neighbors(points, 0, [1, 2], threshold=1.0)
        assert outcome.blended == {1: "#800000", 2: "#800000"}
        assert outcome.points[0].color == "#FF0000"

    def test_invalid_neighbors_are_skipped(self, make_points):
        points = make_points(["#FF0000", "#000000"])
        outcome = blend_with_neighbors(points, 0, [BOUNDARY, 7, 0, 1], threshold=1.0)
        assert list(outcome.blended) == [1]

    def test_out_of_range_click_is_a_no_op(self, make_points):
        points = make_points(["#FF0000", "#000000"])
        outcome = blend_with_neighbors(points, 4, [0, 1], threshold=50.0)
        assert not outcome.changed
        assert outcome.points == tuple(points)

    def test_input_points_are_not_modified(self, scenario_points):
        original = list(scenario_points)
        blend_with_neighbors(scenario_points, 2, [0, 1, 5], threshold=50.0)
        assert scenario_points == original


class TestCellInteractionController:
    def test_click_publishes_once(self, qapp, scenario_points):
        store = DiagramStore(points=scenario_points)
        published = []
        store.state_changed.connect(published.append)

        outcome = CellInteractionController(store).on_cell_clicked(2, [0, 1, 5])

        assert len(published) == 1
        assert published[0].points == outcome.points
        assert len(store.state) == 4

    def test_click_without_effect_does_not_publish(self, qapp, make_points):
        store = DiagramStore(points=make_points(["#FF0000", "#00FF00"]))
        published = []
        store.state_changed.connect(published.append)

        outcome = CellInteractionController(store).on_cell_clicked(0, [BOUNDARY])

        assert not outcome.changed
        assert published == []

    def test_threshold_from_config(self, qapp, make_points):
        store = DiagramStore(DiagramConfig(threshold=0.5), points=make_points(["#FF0000", "#FF0200"]))
        outcome = CellInteractionController(store).on_cell_clicked(0, [1])
        # distance 1 is not below 0.5
        assert not outcome.converged
        assert store.state.color_at(1) == "#FF0100"

    def test_neighbors_from_partition(self, qapp):
        points = [
            Point(coords=(100.0, 250.0), color="#FF0000"),
            Point(coords=(250.0, 250.0), color="#FF0101"),
            Point(coords=(400.0, 250.0), color="#0000FF"),
        ]
        store = DiagramStore(points=points)

        outcome = CellInteractionController(store).on_cell_clicked(1)

        assert outcome.converged_with == 0
        assert store.state.points == (points[2],)

    def test_custom_partition_factory(self, qapp, make_points):
        store = DiagramStore(points=make_points(["#FF0000", "#000000", "#FE0000"]))
        requested = []

        def strips(state):
            requested.append(state)
            # Same order as the points: cell 1 sits between cells 0 and 2
            return Partition.from_points([(100.0, 250.0), (250.0, 250.0), (400.0, 250.0)], 500.0, 500.0)

        controller = CellInteractionController(store, partition_factory=strips, threshold=10.0)
        outcome = controller.on_cell_clicked(2)

        assert [s.revision for s in requested] == [0]
        assert outcome.blended == {1: "#7F0000"}
        assert not outcome.converged
