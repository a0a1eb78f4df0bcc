"""
Diagram View
============
Draws the Voronoi cells of the current state and turns mouse clicks into
cell indices.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QBrush, QColor, QMouseEvent, QPainter, QPen, QPolygonF
from PySide6.QtWidgets import QGraphicsPolygonItem, QGraphicsRectItem, QGraphicsScene, QGraphicsView

from voronoiblend.model.partition import Partition
from voronoiblend.model.state import DiagramState

logger = logging.getLogger(__name__)


class DiagramView(QGraphicsView):
    # Emitted with the index of the clicked cell
    cell_clicked = Signal(int)

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setRenderHints(self.renderHints() | QPainter.Antialiasing)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.scene = QGraphicsScene(self)
        self.setScene(self.scene)

        self.partition: Optional[Partition] = None
        self.cell_items: List[QGraphicsPolygonItem] = []
        self._frame: Optional[QGraphicsRectItem] = None

    def set_state(self, state: DiagramState, partition: Optional[Partition] = None) -> None:
        """Redraw all cells for ``state``."""
        self.partition = partition if partition is not None else state.partition()

        self.scene.clear()
        self.cell_items.clear()

        bounds = QRectF(0.0, 0.0, state.width, state.height)
        self.scene.setSceneRect(bounds)
        self._frame = self.scene.addRect(bounds, QPen(QColor(0, 0, 0), 0))

        pen = QPen(QColor(0, 0, 0), 0)  # cosmetic pen
        for i, point in enumerate(state.points):
            ring = self.partition.polygon(i)
            polygon = QPolygonF([QPointF(float(x), float(y)) for x, y in ring])
            item = self.scene.addPolygon(polygon, pen, QBrush(QColor(point.color)))
            item.setData(0, i)
            self.cell_items.append(item)

        self.fitInView(bounds, Qt.KeepAspectRatio)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        if self._frame is not None:
            self.fitInView(self.scene.sceneRect(), Qt.KeepAspectRatio)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.LeftButton or self.partition is None:
            super().mousePressEvent(event)
            return

        pos = self.mapToScene(event.position().toPoint())
        index = self.partition.find_cell(pos.x(), pos.y())
        if index is None:
            logger.debug(f"Click at ({pos.x():.1f}, {pos.y():.1f}) is outside the diagram.")
            return
        self.cell_clicked.emit(index)
