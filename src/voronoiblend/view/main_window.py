"""
Main Application Window
=======================
The GUI container: the diagram in the center, the two actions below it and a
status bar.

Why is this file needed?
------------------------
1. Layout: It organizes the visual structure of the application.
2. Routing: It connects clicks and buttons to the controller and the store,
   and the store's ``state_changed`` signal back to the view.
"""
import logging

from PySide6.QtCore import Slot
from PySide6.QtWidgets import (
    QHBoxLayout, QLabel, QMainWindow, QMessageBox, QPushButton, QVBoxLayout, QWidget
)

from voronoiblend.controller.interaction import CellInteractionController
from voronoiblend.model.state import DiagramState, DiagramStore
from voronoiblend.view.diagram_view import DiagramView

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Interactive Voronoi Diagram"


class MainWindow(QMainWindow):
    def __init__(self, store: DiagramStore) -> None:
        super().__init__()
        self.store = store
        self.controller = CellInteractionController(store)

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(620, 700)

        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        layout = QVBoxLayout(main_widget)

        hint = QLabel("Click on a cell to blend its color with its neighbors.")
        layout.addWidget(hint)

        # --- Diagram ---
        self.view = DiagramView()
        layout.addWidget(self.view, 1)

        # --- Actions ---
        buttons = QHBoxLayout()
        self.btn_reset = QPushButton("Reset Colors")
        self.btn_regenerate = QPushButton("Regenerate diagram")
        buttons.addWidget(self.btn_reset)
        buttons.addWidget(self.btn_regenerate)
        layout.addLayout(buttons)

        # --- SIGNAL CONNECTIONS ---
        self.store.state_changed.connect(self.on_state_changed)
        self.view.cell_clicked.connect(self.on_cell_clicked)
        self.btn_reset.clicked.connect(self.on_reset_clicked)
        self.btn_regenerate.clicked.connect(self.on_regenerate_clicked)

        self.on_state_changed(self.store.state)

    # --- SLOTS ---

    @Slot(object)
    def on_state_changed(self, state: DiagramState) -> None:
        self.view.set_state(state)
        self.statusBar().showMessage(f"Points: {len(state)}")

    @Slot(int)
    def on_cell_clicked(self, index: int) -> None:
        # Neighbors come from the partition currently on screen
        neighbors = self.view.partition.neighbors(index) if self.view.partition else []
        outcome = self.controller.on_cell_clicked(index, neighbors)
        if outcome.converged:
            self.statusBar().showMessage(
                f"Cells {index} and {outcome.converged_with} merged. Points: {len(outcome.points)}"
            )

    @Slot()
    def on_reset_clicked(self) -> None:
        try:
            self.store.reset_colors()
        except Exception as e:
            logger.exception("Resetting colors failed.")
            QMessageBox.critical(self, "Error", str(e))

    @Slot()
    def on_regenerate_clicked(self) -> None:
        try:
            self.store.regenerate()
        except Exception as e:
            logger.exception("Regenerating the diagram failed.")
            QMessageBox.critical(self, "Error", str(e))
