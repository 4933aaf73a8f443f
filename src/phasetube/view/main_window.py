"""
Main Application Window
=======================
The primary GUI container: the animated 3D view on top and the parameter
panel below.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects the panel's slider and reset signals to the
   FrameDriver's parameter interface.
"""
import logging

from PySide6.QtWidgets import QMainWindow, QWidget, QVBoxLayout
from PySide6.QtGui import QCloseEvent

from phasetube.controller.frame_driver import FrameDriver
from phasetube.view.widgets.plot_3d import PyVistaWidget
from phasetube.view.tabs.tab_parameters import ParameterControlPanel

logger = logging.getLogger(__name__)

WINDOW_TITLE = "FitzHugh-Nagumo 3D - Drag to Rotate, Scroll to Zoom"


class MainWindow(QMainWindow):
    def __init__(self, driver: FrameDriver) -> None:
        super().__init__()
        self.driver = driver

        self.setWindowTitle(WINDOW_TITLE)
        self.resize(1200, 800)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)

        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        # --- TOP: 3D Visualization ---
        self.visualizer = PyVistaWidget(self.driver)
        main_layout.addWidget(self.visualizer, stretch=1)

        # --- BOTTOM: Parameter sliders ---
        self.param_panel = ParameterControlPanel(self.driver.config)
        main_layout.addWidget(self.param_panel)

        # --- SIGNAL CONNECTIONS ---
        self.param_panel.current_changed.connect(self.driver.set_current)
        self.param_panel.epsilon_changed.connect(self.driver.set_epsilon)
        self.param_panel.a_changed.connect(self.driver.set_a)
        self.param_panel.reset_requested.connect(self.on_reset)

        self.visualizer.start()

    def on_reset(self) -> None:
        """Reset button: restart the trajectory and the camera; sliders keep their values."""
        self.driver.reset()
        self.visualizer.refresh()

    def closeEvent(self, event: QCloseEvent) -> None:
        logger.info(f"Closing after {self.driver.tick_count} ticks.")
        self.visualizer.stop()
        self.visualizer.plotter.close()
        event.accept()
