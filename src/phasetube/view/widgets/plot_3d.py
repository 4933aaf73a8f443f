"""
3D Visualization Widget (PyVista Wrapper) - Animated Trajectory
"""

from __future__ import annotations

from typing import Optional

import logging

from PySide6.QtWidgets import QWidget, QVBoxLayout, QFrame, QLabel, QHBoxLayout
from PySide6.QtCore import QTimer, QEvent, QObject, Qt, Signal
from PySide6.QtGui import QCloseEvent

from pyvistaqt import QtInteractor
import pyvista as pv

from phasetube.config import (
    TICK_INTERVAL_MS, FIELD_OF_VIEW, CLIPPING_RANGE, GRID_OPACITY, TRAJECTORY_OPACITY,
)
from phasetube.controller.frame_driver import FrameDriver
from phasetube.controller.scene import AXES, build_axis_arrow, build_grid_plane
from phasetube.view.widgets.vtk_utils import VtkUtils, COLORS_ARRAY

logger = logging.getLogger(__name__)

AMBIENT: float = 0.35

# Pointer and keyboard events that never reach VTK's interactor style, so the
# orbit camera is the only thing that moves the view
CONSUMED_EVENTS = frozenset({
    QEvent.Type.MouseButtonPress,
    QEvent.Type.MouseButtonRelease,
    QEvent.Type.MouseButtonDblClick,
    QEvent.Type.MouseMove,
    QEvent.Type.Wheel,
    QEvent.Type.KeyPress,
    QEvent.Type.KeyRelease,
})


def format_sim_time(t: float) -> str:
    """Text of the simulated-time readout in the legend overlay."""
    return f"t = {t:.2f}"


class PyVistaWidget(QWidget):
    """
    Hosts the render window and the tick timer.

    Each timer tick advances the FrameDriver and swaps the new tube mesh into
    the existing trajectory actor. Mouse and key events on the render window are
    routed to the driver's pointer interface instead of VTK's own
    interactor style, so the orbit camera stays the only camera model.
    """
    # Emitted after every tick with the simulated time
    frame_advanced = Signal(float)

    def __init__(self, driver: FrameDriver, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.driver = driver

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._vtk_utils = VtkUtils()

        # --- Actors state ---
        self._trajectory_actor: Optional[pv.Actor] = None

        self._init_plotter()
        self._init_lights()
        self._add_coordinate_system()
        self._setup_legend_overlay()
        self.frame_advanced.connect(self._on_frame_advanced)

        # Take over mouse and keyboard from the VTK interactor style
        self.plotter.installEventFilter(self)

        # Tick scheduler
        self._timer = QTimer(self)
        self._timer.setInterval(TICK_INTERVAL_MS)
        self._timer.timeout.connect(self.on_tick)

        self.apply_camera()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def start(self) -> None:
        logger.info(f"Starting animation ({TICK_INTERVAL_MS} ms per tick).")
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def on_tick(self) -> None:
        """Timer slot: advance one frame and redraw."""
        self.driver.on_tick()
        self._update_trajectory_layer()
        self.plotter.render()
        self.frame_advanced.emit(self.driver.state.t)

    def refresh(self) -> None:
        """Re-sync camera and trajectory after an out-of-band change (e.g. reset)."""
        self.apply_camera()
        self._update_trajectory_layer()
        self._on_frame_advanced(self.driver.state.t)
        self.plotter.render()

    def apply_camera(self) -> None:
        """Copies the orbit camera transform into the VTK camera."""
        orbit = self.driver.camera
        cam = self.plotter.camera
        cam.position = orbit.position().to_tuple()
        cam.focal_point = (0.0, 0.0, 0.0)
        cam.up = orbit.up().to_tuple()
        cam.view_angle = FIELD_OF_VIEW
        cam.clipping_range = CLIPPING_RANGE

    # ------------------------------------------------------------------------------
    # Internal: Layer Management
    # ------------------------------------------------------------------------------

    def _update_trajectory_layer(self) -> None:
        mesh = self.driver.mesh
        if mesh.is_empty:
            if self._trajectory_actor is not None:
                self._trajectory_actor.SetVisibility(False)
            return

        tube = self._vtk_utils.mesh_to_polydata(mesh)

        if self._trajectory_actor is None:
            self._trajectory_actor = self.plotter.add_mesh(
                tube,
                scalars=COLORS_ARRAY,
                rgb=True,
                opacity=TRAJECTORY_OPACITY,
                ambient=AMBIENT,
                smooth_shading=False,
                show_scalar_bar=False,
                pickable=False,
                reset_camera=False,
            )
        else:
            # Update existing data in-place to prevent blinking
            self._trajectory_actor.mapper.dataset.copy_from(tube)
            self._trajectory_actor.SetVisibility(True)

    def _add_coordinate_system(self) -> None:
        for axis in AXES:
            arrow = build_axis_arrow((0.0, 0.0, 0.0), axis.direction)
            self.plotter.add_mesh(
                self._vtk_utils.mesh_to_polydata(arrow),
                color=axis.color,
                ambient=AMBIENT,
                pickable=False,
                reset_camera=False,
            )

        self.plotter.add_mesh(
            self._vtk_utils.mesh_to_polydata(build_grid_plane()),
            color="gray",
            opacity=GRID_OPACITY,
            pickable=False,
            reset_camera=False,
        )

    # ------------------------------------------------------------------------------
    # Internal: Setup
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background("#14141e")
        self.plotter.disable_parallel_projection()

    def _init_lights(self) -> None:
        self.plotter.remove_all_lights()
        # Directional lights shining towards (-1, -1, -2) and (1, -0.5, -1)
        for position in [(1.0, 1.0, 2.0), (-1.0, 0.5, 1.0)]:
            light = pv.Light(position=position, focal_point=(0.0, 0.0, 0.0), color="white")
            light.positional = False
            self.plotter.add_light(light)

    def _setup_legend_overlay(self) -> None:
        """Floating axis legend in the top-left corner."""
        self.legend_widget = QFrame(self)
        self.legend_widget.setStyleSheet("""
            QFrame { background-color: rgba(20, 20, 30, 200); border-radius: 6px; }
            QLabel { color: white; background-color: transparent; }
        """)

        layout = QVBoxLayout(self.legend_widget)
        layout.setContentsMargins(10, 8, 10, 8)

        title = QLabel("Axes Legend")
        title.setStyleSheet("font-size: 14px; font-weight: bold;")
        layout.addWidget(title)

        for axis in AXES:
            row = QHBoxLayout()
            box = QLabel()
            box.setFixedSize(16, 16)
            box.setStyleSheet(f"background-color: {axis.color}; border-radius: 2px;")
            row.addWidget(box)
            row.addWidget(QLabel(axis.description))
            layout.addLayout(row)

        separator = QFrame()
        separator.setFixedHeight(1)
        separator.setStyleSheet("background-color: rgba(255, 255, 255, 100);")
        layout.addWidget(separator)

        hint = QLabel("Drag to rotate\nScroll to zoom")
        hint.setStyleSheet("font-size: 11px; color: rgba(255, 255, 255, 200);")
        layout.addWidget(hint)

        self.lbl_time = QLabel(format_sim_time(self.driver.state.t))
        self.lbl_time.setStyleSheet("font-size: 11px; font-weight: bold;")
        layout.addWidget(self.lbl_time)

        self.legend_widget.adjustSize()
        self.legend_widget.move(15, 15)
        self.legend_widget.raise_()

    # ------------------------------------------------------------------------------
    # Pointer routing
    # ------------------------------------------------------------------------------

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if watched is not self.plotter:
            return super().eventFilter(watched, event)

        etype = event.type()

        if etype == QEvent.Type.MouseButtonPress and event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            self.driver.on_drag_start((pos.x(), pos.y()))
            return True

        if etype == QEvent.Type.MouseMove:
            pos = event.position()
            if self.driver.on_drag_move((pos.x(), pos.y())):
                self.apply_camera()
                self.plotter.render()
            return True

        if etype == QEvent.Type.MouseButtonRelease and event.button() == Qt.MouseButton.LeftButton:
            self.driver.on_drag_end()
            return True

        if etype == QEvent.Type.Wheel:
            delta = event.angleDelta().y()
            if delta != 0:
                self.driver.on_wheel(delta)
                self.apply_camera()
                self.plotter.render()
            return True

        # Other buttons, double clicks and keys ('r', 'w', ...) would move the
        # VTK camera behind the orbit camera's back
        if etype in CONSUMED_EVENTS:
            return True

        return super().eventFilter(watched, event)

    def _on_frame_advanced(self, t: float) -> None:
        self.lbl_time.setText(format_sim_time(t))

    def closeEvent(self, event: QCloseEvent) -> None:
        self.stop()
        self.plotter.close()
        event.accept()
