"""
Model Parameter Control Panel
"""
from typing import Tuple

from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QPushButton, QSlider
from PySide6.QtCore import Signal, Qt

from phasetube.config import SimulationConfig, CURRENT_RANGE, EPSILON_RANGE, A_RANGE


class ParameterSlider(QWidget):
    """Horizontal slider over a float range, with a two-decimal value label."""
    value_changed = Signal(float)

    RESOLUTION = 1000  # slider ticks across the range

    def __init__(self, label: str, bounds: Tuple[float, float], initial: float) -> None:
        super().__init__()
        self.lo, self.hi = bounds

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        lbl = QLabel(label)
        lbl.setStyleSheet("font-weight: bold;")
        layout.addWidget(lbl)

        self.slider = QSlider(Qt.Horizontal)
        self.slider.setFixedWidth(120)
        self.slider.setRange(0, self.RESOLUTION)
        layout.addWidget(self.slider)

        self.lbl_value = QLabel()
        self.lbl_value.setFixedWidth(35)
        self.lbl_value.setStyleSheet("font-weight: bold;")
        layout.addWidget(self.lbl_value)

        self.set_value(initial)
        self.slider.valueChanged.connect(self._on_slider_moved)

    def value(self) -> float:
        return self._to_float(self.slider.value())

    def set_value(self, value: float) -> None:
        """Moves the slider without emitting value_changed."""
        self.slider.blockSignals(True)
        self.slider.setValue(self._to_tick(value))
        self.slider.blockSignals(False)
        self.lbl_value.setText(f"{value:.2f}")

    def _to_tick(self, value: float) -> int:
        frac = (value - self.lo) / (self.hi - self.lo)
        return round(min(max(frac, 0.0), 1.0) * self.RESOLUTION)

    def _to_float(self, tick: int) -> float:
        return self.lo + (self.hi - self.lo) * tick / self.RESOLUTION

    def _on_slider_moved(self, tick: int) -> None:
        value = self._to_float(tick)
        self.lbl_value.setText(f"{value:.2f}")
        self.value_changed.emit(value)


class ParameterControlPanel(QWidget):
    # Signals carry the new (already in-range) value
    current_changed = Signal(float)
    epsilon_changed = Signal(float)
    a_changed = Signal(float)
    reset_requested = Signal()

    def __init__(self, config: SimulationConfig) -> None:
        super().__init__()
        self.setAttribute(Qt.WA_StyledBackground, True)
        self.setStyleSheet("""
            ParameterControlPanel { background-color: rgba(20, 20, 30, 220); }
            QLabel { color: white; }
        """)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.addStretch()

        self.sl_current = ParameterSlider("Current (I):", CURRENT_RANGE, config.current)
        self.sl_current.value_changed.connect(self.current_changed)
        layout.addWidget(self.sl_current)

        self.sl_epsilon = ParameterSlider("ε:", EPSILON_RANGE, config.epsilon)
        self.sl_epsilon.value_changed.connect(self.epsilon_changed)
        layout.addWidget(self.sl_epsilon)

        self.sl_a = ParameterSlider("a:", A_RANGE, config.a)
        self.sl_a.value_changed.connect(self.a_changed)
        layout.addWidget(self.sl_a)

        self.btn_reset = QPushButton("Reset")
        self.btn_reset.setStyleSheet(
            "QPushButton { font-weight: bold; padding: 8px 15px; background-color: rgb(70, 130, 180); }"
        )
        self.btn_reset.clicked.connect(self.reset_requested)
        layout.addWidget(self.btn_reset)

        layout.addStretch()
