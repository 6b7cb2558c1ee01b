"""Qt application entrypoint for the Reaction Progress GUI."""

from __future__ import annotations

import logging
import sys
from functools import partial

from PySide6 import QtCore, QtWidgets
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg
from matplotlib.figure import Figure

from reactionprogress.charts import draw_bar_chart, draw_extent_graph
from reactionprogress.config import Settings, load_settings
from reactionprogress.constants import SPECIES_NAMES
from reactionprogress.display import to_display, unit_label
from reactionprogress.errors import ReactionError
from reactionprogress.gui.tables import (
    column_headers,
    extent_text_edited,
    format_number,
    table_rows,
)
from reactionprogress.models import DisplayMode, ReactionSnapshot
from reactionprogress.reaction import Reaction

logger = logging.getLogger(__name__)


class PlotCanvas(FigureCanvasQTAgg):
    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        self.figure = Figure(figsize=(5, 4), tight_layout=True)
        super().__init__(self.figure)
        self.setParent(parent)
        self.axes = self.figure.add_subplot(1, 1, 1)

    def plot_bars(self, snapshot: ReactionSnapshot) -> None:
        draw_bar_chart(self.axes, snapshot)
        self.draw()

    def plot_extent(self, snapshot: ReactionSnapshot, points: int) -> None:
        draw_extent_graph(self.axes, snapshot, points=points)
        self.draw()


class ReactionWindow(QtWidgets.QMainWindow):
    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self.reaction = Reaction.from_settings(self.settings)

        self.setWindowTitle("Reaction Progress")
        self.resize(1200, 760)

        central = QtWidgets.QWidget()
        self.setCentralWidget(central)
        layout = QtWidgets.QVBoxLayout(central)

        layout.addWidget(self._build_inputs())
        layout.addWidget(self._build_progress())

        charts = QtWidgets.QHBoxLayout()
        self.results = QtWidgets.QTableWidget(len(SPECIES_NAMES), 3)
        self.results.setVerticalHeaderLabels(list(SPECIES_NAMES))
        self.results.setEditTriggers(QtWidgets.QAbstractItemView.EditTrigger.NoEditTriggers)
        self.bar_canvas = PlotCanvas()
        self.graph_canvas = PlotCanvas()
        charts.addWidget(self.results, stretch=1)
        charts.addWidget(self.bar_canvas, stretch=2)
        charts.addWidget(self.graph_canvas, stretch=2)
        layout.addLayout(charts, stretch=1)

        self._refresh()

    def _build_inputs(self) -> QtWidgets.QWidget:
        panel = QtWidgets.QGroupBox("Reaction")
        grid = QtWidgets.QGridLayout(panel)

        for slot, name in enumerate(SPECIES_NAMES):
            grid.addWidget(QtWidgets.QLabel(name), 0, slot + 1, QtCore.Qt.AlignmentFlag.AlignCenter)

        grid.addWidget(QtWidgets.QLabel("Coefficient"), 1, 0)
        self.initial_label = QtWidgets.QLabel()
        grid.addWidget(self.initial_label, 2, 0)
        self.molar_mass_label = QtWidgets.QLabel("Molar mass (g/mol)")
        grid.addWidget(self.molar_mass_label, 3, 0)

        self.coefficient_spins = []
        self.initial_spins = []
        self.molar_mass_spins = []
        for slot in range(len(SPECIES_NAMES)):
            coefficient = self._make_spin(-1000.0, 1000.0, 3)
            coefficient.editingFinished.connect(partial(self._coefficient_changed, slot))
            initial = self._make_spin(0.0, 1e12, 4)
            initial.editingFinished.connect(partial(self._initial_changed, slot))
            molar_mass = self._make_spin(0.0, 1e6, 4)
            molar_mass.editingFinished.connect(partial(self._molar_mass_changed, slot))

            grid.addWidget(coefficient, 1, slot + 1)
            grid.addWidget(initial, 2, slot + 1)
            grid.addWidget(molar_mass, 3, slot + 1)
            self.coefficient_spins.append(coefficient)
            self.initial_spins.append(initial)
            self.molar_mass_spins.append(molar_mass)

        self.mole_button = QtWidgets.QRadioButton("Moles")
        self.mass_button = QtWidgets.QRadioButton("Mass")
        self.mole_button.toggled.connect(self._mode_changed)
        modes = QtWidgets.QHBoxLayout()
        modes.addWidget(self.mole_button)
        modes.addWidget(self.mass_button)
        grid.addLayout(modes, 4, 0, 1, len(SPECIES_NAMES) + 1)
        return panel

    def _build_progress(self) -> QtWidgets.QWidget:
        panel = QtWidgets.QGroupBox("Progress")
        row = QtWidgets.QHBoxLayout(panel)

        self.slider = QtWidgets.QSlider(QtCore.Qt.Orientation.Horizontal)
        self.slider.setRange(0, 100)
        self.slider.valueChanged.connect(self._slider_changed)
        self.percent_label = QtWidgets.QLabel()

        self.extent_edit = QtWidgets.QLineEdit()
        self.extent_edit.setMaximumWidth(140)
        self.extent_edit.editingFinished.connect(self._extent_changed)
        self.range_label = QtWidgets.QLabel()

        row.addWidget(QtWidgets.QLabel("Percent complete"))
        row.addWidget(self.slider, stretch=1)
        row.addWidget(self.percent_label)
        row.addWidget(QtWidgets.QLabel("Extent (mol)"))
        row.addWidget(self.extent_edit)
        row.addWidget(self.range_label)
        return panel

    def _make_spin(self, minimum: float, maximum: float, decimals: int) -> QtWidgets.QDoubleSpinBox:
        spin = QtWidgets.QDoubleSpinBox()
        spin.setRange(minimum, maximum)
        spin.setDecimals(decimals)
        spin.setKeyboardTracking(False)
        return spin

    # editingFinished also fires on focus loss, and any committed input resets the extent.
    def _coefficient_changed(self, slot: int) -> None:
        spin = self.coefficient_spins[slot]
        if _edited(spin, self.reaction.coefficients[slot]):
            self._apply(self.reaction.set_coefficient, slot, spin.value())

    def _initial_changed(self, slot: int) -> None:
        spin = self.initial_spins[slot]
        shown = to_display(
            self.reaction.initial_amounts[slot],
            self.reaction.molar_masses[slot],
            self.reaction.mode,
        )
        if _edited(spin, shown):
            self._apply(self.reaction.set_initial_amount, slot, spin.value())

    def _molar_mass_changed(self, slot: int) -> None:
        spin = self.molar_mass_spins[slot]
        if _edited(spin, self.reaction.molar_masses[slot]):
            self._apply(self.reaction.set_molar_mass, slot, spin.value())

    def _mode_changed(self) -> None:
        mode = DisplayMode.MOLE if self.mole_button.isChecked() else DisplayMode.MASS
        if mode is not self.reaction.mode:
            self._apply(self.reaction.set_mode, mode)

    def _slider_changed(self, percent: int) -> None:
        self.reaction.set_extent_by_percent(percent)
        self._refresh()

    def _extent_changed(self) -> None:
        text = self.extent_edit.text()
        if not extent_text_edited(
            text, self.reaction.extent, self.settings.significant_figures, self.settings.decimals
        ):
            return
        try:
            value = float(text)
        except ValueError:
            self._reject(f"'{text}' is not a number.")
            return
        self._apply(self.reaction.set_extent_direct, value)

    def _apply(self, setter, *args) -> None:
        try:
            setter(*args)
        except ReactionError as exc:
            self._reject(str(exc))
            return
        self._refresh()

    def _reject(self, message: str) -> None:
        logger.warning("Rejected edit: %s", message)
        QtWidgets.QMessageBox.warning(self, "Invalid input", message)
        self._refresh()

    def _refresh(self) -> None:
        snapshot = self.reaction.recompute()
        self._sync_inputs(snapshot)
        self._update_results(snapshot)

        self.bar_canvas.plot_bars(snapshot)
        self.graph_canvas.plot_extent(snapshot, self.settings.graph_points)

    def _sync_inputs(self, snapshot: ReactionSnapshot) -> None:
        mode = snapshot.mode
        mass_mode = mode is DisplayMode.MASS
        self.initial_label.setText(f"Initial ({unit_label(mode)})")
        self.molar_mass_label.setVisible(mass_mode)

        widgets = [
            *self.coefficient_spins,
            *self.initial_spins,
            *self.molar_mass_spins,
            self.mole_button,
            self.mass_button,
            self.slider,
        ]
        for widget in widgets:
            widget.blockSignals(True)
        try:
            for slot, species in enumerate(snapshot.species):
                self.coefficient_spins[slot].setValue(species.coefficient)
                self.initial_spins[slot].setValue(
                    to_display(species.moles.initial, species.molar_mass, mode)
                )
                self.molar_mass_spins[slot].setValue(species.molar_mass)
                self.molar_mass_spins[slot].setVisible(mass_mode)
            self.mole_button.setChecked(not mass_mode)
            self.mass_button.setChecked(mass_mode)
            self.slider.setValue(round(snapshot.percent_complete))
        finally:
            for widget in widgets:
                widget.blockSignals(False)

        sigfigs, decimals = self.settings.significant_figures, self.settings.decimals
        self.percent_label.setText(
            f"{format_number(snapshot.percent_complete, sigfigs, decimals)} %"
        )
        self.extent_edit.setText(format_number(snapshot.extent, sigfigs, decimals))
        self.range_label.setText(
            f"[{format_number(snapshot.min_extent, sigfigs, decimals)}, "
            f"{format_number(snapshot.max_extent, sigfigs, decimals)}]"
        )

    def _update_results(self, snapshot: ReactionSnapshot) -> None:
        self.results.setHorizontalHeaderLabels(column_headers(snapshot))
        rows = table_rows(snapshot, self.settings.significant_figures, self.settings.decimals)
        for index, row in enumerate(rows):
            for column, text in enumerate((row.initial, row.change, row.end)):
                self.results.setItem(index, column, QtWidgets.QTableWidgetItem(text))


def _edited(spin: QtWidgets.QDoubleSpinBox, model_value: float) -> bool:
    return spin.value() != round(model_value, spin.decimals())


def main() -> None:
    settings = load_settings(sys.argv[1] if len(sys.argv) > 1 else None)
    app = QtWidgets.QApplication(sys.argv)
    window = ReactionWindow(settings)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
