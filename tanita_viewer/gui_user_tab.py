"""
Per-user tab for the Tanita Viewer.

Profile header on top, the scrollable measurement table in the middle
and the trend chart (with copy / export buttons) at the bottom, split
by a vertical splitter.
"""

import os

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QGroupBox, QLabel,
    QPushButton, QSplitter, QTableWidget, QTableWidgetItem, QHeaderView,
    QAbstractItemView, QFileDialog, QMessageBox,
)
from PySide6.QtCore import Qt

import matplotlib
matplotlib.use('QtAgg')
from matplotlib.figure import Figure
from matplotlib.backends.backend_qtagg import (
    FigureCanvasQTAgg as FigureCanvas,
    NavigationToolbar2QT as NavigationToolbar,
)

from .chart_trend import render_trend
from .constants import DARK_COLORS, PLOT_STYLE_DARK, PROFILE_FIELDS
from .data_model import UserMeasurementSet
from .export import (
    copy_to_clipboard, export_measurements_csv, export_measurements_xlsx,
    export_png,
)
from .table_format import measurement_headers, measurement_rows, profile_values
from .theme import apply_plot_style


class UserTab(QWidget):
    """Profile header, measurement table and trend chart for one user."""

    def __init__(self, user: UserMeasurementSet, parent=None):
        super().__init__(parent)
        self._user = user
        self._setup_ui()
        self._populate()

    @property
    def user(self) -> UserMeasurementSet:
        return self._user

    @property
    def user_index(self) -> int:
        return self._user.index

    # ── UI setup ─────────────────────────────────────────────────────

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        # ── Profile header ───────────────────────────────────────────
        grp_profile = QGroupBox("Profile")
        grp_profile.setObjectName("profileHeader")
        grid = QGridLayout(grp_profile)
        grid.setHorizontalSpacing(24)
        self._profile_labels = []
        for col, name in enumerate(PROFILE_FIELDS):
            title = QLabel(name)
            title.setObjectName("profileFieldTitle")
            value = QLabel("")
            value.setObjectName("profileFieldValue")
            grid.addWidget(title, 0, col)
            grid.addWidget(value, 1, col)
            self._profile_labels.append(value)
        layout.addWidget(grp_profile)

        splitter = QSplitter(Qt.Orientation.Vertical)
        splitter.setObjectName("tabSplitter")

        # ── Measurement table ────────────────────────────────────────
        self._table = QTableWidget()
        self._table.setObjectName("measurementTable")
        self._table.setAlternatingRowColors(True)
        self._table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self._table.setSelectionBehavior(QAbstractItemView.SelectRows)
        header = self._table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.Interactive)
        header.setMinimumSectionSize(50)
        self._table.setHorizontalScrollMode(QAbstractItemView.ScrollPerPixel)
        self._table.setHorizontalScrollBarPolicy(Qt.ScrollBarAsNeeded)
        splitter.addWidget(self._table)

        # ── Trend chart ──────────────────────────────────────────────
        chart_box = QWidget()
        chart_box.setObjectName("chartPanel")
        chart_layout = QVBoxLayout(chart_box)
        chart_layout.setContentsMargins(0, 0, 0, 0)

        self._fig = Figure(figsize=(8, 3.5))
        self._fig.set_facecolor(DARK_COLORS['bg_alt'])
        self._canvas = FigureCanvas(self._fig)
        self._toolbar = NavigationToolbar(self._canvas, self)

        toolbar_row = QHBoxLayout()
        toolbar_row.setSpacing(4)
        toolbar_row.addWidget(self._toolbar)
        toolbar_row.addStretch()

        self._btn_copy = QPushButton("Copy Chart")
        self._btn_copy.clicked.connect(lambda *_: self._on_copy())
        toolbar_row.addWidget(self._btn_copy)

        self._btn_export_png = QPushButton("Export PNG...")
        self._btn_export_png.clicked.connect(lambda *_: self._on_export_png())
        toolbar_row.addWidget(self._btn_export_png)

        self._btn_export_csv = QPushButton("Export Table CSV...")
        self._btn_export_csv.clicked.connect(lambda *_: self._on_export_csv())
        toolbar_row.addWidget(self._btn_export_csv)

        self._btn_export_xlsx = QPushButton("Export Excel...")
        self._btn_export_xlsx.clicked.connect(
            lambda *_: self._on_export_xlsx()
        )
        toolbar_row.addWidget(self._btn_export_xlsx)

        chart_layout.addLayout(toolbar_row)
        chart_layout.addWidget(self._canvas, 1)
        splitter.addWidget(chart_box)

        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 2)
        layout.addWidget(splitter, 1)

    def _populate(self):
        for label, text in zip(self._profile_labels,
                               profile_values(self._user.profile)):
            label.setText(text)

        headers = measurement_headers()
        rows = measurement_rows(self._user)
        self._table.setColumnCount(len(headers))
        self._table.setHorizontalHeaderLabels(headers)
        self._table.setRowCount(len(rows))
        for r, row in enumerate(rows):
            for c, text in enumerate(row):
                item = QTableWidgetItem(text)
                if c > 0:
                    item.setTextAlignment(
                        Qt.AlignRight | Qt.AlignVCenter
                    )
                self._table.setItem(r, c, item)
        self._table.resizeColumnsToContents()

        apply_plot_style(PLOT_STYLE_DARK)
        render_trend(self._fig, self._user)
        self._canvas.draw_idle()

    # ── Slots ────────────────────────────────────────────────────────

    def _status(self, message: str):
        self.window().statusBar().showMessage(message, 3000)

    def _on_copy(self):
        if copy_to_clipboard(self._user):
            self._status("Chart copied to clipboard")
        else:
            QMessageBox.warning(self, "Copy Failed",
                                "Could not copy chart to clipboard.")

    def _on_export_png(self):
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Trend Chart as PNG",
            f"{self._user.label.replace(' ', '_')}_trend.png",
            "PNG Files (*.png);;All Files (*)",
        )
        if not path:
            return
        if not path.lower().endswith('.png'):
            path += '.png'
        try:
            export_png(self._user, path)
        except (OSError, ValueError) as exc:
            QMessageBox.critical(self, "Export Error",
                                 f"Failed to export: {exc}")
            return
        self._status(f"Exported to {os.path.basename(path)}")

    def _on_export_csv(self):
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Measurements as CSV",
            f"{self._user.label.replace(' ', '_')}_measurements.csv",
            "CSV Files (*.csv);;All Files (*)",
        )
        if not path:
            return
        if not path.lower().endswith('.csv'):
            path += '.csv'
        try:
            export_measurements_csv(self._user, path)
        except OSError as exc:
            QMessageBox.critical(self, "Export Error",
                                 f"Failed to export: {exc}")
            return
        self._status(f"Exported to {os.path.basename(path)}")

    def _on_export_xlsx(self):
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Measurements as Excel Workbook",
            f"{self._user.label.replace(' ', '_')}_measurements.xlsx",
            "Excel Workbook (*.xlsx);;All Files (*)",
        )
        if not path:
            return
        if not path.lower().endswith('.xlsx'):
            path += '.xlsx'
        try:
            export_measurements_xlsx([self._user], path)
        except OSError as exc:
            QMessageBox.critical(self, "Export Error",
                                 f"Failed to export: {exc}")
            return
        self._status(f"Exported to {os.path.basename(path)}")
