"""
Main window for the Tanita Viewer.

A folder button above a tab widget holding one ``UserTab`` per user,
with a menu bar and status bar.  Folder loads run on
``FolderLoadWorker`` threads; ``AppState`` decides which result wins.
"""

import os
import tempfile

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QTabWidget, QFileDialog, QMessageBox,
)
from PySide6.QtGui import QAction
from PySide6.QtCore import Qt

from . import APP_NAME, APP_VERSION
from .app_state import AppState
from .constants import PROFILE_FOLDER_NAME, DATA_FOLDER_NAME
from .export import export_all_users
from .gui_user_tab import UserTab
from .load_worker import FolderLoadWorker


class ViewerMainWindow(QMainWindow):
    """Main window for the Tanita Viewer."""

    def __init__(self):
        super().__init__()
        self._state = AppState()
        self._workers = []
        self._last_result = None

        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(1100, 750)

        self._setup_ui()
        self._setup_menu()

        self.statusBar().showMessage("Ready — choose a Tanita folder to begin")

    # ── UI setup ─────────────────────────────────────────────────────

    def _setup_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(6, 6, 6, 6)
        main_layout.setSpacing(6)

        top_row = QHBoxLayout()
        self._btn_choose = QPushButton("Choose Tanita Folder...")
        self._btn_choose.setObjectName("chooseFolderButton")
        self._btn_choose.setToolTip(
            f"Select the folder that contains the {PROFILE_FOLDER_NAME} "
            f"and {DATA_FOLDER_NAME} subfolders"
        )
        self._btn_choose.clicked.connect(lambda *_: self._choose_folder())
        top_row.addWidget(self._btn_choose)

        self._lbl_folder = QLabel("No folder loaded")
        self._lbl_folder.setObjectName("folderPath")
        top_row.addWidget(self._lbl_folder, 1)
        main_layout.addLayout(top_row)

        self._tabs = QTabWidget()
        self._tabs.setObjectName("userTabs")
        self._tabs.currentChanged.connect(self._on_tab_changed)
        main_layout.addWidget(self._tabs, 1)

        self._lbl_empty = QLabel("Load a folder to see measurements")
        self._lbl_empty.setAlignment(Qt.AlignCenter)
        self._lbl_empty.setObjectName("emptyHint")
        main_layout.addWidget(self._lbl_empty, 1)
        self._tabs.setVisible(False)

    def _setup_menu(self):
        menubar = self.menuBar()

        # ── File menu ────────────────────────────────────────────────
        file_menu = menubar.addMenu("File")

        act_choose = QAction("Choose Tanita Folder...", self)
        act_choose.triggered.connect(lambda *_: self._choose_folder())
        file_menu.addAction(act_choose)

        self._act_reload = QAction("Reload", self)
        self._act_reload.setEnabled(False)
        self._act_reload.triggered.connect(lambda *_: self._reload())
        file_menu.addAction(self._act_reload)

        file_menu.addSeparator()

        self._act_export_all = QAction("Export All Users...", self)
        self._act_export_all.setEnabled(False)
        self._act_export_all.triggered.connect(lambda *_: self._export_all())
        file_menu.addAction(self._act_export_all)

        file_menu.addSeparator()

        act_exit = QAction("Exit", self)
        act_exit.triggered.connect(self.close)
        file_menu.addAction(act_exit)

        # ── Examples menu ────────────────────────────────────────────
        examples_menu = menubar.addMenu("Examples")

        act_load_example = QAction("Load Example Data", self)
        act_load_example.triggered.connect(lambda *_: self._load_example())
        examples_menu.addAction(act_load_example)

        # ── Help menu ────────────────────────────────────────────────
        help_menu = menubar.addMenu("Help")

        self._act_diagnostics = QAction("Load Diagnostics...", self)
        self._act_diagnostics.setEnabled(False)
        self._act_diagnostics.triggered.connect(
            lambda *_: self._show_diagnostics()
        )
        help_menu.addAction(self._act_diagnostics)

        act_about = QAction("About", self)
        act_about.triggered.connect(lambda *_: self._show_about())
        help_menu.addAction(act_about)

    # ── Loading ──────────────────────────────────────────────────────

    def _choose_folder(self):
        folder = QFileDialog.getExistingDirectory(
            self, "Select Tanita Folder",
        )
        if not folder:
            return
        self._start_load(folder)

    def _reload(self):
        if self._state.root:
            self._start_load(self._state.root)

    def _load_example(self):
        example_dir = os.path.join(
            tempfile.gettempdir(), 'tanita_viewer_example'
        )
        from .example_data import generate_example_folder
        generate_example_folder(example_dir)
        self._start_load(example_dir)

    def _start_load(self, folder: str):
        ticket = self._state.begin_load()
        worker = FolderLoadWorker(folder, ticket, parent=self)
        worker.finished_result.connect(self._on_load_finished)
        worker.error_occurred.connect(self._on_load_error)
        worker.finished.connect(lambda w=worker: self._on_worker_done(w))
        self._workers.append(worker)
        self.statusBar().showMessage(
            f"Loading {os.path.basename(folder) or folder}..."
        )
        worker.start()

    def closeEvent(self, event):
        # A QThread must not be destroyed while still running
        for worker in list(self._workers):
            worker.wait()
        super().closeEvent(event)

    def _on_worker_done(self, worker):
        if worker in self._workers:
            self._workers.remove(worker)
        worker.deleteLater()

    def _on_load_finished(self, ticket, result):
        """Slot: a worker finished; ignored if a newer load started."""
        if not self._state.complete_load(ticket, result.users, result.root):
            return
        self._last_result = result
        self._rebuild_tabs()
        self._lbl_folder.setText(result.root)
        self._act_reload.setEnabled(True)
        self._act_export_all.setEnabled(bool(result.users))
        self._act_diagnostics.setEnabled(True)

        message = (
            f"Loaded {len(result.users)} user(s), "
            f"{result.measurement_count} measurement(s)"
        )
        if result.diagnostics:
            message += (
                f" — {len(result.diagnostics)} warning(s), "
                f"see Help > Load Diagnostics"
            )
        self.statusBar().showMessage(message)

        if not result.users:
            QMessageBox.warning(
                self, "No Usable Data",
                "The folder was read but no user had a valid profile.",
            )

    def _on_load_error(self, ticket, message):
        """Slot: a worker failed; the previously shown data is kept."""
        if not self._state.fail_load(ticket):
            return
        self.statusBar().showMessage("Load failed — previous data kept")
        QMessageBox.critical(self, "Data Load Error", message)

    def _rebuild_tabs(self):
        self._tabs.blockSignals(True)
        while self._tabs.count():
            widget = self._tabs.widget(0)
            self._tabs.removeTab(0)
            widget.deleteLater()

        selected = self._state.selected_index
        for user in self._state.users:
            pos = self._tabs.addTab(UserTab(user), user.label)
            if user.index == selected:
                self._tabs.setCurrentIndex(pos)
        self._tabs.blockSignals(False)

        has_users = self._tabs.count() > 0
        self._tabs.setVisible(has_users)
        self._lbl_empty.setVisible(not has_users)

    def _on_tab_changed(self, pos):
        tab = self._tabs.widget(pos)
        if isinstance(tab, UserTab):
            self._state.select(tab.user_index)

    # ── Actions ──────────────────────────────────────────────────────

    def _export_all(self):
        users = self._state.users
        if not users:
            return
        folder = QFileDialog.getExistingDirectory(
            self, "Select Output Folder for All Users"
        )
        if not folder:
            return
        self.statusBar().showMessage("Exporting all users...")
        try:
            paths = export_all_users(users, folder)
        except (OSError, ValueError) as exc:
            QMessageBox.critical(
                self, "Export Error",
                f"Failed to export users:\n\n{exc}",
            )
            return
        self.statusBar().showMessage(
            f"Exported {len(paths)} files to {os.path.basename(folder)}",
            5000,
        )

    def _show_diagnostics(self):
        result = self._last_result
        if result is None:
            return
        box = QMessageBox(self)
        box.setWindowTitle("Load Diagnostics")
        box.setIcon(QMessageBox.Information)
        summary = (
            f"{len(result.diagnostics)} warning(s) while loading "
            f"{result.root}."
        )
        if result.unknown_key_count:
            summary += (
                f"\n{result.unknown_key_count} unknown profile tag(s) "
                f"were ignored."
            )
        box.setText(summary)
        if result.diagnostics:
            box.setDetailedText("\n".join(result.diagnostics))
        box.exec()

    def _show_about(self):
        QMessageBox.about(
            self,
            f"About {APP_NAME}",
            f"<h3>{APP_NAME} v{APP_VERSION}</h3>"
            f"<p>Viewer for Tanita body-composition scale exports.</p>"
            f"<p>Reads the {PROFILE_FOLDER_NAME}/PROF<i>N</i>.CSV and "
            f"{DATA_FOLDER_NAME}/DATA<i>N</i>.CSV files written by the "
            f"scale and shows each user's profile, measurements and "
            f"trends.</p>",
        )
