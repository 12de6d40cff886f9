"""
Background folder loading for the Tanita Viewer.

Directory listing and file reads block, so each load runs on its own
``QThread``.  The worker carries the ticket issued by ``AppState`` so the
window can discard results from a load that a newer selection has
superseded.
"""

from PySide6.QtCore import QThread, Signal

from .errors import TanitaLoadError
from .loader import load_with_diagnostics


class FolderLoadWorker(QThread):
    """
    Loads one Tanita export folder off the GUI thread.

    Signals
    -------
    finished_result : Signal(int, object)
        Emits ``(ticket, LoadResult)`` when the load succeeds.
    error_occurred : Signal(int, str)
        Emits ``(ticket, message)`` when the folder cannot be loaded.
    """

    finished_result = Signal(int, object)
    error_occurred = Signal(int, str)

    def __init__(self, root: str, ticket: int, parent=None):
        super().__init__(parent)
        self._root = root
        self._ticket = ticket

    def run(self):  # noqa: D401 – Qt override
        try:
            result = load_with_diagnostics(self._root)
        except TanitaLoadError as exc:
            self.error_occurred.emit(self._ticket, str(exc))
        except Exception as exc:
            self.error_occurred.emit(
                self._ticket, f"{type(exc).__name__}: {exc}"
            )
        else:
            self.finished_result.emit(self._ticket, result)
