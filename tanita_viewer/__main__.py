"""
Entry point for the Tanita Viewer.

Usage:
    python -m tanita_viewer
"""

import sys
import os
import traceback


def _check_dependencies():
    """Verify required packages are installed."""
    missing = []
    for module, package in (("PySide6", "PySide6"),
                            ("matplotlib", "matplotlib"),
                            ("numpy", "numpy"),
                            ("openpyxl", "openpyxl")):
        try:
            __import__(module)
        except ImportError:
            missing.append(package)

    if missing:
        print(
            f"Missing required packages: {', '.join(missing)}\n"
            f"Install with: pip install {' '.join(missing)}",
            file=sys.stderr,
        )
        sys.exit(1)


def _exception_hook(exc_type, exc_value, exc_tb):
    """Global exception handler so a slot error does not kill the window."""
    msg = ''.join(traceback.format_exception(exc_type, exc_value, exc_tb))
    print(f"Unhandled exception:\n{msg}", file=sys.stderr)

    from PySide6.QtWidgets import QMessageBox, QApplication
    if QApplication.instance() is not None:
        QMessageBox.critical(
            None, "Unhandled Error",
            f"An unexpected error occurred:\n\n"
            f"{exc_type.__name__}: {exc_value}\n\n"
            f"See console for full traceback.",
        )


def main():
    """Launch the Tanita Viewer GUI."""
    _check_dependencies()

    sys.excepthook = _exception_hook

    # Backend must be chosen before any Qt widget import
    os.environ.setdefault("QT_API", "pyside6")
    import matplotlib
    matplotlib.use('QtAgg')

    from PySide6.QtWidgets import QApplication
    from PySide6.QtGui import QFont, QFontDatabase

    from .constants import FONT_FAMILIES
    from .theme import get_dark_stylesheet
    from .gui_main import ViewerMainWindow

    app = QApplication(sys.argv)
    app.setStyle("Fusion")

    font = QFont()
    for family in FONT_FAMILIES:
        if QFontDatabase.hasFamily(family):
            font.setFamily(family)
            break
    font.setPointSize(10)
    app.setFont(font)

    app.setStyleSheet(get_dark_stylesheet())

    window = ViewerMainWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
