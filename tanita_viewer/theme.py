"""
Theme and stylesheet for the Tanita Viewer.

The dark Qt stylesheet is assembled from one block per part of the
window: the folder bar, the user tabs, the profile header, the
measurement table and the chart panel.  Widgets that need their own look
are picked out by ``objectName`` (set in ``gui_main`` / ``gui_user_tab``)
rather than with inline style sheets.  ``apply_plot_style`` pushes a
matplotlib style dict into ``rcParams``.
"""

from .constants import DARK_COLORS


def _base_rules(c: dict) -> str:
    return f"""
    QMainWindow, QWidget {{
        background-color: {c['bg']};
        color: {c['fg']};
        font-size: 13px;
    }}
    QMenuBar, QStatusBar {{
        background-color: {c['bg_alt']};
        color: {c['fg_dim']};
    }}
    QMenuBar::item:selected, QMenu::item:selected {{
        background-color: {c['surface0']};
        color: {c['fg_bright']};
    }}
    QMenu {{
        background-color: {c['bg_alt']};
        border: 1px solid {c['overlay0']};
        padding: 4px 0;
    }}
    QMenu::item {{ padding: 4px 20px; }}
    QMenu::item:disabled {{ color: {c['overlay0']}; }}
    QMessageBox QTextEdit {{
        background-color: {c['bg_input']};
        font-family: monospace;
        font-size: 12px;
    }}
    """


def _folder_bar_rules(c: dict) -> str:
    return f"""
    QPushButton {{
        background-color: {c['surface0']};
        border: 1px solid {c['overlay0']};
        border-radius: 3px;
        padding: 4px 12px;
    }}
    QPushButton:hover {{ border-color: {c['accent_hover']}; }}
    QPushButton#chooseFolderButton {{
        background-color: {c['accent']};
        color: {c['bg']};
        font-weight: bold;
        border: none;
        padding: 6px 18px;
    }}
    QPushButton#chooseFolderButton:hover {{
        background-color: {c['accent_hover']};
    }}
    QLabel#folderPath {{
        color: {c['fg_dim']};
        font-family: monospace;
        font-size: 11px;
    }}
    QLabel#emptyHint {{
        color: {c['overlay0']};
        font-size: 16px;
    }}
    """


def _user_tab_rules(c: dict) -> str:
    return f"""
    QTabWidget#userTabs::pane {{
        border: none;
        border-top: 2px solid {c['surface0']};
    }}
    QTabWidget#userTabs QTabBar::tab {{
        background: transparent;
        color: {c['fg_dim']};
        padding: 6px 20px;
        border-bottom: 2px solid transparent;
    }}
    QTabWidget#userTabs QTabBar::tab:selected {{
        color: {c['fg_bright']};
        border-bottom: 2px solid {c['green']};
    }}
    """


def _profile_header_rules(c: dict) -> str:
    return f"""
    QGroupBox#profileHeader {{
        background-color: {c['bg_alt']};
        border: none;
        border-left: 3px solid {c['green']};
        margin-top: 18px;
        padding: 8px 6px 4px 6px;
    }}
    QGroupBox#profileHeader::title {{
        subcontrol-origin: margin;
        subcontrol-position: top left;
        color: {c['green']};
        font-weight: bold;
        padding: 0 4px;
    }}
    QGroupBox#profileHeader QLabel {{ background: transparent; }}
    QLabel#profileFieldTitle {{
        color: {c['fg_dim']};
        font-size: 11px;
    }}
    QLabel#profileFieldValue {{
        color: {c['fg_bright']};
        font-size: 15px;
        font-weight: bold;
    }}
    """


def _measurement_table_rules(c: dict) -> str:
    return f"""
    QTableWidget#measurementTable {{
        background-color: {c['bg_widget']};
        alternate-background-color: {c['bg_alt']};
        gridline-color: {c['surface0']};
        border: 1px solid {c['surface0']};
        selection-background-color: {c['selection']};
        selection-color: {c['fg_bright']};
    }}
    QTableWidget#measurementTable QHeaderView::section {{
        background-color: {c['surface0']};
        color: {c['yellow']};
        padding: 3px 6px;
        border: none;
        border-right: 1px solid {c['bg']};
    }}
    QTableWidget#measurementTable QTableCornerButton::section {{
        background-color: {c['surface0']};
        border: none;
    }}
    QScrollBar:horizontal, QScrollBar:vertical {{
        background: {c['bg_alt']};
        border: none;
        width: 10px;
        height: 10px;
    }}
    QScrollBar::handle:horizontal, QScrollBar::handle:vertical {{
        background: {c['overlay0']};
        border-radius: 5px;
        min-width: 24px;
        min-height: 24px;
    }}
    QScrollBar::add-line, QScrollBar::sub-line,
    QScrollBar::add-page, QScrollBar::sub-page {{
        background: none;
        width: 0;
        height: 0;
    }}
    """


def _chart_panel_rules(c: dict) -> str:
    return f"""
    QSplitter#tabSplitter::handle:vertical {{
        background-color: {c['surface0']};
        height: 5px;
        margin: 1px 0;
        border-radius: 2px;
    }}
    QSplitter#tabSplitter::handle:vertical:hover {{
        background-color: {c['accent']};
    }}
    QWidget#chartPanel {{ background-color: {c['bg_alt']}; }}
    QWidget#chartPanel QToolBar {{
        background: transparent;
        border: none;
    }}
    """


def get_dark_stylesheet() -> str:
    """Generate the dark mode stylesheet."""
    c = DARK_COLORS
    return "".join(
        rules(c) for rules in (
            _base_rules,
            _folder_bar_rules,
            _user_tab_rules,
            _profile_header_rules,
            _measurement_table_rules,
            _chart_panel_rules,
        )
    )


def apply_plot_style(style_dict: dict) -> None:
    """Apply a style dictionary to matplotlib rcParams.

    Parameters
    ----------
    style_dict : dict
        One of ``PLOT_STYLE_DARK`` or ``PLOT_STYLE_LIGHT``.
    """
    import matplotlib as mpl
    for key, value in style_dict.items():
        mpl.rcParams[key] = value
