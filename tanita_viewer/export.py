"""
Export utilities for the Tanita Viewer.

PNG export of the trend chart (re-rendered in the light theme on a
fresh figure so the on-screen dark figure is never touched), clipboard
copy, CSV and Excel export of the measurement table, and batch export
of every loaded user.
"""

import csv
import io
import os
from typing import Iterable, List

import matplotlib as mpl
from matplotlib.figure import Figure

from .chart_trend import render_trend
from .constants import (
    EXPORT_DPI, EXPORT_WIDTH_INCHES, CLIPBOARD_DPI, PLOT_STYLE_LIGHT,
    MEASUREMENT_COLUMNS, PROFILE_FIELDS, ALL_USERS_WORKBOOK_NAME,
)
from .data_model import UserMeasurementSet
from .table_format import (
    measurement_headers, measurement_rows, profile_values,
)

# Height / width of exported trend charts
_EXPORT_ASPECT = 0.55


def render_export_figure(
    user: UserMeasurementSet,
    *,
    width_inches: float = EXPORT_WIDTH_INCHES,
) -> Figure:
    """Render *user*'s trend chart on a new light-theme figure."""
    with mpl.rc_context(PLOT_STYLE_LIGHT):
        fig = Figure(figsize=(width_inches, width_inches * _EXPORT_ASPECT))
        render_trend(fig, user, for_export=True)
    return fig


def export_png(
    user: UserMeasurementSet,
    filepath: str,
    *,
    dpi: int = EXPORT_DPI,
    width_inches: float = EXPORT_WIDTH_INCHES,
) -> None:
    """Export *user*'s trend chart as a light-theme PNG.

    Parameters
    ----------
    user : UserMeasurementSet
    filepath : str
        Output file path (should end with ``.png``).
    dpi : int
        Export resolution (default 300).
    width_inches : float
        Figure width in inches (default 8.0).
    """
    fig = render_export_figure(user, width_inches=width_inches)
    with mpl.rc_context(PLOT_STYLE_LIGHT):
        fig.savefig(
            filepath,
            dpi=dpi,
            bbox_inches='tight',
            facecolor=fig.get_facecolor(),
            edgecolor='none',
            pad_inches=0.1,
        )


def copy_to_clipboard(user: UserMeasurementSet,
                      dpi: int = CLIPBOARD_DPI) -> bool:
    """Copy *user*'s trend chart to the system clipboard as an image.

    Returns ``True`` on success, ``False`` if the clipboard is
    unavailable.
    """
    try:
        from PySide6.QtWidgets import QApplication
        from PySide6.QtGui import QImage
    except ImportError:
        return False

    fig = render_export_figure(user)
    buf = io.BytesIO()
    fig.savefig(
        buf, format='png', dpi=dpi,
        bbox_inches='tight',
        facecolor=fig.get_facecolor(),
        edgecolor='none',
    )
    buf.seek(0)
    img = QImage()
    img.loadFromData(buf.read())

    clipboard = QApplication.clipboard()
    if clipboard is None:
        return False
    clipboard.setImage(img)
    return True


def export_measurements_csv(user: UserMeasurementSet, filepath: str) -> None:
    """Write *user*'s measurement table (same columns as the GUI) to CSV."""
    with open(filepath, 'w', encoding='utf-8', newline='') as fh:
        writer = csv.writer(fh)
        writer.writerow(measurement_headers())
        writer.writerows(measurement_rows(user))


def _xlsx_cell(measurement, attr):
    if attr == 'date_time':
        dt = measurement.date_time.to_datetime()
        return dt if dt is not None else measurement.date_time.format()
    return getattr(measurement, attr)


def export_measurements_xlsx(
    users: Iterable[UserMeasurementSet],
    filepath: str,
) -> None:
    """Write a workbook with a profile sheet and one sheet per user.

    Numbers stay numeric and timestamps are real Excel dates, so the
    workbook can be charted or filtered directly.  Absent optional
    values are left as empty cells.
    """
    import openpyxl
    from openpyxl.styles import Font

    bold = Font(bold=True)
    wb = openpyxl.Workbook()
    ws_profiles = wb.active
    ws_profiles.title = "Profiles"
    ws_profiles.append(["User"] + PROFILE_FIELDS + ["Measurements"])

    for user in users:
        ws_profiles.append(
            [user.label] + profile_values(user.profile)
            + [len(user.measurements)]
        )

        ws = wb.create_sheet(title=user.label)
        ws.append(measurement_headers())
        for m in user.measurements:
            ws.append(
                [_xlsx_cell(m, attr) for _h, attr in MEASUREMENT_COLUMNS]
            )
        for cell in ws[1]:
            cell.font = bold
        ws.freeze_panes = "B2"
        ws.column_dimensions['A'].width = 20
        for row in ws.iter_rows(min_row=2, max_col=1):
            row[0].number_format = 'dd/mm/yyyy hh:mm:ss'

    for cell in ws_profiles[1]:
        cell.font = bold
    ws_profiles.freeze_panes = "B2"

    wb.save(filepath)


def export_all_users(
    users: Iterable[UserMeasurementSet],
    output_dir: str,
    *,
    dpi: int = EXPORT_DPI,
    width_inches: float = EXPORT_WIDTH_INCHES,
) -> List[str]:
    """Export a trend PNG and a table CSV for every user, plus one
    workbook holding all of them.

    Returns
    -------
    list of str
        Paths of exported files.
    """
    users = list(users)
    os.makedirs(output_dir, exist_ok=True)
    paths = []
    for user in users:
        stem = user.label.replace(' ', '_')
        png_path = os.path.join(output_dir, f"{stem}_trend.png")
        export_png(user, png_path, dpi=dpi, width_inches=width_inches)
        paths.append(png_path)

        csv_path = os.path.join(output_dir, f"{stem}_measurements.csv")
        export_measurements_csv(user, csv_path)
        paths.append(csv_path)

    xlsx_path = os.path.join(output_dir, ALL_USERS_WORKBOOK_NAME)
    export_measurements_xlsx(users, xlsx_path)
    paths.append(xlsx_path)
    return paths
