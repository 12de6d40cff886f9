"""
Body-composition trend chart for the Tanita Viewer.

Plots weight (left axis) and fat / muscle / water percentages (right
axis) for one user over time.  Optional series the scale did not record
are masked out rather than drawn as zeros.
"""

from typing import List, Optional

import numpy as np
from matplotlib.figure import Figure

from .constants import TREND_PALETTE, EXPORT_BG_COLOR
from .data_model import Measurement, UserMeasurementSet


def _series(measurements: List[Measurement], attr: str) -> np.ndarray:
    """Float array for *attr*, with ``NaN`` where the value is absent."""
    values = [getattr(m, attr) for m in measurements]
    return np.array(
        [np.nan if v is None else float(v) for v in values],
        dtype=np.float64,
    )


def chartable_measurements(
    user: UserMeasurementSet,
) -> List[Measurement]:
    """Measurements with a real calendar timestamp, oldest first."""
    dated = [m for m in user.measurements
             if m.date_time.to_datetime() is not None]
    return sorted(dated, key=lambda m: m.date_time.to_datetime())


def render_trend(
    fig: Figure,
    user: Optional[UserMeasurementSet],
    *,
    for_export: bool = False,
) -> None:
    """Render the weight / composition trend for *user* on *fig*.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure to draw on (will be cleared).
    user : UserMeasurementSet or None
        ``None`` draws an empty placeholder.
    for_export : bool
        If ``True``, use light-theme colours.
    """
    fig.clf()
    if for_export:
        fig.set_facecolor(EXPORT_BG_COLOR)
    ax = fig.add_subplot(111)

    measurements = chartable_measurements(user) if user is not None else []
    if not measurements:
        ax.text(0.5, 0.5, 'No dated measurements',
                transform=ax.transAxes, ha='center', va='center')
        ax.set_xticks([])
        ax.set_yticks([])
        return

    times = [m.date_time.to_datetime() for m in measurements]
    pal = TREND_PALETTE

    weight = _series(measurements, 'weight_kg')
    ax.plot(
        times, weight,
        color=pal['weight'], linewidth=1.2, marker='o', markersize=3,
        label='Weight (kg)', zorder=3,
    )
    ax.set_ylabel("Weight (kg)", fontsize=8)

    ax_pct = ax.twinx()
    percent_series = [
        ('fat_percent', 'Fat (%)', pal['fat']),
        ('muscle_percent', 'Muscle (%)', pal['muscle']),
        ('water_percent', 'Water (%)', pal['water']),
    ]
    for attr, label, color in percent_series:
        values = _series(measurements, attr)
        if not np.any(np.isfinite(values)):
            continue
        masked = np.ma.masked_where(~np.isfinite(values), values)
        ax_pct.plot(
            times, masked,
            color=color, linewidth=1.0, linestyle='--', marker='s',
            markersize=2.5, label=label, zorder=2,
        )
    ax_pct.set_ylabel("Percent (%)", fontsize=8)

    ax.set_title(
        f"Body Composition Trend — {user.label}",
        fontsize=10, fontweight='bold',
    )
    ax.grid(linewidth=0.4, alpha=0.5)
    fig.autofmt_xdate()

    handles, labels = ax.get_legend_handles_labels()
    handles_pct, labels_pct = ax_pct.get_legend_handles_labels()
    ax.legend(
        handles + handles_pct, labels + labels_pct,
        loc='upper left', fontsize=6.5, framealpha=0.9,
    )

    fig.tight_layout(pad=1.5)
