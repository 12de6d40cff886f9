"""
Text formatting of profiles and measurements for tables and CSV export.

Shared by the GUI table and ``export.export_measurements_csv`` so the
screen and the exported file always agree.
"""

from typing import List

from .constants import MEASUREMENT_COLUMNS, MISSING_VALUE_TEXT
from .data_model import Measurement, Profile, UserMeasurementSet


def format_value(value) -> str:
    """Render one cell; ``None`` (absent optional value) becomes ``-``."""
    if value is None:
        return MISSING_VALUE_TEXT
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def measurement_row(measurement: Measurement) -> List[str]:
    row = []
    for _header, attr in MEASUREMENT_COLUMNS:
        if attr == 'date_time':
            row.append(measurement.date_time.format())
        else:
            row.append(format_value(getattr(measurement, attr)))
    return row


def measurement_headers() -> List[str]:
    return [header for header, _attr in MEASUREMENT_COLUMNS]


def measurement_rows(user: UserMeasurementSet) -> List[List[str]]:
    return [measurement_row(m) for m in user.measurements]


def profile_values(profile: Profile) -> List[str]:
    """Values in ``PROFILE_FIELDS`` order."""
    return [
        profile.birth_date.format(),
        profile.gender.label,
        format_value(profile.height_cm),
        str(profile.activity_level_code),
        str(profile.body_type_code),
    ]
