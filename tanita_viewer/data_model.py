"""
Data model for the Tanita Viewer.

Immutable dataclasses representing validated scale data.  Raw records
from ``records`` are promoted into ``Profile`` and ``Measurement``
objects here; a record that fails validation produces ``None`` rather
than an exception so callers decide how much of a file to drop.

The model is constructed once per folder load and never mutated. The
GUI receives it read-only and replaces it wholesale on the next load.
"""

import datetime
import enum
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .constants import (
    DATE_SEPARATOR, TIME_SEPARATOR, U8_MAX, U16_MAX,
    GENDER_CODE_MALE, GENDER_CODE_FEMALE,
)
from .records import DATA_FIELD_NAMES, DataRecord, ProfileRecord
from .value_parsers import parse_unsigned


def _split_three(text: str, separator: str) -> Optional[Tuple[str, str, str]]:
    parts = text.strip().strip('"').split(separator)
    if len(parts) != 3:
        return None
    return parts[0], parts[1], parts[2]


@dataclass(frozen=True)
class Date:
    """Calendar date as written by the scale (``dd/mm/yyyy``).

    Components are only checked to be unsigned integers; calendar
    validity is checked by ``to_date``.
    """
    days: int
    months: int
    years: int

    @classmethod
    def parse(cls, text: str) -> Optional["Date"]:
        """Parse ``d/m/y``; any other shape gives ``None``.

        >>> Date.parse("14/06/1991")
        Date(days=14, months=6, years=1991)
        >>> Date.parse("14/06") is None
        True
        """
        parts = _split_three(text, DATE_SEPARATOR)
        if parts is None:
            return None
        days = parse_unsigned(parts[0], U8_MAX)
        months = parse_unsigned(parts[1], U8_MAX)
        years = parse_unsigned(parts[2], U16_MAX)
        if days is None or months is None or years is None:
            return None
        return cls(days=days, months=months, years=years)

    def format(self) -> str:
        return f"{self.days:02d}/{self.months:02d}/{self.years:04d}"

    def to_date(self) -> Optional[datetime.date]:
        try:
            return datetime.date(self.years, self.months, self.days)
        except ValueError:
            return None


@dataclass(frozen=True)
class Time:
    """Time of day as written by the scale (``hh:mm:ss``)."""
    hours: int
    minutes: int
    seconds: int

    @classmethod
    def parse(cls, text: str) -> Optional["Time"]:
        parts = _split_three(text, TIME_SEPARATOR)
        if parts is None:
            return None
        values = [parse_unsigned(p, U8_MAX) for p in parts]
        if any(v is None for v in values):
            return None
        return cls(hours=values[0], minutes=values[1], seconds=values[2])

    def format(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}"

    def to_time(self) -> Optional[datetime.time]:
        try:
            return datetime.time(self.hours, self.minutes, self.seconds)
        except ValueError:
            return None


@dataclass(frozen=True)
class DateTime:
    date: Date
    time: Time

    @classmethod
    def parse(cls, date_dmy: str, time_hms: str) -> Optional["DateTime"]:
        """Combine a date and a time string; ``None`` if either fails."""
        date = Date.parse(date_dmy)
        time = Time.parse(time_hms)
        if date is None or time is None:
            return None
        return cls(date=date, time=time)

    def format(self) -> str:
        return f"{self.date.format()} {self.time.format()}"

    def to_datetime(self) -> Optional[datetime.datetime]:
        """Return a ``datetime`` for charting, or ``None`` if the date
        or time is not a real calendar value."""
        d = self.date.to_date()
        t = self.time.to_time()
        if d is None or t is None:
            return None
        return datetime.datetime.combine(d, t)


class GenderKind(enum.Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


@dataclass(frozen=True)
class Gender:
    """Gender decoded from the device code; every code maps to a kind."""
    code: int

    @property
    def kind(self) -> GenderKind:
        if self.code == GENDER_CODE_MALE:
            return GenderKind.MALE
        if self.code == GENDER_CODE_FEMALE:
            return GenderKind.FEMALE
        return GenderKind.OTHER

    @property
    def label(self) -> str:
        kind = self.kind
        if kind is GenderKind.OTHER:
            return f"Unknown ({self.code})"
        return kind.value


@dataclass(frozen=True)
class Profile:
    """Validated user profile.

    Parameters
    ----------
    birth_date : Date
        Parsed ``DB`` field.  A profile without a parseable birth date
        is never built.
    gender : Gender
    height_cm : float
    activity_level_code : int
    body_type_code : int
    model : str
        Device model that wrote the profile.
    """
    birth_date: Date
    gender: Gender
    height_cm: float
    activity_level_code: int
    body_type_code: int
    model: str = ""

    @classmethod
    def from_record(cls, record: ProfileRecord) -> Optional["Profile"]:
        birth_date = Date.parse(record.birth_date_dmy)
        if birth_date is None:
            return None
        return cls(
            birth_date=birth_date,
            gender=Gender(record.gender_code),
            height_cm=record.height_cm,
            activity_level_code=record.activity_level_code,
            body_type_code=record.body_type_code,
            model=record.model,
        )


@dataclass(frozen=True)
class Measurement(DataRecord):
    """A ``DataRecord`` whose date and time have been validated.

    Every raw field is carried through unchanged; ``date_time`` is the
    parsed form of ``date_dmy`` and ``time_hms``.
    """
    date_time: DateTime = field(kw_only=True)

    @classmethod
    def from_record(cls, record: DataRecord) -> Optional["Measurement"]:
        date_time = DateTime.parse(record.date_dmy, record.time_hms)
        if date_time is None:
            return None
        carried = {name: getattr(record, name) for name in DATA_FIELD_NAMES}
        return cls(date_time=date_time, **carried)


@dataclass(frozen=True)
class UserMeasurementSet:
    """All data for one user (one ``PROF{N}`` / ``DATA{N}`` pair).

    Parameters
    ----------
    index : int
        Pair index ``N`` from the file names.
    profile : Profile
    measurements : tuple of Measurement
        In file order; lines that failed validation are absent.
    """
    index: int
    profile: Profile
    measurements: Tuple[Measurement, ...]

    @property
    def label(self) -> str:
        return f"User {self.index}"
