"""
Decoders for the tagged ``KEY,VALUE,KEY,VALUE,...`` lines written by
Tanita scales.

Every line of a ``PROF{N}.CSV`` or ``DATA{N}.CSV`` file is a flat run of
alternating tags and values with no header row, e.g.::

    {0,16,~0,1,~1,1,~2,1,MO,"BC-601",DT,"14/06/2019",Ti,"08:18:58",...

``ProfileRecord`` and ``DataRecord`` are the raw, permissively decoded
forms of those lines.  Missing or garbled values decode to zero values;
validation (dates, gender) happens later in ``data_model``.

Tags outside the known schema are discarded with a warning for
profiles and kept verbatim in ``DataRecord.extras`` for measurements,
so nothing the scale writes is silently lost.
"""

from dataclasses import dataclass, field, fields
from typing import Dict, Iterator, List, Optional, Tuple

from .constants import TOKEN_SEPARATOR
from .errors import MalformedLineWarning, UnknownKeyWarning, report
from .value_parsers import parse_float, parse_u8, parse_u16, unquote


# ── Token walking ────────────────────────────────────────────────────────

def iter_tagged_pairs(row: str, sink=None) -> Iterator[Tuple[str, str]]:
    """Yield ``(key, raw_value)`` pairs from one tagged line.

    Keys are unquoted; values are returned exactly as written.  A
    trailing key without a value is malformed and skipped with a
    ``MalformedLineWarning`` (sent to *sink* when one is given).
    """
    tokens = row.rstrip('\r\n').split(TOKEN_SEPARATOR)
    n_complete = len(tokens) - len(tokens) % 2
    for i in range(0, n_complete, 2):
        yield unquote(tokens[i]), tokens[i + 1]
    if n_complete < len(tokens):
        report(
            f"Dangling key {tokens[-1].strip()!r} without a value "
            f"— ignored.",
            MalformedLineWarning,
            sink,
            stacklevel=3,
        )


# Value decoders keyed by field kind
_DECODERS = {
    'str': unquote,
    'u8': lambda v: parse_u8(unquote(v)),
    'u16': lambda v: parse_u16(unquote(v)),
    'float': lambda v: parse_float(unquote(v)),
}


def _encode_value(kind: str, value) -> str:
    if kind == 'str':
        return f'"{value}"'
    if kind == 'float':
        return repr(float(value))
    return str(value)


# ── Profile record (PROF{N}.CSV) ─────────────────────────────────────────

# (tag, attribute, kind)
_PROFILE_SCHEMA = [
    ("MO", "model", 'str'),
    ("DB", "birth_date_dmy", 'str'),
    ("Bt", "body_type_code", 'u8'),
    ("GE", "gender_code", 'u8'),
    ("Hm", "height_cm", 'float'),
    ("AL", "activity_level_code", 'u8'),
    ("CS", "checksum", 'str'),
]
_PROFILE_BY_KEY = {key: (attr, kind) for key, attr, kind in _PROFILE_SCHEMA}


@dataclass(frozen=True)
class ProfileRecord:
    """Raw user profile as stored in ``SYSTEM/PROF{N}.CSV``.

    Parameters
    ----------
    model : str
        ``MO`` device model, e.g. ``"BC-601"``.
    birth_date_dmy : str
        ``DB`` date of birth as printed by the device, ``"14/06/1991"``.
    body_type_code : int
        ``Bt`` body / athlete mode code (device specific).
    gender_code : int
        ``GE`` gender code, 1 = male, 2 = female.
    height_cm : float
        ``Hm`` height in centimetres.
    activity_level_code : int
        ``AL`` activity level menu selection.
    checksum : str
        ``CS`` trailing check code, kept as written.
    """
    model: str = ""
    birth_date_dmy: str = ""
    body_type_code: int = 0
    gender_code: int = 0
    height_cm: float = 0.0
    activity_level_code: int = 0
    checksum: str = ""

    @classmethod
    def from_csv_row(cls, row: str, sink=None) -> "ProfileRecord":
        values: Dict[str, object] = {}
        for key, raw in iter_tagged_pairs(row, sink):
            entry = _PROFILE_BY_KEY.get(key)
            if entry is None:
                report(
                    f"Unknown profile key {key!r} with value {raw!r} "
                    f"— ignored.",
                    UnknownKeyWarning,
                    sink,
                    stacklevel=2,
                )
                continue
            attr, kind = entry
            values[attr] = _DECODERS[kind](raw)
        return cls(**values)

    def to_csv_row(self) -> str:
        tokens: List[str] = []
        for key, attr, kind in _PROFILE_SCHEMA:
            tokens += [key, _encode_value(kind, getattr(self, attr))]
        return TOKEN_SEPARATOR.join(tokens)


# ── Measurement record (DATA{N}.CSV) ─────────────────────────────────────

# (tag, attribute, kind, optional)
_DATA_SCHEMA = [
    # identity / timestamp
    ("MO", "model", 'str', False),
    ("DT", "date_dmy", 'str', False),
    ("Ti", "time_hms", 'str', False),
    # profile echo at measurement time
    ("Bt", "body_type_code", 'u8', False),
    ("GE", "gender_code", 'u8', False),
    ("AG", "age_years", 'u8', False),
    ("Hm", "height_cm", 'float', False),
    ("AL", "activity_level_code", 'u8', False),
    # core metrics
    ("Wk", "weight_kg", 'float', False),
    ("MI", "bmi", 'float', False),
    ("FW", "fat_percent", 'float', False),
    # segmental fat
    ("Fr", "fat_right_arm_pct", 'float', False),
    ("Fl", "fat_left_arm_pct", 'float', False),
    ("FR", "fat_right_leg_pct", 'float', False),
    ("FL", "fat_left_leg_pct", 'float', False),
    ("FT", "fat_trunk_pct", 'float', False),
    # muscle, whole body and segmental (newer firmware only)
    ("mW", "muscle_percent", 'float', True),
    ("mr", "muscle_right_arm_pct", 'float', True),
    ("ml", "muscle_left_arm_pct", 'float', True),
    ("mR", "muscle_right_leg_pct", 'float', True),
    ("mL", "muscle_left_leg_pct", 'float', True),
    ("mT", "muscle_trunk_pct", 'float', True),
    # other derived metrics
    ("bw", "bone_kg", 'float', True),
    ("ww", "water_percent", 'float', True),
    ("IF", "visceral_fat_rating", 'u8', True),
    ("rA", "metabolic_age_years", 'u8', True),
    ("rD", "daily_calorie_intake_kcal", 'u16', True),
    # trailer
    ("CS", "checksum", 'str', False),
]
_DATA_BY_KEY = {key: (attr, kind) for key, attr, kind, _ in _DATA_SCHEMA}

KNOWN_PROFILE_KEYS = frozenset(_PROFILE_BY_KEY)
KNOWN_DATA_KEYS = frozenset(_DATA_BY_KEY)


@dataclass(frozen=True)
class DataRecord:
    """Raw measurement as stored in one line of ``DATA/DATA{N}.CSV``.

    Required-style fields default to zero values when their tag is
    missing.  Optional fields are ``None`` unless their tag occurred in
    the line, whatever the value then decodes to.  ``extras`` holds every
    unrecognised ``(key, raw_value)`` pair in line order.
    """
    model: str = ""
    date_dmy: str = ""
    time_hms: str = ""

    body_type_code: int = 0
    gender_code: int = 0
    age_years: int = 0
    height_cm: float = 0.0
    activity_level_code: int = 0

    weight_kg: float = 0.0
    bmi: float = 0.0
    fat_percent: float = 0.0

    fat_right_arm_pct: float = 0.0
    fat_left_arm_pct: float = 0.0
    fat_right_leg_pct: float = 0.0
    fat_left_leg_pct: float = 0.0
    fat_trunk_pct: float = 0.0

    muscle_percent: Optional[float] = None
    muscle_right_arm_pct: Optional[float] = None
    muscle_left_arm_pct: Optional[float] = None
    muscle_right_leg_pct: Optional[float] = None
    muscle_left_leg_pct: Optional[float] = None
    muscle_trunk_pct: Optional[float] = None

    bone_kg: Optional[float] = None
    water_percent: Optional[float] = None
    visceral_fat_rating: Optional[int] = None
    metabolic_age_years: Optional[int] = None
    daily_calorie_intake_kcal: Optional[int] = None

    checksum: str = ""

    extras: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @classmethod
    def from_csv_row(cls, row: str, sink=None) -> "DataRecord":
        values: Dict[str, object] = {}
        extras: List[Tuple[str, str]] = []
        for key, raw in iter_tagged_pairs(row, sink):
            entry = _DATA_BY_KEY.get(key)
            if entry is None:
                extras.append((key, raw))
                continue
            attr, kind = entry
            values[attr] = _DECODERS[kind](raw)
        return cls(extras=tuple(extras), **values)

    def to_csv_row(self) -> str:
        """Render the record as a device-style tagged line.

        Extras come first (where the scale writes its unit and format
        tags), then the known fields in schema order.  Absent optional
        fields are left out.
        """
        tokens: List[str] = []
        for key, raw in self.extras:
            tokens += [key, raw]
        for key, attr, kind, optional in _DATA_SCHEMA:
            value = getattr(self, attr)
            if optional and value is None:
                continue
            tokens += [key, _encode_value(kind, value)]
        return TOKEN_SEPARATOR.join(tokens)


DATA_FIELD_NAMES = tuple(f.name for f in fields(DataRecord))
