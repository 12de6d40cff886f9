"""
Primitive value parsers for Tanita record tokens.

The scale occasionally writes blank or garbled values.  Field decoders
therefore never raise: a token that does not parse becomes the zero
value of its type so that one bad value cannot sink a whole record.
"""

import math
import re
from typing import Optional

from .constants import U8_MAX, U16_MAX

_UNSIGNED_RE = re.compile(r"\+?[0-9]+", re.ASCII)


def unquote(text: str) -> str:
    """Trim whitespace, then strip one pair of surrounding double quotes.

    >>> unquote('  "BC-601" ')
    'BC-601'
    >>> unquote('"half')
    '"half'
    """
    s = text.strip()
    if len(s) >= 2 and s.startswith('"') and s.endswith('"'):
        return s[1:-1]
    return s


def parse_unsigned(text: str, max_value: int) -> Optional[int]:
    """Parse an unsigned decimal integer no larger than *max_value*.

    Accepts an optional leading ``+``.  Returns ``None`` for anything
    else (signs, spaces, decimals, out-of-range values).
    """
    if not _UNSIGNED_RE.fullmatch(text):
        return None
    value = int(text)
    if value > max_value:
        return None
    return value


def parse_u8(text: str) -> int:
    value = parse_unsigned(text, U8_MAX)
    return 0 if value is None else value


def parse_u16(text: str) -> int:
    value = parse_unsigned(text, U16_MAX)
    return 0 if value is None else value


def parse_float(text: str) -> float:
    """Parse a decimal float, falling back to ``0.0``.

    Non-finite values (``inf``, ``nan``) are not valid measurements and
    also fall back to ``0.0``.
    """
    s = text.strip()
    # float() would accept digit-group underscores and padding
    if not s or '_' in s or s != text:
        return 0.0
    try:
        value = float(s)
    except ValueError:
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value
