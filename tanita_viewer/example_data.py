"""
Example data generator for the Tanita Viewer.

Creates a synthetic Tanita export folder (``SYSTEM/PROF{N}.CSV`` and
``DATA/DATA{N}.CSV``) in the scale's own line format, for demonstration
and testing.  Two users are written:

- User 1 on newer firmware: full segmental muscle, bone, water and
  metabolic fields, plus one line with an unreadable date.
- User 2 on older firmware: fat fields only, no optional tags.

Every line starts with the unit/format tags (``{0``, ``~0``, ``~1``,
``~2``) that real exports carry and that the decoder keeps as extras.
"""

import datetime
import os
import random
from typing import Dict, List

from .constants import (
    PROFILE_FOLDER_NAME, DATA_FOLDER_NAME,
    PROFILE_FILE_PREFIX, DATA_FILE_PREFIX, CSV_SUFFIX,
)

# Unit / format tags written at the start of every device line
_LINE_PREAMBLE = '{0,16,~0,1,~1,1,~2,1'


def _checksum(line: str) -> str:
    return f"{sum(line.encode('ascii')) % 256:02X}"


def _profile_line(birth_date: str, gender: int, height: float,
                  activity: int, body_type: int) -> str:
    body = (
        f'{_LINE_PREAMBLE},MO,"BC-601",DB,"{birth_date}",Bt,{body_type},'
        f'GE,{gender},Hm,{height:.1f},AL,{activity}'
    )
    return f"{body},CS,{_checksum(body)}"


def _data_line(rng: random.Random, when: datetime.datetime, user: dict,
               weight: float, full_metrics: bool) -> str:
    fat = user['fat_base'] + rng.uniform(-1.0, 1.0)
    bmi = weight / (user['height'] / 100.0) ** 2
    parts = [
        _LINE_PREAMBLE,
        'MO,"BC-601"',
        f'DT,"{when:%d/%m/%Y}"',
        f'Ti,"{when:%H:%M:%S}"',
        f"Bt,{user['body_type']}",
        f"GE,{user['gender']}",
        f"AG,{user['age']}",
        f"Hm,{user['height']:.1f}",
        f"AL,{user['activity']}",
        f"Wk,{weight:.1f}",
        f"MI,{bmi:.1f}",
        f"FW,{fat:.1f}",
        f"Fr,{fat - 4.0 + rng.uniform(-0.5, 0.5):.1f}",
        f"Fl,{fat - 3.5 + rng.uniform(-0.5, 0.5):.1f}",
        f"FR,{fat - 1.5 + rng.uniform(-0.5, 0.5):.1f}",
        f"FL,{fat - 1.0 + rng.uniform(-0.5, 0.5):.1f}",
        f"FT,{fat + 2.5 + rng.uniform(-0.5, 0.5):.1f}",
    ]
    if full_metrics:
        muscle = 100.0 - fat - 20.0
        parts += [
            f"mW,{muscle:.1f}",
            f"mr,{muscle * 0.054:.1f}",
            f"ml,{muscle * 0.052:.1f}",
            f"mR,{muscle * 0.176:.1f}",
            f"mL,{muscle * 0.174:.1f}",
            f"mT,{muscle * 0.544:.1f}",
            f"bw,{weight * 0.04:.1f}",
            f"IF,{rng.randint(4, 9)}",
            f"rD,{int(weight * 30)}",
            f"rA,{user['age'] + rng.randint(-5, 5)}",
            f"ww,{55.0 + rng.uniform(-2.0, 2.0):.1f}",
        ]
    body = ",".join(parts)
    return f"{body},CS,{_checksum(body)}"


def generate_example_folder(output_dir: str) -> Dict[int, Dict[str, str]]:
    """Write an example Tanita export folder under *output_dir*.

    Returns
    -------
    dict
        ``{index: {"profile": path, "data": path}}``
    """
    profile_dir = os.path.join(output_dir, PROFILE_FOLDER_NAME)
    data_dir = os.path.join(output_dir, DATA_FOLDER_NAME)
    os.makedirs(profile_dir, exist_ok=True)
    os.makedirs(data_dir, exist_ok=True)

    # Reproducible randomness
    rng = random.Random(42)

    users = [
        {
            'index': 1, 'birth_date': '14/06/1991', 'gender': 1,
            'age': 34, 'height': 175.0, 'activity': 2, 'body_type': 0,
            'weight_start': 82.0, 'weight_drift': -0.15,
            'fat_base': 21.0, 'full_metrics': True, 'n': 24,
        },
        {
            'index': 2, 'birth_date': '03/11/1988', 'gender': 2,
            'age': 37, 'height': 164.0, 'activity': 3, 'body_type': 0,
            'weight_start': 61.5, 'weight_drift': 0.05,
            'fat_base': 27.0, 'full_metrics': False, 'n': 12,
        },
    ]

    start = datetime.datetime(2025, 1, 6, 7, 30, 0)
    paths: Dict[int, Dict[str, str]] = {}

    for user in users:
        idx = user['index']
        profile_path = os.path.join(
            profile_dir, f"{PROFILE_FILE_PREFIX}{idx}{CSV_SUFFIX}"
        )
        data_path = os.path.join(
            data_dir, f"{DATA_FILE_PREFIX}{idx}{CSV_SUFFIX}"
        )

        with open(profile_path, 'w', encoding='ascii', newline='') as fh:
            fh.write(_profile_line(
                user['birth_date'], user['gender'], user['height'],
                user['activity'], user['body_type'],
            ) + "\r\n")

        lines: List[str] = []
        weight = user['weight_start']
        for i in range(user['n']):
            when = start + datetime.timedelta(
                days=7 * i, minutes=rng.randint(0, 45)
            )
            weight += user['weight_drift'] + rng.uniform(-0.4, 0.4)
            lines.append(
                _data_line(rng, when, user, weight, user['full_metrics'])
            )

        if user['full_metrics']:
            # One line the scale garbled; the viewer skips it
            bad = lines[3].replace(
                f'DT,"{(start + datetime.timedelta(days=21)):%d/%m/%Y}"',
                'DT,"--/--/----"',
            )
            lines.insert(4, bad)

        with open(data_path, 'w', encoding='ascii', newline='') as fh:
            fh.write("\r\n".join(lines) + "\r\n")

        paths[idx] = {'profile': profile_path, 'data': data_path}

    return paths
