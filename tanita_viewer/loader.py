"""
Folder loader for the Tanita Viewer.

Turns a Tanita export folder into a list of ``UserMeasurementSet``:

- Pairs ``SYSTEM/PROF{N}.CSV`` with ``DATA/DATA{N}.CSV`` (``file_pairer``)
- Decodes the first profile line and every data line (``records``)
- Validates profiles and measurements (``data_model``)

Failure granularity narrows as the data gets smaller: a structural
problem fails the whole load, a bad profile drops one user, a bad
date/time drops one measurement.  The two narrower cases are reported
through ``errors.report`` so the load always returns what it could read.
``load_with_diagnostics`` gives every load its own ``DiagnosticLog``, so
loads running side by side on worker threads never see each other's
messages.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from .data_model import Measurement, Profile, UserMeasurementSet
from .errors import (
    DiagnosticLog, InvalidProfileError, SkippedRecordWarning, report,
)
from .file_pairer import IndexedFilePair, pair_files
from .records import DataRecord, ProfileRecord


def read_text(path) -> str:
    """Read a whole device file, tolerating a BOM and stray bytes."""
    with open(path, 'r', encoding='utf-8-sig', errors='replace') as fh:
        return fh.read()


def build_user_set(
    index: int,
    profile_text: str,
    data_text: str,
    source: str = "",
    sink=None,
) -> UserMeasurementSet:
    """Build one user's validated data from raw file contents.

    Parameters
    ----------
    index : int
        Pair index ``N``.
    profile_text, data_text : str
        Full contents of ``PROF{N}.CSV`` and ``DATA{N}.CSV``.
    source : str
        Data file name used in diagnostics.
    sink : callable, optional
        Receives ``(message, category)`` for each diagnostic instead of
        ``warnings.warn``.

    Raises
    ------
    InvalidProfileError
        The profile file is empty or its birth date does not parse.
    """
    profile_lines = profile_text.splitlines()
    if not profile_lines:
        raise InvalidProfileError(index, "profile file is empty")
    # Only the first profile line is meaningful to the device
    profile_record = ProfileRecord.from_csv_row(profile_lines[0], sink)
    profile = Profile.from_record(profile_record)
    if profile is None:
        raise InvalidProfileError(
            index,
            f"unreadable birth date {profile_record.birth_date_dmy!r}",
        )

    measurements: List[Measurement] = []
    skipped_lines: List[int] = []
    for line_no, line in enumerate(data_text.splitlines(), start=1):
        if not line.strip():
            continue
        record = DataRecord.from_csv_row(line, sink)
        measurement = Measurement.from_record(record)
        if measurement is None:
            skipped_lines.append(line_no)
            continue
        measurements.append(measurement)

    if skipped_lines:
        shown = ", ".join(str(n) for n in skipped_lines[:10])
        if len(skipped_lines) > 10:
            shown += f" ... and {len(skipped_lines) - 10} more"
        report(
            f"{source or f'User {index}'}: skipped "
            f"{len(skipped_lines)} measurement(s) with an unreadable "
            f"date/time (lines {shown}).",
            SkippedRecordWarning,
            sink,
            stacklevel=2,
        )

    return UserMeasurementSet(
        index=index,
        profile=profile,
        measurements=tuple(measurements),
    )


def load_pair(pair: IndexedFilePair, sink=None) -> UserMeasurementSet:
    """Read and build one file pair.  Raises on I/O or profile errors."""
    return build_user_set(
        pair.index,
        read_text(pair.profile_path),
        read_text(pair.data_path),
        source=os.path.basename(pair.data_path),
        sink=sink,
    )


def load_tanita_folder(root, sink=None) -> List[UserMeasurementSet]:
    """Load every user from a Tanita export folder.

    Users whose profile is invalid or whose files cannot be read are
    left out with a ``SkippedRecordWarning``.  Every diagnostic goes to
    *sink* when one is given, otherwise to ``warnings.warn``.

    Returns
    -------
    list of UserMeasurementSet
        Ordered by pair index.

    Raises
    ------
    TanitaLoadError
        Missing subfolder, no files at all, or unpaired indices.
    """
    users: List[UserMeasurementSet] = []
    for pair in pair_files(root, sink):
        try:
            users.append(load_pair(pair, sink))
        except InvalidProfileError as exc:
            report(
                f"{exc} — user skipped.",
                SkippedRecordWarning,
                sink,
                stacklevel=2,
            )
        except OSError as exc:
            report(
                f"User {pair.index}: could not read files ({exc}) "
                f"— user skipped.",
                SkippedRecordWarning,
                sink,
                stacklevel=2,
            )
    return users


@dataclass(frozen=True)
class LoadResult:
    """Outcome of one folder load, as delivered to the GUI.

    Parameters
    ----------
    root : str
        The folder that was loaded.
    users : tuple of UserMeasurementSet
    diagnostics : tuple of str
        Messages of every diagnostic reported during the load,
        except unknown-key notices which are only counted.
    unknown_key_count : int
    """
    root: str
    users: Tuple[UserMeasurementSet, ...]
    diagnostics: Tuple[str, ...] = ()
    unknown_key_count: int = 0

    @property
    def measurement_count(self) -> int:
        return sum(len(u.measurements) for u in self.users)


def load_with_diagnostics(root) -> LoadResult:
    """Run ``load_tanita_folder`` with a private ``DiagnosticLog``.

    ``TanitaLoadError`` still propagates; only the recoverable
    diagnostics are folded into the result.  The global warnings state
    is never touched, so this is safe to call from several threads.
    """
    log = DiagnosticLog()
    users = load_tanita_folder(root, sink=log)
    return LoadResult(
        root=str(Path(root)),
        users=tuple(users),
        diagnostics=tuple(log.messages),
        unknown_key_count=log.unknown_key_count,
    )
