"""
File discovery and pairing for a Tanita export folder.

A scale export looks like::

    <root>/
        SYSTEM/PROF1.CSV   PROF2.CSV ...
        DATA/DATA1.CSV     DATA2.CSV ...

Each user is one ``PROF{N}`` / ``DATA{N}`` pair sharing the index ``N``.
Name matching is case-insensitive.  Pairing is all-or-nothing: an index
that appears on only one side fails the whole folder with
``UnpairedFilesError`` (reporting both directions), since a half-paired
export usually means the wrong folder was picked.
"""

import functools
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from .constants import (
    PROFILE_FOLDER_NAME, DATA_FOLDER_NAME,
    PROFILE_FILE_PREFIX, DATA_FILE_PREFIX, CSV_SUFFIX,
)
from .errors import (
    FolderScanWarning, MissingDirectoryError, NoFilesFoundError,
    UnpairedFilesError, report,
)


@dataclass(frozen=True)
class IndexedFilePair:
    index: int
    profile_path: Path
    data_path: Path


@functools.lru_cache(maxsize=None)
def _name_pattern(prefix: str) -> "re.Pattern[str]":
    return re.compile(
        rf"{re.escape(prefix)}([0-9]+){re.escape(CSV_SUFFIX)}",
        re.IGNORECASE | re.ASCII,
    )


def file_index(file_name: str, prefix: str) -> Optional[int]:
    """Return ``N`` for a ``<prefix>N.CSV`` file name, else ``None``.

    >>> file_index("prof12.csv", "PROF")
    12
    >>> file_index("PROF.CSV", "PROF") is None
    True
    """
    match = _name_pattern(prefix).fullmatch(file_name)
    if match is None:
        return None
    return int(match.group(1))


def require_dir(root: Path, name: str) -> Path:
    """Return ``root / name`` or raise ``MissingDirectoryError``."""
    path = Path(root) / name
    if not path.is_dir():
        raise MissingDirectoryError(name)
    return path


def collect_indexed_files(folder: Path, prefix: str,
                          sink=None) -> Dict[int, Path]:
    """Map file index → path for every ``<prefix>N.CSV`` file in *folder*.

    Entries are visited in sorted name order; on a duplicate index the
    later name wins and the earlier one is reported.  An unreadable
    folder yields an empty mapping and a ``FolderScanWarning``.  Both
    notices go to *sink* when one is given.
    """
    collected: Dict[int, Path] = {}
    try:
        entries = sorted(os.scandir(folder), key=lambda e: e.name)
    except OSError as exc:
        report(
            f"Could not list folder '{folder}': {exc}",
            FolderScanWarning,
            sink,
            stacklevel=2,
        )
        return collected

    for entry in entries:
        try:
            if not entry.is_file():
                continue
        except OSError:
            continue
        idx = file_index(entry.name, prefix)
        if idx is None:
            continue
        if idx in collected:
            report(
                f"Duplicate index {idx} in '{folder}': "
                f"'{collected[idx].name}' replaced by '{entry.name}'.",
                FolderScanWarning,
                sink,
                stacklevel=2,
            )
        collected[idx] = Path(entry.path)
    return collected


def pair_files(root, sink=None) -> List[IndexedFilePair]:
    """Discover and pair the profile and data files under *root*.

    Returns
    -------
    list of IndexedFilePair
        Ordered by ascending index.

    Raises
    ------
    MissingDirectoryError
        ``SYSTEM`` or ``DATA`` is missing.
    NoFilesFoundError
        Neither folder holds a matching file.
    UnpairedFilesError
        Some index is present on one side only.
    """
    root = Path(root)
    profile_dir = require_dir(root, PROFILE_FOLDER_NAME)
    data_dir = require_dir(root, DATA_FOLDER_NAME)

    profiles = collect_indexed_files(profile_dir, PROFILE_FILE_PREFIX, sink)
    data = collect_indexed_files(data_dir, DATA_FILE_PREFIX, sink)

    if not profiles and not data:
        raise NoFilesFoundError()

    missing_in_data = profiles.keys() - data.keys()
    missing_in_profile = data.keys() - profiles.keys()
    if missing_in_data or missing_in_profile:
        raise UnpairedFilesError(missing_in_data, missing_in_profile)

    return [
        IndexedFilePair(index=idx, profile_path=profiles[idx],
                        data_path=data[idx])
        for idx in sorted(profiles)
    ]
