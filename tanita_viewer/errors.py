"""
Exceptions and warning categories for the Tanita Viewer.

Structural problems with a selected folder raise a ``TanitaLoadError``
subclass and abort the load.  Everything narrower than that (one bad
profile, one bad measurement line, an unknown tag) is reported through
``report`` with a ``TanitaWarning`` subclass (a ``warnings.warn`` call
unless the caller passed a sink) and the load carries on with whatever
is still usable.
"""

import warnings
from typing import Iterable


class TanitaLoadError(ValueError):
    """Base class for failures that make a whole folder unusable."""


class MissingDirectoryError(TanitaLoadError):
    """A required subfolder (``SYSTEM`` or ``DATA``) does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Missing required folder: {name}")


class NoFilesFoundError(TanitaLoadError):
    """Neither subfolder contains a single profile or data file."""

    def __init__(self):
        super().__init__("No DATA or PROF files found")


class UnpairedFilesError(TanitaLoadError):
    """Profile and data files do not pair up one-to-one by index.

    Parameters
    ----------
    missing_in_data : iterable of int
        Indices that have a ``PROF`` file but no ``DATA`` file.
    missing_in_profile : iterable of int
        Indices that have a ``DATA`` file but no ``PROF`` file.
    """

    def __init__(self, missing_in_data: Iterable[int],
                 missing_in_profile: Iterable[int]):
        self.missing_in_data = frozenset(missing_in_data)
        self.missing_in_profile = frozenset(missing_in_profile)
        super().__init__(
            f"Unpaired file indices: missing in DATA "
            f"{sorted(self.missing_in_data)}, missing in SYSTEM "
            f"{sorted(self.missing_in_profile)}"
        )


class InvalidProfileError(TanitaLoadError):
    """One user's profile cannot be built, so that user is unusable."""

    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"User {index}: {reason}")


# ── Warning categories ───────────────────────────────────────────────────

class TanitaWarning(UserWarning):
    """Base class for recoverable data-quality diagnostics."""


class UnknownKeyWarning(TanitaWarning):
    """A profile line carried a tag outside the known schema."""


class MalformedLineWarning(TanitaWarning):
    """A line had a dangling key with no value."""


class SkippedRecordWarning(TanitaWarning):
    """A measurement or a whole user was left out of the results."""


class FolderScanWarning(TanitaWarning):
    """A folder could not be listed or held a duplicate file index."""


def report(message: str, category, sink=None, stacklevel: int = 2) -> None:
    """Send a diagnostic to *sink*, or to ``warnings.warn`` without one.

    *sink* is any callable taking ``(message, category)``.  Loads that
    may overlap on worker threads pass their own sink so nothing goes
    through the process-wide warnings machinery.
    """
    if sink is None:
        warnings.warn(message, category, stacklevel=stacklevel + 1)
    else:
        sink(message, category)


class DiagnosticLog:
    """Sink that keeps the diagnostics of a single load.

    Unknown-key notices are only counted; every real export carries
    a few of them.
    """

    def __init__(self):
        self.messages = []
        self.unknown_key_count = 0

    def __call__(self, message: str, category) -> None:
        if issubclass(category, UnknownKeyWarning):
            self.unknown_key_count += 1
        else:
            self.messages.append(message)
