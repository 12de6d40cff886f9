"""
Tests for loading whole Tanita folders into per-user measurement sets.
"""

import os
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from tanita_viewer import loader
from tanita_viewer.data_model import GenderKind
from tanita_viewer.errors import (
    DiagnosticLog, InvalidProfileError, NoFilesFoundError, SkippedRecordWarning,
    UnpairedFilesError,
)
from tanita_viewer.loader import (
    build_user_set, load_tanita_folder, load_with_diagnostics,
)

pytestmark = pytest.mark.integration


# =============================================================================
# SINGLE USER
# =============================================================================

def test_build_user_set(profile_line, data_line):
    user = build_user_set(1, profile_line + "\r\n", data_line + "\r\n")
    assert user.index == 1
    assert user.profile.gender.kind is GenderKind.MALE
    assert len(user.measurements) == 1
    assert user.measurements[0].weight_kg == 78.4


def test_only_first_profile_line_is_used(profile_line):
    second = profile_line.replace('"GE","1"', '"GE","2"')
    user = build_user_set(1, profile_line + "\n" + second, "")
    assert user.profile.gender.kind is GenderKind.MALE


def test_blank_data_lines_are_skipped_silently(profile_line, data_line,
                                               recwarn):
    user = build_user_set(1, profile_line, "\n" + data_line + "\n\n  \n")
    assert len(user.measurements) == 1
    assert not [w for w in recwarn
                if issubclass(w.category, SkippedRecordWarning)]


def test_bad_date_skips_only_that_measurement(profile_line, data_line):
    bad = data_line.replace('DT,"14/06/2019"', 'DT,"14-06-2019"')
    with pytest.warns(SkippedRecordWarning, match=r"lines 2\)"):
        user = build_user_set(
            1, profile_line, "\n".join([data_line, bad, data_line]),
            source="DATA1.CSV",
        )
    assert len(user.measurements) == 2


def test_empty_profile_is_invalid(data_line):
    with pytest.raises(InvalidProfileError, match="empty"):
        build_user_set(5, "", data_line)


def test_unreadable_birth_date_is_invalid(profile_line, data_line):
    line = profile_line.replace("14/06/1991", "??")
    with pytest.raises(InvalidProfileError) as excinfo:
        build_user_set(5, line, data_line)
    assert excinfo.value.index == 5


# =============================================================================
# WHOLE FOLDER
# =============================================================================

def test_load_example_folder(example_folder):
    with pytest.warns(SkippedRecordWarning):
        users = load_tanita_folder(example_folder)
    assert [u.index for u in users] == [1, 2]
    assert len(users[0].measurements) == 24
    assert len(users[1].measurements) == 12
    assert users[1].profile.gender.kind is GenderKind.FEMALE


def test_example_measurements_keep_device_tags(example_folder):
    with pytest.warns(SkippedRecordWarning):
        users = load_tanita_folder(example_folder)
    first = users[0].measurements[0]
    assert first.extras == (
        ("{0", "16"), ("~0", "1"), ("~1", "1"), ("~2", "1"),
    )
    assert first.muscle_percent is not None
    assert users[1].measurements[0].muscle_percent is None


def test_invalid_profile_omits_only_that_user(make_tanita_folder,
                                              profile_line, data_line):
    root = make_tanita_folder(
        profiles={
            "PROF1.CSV": profile_line.replace("14/06/1991", "bad"),
            "PROF2.CSV": profile_line,
        },
        data={"DATA1.CSV": data_line, "DATA2.CSV": data_line},
    )
    with pytest.warns(SkippedRecordWarning, match="User 1"):
        users = load_tanita_folder(root)
    assert [u.index for u in users] == [2]


def test_all_profiles_invalid_gives_empty_result(make_tanita_folder,
                                                 data_line):
    root = make_tanita_folder(
        profiles={"PROF1.CSV": ""},
        data={"DATA1.CSV": data_line},
    )
    result = load_with_diagnostics(root)
    assert result.users == ()
    assert len(result.diagnostics) == 1
    assert "profile file is empty" in result.diagnostics[0]


def test_structural_errors_propagate(make_tanita_folder, profile_line,
                                     data_line):
    root = make_tanita_folder(
        profiles={"PROF1.CSV": profile_line, "PROF3.CSV": profile_line},
        data={"DATA1.CSV": data_line},
    )
    with pytest.raises(UnpairedFilesError):
        load_with_diagnostics(root)


def test_empty_folders_propagate(make_tanita_folder):
    root = make_tanita_folder(profiles={}, data={})
    with pytest.raises(NoFilesFoundError):
        load_tanita_folder(root)


def test_unreadable_pair_is_skipped(make_tanita_folder, profile_line,
                                    data_line, monkeypatch):
    root = make_tanita_folder(
        profiles={"PROF1.CSV": profile_line, "PROF2.CSV": profile_line},
        data={"DATA1.CSV": data_line, "DATA2.CSV": data_line},
    )
    real_read_text = loader.read_text

    def failing_read_text(path):
        if os.path.basename(path) == "DATA2.CSV":
            raise PermissionError(13, "Permission denied", str(path))
        return real_read_text(path)

    monkeypatch.setattr(loader, "read_text", failing_read_text)

    with pytest.warns(SkippedRecordWarning,
                      match="User 2: could not read files"):
        users = load_tanita_folder(root)
    assert [u.index for u in users] == [1]

    result = load_with_diagnostics(root)
    assert [u.index for u in result.users] == [1]
    assert len(result.diagnostics) == 1
    assert "Permission denied" in result.diagnostics[0]


# =============================================================================
# DIAGNOSTICS
# =============================================================================

def test_load_with_diagnostics(example_folder):
    result = load_with_diagnostics(example_folder)
    assert result.root == str(example_folder)
    assert [u.index for u in result.users] == [1, 2]
    assert result.measurement_count == 36
    assert len(result.diagnostics) == 1
    assert "DATA1.CSV" in result.diagnostics[0]
    assert "skipped 1 measurement" in result.diagnostics[0]
    # Four device preamble tags on each of the two profile lines
    assert result.unknown_key_count == 8


def test_diagnostics_are_captured_not_emitted(example_folder, recwarn):
    load_with_diagnostics(example_folder)
    assert len(recwarn) == 0


def test_sink_receives_diagnostics_instead_of_warnings(profile_line,
                                                       data_line, recwarn):
    bad = data_line.replace('DT,"14/06/2019"', 'DT,"14-06-2019"')
    received = []
    user = build_user_set(
        1, profile_line, "\n".join([data_line, bad]),
        sink=lambda message, category: received.append((message, category)),
    )
    assert len(user.measurements) == 1
    assert [category for _, category in received] == [SkippedRecordWarning]
    assert len(recwarn) == 0


def test_diagnostic_log_counts_unknown_profile_keys(profile_line,
                                                    data_line):
    log = DiagnosticLog()
    build_user_set(1, '"~0","1","~1","1",' + profile_line, data_line,
                   sink=log)
    assert log.unknown_key_count == 2
    assert log.messages == []


def test_overlapping_loads_keep_their_own_diagnostics(
        make_tanita_folder, profile_line, data_line, monkeypatch):
    bad = data_line.replace('DT,"14/06/2019"', 'DT,"14-06-2019"')
    first = make_tanita_folder(
        profiles={"PROF1.CSV": profile_line},
        data={"DATA1.CSV": "\n".join([data_line, bad])},
        name="first",
    )
    second = make_tanita_folder(
        profiles={"PROF1.CSV": profile_line, "PROF2.CSV": ""},
        data={"DATA1.CSV": data_line, "DATA2.CSV": data_line},
        name="second",
    )

    # (entered, release) per folder: the first file read of each load
    # blocks until the test lets it continue
    gates = {
        str(root): (threading.Event(), threading.Event())
        for root in (first, second)
    }
    real_read_text = loader.read_text

    def gated_read_text(path):
        for root, (entered, release) in gates.items():
            if str(path).startswith(root) and not entered.is_set():
                entered.set()
                assert release.wait(timeout=5)
        return real_read_text(path)

    monkeypatch.setattr(loader, "read_text", gated_read_text)

    with ThreadPoolExecutor(max_workers=2) as pool:
        first_future = pool.submit(load_with_diagnostics, first)
        assert gates[str(first)][0].wait(timeout=5)
        second_future = pool.submit(load_with_diagnostics, second)
        assert gates[str(second)][0].wait(timeout=5)

        # The first load reports and finishes while the second is in flight
        gates[str(first)][1].set()
        first_result = first_future.result(timeout=5)
        gates[str(second)][1].set()
        second_result = second_future.result(timeout=5)

    assert len(first_result.diagnostics) == 1
    assert "skipped 1 measurement" in first_result.diagnostics[0]
    assert len(second_result.diagnostics) == 1
    assert "profile file is empty" in second_result.diagnostics[0]
    assert [u.index for u in second_result.users] == [1]

    # Plain calls still warn through the warnings module afterwards
    with pytest.warns(SkippedRecordWarning):
        build_user_set(1, profile_line, bad)
