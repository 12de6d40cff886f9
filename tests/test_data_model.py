"""
Tests for the validated data model: dates, times, gender and profile /
measurement promotion from raw records.
"""

import datetime

import pytest

from tanita_viewer.data_model import (
    Date, DateTime, Gender, GenderKind, Measurement, Profile, Time,
    UserMeasurementSet,
)
from tanita_viewer.records import DataRecord, ProfileRecord


# =============================================================================
# DATE / TIME
# =============================================================================

@pytest.mark.parametrize("text, expected", [
    ("14/06/1991", "14/06/1991"),
    ("1/2/2024", "01/02/2024"),
    ('"31/12/1999"', "31/12/1999"),
    ("+5/06/2020", "05/06/2020"),
])
def test_date_parse_format_normalizes(text, expected):
    date = Date.parse(text)
    assert date is not None
    assert date.format() == expected
    assert Date.parse(date.format()) == date


@pytest.mark.parametrize("text", [
    "14/06", "14/06/1991/1", "", "14-06-1991", "aa/bb/cccc",
    "--/--/----", "14/-6/1991", "300/1/2000",
])
def test_date_parse_rejects(text):
    assert Date.parse(text) is None


def test_date_components_not_calendar_checked():
    date = Date.parse("31/02/2020")
    assert date == Date(days=31, months=2, years=2020)
    assert date.to_date() is None


def test_time_parse_and_format():
    time = Time.parse("8:18:58")
    assert time == Time(hours=8, minutes=18, seconds=58)
    assert time.format() == "08:18:58"
    assert time.to_time() == datetime.time(8, 18, 58)
    assert Time.parse("08:18") is None


def test_date_time_parse():
    dt = DateTime.parse("14/06/2019", "08:18:58")
    assert dt.format() == "14/06/2019 08:18:58"
    assert dt.to_datetime() == datetime.datetime(2019, 6, 14, 8, 18, 58)
    assert DateTime.parse("14/06/2019", "") is None
    assert DateTime.parse("", "08:18:58") is None


def test_date_time_out_of_range_has_no_datetime():
    dt = DateTime.parse("14/06/2019", "25:00:00")
    assert dt is not None
    assert dt.to_datetime() is None


# =============================================================================
# GENDER
# =============================================================================

@pytest.mark.parametrize("code, kind, label", [
    (1, GenderKind.MALE, "Male"),
    (2, GenderKind.FEMALE, "Female"),
    (0, GenderKind.OTHER, "Unknown (0)"),
    (9, GenderKind.OTHER, "Unknown (9)"),
])
def test_gender_is_total(code, kind, label):
    gender = Gender(code)
    assert gender.kind is kind
    assert gender.label == label


# =============================================================================
# PROFILE / MEASUREMENT
# =============================================================================

def test_profile_from_record(profile_line):
    profile = Profile.from_record(ProfileRecord.from_csv_row(profile_line))
    assert profile.gender.kind is GenderKind.MALE
    assert profile.birth_date == Date(days=14, months=6, years=1991)
    assert profile.height_cm == 175.0
    assert profile.activity_level_code == 2
    assert profile.body_type_code == 0
    assert profile.model == "BC-601"


def test_profile_without_birth_date_is_none():
    assert Profile.from_record(ProfileRecord(gender_code=1)) is None
    assert Profile.from_record(
        ProfileRecord(birth_date_dmy="unknown")
    ) is None


def test_measurement_carries_every_raw_field(data_line):
    record = DataRecord.from_csv_row(data_line)
    measurement = Measurement.from_record(record)
    assert measurement.date_time == DateTime.parse("14/06/2019", "08:18:58")
    assert measurement.weight_kg == 78.4
    assert measurement.visceral_fat_rating == 7
    assert measurement.metabolic_age_years is None
    assert measurement.extras == record.extras
    assert isinstance(measurement, DataRecord)


def test_measurement_with_bad_date_is_none():
    record = DataRecord(date_dmy="--/--/----", time_hms="08:00:00")
    assert Measurement.from_record(record) is None


def test_measurement_with_missing_time_is_none():
    assert Measurement.from_record(DataRecord(date_dmy="01/01/2020")) is None


def test_user_measurement_set_label(profile_line):
    profile = Profile.from_record(ProfileRecord.from_csv_row(profile_line))
    user = UserMeasurementSet(index=3, profile=profile, measurements=())
    assert user.label == "User 3"
