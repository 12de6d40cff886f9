"""
Tests for decoding and encoding tagged Tanita record lines.
"""

import warnings

import pytest

from tanita_viewer.errors import MalformedLineWarning, UnknownKeyWarning
from tanita_viewer.records import (
    DATA_FIELD_NAMES, KNOWN_DATA_KEYS, KNOWN_PROFILE_KEYS, DataRecord,
    ProfileRecord, iter_tagged_pairs,
)


# =============================================================================
# TOKEN WALKING
# =============================================================================

def test_iter_tagged_pairs_unquotes_keys_only():
    pairs = list(iter_tagged_pairs('"MO","BC-601",Wk,70.5'))
    assert pairs == [("MO", '"BC-601"'), ("Wk", "70.5")]


def test_iter_tagged_pairs_strips_line_ending():
    assert list(iter_tagged_pairs("CS,4F\r\n")) == [("CS", "4F")]


def test_odd_token_count_drops_dangling_key():
    with pytest.warns(MalformedLineWarning, match="FW"):
        record = DataRecord.from_csv_row('MO,"BC-601",Wk,70.5,FW')
    assert record.model == "BC-601"
    assert record.weight_kg == 70.5
    assert record.fat_percent == 0.0
    assert record.extras == ()


def test_single_token_line():
    with pytest.warns(MalformedLineWarning):
        record = DataRecord.from_csv_row("MO")
    assert record == DataRecord()


# =============================================================================
# PROFILE RECORDS
# =============================================================================

def test_profile_record_from_quoted_line(profile_line):
    record = ProfileRecord.from_csv_row(profile_line)
    assert record.model == "BC-601"
    assert record.birth_date_dmy == "14/06/1991"
    assert record.gender_code == 1
    assert record.height_cm == 175.0
    assert record.activity_level_code == 2
    assert record.body_type_code == 0
    assert record.checksum == "AB"


def test_profile_record_missing_fields_are_zero():
    record = ProfileRecord.from_csv_row('MO,"BC-601"')
    assert record.birth_date_dmy == ""
    assert record.gender_code == 0
    assert record.height_cm == 0.0


def test_profile_record_garbled_values_are_zero():
    record = ProfileRecord.from_csv_row('GE,x,Hm,tall,AL,999')
    assert record.gender_code == 0
    assert record.height_cm == 0.0
    assert record.activity_level_code == 0


def test_profile_unknown_key_is_warned_and_discarded():
    with pytest.warns(UnknownKeyWarning, match="ZZ"):
        record = ProfileRecord.from_csv_row('MO,"BC-601",ZZ,9,GE,2')
    assert record.model == "BC-601"
    assert record.gender_code == 2


def test_profile_record_round_trip(profile_line):
    record = ProfileRecord.from_csv_row(profile_line)
    assert ProfileRecord.from_csv_row(record.to_csv_row()) == record


# =============================================================================
# DATA RECORDS
# =============================================================================

def test_data_record_optional_fields(data_line):
    record = DataRecord.from_csv_row(data_line)
    assert record.visceral_fat_rating == 7
    assert record.metabolic_age_years is None
    assert record.muscle_percent == 59.8
    assert record.muscle_trunk_pct is None
    assert record.daily_calorie_intake_kcal == 2310
    assert record.bone_kg is None


def test_data_record_required_fields(data_line):
    record = DataRecord.from_csv_row(data_line)
    assert record.model == "BC-601"
    assert record.date_dmy == "14/06/2019"
    assert record.time_hms == "08:18:58"
    assert record.age_years == 28
    assert record.weight_kg == 78.4
    assert record.bmi == 25.6
    assert record.fat_trunk_pct == 21.4
    assert record.checksum == "4F"


def test_optional_field_present_even_when_garbled():
    record = DataRecord.from_csv_row("IF,x")
    assert record.visceral_fat_rating == 0


def test_unknown_data_keys_kept_in_order(data_line):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        record = DataRecord.from_csv_row(data_line + ',"Zq","raw"')
    assert record.extras == (
        ("{0", "16"), ("~0", "1"), ("Zq", '"raw"'),
    )


def test_decoding_is_deterministic(data_line):
    assert DataRecord.from_csv_row(data_line) == \
        DataRecord.from_csv_row(data_line)


def test_data_record_round_trip(data_line):
    record = DataRecord.from_csv_row(data_line + ",xx,yy")
    again = DataRecord.from_csv_row(record.to_csv_row())
    assert again == record
    assert again.extras == record.extras


def test_encoder_puts_extras_first_and_skips_absent_optionals(data_line):
    row = DataRecord.from_csv_row(data_line).to_csv_row()
    assert row.startswith("{0,16,~0,1,MO,")
    assert ",rA," not in row
    assert ",IF,7," in row


def test_data_field_names_cover_extras():
    assert DATA_FIELD_NAMES[0] == "model"
    assert DATA_FIELD_NAMES[-1] == "extras"


def test_known_tag_sets():
    assert KNOWN_PROFILE_KEYS == {"MO", "DB", "Bt", "GE", "Hm", "AL", "CS"}
    assert KNOWN_DATA_KEYS == {
        "MO", "DT", "Ti", "Bt", "GE", "AG", "Hm", "AL",
        "Wk", "MI", "FW", "Fr", "Fl", "FR", "FL", "FT",
        "mW", "mr", "ml", "mR", "mL", "mT",
        "bw", "ww", "IF", "rA", "rD", "CS",
    }
    # Tags are case-sensitive: Fr (right arm) and FR (right leg) differ
    assert "fr" not in KNOWN_DATA_KEYS


def test_every_known_profile_key_is_decoded(recwarn):
    row = ",".join(f'"{key}","1"' for key in sorted(KNOWN_PROFILE_KEYS))
    ProfileRecord.from_csv_row(row)
    assert len(recwarn) == 0


def test_known_data_keys_never_land_in_extras():
    row = ",".join(f"{key},1" for key in sorted(KNOWN_DATA_KEYS))
    assert DataRecord.from_csv_row(row).extras == ()


def test_decoders_report_to_sink_when_given(recwarn):
    received = []
    ProfileRecord.from_csv_row(
        '"ZZ","9","MO","BC-601","Hm"',
        lambda message, category: received.append(category),
    )
    assert received == [UnknownKeyWarning, MalformedLineWarning]
    assert len(recwarn) == 0
