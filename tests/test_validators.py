"""Tests for controller validators and form field parsing."""

import pytest

from controller.field_mappings import CREATE_FIELDS, EDITABLE_FIELDS, ID_FIELD, parse_field
from controller.users import check_edited_record
from controller.validators import (
    validate_bio,
    validate_date_of_birth,
    validate_gender,
    validate_name,
    validate_user_id,
)
from model import Gender
from ui.modals import build_record
from ui.widgets import record_to_ui


class TestValidateUserId:
    """Tests for validate_user_id function."""

    def test_valid_zero(self):
        assert validate_user_id("0") == 0

    def test_valid_number(self):
        assert validate_user_id("1042") == 1042

    def test_strips_whitespace(self):
        assert validate_user_id("  7  ") == 7

    def test_invalid_negative(self):
        assert validate_user_id("-1") is None

    def test_invalid_non_numeric(self):
        assert validate_user_id("abc") is None

    def test_invalid_empty(self):
        assert validate_user_id("") is None


class TestValidateName:
    """Tests for validate_name function."""

    def test_strips(self):
        assert validate_name("  Ada ") == "Ada"

    def test_blank_is_invalid(self):
        assert validate_name("   ") is None


class TestValidateGender:
    """Tests for validate_gender function."""

    def test_exact(self):
        assert validate_gender("FEMALE") is Gender.FEMALE

    def test_case_insensitive(self):
        assert validate_gender("other") is Gender.OTHER

    def test_unknown(self):
        assert validate_gender("robot") is None


class TestValidateDateOfBirth:
    """Tests for validate_date_of_birth function."""

    def test_plain_date(self):
        assert validate_date_of_birth("2024-02-10") == "2024-02-10"

    def test_date_time_kept_verbatim(self):
        assert validate_date_of_birth(" 2024-02-10T08:30 ") == "2024-02-10T08:30"

    def test_impossible_date(self):
        assert validate_date_of_birth("2024-02-30") is None

    def test_garbage(self):
        assert validate_date_of_birth("last tuesday") is None

    def test_empty(self):
        assert validate_date_of_birth("") is None


class TestValidateBio:
    """Tests for validate_bio function."""

    def test_blank_means_none(self):
        assert validate_bio("  ") is None

    def test_text_kept(self):
        assert validate_bio(" likes tea ") == " likes tea "


class TestParseField:
    """Tests for parse_field and the field tables."""

    def test_required_field_error(self):
        value, error = parse_field(ID_FIELD, "x")
        assert value is None
        assert error == "Student ID must be a whole number"

    def test_optional_field_accepts_none(self):
        bio = EDITABLE_FIELDS[-1]
        assert parse_field(bio, "") == (None, None)

    def test_create_form_has_id_first(self):
        assert CREATE_FIELDS[0] is ID_FIELD
        assert ID_FIELD not in EDITABLE_FIELDS

    def test_widget_ids_unique_per_form(self):
        ids = [field.widget_id("edit") for field in CREATE_FIELDS]
        assert len(ids) == len(set(ids))


class TestBuildRecord:
    """Tests for building a record from the create form."""

    def test_valid(self):
        record, errors = build_record({
            "id": "9",
            "first_name": "Barbara",
            "last_name": "Liskov",
            "gender": "FEMALE",
            "date_of_birth": "1939-11-07",
            "bio": "",
        })
        assert errors == []
        assert record.id == 9
        assert record.gender is Gender.FEMALE
        assert record.bio is None

    def test_collects_all_errors(self):
        record, errors = build_record({
            "id": "nine",
            "first_name": "",
            "last_name": "Liskov",
            "gender": "FEMALE",
            "date_of_birth": "soon",
        })
        assert record is None
        assert len(errors) == 3


class TestCheckEditedRecord:
    """Tests for check_edited_record."""

    def test_normalizes_whitespace(self, ada):
        changes, errors = check_edited_record(ada.with_field("first_name", "  Ada  "))
        assert errors == []
        assert changes == {"first_name": "Ada"}

    def test_reports_blank_names(self, ada):
        changes, errors = check_edited_record(ada.with_field("last_name", ""))
        assert errors == ["Last name is required"]

    def test_unchanged_record(self, ada):
        assert check_edited_record(ada) == ({}, [])


class TestDateOfBirthInput:
    """Tests for how a stored date of birth reaches the edit form."""

    def test_input_shows_first_19_characters(self, ada):
        record = ada.with_field("date_of_birth", "1815-12-10T08:15:30.250+01:00")
        assert record_to_ui(record)["date_of_birth"] == "1815-12-10T08:15:30"

    def test_plain_date_untouched(self, alan):
        assert record_to_ui(alan)["date_of_birth"] == "1912-06-23"

    def test_untouched_date_saved_verbatim(self, ada):
        record = ada.with_field("date_of_birth", "1815-12-10T08:15:30.250+01:00")
        changes, errors = check_edited_record(record)
        assert errors == []
        assert "date_of_birth" not in changes
