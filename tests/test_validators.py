"""
Tests for input validation utilities.
"""

import uuid
from datetime import date

import pytest

from utils.errors import ValidationFailed
from utils.validators import (
    is_nil_id,
    is_valid_id,
    parse_date,
    parse_optional_date,
    parse_optional_uuid,
    parse_uuid,
    validate_date_format,
    validate_date_range,
)


class TestIdentifiers:
    """Tests for identifier checks."""

    def test_nil_ids(self):
        assert is_nil_id(None) is True
        assert is_nil_id('') is True
        assert is_nil_id('   ') is True
        assert is_nil_id(uuid.UUID(int=0)) is True
        assert is_nil_id('00000000-0000-0000-0000-000000000000') is True

    def test_non_nil_ids(self):
        assert is_nil_id(uuid.uuid4()) is False
        assert is_nil_id('garbage') is False

    def test_valid_ids(self):
        assert is_valid_id(uuid.uuid4()) is True
        assert is_valid_id(str(uuid.uuid4())) is True
        assert is_valid_id('garbage') is False

    def test_parse_uuid(self):
        value = uuid.uuid4()
        assert parse_uuid(str(value)) == value
        assert parse_uuid(value) == value

    def test_parse_uuid_invalid(self):
        with pytest.raises(ValidationFailed) as exc_info:
            parse_uuid('not-a-uuid', 'room_id')
        assert exc_info.value.codes == ['bad_request']
        assert 'room_id' in exc_info.value.errors[0].message

    def test_parse_optional_uuid(self):
        assert parse_optional_uuid(None) is None
        assert parse_optional_uuid('') is None


class TestDates:
    """Tests for date parsing and ranges."""

    def test_date_range(self):
        assert validate_date_range(date(2026, 1, 1), date(2026, 1, 2)) is True
        assert validate_date_range(date(2026, 1, 1), date(2026, 1, 1)) is True
        assert validate_date_range(date(2026, 1, 2), date(2026, 1, 1)) is False

    def test_date_format(self):
        assert validate_date_format('2026-01-10') is True
        assert validate_date_format('2026-13-01') is False
        assert validate_date_format('10/01/2026') is False
        assert validate_date_format('') is False
        assert validate_date_format(None) is False

    def test_parse_date(self):
        assert parse_date('2026-01-10', 'from') == date(2026, 1, 10)
        assert parse_date(date(2026, 1, 10), 'from') == date(2026, 1, 10)

    def test_parse_date_invalid(self):
        with pytest.raises(ValidationFailed) as exc_info:
            parse_date('2026-02-30', 'before')
        assert exc_info.value.errors[0].message == 'Invalid before date (YYYY-MM-DD).'

    def test_parse_optional_date(self):
        assert parse_optional_date(None, 'after') is None
        assert parse_optional_date('  ', 'after') is None
        assert parse_optional_date('2026-01-10', 'after') == date(2026, 1, 10)
