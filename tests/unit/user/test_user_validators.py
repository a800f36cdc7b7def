"""Tests for registration validators."""

import pytest

from zenith.core.modules.user.validators import normalize_email, validate_password, validate_registration
from zenith.errors import ValidationError


class TestValidatePassword:
    def test_six_characters_accepted(self):
        validate_password("abcdef")

    def test_short_password_rejected(self):
        with pytest.raises(ValidationError, match="at least 6 characters"):
            validate_password("abcde")


class TestValidateRegistration:
    def test_valid(self):
        validate_registration("ana@example.com", "secret1", "Ana")

    @pytest.mark.parametrize(
        ("email", "password", "display_name"),
        [("", "secret1", "Ana"), ("ana@example.com", "", "Ana"), ("ana@example.com", "secret1", "  ")],
    )
    def test_missing_fields(self, email, password, display_name):
        with pytest.raises(ValidationError, match="Please provide all required fields."):
            validate_registration(email, password, display_name)

    def test_invalid_email(self):
        with pytest.raises(ValidationError, match="valid email"):
            validate_registration("ana.example.com", "secret1", "Ana")


def test_normalize_email():
    assert normalize_email("  Ana@Example.COM ") == "ana@example.com"


class TestPasswordByteLimit:
    def test_72_bytes_accepted(self):
        validate_password("a" * 72)

    def test_long_password_rejected(self):
        with pytest.raises(ValidationError, match="longer than 72 bytes"):
            validate_password("a" * 80)

    def test_limit_counts_utf8_bytes(self):
        """Test that 40 two-byte characters exceed the limit."""
        with pytest.raises(ValidationError, match="longer than 72 bytes"):
            validate_registration("ana@example.com", "ñ" * 40, "Ana")
