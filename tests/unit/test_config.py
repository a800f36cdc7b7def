"""Tests for Config."""

import pytest
from pydantic import ValidationError

from zenith.config import Config


def _config(**overrides):
    return Config(database_url="mongodb://localhost:27017/zenith_test", session_secret_key="secret", **overrides)


class TestSessionAlgorithm:
    def test_defaults_to_hs256(self):
        assert _config().session_algorithm == "HS256"

    def test_other_algorithms_rejected(self):
        """Test that only the shared-secret algorithm can be configured."""
        with pytest.raises(ValidationError):
            _config(session_algorithm="HS512")

    def test_asymmetric_algorithm_rejected(self):
        with pytest.raises(ValidationError):
            _config(session_algorithm="RS256")

    def test_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("ZENITH_SESSION_ALGORITHM", "none")
        with pytest.raises(ValidationError):
            _config()
