"""
Unit tests for TLS version policy.
"""

import ssl

import pytest

from ldapgate.config.tls import (
    TLS_LOOKUP,
    TLSVersionRange,
    lookup_tls_version,
    resolve_tls_version_range,
)
from ldapgate.exceptions import InvalidParameterError, ValidationRule


class TestTLSLookup:
    """Test the version label table."""

    def test_known_labels(self):
        """Test that exactly the four labels are recognized."""
        assert list(TLS_LOOKUP) == ["tls10", "tls11", "tls12", "tls13"]

    def test_table_is_read_only(self):
        """Test that the table cannot be modified."""
        with pytest.raises(TypeError):
            TLS_LOOKUP["tls14"] = ssl.TLSVersion.TLSv1_3

    def test_ordering_is_numeric(self):
        """Test that labels order by protocol number."""
        values = [TLS_LOOKUP[label].value for label in TLS_LOOKUP]
        assert values == sorted(values)

    def test_lookup_unknown(self):
        """Test that an unknown label names the field."""
        with pytest.raises(InvalidParameterError) as exc_info:
            lookup_tls_version("tls9", "tls_max_version", ValidationRule.TLS_MAX_VERSION)

        assert "'tls_max_version'" in str(exc_info.value)
        assert exc_info.value.rule == ValidationRule.TLS_MAX_VERSION

    def test_lookup_unhashable(self):
        """Test that a non-string label is rejected, not crashed on."""
        with pytest.raises(InvalidParameterError):
            lookup_tls_version(["tls12"])


class TestResolveTLSVersionRange:
    """Test range resolution."""

    def test_equal_bounds(self):
        """Test that min == max is allowed."""
        versions = resolve_tls_version_range("tls12", "tls12")

        assert versions == TLSVersionRange(ssl.TLSVersion.TLSv1_2, ssl.TLSVersion.TLSv1_2)

    def test_inverted_bounds(self):
        """Test that max < min is rejected."""
        with pytest.raises(InvalidParameterError) as exc_info:
            resolve_tls_version_range("tls13", "tls11")

        assert exc_info.value.rule == ValidationRule.TLS_VERSION_ORDER

    def test_allows(self):
        """Test range membership."""
        versions = resolve_tls_version_range("tls11", "tls12")

        assert versions.allows(ssl.TLSVersion.TLSv1_2)
        assert not versions.allows(ssl.TLSVersion.TLSv1_3)
        assert not versions.allows(ssl.TLSVersion.TLSv1)
