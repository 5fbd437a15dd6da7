"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Ldapgate, a product of Garudex Labs

TLS protocol version policy for directory connections.

Maps the configuration labels ('tls10' .. 'tls13') onto ssl.TLSVersion
values and resolves the acceptable negotiation range.
"""

import ssl
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ldapgate.exceptions import InvalidParameterError, ValidationRule


TLS_LOOKUP: Mapping[str, ssl.TLSVersion] = MappingProxyType({
    "tls10": ssl.TLSVersion.TLSv1,
    "tls11": ssl.TLSVersion.TLSv1_1,
    "tls12": ssl.TLSVersion.TLSv1_2,
    "tls13": ssl.TLSVersion.TLSv1_3,
})


@dataclass(frozen=True)
class TLSVersionRange:
    """Resolved lower and upper bounds for TLS negotiation."""

    minimum: ssl.TLSVersion
    maximum: ssl.TLSVersion

    def allows(self, version: ssl.TLSVersion) -> bool:
        """Check whether a protocol version falls inside the range."""
        return self.minimum.value <= version.value <= self.maximum.value


def lookup_tls_version(
    label: str,
    field_name: str = "tls_min_version",
    rule: ValidationRule = ValidationRule.TLS_MIN_VERSION,
) -> ssl.TLSVersion:
    """
    Resolve a TLS version label.

    Args:
        label: Version label from configuration (e.g. "tls12")
        field_name: Configuration field the label came from, used in errors
        rule: Rule reported when the label is rejected

    Returns:
        The matching ssl.TLSVersion

    Raises:
        InvalidParameterError: If the label is not recognized
    """
    try:
        return TLS_LOOKUP[label]
    except (KeyError, TypeError):
        raise InvalidParameterError(
            f"invalid '{field_name}' in config: {label!r} "
            f"(accepted: {', '.join(TLS_LOOKUP)})",
            rule=rule,
        ) from None


def resolve_tls_version_range(min_label: str, max_label: str) -> TLSVersionRange:
    """
    Resolve and check the configured TLS version bounds.

    The minimum label is checked first, then the maximum, then their order.
    Order is decided on the protocol number, not on the label text.

    Raises:
        InvalidParameterError: On an unknown label or when max < min
    """
    minimum = lookup_tls_version(min_label, "tls_min_version", ValidationRule.TLS_MIN_VERSION)
    maximum = lookup_tls_version(max_label, "tls_max_version", ValidationRule.TLS_MAX_VERSION)
    if maximum.value < minimum.value:
        raise InvalidParameterError(
            "'tls_max_version' must be greater than or equal to 'tls_min_version' "
            f"({max_label!r} < {min_label!r})",
            rule=ValidationRule.TLS_VERSION_ORDER,
        )
    return TLSVersionRange(minimum=minimum, maximum=maximum)
