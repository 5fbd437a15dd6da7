"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Ldapgate, a product of Garudex Labs

Exception hierarchy for Ldapgate.

All custom exceptions inherit from LdapGateError base class.
"""

from enum import Enum
from typing import Optional


class ValidationRule(Enum):
    """Client configuration rules, in the order they are checked."""
    URLS = "urls"
    TLS_MIN_VERSION = "tls_min_version"
    TLS_MAX_VERSION = "tls_max_version"
    TLS_VERSION_ORDER = "tls_version_order"
    SERVER_CERTIFICATE = "certificate"
    CLIENT_TLS_PAIR = "client_tls_pair"
    CLIENT_TLS_KEY_PAIR = "client_tls_key_pair"


class LdapGateError(Exception):
    """Base exception for all Ldapgate errors."""
    pass


# Configuration Errors
class ConfigurationError(LdapGateError):
    """
    Base exception for configuration-related errors.

    Attributes:
        rule: The validation rule that rejected the configuration, when known
    """

    def __init__(self, message: str, rule: Optional[ValidationRule] = None):
        super().__init__(message)
        self.rule = rule


class InvalidParameterError(ConfigurationError):
    """
    Raised when a configuration value is structurally or semantically invalid.

    Covers missing URLs, unrecognized TLS version labels, inverted TLS
    version bounds, a client certificate without its key (or the reverse)
    and PEM input that is absent or of the wrong block type.
    """
    pass


class CertificateParseError(ConfigurationError):
    """
    Raised when PEM/X.509/key pair material fails to parse or to match.

    The low-level failure is chained as ``__cause__`` and its text is part
    of the message.
    """
    pass
