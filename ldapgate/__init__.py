"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Ldapgate, a product of Garudex Labs

Ldapgate - Configuration gate for directory service (LDAP) clients

Ldapgate validates connection and authentication settings, resolves TLS
version policy and parses embedded PEM material before a directory client
opens any network session.
"""

from ldapgate._version import __version__
from ldapgate.config import ClientConfig, ConfigValidator, validate_config
from ldapgate.exceptions import (
    CertificateParseError,
    ConfigurationError,
    InvalidParameterError,
    LdapGateError,
    ValidationRule,
)

__all__ = [
    "__version__",
    "CertificateParseError",
    "ClientConfig",
    "ConfigValidator",
    "ConfigurationError",
    "InvalidParameterError",
    "LdapGateError",
    "ValidationRule",
    "validate_config",
]
