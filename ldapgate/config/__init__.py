"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Ldapgate, a product of Garudex Labs

Directory client configuration: data model, TLS policy and validation.
"""

from ldapgate.config.certificates import (
    ClientKeyPair,
    pem_block_type,
    load_client_key_pair,
    validate_certificate,
)
from ldapgate.config.settings import (
    DEFAULT_GROUP_ATTR,
    DEFAULT_GROUP_FILTER,
    DEFAULT_TLS_MAX_VERSION,
    DEFAULT_TLS_MIN_VERSION,
    DEFAULT_URL,
    DEFAULT_USER_ATTR,
    ClientConfig,
    ClientTLSIdentity,
    get_default_config,
    load_client_config,
)
from ldapgate.config.tls import (
    TLS_LOOKUP,
    TLSVersionRange,
    lookup_tls_version,
    resolve_tls_version_range,
)
from ldapgate.config.validation import (
    ConfigValidator,
    ValidatedClientConfig,
    validate_config,
)

__all__ = [
    "DEFAULT_GROUP_ATTR",
    "DEFAULT_GROUP_FILTER",
    "DEFAULT_TLS_MAX_VERSION",
    "DEFAULT_TLS_MIN_VERSION",
    "DEFAULT_URL",
    "DEFAULT_USER_ATTR",
    "TLS_LOOKUP",
    "ClientConfig",
    "ClientKeyPair",
    "ClientTLSIdentity",
    "ConfigValidator",
    "TLSVersionRange",
    "ValidatedClientConfig",
    "get_default_config",
    "load_client_config",
    "load_client_key_pair",
    "lookup_tls_version",
    "pem_block_type",
    "resolve_tls_version_range",
    "validate_certificate",
    "validate_config",
]
