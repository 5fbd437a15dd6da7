"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Ldapgate, a product of Garudex Labs

Validation of directory client configuration.

ConfigValidator is the gate between a loaded ClientConfig and the
connection/bind logic. Rules are checked in a fixed order and the first
failure is raised:

1. at least one URL
2. tls_min_version is a known label
3. tls_max_version is a known label
4. tls_max_version >= tls_min_version
5. the server certificate, if set, parses
6. client certificate and key are both set or both absent
7. the client certificate and key, if set, form a matching pair

The validator never mutates its input, performs no I/O and keeps no state
between calls.
"""

from dataclasses import dataclass
from typing import Optional

from cryptography import x509

from ldapgate.config.certificates import (
    ClientKeyPair,
    load_client_key_pair,
    validate_certificate,
)
from ldapgate.config.settings import ClientConfig
from ldapgate.config.tls import TLSVersionRange, resolve_tls_version_range
from ldapgate.exceptions import (
    CertificateParseError,
    ConfigurationError,
    InvalidParameterError,
    ValidationRule,
)

OP = "ldapgate.ClientConfig.validate"


@dataclass(frozen=True)
class ValidatedClientConfig:
    """
    An accepted client configuration with its TLS material resolved.

    Attributes:
        config: Private copy of the validated configuration
        tls_versions: Resolved TLS negotiation bounds
        server_certificate: Parsed ClientConfig.certificate, if one was set
        client_key_pair: Parsed client identity, if one was set
    """

    config: ClientConfig
    tls_versions: TLSVersionRange
    server_certificate: Optional[x509.Certificate] = None
    client_key_pair: Optional[ClientKeyPair] = None


class ConfigValidator:
    """
    Validates ClientConfig values before any connection is attempted.

    Instances hold no state; a single validator may be shared between
    threads.
    """

    def validate(self, config: ClientConfig) -> ValidatedClientConfig:
        """
        Validate a client configuration.

        Args:
            config: Candidate configuration. It is copied, never modified.

        Returns:
            ValidatedClientConfig holding a copy of the configuration and the
            parsed TLS material

        Raises:
            InvalidParameterError: On a structural or policy violation
            CertificateParseError: If PEM material fails to parse or match
        """
        config = config.clone()

        if not config.urls:
            raise InvalidParameterError(
                f"{OP}: at least one url must be provided",
                rule=ValidationRule.URLS,
            )

        try:
            tls_versions = resolve_tls_version_range(
                config.tls_min_version, config.tls_max_version
            )
        except InvalidParameterError as e:
            raise InvalidParameterError(f"{OP}: {e}", rule=e.rule) from None

        server_certificate = None
        if config.certificate:
            try:
                server_certificate = validate_certificate(config.certificate)
            except ConfigurationError as e:
                raise CertificateParseError(
                    f"{OP}: failed to parse server tls cert: {e}",
                    rule=ValidationRule.SERVER_CERTIFICATE,
                ) from e

        client_key_pair = None
        if config.client_tls is not None:
            try:
                config.client_tls.check_complete()
            except InvalidParameterError as e:
                raise InvalidParameterError(f"{OP}: {e}", rule=e.rule) from None
            try:
                client_key_pair = load_client_key_pair(
                    config.client_tls.cert, config.client_tls.key
                )
            except CertificateParseError as e:
                raise CertificateParseError(
                    f"{OP}: failed to parse client X509 key pair: {e}",
                    rule=ValidationRule.CLIENT_TLS_KEY_PAIR,
                ) from e

        return ValidatedClientConfig(
            config=config,
            tls_versions=tls_versions,
            server_certificate=server_certificate,
            client_key_pair=client_key_pair,
        )


_default_validator = ConfigValidator()


def validate_config(config: ClientConfig) -> ValidatedClientConfig:
    """
    Validate a client configuration with the default validator.

    See ConfigValidator.validate.
    """
    return _default_validator.validate(config)
