"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Ldapgate, a product of Garudex Labs

PEM certificate and key pair parsing for directory client configuration.

This is a syntactic gate only: certificates are parsed, never trusted.
No CA chain, expiry, hostname or key usage checks happen here; those
belong to the TLS handshake.
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from ldapgate.exceptions import CertificateParseError, InvalidParameterError

PemInput = Union[str, bytes, None]

CERTIFICATE_BLOCK_TYPE = "CERTIFICATE"

# A BEGIN line only counts at the start of the input or of a line
_PEM_BEGIN_RE = re.compile(rb"(?:\A|\n)-----BEGIN ([^\r\n-]*)-----")


@dataclass(frozen=True)
class ClientKeyPair:
    """
    Parsed mutual-TLS client identity.

    Attributes:
        certificate: Leaf certificate whose public key matches private_key
        private_key: Private key parsed from the key PEM
        chain: Any further certificates found after the leaf
    """

    certificate: x509.Certificate
    private_key: object
    chain: Tuple[x509.Certificate, ...] = ()


def _as_bytes(data: PemInput) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data or b"")


def pem_block_type(data: PemInput) -> Optional[str]:
    """Return the type label of the first PEM block, or None if there is none."""
    match = _PEM_BEGIN_RE.search(_as_bytes(data))
    if match is None:
        return None
    return match.group(1).decode("ascii", "replace")


def validate_certificate(pem: PemInput) -> x509.Certificate:
    """
    Parse a PEM-encoded X.509 certificate.

    Args:
        pem: PEM text holding a single CERTIFICATE block

    Returns:
        The parsed certificate

    Raises:
        InvalidParameterError: If the input is empty, holds no PEM block or
            the first block is not of type CERTIFICATE
        CertificateParseError: If the block does not decode to a valid
            X.509 certificate
    """
    op = "ldapgate.validate_certificate"
    if not pem:
        raise InvalidParameterError(f"{op}: missing certificate pem block")

    block_type = pem_block_type(pem)
    if block_type is None:
        raise InvalidParameterError(
            f"{op}: failed to decode PEM block in the certificate: no PEM data found"
        )
    if block_type != CERTIFICATE_BLOCK_TYPE:
        raise InvalidParameterError(
            f"{op}: failed to decode PEM block in the certificate: "
            f"unexpected block type {block_type!r}"
        )

    try:
        return x509.load_pem_x509_certificate(_as_bytes(pem))
    except ValueError as e:
        raise CertificateParseError(f"{op}: failed to parse certificate: {e}") from e


def _public_key_der(key: object) -> bytes:
    return key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def load_client_key_pair(cert_pem: PemInput, key_pem: PemInput) -> ClientKeyPair:
    """
    Parse a client certificate and private key and check that they match.

    The first certificate of ``cert_pem`` is the leaf; any others follow
    it as the chain. ``key_pem`` holds an unencrypted PKCS#8, PKCS#1 or
    SEC1 private key.

    Raises:
        CertificateParseError: If either input fails to parse or the
            certificate's public key does not belong to the private key
    """
    op = "ldapgate.load_client_key_pair"
    try:
        certificates = x509.load_pem_x509_certificates(_as_bytes(cert_pem))
    except ValueError as e:
        raise CertificateParseError(f"{op}: failed to parse certificate PEM data: {e}") from e

    try:
        private_key = serialization.load_pem_private_key(_as_bytes(key_pem), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise CertificateParseError(f"{op}: failed to parse private key: {e}") from e

    leaf = certificates[0]
    try:
        cert_public = _public_key_der(leaf.public_key())
    except (ValueError, UnsupportedAlgorithm) as e:
        raise CertificateParseError(f"{op}: unsupported certificate public key: {e}") from e
    if cert_public != _public_key_der(private_key.public_key()):
        raise CertificateParseError(f"{op}: private key does not match public key")

    return ClientKeyPair(
        certificate=leaf,
        private_key=private_key,
        chain=tuple(certificates[1:]),
    )
