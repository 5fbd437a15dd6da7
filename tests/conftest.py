"""
Pytest configuration and shared fixtures for Ldapgate tests.

Certificates and keys are generated per session with cryptography so no
key material is checked into the repository.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Tuple

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.x509.oid import NameOID

from ldapgate.config import ClientConfig


def _self_signed_certificate(private_key, common_name: str) -> x509.Certificate:
    """
    Build a self-signed certificate for a private key.

    Args:
        private_key: RSA or EC private key
        common_name: Subject and issuer CN

    Returns:
        The signed certificate
    """
    subject = issuer = x509.Name([
        x509.NameAttribute(NameOID.COMMON_NAME, common_name),
        x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Ldapgate Test"),
    ])
    now = datetime.now(timezone.utc)

    return x509.CertificateBuilder().subject_name(
        subject
    ).issuer_name(
        issuer
    ).public_key(
        private_key.public_key()
    ).serial_number(
        x509.random_serial_number()
    ).not_valid_before(
        now - timedelta(minutes=5)
    ).not_valid_after(
        now + timedelta(days=365)
    ).sign(private_key, hashes.SHA256())


def _private_key_pem(private_key, fmt=serialization.PrivateFormat.PKCS8) -> str:
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=fmt,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


def _certificate_pem(certificate: x509.Certificate) -> str:
    return certificate.public_bytes(serialization.Encoding.PEM).decode("ascii")


@pytest.fixture(scope="session")
def rsa_private_key():
    """Generate an RSA private key shared by the session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_rsa_private_key():
    """Generate a second RSA key that matches no test certificate."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_private_key():
    """Generate an ECDSA P-256 private key shared by the session."""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def server_cert_pem(rsa_private_key) -> str:
    """PEM certificate for the directory server."""
    return _certificate_pem(_self_signed_certificate(rsa_private_key, "ldap.example.org"))


@pytest.fixture(scope="session")
def client_identity(rsa_private_key) -> Tuple[str, str]:
    """Matching (certificate PEM, PKCS#8 key PEM) pair for mutual TLS."""
    cert = _self_signed_certificate(rsa_private_key, "ldap-client")
    return _certificate_pem(cert), _private_key_pem(rsa_private_key)


@pytest.fixture(scope="session")
def ec_client_identity(ec_private_key) -> Tuple[str, str]:
    """Matching EC (certificate PEM, SEC1 key PEM) pair."""
    cert = _self_signed_certificate(ec_private_key, "ldap-client-ec")
    return (
        _certificate_pem(cert),
        _private_key_pem(ec_private_key, serialization.PrivateFormat.TraditionalOpenSSL),
    )


@pytest.fixture(scope="session")
def mismatched_key_pem(other_rsa_private_key) -> str:
    """PKCS#8 PEM key that does not belong to any test certificate."""
    return _private_key_pem(other_rsa_private_key)


@pytest.fixture(scope="session")
def private_key_pem(rsa_private_key) -> str:
    """PKCS#8 PEM key, also used as a PEM block of the wrong type."""
    return _private_key_pem(rsa_private_key)


@pytest.fixture
def make_client_config() -> Callable[..., ClientConfig]:
    """
    Factory fixture for ClientConfig values that pass validation by default.

    Usage:
        def test_something(make_client_config):
            config = make_client_config(tls_min_version="tls13")
    """
    def _make(**overrides) -> ClientConfig:
        values = {
            "urls": ["ldaps://ldap.example.org:636"],
            "tls_min_version": "tls12",
            "tls_max_version": "tls12",
        }
        values.update(overrides)
        return ClientConfig(**values)
    return _make
