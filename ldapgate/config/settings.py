"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Ldapgate, a product of Garudex Labs

Directory client configuration.

Defines the ClientConfig value handed to connection and bind logic, its
defaults, and the mapping from the external field names (as used in JSON
request bodies) onto it. Supports environment variable substitution using
${ENV_VAR} syntax in the URL and DN fields.
"""

import copy
import os
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ldapgate.exceptions import ConfigurationError, InvalidParameterError, ValidationRule
from ldapgate.logging_config import get_logger, log_config_validation

if TYPE_CHECKING:
    from ldapgate.config.validation import ValidatedClientConfig

logger = get_logger(__name__)


# Default for ClientConfig.urls
DEFAULT_URL = "ldaps://127.0.0.1:686"

# "username" attribute of the entry's DN: cn in ActiveDirectory, uid in openLDAP
DEFAULT_USER_ATTR = "cn"

DEFAULT_GROUP_FILTER = "(|(memberUid={{.Username}})(member={{.UserDN}})(uniqueMember={{.UserDN}}))"

DEFAULT_GROUP_ATTR = "cn"

DEFAULT_TLS_MIN_VERSION = "tls12"

DEFAULT_TLS_MAX_VERSION = "tls12"


def _expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.

    Supports ${ENV_VAR} syntax with optional default values: ${ENV_VAR:default}

    Args:
        value: Configuration value (string, dict, list, or other)

    Returns:
        Value with environment variables expanded

    Examples:
        "${LDAP_BIND_DN}" -> value of LDAP_BIND_DN env var
        "ldaps://${LDAP_HOST:localhost}:636" -> expanded string
    """
    if isinstance(value, str):
        # Pattern matches ${VAR} or ${VAR:default}
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    else:
        return value


@dataclass(frozen=True)
class ClientTLSIdentity:
    """
    Mutual TLS client identity: a PEM certificate and its PEM private key.

    Either both halves are present or the identity is absent altogether
    (ClientConfig.client_tls is None). A half-filled identity is rejected
    at construction.
    """

    cert: str
    key: str

    def __post_init__(self):
        self.check_complete()

    def check_complete(self) -> None:
        """Raise InvalidParameterError unless both certificate and key are set."""
        if not self.cert or not self.key:
            raise InvalidParameterError(
                "both client_tls_cert and client_tls_key must be set in configuration",
                rule=ValidationRule.CLIENT_TLS_PAIR,
            )

    @classmethod
    def from_fields(cls, cert: Optional[str], key: Optional[str]) -> Optional["ClientTLSIdentity"]:
        """
        Build an identity from two independently optional fields.

        Returns None when neither is set. Raises InvalidParameterError when
        exactly one is set.
        """
        if not cert and not key:
            return None
        return cls(cert=cert or "", key=key or "")


@dataclass
class ClientConfig:
    """
    Connection and authentication settings for one directory client.

    urls are tried in order by connection logic. The search templates,
    group switches and bind policy flags are passed through untouched;
    only the URL list, TLS version bounds and PEM material are validated
    (see ldapgate.config.validation).
    """

    urls: List[str] = field(default_factory=list)
    user_dn: str = ""  # base DN for user searches, e.g. ou=People,dc=example,dc=org
    anonymous_group_search: bool = False
    group_dn: str = ""
    group_filter: str = DEFAULT_GROUP_FILTER
    group_attr: str = DEFAULT_GROUP_ATTR
    upn_domain: str = ""  # enables [username]@upn_domain logins
    user_filter: str = ""
    user_attr: str = DEFAULT_USER_ATTR
    certificate: str = ""  # PEM CA/server certificate used to verify the directory
    client_tls: Optional[ClientTLSIdentity] = None
    insecure_tls: bool = False  # skips server certificate verification
    start_tls: bool = False
    bind_dn: str = ""
    bind_password: str = ""
    allow_empty_password_binds: bool = False
    discover_dn: bool = False
    tls_min_version: str = DEFAULT_TLS_MIN_VERSION
    tls_max_version: str = DEFAULT_TLS_MAX_VERSION
    use_token_groups: bool = False
    request_timeout: int = 0  # seconds
    deprecated_vault_pre111_group_cn_behavior: Optional[bool] = None

    @property
    def client_tls_cert(self) -> str:
        return self.client_tls.cert if self.client_tls else ""

    @property
    def client_tls_key(self) -> str:
        return self.client_tls.key if self.client_tls else ""

    def clone(self) -> "ClientConfig":
        """
        Return an independent copy of this configuration.

        The URL list is copied so that changes to one copy never show up
        in the other. ClientTLSIdentity is immutable and is shared.
        """
        clone = copy.copy(self)
        clone.urls = list(self.urls)
        return clone

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClientConfig":
        """
        Build a ClientConfig from externally named fields.

        Keys follow the names used in API request bodies (``urls``,
        ``binddn``, ``bindpass``, ``client_tls_cert`` ...). Absent keys
        take their defaults and ``urls`` may be a comma separated string.
        ${ENV_VAR} references are expanded only in the keys listed in
        _EXPANDABLE_FIELDS; passwords, filters and PEM material are kept
        exactly as given.

        Raises:
            InvalidParameterError: On unknown keys, a non-mapping input, a
                value of the wrong type, or a client certificate without
                its key (or the reverse)
        """
        if not isinstance(data, dict):
            raise InvalidParameterError(
                f"client configuration must be a mapping, got {type(data).__name__}"
            )

        unknown = sorted(set(data) - set(_FIELD_NAMES))
        if unknown:
            raise InvalidParameterError(
                f"unknown client configuration keys: {', '.join(unknown)}"
            )

        for key, value in data.items():
            if value is not None:
                _check_field_type(key, value)

        data = {
            key: _expand_env_vars(value) if key in _EXPANDABLE_FIELDS else value
            for key, value in data.items()
        }

        kwargs: Dict[str, Any] = {}
        for external, attr in _FIELD_NAMES.items():
            if external in ("client_tls_cert", "client_tls_key"):
                continue
            if data.get(external) is not None:
                kwargs[attr] = data[external]

        urls = kwargs.get("urls")
        if isinstance(urls, str):
            kwargs["urls"] = [u.strip() for u in urls.split(",") if u.strip()]
        elif urls is not None:
            kwargs["urls"] = list(urls)

        kwargs["client_tls"] = ClientTLSIdentity.from_fields(
            data.get("client_tls_cert"),
            data.get("client_tls_key"),
        )

        logger.debug(
            "client_config_built",
            fields=sorted(k for k in data if k not in _SECRET_FIELDS),
        )
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Return the configuration keyed by the external field names."""
        data: Dict[str, Any] = {}
        for external, attr in _FIELD_NAMES.items():
            if external == "client_tls_cert":
                data[external] = self.client_tls_cert
            elif external == "client_tls_key":
                data[external] = self.client_tls_key
            else:
                data[external] = getattr(self, attr)
        data["urls"] = list(self.urls)
        return data


# External field name -> ClientConfig attribute
_FIELD_NAMES: Dict[str, str] = {
    "urls": "urls",
    "userdn": "user_dn",
    "anonymous_group_search": "anonymous_group_search",
    "groupdn": "group_dn",
    "groupfilter": "group_filter",
    "groupattr": "group_attr",
    "upndomain": "upn_domain",
    "userfilter": "user_filter",
    "userattr": "user_attr",
    "certificate": "certificate",
    "client_tls_cert": "client_tls_cert",
    "client_tls_key": "client_tls_key",
    "insecure_tls": "insecure_tls",
    "starttls": "start_tls",
    "binddn": "bind_dn",
    "bindpass": "bind_password",
    "allow_empty_passwd_bind": "allow_empty_password_binds",
    "discoverdn": "discover_dn",
    "tls_min_version": "tls_min_version",
    "tls_max_version": "tls_max_version",
    "use_token_groups": "use_token_groups",
    "request_timeout": "request_timeout",
    "use_pre111_group_cn_behavior": "deprecated_vault_pre111_group_cn_behavior",
}

_SECRET_FIELDS = frozenset({"bindpass", "client_tls_key"})

# Keys whose values may reference ${ENV_VAR}
_EXPANDABLE_FIELDS = frozenset({"urls", "userdn", "groupdn", "binddn", "upndomain"})

_BOOL_FIELDS = frozenset({
    "anonymous_group_search",
    "insecure_tls",
    "starttls",
    "allow_empty_passwd_bind",
    "discoverdn",
    "use_token_groups",
    "use_pre111_group_cn_behavior",
})

_INT_FIELDS = frozenset({"request_timeout"})


def _check_field_type(key: str, value: Any) -> None:
    """Raise InvalidParameterError if value has the wrong type for key."""
    if key in _BOOL_FIELDS:
        ok, expected = isinstance(value, bool), "bool"
    elif key in _INT_FIELDS:
        # bool is a subclass of int but never a valid timeout
        ok, expected = isinstance(value, int) and not isinstance(value, bool), "int"
    elif key == "urls":
        ok = isinstance(value, str) or (
            isinstance(value, (list, tuple)) and all(isinstance(u, str) for u in value)
        )
        expected = "str or list of str"
    else:
        ok, expected = isinstance(value, str), "str"
    if not ok:
        raise InvalidParameterError(
            f"invalid type for '{key}': expected {expected}, got {type(value).__name__}"
        )


def _input_urls(data: Any) -> List[str]:
    """Return the URLs of a raw mapping as given, before any expansion."""
    urls = data.get("urls") if isinstance(data, dict) else None
    if isinstance(urls, str):
        return [u.strip() for u in urls.split(",") if u.strip()]
    if isinstance(urls, (list, tuple)):
        return [u for u in urls if isinstance(u, str)]
    return []


def get_default_config() -> ClientConfig:
    """
    Get default configuration with sensible defaults.

    Returns:
        ClientConfig: Default configuration pointing at DEFAULT_URL
    """
    return ClientConfig(urls=[DEFAULT_URL])


def load_client_config(data: Dict[str, Any]) -> "ValidatedClientConfig":
    """
    Build and validate a client configuration in one step.

    Args:
        data: Externally named configuration fields (see ClientConfig.from_dict)

    Returns:
        ValidatedClientConfig: The accepted configuration with TLS material resolved

    Raises:
        InvalidParameterError: If the configuration is structurally invalid
        CertificateParseError: If PEM material fails to parse or match
    """
    from ldapgate.config.validation import validate_config

    # Logged as given so expanded ${ENV_VAR} values never reach the log
    urls = _input_urls(data)
    try:
        validated = validate_config(ClientConfig.from_dict(data))
    except ConfigurationError as e:
        log_validation_result(urls, e)
        raise
    log_validation_result(urls, None)
    return validated


def log_validation_result(urls: List[str], error: Optional[ConfigurationError]) -> None:
    """Emit a structured validation outcome event."""
    if error is None:
        log_config_validation(logger, urls, accepted=True)
        return
    rule = getattr(error, "rule", None)
    log_config_validation(
        logger,
        urls,
        accepted=False,
        rule=rule.value if rule is not None else None,
        reason=str(error),
        error_type=type(error).__name__,
    )
