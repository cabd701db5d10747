"""
Configuration objects and helpers for the PayGlocal client.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .environment import build_environment
from .errors import ConfigError

__all__ = [
    "AuthMode",
    "BASE_URLS",
    "ClientParameters",
    "ConfigError",
    "DEFAULT_TOKEN_EXPIRATION_MS",
    "LOG_LEVELS",
    "PayGlocalConfig",
    "load_config",
]

BASE_URLS: Dict[str, str] = {
    "UAT": "https://api.uat.payglocal.in",
    "PROD": "https://api.payglocal.in",
}

LOG_LEVELS: Dict[str, int] = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

DEFAULT_TOKEN_EXPIRATION_MS = 300000
DEFAULT_LOG_LEVEL = "info"

_PARAMETER_TO_ENV_KEY = {
    "merchant_id": "PAYGLOCAL_MERCHANT_ID",
    "api_key": "PAYGLOCAL_API_KEY",
    "environment": "PAYGLOCAL_ENV",
    "public_key_id": "PAYGLOCAL_PUBLIC_KEY_ID",
    "private_key_id": "PAYGLOCAL_PRIVATE_KEY_ID",
    "payglocal_public_key": "PAYGLOCAL_PUBLIC_KEY",
    "merchant_private_key": "PAYGLOCAL_PRIVATE_KEY",
    "log_level": "PAYGLOCAL_LOG_LEVEL",
    "token_expiration_ms": "PAYGLOCAL_TOKEN_EXPIRATION",
}

_KEY_PATH_ENV_KEYS = {
    "PAYGLOCAL_PUBLIC_KEY": "PAYGLOCAL_PUBLIC_KEY_PATH",
    "PAYGLOCAL_PRIVATE_KEY": "PAYGLOCAL_PRIVATE_KEY_PATH",
}


class AuthMode(str, enum.Enum):
    API_KEY = "api_key"
    TOKEN = "token"


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


@dataclass(frozen=True)
class ClientParameters:
    """
    Explicit parameter bundle for constructing :class:`PayGlocalConfig`.

    Callers can either instantiate this helper or pass the individual keyword
    arguments directly to :func:`load_config`.
    """

    merchant_id: Optional[str] = None
    api_key: Optional[str] = None
    environment: Optional[str] = None
    public_key_id: Optional[str] = None
    private_key_id: Optional[str] = None
    payglocal_public_key: Optional[str] = None
    merchant_private_key: Optional[str] = None
    log_level: Optional[str] = None
    token_expiration_ms: Optional[int | str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = str(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[ClientParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown client parameter '{key}'") from exc
        overrides[env_key] = str(value)
    return overrides


def _read_key_file(path: str, env_key: str) -> str:
    try:
        return Path(path).expanduser().read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Could not read {env_key} from '{path}': {exc}") from exc


def _resolve_key(values: Mapping[str, str], env_key: str) -> Optional[str]:
    inline = _blank_to_none(values.get(env_key))
    if inline is not None:
        return inline
    path_key = _KEY_PATH_ENV_KEYS[env_key]
    path = _blank_to_none(values.get(path_key))
    if path is None:
        return None
    return _read_key_file(path, path_key)


@dataclass(frozen=True)
class PayGlocalConfig:
    """
    Immutable client configuration.

    ``environment`` is case-insensitive and resolves ``base_url``. Either an
    ``api_key`` or all four token fields must be supplied.
    """

    merchant_id: str
    environment: str
    api_key: Optional[str] = None
    public_key_id: Optional[str] = None
    private_key_id: Optional[str] = None
    payglocal_public_key: Optional[str] = field(default=None, repr=False)
    merchant_private_key: Optional[str] = field(default=None, repr=False)
    log_level: str = DEFAULT_LOG_LEVEL
    token_expiration_ms: int = DEFAULT_TOKEN_EXPIRATION_MS
    base_url: str = field(init=False)

    def __post_init__(self) -> None:
        environment = _blank_to_none(self.environment)
        if environment is None:
            raise ConfigError("Missing required configuration: environment for base URL")
        environment = environment.strip().upper()
        try:
            base_url = BASE_URLS[environment]
        except KeyError:
            raise ConfigError(
                f'Invalid environment "{environment}" provided. Must be "UAT" or "PROD".'
            ) from None

        if _blank_to_none(self.merchant_id) is None:
            raise ConfigError("Missing required configuration: merchant_id")

        for name in (
            "api_key",
            "public_key_id",
            "private_key_id",
            "payglocal_public_key",
            "merchant_private_key",
        ):
            object.__setattr__(self, name, _blank_to_none(getattr(self, name)))

        if self.api_key is None and not self.has_token_credentials:
            raise ConfigError(
                "Missing required configuration for token authentication: "
                "public_key_id, private_key_id, payglocal_public_key, merchant_private_key"
            )

        if isinstance(self.token_expiration_ms, bool) or not isinstance(
            self.token_expiration_ms, int
        ):
            raise ConfigError("token_expiration_ms must be an integer number of milliseconds")
        if self.token_expiration_ms <= 0:
            raise ConfigError("token_expiration_ms must be greater than zero")

        level = (self.log_level or DEFAULT_LOG_LEVEL).strip().lower()
        if level not in LOG_LEVELS:
            logging.getLogger("payglocal").warning(
                'Invalid log level "%s", defaulting to "%s"', self.log_level, DEFAULT_LOG_LEVEL
            )
            level = DEFAULT_LOG_LEVEL

        object.__setattr__(self, "environment", environment)
        object.__setattr__(self, "base_url", base_url)
        object.__setattr__(self, "log_level", level)

    @property
    def has_token_credentials(self) -> bool:
        return all(
            (
                self.public_key_id,
                self.private_key_id,
                self.payglocal_public_key,
                self.merchant_private_key,
            )
        )

    @property
    def auth_mode(self) -> AuthMode:
        return AuthMode.API_KEY if self.api_key else AuthMode.TOKEN

    @property
    def logging_level(self) -> int:
        return LOG_LEVELS[self.log_level]

    def safe_summary(self) -> Dict[str, Any]:
        """Return the configuration without any secret material."""
        return {
            "merchantId": self.merchant_id,
            "publicKeyId": self.public_key_id,
            "privateKeyId": self.private_key_id,
            "baseUrl": self.base_url,
            "logLevel": self.log_level,
            "tokenExpiration": self.token_expiration_ms,
            "hasApiKey": self.api_key is not None,
            "hasPayglocalPublicKey": self.payglocal_public_key is not None,
            "hasMerchantPrivateKey": self.merchant_private_key is not None,
        }

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "PayGlocalConfig":
        expiration_raw = values.get("PAYGLOCAL_TOKEN_EXPIRATION")
        if _blank_to_none(expiration_raw) is None:
            token_expiration_ms = DEFAULT_TOKEN_EXPIRATION_MS
        else:
            try:
                token_expiration_ms = int(expiration_raw)
            except ValueError as exc:
                raise ConfigError(
                    "PAYGLOCAL_TOKEN_EXPIRATION must be an integer number of "
                    f"milliseconds, got '{expiration_raw}'"
                ) from exc

        return cls(
            merchant_id=values.get("PAYGLOCAL_MERCHANT_ID", ""),
            environment=values.get("PAYGLOCAL_ENV", ""),
            api_key=values.get("PAYGLOCAL_API_KEY"),
            public_key_id=values.get("PAYGLOCAL_PUBLIC_KEY_ID"),
            private_key_id=values.get("PAYGLOCAL_PRIVATE_KEY_ID"),
            payglocal_public_key=_resolve_key(values, "PAYGLOCAL_PUBLIC_KEY"),
            merchant_private_key=_resolve_key(values, "PAYGLOCAL_PRIVATE_KEY"),
            log_level=values.get("PAYGLOCAL_LOG_LEVEL") or DEFAULT_LOG_LEVEL,
            token_expiration_ms=token_expiration_ms,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[ClientParameters] = None,
        merchant_id: Optional[str] = None,
        api_key: Optional[str] = None,
        environment: Optional[str] = None,
        public_key_id: Optional[str] = None,
        private_key_id: Optional[str] = None,
        payglocal_public_key: Optional[str] = None,
        merchant_private_key: Optional[str] = None,
        log_level: Optional[str] = None,
        token_expiration_ms: Optional[int | str] = None,
    ) -> "PayGlocalConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "merchant_id": merchant_id,
                "api_key": api_key,
                "environment": environment,
                "public_key_id": public_key_id,
                "private_key_id": private_key_id,
                "payglocal_public_key": payglocal_public_key,
                "merchant_private_key": merchant_private_key,
                "log_level": log_level,
                "token_expiration_ms": token_expiration_ms,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        resolved = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(resolved.variables)


def load_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    merchant_id: Optional[str] = None,
    api_key: Optional[str] = None,
    environment: Optional[str] = None,
    public_key_id: Optional[str] = None,
    private_key_id: Optional[str] = None,
    payglocal_public_key: Optional[str] = None,
    merchant_private_key: Optional[str] = None,
    log_level: Optional[str] = None,
    token_expiration_ms: Optional[int | str] = None,
) -> PayGlocalConfig:
    """
    Convenience wrapper that mirrors :meth:`PayGlocalConfig.from_env`.

    The configuration can be provided entirely through environment variables,
    a ``.env`` file, direct keyword arguments, or any combination of the three.
    """
    return PayGlocalConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        merchant_id=merchant_id,
        api_key=api_key,
        environment=environment,
        public_key_id=public_key_id,
        private_key_id=private_key_id,
        payglocal_public_key=payglocal_public_key,
        merchant_private_key=merchant_private_key,
        log_level=log_level,
        token_expiration_ms=token_expiration_ms,
    )
