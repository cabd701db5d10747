"""
Public facade for the PayGlocal client package.

The module re-exports the most useful pieces for integrators so they can
``from payglocal import ...`` without navigating the package.
"""

from .api import create_client
from .core import (
    AuthMode,
    ClientParameters,
    ConfigError,
    CryptoError,
    EmptyResponseError,
    InvalidKeyFormatError,
    InvalidOperationTypeError,
    InvalidTypeError,
    MissingFieldError,
    PayGlocalClient,
    PayGlocalConfig,
    PayGlocalError,
    RequestEnvelope,
    RequestTimeoutError,
    TokenPair,
    TransportError,
    UnrecognizedFieldError,
    ValidationError,
    ValidationRuleSet,
    build_environment,
    build_jwe,
    build_jws,
    build_token_pair,
    decode_key,
    load_config,
    load_env_file,
    validate_payload,
)

__version__ = "0.1.0"

__all__ = (
    "AuthMode",
    "ClientParameters",
    "ConfigError",
    "CryptoError",
    "EmptyResponseError",
    "InvalidKeyFormatError",
    "InvalidOperationTypeError",
    "InvalidTypeError",
    "MissingFieldError",
    "PayGlocalClient",
    "PayGlocalConfig",
    "PayGlocalError",
    "RequestEnvelope",
    "RequestTimeoutError",
    "TokenPair",
    "TransportError",
    "UnrecognizedFieldError",
    "ValidationError",
    "ValidationRuleSet",
    "build_environment",
    "build_jwe",
    "build_jws",
    "build_token_pair",
    "create_client",
    "decode_key",
    "load_config",
    "load_env_file",
    "validate_payload",
)
