"""
Core primitives that implement the PayGlocal request lifecycle.
"""

from .client import OPERATIONS, PayGlocalClient
from .config import (
    AuthMode,
    ClientParameters,
    PayGlocalConfig,
    load_config,
)
from .endpoints import build_endpoint
from .environment import ClientEnvironment, build_environment, load_env_file
from .errors import (
    ConfigError,
    CryptoError,
    EmptyResponseError,
    InvalidKeyFormatError,
    InvalidOperationTypeError,
    InvalidTypeError,
    MissingFieldError,
    PayGlocalError,
    RequestTimeoutError,
    TransportError,
    UnrecognizedFieldError,
    ValidationError,
)
from .keys import decode_key
from .orchestrator import Operation, RequestKind, build_request, execute
from .payloads import RequestEnvelope
from .tokens import TokenPair, build_jwe, build_jws, build_token_pair
from .validation import (
    ConditionalRule,
    OperationTypeCheck,
    ValidationRuleSet,
    validate_payload,
)

__all__ = [
    "AuthMode",
    "ClientEnvironment",
    "ClientParameters",
    "ConditionalRule",
    "ConfigError",
    "CryptoError",
    "EmptyResponseError",
    "InvalidKeyFormatError",
    "InvalidOperationTypeError",
    "InvalidTypeError",
    "MissingFieldError",
    "OPERATIONS",
    "Operation",
    "OperationTypeCheck",
    "PayGlocalClient",
    "PayGlocalConfig",
    "PayGlocalError",
    "RequestEnvelope",
    "RequestKind",
    "RequestTimeoutError",
    "TokenPair",
    "TransportError",
    "UnrecognizedFieldError",
    "ValidationError",
    "ValidationRuleSet",
    "build_endpoint",
    "build_environment",
    "build_jwe",
    "build_jws",
    "build_request",
    "build_token_pair",
    "decode_key",
    "execute",
    "load_config",
    "load_env_file",
    "validate_payload",
]
