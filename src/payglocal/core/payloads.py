"""
Helpers for constructing the HTTP requests sent to the PayGlocal gateway.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .config import PayGlocalConfig
from .errors import ConfigError, ValidationError
from .tokens import TokenPair

__all__ = [
    "RequestEnvelope",
    "SDK_VERSION",
    "build_api_key_headers",
    "build_api_key_request",
    "build_jwt_headers",
    "build_jwt_request",
]

SDK_VERSION = "PayGlocal-Python-SDK/0.1.0"

SDK_VERSION_HEADER = "pg-sdk-version"
API_KEY_HEADER = "x-gl-auth"
TOKEN_HEADER = "x-gl-token-external"


@dataclass(frozen=True)
class RequestEnvelope:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None


def _with_custom(
    headers: Dict[str, str],
    custom_headers: Optional[Mapping[str, str]],
) -> Dict[str, str]:
    if custom_headers:
        headers.update(custom_headers)
    return headers


def build_api_key_headers(
    api_key: Optional[str],
    custom_headers: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    if not api_key:
        raise ConfigError("API key cannot be empty for API key authentication")
    headers = {
        SDK_VERSION_HEADER: SDK_VERSION,
        "Content-Type": "application/json",
        API_KEY_HEADER: api_key,
    }
    return _with_custom(headers, custom_headers)


def build_jwt_headers(
    jws: str,
    custom_headers: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    if not jws:
        raise ValueError("JWS token cannot be empty")
    headers = {
        SDK_VERSION_HEADER: SDK_VERSION,
        "Content-Type": "text/plain",
        TOKEN_HEADER: jws,
    }
    return _with_custom(headers, custom_headers)


def build_api_key_request(
    config: PayGlocalConfig,
    path: str,
    payload: Mapping[str, Any],
    *,
    method: str = "POST",
    custom_headers: Optional[Mapping[str, str]] = None,
) -> RequestEnvelope:
    """Plain JSON request authenticated with ``x-gl-auth``."""
    method = method.upper()
    body = None
    if method != "GET":
        try:
            body = json.dumps(payload)
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Payload is not JSON serializable: {exc}") from exc
    return RequestEnvelope(
        method=method,
        url=f"{config.base_url}{path}",
        headers=build_api_key_headers(config.api_key, custom_headers),
        body=body,
    )


def build_jwt_request(
    config: PayGlocalConfig,
    path: str,
    tokens: TokenPair,
    *,
    method: str = "POST",
    custom_headers: Optional[Mapping[str, str]] = None,
) -> RequestEnvelope:
    """
    Token-authenticated request: the JWE is the raw body, the JWS a header.
    """
    method = method.upper()
    return RequestEnvelope(
        method=method,
        url=f"{config.base_url}{path}",
        headers=build_jwt_headers(tokens.jws, custom_headers),
        body=None if method == "GET" else tokens.jwe,
    )
