"""
HTTP transport for the PayGlocal gateway.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Mapping, Optional

import requests

from .errors import EmptyResponseError, RequestTimeoutError, TransportError
from .payloads import API_KEY_HEADER, TOKEN_HEADER, RequestEnvelope

__all__ = ["DEFAULT_TIMEOUT_SECONDS", "mask_headers", "send_request"]

DEFAULT_TIMEOUT_SECONDS = 90.0

_MASKED = "***MASKED***"
_SENSITIVE_HEADERS = {API_KEY_HEADER, TOKEN_HEADER}


def mask_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    return {
        key: _MASKED if key.lower() in _SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


def _describe_body(envelope: RequestEnvelope) -> Optional[str]:
    if envelope.body is None:
        return None
    if envelope.headers.get("Content-Type") == "text/plain":
        return "[JWE token]"
    return envelope.body


def send_request(
    session: requests.Session,
    envelope: RequestEnvelope,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    logger: Optional[logging.Logger] = None,
) -> Any:
    """
    Send ``envelope`` and return the decoded JSON response.

    ``timeout`` bounds every socket operation and the total elapsed time of
    the call.
    """
    log = logger or logging.getLogger("payglocal")
    log.debug(
        "API Request: %s %s headers=%s body=%s",
        envelope.method,
        envelope.url,
        mask_headers(envelope.headers),
        _describe_body(envelope),
    )

    started = time.monotonic()
    try:
        response = session.request(
            envelope.method,
            envelope.url,
            headers=envelope.headers,
            data=None if envelope.body is None else envelope.body.encode("utf-8"),
            timeout=timeout,
        )
    except requests.Timeout as exc:
        raise RequestTimeoutError(
            f"Request to {envelope.url} timed out after {timeout:g} seconds"
        ) from exc
    except requests.RequestException as exc:
        raise TransportError(f"HTTP request to {envelope.url} failed: {exc}") from exc

    if time.monotonic() - started > timeout:
        raise RequestTimeoutError(
            f"Request to {envelope.url} exceeded the {timeout:g} second deadline"
        )

    if not 200 <= response.status_code < 300:
        raise TransportError(
            f"Gateway responded with {response.status_code}: {response.text}",
            status_code=response.status_code,
            body=response.text,
        )

    if not response.text or not response.text.strip():
        raise EmptyResponseError(f"Empty response from {envelope.url}")

    try:
        payload = response.json()
    except ValueError as exc:
        raise TransportError(
            f"Failed to parse JSON from gateway at {envelope.url}: {response.text}",
            status_code=response.status_code,
            body=response.text,
        ) from exc

    log.debug(
        "API Response: %s %s - %s %s",
        envelope.method,
        envelope.url,
        response.status_code,
        payload,
    )
    return payload
