"""
Request orchestration: validate, authenticate, build and dispatch one call.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import requests

from .config import AuthMode, PayGlocalConfig
from .endpoints import build_endpoint
from .errors import ConfigError, PayGlocalError, ValidationError
from .payloads import RequestEnvelope, build_api_key_request, build_jwt_request
from .tokens import build_token_pair
from .transport import DEFAULT_TIMEOUT_SECONDS, send_request
from .validation import MISSING, ValidationRuleSet, resolve_path, validate_payload

__all__ = ["Operation", "RequestKind", "build_request", "execute"]


class RequestKind(str, enum.Enum):
    PAYMENT = "payment"
    TRANSACTION = "transaction"
    STANDING_INSTRUCTION = "standing_instruction"


@dataclass(frozen=True)
class Operation:
    """
    Everything the orchestrator needs to know about one gateway operation.

    ``sign_path`` makes the JWS digest the substituted endpoint path instead
    of the JWE, for requests without a body.
    """

    name: str
    kind: RequestKind
    endpoint: str
    rules: ValidationRuleSet
    auth_mode: AuthMode = AuthMode.TOKEN
    method: str = "POST"
    sign_path: bool = False


def _path_params(operation: Operation, payload: Mapping[str, Any]) -> Dict[str, str]:
    if operation.kind is not RequestKind.TRANSACTION:
        return {}
    gid = resolve_path(payload, "gid")
    if gid is MISSING or gid is None:
        # Leaves the literal {gid} in the path.
        return {}
    return {"gid": str(gid)}


def _reference(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, Mapping):
        return {}
    return {
        key: payload[key]
        for key in ("merchantTxnId", "gid", "siId")
        if payload.get(key) is not None
    }


def build_request(
    operation: Operation,
    payload: Mapping[str, Any],
    config: PayGlocalConfig,
    *,
    custom_headers: Optional[Mapping[str, str]] = None,
    logger: Optional[logging.Logger] = None,
) -> RequestEnvelope:
    """
    Validate ``payload`` and turn it into a ready-to-send envelope.
    """
    log = logger or logging.getLogger("payglocal")
    validate_payload(payload, operation.rules, logger=log)

    path = build_endpoint(operation.endpoint, _path_params(operation, payload))

    if operation.auth_mode is AuthMode.API_KEY:
        if not config.api_key:
            raise ConfigError(f"{operation.name} requires an API key in the configuration")
        return build_api_key_request(
            config,
            path,
            payload,
            method=operation.method,
            custom_headers=custom_headers,
        )

    if not config.has_token_credentials:
        raise ConfigError(
            f"{operation.name} requires public_key_id, private_key_id, "
            "payglocal_public_key and merchant_private_key"
        )
    log.debug("Generating JOSE tokens for %s", operation.name)
    tokens = build_token_pair(
        payload,
        config,
        digest_input=path if operation.sign_path else None,
    )
    return build_jwt_request(
        config,
        path,
        tokens,
        method=operation.method,
        custom_headers=custom_headers,
    )


def execute(
    operation: Operation,
    payload: Mapping[str, Any],
    config: PayGlocalConfig,
    session: requests.Session,
    *,
    custom_headers: Optional[Mapping[str, str]] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    logger: Optional[logging.Logger] = None,
) -> Any:
    """
    Run ``operation`` end to end and return the decoded gateway response.
    """
    log = logger or logging.getLogger("payglocal")
    reference = _reference(payload)
    log.info("Initiating %s %s", operation.name, reference)

    try:
        envelope = build_request(
            operation,
            payload,
            config,
            custom_headers=custom_headers,
            logger=log,
        )
        response = send_request(session, envelope, timeout=timeout, logger=log)
    except ValidationError as exc:
        log.error("%s validation failed on %s: %s", operation.name, exc.field or "payload", exc)
        raise
    except PayGlocalError as exc:
        log.error("%s failed: %s", operation.name, exc)
        raise

    log.info("%s completed successfully %s", operation.name, reference)
    return response
