"""
Public, high-level helpers for building a PayGlocal client.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

import requests

from .core.client import PayGlocalClient
from .core.config import ClientParameters, PayGlocalConfig, load_config

__all__ = ["create_client"]


def create_client(
    *,
    config: Optional[PayGlocalConfig] = None,
    session: Optional[requests.Session] = None,
    logger: Optional[logging.Logger] = None,
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
) -> PayGlocalClient:
    """
    Construct a :class:`PayGlocalClient`.

    Callers can either supply a ready-made :class:`PayGlocalConfig` or let the
    helper assemble one from ``PAYGLOCAL_*`` environment data, a ``.env`` file
    and keyword arguments.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            merchant_id,
            api_key,
            environment,
            public_key_id,
            private_key_id,
            payglocal_public_key,
            merchant_private_key,
            log_level,
            token_expiration_ms,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built PayGlocalConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_config(
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
    return PayGlocalClient(cfg, session=session, logger=logger)
