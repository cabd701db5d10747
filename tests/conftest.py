"""Shared pytest fixtures for the PayGlocal client tests."""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
import requests
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jwcrypto import jwe, jwk, jws

from payglocal.core.config import PayGlocalConfig


def public_pem(private_key: rsa.RSAPrivateKey) -> str:
    return (
        private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode("ascii")
    )


def private_pem(private_key: rsa.RSAPrivateKey) -> str:
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture(scope="session")
def gateway_key() -> rsa.RSAPrivateKey:
    """Stands in for PayGlocal's key pair; the client only sees the public half."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def merchant_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def token_config(gateway_public_pem: str, merchant_private_pem: str) -> PayGlocalConfig:
    return PayGlocalConfig(
        merchant_id="M1",
        environment="uat",
        public_key_id="gateway-kid",
        private_key_id="merchant-kid",
        payglocal_public_key=gateway_public_pem,
        merchant_private_key=merchant_private_pem,
    )


@pytest.fixture
def api_key_config() -> PayGlocalConfig:
    return PayGlocalConfig(merchant_id="M1", environment="UAT", api_key="K1")


class RecordingSession:
    """Drop-in for ``requests.Session`` that records calls instead of sending them."""

    def __init__(
        self,
        *,
        status_code: int = 200,
        body: str = '{"status": "SENT", "gid": "gl_o-123"}',
        error: Optional[Exception] = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        response = requests.Response()
        response.status_code = self.status_code
        response._content = self.body.encode("utf-8")
        response.encoding = "utf-8"
        response.url = url
        return response

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def session() -> RecordingSession:
    return RecordingSession()


@pytest.fixture
def decrypt_jwe(
    gateway_private_jwk: jwk.JWK,
) -> Callable[[str], Tuple[Dict[str, Any], bytes]]:
    """Decrypts with jwcrypto, acting as the gateway would."""

    def _decrypt(token: str) -> Tuple[Dict[str, Any], bytes]:
        envelope = jwe.JWE()
        envelope.deserialize(token, key=gateway_private_jwk)
        return envelope.jose_header, envelope.payload

    return _decrypt


@pytest.fixture
def verify_jws(merchant_public_jwk: jwk.JWK) -> Callable[[str], Dict[str, Any]]:
    """Verifies with jwcrypto and returns the decoded claims."""

    def _verify(token: str) -> Dict[str, Any]:
        signed = jws.JWS()
        signed.deserialize(token)
        signed.verify(merchant_public_jwk)
        return json.loads(signed.payload)

    return _verify


@pytest.fixture(scope="session")
def gateway_public_pem(gateway_key: rsa.RSAPrivateKey) -> str:
    return public_pem(gateway_key)


@pytest.fixture(scope="session")
def merchant_private_pem(merchant_key: rsa.RSAPrivateKey) -> str:
    return private_pem(merchant_key)


@pytest.fixture(scope="session")
def gateway_private_jwk(gateway_key: rsa.RSAPrivateKey) -> jwk.JWK:
    key = jwk.JWK()
    key.import_from_pem(private_pem(gateway_key).encode("ascii"), kid="gateway-kid")
    return key


@pytest.fixture(scope="session")
def merchant_public_jwk(merchant_key: rsa.RSAPrivateKey) -> jwk.JWK:
    key = jwk.JWK()
    key.import_from_pem(public_pem(merchant_key).encode("ascii"), kid="merchant-kid")
    return key
