"""
JWE and JWS construction for PayGlocal token authentication.

Every request authenticated with tokens carries two compact JOSE objects:

* a JWE (``RSA-OAEP-256`` / ``A128CBC-HS256``) holding the encrypted JSON
  payload, sent as the request body;
* a JWS (``RS256``) whose payload is a SHA-256 digest of either that JWE or,
  for body-less requests, the request path. It travels in the
  ``x-gl-token-external`` header.

Keys are decoded on every call and nothing is cached between requests.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.asymmetric import padding as asym_padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .config import PayGlocalConfig
from .errors import CryptoError
from .keys import decode_private_key, decode_public_key

__all__ = [
    "JWE_ALGORITHM",
    "JWE_ENCRYPTION",
    "JWS_ALGORITHM",
    "TokenPair",
    "b64url_encode",
    "build_jwe",
    "build_jws",
    "build_token_pair",
    "digest_b64",
]

JWE_ALGORITHM = "RSA-OAEP-256"
JWE_ENCRYPTION = "A128CBC-HS256"
JWS_ALGORITHM = "RS256"
DIGEST_ALGORITHM = "SHA-256"

# A128CBC-HS256: 16 byte HMAC key followed by 16 byte AES key.
_MAC_KEY_BYTES = 16
_ENC_KEY_BYTES = 16
_IV_BYTES = 16
_TAG_BYTES = 16


@dataclass(frozen=True)
class TokenPair:
    jwe: str
    jws: str


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _json_bytes(value: Any) -> bytes:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _issued_window(config: PayGlocalConfig, now_ms: Optional[int]) -> Tuple[int, int]:
    iat = int(time.time() * 1000) if now_ms is None else now_ms
    return iat, iat + config.token_expiration_ms


def digest_b64(value: str) -> str:
    """Standard base64 of the SHA-256 digest of ``value``'s UTF-8 bytes."""
    return base64.b64encode(hashlib.sha256(value.encode("utf-8")).digest()).decode("ascii")


def _encrypt_a128cbc_hs256(
    content_key: bytes,
    iv: bytes,
    plaintext: bytes,
    aad: bytes,
) -> Tuple[bytes, bytes]:
    mac_key = content_key[:_MAC_KEY_BYTES]
    enc_key = content_key[_MAC_KEY_BYTES:]

    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(plaintext) + padder.finalize()
    encryptor = Cipher(algorithms.AES(enc_key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()

    al = (len(aad) * 8).to_bytes(8, "big")
    tag = hmac.new(mac_key, aad + iv + ciphertext + al, hashlib.sha256).digest()
    return ciphertext, tag[:_TAG_BYTES]


def build_jwe(
    payload: Mapping[str, Any],
    config: PayGlocalConfig,
    *,
    now_ms: Optional[int] = None,
) -> str:
    """
    Encrypt ``payload`` for the gateway and return the compact JWE.
    """
    iat, exp = _issued_window(config, now_ms)
    public_key = decode_public_key(config.payglocal_public_key or "")

    header: Dict[str, Any] = {
        "alg": JWE_ALGORITHM,
        "enc": JWE_ENCRYPTION,
        "iat": str(iat),
        "exp": str(exp),
        "kid": config.public_key_id,
        "issued_by": config.merchant_id,
    }

    try:
        plaintext = _json_bytes(payload)
        encoded_header = b64url_encode(_json_bytes(header))

        content_key = os.urandom(_MAC_KEY_BYTES + _ENC_KEY_BYTES)
        iv = os.urandom(_IV_BYTES)
        encrypted_key = public_key.encrypt(
            content_key,
            asym_padding.OAEP(
                mgf=asym_padding.MGF1(algorithm=hashes.SHA256()),
                algorithm=hashes.SHA256(),
                label=None,
            ),
        )
        ciphertext, tag = _encrypt_a128cbc_hs256(
            content_key, iv, plaintext, encoded_header.encode("ascii")
        )
    except (TypeError, ValueError, UnsupportedAlgorithm) as exc:
        raise CryptoError(f"Failed to generate JWE: {exc}") from exc

    return ".".join(
        (
            encoded_header,
            b64url_encode(encrypted_key),
            b64url_encode(iv),
            b64url_encode(ciphertext),
            b64url_encode(tag),
        )
    )


def build_jws(
    to_digest: str,
    config: PayGlocalConfig,
    *,
    now_ms: Optional[int] = None,
) -> str:
    """
    Sign a SHA-256 digest of ``to_digest`` and return the compact JWS.
    """
    iat, exp = _issued_window(config, now_ms)

    claims = {
        "digest": digest_b64(to_digest),
        "digestAlgorithm": DIGEST_ALGORITHM,
        "exp": str(exp),
        "iat": str(iat),
    }
    headers = {
        "typ": None,
        "issued_by": config.merchant_id,
        "kid": config.private_key_id,
        "x_gl_merchantId": config.merchant_id,
        "x_gl_enc": "true",
        "is_digested": "true",
    }

    private_key = decode_private_key(config.merchant_private_key or "")
    try:
        return jwt.PyJWS().encode(
            _json_bytes(claims),
            private_key,
            algorithm=JWS_ALGORITHM,
            headers=headers,
        )
    except (jwt.PyJWTError, TypeError, ValueError, UnsupportedAlgorithm) as exc:
        raise CryptoError(f"Failed to generate JWS: {exc}") from exc


def build_token_pair(
    payload: Mapping[str, Any],
    config: PayGlocalConfig,
    digest_input: Optional[str] = None,
) -> TokenPair:
    """
    Build the JWE for ``payload`` and a JWS over ``digest_input``.

    When ``digest_input`` is omitted the JWS signs the JWE itself.
    """
    jwe = build_jwe(payload, config)
    jws = build_jws(jwe if digest_input is None else digest_input, config)
    return TokenPair(jwe=jwe, jws=jws)
