"""
PayGlocal API endpoint templates.
"""

from __future__ import annotations

from typing import Mapping, Optional

__all__ = [
    "AUTH_REVERSAL",
    "CAPTURE",
    "PAYMENT_INITIATE",
    "REFUND",
    "SI_MODIFY",
    "SI_STATUS",
    "TRANSACTION_STATUS",
    "build_endpoint",
]

PAYMENT_INITIATE = "/gl/v1/payments/initiate/paycollect"

TRANSACTION_STATUS = "/gl/v1/payments/{gid}/status"
REFUND = "/gl/v1/payments/{gid}/refund"
CAPTURE = "/gl/v1/payments/{gid}/capture"
AUTH_REVERSAL = "/gl/v1/payments/{gid}/auth-reversal"

SI_MODIFY = "/gl/v1/payments/si/modify"
SI_STATUS = "/gl/v1/payments/si/status"


def build_endpoint(template: str, params: Optional[Mapping[str, str]] = None) -> str:
    """
    Substitute ``{name}`` placeholders in ``template``.

    Placeholders without a matching parameter are left untouched.
    """
    if not template:
        raise ValueError("Endpoint template cannot be empty")

    path = template
    for name, value in (params or {}).items():
        path = path.replace("{" + name + "}", str(value))
    return path
