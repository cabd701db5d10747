"""
The PayGlocal client facade and the per-operation validation rules.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Mapping, Optional, Type

import requests

from . import endpoints
from .config import AuthMode, PayGlocalConfig
from .errors import ValidationError
from .orchestrator import Operation, RequestKind, execute
from .transport import DEFAULT_TIMEOUT_SECONDS
from .validation import (
    ConditionalRule,
    OperationTypeCheck,
    ValidationRuleSet,
    resolve_path,
)

__all__ = ["OPERATIONS", "PayGlocalClient"]

PAYMENT_FIELDS = (
    "merchantTxnId",
    "paymentData",
    "merchantCallbackURL",
    "paymentData.totalAmount",
    "paymentData.txnCurrency",
)

SI_FIELDS = (
    "standingInstruction",
    "standingInstruction.data",
    "standingInstruction.data.numberOfPayments",
    "standingInstruction.data.frequency",
    "standingInstruction.data.type",
)


def _check_standing_instruction_amounts(payload: Mapping[str, Any]) -> None:
    data = resolve_path(payload, "standingInstruction.data")
    if data.get("type") == "VARIABLE" and data.get("startDate") is not None:
        raise ValidationError(
            "startDate should not be included for VARIABLE SI type",
            field="standingInstruction.data.startDate",
        )
    if data.get("amount") is None and data.get("maxAmount") is None:
        raise ValidationError(
            "Either amount or maxAmount is required for standingInstruction.data",
            field="standingInstruction.data.amount",
        )


def _check_capture_disabled(payload: Mapping[str, Any]) -> None:
    if payload.get("captureTxn") is not False:
        raise ValidationError("captureTxn should be false for Auth payment", field="captureTxn")


def _transaction(name: str, endpoint: str, amount_field: str) -> Operation:
    return Operation(
        name=name,
        kind=RequestKind.TRANSACTION,
        endpoint=endpoint,
        rules=ValidationRuleSet(required_fields=("gid", amount_field)),
    )


def _si_update(name: str, action: str) -> Operation:
    return Operation(
        name=name,
        kind=RequestKind.STANDING_INSTRUCTION,
        endpoint=endpoints.SI_MODIFY,
        rules=ValidationRuleSet(
            required_fields=("siId", "action"),
            operation_type_check=OperationTypeCheck("action", (action,)),
        ),
    )


API_KEY_PAYMENT = Operation(
    name="API key payment",
    kind=RequestKind.PAYMENT,
    endpoint=endpoints.PAYMENT_INITIATE,
    rules=ValidationRuleSet(required_fields=PAYMENT_FIELDS),
    auth_mode=AuthMode.API_KEY,
)

JWT_PAYMENT = Operation(
    name="JWT payment",
    kind=RequestKind.PAYMENT,
    endpoint=endpoints.PAYMENT_INITIATE,
    rules=ValidationRuleSet(required_fields=PAYMENT_FIELDS, schema_check=True),
)

SI_PAYMENT = Operation(
    name="SI payment",
    kind=RequestKind.PAYMENT,
    endpoint=endpoints.PAYMENT_INITIATE,
    rules=ValidationRuleSet(
        required_fields=PAYMENT_FIELDS + SI_FIELDS,
        operation_type_check=OperationTypeCheck(
            "standingInstruction.data.type", ("FIXED", "VARIABLE")
        ),
        conditional_rule=ConditionalRule(
            "standingInstruction.data.type",
            "FIXED",
            ("standingInstruction.data.startDate",),
        ),
        schema_check=True,
        custom_checks=(_check_standing_instruction_amounts,),
    ),
)

AUTH_PAYMENT = Operation(
    name="Auth payment",
    kind=RequestKind.PAYMENT,
    endpoint=endpoints.PAYMENT_INITIATE,
    rules=ValidationRuleSet(
        required_fields=PAYMENT_FIELDS + ("captureTxn",),
        schema_check=True,
        custom_checks=(_check_capture_disabled,),
    ),
)

REFUND = _transaction("refund", endpoints.REFUND, "refundAmount")
CAPTURE = _transaction("capture", endpoints.CAPTURE, "captureAmount")
AUTH_REVERSAL = _transaction("auth reversal", endpoints.AUTH_REVERSAL, "reversalAmount")

STATUS = Operation(
    name="status check",
    kind=RequestKind.TRANSACTION,
    endpoint=endpoints.TRANSACTION_STATUS,
    rules=ValidationRuleSet(required_fields=("gid",)),
    method="GET",
    sign_path=True,
)

PAUSE_SI = _si_update("SI pause", "pause")
ACTIVATE_SI = _si_update("SI activation", "activate")

SI_STATUS = Operation(
    name="SI status check",
    kind=RequestKind.STANDING_INSTRUCTION,
    endpoint=endpoints.SI_STATUS,
    rules=ValidationRuleSet(required_fields=("siId",)),
)

OPERATIONS = {
    "api-key-payment": API_KEY_PAYMENT,
    "jwt-payment": JWT_PAYMENT,
    "si-payment": SI_PAYMENT,
    "auth-payment": AUTH_PAYMENT,
    "refund": REFUND,
    "capture": CAPTURE,
    "auth-reversal": AUTH_REVERSAL,
    "status": STATUS,
    "pause-si": PAUSE_SI,
    "activate-si": ACTIVATE_SI,
    "si-status": SI_STATUS,
}


def _build_logger(config: PayGlocalConfig) -> logging.Logger:
    """
    Return a logger private to one client.

    The logger is not registered with the logging manager, so its level never
    leaks to other clients; records still propagate through ``payglocal``.
    """
    logger = logging.Logger(f"payglocal.{config.merchant_id}", config.logging_level)
    logger.parent = logging.getLogger("payglocal")
    return logger


class PayGlocalClient:
    """
    Entry point for every PayGlocal operation.

    The client owns one immutable configuration, one HTTP session and one
    logger. Each ``initiate_*`` method validates its payload, builds the
    authentication material fresh and performs a single request.
    """

    def __init__(
        self,
        config: PayGlocalConfig,
        *,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.logger = logger or _build_logger(config)
        self.timeout = timeout
        self.logger.debug("SDK configuration %s", config.safe_summary())
        self.logger.info("PayGlocalClient initialized for %s", config.base_url)

    def run(
        self,
        operation: Operation,
        payload: Mapping[str, Any],
        *,
        custom_headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        return execute(
            operation,
            payload,
            self.config,
            self.session,
            custom_headers=custom_headers,
            timeout=self.timeout,
            logger=self.logger,
        )

    def initiate_api_key_payment(
        self,
        payload: Mapping[str, Any],
        *,
        custom_headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """Initiate a payment authenticated with the merchant API key."""
        return self.run(API_KEY_PAYMENT, payload, custom_headers=custom_headers)

    def initiate_jwt_payment(
        self,
        payload: Mapping[str, Any],
        *,
        custom_headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """Initiate a schema-checked payment with an encrypted body."""
        return self.run(JWT_PAYMENT, payload, custom_headers=custom_headers)

    def initiate_si_payment(
        self,
        payload: Mapping[str, Any],
        *,
        custom_headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """
        Initiate a payment that registers a standing instruction.

        ``standingInstruction.data.type`` must be ``FIXED`` (with a
        ``startDate``) or ``VARIABLE`` (without one), and ``amount`` or
        ``maxAmount`` must be set.
        """
        return self.run(SI_PAYMENT, payload, custom_headers=custom_headers)

    def initiate_auth_payment(
        self,
        payload: Mapping[str, Any],
        *,
        custom_headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """Initiate an authorization-only payment (``captureTxn`` is ``False``)."""
        return self.run(AUTH_PAYMENT, payload, custom_headers=custom_headers)

    def initiate_refund(self, payload: Mapping[str, Any]) -> Any:
        return self.run(REFUND, payload)

    def initiate_capture(self, payload: Mapping[str, Any]) -> Any:
        return self.run(CAPTURE, payload)

    def initiate_auth_reversal(self, payload: Mapping[str, Any]) -> Any:
        return self.run(AUTH_REVERSAL, payload)

    def initiate_check_status(self, payload: Mapping[str, Any]) -> Any:
        """Fetch the status of the transaction identified by ``payload["gid"]``."""
        return self.run(STATUS, payload)

    def initiate_pause_si(self, payload: Mapping[str, Any]) -> Any:
        return self.run(PAUSE_SI, payload)

    def initiate_activate_si(self, payload: Mapping[str, Any]) -> Any:
        return self.run(ACTIVATE_SI, payload)

    def initiate_si_status(self, payload: Mapping[str, Any]) -> Any:
        return self.run(SI_STATUS, payload)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "PayGlocalClient":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()
