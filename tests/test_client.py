from __future__ import annotations

import json
import logging
from decimal import Decimal

import jwt
import pytest

from conftest import RecordingSession
from payglocal import create_client
from payglocal.core import endpoints
from payglocal.core.client import OPERATIONS, PayGlocalClient
from payglocal.core.config import PayGlocalConfig
from payglocal.core.errors import ConfigError, MissingFieldError, TransportError, ValidationError
from payglocal.core.orchestrator import Operation, RequestKind, build_request
from payglocal.core.tokens import digest_b64
from payglocal.core.validation import ValidationRuleSet

PAYMENT = {
    "merchantTxnId": "T1",
    "merchantCallbackURL": "https://cb",
    "paymentData": {"totalAmount": "10.00", "txnCurrency": "INR"},
}
UAT = "https://api.uat.payglocal.in"


def _jws_claims(headers, merchant_key):
    token = headers["x-gl-token-external"]
    return json.loads(jwt.PyJWS().decode(token, merchant_key.public_key(), algorithms=["RS256"]))


def test_api_key_payment_end_to_end(api_key_config, session):
    client = PayGlocalClient(api_key_config, session=session)

    response = client.initiate_api_key_payment(PAYMENT)

    assert response == {"status": "SENT", "gid": "gl_o-123"}
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == f"{UAT}/gl/v1/payments/initiate/paycollect"
    assert call["headers"]["x-gl-auth"] == "K1"
    assert call["headers"]["Content-Type"] == "application/json"
    assert json.loads(call["data"]) == PAYMENT


def test_api_key_payment_skips_schema_check(api_key_config, session):
    client = PayGlocalClient(api_key_config, session=session)

    client.initiate_api_key_payment(dict(PAYMENT, somethingNew="x"))

    assert len(session.calls) == 1


def test_api_key_payment_requires_api_key(token_config, session):
    client = PayGlocalClient(token_config, session=session)

    with pytest.raises(ConfigError):
        client.initiate_api_key_payment(PAYMENT)
    assert session.calls == []


def test_jwt_payment_sends_encrypted_body(
    token_config, session, decrypt_jwe, merchant_key
):
    client = PayGlocalClient(token_config, session=session)

    client.initiate_jwt_payment(PAYMENT, custom_headers={"x-request-id": "r1"})

    call = session.calls[0]
    assert call["url"] == f"{UAT}/gl/v1/payments/initiate/paycollect"
    assert call["headers"]["Content-Type"] == "text/plain"
    assert call["headers"]["x-request-id"] == "r1"
    jwe = call["data"].decode("utf-8")
    _, plaintext = decrypt_jwe(jwe)
    assert json.loads(plaintext) == PAYMENT
    assert _jws_claims(call["headers"], merchant_key)["digest"] == digest_b64(jwe)


def test_jwt_payment_requires_token_credentials(api_key_config, session):
    client = PayGlocalClient(api_key_config, session=session)

    with pytest.raises(ConfigError):
        client.initiate_jwt_payment(PAYMENT)
    assert session.calls == []


def test_jwt_payment_rejects_unknown_fields(token_config, session):
    client = PayGlocalClient(token_config, session=session)

    with pytest.raises(ValidationError):
        client.initiate_jwt_payment(dict(PAYMENT, somethingNew="x"))
    assert session.calls == []


def test_auth_payment_with_capture_makes_no_call(token_config, session):
    client = PayGlocalClient(token_config, session=session)

    with pytest.raises(ValidationError):
        client.initiate_auth_payment(dict(PAYMENT, captureTxn=True))
    assert session.calls == []


def test_si_payment(token_config, session, decrypt_jwe):
    payload = dict(
        PAYMENT,
        standingInstruction={
            "data": {
                "numberOfPayments": "12",
                "frequency": "MONTHLY",
                "type": "FIXED",
                "amount": "10.00",
                "startDate": "20250101",
            }
        },
    )
    client = PayGlocalClient(token_config, session=session)

    client.initiate_si_payment(payload)

    _, plaintext = decrypt_jwe(session.calls[0]["data"].decode("utf-8"))
    assert json.loads(plaintext) == payload


@pytest.mark.parametrize(
    ("method_name", "amount_field", "suffix"),
    [
        ("initiate_refund", "refundAmount", "refund"),
        ("initiate_capture", "captureAmount", "capture"),
        ("initiate_auth_reversal", "reversalAmount", "auth-reversal"),
    ],
)
def test_transaction_operations_use_gid_in_path(
    token_config, session, decrypt_jwe, method_name, amount_field, suffix
):
    payload = {"gid": "gl_o-9", amount_field: "5.00"}
    client = PayGlocalClient(token_config, session=session)

    getattr(client, method_name)(payload)

    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == f"{UAT}/gl/v1/payments/gl_o-9/{suffix}"
    _, plaintext = decrypt_jwe(call["data"].decode("utf-8"))
    assert json.loads(plaintext) == payload


def test_refund_requires_amount(token_config, session):
    client = PayGlocalClient(token_config, session=session)

    with pytest.raises(MissingFieldError) as excinfo:
        client.initiate_refund({"gid": "gl_o-9"})

    assert excinfo.value.field == "refundAmount"


def test_status_check_signs_the_path(token_config, session, merchant_key):
    client = PayGlocalClient(token_config, session=session)

    client.initiate_check_status({"gid": "gl_o-9"})

    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == f"{UAT}/gl/v1/payments/gl_o-9/status"
    assert call["data"] is None
    claims = _jws_claims(call["headers"], merchant_key)
    assert claims["digest"] == digest_b64("/gl/v1/payments/gl_o-9/status")


@pytest.mark.parametrize(
    ("method_name", "action"),
    [("initiate_pause_si", "pause"), ("initiate_activate_si", "activate")],
)
def test_si_updates_post_to_modify(token_config, session, decrypt_jwe, method_name, action):
    client = PayGlocalClient(token_config, session=session)

    getattr(client, method_name)({"siId": "S1", "action": action})

    call = session.calls[0]
    assert call["url"] == f"{UAT}/gl/v1/payments/si/modify"
    _, plaintext = decrypt_jwe(call["data"].decode("utf-8"))
    assert json.loads(plaintext) == {"siId": "S1", "action": action}


def test_pause_rejects_activate_action(token_config, session):
    client = PayGlocalClient(token_config, session=session)

    with pytest.raises(ValidationError):
        client.initiate_pause_si({"siId": "S1", "action": "activate"})
    assert session.calls == []


def test_si_status(token_config, session):
    client = PayGlocalClient(token_config, session=session)

    client.initiate_si_status({"siId": "S1"})

    assert session.calls[0]["url"] == f"{UAT}/gl/v1/payments/si/status"


def test_missing_gid_is_left_in_path(token_config):
    operation = Operation(
        name="lookup",
        kind=RequestKind.TRANSACTION,
        endpoint=endpoints.REFUND,
        rules=ValidationRuleSet(),
    )

    request = build_request(operation, {}, token_config)

    assert request.url == f"{UAT}/gl/v1/payments/{{gid}}/refund"


def test_status_without_gid_is_rejected(token_config):
    with pytest.raises(MissingFieldError):
        build_request(OPERATIONS["status"], {}, token_config)


def test_gateway_errors_propagate_and_are_logged(api_key_config, caplog):
    session = RecordingSession(status_code=500, body="boom")
    client = PayGlocalClient(api_key_config, session=session)

    with caplog.at_level(logging.ERROR, logger="payglocal"):
        with pytest.raises(TransportError) as excinfo:
            client.initiate_api_key_payment(PAYMENT)

    assert excinfo.value.status_code == 500
    assert "API key payment failed" in caplog.text


def test_validation_errors_log_the_field(api_key_config, session, caplog):
    client = PayGlocalClient(api_key_config, session=session)

    with caplog.at_level(logging.ERROR, logger="payglocal"):
        with pytest.raises(MissingFieldError):
            client.initiate_api_key_payment({"merchantTxnId": "T1"})

    assert "paymentData" in caplog.text


def test_client_closes_session(api_key_config, session):
    with PayGlocalClient(api_key_config, session=session) as client:
        client.initiate_api_key_payment(PAYMENT)

    assert session.closed


def test_client_logger_follows_config_level(session):
    config = PayGlocalConfig("M1", "UAT", api_key="K1", log_level="error")

    client = PayGlocalClient(config, session=session)

    assert client.logger.level == logging.ERROR


def test_create_client_from_parameters(session):
    client = create_client(
        env_file=None,
        base={},
        session=session,
        merchant_id="M1",
        environment="UAT",
        api_key="K1",
    )

    assert client.config.base_url == UAT
    assert client.session is session


def test_create_client_rejects_config_and_parameters(api_key_config):
    with pytest.raises(ValueError):
        create_client(config=api_key_config, merchant_id="M2")


def test_operations_registry_covers_client_methods():
    assert set(OPERATIONS) == {
        "api-key-payment",
        "jwt-payment",
        "si-payment",
        "auth-payment",
        "refund",
        "capture",
        "auth-reversal",
        "status",
        "pause-si",
        "activate-si",
        "si-status",
    }


def test_clients_keep_independent_log_levels(session):
    verbose = PayGlocalClient(
        PayGlocalConfig("M1", "UAT", api_key="K1", log_level="debug"), session=session
    )
    quiet = PayGlocalClient(
        PayGlocalConfig("M2", "UAT", api_key="K2", log_level="error"), session=session
    )

    assert verbose.logger is not quiet.logger
    assert verbose.logger.isEnabledFor(logging.DEBUG)
    assert not quiet.logger.isEnabledFor(logging.INFO)
    assert logging.getLogger("payglocal").level == logging.NOTSET


def test_client_logs_reach_the_package_logger(api_key_config, session, caplog):
    client = PayGlocalClient(api_key_config, session=session)

    with caplog.at_level(logging.INFO, logger="payglocal"):
        client.initiate_api_key_payment(PAYMENT)

    assert "API key payment completed successfully" in caplog.text


def test_unserializable_api_key_payload_is_a_validation_error(api_key_config, session, caplog):
    payload = {**PAYMENT, "paymentData": {"totalAmount": Decimal("10.00"), "txnCurrency": "INR"}}
    client = PayGlocalClient(api_key_config, session=session)

    with caplog.at_level(logging.ERROR, logger="payglocal"):
        with pytest.raises(ValidationError) as excinfo:
            client.initiate_api_key_payment(payload)

    assert isinstance(excinfo.value.__cause__, TypeError)
    assert "API key payment validation failed" in caplog.text
    assert session.calls == []


def test_jwt_payment_interoperates_with_reference_jose(token_config, session, verify_jws):
    client = PayGlocalClient(token_config, session=session)

    client.initiate_jwt_payment(PAYMENT)

    call = session.calls[0]
    claims = verify_jws(call["headers"]["x-gl-token-external"])
    assert claims["digest"] == digest_b64(call["data"].decode("utf-8"))
