"""
Minimal script that uses the public API to initiate a PayGlocal payment.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time

from payglocal import ConfigError, PayGlocalError, create_client


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Initiate a payment using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PAYGLOCAL_* settings",
    )
    parser.add_argument(
        "--amount",
        default="100.00",
        help="Total amount to charge (default: 100.00)",
    )
    parser.add_argument(
        "--currency",
        default="INR",
        help="Transaction currency (default: INR)",
    )
    parser.add_argument(
        "--callback-url",
        default="https://your-callback-url.com/webhook",
        help="Merchant callback URL",
    )
    parser.add_argument(
        "--jwt",
        action="store_true",
        help="Send an encrypted JWT payment instead of an API key payment",
    )
    parser.add_argument(
        "--status-gid",
        help="Also check the status of this gid after initiating the payment",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        client = create_client(env_file=args.env_file)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    payload = {
        "merchantTxnId": f"TXN{time.time_ns()}",
        "merchantCallbackURL": args.callback_url,
        "paymentData": {
            "totalAmount": args.amount,
            "txnCurrency": args.currency,
            "billingData": {
                "firstName": "John",
                "lastName": "Doe",
                "emailId": "john.doe@example.com",
                "phoneNumber": "9876543210",
                "addressStreet1": "123 Main St",
                "addressCity": "Mumbai",
                "addressState": "Maharashtra",
                "addressPostalCode": "400001",
            },
        },
    }

    with client:
        try:
            if args.jwt:
                response = client.initiate_jwt_payment(payload)
            else:
                response = client.initiate_api_key_payment(payload)
            logging.info("Payment response: %s", json.dumps(response))

            if args.status_gid:
                status = client.initiate_check_status({"gid": args.status_gid})
                logging.info("Status response: %s", json.dumps(status))
        except PayGlocalError as exc:
            logging.error("Request failed: %s", exc)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
