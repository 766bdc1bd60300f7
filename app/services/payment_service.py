from __future__ import annotations

import hashlib
import hmac
import logging
import uuid

import httpx
from fastapi import status

from app.core.config import settings
from app.schemas.payment import VerifyPaymentRequest, VerifyPaymentResponse

logger = logging.getLogger(__name__)


class PaymentError(RuntimeError):
    def __init__(self, message: str, *, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(message)
        self.status_code = status_code


def razorpay_configured() -> bool:
    return bool(settings.razorpay_key_id and settings.razorpay_key_secret)


def expected_signature(order_id: str, payment_id: str, secret: str) -> str:
    message = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def download_token_for(payment_id: str) -> str:
    # Deterministic so repeated verification of one payment yields one token.
    digest = hmac.new(
        settings.download_token_secret.encode("utf-8"),
        payment_id.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return digest[:32]


def _fetch_payment(payment_id: str) -> dict:
    url = f"{settings.razorpay_api_base.rstrip('/')}/payments/{payment_id}"
    try:
        with httpx.Client(timeout=settings.razorpay_timeout_s) as client:
            response = client.get(url, auth=(settings.razorpay_key_id or "", settings.razorpay_key_secret or ""))
    except httpx.HTTPError as exc:
        logger.warning("razorpay_fetch_failed payment_id=%s: %s", payment_id, exc)
        raise PaymentError("Failed to verify payment with Razorpay", status_code=status.HTTP_502_BAD_GATEWAY) from exc

    if response.status_code != 200:
        logger.warning("razorpay_fetch_status payment_id=%s status=%s", payment_id, response.status_code)
        raise PaymentError("Failed to verify payment with Razorpay", status_code=status.HTTP_502_BAD_GATEWAY)
    return response.json()


def _verify_mock() -> VerifyPaymentResponse:
    payment_id = f"mock_{uuid.uuid4().hex}"
    logger.info("payment_mock_verified payment_id=%s", payment_id)
    return VerifyPaymentResponse(
        download_token=download_token_for(payment_id),
        payment_id=payment_id,
        amount=settings.payment_amount,
        currency=settings.payment_currency,
        mock=True,
    )


def verify_payment(payload: VerifyPaymentRequest) -> VerifyPaymentResponse:
    configured = razorpay_configured()
    if payload.mock and not configured:
        return _verify_mock()

    if not configured:
        raise PaymentError("Razorpay is not configured", status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    payment_id = (payload.razorpay_payment_id or "").strip()
    order_id = (payload.razorpay_order_id or "").strip()
    signature = (payload.razorpay_signature or "").strip()
    if not payment_id or not order_id or not signature:
        raise PaymentError("Missing payment details")

    expected = expected_signature(order_id, payment_id, settings.razorpay_key_secret or "")
    if not hmac.compare_digest(expected, signature):
        logger.info("payment_signature_mismatch payment_id=%s", payment_id)
        raise PaymentError("Invalid payment signature")

    details = _fetch_payment(payment_id)
    if details.get("status") != "captured":
        raise PaymentError("Payment not captured")

    logger.info("payment_verified payment_id=%s", payment_id)
    return VerifyPaymentResponse(
        download_token=download_token_for(payment_id),
        payment_id=payment_id,
        amount=int(details.get("amount") or 0),
        currency=str(details.get("currency") or settings.payment_currency),
    )
