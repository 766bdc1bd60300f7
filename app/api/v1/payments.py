from fastapi import APIRouter, HTTPException, Request

from app.core.rate_limit import rate_limit
from app.schemas.payment import VerifyPaymentRequest, VerifyPaymentResponse
from app.services.payment_service import PaymentError, verify_payment

router = APIRouter()


@router.post("/payments/verify", response_model=VerifyPaymentResponse)
@rate_limit("10/minute")
def payments_verify(request: Request, payload: VerifyPaymentRequest):
    _ = request
    try:
        return verify_payment(payload)
    except PaymentError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
