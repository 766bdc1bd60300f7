from __future__ import annotations

from pydantic import BaseModel, Field


class VerifyPaymentRequest(BaseModel):
    razorpay_payment_id: str | None = Field(default=None, max_length=200)
    razorpay_order_id: str | None = Field(default=None, max_length=200)
    razorpay_signature: str | None = Field(default=None, max_length=200)
    mock: bool = False


class VerifyPaymentResponse(BaseModel):
    download_token: str
    payment_id: str
    amount: int = Field(ge=0)
    currency: str
    mock: bool = False
