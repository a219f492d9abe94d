from __future__ import annotations

from pydantic import BaseModel

SUCCEEDED = "succeeded"


class PaymentConfirmation(BaseModel):
    """Outcome reported by the payment provider for a deposit payment intent."""

    payment_intent_id: str
    status: str
    amount_cents: int | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCEEDED and bool(self.payment_intent_id)
