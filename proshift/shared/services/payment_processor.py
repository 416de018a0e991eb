# proshift/shared/services/payment_processor.py
import httpx
import logging
from typing import Any, Dict, Optional
from fastapi import HTTPException
from proshift.config.settings import Settings, settings

logger = logging.getLogger(__name__)

class PaymentProcessorClient:
    """Client for the payment processor's payment-intent API"""

    def __init__(self, config: Settings = settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = config.payment_api_url.rstrip("/")
        self.secret_key = config.payment_secret_key
        self.timeout = config.payment_timeout
        self.transport = transport

    def _get_headers(self) -> Dict[str, str]:
        """Secret key as bearer credential"""
        return {"Authorization": f"Bearer {self.secret_key}"}

    @staticmethod
    def to_minor_units(amount: float) -> int:
        """Major currency units to the smallest unit (cents)"""
        return int(round(amount * 100))

    async def create_payment_intent(
        self,
        amount: float,
        currency: str,
        metadata: Dict[str, str]
    ) -> Dict[str, Any]:
        """
        Create a payment intent for `amount` (major units).

        Returns the processor's JSON untouched; callers read `client_secret`.
        """
        if not self.secret_key:
            raise HTTPException(status_code=500, detail="Payment processor is not configured")

        data = {
            "amount": self.to_minor_units(amount),
            "currency": currency,
            "payment_method_types[]": "card",
        }
        for key, value in metadata.items():
            data[f"metadata[{key}]"] = value

        try:
            logger.info(f"💳 Creating payment intent - {data['amount']} {currency} {metadata}")

            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/v1/payment_intents",
                    data=data,
                    headers=self._get_headers()
                )

        except httpx.TimeoutException:
            logger.error(f"Timeout creating payment intent {metadata}")
            raise HTTPException(status_code=504, detail="Payment processor timeout")
        except httpx.HTTPError as e:
            error_msg = f"Error communicating with payment processor: {str(e)}"
            logger.error(error_msg)
            raise HTTPException(status_code=502, detail=error_msg)

        if response.status_code != 200:
            error_msg = f"Payment processor error: {response.status_code} - {response.text}"
            logger.error(error_msg)
            raise HTTPException(status_code=502, detail=error_msg)

        result = response.json()
        logger.info(f"✅ Payment intent created: {result.get('id')}")
        return result

def get_payment_processor() -> PaymentProcessorClient:
    return PaymentProcessorClient()
