import logging

import httpx

from config import settings

logger = logging.getLogger(__name__)


class PaymentClient:
    """Reads checkout sessions back from the payment provider."""

    def __init__(self, client: httpx.AsyncClient | None = None):
        self.base_url = settings.PAYMENT_API_URL.rstrip("/")
        self.client = client or httpx.AsyncClient(
            timeout=10.0,
            headers={"Authorization": f"Bearer {settings.PAYMENT_API_KEY}"},
        )

    async def get_checkout_session(self, session_id: str) -> dict | None:
        response = await self.client.get(f"{self.base_url}/checkout/sessions/{session_id}")
        if response.status_code == 404:
            return None
        response.raise_for_status()
        session = response.json()
        return {
            "session_id": session["id"],
            "payment_status": session.get("payment_status"),
            "user_id": (session.get("metadata") or {}).get("user_id"),
        }

    async def aclose(self) -> None:
        await self.client.aclose()
