import logging
from dataclasses import dataclass
import requests
from app.core.config import Settings
from app.core.errors import CheckoutError

logger = logging.getLogger("checkout")


@dataclass(frozen=True)
class Checkout:
    id: str
    redirect_url: str


class YocoCheckoutClient:
    """Creates hosted checkout sessions with Yoco."""

    def __init__(self, settings: Settings):
        self.api_url = settings.YOCO_API_URL
        self.secret_key = settings.YOCO_SECRET_KEY
        self.timeout = settings.HTTP_TIMEOUT

    def create_checkout(
        self,
        amount_cents: int,
        currency: str,
        description: str,
        code: str,
        success_url: str,
        cancel_url: str
    ) -> Checkout:
        """
        Create a checkout session and return its id and redirect URL.

        Raises:
            CheckoutError: If Yoco rejects the request or the response is incomplete
        """
        headers = {
            "Authorization": f"Bearer {self.secret_key}",
            "Content-Type": "application/json"
        }

        payload = {
            "amount": amount_cents,
            "currency": currency,
            "successUrl": success_url,
            "cancelUrl": cancel_url,
            "failureUrl": cancel_url,
            "metadata": {
                "code": code,
                "description": description
            }
        }

        try:
            response = requests.post(
                f"{self.api_url}/checkouts",
                headers=headers,
                json=payload,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Checkout request failed for order {code}: {str(e)}")
            raise CheckoutError(str(e))

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.status_code not in (200, 201):
            message = data.get("message") if isinstance(data, dict) else None
            message = message or f"Checkout creation failed with status {response.status_code}"
            logger.error(f"Yoco rejected checkout for order {code}: {response.status_code} - {message}")
            raise CheckoutError(message, status_code=response.status_code)

        checkout_id = data.get("id") if isinstance(data, dict) else None
        redirect_url = data.get("redirectUrl") if isinstance(data, dict) else None
        if not checkout_id or not redirect_url:
            logger.error(f"Yoco checkout response for order {code} is missing id or redirectUrl")
            raise CheckoutError("Checkout response missing id or redirectUrl", status_code=response.status_code)

        logger.info(f"Created checkout {checkout_id} for order {code} ({amount_cents} {currency})")
        return Checkout(id=checkout_id, redirect_url=redirect_url)
