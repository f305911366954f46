"""
Print order workflow: creating an order and confirming its payment.

Creating an order is a best-effort saga over three external systems. Each step
runs once, in order, with no compensation:

    upload_file -> insert_order -> create_checkout -> save_payment_ref

A failure after upload_file leaves the stored file behind, and a failure after
insert_order leaves the row in pending_payment.
"""
import time
import logging
from dataclasses import dataclass
from typing import Optional
from app.core.config import Settings
from app.core.errors import OrderValidationError, OrderWorkflowError, OrderStoreError
from app.models.order import ColorMode, OrderStatus, MAX_INTEGER_VALUE
from app.services.checkout import YocoCheckoutClient
from app.services.document_processing import (
    count_pdf_pages,
    generate_code,
    is_pdf_filename,
    parse_copies,
    sanitize_filename,
)
from app.services.order_store import OrderStore
from app.services.pricing import calculate_amount_cents
from app.services.storage import StorageService

logger = logging.getLogger("orders")

SUCCEEDED_STATUS = "succeeded"


@dataclass(frozen=True)
class WebhookResult:
    status_code: int
    message: str


class OrderWorkflow:
    def __init__(
        self,
        settings: Settings,
        order_store: OrderStore,
        storage: StorageService,
        checkout_client: YocoCheckoutClient
    ):
        self.settings = settings
        self.order_store = order_store
        self.storage = storage
        self.checkout_client = checkout_client

    @staticmethod
    def validate_request(
        file_content: Optional[bytes],
        file_name: Optional[str],
        color_mode: Optional[str],
        copies: Optional[str]
    ):
        """
        Check the upload form in order and normalise it.

        Returns:
            tuple: (color_mode, copies)

        Raises:
            OrderValidationError: On the first failing check
        """
        if file_content is None or not file_name:
            raise OrderValidationError("No file uploaded")

        if not is_pdf_filename(file_name):
            raise OrderValidationError("Only PDF files allowed")

        normalised_mode = (color_mode or ColorMode.BW.value).lower()
        if normalised_mode not in (ColorMode.BW.value, ColorMode.COLOR.value):
            raise OrderValidationError("Invalid color_mode")

        return normalised_mode, parse_copies(copies)

    def generate_unique_code(self) -> str:
        """
        Draw pickup codes until one is not in the order store.

        After CODE_MAX_ATTEMPTS draws the last candidate is used even if it
        collides. Concurrent requests can still race to the same code.
        """
        attempts = self.settings.CODE_MAX_ATTEMPTS
        code = generate_code()
        for attempt in range(1, attempts + 1):
            if not self.order_store.code_exists(code):
                return code
            logger.info(f"Pickup code collision on attempt {attempt}/{attempts}: {code}")
            if attempt < attempts:
                code = generate_code()

        logger.warning(f"Pickup code {code} still collides after {attempts} attempts, using it anyway")
        return code

    def callback_urls(self, code: str):
        base = self.settings.PUBLIC_BASE_URL
        return f"{base}/success?code={code}", f"{base}/cancel?code={code}"

    def create_order(
        self,
        file_content: Optional[bytes],
        file_name: Optional[str],
        color_mode: Optional[str] = None,
        copies: Optional[str] = None
    ) -> dict:
        """
        Validate, price, store and start payment for a print job.

        Returns:
            dict: code, pages, copies, amount_cents and the checkout payUrl

        Raises:
            OrderValidationError: Bad input, nothing was written
            OrderWorkflowError: A dependent service failed, err.step names the step
        """
        start_time = time.time()
        color_mode, copies = self.validate_request(file_content, file_name, color_mode, copies)

        if len(file_content) > self.settings.MAX_FILE_SIZE:
            raise OrderValidationError(
                f"File too large. Maximum size is {self.settings.MAX_FILE_SIZE / (1024 * 1024):.1f}MB.",
                status_code=413
            )

        pages = count_pdf_pages(file_content)
        amount_cents = calculate_amount_cents(pages, copies, color_mode, self.settings)
        if amount_cents > MAX_INTEGER_VALUE:
            raise OrderValidationError(f"Too many copies: {copies} copies of {pages} pages cannot be priced")

        code = self._run_step("generate_code", self.generate_unique_code)

        safe_name = sanitize_filename(file_name)
        storage_path = f"{code}/{int(time.time() * 1000)}_{safe_name}"
        logger.info(f"[CREATE ORDER] {code}: {pages} pages x {copies} ({color_mode}) = {amount_cents} cents")

        self._run_step("upload_file", self.storage.upload_file, storage_path, file_content, "application/pdf")

        order = self._run_step("insert_order", self.order_store.create, {
            "code": code,
            "bucket": self.settings.STORAGE_BUCKET,
            "file_path": storage_path,
            "file_name": safe_name,
            "color_mode": color_mode,
            "copies": copies,
            "pages": pages,
            "amount_cents": amount_cents,
            "status": OrderStatus.PENDING_PAYMENT.value
        })

        success_url, cancel_url = self.callback_urls(code)
        checkout = self._run_step(
            "create_checkout",
            self.checkout_client.create_checkout,
            amount_cents=amount_cents,
            currency=self.settings.CURRENCY,
            description=f"BiTS print job {code} ({color_mode.upper()}, {pages} pages x {copies})",
            code=code,
            success_url=success_url,
            cancel_url=cancel_url
        )

        self._run_step("save_payment_ref", self.order_store.set_payment_ref, order, checkout.id)

        duration = round((time.time() - start_time) * 1000)
        logger.info(f"[CREATE ORDER] {code} ready for payment ({checkout.id}) in {duration}ms")

        return {
            "success": True,
            "code": code,
            "pages": pages,
            "copies": copies,
            "amount_cents": amount_cents,
            "payUrl": checkout.redirect_url
        }

    def confirm_payment(self, event: dict) -> WebhookResult:
        """
        Apply a payment provider event of the shape {payload: {id, status}}.

        The event is trusted as received; nothing verifies that it came from
        the provider.
        """
        payload = event.get("payload") if isinstance(event, dict) else None
        if not isinstance(payload, dict):
            payload = {}
        checkout_id = payload.get("id")
        payment_status = payload.get("status")

        if not checkout_id:
            logger.warning("Webhook without checkout id")
            return WebhookResult(400, "Missing checkout id")

        if payment_status != SUCCEEDED_STATUS:
            logger.info(f"Ignoring webhook for {checkout_id} with status {payment_status}")
            return WebhookResult(200, "Ignored")

        try:
            order = self.order_store.get_by_payment_ref(checkout_id)
            if not order:
                logger.warning(f"Webhook for unknown checkout {checkout_id}")
                return WebhookResult(404, "Order not found")

            self.order_store.mark_paid(order)
        except OrderStoreError as e:
            logger.error(f"Failed to confirm payment for checkout {checkout_id}: {e.message}")
            return WebhookResult(500, e.message)

        logger.info(f"Payment confirmed for order {order.code} (checkout {checkout_id})")
        return WebhookResult(200, "OK")

    def get_order_status(self, code: str) -> Optional[dict]:
        order = self.order_store.get_by_code(code.upper())
        if not order:
            return None
        return {
            "success": True,
            "code": order.code,
            "status": order.status,
            "pages": order.pages,
            "copies": order.copies,
            "color_mode": order.color_mode,
            "amount_cents": order.amount_cents,
            "paid_at": order.paid_at.isoformat() if order.paid_at else None
        }

    @staticmethod
    def _run_step(step: str, func, *args, **kwargs):
        try:
            return func(*args, **kwargs)
        except OrderWorkflowError as e:
            e.step = step
            logger.error(f"[CREATE ORDER] step {step} failed: {e.message}")
            raise
        except Exception as e:
            logger.exception(f"[CREATE ORDER] step {step} failed: {str(e)}")
            raise OrderWorkflowError(str(e), step=step) from e
