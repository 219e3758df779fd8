"""
Checkout session: pay for the W-4, then fetch and download the filled PDF.

The pending user data is mirrored into page-scoped storage so the flow
survives the hosted-checkout redirect, which reloads the page and resets
everything held in memory.

States::

    Idle -> Initialized (pending) -> CheckoutOpen -> Completed | Closed
                                  -> RedirectedAway -> Returned -> Completed | Failed

Closing the modal keeps the pending session so checkout can be reopened.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlencode

import requests

from .config import CheckoutConfig
from .errors import CheckoutError, GenerationFailed, MissingProof, SessionExpired
from .page import PageLocation, with_query_param, without_query_param
from .provider import PaymentModal, PaymentResult, proof_from_result, resolve_payment_result

logger = logging.getLogger(__name__)

USER_DATA_KEY = "taxflow_userData"
CALC_RESULTS_KEY = "taxflow_calcResults"
PENDING_KEY = "taxflow_pending"

SUCCESS_PARAM = "payment"
SUCCESS_VALUE = "success"

Downloader = Callable[[bytes, str], None]


class CheckoutSession:
    def __init__(
        self,
        storage,
        page: PageLocation,
        config: Optional[CheckoutConfig] = None,
        provider: Optional[PaymentModal] = None,
        http: Optional[requests.Session] = None,
        downloader: Optional[Downloader] = None,
    ):
        self.storage = storage
        self.page = page
        self.config = config or CheckoutConfig()
        self.provider = provider
        self.http = http or requests.Session()
        self.downloader = downloader

        self.user_data: Optional[Dict[str, Any]] = None
        self.calc_results: Optional[Dict[str, Any]] = None

    def init(self, user_data: Dict[str, Any], calc_results: Dict[str, Any]) -> None:
        """Hold the data for after payment. Validation happens server-side."""
        self.user_data = user_data
        self.calc_results = calc_results

        self.storage.set(USER_DATA_KEY, json.dumps(user_data))
        self.storage.set(CALC_RESULTS_KEY, json.dumps(calc_results))
        self.storage.set(PENDING_KEY, "true")

    # ------------------------------------------------------------------
    # Payment
    # ------------------------------------------------------------------
    def open_checkout(
        self,
        on_success: Optional[Callable[[bytes, PaymentResult], None]] = None,
        on_error: Optional[Callable[[CheckoutError], None]] = None,
        on_close: Optional[Callable[[], None]] = None,
    ) -> None:
        if self.provider is None or not self.provider.available:
            logger.warning("Whop SDK not loaded, using redirect fallback")
            self.redirect_to_checkout()
            return

        def handle_success(raw_result) -> None:
            result = resolve_payment_result(raw_result)
            try:
                pdf_bytes = self.generate_pdf(proof_from_result(result))
            except CheckoutError as exc:
                logger.error("PDF generation failed: %s", exc)
                if on_error:
                    on_error(exc)
                return
            if on_success:
                on_success(pdf_bytes, result)

        def handle_close() -> None:
            if on_close:
                on_close()

        self.provider.open_checkout(self.config.plan_id, handle_success, handle_close)

    def redirect_to_checkout(self) -> None:
        return_url = with_query_param(self.config.return_url, SUCCESS_PARAM, SUCCESS_VALUE)
        checkout_url = (
            f"{self.config.checkout_base_url.rstrip('/')}/{self.config.plan_id}"
            f"?{urlencode({'redirect_url': return_url})}"
        )
        self.page.navigate(checkout_url)

    def is_returning_from_checkout(self) -> bool:
        returned = self.page.query().get(SUCCESS_PARAM, [None])[0] == SUCCESS_VALUE
        return returned and self.storage.get(PENDING_KEY) == "true"

    def handle_checkout_return(
        self,
        on_success: Optional[Callable[[bytes], None]] = None,
        on_error: Optional[Callable[[CheckoutError], None]] = None,
    ) -> bool:
        if not self.is_returning_from_checkout():
            return False

        self.page.replace_url(without_query_param(self.page.current_url, SUCCESS_PARAM))

        # No SDK result survives the redirect.
        proof = f"redirect_payment_verified_{int(time.time() * 1000)}"
        try:
            pdf_bytes = self.generate_pdf(proof)
        except CheckoutError as exc:
            logger.error("Return checkout failed: %s", exc)
            if on_error:
                on_error(exc)
            return False

        self.download_pdf(pdf_bytes)
        if on_success:
            on_success(pdf_bytes)
        return True

    # ------------------------------------------------------------------
    # PDF
    # ------------------------------------------------------------------
    def generate_pdf(self, proof: str) -> bytes:
        if not proof:
            raise MissingProof()

        if self.user_data is None or self.calc_results is None:
            self.user_data = _load_json(self.storage.get(USER_DATA_KEY))
            self.calc_results = _load_json(self.storage.get(CALC_RESULTS_KEY))

        if self.user_data is None or self.calc_results is None:
            raise SessionExpired()

        try:
            response = self.http.post(
                self.config.api_endpoint,
                json={
                    "userData": self.user_data,
                    "calcResults": self.calc_results,
                    "proof": proof,
                },
                timeout=self.config.timeout,
            )
        except requests.RequestException as exc:
            raise GenerationFailed(f"PDF generation failed: {exc}") from exc

        if not response.ok:
            try:
                error = response.json()
            except ValueError:
                error = {"error": "Unknown error"}
            message = error.get("error") if isinstance(error, dict) else None
            raise GenerationFailed(message or "PDF generation failed")

        for key in (PENDING_KEY, USER_DATA_KEY, CALC_RESULTS_KEY):
            self.storage.remove(key)
        return response.content

    def download_pdf(self, pdf_bytes: bytes, filename: Optional[str] = None) -> None:
        if self.downloader is None:
            logger.warning("No downloader configured; dropping %d bytes", len(pdf_bytes))
            return
        self.downloader(pdf_bytes, filename or self.config.download_filename)

    def start_checkout_flow(
        self,
        user_data: Dict[str, Any],
        calc_results: Dict[str, Any],
        on_start: Optional[Callable[[], None]] = None,
        on_success: Optional[Callable[[bytes, PaymentResult], None]] = None,
        on_error: Optional[Callable[[CheckoutError], None]] = None,
        on_close: Optional[Callable[[], None]] = None,
    ) -> None:
        self.init(user_data, calc_results)
        if on_start:
            on_start()

        def deliver(pdf_bytes: bytes, result: PaymentResult) -> None:
            self.download_pdf(pdf_bytes)
            if on_success:
                on_success(pdf_bytes, result)

        self.open_checkout(on_success=deliver, on_error=on_error, on_close=on_close)


def _load_json(value: Optional[str]):
    if not value:
        return None
    try:
        return json.loads(value)
    except ValueError:
        logger.warning("Discarding unreadable checkout storage entry")
        return None
