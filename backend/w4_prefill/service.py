"""
High-level service that exposes W-4 pre-fill capabilities to the FastAPI layer.

Responsibilities
----------------
* gate requests on a payment proof (optionally verified with Whop)
* download a fresh copy of the blank IRS W-4 for every request
* write user data and calculation results onto the form fields
* flatten the form so the filled values are locked in
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import requests

from .errors import FieldNotFound, PaymentRequired, SourceFetchFailed
from .fields import (
    AMOUNT_FIELDS,
    FILING_STATUS_CHECKBOX,
    SSN_FIELD_CANDIDATES,
    W4_CHECKBOX_FIELDS,
    W4_TEXT_FIELDS,
)
from .models import CalcResults, UserData
from .payment import MembershipVerifier
from .pdf_utils import FormDocument, format_amount, format_ssn, upper

logger = logging.getLogger(__name__)

W4_SOURCE_URL = os.getenv("W4_SOURCE_URL", "https://www.irs.gov/pub/irs-pdf/fw4.pdf")
W4_SOURCE_TIMEOUT = float(os.getenv("W4_SOURCE_TIMEOUT")) if os.getenv("W4_SOURCE_TIMEOUT") else None
W4_FILENAME = "W4-2026-TaxFlow.pdf"


class W4FormFiller:
    def __init__(
        self,
        source_url: str = W4_SOURCE_URL,
        verifier: Optional[MembershipVerifier] = None,
        timeout: Optional[float] = W4_SOURCE_TIMEOUT,
    ):
        self.source_url = source_url
        self.verifier = verifier or MembershipVerifier(os.getenv("WHOP_API_KEY"))
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Payment gate
    # ------------------------------------------------------------------
    def check_proof(self, proof: Optional[str]) -> None:
        if not proof:
            logger.warning("PDF generation attempted without a payment proof")
            raise PaymentRequired("Payment required")

        logger.info("Generating W-4 for token: %s...", proof[:10])

        if self.verifier.enabled and not self.verifier.verify(proof):
            raise PaymentRequired("Invalid payment token")

    # ------------------------------------------------------------------
    # PDF generation
    # ------------------------------------------------------------------
    def fetch_source(self) -> bytes:
        try:
            response = requests.get(self.source_url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise SourceFetchFailed("Failed to fetch W-4 PDF from IRS") from exc
        if not response.ok:
            logger.error("W-4 source returned HTTP %s", response.status_code)
            raise SourceFetchFailed("Failed to fetch W-4 PDF from IRS")
        return response.content

    def generate(self, user_data: UserData, calc_results: CalcResults) -> bytes:
        document = FormDocument.load(self.fetch_source())
        self.fill(document, user_data, calc_results)
        document.flatten()
        return document.to_bytes()

    def fill(self, document: FormDocument, user_data: UserData, calc_results: CalcResults) -> None:
        # Step 1a
        self._set_text(document, W4_TEXT_FIELDS["firstName"], upper(user_data.first_name))
        self._set_text(document, W4_TEXT_FIELDS["lastName"], upper(user_data.last_name))
        self._set_text(document, W4_TEXT_FIELDS["address"], upper(user_data.address))
        city_state_zip = f"{user_data.city or ''}, {user_data.state or ''} {user_data.zip or ''}".strip()
        self._set_text(document, W4_TEXT_FIELDS["cityStateZip"], upper(city_state_zip))

        # Step 1b
        ssn_field = document.find_first_text_field(SSN_FIELD_CANDIDATES)
        if ssn_field:
            self._set_text(document, ssn_field, format_ssn(user_data.ssn))
        else:
            logger.warning("SSN field not found in PDF")

        # Step 1c
        filing_box = FILING_STATUS_CHECKBOX.get(user_data.filing or "")
        if filing_box:
            self._check(document, W4_CHECKBOX_FIELDS[filing_box])

        # Step 2c
        if calc_results.multiple_jobs:
            self._check(document, W4_CHECKBOX_FIELDS["multipleJobs"])

        # Steps 3 and 4
        for attribute, field_key in AMOUNT_FIELDS:
            amount = getattr(calc_results, attribute)
            if amount is not None and amount > 0:
                self._set_text(document, W4_TEXT_FIELDS[field_key], format_amount(amount))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _set_text(self, document: FormDocument, field_name: str, value: str) -> None:
        try:
            document.set_text(field_name, value or "")
        except FieldNotFound:
            logger.warning("Field not found: %s", field_name)

    def _check(self, document: FormDocument, field_name: str) -> None:
        try:
            document.check(field_name)
        except FieldNotFound:
            logger.warning("Checkbox not found: %s", field_name)
