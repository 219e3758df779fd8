from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv(".env.local"); load_dotenv()  # also loads .env if present


@dataclass
class CheckoutConfig:
    """Product and endpoint settings for the $19.99 pre-filled W-4."""

    plan_id: str = "plan_oShbDxIPnAiym"
    price: float = 19.99
    currency: str = "USD"
    product_name: str = "TaxFlow 2026 - Pre-Filled W-4"
    api_endpoint: str = "http://127.0.0.1:8000/generate-w4"
    checkout_base_url: str = "https://whop.com/checkout"
    return_url: str = "http://localhost:8501/"
    download_filename: str = "W4-2026-TaxFlow.pdf"
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "CheckoutConfig":
        defaults = cls()
        timeout = os.getenv("TAXFLOW_HTTP_TIMEOUT")
        return cls(
            plan_id=os.getenv("WHOP_PLAN_ID", defaults.plan_id),
            api_endpoint=os.getenv("TAXFLOW_API_ENDPOINT", defaults.api_endpoint),
            return_url=os.getenv("TAXFLOW_RETURN_URL", defaults.return_url),
            timeout=float(timeout) if timeout else None,
        )
