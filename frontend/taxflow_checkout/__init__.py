"""
Client-side checkout for the TaxFlow pre-filled W-4.

Drives the Whop payment step (in-page modal, or hosted checkout redirect as a
fallback), keeps the pending form data in page-scoped storage across the
redirect, and retrieves the filled PDF from the backend.
"""

from .config import CheckoutConfig
from .errors import CheckoutError, GenerationFailed, MissingProof, SessionExpired
from .page import PageLocation
from .provider import (
    CheckoutPayment,
    MembershipPayment,
    PaymentModal,
    UnidentifiedPayment,
    resolve_payment_result,
)
from .session import CheckoutSession
from .storage import JsonFileStorage, MemoryStorage, session_storage

__all__ = [
    "CheckoutConfig",
    "CheckoutSession",
    "CheckoutError",
    "MissingProof",
    "SessionExpired",
    "GenerationFailed",
    "PageLocation",
    "PaymentModal",
    "MembershipPayment",
    "CheckoutPayment",
    "UnidentifiedPayment",
    "resolve_payment_result",
    "MemoryStorage",
    "JsonFileStorage",
    "session_storage",
]
