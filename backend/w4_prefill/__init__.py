"""
W-4 pre-fill package for the TaxFlow backend.

This module bundles reusable utilities for:
  - the logical-to-physical field map of the IRS Form W-4
  - loading, filling and flattening AcroForm PDFs with pypdf
  - gating generation on a (optionally verified) payment proof
"""

from .errors import FieldNotFound, PaymentRequired, SourceFetchFailed, W4PrefillError
from .models import CalcResults, UserData, W4Request
from .service import W4_FILENAME, W4FormFiller

__all__ = [
    "W4FormFiller",
    "W4PrefillError",
    "PaymentRequired",
    "SourceFetchFailed",
    "FieldNotFound",
    "UserData",
    "CalcResults",
    "W4Request",
    "W4_FILENAME",
]
