"""
Field map for the IRS Form W-4 (2026 revision).

Logical names used by the fill service are mapped onto the fully qualified
AcroForm names found in the official PDF. Text fields and checkboxes are kept
apart because they are written differently.
"""

from __future__ import annotations

from typing import Dict, Tuple

W4_TEXT_FIELDS: Dict[str, str] = {
    # Step 1a: personal info
    "firstName": "topmostSubform[0].Page1[0].Step1a[0].f1_01[0]",
    "lastName": "topmostSubform[0].Page1[0].Step1a[0].f1_02[0]",
    "address": "topmostSubform[0].Page1[0].Step1a[0].f1_03[0]",
    "cityStateZip": "topmostSubform[0].Page1[0].Step1a[0].f1_04[0]",
    # Step 3: dependents
    "step3a": "topmostSubform[0].Page1[0].Step3_ReadOrder[0].f1_06[0]",
    "step3b": "topmostSubform[0].Page1[0].Step3_ReadOrder[0].f1_07[0]",
    "step3Total": "topmostSubform[0].Page1[0].f1_08[0]",
    # Step 4: other adjustments
    "step4a": "topmostSubform[0].Page1[0].f1_09[0]",
    "step4b": "topmostSubform[0].Page1[0].f1_10[0]",
    "step4c": "topmostSubform[0].Page1[0].f1_11[0]",
}

W4_CHECKBOX_FIELDS: Dict[str, str] = {
    # Step 1c: filing status
    "single": "topmostSubform[0].Page1[0].c1_1[0]",
    "married": "topmostSubform[0].Page1[0].c1_1[1]",
    "hoh": "topmostSubform[0].Page1[0].c1_1[2]",
    # Step 2c: multiple jobs
    "multipleJobs": "topmostSubform[0].Page1[0].c1_2[0]",
}

# The IRS renumbers the SSN box between revisions; first match wins.
SSN_FIELD_CANDIDATES: Tuple[str, ...] = (
    "topmostSubform[0].Page1[0].Step1b[0].f1_05[0]",
    "topmostSubform[0].Page1[0].Step1b[0].f1_04[0]",
    "topmostSubform[0].Page1[0].Step1a[0].f1_05[0]",
    "topmostSubform[0].Page1[0].Step1a[0].f1_04[1]",
    "topmostSubform[0].Page1[0].f1_05[0]",
    "topmostSubform[0].Page1[0].f1_04[0]",
)

# Filing status -> logical checkbox. MFS shares the single box, a qualifying
# surviving spouse shares the married box.
FILING_STATUS_CHECKBOX: Dict[str, str] = {
    "single": "single",
    "mfs": "single",
    "married": "married",
    "widow": "married",
    "head": "hoh",
}

# CalcResults attribute -> logical text field, written only when > 0.
AMOUNT_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("children_credit", "step3a"),
    ("other_credit", "step3b"),
    ("total_credits", "step3Total"),
    ("other_income", "step4a"),
    ("deductions", "step4b"),
    ("extra_withholding", "step4c"),
)
