"""
Low-level PDF utilities for filling AcroForm-based templates.

`FormDocument` wraps a pypdf writer cloned from the source bytes and exposes
the primitives the fill service needs: look up fields, set text, check boxes,
flatten and serialize. Value formatting helpers for the W-4 live here too.
"""

from __future__ import annotations

import io
import logging
import re
from typing import Dict, Iterable, List, Optional, Union

from pypdf import PdfReader, PdfWriter
from pypdf.generic import NameObject

from .errors import FieldNotFound

logger = logging.getLogger(__name__)

FieldValue = Union[str, NameObject]

_NON_DIGITS = re.compile(r"\D")


class FormDocument:
    """Editable handle over a fillable PDF."""

    def __init__(self, reader: PdfReader):
        self._writer = PdfWriter(clone_from=reader)
        self._values: Dict[str, FieldValue] = {}
        self._text_fields: List[str] = []
        self._checkbox_states: Dict[str, str] = {}

        for name, field in (reader.get_fields() or {}).items():
            field_type = field.get("/FT")
            if field_type == "/Tx":
                self._text_fields.append(name)
            elif field_type == "/Btn":
                self._checkbox_states[name] = _checkbox_on_state(field)

    @classmethod
    def load(cls, pdf_bytes: bytes) -> "FormDocument":
        reader = PdfReader(io.BytesIO(pdf_bytes), strict=False)
        if not reader.get_fields():
            logger.warning("Loaded PDF exposes no form fields")
        return cls(reader)

    @property
    def text_fields(self) -> List[str]:
        return list(self._text_fields)

    @property
    def checkbox_fields(self) -> List[str]:
        return list(self._checkbox_states)

    @property
    def values(self) -> Dict[str, FieldValue]:
        return dict(self._values)

    def has_text_field(self, name: str) -> bool:
        return name in self._text_fields

    def find_first_text_field(self, candidates: Iterable[str]) -> Optional[str]:
        """Return the first candidate present as a text field, or None."""
        for name in candidates:
            if self.has_text_field(name):
                return name
        return None

    def set_text(self, name: str, value: str) -> None:
        if name not in self._text_fields:
            raise FieldNotFound(name)
        self._apply(name, value)

    def check(self, name: str) -> None:
        if name not in self._checkbox_states:
            raise FieldNotFound(name)
        self._apply(name, NameObject(self._checkbox_states[name]))

    def flatten(self) -> None:
        """Render the field values into page content and drop the interactive form."""
        for page in self._writer.pages:
            if page.get("/Annots"):
                self._writer.update_page_form_field_values(
                    page, self._values, auto_regenerate=False, flatten=True
                )
        self._writer.remove_annotations(subtypes="/Widget")
        root = self._writer.root_object
        if "/AcroForm" in root:
            del root[NameObject("/AcroForm")]
        logger.info("Flattened %d field values", len(self._values))

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self._writer.write(buffer)
        buffer.seek(0)
        return buffer.getvalue()

    def _apply(self, name: str, value: FieldValue) -> None:
        self._values[name] = value
        for page in self._writer.pages:
            if page.get("/Annots"):
                self._writer.update_page_form_field_values(
                    page, {name: value}, auto_regenerate=False
                )


def _checkbox_on_state(field) -> str:
    states = field.get("/_States_")
    reference = getattr(field, "indirect_reference", None)
    if not states and reference is not None:
        widget = reference.get_object()
        states = widget.get("/AP", {}).get("/N", {}).keys()
    for state in states or ():
        if str(state) != "/Off":
            return str(state)
    return "/Yes"


def upper(value) -> str:
    """Official forms are filled in capitals."""
    return str(value or "").upper()


def format_ssn(ssn: Optional[str]) -> str:
    """Format nine digits as XXX-XX-XXXX; anything else passes through unchanged."""
    if not ssn:
        return ""
    digits = _NON_DIGITS.sub("", ssn)
    if len(digits) != 9:
        return ssn
    return f"{digits[:3]}-{digits[3:5]}-{digits[5:]}"


def format_amount(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)
