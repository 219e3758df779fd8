import io
from typing import Dict, Iterable, List

import pytest
from pypdf import PdfWriter
from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    FloatObject,
    NameObject,
    NumberObject,
    TextStringObject,
)

from w4_prefill.fields import SSN_FIELD_CANDIDATES, W4_CHECKBOX_FIELDS, W4_TEXT_FIELDS

# W-4 checkboxes export their position as the on-state.
CHECKBOX_ON_STATES = {
    W4_CHECKBOX_FIELDS["single"]: "/1",
    W4_CHECKBOX_FIELDS["married"]: "/2",
    W4_CHECKBOX_FIELDS["hoh"]: "/3",
    W4_CHECKBOX_FIELDS["multipleJobs"]: "/1",
}

CHECKED_APPEARANCE = b"0 0 m 10 10 l S"


def _rect(x: float, y: float, width: float, height: float) -> ArrayObject:
    return ArrayObject([FloatObject(x), FloatObject(y), FloatObject(x + width), FloatObject(y + height)])


def _appearance(writer: PdfWriter, content: bytes):
    stream = DecodedStreamObject()
    stream.update(
        {
            NameObject("/Type"): NameObject("/XObject"),
            NameObject("/Subtype"): NameObject("/Form"),
            NameObject("/BBox"): _rect(0, 0, 10, 10),
        }
    )
    stream.set_data(content)
    return writer._add_object(stream)


def drawn_xobjects(page) -> List[bytes]:
    """Content of every form XObject painted on a page."""
    resources = page["/Resources"].get_object()
    xobjects = resources["/XObject"].get_object() if "/XObject" in resources else {}
    return [xobjects[name].get_object().get_data() for name in xobjects]


def build_form_pdf(text_fields: Iterable[str], checkboxes: Dict[str, str]) -> bytes:
    """Single-page AcroForm PDF with flat (widget-merged) fields."""
    writer = PdfWriter()
    page = writer.add_blank_page(width=612, height=792)
    helvetica = writer._add_object(
        DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Font"),
                NameObject("/Subtype"): NameObject("/Type1"),
                NameObject("/BaseFont"): NameObject("/Helvetica"),
                NameObject("/Encoding"): NameObject("/WinAnsiEncoding"),
            }
        )
    )

    annots = ArrayObject()
    y = 740.0
    for name in text_fields:
        widget = DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Annot"),
                NameObject("/Subtype"): NameObject("/Widget"),
                NameObject("/FT"): NameObject("/Tx"),
                NameObject("/T"): TextStringObject(name),
                NameObject("/Rect"): _rect(50, y, 300, 16),
                NameObject("/DA"): TextStringObject("/Helv 10 Tf 0 g"),
                NameObject("/F"): NumberObject(4),
            }
        )
        annots.append(writer._add_object(widget))
        y -= 24

    for name, on_state in checkboxes.items():
        widget = DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Annot"),
                NameObject("/Subtype"): NameObject("/Widget"),
                NameObject("/FT"): NameObject("/Btn"),
                NameObject("/T"): TextStringObject(name),
                NameObject("/Rect"): _rect(400, y, 10, 10),
                NameObject("/F"): NumberObject(4),
                NameObject("/V"): NameObject("/Off"),
                NameObject("/AS"): NameObject("/Off"),
                NameObject("/AP"): DictionaryObject(
                    {
                        NameObject("/N"): DictionaryObject(
                            {
                                NameObject(on_state): _appearance(writer, CHECKED_APPEARANCE),
                                NameObject("/Off"): _appearance(writer, b""),
                            }
                        )
                    }
                ),
            }
        )
        annots.append(writer._add_object(widget))
        y -= 24

    page[NameObject("/Annots")] = annots
    writer.root_object[NameObject("/AcroForm")] = DictionaryObject(
        {
            NameObject("/Fields"): ArrayObject(list(annots)),
            NameObject("/DA"): TextStringObject("/Helv 0 Tf 0 g"),
            NameObject("/DR"): DictionaryObject(
                {NameObject("/Font"): DictionaryObject({NameObject("/Helv"): helvetica})}
            ),
        }
    )

    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def w4_pdf_bytes() -> bytes:
    # SSN sits on the third candidate, as on a renumbered revision.
    text_fields = list(W4_TEXT_FIELDS.values()) + [SSN_FIELD_CANDIDATES[2]]
    return build_form_pdf(text_fields, CHECKBOX_ON_STATES)


@pytest.fixture
def user_data_payload() -> dict:
    return {
        "firstName": "Jane Q",
        "lastName": "Doe",
        "address": "12 Elm St",
        "city": "Springfield",
        "state": "il",
        "zip": "62704",
        "ssn": "123456789",
        "filing": "married",
    }


@pytest.fixture
def calc_results_payload() -> dict:
    return {
        "multipleJobs": True,
        "childrenCredit": 4000,
        "otherCredit": 0,
        "totalCredits": 4000,
        "otherIncome": 0,
        "deductions": 1250.5,
        "extraWithholding": 25,
    }
