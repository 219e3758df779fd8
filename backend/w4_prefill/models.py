"""Wire models for the W-4 fill request (camelCase on the wire)."""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class UserData(_CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    ssn: Optional[str] = None
    filing: Optional[str] = None  # single | mfs | married | widow | head


class CalcResults(_CamelModel):
    multiple_jobs: bool = False
    children_credit: Optional[float] = None
    other_credit: Optional[float] = None
    total_credits: Optional[float] = None
    other_income: Optional[float] = None
    deductions: Optional[float] = None
    extra_withholding: Optional[float] = None


class W4Request(_CamelModel):
    user_data: UserData = Field(default_factory=UserData)
    calc_results: CalcResults = Field(default_factory=CalcResults)
    # older clients send the Whop token under its own key
    proof: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("proof", "whopToken")
    )
