"""
Whop payment integration: modal capability and result shapes.

The SDK hands back loosely shaped results. `resolve_payment_result` turns them
into one of three explicit variants so callers never probe optional keys.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

SDK_PLACEHOLDER_PROOF = "sdk_payment_verified"


@dataclass(frozen=True)
class MembershipPayment:
    membership_id: str
    raw: Mapping[str, Any]


@dataclass(frozen=True)
class CheckoutPayment:
    payment_id: str
    raw: Mapping[str, Any]


@dataclass(frozen=True)
class UnidentifiedPayment:
    raw: Optional[Mapping[str, Any]] = None


PaymentResult = Union[MembershipPayment, CheckoutPayment, UnidentifiedPayment]


def resolve_payment_result(raw: Optional[Mapping[str, Any]]) -> PaymentResult:
    if not isinstance(raw, Mapping):
        return UnidentifiedPayment()

    membership = raw.get("membership")
    if isinstance(membership, Mapping) and membership.get("id"):
        return MembershipPayment(str(membership["id"]), raw)
    if raw.get("id"):
        return CheckoutPayment(str(raw["id"]), raw)
    return UnidentifiedPayment(raw)


def proof_from_result(result: PaymentResult) -> str:
    if isinstance(result, MembershipPayment):
        return result.membership_id
    if isinstance(result, CheckoutPayment):
        return result.payment_id
    return SDK_PLACEHOLDER_PROOF


class PaymentModal(ABC):
    """In-page checkout capability; subclasses wrap a concrete SDK."""

    @property
    def available(self) -> bool:
        return True

    @abstractmethod
    def open_checkout(
        self,
        plan_id: str,
        on_success: Callable[[Optional[Mapping[str, Any]]], None],
        on_close: Callable[[], None],
    ) -> None:
        ...

