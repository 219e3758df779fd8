"""Exceptions surfaced to checkout callbacks."""


class CheckoutError(RuntimeError):
    """Base class for client-side checkout failures."""


class MissingProof(CheckoutError):
    def __init__(self, message: str = "Payment token required"):
        super().__init__(message)


class SessionExpired(CheckoutError):
    """Pending data was lost across the payment redirect."""

    def __init__(self, message: str = "Session expired. Please try again."):
        super().__init__(message)


class GenerationFailed(CheckoutError):
    """The fill endpoint rejected the request; the message comes from its error body."""
