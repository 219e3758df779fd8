"""Exceptions raised by the W-4 pre-fill package."""


class W4PrefillError(RuntimeError):
    """Domain-specific exception for fill service errors."""


class PaymentRequired(W4PrefillError):
    """No usable payment proof accompanied the fill request."""


class SourceFetchFailed(W4PrefillError):
    """The blank W-4 could not be downloaded."""


class FieldNotFound(W4PrefillError):
    """A mapped field is missing from the loaded document or has the wrong type."""

    def __init__(self, field_name: str):
        super().__init__(f"Field not found: {field_name}")
        self.field_name = field_name
