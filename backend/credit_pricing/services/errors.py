class CreditPricingError(Exception):
    """Base class."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(CreditPricingError):
    status_code = 400


class IngestionError(CreditPricingError):
    status_code = 400


class StoreError(CreditPricingError):
    status_code = 503
