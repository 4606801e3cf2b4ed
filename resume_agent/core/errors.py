"""Error kinds shared by the search core and the provider proxies."""


class InvalidInputError(ValueError):
    """Raised when caller-supplied input is missing or malformed."""


class ProviderError(Exception):
    """Raised when a hosted AI provider is unreachable, rejects a call, or
    returns a response the service cannot use."""

    def __init__(self, message: str, operation: str | None = None, cause: Exception | None = None):
        super().__init__(message)
        self.operation = operation
        self.cause = cause


class UnsupportedPayloadError(ProviderError):
    """Raised when a downloaded file payload has a shape the decoder doesn't know."""
