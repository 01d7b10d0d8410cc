"""Typed exceptions for the chart-of-accounts engine."""


class CoaError(Exception):
    """Base exception for all chart-of-accounts errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CoaArgumentError(CoaError):
    """A required identifier passed by the caller was blank."""

    def __init__(self, message: str, *, argument: str | None = None) -> None:
        self.argument = argument  # e.g., "chart_id"
        super().__init__(message)


class CoaValidationError(CoaError):
    """Business-rule violation detected before any write."""

    def __init__(self, message: str, *, entity: str | None = None) -> None:
        self.entity = entity  # "chart" | "account"
        super().__init__(message)


class CoaNotFoundError(CoaValidationError):
    """A referenced chart or account does not exist."""

    def __init__(self, message: str, *, entity: str | None = None, entity_id: str = "") -> None:
        self.entity_id = entity_id
        super().__init__(message, entity=entity)


class CoaStoreError(CoaError):
    """Storage adapter failure (I/O, encoding or decoding)."""

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        operation: str | None = None,
    ) -> None:
        self.key = key
        self.operation = operation  # "get" | "put" | "encode" | "decode"
        super().__init__(message)


class CoaRateLimitError(CoaStoreError):
    """Remote store rejected the request - includes retry information."""

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        operation: str | None = None,
        retry_after: int | None = None,
    ) -> None:
        self.retry_after = retry_after  # seconds until retry is allowed
        super().__init__(message, key=key, operation=operation)
