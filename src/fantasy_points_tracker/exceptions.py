class FptException(Exception):
    """Base class for all fantasy points tracker errors.

    ``message`` is the technical description; ``user_message`` is safe to show
    to an end user and defaults to the technical message.
    """

    def __init__(self, message: str, *, user_message: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.user_message = user_message or message


class InvalidInputError(FptException):
    pass


class StatsValidationError(FptException, ValueError):
    pass


class UpstreamError(FptException):
    def __init__(self, message: str, *, user_message: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message, user_message=user_message or "Failed to fetch data from MLB.")
        self.status_code = status_code


class UpstreamTransientError(UpstreamError):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(
            message,
            user_message="MLB stats are temporarily unavailable. Please try again in a few minutes.",
            status_code=status_code,
        )


class UpstreamMalformedError(UpstreamError):
    def __init__(self, message: str) -> None:
        super().__init__(message, user_message="MLB returned incomplete data for this request.")


class EnrichmentError(FptException):
    pass


class PersistenceError(FptException):
    def __init__(self, message: str) -> None:
        super().__init__(message, user_message="The stats cache is unavailable.")
