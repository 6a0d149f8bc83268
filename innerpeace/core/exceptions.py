class InnerPeaceError(Exception):
    """Base class for errors raised inside the companion core."""


class StoreUnavailableError(InnerPeaceError):
    """The remote document store is not configured or cannot be reached."""


class StoreTimeoutError(InnerPeaceError):
    """A remote store call ran past its time budget."""

    def __init__(self, context: str, seconds: float):
        super().__init__(f"{context} timed out after {seconds}s")
        self.context = context
        self.seconds = seconds


class OracleResponseError(InnerPeaceError):
    """The oracle answered, but not in the shape we asked for."""


class MissingIdentityError(InnerPeaceError):
    """An operation that needs an authenticated user was called without one."""
