"""Exceptions raised by the NanoCreatures client.

Transport failures (``httpx.TransportError`` and friends) are not wrapped;
they reach the caller as raised by httpx.
"""


class NanoCreaturesError(Exception):
    """Base class for errors raised by the client itself."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class APIError(NanoCreaturesError):
    """The service answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        code: str | None = None,
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.body = body


class InvalidResponseError(NanoCreaturesError):
    """A 2xx response whose body is not the JSON we expected."""

    def __init__(self, message: str, *, body: str = "") -> None:
        super().__init__(message)
        self.body = body
