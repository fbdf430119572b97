"""Custom exception classes for hooklog."""


class HookLogError(Exception):
    """Base exception for hooklog.

    The message is sent to the client verbatim, so it must never carry
    secrets or internal detail.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        headers: dict[str, str] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.headers = headers
        super().__init__(message)


class AuthenticationError(HookLogError):
    """Missing or invalid signature, or a bad read token."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__("AUTHENTICATION_ERROR", message, status_code=401)


class DeliveryAbortedError(HookLogError):
    """The client went away before the request body was complete."""

    def __init__(self, message: str = "Client disconnected"):
        super().__init__("DELIVERY_ABORTED", message, status_code=400)
