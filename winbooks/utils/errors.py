"""
Custom error classes for the Winbooks client.
"""
from typing import Optional


class WinbooksError(Exception):
    """Base client error."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        status_code: Optional[int] = None,
        details: Optional[dict] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert error to a dictionary (for logging or API responses)."""
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "status_code": self.status_code,
            "details": self.details,
        }


class UnauthenticatedError(WinbooksError):
    """No access/refresh token pair is available."""

    def __init__(self):
        super().__init__(
            "Please authenticate first, by passing your e-mail and Exchange Token "
            "to the authenticate() method, or by providing your Access and Refresh "
            "Tokens to the constructor.",
            "UNAUTHENTICATED"
        )


class UndefinedFolderError(WinbooksError):
    """A data request was made before selecting a folder."""

    def __init__(self):
        super().__init__(
            "Please specify a folder before making requests.",
            "UNDEFINED_FOLDER"
        )


class InvalidTokensError(WinbooksError):
    """Both the access token and the refresh token were rejected."""

    def __init__(self, message: str = "Access Token and Refresh Token are invalid"):
        super().__init__(message, "INVALID_TOKENS", status_code=401)


class TransportError(WinbooksError):
    """Network layer failure. Never retried by the client."""

    def __init__(
        self,
        message: str = "Couldn't reach Winbooks. Please try again.",
        code: str = "TRANSPORT_ERROR",
        status_code: Optional[int] = None,
        details: Optional[dict] = None
    ):
        super().__init__(message, code, status_code=status_code, details=details)


class HttpStatusError(TransportError):
    """The API answered with a 4xx or 5xx status."""

    def __init__(self, status_code: int, body: bytes = b"", method: str = "", path: str = ""):
        self.body = body
        super().__init__(
            f"Winbooks API error: {status_code} on {method} {path}".rstrip(),
            "HTTP_ERROR",
            status_code=status_code,
            details={"method": method, "path": path},
        )

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class TransportConnectionError(TransportError):
    """The request never got a response (DNS, TLS, timeout, ...)."""

    def __init__(self, message: str = "Winbooks service unavailable. Please try again later."):
        super().__init__(message, "CONNECTION_ERROR")


class MalformedResponseError(TransportError):
    """The response body could not be decoded into what was expected."""

    def __init__(self, message: str = "Malformed response from Winbooks."):
        super().__init__(message, "MALFORMED_RESPONSE")


class UnexpectedStatusError(TransportError):
    """A fetch returned a non-200 status that is not an HTTP error."""

    def __init__(self, status_code: int, path: str = ""):
        super().__init__(
            f"Unexpected status {status_code} for {path}".rstrip(),
            "UNEXPECTED_STATUS",
            status_code=status_code,
            details={"path": path},
        )
