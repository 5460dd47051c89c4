"""
Winbooks on Web API client.

Handles the OAuth 2.0 token exchange, folder scoping, and a single
refresh-and-retry on expired access tokens.
"""
from winbooks.config import Settings, get_settings
from winbooks.models.tokens import TokenPair, TokenResponse
from winbooks.services.winbooks_service import Winbooks
from winbooks.utils.errors import (
    WinbooksError,
    UnauthenticatedError,
    UndefinedFolderError,
    InvalidTokensError,
    TransportError,
    HttpStatusError,
    TransportConnectionError,
    MalformedResponseError,
    UnexpectedStatusError,
)
from winbooks.utils.logger import setup_logging

__version__ = "1.0.0"

__all__ = [
    "Winbooks",
    "Settings",
    "get_settings",
    "TokenPair",
    "TokenResponse",
    "setup_logging",
    "WinbooksError",
    "UnauthenticatedError",
    "UndefinedFolderError",
    "InvalidTokensError",
    "TransportError",
    "HttpStatusError",
    "TransportConnectionError",
    "MalformedResponseError",
    "UnexpectedStatusError",
]
