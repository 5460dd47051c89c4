"""
Winbooks OAuth 2.0 token exchange.

This module handles:
1. Exchanging an Exchange Token for access and refresh tokens
2. Exchanging a refresh token for a new token pair

Both calls hit the same endpoint, authenticated with a Basic header that
carries only the base64 of the user's e-mail. Nothing here stores tokens;
the caller decides what to do with the response.
"""
import base64
from typing import Optional

from pydantic import ValidationError

from winbooks.integrations.transport import HttpTransport
from winbooks.models.tokens import TokenResponse
from winbooks.utils.errors import MalformedResponseError, TransportError
from winbooks.utils.logger import get_logger

logger = get_logger(__name__)

TOKEN_PATH = "OAuth20/Token"

GRANT_EXCHANGE_TOKEN = "exchange_token"
GRANT_REFRESH_TOKEN = "refresh_token"


def basic_auth_header(email: Optional[str]) -> str:
    """Build the Basic authorization value from the e-mail alone."""
    encoded = base64.b64encode((email or "").encode("utf-8")).decode("ascii")
    return f"Basic {encoded}"


class AuthClient:
    """
    Token endpoint client.

    Usage:
        auth = AuthClient(transport)
        tokens = auth.get_access_token("me@example.com", exchange_token)
        tokens = auth.refresh("me@example.com", tokens.refresh_token)
    """

    def __init__(self, transport: HttpTransport):
        self.transport = transport

    def exchange_for_tokens(self, email: Optional[str], token: str, grant_type: str) -> TokenResponse:
        """
        POST a grant to the token endpoint.

        Args:
            email: Authentication e-mail
            token: Exchange token or refresh token, sent as "code"
            grant_type: "exchange_token" or "refresh_token"

        Returns:
            Parsed TokenResponse

        Raises:
            TransportError: Any non-2xx status, connection failure, or a
                body without the token fields. Never retried here.
        """
        headers = {
            "Authorization": basic_auth_header(email),
            "Accept": "application/json",
        }
        form = {
            "grant_type": grant_type,
            "code": token,
        }

        try:
            response = self.transport.send("POST", TOKEN_PATH, headers=headers, data=form)
        except TransportError as e:
            logger.error(f"Token exchange ({grant_type}) failed for {email}: {e.message}")
            raise

        data = response.json()
        try:
            tokens = TokenResponse.model_validate(data)
        except ValidationError as e:
            logger.error(f"Token response missing fields: {e.error_count()} error(s)")
            raise MalformedResponseError("Token response lacks access_token or refresh_token")

        logger.info(f"Token exchange ({grant_type}) succeeded for {email}")
        return tokens

    def get_access_token(self, email: str, exchange_token: str) -> TokenResponse:
        """Exchange the one-time Exchange Token for a token pair."""
        return self.exchange_for_tokens(email, exchange_token, GRANT_EXCHANGE_TOKEN)

    def refresh(self, email: Optional[str], refresh_token: str) -> TokenResponse:
        """Exchange the refresh token for a brand new token pair."""
        return self.exchange_for_tokens(email, refresh_token, GRANT_REFRESH_TOKEN)
