"""
Winbooks session controller.

This module orchestrates a single API session:
1. Authenticate with e-mail + Exchange Token → auth client → store tokens
2. Lazily build the bearer transport configuration
3. Fetch objects scoped to the selected folder, refreshing once on 401
"""
from typing import Any, Optional
from urllib.parse import quote

from winbooks.config import Settings, get_settings
from winbooks.integrations.transport import HttpTransport, TransportResponse
from winbooks.integrations.winbooks_auth import AuthClient
from winbooks.models.session import SessionState
from winbooks.models.tokens import TokenPair, TokenResponse
from winbooks.services import session_service
from winbooks.services.retry_policy import RetryPolicy
from winbooks.utils.errors import UnauthenticatedError, UnexpectedStatusError
from winbooks.utils.logger import get_logger

logger = get_logger(__name__)


def _segment(value: str) -> str:
    return quote(str(value), safe="")


class Winbooks:
    """
    Winbooks on Web API client.

    Usage:
        wb = Winbooks()
        tokens = wb.authenticate("me@example.com", exchange_token)
        sales = wb.set_folder("PARFILUX").all("Sale")

        # Later, with persisted tokens
        wb = Winbooks(tokens.access_token, tokens.refresh_token, email="me@example.com")
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        email: Optional[str] = None,
        folder: Optional[str] = None,
        api_host: Optional[str] = None,
        timeout: Optional[float] = None,
        strict_status: Optional[bool] = None,
        transport: Optional[HttpTransport] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Args:
            access_token: Previously persisted access token
            refresh_token: Previously persisted refresh token
            email: Authentication e-mail (needed to refresh seeded tokens)
            folder: Initial folder
            api_host: API base URL (defaults to settings.api_host)
            timeout: Request timeout in seconds (defaults to settings.timeout)
            strict_status: Raise UnexpectedStatusError on non-200 fetches
            transport: Preconfigured transport (mainly for tests)
            settings: Settings to read defaults from
        """
        settings = settings or get_settings()

        self.strict_status = settings.strict_status if strict_status is None else strict_status
        self.transport = transport or HttpTransport(
            api_host or settings.api_host,
            timeout=settings.timeout if timeout is None else timeout,
        )
        self.api_host = self.transport.base_url
        self.auth_client = AuthClient(self.transport)
        self.retry_policy = RetryPolicy(refresh=self.refresh_auth)

        self._state = session_service.create_session(
            access_token=access_token,
            refresh_token=refresh_token,
            email=email,
            folder=folder,
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "Winbooks":
        """
        Build a client from WINBOOKS_* settings (credentials included).

        Keyword arguments are passed to the constructor and win over the
        matching settings.
        """
        settings = settings or get_settings()
        options = {
            "access_token": settings.access_token,
            "refresh_token": settings.refresh_token,
            "email": settings.email,
            "folder": settings.folder,
        }
        options.update(kwargs)
        return cls(settings=settings, **options)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def tokens(self) -> Optional[TokenPair]:
        return self._state.tokens

    @property
    def access_token(self) -> Optional[str]:
        return self._state.access_token

    @property
    def refresh_token(self) -> Optional[str]:
        return self._state.refresh_token

    @property
    def email(self) -> Optional[str]:
        return self._state.email

    @property
    def current_folder(self) -> Optional[str]:
        return self._state.folder

    def is_authenticated(self) -> bool:
        """Check if both the access and refresh tokens are set."""
        return self._state.is_authenticated

    def set_folder(self, folder: str) -> "Winbooks":
        """Set the folder used by the following requests."""
        self._state = session_service.with_folder(self._state, folder)
        return self

    folder = set_folder

    def set_access_token(self, access_token: str):
        """
        Override the access token, keeping the refresh token.
        Mainly for testing purposes.
        """
        self._state = session_service.with_access_token(self._state, access_token)

    def get_access_token(self, email: str, exchange_token: str) -> TokenResponse:
        """Exchange an Exchange Token for tokens without storing them."""
        return self.auth_client.get_access_token(email, exchange_token)

    def authenticate(self, email: str, exchange_token: str) -> TokenResponse:
        """
        Authenticate with the e-mail and Exchange Token.

        The returned response should be persisted by the caller so the
        tokens can be passed back to the constructor later.
        """
        data = self.get_access_token(email, exchange_token)
        self._state = session_service.with_tokens(self._state, data.to_pair(), email=email)
        logger.info(f"Authenticated as {email}")
        return data

    def refresh_auth(self):
        """Use the refresh token to get a new token pair and rebuild the transport."""
        if not self._state.is_authenticated:
            raise UnauthenticatedError()

        data = self.auth_client.refresh(self._state.email, self._state.refresh_token)
        state = session_service.with_tokens(self._state, data.to_pair())
        self._state = session_service.build_transport(state, self.api_host)
        logger.info(f"Refreshed tokens for {self._state.email}")

    def initialize(self):
        """
        (Re)build the authenticated transport configuration.

        Raises:
            UnauthenticatedError: If no token pair is available
        """
        self._state = session_service.build_transport(self._state, self.api_host)

    def ensure_ready(self) -> str:
        """
        Make sure the transport is configured and a folder is set.

        Returns:
            The selected folder

        Raises:
            UnauthenticatedError: No token pair
            UndefinedFolderError: No folder selected
        """
        self._state = session_service.ensure_transport(self._state, self.api_host)
        return session_service.require_folder(self._state)

    def _authorized_get(self, path: str) -> TransportResponse:
        # Headers are read per attempt; a refresh replaces them.
        def request():
            return self.transport.send("GET", path, headers=dict(self._state.transport.headers))

        return self.retry_policy.execute(request)

    def _fetch(self, path: str) -> Any:
        response = self._authorized_get(path)

        if response.status_code == 200:
            return response.json()

        if self.strict_status:
            raise UnexpectedStatusError(response.status_code, path)

        logger.warning(f"GET {path} returned {response.status_code}, no data")
        return None

    def all(self, object_model_namespace: str) -> Any:
        """
        Get all objects from an object model namespace.

        Args:
            object_model_namespace: e.g. "Sale", "Customers"

        Returns:
            Decoded JSON on 200, otherwise None
        """
        folder = self.ensure_ready()
        return self._fetch(
            f"app/{_segment(object_model_namespace)}/Folder/{_segment(folder)}"
        )

    def get(self, object_model: str, code: str) -> Any:
        """
        Get one object from an object model.

        Args:
            object_model: e.g. "Customer"
            code: Object code

        Returns:
            Decoded JSON on 200, otherwise None
        """
        folder = self.ensure_ready()
        return self._fetch(
            f"app/{_segment(object_model)}/{_segment(code)}/Folder/{_segment(folder)}"
        )

    def close(self):
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
