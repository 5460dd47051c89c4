"""
Session state transitions.

This module handles:
1. Seeding a session from persisted tokens
2. Replacing the token pair after an exchange or refresh
3. Building the authenticated transport configuration
4. Checking the folder scope before data requests

Every function takes a SessionState and returns a new one (or raises).
Nothing here touches the network.
"""
from typing import Optional

from winbooks.models.session import SessionState, TransportConfig
from winbooks.models.tokens import TokenPair
from winbooks.utils.errors import UnauthenticatedError, UndefinedFolderError


def create_session(
    access_token: Optional[str] = None,
    refresh_token: Optional[str] = None,
    email: Optional[str] = None,
    folder: Optional[str] = None,
) -> SessionState:
    """
    Create a session, optionally pre-seeded with persisted tokens.

    Either token may be given alone; the session only counts as
    authenticated once both are present.
    """
    return SessionState(
        email=email,
        access_token=access_token,
        refresh_token=refresh_token,
        folder=folder,
    )


def with_tokens(state: SessionState, tokens: TokenPair, email: Optional[str] = None) -> SessionState:
    """
    Replace the token pair. The old transport configuration is dropped
    since it carries the old access token.
    """
    updates = {
        "access_token": tokens.access_token,
        "refresh_token": tokens.refresh_token,
        "transport": None,
    }
    if email is not None:
        updates["email"] = email
    return state.model_copy(update=updates)


def with_access_token(state: SessionState, access_token: str) -> SessionState:
    """
    Override only the access token, keeping whatever refresh token is
    stored. The built transport carries the old token and is dropped.
    """
    return state.model_copy(update={"access_token": access_token, "transport": None})


def with_folder(state: SessionState, folder: Optional[str]) -> SessionState:
    return state.model_copy(update={"folder": folder})


def build_transport(state: SessionState, base_url: str) -> SessionState:
    """
    Derive the bearer-authenticated transport configuration.

    Raises:
        UnauthenticatedError: If the session holds no token pair
    """
    if not state.is_authenticated:
        raise UnauthenticatedError()

    transport = TransportConfig(
        base_url=base_url,
        headers={
            "Authorization": f"Bearer {state.access_token}",
            "Accept": "application/json",
        },
    )
    return state.model_copy(update={"transport": transport})


def ensure_transport(state: SessionState, base_url: str) -> SessionState:
    """Build the transport configuration unless one already exists."""
    if state.transport is not None:
        return state
    return build_transport(state, base_url)


def require_folder(state: SessionState) -> str:
    """
    Return the selected folder.

    Raises:
        UndefinedFolderError: If no folder was selected
    """
    if not state.folder:
        raise UndefinedFolderError()
    return state.folder
