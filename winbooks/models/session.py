"""
Session-related Pydantic models.
"""
from pydantic import BaseModel, ConfigDict, model_validator
from typing import Dict, Optional

from winbooks.models.tokens import TokenPair


class TransportConfig(BaseModel):
    """Authenticated request configuration derived from an access token."""
    model_config = ConfigDict(frozen=True)

    base_url: str
    headers: Dict[str, str]


class SessionState(BaseModel):
    """
    Snapshot of one client session.

    Instances are immutable; session_service builds a new one for every
    transition.
    """
    model_config = ConfigDict(frozen=True)

    email: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    folder: Optional[str] = None
    transport: Optional[TransportConfig] = None  # built lazily

    @model_validator(mode="after")
    def _transport_requires_tokens(self):
        if self.transport is not None and not self.is_authenticated:
            raise ValueError("transport configuration requires a token pair")
        return self

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None and self.refresh_token is not None

    @property
    def tokens(self) -> Optional[TokenPair]:
        """The full pair, or None while either token is missing."""
        if not self.is_authenticated:
            return None
        return TokenPair(access_token=self.access_token, refresh_token=self.refresh_token)
