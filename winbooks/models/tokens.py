"""
Token-related Pydantic models.
"""
from pydantic import BaseModel, ConfigDict


class TokenPair(BaseModel):
    """Access/refresh token pair. Replaced as a whole, never edited."""
    model_config = ConfigDict(frozen=True)

    access_token: str
    refresh_token: str


class TokenResponse(BaseModel):
    """Body of a successful OAuth20/Token call (extra fields are kept)."""
    model_config = ConfigDict(extra="allow")

    access_token: str
    refresh_token: str

    def to_pair(self) -> TokenPair:
        return TokenPair(
            access_token=self.access_token,
            refresh_token=self.refresh_token,
        )
