"""Token data model for the auth module."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from google.oauth2.credentials import Credentials

DEFAULT_TOKEN_TYPE = "Bearer"


@dataclass
class Token:
    """OAuth2 token as cached on disk.

    Only the token itself is persisted. Client identity (client id, secret,
    token URI) always comes from the client secret file, so rotating the
    client secret does not require deleting the cache.

    Attributes:
        access_token: Short-lived credential sent with each API request
        refresh_token: Long-lived credential used to renew the access token
            (present when offline access was granted)
        expiry: When the access token expires (timezone-aware UTC)
        token_type: Token type reported by the token endpoint
    """

    access_token: str
    refresh_token: Optional[str] = None
    expiry: Optional[datetime] = None
    token_type: str = DEFAULT_TOKEN_TYPE

    def to_dict(self) -> dict[str, Any]:
        """Serialize token to dictionary for the cache file."""
        return {
            "access_token": self.access_token,
            "token_type": self.token_type,
            "refresh_token": self.refresh_token,
            "expiry": self.expiry.isoformat() if self.expiry else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Token":
        """Deserialize token from the cache file dictionary.

        Raises:
            KeyError: If access_token is missing
            ValueError: If expiry is not an ISO-8601 timestamp
        """
        expiry = None
        if data.get("expiry"):
            expiry = datetime.fromisoformat(data["expiry"].replace("Z", "+00:00"))
            if expiry.tzinfo is None:
                expiry = expiry.replace(tzinfo=timezone.utc)
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expiry=expiry,
            token_type=data.get("token_type") or DEFAULT_TOKEN_TYPE,
        )

    @classmethod
    def from_token_response(cls, data: dict[str, Any]) -> "Token":
        """Create from an OAuth2 token endpoint response.

        requests-oauthlib adds an absolute ``expires_at`` (epoch seconds)
        next to the relative ``expires_in``; prefer the absolute value.
        """
        expiry = None
        if data.get("expires_at") is not None:
            expiry = datetime.fromtimestamp(float(data["expires_at"]), tz=timezone.utc)
        elif data.get("expires_in") is not None:
            expiry = datetime.now(timezone.utc) + timedelta(
                seconds=int(data["expires_in"])
            )
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expiry=expiry,
            token_type=data.get("token_type") or DEFAULT_TOKEN_TYPE,
        )

    def to_credentials(
        self, client_section: dict[str, Any], scopes: list[str]
    ) -> Credentials:
        """Bind this token to a client identity.

        Args:
            client_section: The "installed" or "web" section of the client
                secret file
            scopes: Scopes the token was requested for

        Returns:
            Credentials that google-auth refreshes automatically when the
            access token expires
        """
        # google-auth compares expiry against a naive UTC "now"
        expiry = None
        if self.expiry:
            expiry = self.expiry.astimezone(timezone.utc).replace(tzinfo=None)
        return Credentials(
            token=self.access_token,
            refresh_token=self.refresh_token,
            token_uri=client_section["token_uri"],
            client_id=client_section["client_id"],
            client_secret=client_section["client_secret"],
            scopes=scopes,
            expiry=expiry,
        )
