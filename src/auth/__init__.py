"""OAuth2 authorization for the Gmail API.

This module obtains credentials for the Gmail API, caching the token on
disk and falling back to an interactive authorization-code exchange.

Public API:
    - AuthFlow: Obtains credentials from the cache or the user
    - TokenStore: Reads and writes the cached token
    - Token: Cached OAuth2 token
    - authorized_http: HTTP client bound to credentials
    - load_client_config: Reads client_secret.json
    - AuthenticationError: Base exception for auth failures
    - ClientSecretError: Client secret file missing or malformed
    - TokenStoreError: Token cache unreadable or unwritable
    - TokenNotFoundError: No cached token
    - TokenDecodeError: Cached token is corrupt
    - AuthExchangeError: Authorization code exchange failed
"""

from .auth_flow import DEFAULT_SCOPES, STATE_TOKEN, AuthFlow, authorized_http
from .client_secrets import client_section, load_client_config
from .exceptions import (
    AuthExchangeError,
    AuthenticationError,
    ClientSecretError,
    TokenDecodeError,
    TokenNotFoundError,
    TokenStoreError,
)
from .models import Token
from .token_store import TokenStore

__all__ = [
    "AuthFlow",
    "TokenStore",
    "Token",
    "authorized_http",
    "load_client_config",
    "client_section",
    "DEFAULT_SCOPES",
    "STATE_TOKEN",
    "AuthenticationError",
    "ClientSecretError",
    "TokenStoreError",
    "TokenNotFoundError",
    "TokenDecodeError",
    "AuthExchangeError",
]
