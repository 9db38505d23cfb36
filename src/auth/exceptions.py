"""Exceptions for the auth module."""

from pathlib import Path
from typing import Optional


class AuthenticationError(Exception):
    """Base exception for all authorization failures."""

    pass


class ClientSecretError(AuthenticationError):
    """Raised when the OAuth client secret file is missing or malformed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(
            f"Unable to use client secret file {path}: {reason}. "
            "Download OAuth client credentials from Google Cloud Console."
        )


class TokenStoreError(AuthenticationError):
    """Raised when the token cache cannot be read or written."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(message)


class TokenNotFoundError(TokenStoreError):
    """Raised when no cached token exists at the cache path."""

    def __init__(self, path: Path):
        super().__init__(f"No cached token at {path}", path=path)


class TokenDecodeError(TokenStoreError):
    """Raised when the cached token file does not hold a valid token."""

    def __init__(self, path: Path, reason: str):
        self.reason = reason
        super().__init__(f"Cached token at {path} is unreadable: {reason}", path=path)


class AuthExchangeError(AuthenticationError):
    """Raised when the authorization code cannot be exchanged for a token."""

    pass
