"""On-disk cache for the OAuth token."""

import json
import logging
import os
from pathlib import Path
from typing import Optional
from urllib.parse import quote_plus

from .exceptions import TokenDecodeError, TokenNotFoundError, TokenStoreError
from .models import Token

logger = logging.getLogger(__name__)

DEFAULT_DIRECTORY_NAME = ".credentials"
DEFAULT_TOKEN_FILENAME = "gmail-python-quickstart.json"

# Owner-only permissions for the cache directory and token file
DIRECTORY_MODE = 0o700
FILE_MODE = 0o600


class TokenStore:
    """Reads and writes a single cached token at a fixed location.

    The location is derived from an explicit home directory so tests can
    point the store at a sandbox:

        <home_dir>/.credentials/<quote_plus(filename)>

    Saving always truncates the file; there is never more than one token
    per path.
    """

    def __init__(
        self,
        home_dir: Optional[Path] = None,
        directory_name: str = DEFAULT_DIRECTORY_NAME,
        filename: str = DEFAULT_TOKEN_FILENAME,
    ):
        """Initialize the store.

        Args:
            home_dir: Base directory for the cache. Defaults to the
                current user's home directory.
            directory_name: Cache subdirectory under home_dir.
            filename: Unescaped token filename.
        """
        self._home_dir = home_dir or Path.home()
        self._directory_name = directory_name
        self._filename = filename

    def resolve_cache_path(self) -> Path:
        """Compute the cache path, creating its directory if needed.

        Returns:
            Path of the token cache file (which may not exist yet)

        Raises:
            TokenStoreError: If the cache directory cannot be created
        """
        cache_dir = self._home_dir / self._directory_name
        try:
            cache_dir.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise TokenStoreError(
                f"Unable to create credential directory {cache_dir}: {e}",
                path=cache_dir,
            ) from e
        return cache_dir / quote_plus(self._filename)

    def load(self, path: Path) -> Token:
        """Load the cached token.

        Args:
            path: Cache file path from resolve_cache_path()

        Returns:
            The cached Token. Expiry is not checked here.

        Raises:
            TokenNotFoundError: If no file exists at path
            TokenDecodeError: If the file does not contain a valid token
            TokenStoreError: If the file exists but cannot be read
        """
        try:
            with open(path, encoding="utf-8") as token_file:
                data = json.load(token_file)
        except FileNotFoundError as e:
            raise TokenNotFoundError(path) from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise TokenDecodeError(path, str(e)) from e
        except OSError as e:
            raise TokenStoreError(f"Unable to read {path}: {e}", path=path) from e

        if not isinstance(data, dict):
            raise TokenDecodeError(path, "expected a JSON object")
        try:
            token = Token.from_dict(data)
        except KeyError as e:
            raise TokenDecodeError(path, f"missing field {e}") from e
        except (TypeError, ValueError, AttributeError) as e:
            raise TokenDecodeError(path, str(e)) from e
        if not isinstance(token.access_token, str) or not token.access_token:
            raise TokenDecodeError(path, "access_token must be a non-empty string")

        logger.debug("Token loaded from %s", path)
        return token

    def save(self, path: Path, token: Token) -> None:
        """Write the token to path, replacing any previous token.

        The file is created owner read/write only.

        Raises:
            TokenStoreError: If the file cannot be opened or written
        """
        print(f"Saving credential file to: {path}")
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
            try:
                token_file = os.fdopen(fd, "w", encoding="utf-8")
            except Exception:
                os.close(fd)
                raise
            with token_file:
                json.dump(token.to_dict(), token_file)
                token_file.write("\n")
        except OSError as e:
            raise TokenStoreError(f"Unable to cache oauth token at {path}: {e}", path=path) from e
