"""Interactive OAuth2 authorization-code flow with a cached token."""

import logging
from pathlib import Path
from typing import Any, Callable, Optional

import google_auth_httplib2
import httplib2
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from googleapiclient.http import build_http

from .client_secrets import client_section
from .exceptions import (
    AuthExchangeError,
    TokenDecodeError,
    TokenNotFoundError,
)
from .models import Token
from .token_store import TokenStore

logger = logging.getLogger(__name__)

# Anti-forgery state marker sent with the authorization URL
STATE_TOKEN = "state-token"

# Copy/paste flow: the consent page shows the code instead of redirecting
OOB_REDIRECT_URI = "urn:ietf:wg:oauth:2.0:oob"

DEFAULT_SCOPES = [
    "https://www.googleapis.com/auth/gmail.readonly",
]


class AuthFlow:
    """Obtains credentials from the token cache or from the user.

    On a cache hit the cached token is used as-is, even if it has expired:
    google-auth refreshes it transparently on the first request. On a cache
    miss (or a corrupt cache file) the user is shown an authorization URL
    and asked to paste back the code, which is exchanged for a token and
    written to the cache.

    Example:
        store = TokenStore()
        flow = AuthFlow(load_client_config(Path("client_secret.json")), store)
        credentials = flow.obtain_credentials()
    """

    def __init__(
        self,
        client_config: dict[str, Any],
        token_store: TokenStore,
        scopes: Optional[list[str]] = None,
        prompt: Callable[[str], str] = input,
        redirect_uri: Optional[str] = None,
    ):
        """Initialize the flow.

        Args:
            client_config: Parsed client secret file (see load_client_config).
            token_store: Cache for the token.
            scopes: API scopes to request. Defaults to Gmail read-only.
            prompt: Reads one line of user input given a prompt text.
                Defaults to the builtin input().
            redirect_uri: Redirect URI for the authorization request.
                Defaults to the first redirect URI in the client config,
                or the out-of-band URI.
        """
        self._client_config = client_config
        self._client = client_section(client_config)
        self._token_store = token_store
        self._scopes = scopes or DEFAULT_SCOPES
        self._prompt = prompt

        if redirect_uri:
            self._redirect_uri = redirect_uri
        elif self._client.get("redirect_uris"):
            self._redirect_uri = self._client["redirect_uris"][0]
        else:
            self._redirect_uri = OOB_REDIRECT_URI

    def obtain_credentials(self) -> Credentials:
        """Return credentials for the configured scopes.

        Returns:
            Credentials bound to the cached or freshly exchanged token

        Raises:
            TokenStoreError: If the cache path cannot be resolved or the
                new token cannot be saved
            AuthExchangeError: If the interactive exchange fails
        """
        path = self._token_store.resolve_cache_path()

        try:
            token = self._token_store.load(path)
            logger.debug("Using cached token from %s", path)
        except TokenNotFoundError:
            logger.info("No cached token found, starting authorization")
            token = self._authorize(path)
        except TokenDecodeError as e:
            logger.warning("Ignoring unreadable cached token: %s", e)
            token = self._authorize(path)

        return token.to_credentials(self._client, self._scopes)

    def _authorize(self, path: Path) -> Token:
        token = self.request_token_interactively()
        self._token_store.save(path, token)
        return token

    def request_token_interactively(self) -> Token:
        """Run the authorization-code exchange with the user.

        Returns:
            Token issued by the token endpoint

        Raises:
            AuthExchangeError: If no code is entered or the exchange fails.
                There is no retry.
        """
        flow = Flow.from_client_config(
            self._client_config,
            scopes=self._scopes,
            redirect_uri=self._redirect_uri,
        )
        auth_url, _ = flow.authorization_url(
            state=STATE_TOKEN,
            access_type="offline",
        )

        print(
            "Go to the following link in your browser then type the "
            f"authorization code: \n{auth_url}"
        )

        try:
            code = self._prompt("").strip()
        except EOFError as e:
            raise AuthExchangeError("Unable to read authorization code") from e
        if not code:
            raise AuthExchangeError("No authorization code entered")

        try:
            response = flow.fetch_token(code=code)
        except Exception as e:
            raise AuthExchangeError(f"Unable to retrieve token from web: {e}") from e

        if not response or not response.get("access_token"):
            raise AuthExchangeError("Token endpoint returned no access token")

        logger.info("Authorization code exchanged for a token")
        return Token.from_token_response(response)


def authorized_http(
    credentials: Credentials, http: Optional[httplib2.Http] = None
) -> google_auth_httplib2.AuthorizedHttp:
    """Build an HTTP client that signs requests with credentials.

    Expired access tokens are refreshed with the refresh token before the
    request is sent, and once more if the server answers 401.

    Args:
        credentials: Credentials from AuthFlow.obtain_credentials()
        http: Underlying transport. Defaults to googleapiclient's build_http().
    """
    return google_auth_httplib2.AuthorizedHttp(credentials, http=http or build_http())
