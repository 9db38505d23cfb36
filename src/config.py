"""Settings for the Gmail quickstart, read from the environment."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from src.auth import DEFAULT_SCOPES
from src.auth.token_store import DEFAULT_TOKEN_FILENAME
from src.messages import DEFAULT_USER_ID

DEFAULT_CLIENT_SECRET_PATH = Path("client_secret.json")


@dataclass
class QuickstartConfig:
    """Quickstart settings.

    Attributes:
        client_secret_path: OAuth client secret file from Google Cloud Console
        token_home: Directory under which .credentials/ holds the token cache
        token_filename: Unescaped token cache filename
        scopes: Gmail API scopes to request. Changing these requires deleting
            the cached token.
        user_id: Mailbox to read ("me" for the authorized user)
    """

    client_secret_path: Path = DEFAULT_CLIENT_SECRET_PATH
    token_home: Optional[Path] = None
    token_filename: str = DEFAULT_TOKEN_FILENAME
    scopes: list[str] = field(default_factory=lambda: list(DEFAULT_SCOPES))
    user_id: str = DEFAULT_USER_ID

    @classmethod
    def from_env(cls) -> "QuickstartConfig":
        """Build settings from GMAIL_* environment variables.

        Environment variables:
            GMAIL_CLIENT_SECRET_PATH: Defaults to client_secret.json in the
                working directory.
            GMAIL_TOKEN_HOME: Defaults to the user's home directory.
            GMAIL_TOKEN_FILENAME: Defaults to gmail-python-quickstart.json.
            GMAIL_SCOPES: Comma-separated scopes. Defaults to gmail.readonly.
            GMAIL_USER_ID: Defaults to "me".
        """
        config = cls()
        if os.environ.get("GMAIL_CLIENT_SECRET_PATH"):
            config.client_secret_path = Path(os.environ["GMAIL_CLIENT_SECRET_PATH"])
        if os.environ.get("GMAIL_TOKEN_HOME"):
            config.token_home = Path(os.environ["GMAIL_TOKEN_HOME"]).expanduser()
        if os.environ.get("GMAIL_TOKEN_FILENAME"):
            config.token_filename = os.environ["GMAIL_TOKEN_FILENAME"]
        if os.environ.get("GMAIL_SCOPES"):
            scopes = [s.strip() for s in os.environ["GMAIL_SCOPES"].split(",") if s.strip()]
            if scopes:
                config.scopes = scopes
        if os.environ.get("GMAIL_USER_ID"):
            config.user_id = os.environ["GMAIL_USER_ID"]
        return config
