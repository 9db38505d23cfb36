"""Loading of the OAuth client secret file."""

import json
from pathlib import Path
from typing import Any

from .exceptions import ClientSecretError

REQUIRED_CLIENT_FIELDS = ("client_id", "client_secret", "auth_uri", "token_uri")


def client_section(client_config: dict[str, Any]) -> dict[str, Any]:
    """Return the "installed" or "web" section of a client config.

    Raises:
        KeyError: If the config has neither section
    """
    for client_type in ("installed", "web"):
        if client_type in client_config:
            return client_config[client_type]
    raise KeyError("Client secrets must be for a web or installed app")


def load_client_config(path: Path) -> dict[str, Any]:
    """Read and validate a client secret file downloaded from Google Cloud Console.

    Args:
        path: Path to client_secret.json

    Returns:
        Parsed client config dictionary

    Raises:
        ClientSecretError: If the file is missing, unreadable, not JSON,
            or lacks the fields needed for the authorization-code flow
    """
    try:
        with open(path, encoding="utf-8") as secret_file:
            client_config = json.load(secret_file)
    except FileNotFoundError as e:
        raise ClientSecretError(path, "file not found") from e
    except OSError as e:
        raise ClientSecretError(path, str(e)) from e
    except json.JSONDecodeError as e:
        raise ClientSecretError(path, f"invalid JSON ({e})") from e

    if not isinstance(client_config, dict):
        raise ClientSecretError(path, "expected a JSON object")

    try:
        section = client_section(client_config)
    except KeyError as e:
        raise ClientSecretError(path, "no 'installed' or 'web' client section") from e
    if not isinstance(section, dict):
        raise ClientSecretError(path, "client section must be a JSON object")

    missing = [name for name in REQUIRED_CLIENT_FIELDS if not section.get(name)]
    if missing:
        raise ClientSecretError(path, f"missing fields {', '.join(missing)}")

    return client_config
