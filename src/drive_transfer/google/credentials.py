"""OAuth client credentials (credentials.json) loading."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from drive_transfer.google.exceptions import ConfigError, CredentialsNotFoundError

logger = logging.getLogger(__name__)

# Used when a "web" descriptor lists no redirect URIs
DEFAULT_REDIRECT_URI = "http://localhost"


@dataclass(frozen=True)
class ClientDescriptor:
    """OAuth client registration issued by Google Cloud Console."""

    client_id: str
    client_secret: str
    redirect_uri: str = DEFAULT_REDIRECT_URI


def load_client_descriptor(path: str | Path) -> ClientDescriptor:
    """Load OAuth client credentials from file.

    Handles both the "installed" and "web" credential formats. The first
    entry of ``redirect_uris`` is used as the redirect URI.

    Args:
        path: Path to credentials.json.

    Returns:
        The client descriptor.

    Raises:
        CredentialsNotFoundError: If the file does not exist.
        ConfigError: If the file cannot be read or has an unexpected format.
    """
    path = Path(path)
    try:
        if not path.exists():
            raise CredentialsNotFoundError(str(path))

        try:
            with open(path) as f:
                creds = json.load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read credentials file {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in credentials file {path}: {e}") from e

        if not isinstance(creds, dict):
            raise ConfigError("Invalid credentials.json format. Expected a JSON object.")

        if "installed" in creds:
            app_creds = creds["installed"]
        elif "web" in creds:
            app_creds = creds["web"]
        else:
            raise ConfigError("Invalid credentials.json format. Expected 'installed' or 'web' key.")

        if not isinstance(app_creds, dict):
            raise ConfigError("Invalid credentials.json format. Expected an object of client settings.")

        client_id = app_creds.get("client_id")
        client_secret = app_creds.get("client_secret")
        if not client_id or not client_secret:
            raise ConfigError("credentials.json is missing client_id or client_secret")

        redirect_uris = app_creds.get("redirect_uris", [DEFAULT_REDIRECT_URI])
        if (
            not isinstance(redirect_uris, list)
            or not redirect_uris
            or not isinstance(redirect_uris[0], str)
        ):
            raise ConfigError("credentials.json redirect_uris must be a non-empty list of URIs")
    except ConfigError as e:
        logger.error(f"Error loading credentials: {e}")
        raise

    return ClientDescriptor(
        client_id=client_id,
        client_secret=client_secret,
        redirect_uri=redirect_uris[0],
    )
