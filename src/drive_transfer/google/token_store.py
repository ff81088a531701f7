"""On-disk OAuth token cache."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from drive_transfer.google.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class TokenStore:
    """Reads and writes the cached token as JSON.

    The file uses Google's authorized-user layout (``token``,
    ``refresh_token``, ``scopes``, ``expiry`` ...). Its content is not
    validated beyond being a JSON object.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> dict[str, Any] | None:
        """Load the cached token.

        Returns:
            The token dict, or None when the file is missing, unreadable or
            not a JSON object.
        """
        if not self.exists():
            logger.info("No existing token found")
            return None

        try:
            with open(self.path) as f:
                token_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable token cache {self.path}: {e}")
            return None

        if not isinstance(token_data, dict):
            logger.warning(f"Ignoring token cache {self.path}: not a JSON object")
            return None

        logger.info(f"Loaded token from {self.path}")
        return token_data

    def save(self, token_data: dict[str, Any]) -> None:
        """Write the token to the cache file.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(token_data, f, indent=2)
        except (OSError, TypeError) as e:
            logger.error(f"Error saving token: {e}")
            raise PersistenceError(str(self.path), str(e)) from e

        logger.info(f"Token stored to {self.path}")
