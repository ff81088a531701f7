"""Runtime configuration for drive-transfer.

Default file locations live in the repository root:
    .env              - optional environment overrides
    credentials.json  - OAuth client credentials from Google Cloud Console
    token.json        - cached OAuth token (written on first login)

Every location can be overridden by environment variable or by passing an
explicit path to ``TransferConfig.from_env``. The resulting config object is
built once at startup and handed to each component.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

# __file__ is src/drive_transfer/config.py, so 3 levels up
REPO_ROOT = Path(__file__).parent.parent.parent

ENV_FILE = REPO_ROOT / ".env"
DEFAULT_CREDENTIALS = REPO_ROOT / "credentials.json"
DEFAULT_TOKEN = REPO_ROOT / "token.json"

CREDENTIALS_ENV_VAR = "DRIVE_TRANSFER_CREDENTIALS"
TOKEN_ENV_VAR = "DRIVE_TRANSFER_TOKEN"

DRIVE_SCOPE = "https://www.googleapis.com/auth/drive"


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from a file.

    Args:
        env_path: Path to .env file.

    Returns:
        Dictionary of loaded variables.
    """
    loaded = {}
    if not env_path.exists():
        return loaded

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip()

            # Remove surrounding quotes
            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            # Only set if not already in environment (env vars take precedence)
            if key and key not in os.environ:
                os.environ[key] = value
                loaded[key] = value

    return loaded


@dataclass(frozen=True)
class TransferConfig:
    """File locations and OAuth scopes used by a single run."""

    credentials_path: Path = DEFAULT_CREDENTIALS
    token_path: Path = DEFAULT_TOKEN
    scopes: tuple[str, ...] = field(default=(DRIVE_SCOPE,))

    @classmethod
    def from_env(
        cls,
        credentials_path: str | Path | None = None,
        token_path: str | Path | None = None,
        env_file: Path | None = ENV_FILE,
    ) -> TransferConfig:
        """Build a config from explicit paths, the environment and defaults.

        Explicit arguments win over environment variables, which win over
        the repository-root defaults.

        Args:
            credentials_path: OAuth client credentials file.
            token_path: Token cache file.
            env_file: .env file to load first. Pass None to skip.

        Returns:
            The resolved configuration.
        """
        if env_file is not None:
            _load_env_file(env_file)

        credentials = credentials_path or os.environ.get(CREDENTIALS_ENV_VAR) or DEFAULT_CREDENTIALS
        token = token_path or os.environ.get(TOKEN_ENV_VAR) or DEFAULT_TOKEN

        return cls(
            credentials_path=Path(credentials).expanduser(),
            token_path=Path(token).expanduser(),
        )
