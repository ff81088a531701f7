"""Google OAuth management using Authlib.

This module provides the three-legged OAuth 2.0 flow used before any Drive
call:
- Reuse of a cached token from the token store
- Interactive authorization (visit URL, paste code) when no token is cached
- Conversion of the token into google-auth Credentials for API clients

The interactive step blocks on a single ``input()`` call. There is no
timeout and no cancellation handling: the run waits for the operator, and
an interrupt (Ctrl-C) simply propagates as KeyboardInterrupt.
"""

from __future__ import annotations

import logging
import webbrowser
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import Any

import requests
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.requests_client import OAuth2Session
from google.oauth2.credentials import Credentials as GoogleCredentials

from drive_transfer.config import DRIVE_SCOPE, TransferConfig
from drive_transfer.google.credentials import ClientDescriptor
from drive_transfer.google.exceptions import AuthError
from drive_transfer.google.token_store import TokenStore

logger = logging.getLogger(__name__)


def _parse_expiry(expiry: Any) -> datetime | None:
    """Parse a cached expiry into the naive-UTC datetime google-auth expects."""
    if expiry is None or expiry == "":
        return None
    try:
        if isinstance(expiry, (int, float)):
            dt = datetime.fromtimestamp(expiry, tz=timezone.utc)
        else:
            dt = datetime.fromisoformat(str(expiry).replace("Z", "+00:00"))
    except (ValueError, OverflowError, OSError):
        logger.warning(f"Ignoring unparseable token expiry: {expiry!r}")
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def _format_expiry(expires_at: Any) -> str | None:
    if not expires_at:
        return None
    dt = datetime.fromtimestamp(float(expires_at), tz=timezone.utc)
    return dt.isoformat().replace("+00:00", "Z")


class GoogleOAuth:
    """Google OAuth management using Authlib.

    Handles the authorization-code flow and token caching, and hands out
    google-auth Credentials for Google API client libraries.

    Example:
        >>> auth = GoogleOAuth(descriptor, TokenStore("token.json"))
        >>> creds = auth.load_cached_credentials()
        >>> if creds is None:
        ...     print(f"Visit: {auth.get_authorization_url()}")
        ...     creds = auth.fetch_credentials(input("Code: "))
    """

    AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"

    def __init__(
        self,
        descriptor: ClientDescriptor,
        token_store: TokenStore,
        scopes: Sequence[str] = (DRIVE_SCOPE,),
    ):
        """Initialize Google OAuth.

        Args:
            descriptor: OAuth client credentials.
            token_store: Where the token is cached.
            scopes: Full scope URLs to request.
        """
        self.descriptor = descriptor
        self.token_store = token_store
        self.scopes = list(scopes)

        self.session = OAuth2Session(
            client_id=descriptor.client_id,
            client_secret=descriptor.client_secret,
            scope=" ".join(self.scopes),
            redirect_uri=descriptor.redirect_uri,
            token_endpoint=self.TOKEN_URL,
            token_endpoint_auth_method="client_secret_post",
        )

        self._state: str | None = None

    def get_authorization_url(self) -> str:
        """Start OAuth authorization flow.

        Returns:
            Authorization URL for the operator to visit.
        """
        authorization_url, state = self.session.create_authorization_url(
            self.AUTHORIZE_URL,
            access_type="offline",
            prompt="consent",
        )

        self._state = state
        return authorization_url

    def fetch_token(self, code_or_response: str) -> dict[str, Any]:
        """Exchange an authorization code for a token.

        Args:
            code_or_response: The bare code, or the full redirect URL that
                carries it as a query parameter.

        Returns:
            The token dict returned by the token endpoint.

        Raises:
            AuthError: If the exchange fails for any reason.
        """
        value = code_or_response.strip()
        if not value:
            raise AuthError("No authorization code provided")

        if value.startswith(("http://", "https://")):
            kwargs = {"authorization_response": value, "state": self._state}
        else:
            kwargs = {"code": value}

        try:
            return self.session.fetch_token(
                self.TOKEN_URL,
                grant_type="authorization_code",
                **kwargs,
            )
        except (AuthlibBaseError, requests.RequestException, ValueError) as e:
            logger.error(f"Error retrieving access token: {e}")
            raise AuthError(f"Error retrieving access token: {e}") from e

    def token_to_cache(self, token: dict[str, Any]) -> dict[str, Any]:
        """Convert an Authlib token to Google's authorized-user layout."""
        scopes = token.get("scope", "").split() or list(self.scopes)
        return {
            "token": token["access_token"],
            "refresh_token": token.get("refresh_token"),
            "token_uri": self.TOKEN_URL,
            "client_id": self.descriptor.client_id,
            "client_secret": self.descriptor.client_secret,
            "scopes": scopes,
            "type": token.get("token_type", "Bearer"),
            "expiry": _format_expiry(token.get("expires_at")),
        }

    def credentials_from_cache(self, token_data: dict[str, Any]) -> GoogleCredentials:
        """Build Credentials from a cached token.

        Expiry is not checked here; google-auth refreshes the token on the
        first request if it has expired and a refresh token is present.
        """
        return GoogleCredentials(
            token=token_data.get("token") or token_data.get("access_token"),
            refresh_token=token_data.get("refresh_token"),
            token_uri=token_data.get("token_uri") or self.TOKEN_URL,
            client_id=token_data.get("client_id") or self.descriptor.client_id,
            client_secret=token_data.get("client_secret") or self.descriptor.client_secret,
            scopes=token_data.get("scopes") or self.scopes,
            expiry=_parse_expiry(token_data.get("expiry")),
        )

    def load_cached_credentials(self) -> GoogleCredentials | None:
        """Return Credentials from the token cache, or None if there is none."""
        token_data = self.token_store.load()
        if token_data is None:
            return None
        return self.credentials_from_cache(token_data)

    def fetch_credentials(self, code_or_response: str) -> GoogleCredentials:
        """Exchange the code, persist the token and return Credentials.

        Raises:
            AuthError: If the exchange fails.
            PersistenceError: If the token cannot be cached. This is fatal
                even though the in-memory credentials are usable.
        """
        token = self.fetch_token(code_or_response)
        token_data = self.token_to_cache(token)
        self.token_store.save(token_data)
        print(f"Token stored to {self.token_store.path}")
        return self.credentials_from_cache(token_data)

    def run_interactive_flow(
        self,
        prompt: Callable[[str], str] | None = None,
        open_browser: bool = False,
    ) -> GoogleCredentials:
        """Authorize interactively on the terminal.

        Prints the authorization URL, then blocks on ``prompt`` until the
        operator pastes the code. The wait has no timeout.

        Args:
            prompt: Line reader, ``input`` by default.
            open_browser: Also open the URL in the default browser.

        Returns:
            Credentials for the newly authorized token.
        """
        url = self.get_authorization_url()
        print(f"Authorize this app by visiting this url: {url}")

        if open_browser:
            webbrowser.open(url)

        read_line = prompt or input
        code = read_line("Enter the code from that page here: ")
        return self.fetch_credentials(code)


def authorize(
    descriptor: ClientDescriptor,
    config: TransferConfig,
    prompt: Callable[[str], str] | None = None,
    open_browser: bool = False,
) -> GoogleCredentials:
    """Return authorized Credentials, prompting only when no token is cached.

    Args:
        descriptor: OAuth client credentials.
        config: Run configuration (token path, scopes).
        prompt: Line reader used for the authorization code.
        open_browser: Open the authorization URL in a browser.

    Returns:
        google-auth Credentials ready for ``googleapiclient``.
    """
    auth = GoogleOAuth(descriptor, TokenStore(config.token_path), config.scopes)

    creds = auth.load_cached_credentials()
    if creds is not None:
        return creds

    return auth.run_interactive_flow(prompt=prompt, open_browser=open_browser)
