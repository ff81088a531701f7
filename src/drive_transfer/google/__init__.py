"""Google OAuth authentication utilities."""

from drive_transfer.google.credentials import ClientDescriptor, load_client_descriptor
from drive_transfer.google.exceptions import (
    AuthError,
    ConfigError,
    CredentialsNotFoundError,
    GoogleAuthError,
    PersistenceError,
)
from drive_transfer.google.oauth import GoogleOAuth, authorize
from drive_transfer.google.token_store import TokenStore

__all__ = [
    "ClientDescriptor",
    "load_client_descriptor",
    "GoogleOAuth",
    "TokenStore",
    "authorize",
    "GoogleAuthError",
    "ConfigError",
    "CredentialsNotFoundError",
    "AuthError",
    "PersistenceError",
]
