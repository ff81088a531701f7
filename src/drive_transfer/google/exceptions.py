"""Google authentication exceptions."""

from drive_transfer.exceptions import DriveTransferError


class GoogleAuthError(DriveTransferError):
    """Base exception for Google authentication errors."""

    pass


class ConfigError(GoogleAuthError):
    """Raised when the OAuth client credentials file cannot be used."""

    pass


class CredentialsNotFoundError(ConfigError):
    """Raised when OAuth credentials file is not found."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Credentials file not found at {path}. "
            "Please download OAuth credentials from Google Cloud Console."
        )


class AuthError(GoogleAuthError):
    """Raised when no usable OAuth token can be obtained."""

    pass


class PersistenceError(GoogleAuthError):
    """Raised when the token cache cannot be written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Could not save token to {path}: {reason}")
