"""Base exceptions for drive-transfer."""


class DriveTransferError(Exception):
    """Base exception for every failure the CLI reports."""

    pass


class UsageError(DriveTransferError):
    """Raised when the command-line arguments are missing or empty."""

    pass
