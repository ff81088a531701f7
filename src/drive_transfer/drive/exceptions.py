"""Google Drive transfer exceptions and error classification."""

from __future__ import annotations

import json

from googleapiclient.errors import HttpError

from drive_transfer.exceptions import DriveTransferError

# Drive v3 error reason returned when the recipient must accept ownership
CONSENT_REQUIRED_REASON = "consentRequiredForOwnershipTransfer"
CONSENT_REQUIRED_TEXT = "Consent is required"

CONSENT_REQUIRED_MESSAGE = (
    "Consent is required to transfer ownership. Please ensure the new owner "
    "accepts the file access or check Google Workspace restrictions."
)


class TransferError(DriveTransferError):
    """Raised when the pending-owner permission cannot be created."""

    def __init__(
        self,
        message: str,
        file_id: str,
        email: str,
        consent_required: bool = False,
    ):
        self.file_id = file_id
        self.email = email
        self.consent_required = consent_required
        super().__init__(message)


def _error_reasons(error: HttpError) -> list[str]:
    """Collect the ``reason`` fields of a Drive error response."""
    details = getattr(error, "error_details", None)
    if not isinstance(details, list):
        try:
            data = json.loads(error.content.decode("utf-8"))
            details = data["error"]["errors"]
        except (ValueError, KeyError, TypeError, AttributeError):
            details = []
    return [d.get("reason", "") for d in details if isinstance(d, dict)]


def is_consent_required(error: Exception) -> bool:
    """Check whether a Drive error means the recipient must consent first.

    Uses the structured error reason when the error is an HttpError that
    carries one, and falls back to matching the error text.
    """
    if isinstance(error, HttpError):
        if CONSENT_REQUIRED_REASON in _error_reasons(error):
            return True
        if CONSENT_REQUIRED_TEXT in (getattr(error, "reason", None) or ""):
            return True

    return CONSENT_REQUIRED_TEXT in str(error)
