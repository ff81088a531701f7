"""Google Drive API client implementation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httplib2
from google.auth import exceptions as google_auth_exceptions
from google.oauth2.credentials import Credentials as GoogleCredentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from drive_transfer.drive.exceptions import (
    CONSENT_REQUIRED_MESSAGE,
    TransferError,
    is_consent_required,
)

logger = logging.getLogger(__name__)


@dataclass
class Permission:
    """Represents a Google Drive permission."""

    id: str
    email_address: str | None = None
    role: str | None = None
    pending_owner: bool = False


class DriveClient:
    """Google Drive API client for ownership transfers.

    Usage:
        client = DriveClient(credentials)
        permission = client.transfer_ownership(file_id, "new.owner@example.com")
    """

    def __init__(
        self,
        credentials: GoogleCredentials | None = None,
        service: Any = None,
    ) -> None:
        """Initialize Drive client.

        Args:
            credentials: Authorized OAuth credentials.
            service: Prebuilt Drive v3 service. Built from ``credentials``
                on first use when omitted.
        """
        if credentials is None and service is None:
            raise ValueError("DriveClient needs credentials or a service")
        self._credentials = credentials
        self._service = service

    def _get_service(self) -> Any:
        """Get or create Drive API service."""
        if self._service is None:
            self._service = build("drive", "v3", credentials=self._credentials)
        return self._service

    # =========================================================================
    # Permissions
    # =========================================================================

    def transfer_ownership(self, file_id: str, new_owner_email: str) -> Permission:
        """Make a user the pending owner of a file.

        Issues a single permissions.create request. Google emails the new
        owner, who must accept before ownership changes. Calling this twice
        issues two requests.

        Args:
            file_id: Drive file ID.
            new_owner_email: Email address of the new owner.

        Returns:
            The created permission.

        Raises:
            TransferError: If Drive rejects the request. ``consent_required``
                is set when the recipient has to consent first.
        """
        service = self._get_service()

        try:
            result = (
                service.permissions()
                .create(
                    fileId=file_id,
                    sendNotificationEmail=True,
                    transferOwnership=True,
                    body={
                        "role": "owner",
                        "type": "user",
                        "emailAddress": new_owner_email,
                        "pendingOwner": True,
                    },
                    fields="id",
                )
                .execute()
            )
        except (
            HttpError,
            httplib2.HttpLib2Error,
            google_auth_exceptions.GoogleAuthError,
            OSError,
        ) as e:
            if is_consent_required(e):
                logger.error(CONSENT_REQUIRED_MESSAGE)
                raise TransferError(
                    CONSENT_REQUIRED_MESSAGE,
                    file_id=file_id,
                    email=new_owner_email,
                    consent_required=True,
                ) from e

            message = getattr(e, "reason", None) or str(e)
            logger.error(f"Error transferring ownership: {message}")
            raise TransferError(
                f"Error transferring ownership: {message}",
                file_id=file_id,
                email=new_owner_email,
            ) from e

        permission = Permission(
            id=result["id"],
            email_address=new_owner_email,
            role="owner",
            pending_owner=True,
        )
        logger.info(
            f"Pending ownership set for {new_owner_email}. Permission ID: {permission.id}"
        )
        logger.info(f"An email has been sent to {new_owner_email} to accept ownership.")
        return permission


def transfer_ownership(
    credentials: GoogleCredentials,
    file_id: str,
    new_owner_email: str,
) -> str:
    """Make ``new_owner_email`` the pending owner of ``file_id``.

    Returns:
        The ID of the created permission.
    """
    return DriveClient(credentials).transfer_ownership(file_id, new_owner_email).id
