"""Google Drive ownership transfer.

Usage:
    from drive_transfer.drive import DriveClient

    client = DriveClient(credentials)
    permission = client.transfer_ownership(file_id, "new.owner@example.com")
    print(permission.id)

The new owner receives an email and must accept before the transfer takes
effect.
"""

from __future__ import annotations

from drive_transfer.drive.client import DriveClient, Permission, transfer_ownership
from drive_transfer.drive.exceptions import TransferError, is_consent_required

__all__ = [
    "DriveClient",
    "Permission",
    "TransferError",
    "is_consent_required",
    "transfer_ownership",
]
