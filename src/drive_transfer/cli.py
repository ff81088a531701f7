"""CLI for drive-transfer - hand a Drive file over to another user.

Usage:
    drive-transfer <fileId> <newOwnerEmail>
    drive-transfer --credentials ~/credentials.json <fileId> <newOwnerEmail>
    drive-transfer --open-browser -v <fileId> <newOwnerEmail>
    drive-transfer -- -1AbcFileId <newOwnerEmail>   # file ID starting with "-"

On the first run there is no cached token: the authorization URL is
printed and the command waits for the code to be pasted on stdin. Later
runs reuse the token cached in token.json.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable

from drive_transfer.config import TransferConfig
from drive_transfer.drive import transfer_ownership
from drive_transfer.exceptions import DriveTransferError, UsageError
from drive_transfer.google import authorize, load_client_descriptor
from drive_transfer.logging_config import configure_logging

logger = logging.getLogger(__name__)

USAGE = "Usage: drive-transfer <fileId> <newOwnerEmail>"


def validate_request(file_id: str, new_owner_email: str) -> tuple[str, str]:
    """Check that both arguments are present.

    Raises:
        UsageError: If either argument is empty.
    """
    file_id = file_id.strip()
    new_owner_email = new_owner_email.strip()
    if not file_id or not new_owner_email:
        raise UsageError("File ID and new owner email are required")
    return file_id, new_owner_email


def run_transfer(
    file_id: str,
    new_owner_email: str,
    config: TransferConfig,
    prompt: Callable[[str], str] | None = None,
    open_browser: bool = False,
) -> str:
    """Authorize and create the pending-owner permission.

    Returns:
        The ID of the created permission.
    """
    descriptor = load_client_descriptor(config.credentials_path)
    credentials = authorize(descriptor, config, prompt=prompt, open_browser=open_browser)
    return transfer_ownership(credentials, file_id, new_owner_email)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad arguments as UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="drive-transfer",
        description="Transfer ownership of a Google Drive file to another user",
    )
    parser.add_argument(
        "positional",
        nargs="*",
        metavar="ARG",
        help="<fileId> <newOwnerEmail>",
    )
    parser.add_argument(
        "--credentials",
        type=str,
        default=None,
        help="Path to OAuth credentials.json (default: repo root)",
    )
    parser.add_argument(
        "--token",
        type=str,
        default=None,
        help="Path to the token cache (default: repo root token.json)",
    )
    parser.add_argument(
        "--open-browser",
        action="store_true",
        help="Open the authorization URL in a browser",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    try:
        args, unknown = parser.parse_known_args(sys.argv[1:] if argv is None else argv)
    except UsageError as e:
        logger.debug(f"Invalid arguments: {e}")
        print(USAGE)
        return 1

    if unknown or len(args.positional) != 2:
        print(USAGE)
        return 1

    configure_logging("DEBUG" if args.verbose else None)

    try:
        file_id, new_owner_email = validate_request(*args.positional)
        config = TransferConfig.from_env(
            credentials_path=args.credentials,
            token_path=args.token,
        )
        permission_id = run_transfer(
            file_id,
            new_owner_email,
            config,
            open_browser=args.open_browser,
        )
    except DriveTransferError as e:
        logger.debug(f"Error in main execution: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Unexpected error in main execution")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Pending ownership set for {new_owner_email}. Permission ID: {permission_id}")
    print(f"An email has been sent to {new_owner_email} to accept ownership.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
