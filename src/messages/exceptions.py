"""Exceptions for the messages module."""

from pathlib import Path
from typing import Optional


class MailError(Exception):
    """Base exception for all mail-related errors."""

    pass


class MailApiError(MailError):
    """Raised when a Gmail API call fails."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
    ):
        self.status_code = status_code
        self.reason = reason
        super().__init__(message)


class MessageNotFoundError(MailApiError):
    """Raised when a requested message does not exist."""

    def __init__(self, message_id: str):
        self.message_id = message_id
        super().__init__(f"Message '{message_id}' not found", status_code=404)


class AttachmentNotFoundError(MailApiError):
    """Raised when a requested attachment does not exist."""

    def __init__(self, attachment_id: str, message_id: str):
        self.attachment_id = attachment_id
        self.message_id = message_id
        super().__init__(
            f"Attachment '{attachment_id}' of message '{message_id}' not found",
            status_code=404,
        )


class AttachmentDecodeError(MailApiError):
    """Raised when attachment data returned by the API is not valid base64url."""

    def __init__(self, attachment_id: str, reason: str):
        self.attachment_id = attachment_id
        super().__init__(
            f"Attachment '{attachment_id}' could not be decoded: {reason}",
            reason=reason,
        )


class AttachmentSaveError(MailError):
    """Raised when attachment bytes cannot be written to disk."""

    def __init__(self, filename: str, reason: str, path: Optional[Path] = None):
        self.filename = filename
        self.reason = reason
        self.path = path
        super().__init__(f"Could not save attachment '{filename}': {reason}")
