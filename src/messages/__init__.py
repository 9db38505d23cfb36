"""Gmail message access and presentation.

Public API:
    - MailSession: Lists messages and fetches messages and attachments
    - MessagePresenter: Prints messages and saves attachments
    - Message, MessagePart: Structured message data
    - MailError: Base exception for mail failures
    - MailApiError: A Gmail API call failed
    - MessageNotFoundError: Message does not exist
    - AttachmentNotFoundError: Attachment does not exist
    - AttachmentDecodeError: Attachment data is not valid base64url
    - AttachmentSaveError: Attachment could not be written
"""

from .exceptions import (
    AttachmentDecodeError,
    AttachmentNotFoundError,
    AttachmentSaveError,
    MailApiError,
    MailError,
    MessageNotFoundError,
)
from .models import Message, MessagePart
from .presenter import MessagePresenter
from .session import DEFAULT_USER_ID, MailSession

__all__ = [
    "MailSession",
    "MessagePresenter",
    "Message",
    "MessagePart",
    "DEFAULT_USER_ID",
    "MailError",
    "MailApiError",
    "MessageNotFoundError",
    "AttachmentNotFoundError",
    "AttachmentDecodeError",
    "AttachmentSaveError",
]
