"""Terminal output for messages and saving of attachments."""

import logging
import os
import sys
from pathlib import Path
from typing import Optional, TextIO

from .body_parser import decode_base64, decode_base64_bytes
from .exceptions import AttachmentDecodeError, AttachmentSaveError
from .models import Message, MessagePart
from .session import MailSession

logger = logging.getLogger(__name__)

SEPARATOR = "*********************************************"

# Attachment files are created owner read/write only
ATTACHMENT_FILE_MODE = 0o600


class MessagePresenter:
    """Prints Gmail messages and writes their attachments to disk.

    Attachments are written into download_dir under the filename the API
    reports; an existing file of the same name is overwritten.
    """

    def __init__(self, out: Optional[TextIO] = None, download_dir: Optional[Path] = None):
        """Initialize the presenter.

        Args:
            out: Text stream to print to. Defaults to sys.stdout.
            download_dir: Directory for attachment files. Defaults to the
                current working directory.
        """
        self._out = out or sys.stdout
        self._download_dir = download_dir or Path.cwd()

    def _print(self, *values: object) -> None:
        print(*values, file=self._out)

    def show_message_ids(self, message_ids: list[str]) -> None:
        if not message_ids:
            self._print("No messages found.")
            return
        self._print("Messages:")
        for message_id in message_ids:
            self._print(f"- {message_id}")

    def show_labels(self, label_ids: list[str]) -> None:
        if not label_ids:
            self._print("No labels found.")
            return
        self._print("Labels:")
        for label in label_ids:
            self._print(f"- {label}")

    def show_message(self, message: Message) -> None:
        """Print metadata, headers, labels, snippet and HTML body of a message."""
        self._print("Message Metadata and Headers:")
        self._print(SEPARATOR)
        self._print("Message Id:", message.id)
        self._print("Thread Id:", message.thread_id)
        self._print("History Id:", message.history_id)
        self._print("Internal Date:", message.internal_date)
        self._print("Size Estimate:", message.size_estimate)
        self._print()
        self._print()

        for name, value in message.headers:
            self._print(name, ":", value)
        self._print()
        self._print()

        self.show_labels(message.label_ids)
        self._print(SEPARATOR)
        self._print()
        self._print()

        self._print("Message snippet:")
        self._print(message.snippet)
        self._print()
        self._print()

        self._print("Body of message")
        for part in message.parts:
            if part.mime_type == "text/html" and part.data:
                self._print(decode_base64(part.data))
        self._print()
        self._print()

    def show_attachments(self, session: MailSession, user: str, message: Message) -> list[Path]:
        """Print attachment info and save each attachment to download_dir.

        Returns:
            Paths of the saved files

        Raises:
            MailApiError: If an attachment cannot be fetched or decoded.
            AttachmentSaveError: If an attachment cannot be written.
        """
        saved = []
        self._print("Attachments:")
        for part in message.attachments:
            self._print("Filename: ", part.filename)
            self._print("Id: ", part.attachment_id)
            self._print("Attachment size: ", part.size)
            data = self._attachment_bytes(session, user, message.id, part)
            saved.append(self.save_attachment(part.filename, data))
            self._print("Attachment downloaded")
        self._print(SEPARATOR)
        return saved

    def _attachment_bytes(
        self, session: MailSession, user: str, message_id: str, part: MessagePart
    ) -> bytes:
        """Return the bytes of an attachment part.

        Parts with an attachment ID are fetched; small attachments the API
        returns inline are decoded from the part itself.
        """
        if part.attachment_id:
            return session.get_attachment(user, message_id, part.attachment_id)
        if part.data is None:
            raise AttachmentDecodeError(part.filename, "part has neither data nor an attachment id")
        try:
            return decode_base64_bytes(part.data)
        except ValueError as e:
            raise AttachmentDecodeError(part.filename, str(e)) from e

    def save_attachment(self, filename: str, data: bytes) -> Path:
        """Write attachment bytes to download_dir, overwriting any existing file.

        Only the final path component of filename is used.

        Raises:
            AttachmentSaveError: If filename is empty or the file cannot be written.
        """
        name = Path(filename).name
        if not name or name in (".", ".."):
            raise AttachmentSaveError(filename, "attachment has no usable filename")

        path = self._download_dir / name
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, ATTACHMENT_FILE_MODE)
            try:
                attachment_file = os.fdopen(fd, "wb")
            except Exception:
                os.close(fd)
                raise
            with attachment_file:
                attachment_file.write(data)
        except OSError as e:
            raise AttachmentSaveError(filename, str(e), path=path) from e

        logger.debug("Saved %d bytes to %s", len(data), path)
        return path
