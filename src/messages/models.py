"""Message data models for the messages module."""

from dataclasses import dataclass, field
from typing import Any, Optional

ATTACHMENT_MIME_TYPE = "application/octet-stream"


@dataclass
class MessagePart:
    """One body part of a Gmail message.

    Attributes:
        mime_type: MIME type of the part (e.g. "text/html")
        data: base64url encoded inline body, if the API returned one
        filename: Attachment filename ("" for non-attachments)
        attachment_id: ID for fetching the body separately, if any
        size: Body size in bytes as reported by the API
    """

    mime_type: str
    data: Optional[str] = None
    filename: str = ""
    attachment_id: Optional[str] = None
    size: int = 0

    @property
    def is_attachment(self) -> bool:
        return self.mime_type == ATTACHMENT_MIME_TYPE

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "MessagePart":
        """Create from a Gmail API MessagePart resource."""
        body = data.get("body", {})
        return cls(
            mime_type=data.get("mimeType", ""),
            data=body.get("data"),
            filename=data.get("filename", ""),
            attachment_id=body.get("attachmentId"),
            size=int(body.get("size", 0)),
        )


@dataclass
class Message:
    """A Gmail message as fetched with format='full'.

    Attributes:
        id: Gmail message ID
        thread_id: Gmail thread ID
        history_id: ID of the last history record that modified the message
        internal_date: Internal timestamp (milliseconds since epoch)
        size_estimate: Estimated size in bytes
        headers: Header (name, value) pairs in message order
        label_ids: Gmail label IDs
        snippet: Gmail's preview snippet
        parts: Top-level body parts. A single-part message is represented
            by its own payload.
    """

    id: str
    thread_id: str
    history_id: str = ""
    internal_date: int = 0
    size_estimate: int = 0
    headers: list[tuple[str, str]] = field(default_factory=list)
    label_ids: list[str] = field(default_factory=list)
    snippet: str = ""
    parts: list[MessagePart] = field(default_factory=list)

    @property
    def attachments(self) -> list[MessagePart]:
        return [part for part in self.parts if part.is_attachment]

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Message":
        """Create from a Gmail API Message resource."""
        payload = data.get("payload", {})
        headers = [(h["name"], h["value"]) for h in payload.get("headers", [])]

        raw_parts = payload.get("parts")
        if raw_parts:
            parts = [MessagePart.from_api_response(p) for p in raw_parts]
        elif payload:
            parts = [MessagePart.from_api_response(payload)]
        else:
            parts = []

        return cls(
            id=data["id"],
            thread_id=data.get("threadId", ""),
            history_id=str(data.get("historyId", "")),
            internal_date=int(data.get("internalDate", 0)),
            size_estimate=int(data.get("sizeEstimate", 0)),
            headers=headers,
            label_ids=data.get("labelIds", []),
            snippet=data.get("snippet", ""),
            parts=parts,
        )
