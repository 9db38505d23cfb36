"""Shared fixtures for the quickstart tests."""

import base64

import pytest


def _encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode()


@pytest.fixture
def sample_message():
    """A Gmail message (format='full') with text, HTML and one attachment."""
    return {
        "id": "msg123",
        "threadId": "thread456",
        "historyId": "98765",
        "internalDate": "1705312200000",
        "sizeEstimate": 2048,
        "snippet": "Please find the report attached",
        "labelIds": ["INBOX", "UNREAD"],
        "payload": {
            "mimeType": "multipart/mixed",
            "headers": [
                {"name": "From", "value": "John Doe <john@example.com>"},
                {"name": "To", "value": "jane@example.com"},
                {"name": "Subject", "value": "Quarterly report"},
            ],
            "body": {"size": 0},
            "parts": [
                {
                    "mimeType": "text/plain",
                    "filename": "",
                    "body": {"data": _encode(b"Plain body"), "size": 10},
                },
                {
                    "mimeType": "text/html",
                    "filename": "",
                    "body": {"data": _encode(b"<p>HTML body</p>"), "size": 16},
                },
                {
                    "mimeType": "application/octet-stream",
                    "filename": "report.bin",
                    "body": {"attachmentId": "att-1", "size": 5},
                },
            ],
        },
    }
