"""MailSession: the Gmail API calls used by the quickstart."""

import logging
from typing import Optional

import httplib2
from google.auth.exceptions import RefreshError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import Resource, build
from googleapiclient.errors import HttpError
from googleapiclient.http import HttpRequest

from .body_parser import decode_base64_bytes
from .exceptions import (
    AttachmentDecodeError,
    AttachmentNotFoundError,
    MailApiError,
    MessageNotFoundError,
)
from .models import Message

logger = logging.getLogger(__name__)

DEFAULT_USER_ID = "me"


class MailSession:
    """Lists messages, fetches messages and fetches attachment bytes.

    The Gmail service is created lazily from whichever of service, http or
    credentials is given (in that order of preference).

    Example usage:
        session = MailSession(credentials=auth_flow.obtain_credentials())
        for message_id in session.list_message_ids():
            print(message_id)
    """

    def __init__(
        self,
        service: Optional[Resource] = None,
        http: Optional[httplib2.Http] = None,
        credentials: Optional[Credentials] = None,
    ):
        """Initialize the session.

        Args:
            service: Pre-built Gmail API service (for testing).
            http: Authorized HTTP client (see src.auth.authorized_http).
            credentials: Credentials to build the service with.
        """
        if service is None and http is None and credentials is None:
            raise ValueError("MailSession needs a service, an http client or credentials")
        self._service = service
        self._http = http
        self._credentials = credentials

    def _get_service(self) -> Resource:
        """Get Gmail API service, creating if needed."""
        if self._service is None:
            if self._http is not None:
                self._service = build("gmail", "v1", http=self._http, cache_discovery=False)
            else:
                self._service = build(
                    "gmail", "v1", credentials=self._credentials, cache_discovery=False
                )
        return self._service


    def _handle_http_error(
        self, error: HttpError, context: str, message_id: str = "", attachment_id: str = ""
    ) -> None:
        """Convert HttpError to a MailApiError.

        Raises:
            AttachmentNotFoundError: If the error is a 404 for an attachment.
            MessageNotFoundError: If the error is a 404 for a message.
            MailApiError: For other API errors.
        """
        status_code = error.resp.status
        reason = error.reason if hasattr(error, "reason") else str(error)
        logger.error("Gmail API error (status=%d): %s", status_code, reason)

        if status_code == 404 and attachment_id:
            raise AttachmentNotFoundError(attachment_id, message_id) from error
        if status_code == 404 and message_id:
            raise MessageNotFoundError(message_id) from error
        raise MailApiError(
            f"{context}: {reason}", status_code=status_code, reason=reason
        ) from error

    def _execute(
        self, request: HttpRequest, context: str, message_id: str = "", attachment_id: str = ""
    ) -> dict:
        """Execute an API request, converting every failure to a MailApiError.

        Besides HTTP error responses this covers a failed refresh of an
        expired access token and transport failures (DNS, connection, TLS),
        both of which surface from execute().
        """
        try:
            return request.execute()
        except HttpError as e:
            self._handle_http_error(e, context, message_id, attachment_id)
            raise  # Never reached, but satisfies type checker
        except RefreshError as e:
            logger.error("Access token refresh failed: %s", e)
            raise MailApiError(
                f"{context}: unable to refresh access token: {e}", reason=str(e)
            ) from e
        except (httplib2.HttpLib2Error, OSError) as e:
            logger.error("Gmail API request failed: %s", e)
            raise MailApiError(f"{context}: {e}", reason=str(e)) from e

    def list_message_ids(
        self, user: str = DEFAULT_USER_ID, max_results: Optional[int] = None
    ) -> list[str]:
        """List message IDs in the mailbox (first page only).

        Args:
            user: Mailbox owner ("me" for the authorized user)
            max_results: Page size. Defaults to the API default (100).

        Returns:
            Message IDs, newest first

        Raises:
            MailApiError: If the API call fails.
        """
        params = {"userId": user}
        if max_results is not None:
            params["maxResults"] = max_results
        request = self._get_service().users().messages().list(**params)
        results = self._execute(request, "Unable to retrieve message ids")

        messages = results.get("messages", [])
        logger.debug("Listed %d messages for %s", len(messages), user)
        return [m["id"] for m in messages]

    def get_message(self, user: str, message_id: str) -> Message:
        """Fetch a message with headers and body parts.

        Raises:
            MessageNotFoundError: If the message doesn't exist.
            MailApiError: If the API call fails.
        """
        request = (
            self._get_service()
            .users()
            .messages()
            .get(userId=user, id=message_id, format="full")
        )
        result = self._execute(request, "Unable to retrieve message", message_id=message_id)
        return Message.from_api_response(result)

    def get_attachment(self, user: str, message_id: str, attachment_id: str) -> bytes:
        """Fetch and decode an attachment body.

        Returns:
            Raw attachment bytes

        Raises:
            AttachmentNotFoundError: If the message or attachment doesn't exist.
            AttachmentDecodeError: If the returned data is not valid base64url.
            MailApiError: If the API call fails.
        """
        request = (
            self._get_service()
            .users()
            .messages()
            .attachments()
            .get(userId=user, messageId=message_id, id=attachment_id)
        )
        result = self._execute(
            request,
            "Unable to retrieve attachment",
            message_id=message_id,
            attachment_id=attachment_id,
        )

        data = result.get("data")
        if data is None:
            raise AttachmentDecodeError(attachment_id, "response has no data")
        try:
            return decode_base64_bytes(data)
        except ValueError as e:
            raise AttachmentDecodeError(attachment_id, str(e)) from e
