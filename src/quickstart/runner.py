"""QuickstartRunner - authorizes, lists messages and shows the chosen one."""

import logging
from typing import Callable, Optional

from src.auth import AuthFlow, TokenStore, authorized_http, load_client_config
from src.config import QuickstartConfig
from src.messages import MailSession, MessagePresenter

logger = logging.getLogger(__name__)


class QuickstartRunner:
    """Runs the quickstart procedure once.

    Steps:
        1. Obtain credentials (cached token or interactive authorization)
        2. List message ids and print them
        3. Ask for a message id
        4. Print the message and save its attachments

    Every collaborator can be injected; missing ones are built from the
    config on first use. Errors propagate as AuthenticationError or
    MailError subclasses.

    Example:
        QuickstartRunner(QuickstartConfig.from_env()).run()
    """

    def __init__(
        self,
        config: QuickstartConfig,
        prompt: Callable[[str], str] = input,
        auth_flow: Optional[AuthFlow] = None,
        session: Optional[MailSession] = None,
        presenter: Optional[MessagePresenter] = None,
    ):
        self._config = config
        self._prompt = prompt
        self._auth_flow = auth_flow
        self._session = session
        self._presenter = presenter

    def _get_auth_flow(self) -> AuthFlow:
        if self._auth_flow is None:
            client_config = load_client_config(self._config.client_secret_path)
            store = TokenStore(
                home_dir=self._config.token_home,
                filename=self._config.token_filename,
            )
            self._auth_flow = AuthFlow(
                client_config,
                store,
                scopes=self._config.scopes,
                prompt=self._prompt,
            )
        return self._auth_flow

    def _get_session(self) -> MailSession:
        if self._session is None:
            credentials = self._get_auth_flow().obtain_credentials()
            self._session = MailSession(http=authorized_http(credentials))
        return self._session

    def _get_presenter(self) -> MessagePresenter:
        if self._presenter is None:
            self._presenter = MessagePresenter()
        return self._presenter

    def run(self) -> Optional[str]:
        """Execute the quickstart.

        Returns:
            The id of the message that was shown, or None if the mailbox
            is empty.
        """
        user = self._config.user_id
        session = self._get_session()
        presenter = self._get_presenter()

        message_ids = session.list_message_ids(user)
        presenter.show_message_ids(message_ids)
        if not message_ids:
            return None

        message_id = self._prompt("Enter message id: ").strip()
        logger.debug("Fetching message %s", message_id)

        message = session.get_message(user, message_id)
        presenter.show_message(message)
        saved = presenter.show_attachments(session, user, message)
        logger.info("Saved %d attachment(s) for message %s", len(saved), message.id)
        return message.id
