"""Unit tests for QuickstartRunner, QuickstartConfig and the CLI entry point."""

import io
import json
import os
from pathlib import Path
from unittest.mock import MagicMock, patch

import httplib2
import pytest
from google.auth.exceptions import RefreshError

import run_quickstart
from src.auth import AuthExchangeError, Token, TokenStore
from src.config import QuickstartConfig
from src.messages import (
    MailSession,
    Message,
    MessageNotFoundError,
    MessagePresenter,
)
from src.quickstart import QuickstartRunner

CLIENT_CONFIG = {
    "installed": {
        "client_id": "client-123.apps.googleusercontent.com",
        "auth_uri": "https://accounts.google.com/o/oauth2/auth",
        "token_uri": "https://oauth2.googleapis.com/token",
        "client_secret": "shh",
    }
}


class TestQuickstartConfig:
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = QuickstartConfig.from_env()
        assert config.client_secret_path == Path("client_secret.json")
        assert config.token_home is None
        assert config.token_filename == "gmail-python-quickstart.json"
        assert config.scopes == ["https://www.googleapis.com/auth/gmail.readonly"]
        assert config.user_id == "me"

    def test_from_env(self, tmp_path):
        env = {
            "GMAIL_CLIENT_SECRET_PATH": str(tmp_path / "secret.json"),
            "GMAIL_TOKEN_HOME": str(tmp_path),
            "GMAIL_TOKEN_FILENAME": "other.json",
            "GMAIL_SCOPES": "scope-a, scope-b,",
            "GMAIL_USER_ID": "someone@example.com",
        }
        with patch.dict(os.environ, env, clear=True):
            config = QuickstartConfig.from_env()
        assert config.client_secret_path == tmp_path / "secret.json"
        assert config.token_home == tmp_path
        assert config.token_filename == "other.json"
        assert config.scopes == ["scope-a", "scope-b"]
        assert config.user_id == "someone@example.com"

    def test_default_scopes_are_not_shared(self):
        first = QuickstartConfig()
        first.scopes.append("extra")
        assert QuickstartConfig().scopes == ["https://www.googleapis.com/auth/gmail.readonly"]


class TestQuickstartRunner:
    """Tests for QuickstartRunner.run() with injected collaborators."""

    @pytest.fixture
    def session(self, sample_message):
        session = MagicMock(spec=MailSession)
        session.list_message_ids.return_value = ["msg123", "msg456"]
        session.get_message.return_value = Message.from_api_response(sample_message)
        session.get_attachment.return_value = b"12345"
        return session

    @pytest.fixture
    def out(self):
        return io.StringIO()

    def test_shows_chosen_message_and_saves_attachment(self, session, out, tmp_path):
        prompt = MagicMock(return_value=" msg123\n")
        runner = QuickstartRunner(
            QuickstartConfig(),
            prompt=prompt,
            session=session,
            presenter=MessagePresenter(out=out, download_dir=tmp_path),
        )

        assert runner.run() == "msg123"

        prompt.assert_called_once_with("Enter message id: ")
        session.list_message_ids.assert_called_once_with("me")
        session.get_message.assert_called_once_with("me", "msg123")
        session.get_attachment.assert_called_once_with("me", "msg123", "att-1")
        assert (tmp_path / "report.bin").read_bytes() == b"12345"
        text = out.getvalue()
        assert text.startswith("Messages:\n- msg123\n- msg456\n")
        assert "Subject : Quarterly report" in text

    def test_empty_mailbox_skips_prompt(self, session, out):
        session.list_message_ids.return_value = []
        prompt = MagicMock()
        runner = QuickstartRunner(
            QuickstartConfig(), prompt=prompt, session=session, presenter=MessagePresenter(out=out)
        )

        assert runner.run() is None
        prompt.assert_not_called()
        assert out.getvalue() == "No messages found.\n"

    def test_unknown_message_id_propagates(self, session, out):
        session.get_message.side_effect = MessageNotFoundError("bogus")
        runner = QuickstartRunner(
            QuickstartConfig(),
            prompt=MagicMock(return_value="bogus"),
            session=session,
            presenter=MessagePresenter(out=out),
        )
        with pytest.raises(MessageNotFoundError):
            runner.run()

    def test_builds_auth_flow_from_config(self, tmp_path, out):
        secret = tmp_path / "client_secret.json"
        secret.write_text(json.dumps(CLIENT_CONFIG))
        store = TokenStore(home_dir=tmp_path, filename="t.json")
        store.save(store.resolve_cache_path(), Token(access_token="cached", refresh_token="r"))
        config = QuickstartConfig(
            client_secret_path=secret, token_home=tmp_path, token_filename="t.json"
        )
        runner = QuickstartRunner(config, prompt=MagicMock(), presenter=MessagePresenter(out=out))

        with patch("src.quickstart.runner.MailSession") as session_cls:
            session_cls.return_value.list_message_ids.return_value = []
            runner.run()

        http = session_cls.call_args.kwargs["http"]
        assert http.credentials.token == "cached"
        assert http.credentials.client_id == CLIENT_CONFIG["installed"]["client_id"]


class TestMain:
    """Tests for the run_quickstart.main() CLI boundary."""

    @pytest.fixture(autouse=True)
    def _no_side_effects(self):
        with patch("run_quickstart.load_dotenv"), patch("run_quickstart.configure_logging"):
            yield

    def test_success_exits_zero(self):
        with patch("run_quickstart.QuickstartRunner") as runner_cls:
            assert run_quickstart.main([]) == 0
        runner_cls.return_value.run.assert_called_once()

    def test_missing_client_secret_exits_nonzero(self, tmp_path, capsys):
        env = {"GMAIL_CLIENT_SECRET_PATH": str(tmp_path / "absent.json")}
        with patch.dict(os.environ, env, clear=True):
            assert run_quickstart.main([]) == 1
        assert "ERROR: Unable to use client secret file" in capsys.readouterr().err

    def test_auth_failure_exits_nonzero(self, capsys):
        with patch("run_quickstart.QuickstartRunner") as runner_cls:
            runner_cls.return_value.run.side_effect = AuthExchangeError("denied")
            assert run_quickstart.main([]) == 1
        assert "ERROR: denied" in capsys.readouterr().err

    def test_refresh_failure_exits_nonzero(self, capsys):
        with patch("run_quickstart.QuickstartRunner") as runner_cls:
            runner_cls.return_value.run.side_effect = RefreshError(
                "invalid_grant: Token has been expired or revoked."
            )
            assert run_quickstart.main([]) == 1
        assert "ERROR: invalid_grant" in capsys.readouterr().err

    def test_unreachable_api_exits_nonzero(self, capsys):
        service = MagicMock()
        service.users().messages().list().execute.side_effect = httplib2.ServerNotFoundError(
            "Unable to find the server at gmail.googleapis.com"
        )
        session = MailSession(service=service)
        with patch("run_quickstart.QuickstartRunner") as runner_cls:
            runner_cls.return_value.run.side_effect = session.list_message_ids
            assert run_quickstart.main([]) == 1
        assert "ERROR: Unable to retrieve message ids" in capsys.readouterr().err

    def test_interrupt_exits_nonzero(self, capsys):
        with patch("run_quickstart.QuickstartRunner") as runner_cls:
            runner_cls.return_value.run.side_effect = KeyboardInterrupt
            assert run_quickstart.main([]) == 1
        assert "aborted" in capsys.readouterr().err

    def test_log_level_flag(self):
        with patch("run_quickstart.QuickstartRunner"):
            run_quickstart.main(["--log-level", "DEBUG"])
        run_quickstart.configure_logging.assert_called_once_with(level_override="DEBUG")
