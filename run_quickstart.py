"""CLI entry point for the Gmail quickstart."""

import argparse
import sys

from dotenv import load_dotenv
from google.auth.exceptions import RefreshError

from src.auth import AuthenticationError
from src.config import QuickstartConfig
from src.logging_config import configure_logging
from src.messages import MailError
from src.quickstart import QuickstartRunner


def main(argv: list[str] | None = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Authorize with Gmail, list messages and show one of them"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (overrides LOG_LEVEL env var)",
    )
    args = parser.parse_args(argv)
    configure_logging(level_override=args.log_level)

    runner = QuickstartRunner(QuickstartConfig.from_env())
    try:
        runner.run()
    except (AuthenticationError, MailError, RefreshError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except (EOFError, KeyboardInterrupt):
        print("ERROR: aborted by user", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
