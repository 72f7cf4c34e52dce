"""StrideLog entry point."""

import sys

from dotenv import find_dotenv, load_dotenv

from .cli import run_cli


def main() -> None:
    """Main entry point."""
    load_dotenv(find_dotenv(usecwd=True))

    if len(sys.argv) > 1 and sys.argv[1] == "bot":
        from .telegram import run_telegram_bot

        run_telegram_bot()
        return

    run_cli()


if __name__ == "__main__":
    main()
