"""Digital COO entry point."""

import asyncio
import logging
import sys

from dotenv import find_dotenv, load_dotenv

from .app import build_services, run_channels
from .config import Settings
from .logging import configure_logger

USAGE = "Usage: digital-coo [telegram|whatsapp|all]"


def main() -> None:
    """Main entry point."""
    load_dotenv(find_dotenv(usecwd=True))
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = Settings.from_env()
    json_logger = configure_logger(settings.log_dir)

    command = sys.argv[1] if len(sys.argv) > 1 else "all"
    if command not in ("telegram", "whatsapp", "all"):
        print(USAGE)
        sys.exit(2)

    if command != "whatsapp" and not settings.telegram_token_valid:
        print("❌ Error: TELEGRAM_BOT_TOKEN is missing or invalid")
        sys.exit(1)

    services = build_services(settings, json_logger=json_logger)
    asyncio.run(
        run_channels(
            services,
            telegram=command in ("telegram", "all"),
            whatsapp=command in ("whatsapp", "all"),
        )
    )


if __name__ == "__main__":
    main()
