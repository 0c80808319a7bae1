"""
Command-line interface for the login scraper.

By default runs one scrape (as if the endpoint had been POSTed) and prints
the JSON result; ``--serve`` starts the POST-only HTTP endpoint instead.
"""

import argparse
import logging
import sys
from pathlib import Path

from login_scraper.config import (
    DEFAULT_ENV_FILE,
    DEFAULT_LISTEN,
    DEFAULT_PORT,
    REQUEST_TIMEOUT,
    load_settings,
)
from login_scraper.errors import ConfigurationError
from login_scraper.logging_setup import log, setup_logging
from login_scraper.network.client import HttpClient
from login_scraper.pipeline import ScrapePipeline
from login_scraper.server import serve


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Log in to a CSRF-protected site and return the rows of "
                    "a protected page's table as JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "The .env file must define EMAIL, PASSWORD, LOGIN_URL and "
            "TEST_PAGE_URL.\n\n"
            "Examples:\n"
            "  python -m login_scraper\n"
            "  python -m login_scraper --env-file prod.env --output rows.json\n"
            "  python -m login_scraper --serve --port 8080\n"
        ),
    )
    parser.add_argument(
        "--env-file", default=DEFAULT_ENV_FILE,
        help=f"Path to the key=value settings file (default: {DEFAULT_ENV_FILE})",
    )
    parser.add_argument(
        "--serve", action="store_true",
        help="Start the POST-only HTTP endpoint instead of scraping once",
    )
    parser.add_argument(
        "--listen", default=DEFAULT_LISTEN,
        help=f"Address to bind with --serve (default: {DEFAULT_LISTEN})",
    )
    parser.add_argument(
        "--port", type=int, default=DEFAULT_PORT,
        help=f"Port to bind with --serve (default: {DEFAULT_PORT})",
    )
    parser.add_argument(
        "--verify-ssl", dest="verify_ssl", action="store_true", default=False,
        help="Verify upstream TLS certificates (off by default)",
    )
    parser.add_argument(
        "--timeout", type=float, default=REQUEST_TIMEOUT,
        help="Per-request timeout in seconds (default: none)",
    )
    parser.add_argument(
        "--output",
        help="Write the JSON result to this file instead of stdout",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "--log-file",
        help="Write detailed logs to this file (always at DEBUG level)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_file=args.log_file)

    if args.debug:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    try:
        settings = load_settings(args.env_file)
    except ConfigurationError as exc:
        log.critical("[ERR] %s", exc)
        sys.exit(2)
    log.debug("Settings: %s", settings.redacted())

    if not args.verify_ssl:
        log.warning("TLS certificate verification is DISABLED (use --verify-ssl to enable)")

    pipeline = ScrapePipeline(
        settings,
        HttpClient(verify_ssl=args.verify_ssl, timeout=args.timeout),
    )

    if args.serve:
        serve(pipeline, args.listen, args.port)
        return

    result = pipeline.handle("POST")
    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(result.body + "\n", encoding="utf-8")
        log.info("Result written to %s", out_path.resolve())
    else:
        sys.stdout.write(result.body + "\n")

    if not result.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
