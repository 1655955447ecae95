"""Command line entry point: validate the security schemes of a document."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from schemeguard.config import CONFIG_FILE, Settings
from schemeguard.document import validate_security_schemes
from schemeguard.errors import DocumentError, ValidationCancelled
from schemeguard.loader import fetch_openapi_documentation, load_openapi_documentation

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_DOCUMENT_ERROR = 2


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Validate the security schemes of an OpenAPI document."
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("file_path", nargs="?", help="Path to the OpenAPI document (JSON or YAML)")
    source.add_argument("--url", help="URL of the OpenAPI document")
    parser.add_argument("--config", default=CONFIG_FILE, help="Path to the settings file")
    parser.add_argument(
        "--stop-on-first-error",
        action="store_true",
        default=None,
        help="Stop at the first rejected scheme",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    settings = Settings.load(args.config)
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    stop_on_first_error = settings.stop_on_first_error
    if args.stop_on_first_error is not None:
        stop_on_first_error = args.stop_on_first_error

    try:
        if args.url:
            api_documentation = fetch_openapi_documentation(args.url, timeout=settings.fetch_timeout)
        else:
            api_documentation = load_openapi_documentation(args.file_path)
        report = validate_security_schemes(
            api_documentation,
            context=settings.new_context(),
            stop_on_first_error=stop_on_first_error,
        )
    except (DocumentError, ValidationCancelled) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_DOCUMENT_ERROR

    if not report.results:
        print("No security schemes defined")
    for name, error in report.results.items():
        if error is None:
            print(f"{name}: OK")
        else:
            print(f"{name}: {error}")
    return EXIT_OK if report.ok else EXIT_REJECTED


if __name__ == "__main__":
    sys.exit(main())
