"""publish-go-lambda command line entry point.

Usage: publish-go-lambda [-f] [-C DIR] [-v] aws-lambda-name
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

import structlog
from pydantic import ValidationError

from publisher.core.config import get_settings
from publisher.core.logging import bind_function_name, configure_structlog, reset_function_name
from publisher.errors import PublishError
from publisher.pipeline import publish, short_name

# Conventional exit status for termination by SIGINT
EXIT_INTERRUPTED = 130

_DESCRIPTION = (
    "Build Go source in the current directory and publish it as an "
    "existing AWS Lambda.\n\n"
    "aws-lambda-name is either a short AWS Lambda name, or a fully qualified ARN."
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="publish-go-lambda",
        description=_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "name",
        metavar="aws-lambda-name",
        help="short function name, partial ARN, or full ARN",
    )
    parser.add_argument(
        "-f", "--relaxed-checks",
        action="store_true",
        help="skip some safety checks",
    )
    parser.add_argument(
        "-C", "--source-dir",
        type=Path,
        default=Path("."),
        help="directory with the Go main package (default: current directory)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="enable debug logging",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as exc:
        print(f"configuration failed: {exc}", file=sys.stderr)
        return 1

    configure_structlog(
        debug=args.verbose or settings.debug,
        json_output=settings.log_json,
    )
    log = structlog.get_logger("publisher")

    token = bind_function_name(short_name(args.name))
    try:
        result = publish(
            args.name,
            args.relaxed_checks,
            source_dir=args.source_dir,
            settings=settings,
        )
    except PublishError as exc:
        log.debug("publish failed", stage=exc.stage, error=str(exc))
        print(f"{exc.stage} failed: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        log.warning("interrupted; nothing was published")
        return EXIT_INTERRUPTED
    else:
        log.info("published", **result.to_dict())
        return 0
    finally:
        reset_function_name(token)


if __name__ == "__main__":
    sys.exit(main())
