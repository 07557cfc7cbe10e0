"""Pre-flight safety checks on the Go source tree.

Catches the two most common deployment mistakes before any build or
upload happens:

1. The binary does not import the Lambda SDK's handler package, so the
   runtime would never receive invocations.
2. The source directory belongs to a different function: the package
   doc comment must mention the target function's short name.

Both checks can be bypassed with relaxed mode (the CLI's -f flag).
"""

import logging
import re
from pathlib import Path

from publisher.analyzer.go_source import parse_dir
from publisher.analyzer.types import GoSourceFile, SafetyVerdict
from publisher.errors import AnalysisError

logger = logging.getLogger(__name__)

# Import path of the aws-lambda-go handler glue
LAMBDA_SDK_IMPORT = "github.com/aws/aws-lambda-go/lambda"

MAIN_PACKAGE = "main"

BYPASS_HINT = "(run with -f to skip this check)"


def analyze(source_dir: Path, expected_short_name: str, strict: bool = True) -> SafetyVerdict:
    """Verify the source tree is a main package fit for this function.

    In relaxed mode only the file headers are parsed and only the
    presence of package main is checked.

    Raises:
        ValueError: If expected_short_name is empty (caller bug).
        AnalysisError: On unreadable or unparseable sources, a missing
            main package, or a failed strict check.
    """
    if not expected_short_name:
        raise ValueError("analyze called with an empty function name")

    try:
        files = parse_dir(Path(source_dir), imports_only=not strict)
    except OSError as exc:
        raise AnalysisError(f"cannot read Go sources in {source_dir}: {exc}") from exc

    for f in files:
        if f.has_error:
            raise AnalysisError(f"{f.path}:{f.error_line}: syntax error")

    main_files = [f for f in files if f.package == MAIN_PACKAGE]
    if not main_files:
        raise AnalysisError("cannot find main package")

    if not strict:
        logger.info("Relaxed checks: skipping doc and import verification")
        return SafetyVerdict(strict=False)

    verdict = inspect_main_package(main_files, expected_short_name)
    if not verdict.doc_mentions_name:
        raise AnalysisError(
            f'package docs does not mention name "{expected_short_name}" {BYPASS_HINT}'
        )
    if not verdict.imports_expected_framework:
        raise AnalysisError(
            f'package does not import "{LAMBDA_SDK_IMPORT}" dependency {BYPASS_HINT}'
        )

    logger.info(
        "Safety checks passed for %s (%d files in package main)",
        expected_short_name, len(main_files),
    )
    return verdict


def inspect_main_package(files: list[GoSourceFile], short_name: str) -> SafetyVerdict:
    """Compute the strict verdict for the files of package main.

    Never raises on a negative result; analyze() turns it into an error.
    """
    # ASCII word boundaries so "orders" does not match inside "orders_v2"
    name_re = re.compile(rf"\b{re.escape(short_name)}\b", re.ASCII)

    mentions_name = any(f.doc and name_re.search(f.doc) for f in files)
    imports_sdk = any(LAMBDA_SDK_IMPORT in f.imports for f in files)

    return SafetyVerdict(
        strict=True,
        imports_expected_framework=imports_sdk,
        doc_mentions_name=bool(mentions_name),
    )
