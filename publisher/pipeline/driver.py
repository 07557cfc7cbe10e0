"""Deployment pipeline driver.

Runs normalize -> fetch -> analyze -> resolve -> build -> pack -> publish
in sequence. Each step either returns a new value or raises a
PublishError; the first failure aborts the run and nothing is published.
No step is retried.

Packing happens inside the build context so the executable's temporary
directory is still alive, and is removed before the upload starts.
"""

import logging
import time
from pathlib import Path
from typing import Optional

from publisher.analyzer import analyze
from publisher.core.config import Settings, get_settings
from publisher.core.logging import bind_function_name, reset_function_name
from publisher.errors import InputError
from publisher.packaging import PackagedArchive, pack
from publisher.remote import LambdaService, PublishResult
from publisher.resolver import BuildTarget, resolve
from publisher.sandbox import Compiler, GoCompiler

logger = logging.getLogger(__name__)


def short_name(identifier: str) -> str:
    """Return the function name without any ARN or account prefix.

    "arn:aws:lambda:us-east-1:123456789012:function:orders" -> "orders"
    "123456789012:function:orders" -> "orders"
    "orders" -> "orders"
    """
    return identifier[identifier.rfind(":") + 1:]


def publish(
    identifier: str,
    relaxed_checks: bool = False,
    *,
    source_dir: Path = Path("."),
    service: Optional[LambdaService] = None,
    compiler: Optional[Compiler] = None,
    settings: Optional[Settings] = None,
) -> PublishResult:
    """Build the Go main package in source_dir and publish it to identifier.

    identifier may be a bare function name, a partial ARN, or a full ARN;
    it is passed to the Lambda API unchanged.

    Raises:
        PublishError: Subclass for whichever step failed.
    """
    if not identifier:
        raise InputError("name must be set")
    name = short_name(identifier)
    if not name:
        raise InputError(f"cannot derive a function name from {identifier!r}")

    settings = settings or get_settings()
    source_dir = Path(source_dir)

    token = bind_function_name(name)
    try:
        start = time.monotonic()
        if service is None:
            service = LambdaService(settings)
        if compiler is None:
            compiler = GoCompiler(settings.go_binary)

        descriptor = service.get_function(identifier)
        verdict = analyze(source_dir, name, strict=not relaxed_checks)
        logger.debug("Safety verdict: strict=%s safe=%s", verdict.strict, verdict.is_safe)
        target = resolve(descriptor)
        logger.debug("Build target: %s", target.to_dict())

        archive = _build_and_pack(compiler, source_dir, target)
        logger.debug("Archive: %s", archive.to_dict())

        result = service.publish_code(identifier, descriptor.revision_id, archive.data)
        logger.info(
            "Published %s version %s (%d bytes) in %.1fs",
            result.function_arn or identifier,
            result.version,
            result.code_size or len(archive.data),
            time.monotonic() - start,
        )
        return result
    finally:
        reset_function_name(token)


def _build_and_pack(
    compiler: Compiler,
    source_dir: Path,
    target: BuildTarget,
) -> PackagedArchive:
    with compiler.build(source_dir, target.compiler_arch) as binary_path:
        return pack(binary_path, target.binary_filename)
