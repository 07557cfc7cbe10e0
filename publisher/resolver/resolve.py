"""Decide the binary filename and GOARCH for a Lambda function.

Decision table (first match wins):

    runtime family    architecture  binary filename   GOARCH
    legacy-managed    x86_64        handler name      amd64
    legacy-managed    arm64         (rejected)
    custom-provided   x86_64        bootstrap         amd64
    custom-provided   arm64         bootstrap         arm64
    unsupported       any           (rejected)

Any other architecture is rejected for both supported families.
"""

import logging

from publisher.errors import ResolutionError
from publisher.resolver.types import (
    ARCHITECTURE_MAP,
    BOOTSTRAP_FILENAME,
    CUSTOM_PROVIDED_RUNTIMES,
    LEGACY_MANAGED_RUNTIMES,
    PACKAGE_TYPE_ZIP,
    BuildTarget,
    CompilerArch,
    FunctionDescriptor,
    RuntimeFamily,
)

logger = logging.getLogger(__name__)


def resolve(descriptor: FunctionDescriptor) -> BuildTarget:
    """Return the build target for a function, or raise ResolutionError."""
    if descriptor.package_type != PACKAGE_TYPE_ZIP:
        raise ResolutionError(
            f"unsupported package type {descriptor.package_type!r}, want {PACKAGE_TYPE_ZIP!r}"
        )

    if len(descriptor.architectures) != 1:
        raise ResolutionError(
            f"expected single supported architecture, got {list(descriptor.architectures)}"
        )
    architecture = descriptor.architectures[0]

    family = descriptor.family
    if family is RuntimeFamily.UNSUPPORTED:
        supported = ", ".join(sorted(LEGACY_MANAGED_RUNTIMES | CUSTOM_PROVIDED_RUNTIMES))
        raise ResolutionError(
            f"lambda configured with unsupported runtime {descriptor.runtime!r}, "
            f"want one of: {supported}"
        )

    arch = ARCHITECTURE_MAP.get(architecture)
    if arch is None:
        raise ResolutionError(f"unsupported architecture {architecture!r}")

    if family is RuntimeFamily.LEGACY_MANAGED:
        if arch is not CompilerArch.AMD64:
            raise ResolutionError(
                f"architecture {architecture!r} is not supported by runtime {descriptor.runtime!r}"
            )
        if not descriptor.handler:
            raise ResolutionError("lambda configuration has empty handler name")
        target = BuildTarget(binary_filename=descriptor.handler, compiler_arch=arch)
    else:
        target = BuildTarget(binary_filename=BOOTSTRAP_FILENAME, compiler_arch=arch)

    logger.info(
        "Resolved %s (%s, %s) -> %s for GOARCH=%s",
        descriptor.name or "function", descriptor.runtime, architecture,
        target.binary_filename, target.compiler_arch.value,
    )
    return target
