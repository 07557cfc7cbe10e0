"""Runtime/architecture resolver.

Public API:
    resolve(descriptor) -> BuildTarget
"""

from publisher.resolver.resolve import resolve
from publisher.resolver.types import (
    BOOTSTRAP_FILENAME,
    BuildTarget,
    CompilerArch,
    FunctionDescriptor,
    RuntimeFamily,
)

__all__ = [
    "resolve",
    "BOOTSTRAP_FILENAME",
    "BuildTarget",
    "CompilerArch",
    "FunctionDescriptor",
    "RuntimeFamily",
]
