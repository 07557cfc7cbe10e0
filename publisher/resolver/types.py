"""Types for the runtime/architecture resolver.

FunctionDescriptor mirrors the subset of Lambda's GetFunctionConfiguration
response the pipeline depends on. BuildTarget is what the compiler and
packager need to produce an invocable archive.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional

# Zip-based deployment package type
PACKAGE_TYPE_ZIP = "Zip"

# Executable name required by custom (provided*) runtimes
BOOTSTRAP_FILENAME = "bootstrap"

# Qualifier of the mutable, unpublished function version
LATEST_QUALIFIER = "$LATEST"


class RuntimeFamily(StrEnum):
    """How the execution platform locates and runs the uploaded binary."""

    LEGACY_MANAGED = "legacy-managed"
    CUSTOM_PROVIDED = "custom-provided"
    UNSUPPORTED = "unsupported"


class CompilerArch(StrEnum):
    """GOARCH values the pipeline can target."""

    AMD64 = "amd64"
    ARM64 = "arm64"


# Lambda runtime identifiers grouped by family
LEGACY_MANAGED_RUNTIMES = {"go1.x"}
CUSTOM_PROVIDED_RUNTIMES = {"provided", "provided.al2", "provided.al2023"}

# Lambda architecture names -> GOARCH
ARCHITECTURE_MAP: dict[str, CompilerArch] = {
    "x86_64": CompilerArch.AMD64,
    "arm64": CompilerArch.ARM64,
}


def runtime_family(runtime: str) -> RuntimeFamily:
    if runtime in LEGACY_MANAGED_RUNTIMES:
        return RuntimeFamily.LEGACY_MANAGED
    if runtime in CUSTOM_PROVIDED_RUNTIMES:
        return RuntimeFamily.CUSTOM_PROVIDED
    return RuntimeFamily.UNSUPPORTED


@dataclass(frozen=True)
class FunctionDescriptor:
    """Read-only view of a Lambda function configuration.

    runtime is empty for image-based functions.
    handler only matters for the legacy go1.x runtime.
    revision_id is the optimistic-concurrency token passed back on update.
    """

    name: str
    package_type: str = PACKAGE_TYPE_ZIP
    runtime: str = ""
    architectures: tuple[str, ...] = field(default_factory=tuple)
    handler: str = ""
    revision_id: Optional[str] = None
    arn: str = ""
    version: str = LATEST_QUALIFIER

    @classmethod
    def from_configuration(cls, config: dict) -> "FunctionDescriptor":
        """Build a descriptor from a GetFunctionConfiguration response.

        Lambda omitted Architectures before arm64 support existed; an
        absent key means the x86_64 default. An explicitly empty list is
        kept as-is and rejected by the resolver.
        """
        architectures = config.get("Architectures")
        if architectures is None:
            architectures = ["x86_64"]
        return cls(
            name=config.get("FunctionName", ""),
            package_type=config.get("PackageType") or PACKAGE_TYPE_ZIP,
            runtime=config.get("Runtime") or "",
            architectures=tuple(architectures),
            handler=config.get("Handler") or "",
            revision_id=config.get("RevisionId"),
            arn=config.get("FunctionArn", ""),
            version=config.get("Version") or LATEST_QUALIFIER,
        )

    @property
    def family(self) -> RuntimeFamily:
        return runtime_family(self.runtime)


@dataclass(frozen=True)
class BuildTarget:
    """Binary name inside the archive and the GOARCH to compile for."""

    binary_filename: str
    compiler_arch: CompilerArch

    def to_dict(self) -> dict:
        return {
            "binary_filename": self.binary_filename,
            "compiler_arch": self.compiler_arch.value,
        }
