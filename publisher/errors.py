"""Error taxonomy for the publish pipeline.

Every failure surfaced to the user is a PublishError subclass. The stage
attribute names the pipeline step that failed so the CLI can report it
without string matching. None of these are retried.
"""

from typing import Optional


class PublishError(Exception):
    """Base class for all terminal pipeline failures."""

    stage = "publish"


class InputError(PublishError):
    """Raised when the function identifier is unusable."""

    stage = "input"


class AnalysisError(PublishError):
    """Raised when the Go source tree fails a pre-flight check."""

    stage = "analysis"


class ResolutionError(PublishError):
    """Raised when the function configuration has no supported build target."""

    stage = "resolution"


class BuildError(PublishError):
    """Raised when the Go toolchain cannot produce an executable."""

    stage = "build"


class PackagingError(PublishError):
    """Raised when the executable cannot be zipped."""

    stage = "packaging"


class RemoteError(PublishError):
    """Raised by Lambda API calls.

    Carries the API operation name and the original exception so the
    message reads like "GetFunctionConfiguration: <cause>".
    """

    stage = "remote"

    def __init__(self, operation: str, cause: Optional[BaseException] = None, message: str = ""):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation}: {message or cause}")
