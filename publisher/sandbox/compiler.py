"""Cross-compilation of the Go main package for Lambda.

The build runs `go build` as a child process targeting linux/<GOARCH>
with symbols stripped and build paths trimmed, so the output does not
depend on the machine it was built on.

The executable lives in a private temporary directory that exists only
for the duration of the `build()` context. Callers must finish using the
binary (packaging) before leaving the context. The directory is removed
whenever the context exits, including on Ctrl-C.

Compiler output is not captured: the child inherits this process's
stdout/stderr so diagnostics stream to the console as they happen.
"""

import logging
import os
import subprocess
import tempfile
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Protocol

from publisher.errors import BuildError
from publisher.resolver.types import CompilerArch

logger = logging.getLogger(__name__)

# Target OS for every Lambda runtime
TARGET_GOOS = "linux"

# Name of the executable inside the temporary build directory
OUTPUT_NAME = "main"

TEMP_DIR_PREFIX = "publish-go-lambda-"

# Seconds to wait for the compiler to exit after SIGTERM before SIGKILL
TERMINATE_GRACE_SECONDS = 5


class Compiler(Protocol):
    """Narrow build capability the pipeline depends on.

    Implementations yield a path to the built executable that stays valid
    until the context exits.
    """

    def build(self, source_dir: Path, arch: CompilerArch):
        """Return a context manager yielding the executable path."""


def build_command(output_path: Path, go_binary: str = "go") -> list[str]:
    """Return the go build argv for a stripped, path-independent binary."""
    return [
        go_binary, "build",
        "-ldflags=-s -w",
        "-trimpath",
        "-o", str(output_path),
    ]


def build_env(arch: CompilerArch, base: Optional[dict] = None) -> dict:
    """Return the child environment with GOOS/GOARCH set for the target."""
    env = dict(os.environ if base is None else base)
    env["GOOS"] = TARGET_GOOS
    env["GOARCH"] = arch.value
    return env


class GoCompiler:
    """Compiler implementation backed by the local Go toolchain."""

    def __init__(self, go_binary: str = "go"):
        self.go_binary = go_binary

    @contextmanager
    def build(self, source_dir: Path, arch: CompilerArch) -> Iterator[Path]:
        try:
            tmp = tempfile.TemporaryDirectory(prefix=TEMP_DIR_PREFIX)
        except OSError as exc:
            raise BuildError(f"cannot create temporary build directory: {exc}") from exc

        with tmp as tmp_dir:
            output_path = Path(tmp_dir) / OUTPUT_NAME
            self._run(Path(source_dir), arch, output_path)
            yield output_path

    def _run(self, source_dir: Path, arch: CompilerArch, output_path: Path) -> None:
        cmd = build_command(output_path, self.go_binary)
        logger.info(
            "Building %s for %s/%s: %s",
            source_dir, TARGET_GOOS, arch.value, " ".join(cmd),
        )
        start = time.monotonic()

        proc: Optional[subprocess.Popen] = None
        try:
            proc = subprocess.Popen(
                cmd,
                cwd=str(source_dir),
                env=build_env(arch),
            )
            returncode = proc.wait()
        except BaseException as exc:
            if proc is not None:
                _terminate(proc)
            elif isinstance(exc, OSError):
                raise BuildError(f"cannot run {self.go_binary}: {exc}") from exc
            raise

        duration = time.monotonic() - start
        if returncode != 0:
            raise BuildError(f"go build failed (exit status {returncode})")
        if not output_path.is_file():
            raise BuildError(f"go build produced no executable at {output_path}")

        logger.info(
            "Build complete in %.1fs (%d bytes)",
            duration, output_path.stat().st_size,
        )


def _terminate(proc: subprocess.Popen) -> None:
    """Stop a still-running compiler child, escalating to SIGKILL."""
    if proc.poll() is not None:
        return
    logger.warning("Interrupted; terminating compiler (pid %d)", proc.pid)
    proc.terminate()
    try:
        proc.wait(timeout=TERMINATE_GRACE_SECONDS)
    except subprocess.TimeoutExpired:
        proc.kill()
        proc.wait()
