"""Archive packager: wraps the compiled executable into a Lambda zip.

The archive always has exactly one entry:
- named after the resolved binary filename (handler or "bootstrap"),
  regardless of the executable's name on disk
- mode rwxrwxr-x
- deflated at maximum compression
"""

import io
import logging
import stat
import time
import zipfile
import zlib
from pathlib import Path

from publisher.errors import PackagingError
from publisher.packaging.types import PackagedArchive

logger = logging.getLogger(__name__)

# Permission bits forced on the archive entry
ENTRY_MODE = 0o775

COMPRESS_LEVEL = 9

# ZipInfo.create_system value for Unix, needed for mode bits to be honored
_UNIX_SYSTEM = 3

_MiB = 1024 * 1024


def pack(executable_path: Path, entry_name: str) -> PackagedArchive:
    """Zip a single executable into memory under entry_name.

    Raises:
        PackagingError: If the file cannot be read or compression fails.
    """
    if not entry_name:
        raise PackagingError("archive entry name must not be empty")

    executable_path = Path(executable_path)
    start = time.monotonic()
    try:
        # Timestamps before 1980 cannot be stored in zip; clamp instead of failing
        info = zipfile.ZipInfo.from_file(
            executable_path, arcname=entry_name, strict_timestamps=False,
        )
        info.compress_type = zipfile.ZIP_DEFLATED
        info.create_system = _UNIX_SYSTEM
        info.external_attr = (stat.S_IFREG | ENTRY_MODE) << 16

        content = executable_path.read_bytes()

        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w") as zf:
            zf.writestr(
                info,
                content,
                compress_type=zipfile.ZIP_DEFLATED,
                compresslevel=COMPRESS_LEVEL,
            )
            written = zf.infolist()[0]
            uncompressed, compressed = written.file_size, written.compress_size
    except (OSError, ValueError, zlib.error, zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
        raise PackagingError(f"cannot package {executable_path}: {exc}") from exc

    archive = PackagedArchive(
        entry_name=entry_name,
        data=buf.getvalue(),
        uncompressed_size=uncompressed,
        compressed_size=compressed,
        duration_seconds=time.monotonic() - start,
    )
    logger.info(
        "compressed from %.1fM to %.1fM in %dms, compression ratio: %.2f",
        archive.uncompressed_size / _MiB,
        archive.compressed_size / _MiB,
        round(archive.duration_seconds * 1000),
        archive.compression_ratio,
    )
    return archive
