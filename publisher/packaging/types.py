"""Types for the packaging module."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PackagedArchive:
    """An in-memory zip holding exactly one executable entry.

    data is what gets uploaded as the function code; it is never
    written to local disk.
    """

    entry_name: str
    data: bytes
    uncompressed_size: int
    compressed_size: int
    duration_seconds: float = 0.0

    @property
    def compression_ratio(self) -> float:
        if self.uncompressed_size == 0:
            return 1.0
        return self.compressed_size / self.uncompressed_size

    def to_dict(self) -> dict:
        return {
            "entry_name": self.entry_name,
            "archive_bytes": len(self.data),
            "uncompressed_size": self.uncompressed_size,
            "compressed_size": self.compressed_size,
            "compression_ratio": round(self.compression_ratio, 2),
            "duration_seconds": round(self.duration_seconds, 3),
        }
