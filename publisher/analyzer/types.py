"""Types for the source safety analyzer."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class GoSourceFile:
    """Static declarations of a single .go file.

    doc: text of the package doc comment (comment markers stripped,
        directive lines like //go:build removed). Empty when absent.
    imports: unquoted import paths in declaration order.
    error_line: 1-based line of the first syntax error, or None.
    """

    path: Path
    package: str
    doc: str = ""
    imports: tuple[str, ...] = field(default_factory=tuple)
    error_line: Optional[int] = None

    @property
    def has_error(self) -> bool:
        return self.error_line is not None


@dataclass(frozen=True)
class SafetyVerdict:
    """Outcome of the pre-flight source checks.

    In relaxed mode neither check is evaluated and both fields are None.
    """

    strict: bool
    imports_expected_framework: Optional[bool] = None
    doc_mentions_name: Optional[bool] = None

    @property
    def is_safe(self) -> bool:
        if not self.strict:
            return True
        return bool(self.imports_expected_framework and self.doc_mentions_name)
