"""Source safety analyzer for Go Lambda sources.

Public API:
    analyze(source_dir, expected_short_name, strict) -> SafetyVerdict
"""

from publisher.analyzer.checks import LAMBDA_SDK_IMPORT, analyze
from publisher.analyzer.types import GoSourceFile, SafetyVerdict

__all__ = ["analyze", "GoSourceFile", "SafetyVerdict", "LAMBDA_SDK_IMPORT"]
