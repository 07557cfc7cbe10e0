"""Configuration and logging shared by the CLI and the pipeline."""

from publisher.core.config import Settings, get_settings
from publisher.core.logging import configure_structlog

__all__ = ["Settings", "get_settings", "configure_structlog"]
