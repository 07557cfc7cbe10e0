"""Deployment pipeline.

Public API:
    publish(identifier, relaxed_checks) -> PublishResult
"""

from publisher.pipeline.driver import publish, short_name

__all__ = ["publish", "short_name"]
