"""AWS Lambda API access."""

from publisher.remote.lambda_client import LambdaService, PublishResult

__all__ = ["LambdaService", "PublishResult"]
