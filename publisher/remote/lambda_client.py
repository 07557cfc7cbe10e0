"""Lambda API adapter: reads function configuration and publishes code.

Two boto3 clients share one session but carry different botocore
timeouts: a short read timeout for GetFunctionConfiguration and a long
one for UpdateFunctionCode, which uploads the whole archive in the
request body. botocore's automatic retries are disabled; a failed call
is terminal for the run. With a single attempt, a call takes at most
connect_timeout + read_timeout, 40s for the fetch with default settings.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from publisher.core.config import Settings
from publisher.errors import RemoteError
from publisher.resolver.types import LATEST_QUALIFIER, FunctionDescriptor

logger = logging.getLogger(__name__)

# Single attempt per call
_NO_RETRIES = {"total_max_attempts": 1, "mode": "standard"}


@dataclass(frozen=True)
class PublishResult:
    """The new immutable version created by UpdateFunctionCode."""

    function_arn: str
    version: str
    revision_id: Optional[str] = None
    code_sha256: str = ""
    code_size: int = 0

    @classmethod
    def from_response(cls, response: dict) -> "PublishResult":
        return cls(
            function_arn=response.get("FunctionArn", ""),
            version=response.get("Version", ""),
            revision_id=response.get("RevisionId"),
            code_sha256=response.get("CodeSha256", ""),
            code_size=response.get("CodeSize", 0),
        )

    def to_dict(self) -> dict:
        return {
            "function_arn": self.function_arn,
            "version": self.version,
            "revision_id": self.revision_id,
            "code_sha256": self.code_sha256,
            "code_size": self.code_size,
        }


def _client_config(settings: Settings, read_timeout: float) -> Config:
    return Config(
        connect_timeout=settings.connect_timeout_seconds,
        read_timeout=read_timeout,
        retries=_NO_RETRIES,
    )


class LambdaService:
    """Thin wrapper over the boto3 Lambda client.

    Translates botocore failures into RemoteError tagged with the API
    operation name.
    """

    def __init__(self, settings: Settings, session: Optional[Any] = None):
        try:
            if session is None:
                session = boto3.session.Session(
                    profile_name=settings.aws_profile,
                    region_name=settings.aws_region,
                )
            self._read_client = session.client(
                "lambda",
                endpoint_url=settings.endpoint_url,
                config=_client_config(settings, settings.fetch_timeout_seconds),
            )
            self._write_client = session.client(
                "lambda",
                endpoint_url=settings.endpoint_url,
                config=_client_config(settings, settings.update_timeout_seconds),
            )
        except BotoCoreError as exc:
            raise RemoteError("LoadDefaultConfig", exc) from exc

        if settings.endpoint_url:
            logger.info("Using Lambda endpoint override: %s", settings.endpoint_url)

    def get_function(self, identifier: str) -> FunctionDescriptor:
        """Fetch the $LATEST configuration of a function."""
        try:
            response = self._read_client.get_function_configuration(
                FunctionName=identifier,
                Qualifier=LATEST_QUALIFIER,
            )
        except (ClientError, BotoCoreError) as exc:
            raise RemoteError("GetFunctionConfiguration", exc) from exc

        descriptor = FunctionDescriptor.from_configuration(response)
        logger.info(
            "Fetched %s: runtime=%s package=%s architectures=%s revision=%s",
            descriptor.arn or identifier,
            descriptor.runtime or "-",
            descriptor.package_type,
            ",".join(descriptor.architectures),
            descriptor.revision_id,
        )
        return descriptor

    def publish_code(
        self,
        identifier: str,
        revision_id: Optional[str],
        zip_bytes: bytes,
    ) -> PublishResult:
        """Upload zip_bytes and publish a new version.

        revision_id makes the update fail if the function changed since
        it was read.
        """
        params: dict[str, Any] = {
            "FunctionName": identifier,
            "ZipFile": zip_bytes,
            "Publish": True,
        }
        if revision_id:
            params["RevisionId"] = revision_id

        logger.info("Uploading %d bytes to %s", len(zip_bytes), identifier)
        try:
            response = self._write_client.update_function_code(**params)
        except (ClientError, BotoCoreError) as exc:
            raise RemoteError("UpdateFunctionCode", exc) from exc

        return PublishResult.from_response(response)
