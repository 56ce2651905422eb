import os
import logging
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Optional

import boto3
from boto3.exceptions import Boto3Error
from botocore.exceptions import BotoCoreError, ClientError

from journey.errors import PromoteError, UploadError

logger = logging.getLogger(__name__)

# error codes head_object uses for "no such object"
NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


def _region() -> str:
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or "us-east-1"


def s3_client(region_name: Optional[str] = None):
    kwargs = {"region_name": region_name or _region()}
    ep = os.environ.get("AWS_ENDPOINT_URL_S3")
    if ep:
        kwargs["endpoint_url"] = ep
    return boto3.client("s3", **kwargs)


class ObjectState(Enum):
    PRESENT = "present"
    ABSENT = "absent"
    INDETERMINATE = "indeterminate"


@dataclass(frozen=True)
class ProbeResult:
    state: ObjectState
    error: Optional[Exception] = None


class S3Handler:
    """
    Thin wrapper over a boto3 s3 client. boto3 clients are thread-safe, so a
    single handler is shared by every upload worker.
    """

    def __init__(self, region_name: Optional[str] = None, client=None):
        self.s3 = client or s3_client(region_name)
        logger.debug("S3Handler initialized in region: %s", region_name or _region())

    def probe(self, bucket: str, key: str) -> ProbeResult:
        """Check for an object, telling a definitive not-found apart from any other failure."""
        try:
            self.s3.head_object(Bucket=bucket, Key=key)
            return ProbeResult(ObjectState.PRESENT)
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
            if code in NOT_FOUND_CODES or status == 404:
                return ProbeResult(ObjectState.ABSENT)
            logger.warning("head_object s3://%s/%s failed: %s", bucket, key, e)
            return ProbeResult(ObjectState.INDETERMINATE, e)
        except BotoCoreError as e:
            logger.warning("head_object s3://%s/%s failed: %s", bucket, key, e)
            return ProbeResult(ObjectState.INDETERMINATE, e)

    def upload_fileobj(self, bucket: str, key: str, fileobj: BinaryIO, content_type: str):
        """Stream a readable binary object to s3://bucket/key."""
        try:
            self.s3.upload_fileobj(
                Fileobj=fileobj,
                Bucket=bucket,
                Key=key,
                ExtraArgs={"ContentType": content_type},
            )
            logger.info("Successfully uploaded s3://%s/%s", bucket, key)
        except (ClientError, BotoCoreError, Boto3Error) as e:
            raise UploadError(f"Failed to upload {key} to bucket {bucket}: {e}") from e

    def copy_object(self, bucket: str, source_key: str, dest_key: str):
        try:
            response = self.s3.copy_object(
                Bucket=bucket,
                CopySource={"Bucket": bucket, "Key": source_key},
                Key=dest_key,
            )
            logger.info("Copied s3://%s/%s to %s", bucket, source_key, dest_key)
            return response
        except (ClientError, BotoCoreError) as e:
            raise PromoteError(f"Failed to copy {source_key} to {dest_key} in bucket {bucket}: {e}") from e
