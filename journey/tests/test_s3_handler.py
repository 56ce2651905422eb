import io

import boto3
import pytest
from botocore.exceptions import ClientError, EndpointConnectionError
from moto import mock_aws

from journey.errors import PromoteError, UploadError
from journey.utils.s3_handler import ObjectState, S3Handler

BUCKET = "journeys"


def _moto_handler(monkeypatch):
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    s3 = boto3.client("s3", region_name="us-east-1")
    s3.create_bucket(Bucket=BUCKET)
    return s3, S3Handler(client=s3)


class RaisingClient:
    def __init__(self, exc):
        self._exc = exc

    def head_object(self, **kwargs):
        raise self._exc

    def upload_fileobj(self, **kwargs):
        raise self._exc

    def copy_object(self, **kwargs):
        raise self._exc


@mock_aws
def test_probe_absent_and_present(monkeypatch):
    s3, handler = _moto_handler(monkeypatch)

    assert handler.probe(BUCKET, "demo/1.0.0/journey.json").state is ObjectState.ABSENT

    s3.put_object(Bucket=BUCKET, Key="demo/1.0.0/journey.json", Body=b"{}")
    assert handler.probe(BUCKET, "demo/1.0.0/journey.json").state is ObjectState.PRESENT


def test_probe_forbidden_is_indeterminate():
    denied = ClientError(
        {"Error": {"Code": "403", "Message": "Forbidden"}, "ResponseMetadata": {"HTTPStatusCode": 403}},
        "HeadObject",
    )
    handler = S3Handler(client=RaisingClient(denied))

    result = handler.probe(BUCKET, "demo/1.0.0/journey.json")
    assert result.state is ObjectState.INDETERMINATE
    assert result.error is denied


def test_probe_network_error_is_indeterminate():
    handler = S3Handler(client=RaisingClient(EndpointConnectionError(endpoint_url="https://s3.example")))
    assert handler.probe(BUCKET, "k").state is ObjectState.INDETERMINATE


def test_probe_not_found_code_is_absent():
    missing = ClientError({"Error": {"Code": "NoSuchKey", "Message": "nope"}}, "HeadObject")
    handler = S3Handler(client=RaisingClient(missing))
    assert handler.probe(BUCKET, "k").state is ObjectState.ABSENT


@mock_aws
def test_upload_fileobj_sets_content_type(monkeypatch):
    s3, handler = _moto_handler(monkeypatch)

    handler.upload_fileobj(BUCKET, "demo/1.0.0/main.css", io.BytesIO(b"body{}"), "text/css")

    obj = s3.get_object(Bucket=BUCKET, Key="demo/1.0.0/main.css")
    assert obj["Body"].read() == b"body{}"
    assert obj["ContentType"] == "text/css"


@mock_aws
def test_upload_to_missing_bucket_raises_upload_error(monkeypatch):
    _, handler = _moto_handler(monkeypatch)
    with pytest.raises(UploadError):
        handler.upload_fileobj("no-such-bucket", "k", io.BytesIO(b"x"), "text/plain")


@mock_aws
def test_copy_object(monkeypatch):
    s3, handler = _moto_handler(monkeypatch)
    s3.put_object(Bucket=BUCKET, Key="demo/1.0.0/journey-urls.json", Body=b'{"css":[],"js":[]}')

    handler.copy_object(BUCKET, "demo/1.0.0/journey-urls.json", "demo/latest/journey-urls.json")

    body = s3.get_object(Bucket=BUCKET, Key="demo/latest/journey-urls.json")["Body"].read()
    assert body == b'{"css":[],"js":[]}'


@mock_aws
def test_copy_missing_source_raises_promote_error(monkeypatch):
    _, handler = _moto_handler(monkeypatch)
    with pytest.raises(PromoteError):
        handler.copy_object(BUCKET, "demo/9.9.9/journey-urls.json", "demo/latest/journey-urls.json")


def test_endpoint_override(monkeypatch):
    monkeypatch.setenv("AWS_ENDPOINT_URL_S3", "http://localhost:4566")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    handler = S3Handler(region_name="eu-west-1")
    assert handler.s3.meta.endpoint_url == "http://localhost:4566"
    assert handler.s3.meta.region_name == "eu-west-1"
