"""S3 catalog source backend implementing IFileStore."""

from __future__ import annotations

import boto3
from botocore.exceptions import ClientError

from ingester.core.exceptions import FileStoreError

S3_SCHEME = "s3://"


def parse_s3_url(url: str) -> tuple[str, str]:
    """Split ``s3://bucket/key`` into (bucket, key)."""
    if not url.startswith(S3_SCHEME):
        raise FileStoreError(f"Not an S3 URL: {url!r}")
    bucket, _, key = url[len(S3_SCHEME):].partition("/")
    if not bucket or not key:
        raise FileStoreError(f"S3 URL needs a bucket and a key: {url!r}")
    return bucket, key


class S3FileStore:
    """Reads catalog objects out of one S3 bucket."""

    def __init__(self, bucket: str, region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._bucket = bucket
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("s3", **kwargs)

    def read(self, path: str) -> bytes:
        try:
            resp = self._client.get_object(Bucket=self._bucket, Key=path)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "")
            raise FileStoreError(f"s3://{self._bucket}/{path}: {code or exc}") from exc
        return resp["Body"].read()
