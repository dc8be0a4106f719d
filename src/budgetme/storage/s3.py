#!/usr/bin/env python3
"""
S3 Object Storage

Keeps the ledger as a single ``data.json`` object in an S3 (or S3-compatible)
bucket, so several machines can share one ledger.
"""

import json
import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core.config import S3StorageConfig
from ..core.json_utils import format_json, parse_json
from ..ledger.errors import CorruptLedgerError
from ..ledger.models import Ledger
from .provider import LEDGER_FILENAME, StorageProvider

logger = logging.getLogger(__name__)


class S3StorageProvider(StorageProvider):
    """
    Ledger stored as an object in an S3 bucket.

    Any failure to fetch (missing bucket, missing object, network or
    credential errors) is treated as "no prior ledger". An object that exists
    but does not parse raises CorruptLedgerError instead.
    """

    def __init__(
        self,
        bucket_name: str,
        region: str = "us-east-1",
        access_key: str = "",
        secret_key: str = "",
        client: Any = None,
    ):
        """
        Args:
            bucket_name: Bucket holding the ledger object
            region: AWS region of the bucket
            access_key: Static access key; empty uses boto3's default credential chain
            secret_key: Static secret key
            client: Pre-built S3 client (mainly for tests)
        """
        self.bucket_name = bucket_name
        self.region = region
        self.key = LEDGER_FILENAME

        if client is None:
            credentials = {}
            if access_key and secret_key:
                credentials = {"aws_access_key_id": access_key, "aws_secret_access_key": secret_key}
            client = boto3.client("s3", region_name=region, **credentials)
        self.client = client

    @classmethod
    def from_config(cls, config: S3StorageConfig) -> "S3StorageProvider":
        return cls(
            bucket_name=config.bucket_name,
            region=config.region,
            access_key=config.access_key,
            secret_key=config.secret_key,
        )

    def fetch(self) -> Ledger | None:
        try:
            response = self.client.get_object(Bucket=self.bucket_name, Key=self.key)
            body = response["Body"].read()
        except (ClientError, BotoCoreError) as e:
            logger.debug(f"No ledger fetched from {self.describe()}: {e}")
            return None

        try:
            data = parse_json(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CorruptLedgerError(f"Could not parse ledger object {self.describe()}: {e}") from e

        return Ledger.from_dict(data)

    def store(self, ledger: Ledger) -> None:
        self._ensure_bucket()
        body = format_json(ledger.to_dict()).encode("utf-8")
        self.client.put_object(Bucket=self.bucket_name, Key=self.key, Body=body, ContentType="application/json")
        logger.debug(f"Wrote ledger to {self.describe()}")

    def _ensure_bucket(self) -> None:
        """Create the bucket if it does not exist yet."""
        try:
            self.client.head_bucket(Bucket=self.bucket_name)
            return
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code not in ("404", "NoSuchBucket", "NotFound"):
                raise

        logger.info(f"Creating bucket {self.bucket_name} in {self.region}")
        params: dict[str, Any] = {"Bucket": self.bucket_name}
        # us-east-1 rejects an explicit location constraint
        if self.region != "us-east-1":
            params["CreateBucketConfiguration"] = {"LocationConstraint": self.region}
        self.client.create_bucket(**params)

    def describe(self) -> str:
        return f"s3://{self.bucket_name}/{self.key}"
