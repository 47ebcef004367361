"""
S3 uploads for user documents, resumes and backups.
"""
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import boto3
from boto3.s3.transfer import TransferConfig
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"
DEFAULT_BUCKET = "maxjoboffers-uploads"

CONTENT_TYPES = {
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
    '.gif': 'image/gif',
    '.pdf': 'application/pdf',
    '.doc': 'application/msword',
    '.docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    '.txt': 'text/plain',
    '.json': 'application/json',
}

# Files above the threshold go up as multipart uploads
TRANSFER_CONFIG = TransferConfig(
    multipart_threshold=8 * 1024 * 1024,
    multipart_chunksize=8 * 1024 * 1024,
    max_concurrency=4,
)

S3Error = (BotoCoreError, ClientError)


class StorageConfigError(RuntimeError):
    """Raised when S3 credentials or settings are missing."""


class _ProgressLogger:
    """boto3 transfer callback; called from transfer threads with byte deltas."""

    def __init__(self, key: str, total: int):
        self._key = key
        self._total = total
        self._seen = 0
        self._lock = threading.Lock()

    def __call__(self, bytes_amount: int) -> None:
        with self._lock:
            self._seen += bytes_amount
            logger.debug(f"Upload progress {self._key}: {self._seen} / {self._total}")


def get_content_type(file_path: str) -> str:
    return CONTENT_TYPES.get(Path(file_path).suffix.lower(), 'application/octet-stream')


def validate_upload(file_name: str, size: int, max_size_bytes: int, allowed_types: Iterable[str]) -> str:
    """Validate an in-memory upload; returns the lowercased extension.

    Raises:
        ValueError: if the upload is empty, too large or of a disallowed type
    """
    if size <= 0:
        raise ValueError(f"File is empty: {file_name}")
    if size > max_size_bytes:
        raise ValueError(f"File too large: {size} bytes (max: {max_size_bytes} bytes)")

    ext = Path(file_name or "").suffix.lower()
    allowed = list(allowed_types)
    if allowed and ext not in allowed:
        raise ValueError(f"File type not allowed: {ext or '(none)'} (allowed: {', '.join(allowed)})")
    return ext


class S3Uploader:
    """Uploads files and byte payloads to a single bucket.

    The boto3 client is created on first use so constructing an uploader
    (e.g. at app start-up) never touches the network.
    """

    def __init__(self, region: str = DEFAULT_REGION, access_key_id: Optional[str] = None,
                 secret_access_key: Optional[str] = None, bucket: str = DEFAULT_BUCKET,
                 client: Any = None):
        self.region = region
        self.bucket = bucket
        self._access_key_id = access_key_id
        self._secret_access_key = secret_access_key
        self._client = client

    @classmethod
    def from_env(cls) -> "S3Uploader":
        access_key_id = os.getenv("AWS_ACCESS_KEY_ID")
        secret_access_key = os.getenv("AWS_SECRET_ACCESS_KEY")
        if not access_key_id or not secret_access_key:
            raise StorageConfigError("AWS credentials not found in environment variables")

        return cls(
            region=os.getenv("AWS_REGION", DEFAULT_REGION),
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            bucket=os.getenv("AWS_S3_BUCKET", DEFAULT_BUCKET),
        )

    @classmethod
    def from_config(cls, storage_config) -> "S3Uploader":
        """Build from a StorageConfig; missing keys fall back to the default AWS credential chain."""
        return cls(
            region=storage_config.region,
            access_key_id=storage_config.access_key_id,
            secret_access_key=storage_config.secret_access_key,
            bucket=storage_config.bucket,
        )

    @property
    def client(self):
        if self._client is None:
            kwargs: Dict[str, Any] = {"region_name": self.region}
            if self._access_key_id and self._secret_access_key:
                kwargs["aws_access_key_id"] = self._access_key_id
                kwargs["aws_secret_access_key"] = self._secret_access_key
            self._client = boto3.client("s3", **kwargs)
        return self._client

    get_content_type = staticmethod(get_content_type)

    def validate_file(self, file_path: str, max_size_bytes: int, allowed_types: Iterable[str]) -> bool:
        """Check a local file before upload.

        Raises:
            FileNotFoundError: if the file doesn't exist
            ValueError: if the file is too large or of a disallowed type
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        size = path.stat().st_size
        if size > max_size_bytes:
            raise ValueError(f"File too large: {size} bytes (max: {max_size_bytes} bytes)")

        ext = path.suffix.lower()
        allowed = list(allowed_types)
        if allowed and ext not in allowed:
            raise ValueError(f"File type not allowed: {ext} (allowed: {', '.join(allowed)})")
        return True

    def upload_file(self, file_path: str, key: str, content_type: Optional[str] = None) -> Dict[str, str]:
        """Upload a local file with a managed (multipart-capable) transfer."""
        size = os.path.getsize(file_path)
        extra_args = {"ContentType": content_type or get_content_type(file_path)}
        try:
            self.client.upload_file(
                file_path, self.bucket, key,
                ExtraArgs=extra_args,
                Config=TRANSFER_CONFIG,
                Callback=_ProgressLogger(key, size),
            )
        except S3Error as e:
            logger.error(f"Error uploading {file_path} to s3://{self.bucket}/{key}: {e}")
            raise

        logger.info(f"Uploaded {file_path} to s3://{self.bucket}/{key} ({size} bytes)")
        return {"bucket": self.bucket, "key": key, "url": self.object_url(key)}

    def upload_bytes(self, data: bytes, key: str, content_type: Optional[str] = None) -> Dict[str, str]:
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type or get_content_type(key),
            )
        except S3Error as e:
            logger.error(f"Error uploading {len(data)} bytes to s3://{self.bucket}/{key}: {e}")
            raise

        logger.info(f"Uploaded {len(data)} bytes to s3://{self.bucket}/{key}")
        return {"bucket": self.bucket, "key": key, "url": self.object_url(key)}

    def delete_object(self, key: str) -> None:
        self.client.delete_object(Bucket=self.bucket, Key=key)

    def object_url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"
