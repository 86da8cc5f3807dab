"""S3-compatible object storage for uploads.

Works against AWS S3 (no endpoint), MinIO, Cloudflare R2 or Backblaze B2
(set ``S3_ENDPOINT``; path-style addressing is forced).
"""
import re
import uuid

import boto3
from botocore.config import Config
from fastapi import Request

from motorsports.config import Settings

MAX_FILE_NAME_LENGTH = 200


def sanitize_file_name(name: str) -> str:
    """Keep ``[A-Za-z0-9._-]``, replace the rest with ``_``, collapse runs."""
    safe = re.sub(r"[^a-zA-Z0-9._-]", "_", name)
    safe = re.sub(r"_{2,}", "_", safe)
    return safe[:MAX_FILE_NAME_LENGTH]


def file_key_prefix(entity_type: str, entity_id: str, category: str) -> str:
    return f"{entity_type}s/{entity_id}/{category}s/"


def build_file_key(entity_type: str, entity_id: str, category: str, file_name: str) -> str:
    """``<entityType>s/<entityId>/<category>s/<uuid>_<sanitised name>``"""
    return f"{file_key_prefix(entity_type, entity_id, category)}{uuid.uuid4()}_{sanitize_file_name(file_name)}"


class ObjectStorage:
    """Thin wrapper over a boto3 S3 client bound to one bucket."""

    def __init__(self, settings: Settings, client=None):
        self.bucket = settings.S3_BUCKET_NAME
        self.region = settings.S3_REGION
        self.public_base_url = settings.S3_PUBLIC_BASE_URL
        self.upload_expires_in = settings.PRESIGNED_URL_EXPIRES_IN
        self.download_expires_in = settings.DOWNLOAD_URL_EXPIRES_IN
        self._client = client or self._build_client(settings)

    @staticmethod
    def _build_client(settings: Settings):
        addressing = "path" if settings.S3_ENDPOINT else "auto"
        config = Config(
            signature_version="s3v4",
            s3={"addressing_style": addressing},
            retries={"max_attempts": 2},
        )
        return boto3.client(
            "s3",
            region_name=settings.S3_REGION,
            endpoint_url=settings.S3_ENDPOINT or None,
            aws_access_key_id=settings.S3_ACCESS_KEY_ID or None,
            aws_secret_access_key=settings.S3_SECRET_ACCESS_KEY or None,
            config=config,
        )

    def public_url(self, file_key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{file_key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{file_key}"

    def presign_put(self, file_key: str, content_type: str) -> str:
        return self._client.generate_presigned_url(
            "put_object",
            Params={"Bucket": self.bucket, "Key": file_key, "ContentType": content_type},
            ExpiresIn=self.upload_expires_in,
        )

    def presign_get(self, file_key: str) -> str:
        return self._client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self.bucket, "Key": file_key},
            ExpiresIn=self.download_expires_in,
        )

    def delete_object(self, file_key: str) -> None:
        self._client.delete_object(Bucket=self.bucket, Key=file_key)


def get_storage(request: Request) -> ObjectStorage:
    return request.app.state.storage
