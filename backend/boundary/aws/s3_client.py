"""
S3 client for document bucket operations.

Stores, reads and deletes uploaded PDFs, switches their public readability
and issues public or presigned read URLs for them. Every call is bounded by
botocore connect/read timeouts and makes a single attempt; failures surface
as StoreUnavailable.

Dependencies: boto3
System role: Blob store backed by Amazon S3 (or any S3-compatible endpoint)
"""

import logging
from datetime import datetime, timedelta, timezone
from urllib.parse import quote

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from backend.boundary.errors import is_missing_object, translate_errors
from backend.configs.blob_storage import BlobStorageSettings
from backend.core.exceptions import NotFound

logger = logging.getLogger(__name__)

PUBLIC_READ_ACL = "public-read"
PRIVATE_ACL = "private"


class S3BlobStore:
    """S3 client for document bucket operations."""

    def __init__(
        self,
        bucket: str,
        region: str = "ap-southeast-2",
        public_base_url: str | None = None,
        endpoint_url: str | None = None,
        connect_timeout: float = 5.0,
        read_timeout: float = 30.0,
        s3_client=None,
    ) -> None:
        """
        Initialize S3 client for document bucket.

        Args:
            bucket: S3 bucket name for document storage
            region: AWS region for S3 bucket
            public_base_url: Prefix for public object URLs
            endpoint_url: Custom endpoint for S3-compatible stores
            connect_timeout: Socket connect timeout in seconds
            read_timeout: Socket read timeout in seconds
            s3_client: Pre-built boto3 client (tests)
        """
        self._bucket = bucket
        self._region = region
        self._public_base_url = (
            public_base_url or f"https://{bucket}.s3.{region}.amazonaws.com"
        ).rstrip("/")
        self._s3_client = s3_client or boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
            config=Config(
                connect_timeout=connect_timeout,
                read_timeout=read_timeout,
                retries={"total_max_attempts": 1, "mode": "standard"},
            ),
        )

    @classmethod
    def from_settings(cls, settings: BlobStorageSettings) -> "S3BlobStore":
        """Build a store from blob storage settings."""
        return cls(
            bucket=settings.bucket,
            region=settings.region,
            public_base_url=settings.resolved_public_base_url,
            endpoint_url=settings.endpoint_url,
            connect_timeout=settings.connect_timeout,
            read_timeout=settings.read_timeout,
        )

    @translate_errors("blob")
    def upload(
        self,
        blob_path: str,
        data: bytes,
        content_type: str,
        is_public: bool = False,
    ) -> None:
        """
        Upload bytes to the bucket.

        Args:
            blob_path: S3 object key
            data: File content
            content_type: MIME type stored with the object
            is_public: Store with a public-read ACL

        Raises:
            StoreUnavailable: If the put fails or times out
        """
        extra_args = {"ACL": PUBLIC_READ_ACL} if is_public else {}
        self._s3_client.put_object(
            Bucket=self._bucket,
            Key=blob_path,
            Body=data,
            ContentType=content_type,
            CacheControl="max-age=3600",
            **extra_args,
        )
        logger.info(
            "Blob uploaded",
            extra={"blob_path": blob_path, "size_bytes": len(data), "is_public": is_public},
        )

    @translate_errors("blob")
    def set_visibility(self, blob_path: str, is_public: bool) -> None:
        """
        Switch an object's ACL between public-read and private.

        The bucket must allow ACLs (object ownership other than
        BucketOwnerEnforced) and, for public-read, must not block public ACLs.

        Raises:
            StoreUnavailable: If the ACL update is refused, fails or times out
        """
        self._s3_client.put_object_acl(
            Bucket=self._bucket,
            Key=blob_path,
            ACL=PUBLIC_READ_ACL if is_public else PRIVATE_ACL,
        )
        logger.info("Blob visibility set", extra={"blob_path": blob_path, "is_public": is_public})

    @translate_errors("blob")
    def download(self, blob_path: str) -> bytes:
        """
        Read an object's bytes.

        Raises:
            NotFound: If the key does not exist
            StoreUnavailable: If the read fails or times out
        """
        try:
            response = self._s3_client.get_object(Bucket=self._bucket, Key=blob_path)
        except ClientError as e:
            if is_missing_object(e):
                raise NotFound("Blob", blob_path) from e
            raise
        return response["Body"].read()

    @translate_errors("blob")
    def delete(self, blob_path: str) -> None:
        """
        Delete an object. S3 treats missing keys as already deleted.

        Raises:
            StoreUnavailable: If the delete fails or times out
        """
        self._s3_client.delete_object(Bucket=self._bucket, Key=blob_path)
        logger.info("Blob deleted", extra={"blob_path": blob_path})

    def public_url(self, blob_path: str) -> str:
        """
        Durable URL for an object served publicly.

        Args:
            blob_path: S3 object key

        Returns:
            str: Public URL containing the object key
        """
        return f"{self._public_base_url}/{quote(blob_path, safe='/')}"

    @translate_errors("blob")
    def signed_url(self, blob_path: str, expires_in: int = 3600) -> tuple[str, datetime]:
        """
        Generate presigned URL for downloading/viewing an S3 object.

        Args:
            blob_path: S3 object key (path in bucket)
            expires_in: URL expiry in seconds (default 1 hour)

        Returns:
            tuple[str, datetime]: (presigned_url, expires_at)

        Raises:
            StoreUnavailable: If presigned URL generation fails
        """
        presigned_url = self._s3_client.generate_presigned_url(
            ClientMethod="get_object",
            Params={
                "Bucket": self._bucket,
                "Key": blob_path,
            },
            ExpiresIn=expires_in,
        )
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        return presigned_url, expires_at
