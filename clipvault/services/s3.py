import boto3
from botocore.config import Config
from botocore.exceptions import ClientError
from typing import Optional

from clipvault.config import Settings


class S3Service:
    """Presigned URLs for the clip bucket (Wasabi or any S3 compatible endpoint).

    The service never moves bytes itself; clients PUT and GET directly
    against the bucket with the URLs issued here.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._client = None

    @property
    def configured(self) -> bool:
        s = self.settings
        return bool(s.s3_access_key_id and s.s3_secret_access_key and s.s3_bucket)

    def get_client(self):
        """Get S3 client with configured credentials."""
        if not self.configured:
            return None

        if self._client is None:
            self._client = boto3.client(
                "s3",
                endpoint_url=self.settings.s3_endpoint_url or None,
                aws_access_key_id=self.settings.s3_access_key_id,
                aws_secret_access_key=self.settings.s3_secret_access_key,
                region_name=self.settings.s3_region,
                config=Config(s3={"addressing_style": "path"}),
            )
        return self._client

    async def generate_presigned_upload_url(
        self,
        s3_key: str,
        content_type: str,
        content_length: int,
    ) -> Optional[str]:
        """Generate a presigned URL specifically for uploading."""
        client = self.get_client()
        if not client:
            return None

        try:
            return client.generate_presigned_url(
                "put_object",
                Params={
                    "Bucket": self.settings.s3_bucket,
                    "Key": s3_key,
                    "ContentType": content_type,
                    "ContentLength": content_length,
                },
                ExpiresIn=self.settings.upload_url_expiration,
            )
        except ClientError as e:
            print(f"Error generating presigned upload URL: {e}")
            return None

    async def generate_presigned_download_url(self, s3_key: str) -> Optional[str]:
        client = self.get_client()
        if not client:
            return None

        try:
            return client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.settings.s3_bucket, "Key": s3_key},
                ExpiresIn=self.settings.playback_url_expiration,
            )
        except ClientError as e:
            print(f"Error generating presigned URL: {e}")
            return None
