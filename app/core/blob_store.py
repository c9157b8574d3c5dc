"""Object storage access on top of Supabase Storage."""
from typing import Optional

from app.core.exceptions import UploadError
from app.core.logging_config import get_logger

logger = get_logger(__name__)


class BlobStore:
    """Uploads files into a bucket and resolves their public URLs.

    Uploads are single attempts with no retry or resume.
    """

    def __init__(self, client):
        self._client = client

    def upload(self, bucket: str, path: str, data: bytes, content_type: Optional[str] = None) -> str:
        file_options = {"cache-control": "3600", "upsert": "false"}
        if content_type:
            file_options["content-type"] = content_type
        try:
            self._client.storage.from_(bucket).upload(path, data, file_options)
        except Exception as e:
            logger.error(f"Upload of {bucket}/{path} failed: {e}")
            raise UploadError(
                f"Failed to upload {path}: {e}",
                error_code="UPLOAD_FAILED",
                details={"bucket": bucket, "path": path}
            )
        logger.info(f"Uploaded {bucket}/{path} ({len(data)} bytes)")
        return path

    def get_public_url(self, bucket: str, path: str) -> str:
        try:
            return self._client.storage.from_(bucket).get_public_url(path)
        except Exception as e:
            logger.error(f"Public URL lookup for {bucket}/{path} failed: {e}")
            raise UploadError(
                f"Failed to resolve public URL for {path}: {e}",
                error_code="PUBLIC_URL_FAILED",
                details={"bucket": bucket, "path": path}
            )
