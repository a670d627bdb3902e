"""Supabase Storage service for project file uploads."""
import time
import httpx
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote
from quickcut.config import settings
from quickcut.constants import PROJECT_FILES_BUCKET
from quickcut.utils.exceptions import ConfigurationError
from quickcut.utils.logger import logger


@dataclass
class UploadResult:
    """Result of a file upload operation."""
    success: bool
    url: Optional[str] = None
    path: Optional[str] = None
    error: Optional[str] = None


def _encode_path(storage_path: str) -> str:
    # Quote each segment but keep the slashes that define the folder structure
    return "/".join(quote(segment, safe="") for segment in storage_path.split("/"))


def build_storage_path(user_id: str, file_name: str, now_ms: Optional[int] = None) -> str:
    """Storage path for an upload: ``<user_id>/<epoch ms>.<ext>``."""
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    ext = file_name.rsplit(".", 1)[-1] if "." in file_name else "bin"
    return f"{user_id}/{now_ms}.{ext}"


class StorageService:
    """Service for uploading files to Supabase Storage using the REST API."""

    BUCKET_NAME = PROJECT_FILES_BUCKET

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.supabase_url = settings.supabase_url
        self.supabase_key = settings.supabase_service_role_key

        if not self.supabase_url or not self.supabase_key:
            raise ConfigurationError(
                "Supabase URL and service role key must be configured. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )

        self.supabase_url = self.supabase_url.rstrip("/")
        self.storage_url = f"{self.supabase_url}/storage/v1"
        self._transport = transport

    def public_url(self, storage_path: str) -> str:
        return f"{self.storage_url}/object/public/{self.BUCKET_NAME}/{_encode_path(storage_path)}"

    async def upload_bytes(
        self,
        content: bytes,
        storage_path: str,
        content_type: Optional[str] = None,
    ) -> UploadResult:
        """
        Upload file content to the project files bucket.

        Args:
            content: Raw file bytes
            storage_path: Path in the bucket (e.g. "{user_id}/{timestamp}.mp4")
            content_type: MIME type of the file

        Returns:
            UploadResult with success status and public URL
        """
        upload_url = f"{self.storage_url}/object/{self.BUCKET_NAME}/{_encode_path(storage_path)}"
        headers = {
            "apikey": self.supabase_key,
            "Authorization": f"Bearer {self.supabase_key}",
            "Content-Type": content_type or "application/octet-stream",
        }

        try:
            async with httpx.AsyncClient(timeout=120.0, transport=self._transport) as client:
                logger.info(f"[STORAGE] Uploading {len(content)} bytes to {storage_path}")
                response = await client.post(upload_url, headers=headers, content=content)
        except httpx.HTTPError as e:
            logger.error(f"Failed to upload file to {storage_path}: {e}", exc_info=True)
            return UploadResult(success=False, error=str(e))

        if response.status_code not in (200, 201):
            logger.error(
                f"[STORAGE] Storage upload failed: {response.status_code} - {response.text}"
            )
            return UploadResult(
                success=False,
                error=f"Upload failed: {response.status_code} - {response.text}",
            )

        return UploadResult(success=True, url=self.public_url(storage_path), path=storage_path)
