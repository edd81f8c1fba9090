"""
Azure Blob Storage hosting for finalized doctor videos.

Each video is stored once under ``videos/<video_id><ext>`` and overwritten on
re-finalize.
"""

import asyncio
import logging
import time
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError
from azure.core.pipeline.transport import RequestsTransport
from azure.storage.blob import BlobSasPermissions, BlobServiceClient, ContentSettings, generate_blob_sas

from ...application.ports.services.video_hosting_service import VideoHostingService
from ...core.config import AzureBlobSettings
from ...core.exceptions import BlobStorageError, ConfigurationError
from ...core.utils import run_blocking

logger = logging.getLogger("docintro")


class AzureVideoHostingService(VideoHostingService):
    """Azure Blob Storage service for finalized videos."""

    def __init__(self, settings: AzureBlobSettings, blob_prefix: str = "videos", extension: str = ".webm"):
        self.settings = settings
        self.blob_prefix = blob_prefix.strip("/")
        self.extension = extension
        self._client: Optional[BlobServiceClient] = None
        self._container_client = None
        # 30s connect, 300s read to allow for large uploads
        self._connection_timeout = 30
        self._read_timeout = 300
        self._max_retries = 3
        self._base_delay = 1.0

    @property
    def client(self) -> BlobServiceClient:
        """Get or create BlobServiceClient with connection timeouts."""
        if self._client is None:
            session = requests.Session()
            retry_strategy = Retry(
                total=3,
                connect=3,
                read=3,
                backoff_factor=0.8,
                status_forcelist=[429, 500, 502, 503, 504],
            )
            adapter = HTTPAdapter(max_retries=retry_strategy, pool_connections=10, pool_maxsize=10)
            session.mount("http://", adapter)
            session.mount("https://", adapter)

            transport = RequestsTransport(
                session=session,
                connection_timeout=self._connection_timeout,
                read_timeout=self._read_timeout,
            )

            if self.settings.connection_string:
                self._client = BlobServiceClient.from_connection_string(
                    self.settings.connection_string, transport=transport
                )
            elif self.settings.account_name and self.settings.account_key:
                self._client = BlobServiceClient(
                    account_url=f"https://{self.settings.account_name}.blob.core.windows.net",
                    credential=self.settings.account_key,
                    transport=transport,
                )
            else:
                raise ConfigurationError(
                    "Azure Blob Storage requires AZURE_BLOB_CONNECTION_STRING or "
                    "AZURE_BLOB_ACCOUNT_NAME and AZURE_BLOB_ACCOUNT_KEY"
                )
            logger.info(
                f"Azure Blob Storage client initialized for container {self.settings.container_name} "
                f"(connection_timeout={self._connection_timeout}s, read_timeout={self._read_timeout}s)"
            )

        return self._client

    @property
    def container_client(self):
        """Get or create container client."""
        if self._container_client is None:
            self._container_client = self.client.get_container_client(self.settings.container_name)
        return self._container_client

    async def ensure_container_exists(self) -> bool:
        """Ensure the blob container exists (non-blocking)."""
        try:
            await run_blocking(self.container_client.create_container)
            logger.info(f"Created blob container: {self.settings.container_name}")
            return True
        except ResourceExistsError:
            logger.info(f"Blob container already exists: {self.settings.container_name}")
            return True
        except AzureError as e:
            logger.error(f"Failed to create blob container: {e}")
            return False

    def blob_path(self, video_id: str) -> str:
        return f"{self.blob_prefix}/{video_id}{self.extension}"

    async def upload_video(self, file_path: Path, video_id: str, caption: Optional[str] = None) -> str:
        """Upload a finalized video with retry and return its playable URL."""
        blob_path = self.blob_path(video_id)
        file_size = Path(file_path).stat().st_size
        upload_start_time = time.time()

        logger.info(
            f"Starting blob upload: {blob_path}, size={file_size} bytes ({file_size / (1024 * 1024):.2f}MB)"
        )

        blob_client = self.client.get_blob_client(container=self.settings.container_name, blob=blob_path)
        metadata = {"video_id": video_id, "uploaded_at": datetime.utcnow().isoformat()}
        if caption:
            # Blob metadata values must be ASCII
            metadata["caption"] = quote(caption)

        def _upload_from_file():
            with open(file_path, "rb") as f:
                return blob_client.upload_blob(
                    f,
                    content_settings=ContentSettings(content_type="video/webm"),
                    metadata=metadata,
                    overwrite=True,
                )

        for attempt in range(self._max_retries):
            try:
                await run_blocking(_upload_from_file)
                break
            except AzureError as e:
                if self._is_transient(e) and attempt < self._max_retries - 1:
                    delay = self._base_delay * (2 ** attempt)
                    logger.warning(
                        f"Transient error during blob upload (attempt {attempt + 1}/{self._max_retries}): {e}. "
                        f"Retrying in {delay}s..."
                    )
                    await asyncio.sleep(delay)
                    continue
                logger.error(f"Failed to upload {blob_path} (attempt {attempt + 1}/{self._max_retries}): {e}")
                raise BlobStorageError(str(e), {"blob_path": blob_path}) from e
            except (OSError, requests.exceptions.RequestException) as e:
                if attempt < self._max_retries - 1:
                    delay = self._base_delay * (2 ** attempt)
                    logger.warning(f"Blob upload error (attempt {attempt + 1}/{self._max_retries}): {e}")
                    await asyncio.sleep(delay)
                    continue
                logger.error(f"Failed to upload {blob_path} after {self._max_retries} attempts: {e}", exc_info=True)
                raise BlobStorageError(str(e), {"blob_path": blob_path}) from e

        logger.info(
            f"Uploaded video to blob storage: {blob_path}, size={file_size} bytes, "
            f"duration={time.time() - upload_start_time:.2f}s"
        )
        return self._playable_url(blob_path, blob_client.url)

    async def delete_video(self, video_id: str) -> bool:
        """Delete the remote copy (non-blocking). Missing blobs return False."""
        blob_path = self.blob_path(video_id)
        blob_client = self.client.get_blob_client(container=self.settings.container_name, blob=blob_path)
        try:
            await run_blocking(blob_client.delete_blob)
            logger.info(f"Deleted video from blob storage: {blob_path}")
            return True
        except ResourceNotFoundError:
            logger.info(f"No blob to delete for video {video_id}")
            return False
        except AzureError as e:
            raise BlobStorageError(str(e), {"blob_path": blob_path}) from e

    async def get_video_url(self, video_id: str) -> Optional[str]:
        """Playable URL when the blob exists, else None."""
        blob_path = self.blob_path(video_id)
        blob_client = self.client.get_blob_client(container=self.settings.container_name, blob=blob_path)
        try:
            await run_blocking(blob_client.get_blob_properties)
        except ResourceNotFoundError:
            return None
        except AzureError as e:
            raise BlobStorageError(str(e), {"blob_path": blob_path}) from e
        return self._playable_url(blob_path, blob_client.url)

    def generate_signed_url(self, blob_path: str, expires_in_hours: Optional[int] = None) -> str:
        """Generate a read-only SAS URL for a blob."""
        if expires_in_hours is None:
            expires_in_hours = self.settings.default_expiry_hours

        account_key = self.settings.account_key
        account_name = self.settings.account_name
        shared_access_signature = None
        if self.settings.connection_string:
            # DefaultEndpointsProtocol=https;AccountName=xxx;AccountKey=xxx;EndpointSuffix=core.windows.net
            for part in self.settings.connection_string.split(";"):
                if part.startswith("AccountKey="):
                    account_key = part.split("=", 1)[1]
                elif part.startswith("AccountName=") and not account_name:
                    account_name = part.split("=", 1)[1]
                elif part.startswith("SharedAccessSignature="):
                    shared_access_signature = part.split("=", 1)[1].lstrip("?")

        blob_url = f"https://{account_name}.blob.core.windows.net/{self.settings.container_name}/{blob_path}"
        if not account_key:
            if shared_access_signature:
                return f"{blob_url}?{shared_access_signature}"
            raise ConfigurationError(
                "Azure Blob Storage account key is required for signed URLs. Set AZURE_BLOB_ACCOUNT_KEY "
                "or use a connection string with AccountKey or SharedAccessSignature."
            )
        if not account_name:
            raise ConfigurationError("Azure Blob Storage account name is required for signed URLs")

        sas_token = generate_blob_sas(
            account_name=account_name,
            container_name=self.settings.container_name,
            blob_name=blob_path,
            account_key=account_key,
            permission=BlobSasPermissions(read=True),
            expiry=datetime.utcnow() + timedelta(hours=expires_in_hours),
        )
        return f"{blob_url}?{sas_token}"

    def _playable_url(self, blob_path: str, blob_url: str) -> str:
        if self.settings.use_signed_urls:
            return self.generate_signed_url(blob_path)
        return blob_url

    @staticmethod
    def _is_transient(error: AzureError) -> bool:
        text = str(error).lower()
        return any(marker in text for marker in ("timeout", "connection", "500", "502", "503", "504"))
