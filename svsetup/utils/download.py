"""
File downloads for server jars and plugins.

Downloads are idempotent by existence: a destination that is already on
disk is never fetched or verified again.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

import httpx

from ..constants import DOWNLOAD_CHUNK_SIZE
from ..exceptions import DownloadError
from .base_api import BaseHTTPClient

logger = logging.getLogger(__name__)


class ProgressCallback(Protocol):
    """Protocol for progress callback functions."""

    def __call__(self, downloaded: int, total: int) -> None:
        """Called with download progress information."""
        ...


class DownloadManager(BaseHTTPClient):
    """Handles file downloads with progress tracking."""

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        chunk_size: int = DOWNLOAD_CHUNK_SIZE,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.chunk_size = chunk_size
        if client is not None:
            self._client = client

    def fetch(
        self,
        url: str,
        destination: Path,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> bool:
        """
        Download url to destination unless destination already exists.

        The body is streamed into a temporary file next to the destination
        and renamed into place once complete, so an interrupted transfer
        never leaves a truncated file under the final name.

        Args:
            url: URL to download from
            destination: Local file path to save to
            progress_callback: Optional callback for progress updates

        Returns:
            True if the file was downloaded, False if it was already present

        Raises:
            DownloadError: If the transfer or the file write fails
        """
        destination = Path(destination)
        if destination.exists():
            logger.debug(f"{destination.name} already present, skipping download")
            return False

        tmp_path: Optional[Path] = None
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            with self.client.stream("GET", url) as response:
                response.raise_for_status()

                total_size = int(response.headers.get("content-length", 0) or 0)
                downloaded = 0

                fd, tmp_name = tempfile.mkstemp(
                    prefix=f".{destination.name}.", suffix=".part", dir=str(destination.parent)
                )
                tmp_path = Path(tmp_name)
                with os.fdopen(fd, "wb") as file:
                    for chunk in response.iter_bytes(chunk_size=self.chunk_size):
                        file.write(chunk)
                        downloaded += len(chunk)

                        if progress_callback and total_size > 0:
                            progress_callback(downloaded, total_size)

            os.replace(tmp_path, destination)
            tmp_path = None
            logger.info(f"Downloaded {url} to {destination}")
            return True

        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Failed to download {url}: {e}")
            raise DownloadError(f"Failed to download file from {url}", e) from e
        except OSError as e:
            logger.error(f"Failed to write file {destination}: {e}")
            raise DownloadError(f"Failed to write file {destination}", e) from e
        finally:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
