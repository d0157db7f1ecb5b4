"""Download of the ESP-IDF project template archive."""
import tempfile
import zipfile
from typing import IO, Optional

import requests

from esp_create_project.core.config import CreatorConfig, get_config
from esp_create_project.core.errors import NetworkError
from esp_create_project.core.logger import get_logger

logger = get_logger(__name__)


class TemplateFetcher:
    """Fetches the template zip into a temporary file.

    A failed download is reported once; there is no retry.
    """

    def __init__(self, config: Optional[CreatorConfig] = None):
        self.config = config or get_config()

    def fetch(self, url: Optional[str] = None) -> IO[bytes]:
        """Download the template archive.

        Args:
            url: Archive URL (defaults to the configured template URL)

        Returns:
            Temporary binary file positioned at the start of the archive.
            The caller owns it and should close it.

        Raises:
            NetworkError: On connection failure, timeout, HTTP error status
                or a payload that is not a zip archive
        """
        url = url or self.config.template_url
        logger.debug(f"Downloading template from {url}")

        archive = tempfile.TemporaryFile()
        try:
            self._download(url, archive)
            archive.seek(0)
            if not zipfile.is_zipfile(archive):
                raise NetworkError(f"Downloaded template from {url} is not a zip archive")
            archive.seek(0)
        except Exception:
            archive.close()
            raise

        return archive

    def _download(self, url: str, archive: IO[bytes]) -> None:
        size = 0
        try:
            with requests.get(url, stream=True, timeout=self.config.download_timeout) as response:
                response.raise_for_status()
                for chunk in response.iter_content(chunk_size=self.config.chunk_size):
                    if chunk:
                        archive.write(chunk)
                        size += len(chunk)
        except requests.Timeout as e:
            raise NetworkError(
                f"Timed out after {self.config.download_timeout}s downloading template: {e}"
            ) from e
        except requests.RequestException as e:
            raise NetworkError(f"Cannot download the template: {e}") from e

        logger.debug(f"Downloaded {size} bytes")
