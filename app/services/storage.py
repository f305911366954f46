import logging
from urllib.parse import quote
import requests
from app.core.config import Settings
from app.core.errors import StorageError

logger = logging.getLogger("storage")


class StorageService:
    """
    Uploads print files to a Supabase Storage bucket through its REST API.
    """

    def __init__(self, settings: Settings):
        self.base_url = settings.SUPABASE_URL
        self.api_key = settings.SUPABASE_SERVICE_ROLE_KEY
        self.bucket = settings.STORAGE_BUCKET
        self.timeout = settings.HTTP_TIMEOUT

    def object_url(self, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/{self.bucket}/{quote(path)}"

    def upload_file(self, path: str, file_content: bytes, content_type: str = "application/pdf") -> str:
        """
        Upload raw bytes under the given key.

        Args:
            path: Object key inside the bucket
            file_content: File bytes
            content_type: MIME type stored with the object

        Returns:
            str: The object key that was written

        Raises:
            StorageError: If the request fails or storage rejects the upload
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "apikey": self.api_key,
            "Content-Type": content_type,
            "x-upsert": "false"
        }

        try:
            response = requests.post(
                self.object_url(path),
                headers=headers,
                data=file_content,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Storage request failed for {path}: {str(e)}")
            raise StorageError(str(e))

        if response.status_code not in (200, 201):
            message = self._error_message(response)
            logger.error(f"Failed to upload {path}: {response.status_code} - {message}")
            raise StorageError(message)

        logger.info(f"Uploaded {len(file_content)} bytes to {self.bucket}/{path}")
        return path

    @staticmethod
    def _error_message(response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text or f"Storage upload failed with status {response.status_code}"
        if isinstance(data, dict):
            return data.get("message") or data.get("error") or str(data)
        return str(data)
