"""Abstract contract for hosting catalog images."""

from abc import ABC, abstractmethod

from core.models.upload import BinaryPayload


class ImageUploader(ABC):
    """Contract for turning an image payload into a hosted URL.

    Implementations could be S3, Cloudinary, GCS, etc.
    The ingestion pipeline depends on this interface, not the implementation.
    """

    @abstractmethod
    def upload(
        self,
        payload: BinaryPayload | None,
        *,
        content_type: str | None = None,
        key: str | None = None,
    ) -> str:
        """Upload an image and return the URL it is served under.

        Args:
            payload: Image bytes or a readable binary stream
            content_type: Declared MIME type; sniffed from the payload when absent
            key: Object key; generated when absent

        Returns:
            Canonical URL of the hosted image

        Raises:
            MissingPayloadError: If the payload is empty or absent (no remote call made)
            UploadTimeoutError: If the provider does not answer in time
            UploadProviderError: For any other transport or provider failure
        """
