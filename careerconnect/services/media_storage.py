"""
Media Storage - Cloudinary uploads.

Folders:
- student_profiles       - profile pictures (jpg/png/jpeg, max 500x500)
- student_resumes        - resumes submitted to the ATS scanner (PDF as image, others raw)
- proctoring_violations  - webcam frames flagged during a quiz

Every upload returns the Cloudinary secure_url.
"""
import logging
import time

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from careerconnect.core.config import get_settings
from careerconnect.utils.file_upload import get_file_extension

settings = get_settings()
logger = logging.getLogger(__name__)

PROFILE_FOLDER = "student_profiles"
RESUME_FOLDER = "student_resumes"
PROCTORING_FOLDER = "proctoring_violations"
PROFILE_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png"}


class UnsupportedMediaError(ValueError):
    """Raised for uploads whose file type the folder does not accept."""


class MediaUploadError(RuntimeError):
    """Raised when Cloudinary rejects or fails an upload."""


class MediaStorage:
    """
    Wrapper around cloudinary.uploader with the portal's folder conventions.
    """

    def __init__(self, cloud_name: str = None, api_key: str = None, api_secret: str = None):
        self.cloud_name = settings.cloudinary_cloud_name if cloud_name is None else cloud_name
        self.api_key = settings.cloudinary_api_key if api_key is None else api_key
        self.api_secret = settings.cloudinary_api_secret if api_secret is None else api_secret
        cloudinary.config(
            cloud_name=self.cloud_name,
            api_key=self.api_key,
            api_secret=self.api_secret,
            secure=True
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def _upload(self, file, **options) -> str:
        folder = options.get("folder")
        if not self.is_configured:
            logger.error("Cloudinary upload to %s skipped: credentials not configured", folder)
            raise MediaUploadError("Cloudinary is not configured")
        try:
            result = cloudinary.uploader.upload(file, **options)
        except (cloudinary.exceptions.Error, ValueError) as e:
            # the SDK reports bad or missing config as ValueError
            logger.error("Cloudinary upload to %s failed: %s", folder, e)
            raise MediaUploadError(str(e)) from e
        return result["secure_url"]

    def upload_profile_picture(self, content: bytes, filename: str) -> str:
        ext = get_file_extension(filename or "")
        if ext not in PROFILE_IMAGE_EXTENSIONS:
            raise UnsupportedMediaError(f"Unsupported image type '{ext}'. Allowed: jpg, jpeg, png")

        return self._upload(
            content,
            folder=PROFILE_FOLDER,
            allowed_formats=["jpg", "png", "jpeg"],
            transformation=[{"width": 500, "height": 500, "crop": "limit"}]
        )

    def upload_resume(self, content: bytes, filename: str) -> str:
        """
        PDFs go up as resource_type "image" so they stay viewable in the
        browser; DOCX and TXT resumes are stored as raw files.
        """
        ext = get_file_extension(filename or "")
        public_id = f"resume_{int(time.time() * 1000)}"
        if ext == ".pdf":
            return self._upload(
                content,
                folder=RESUME_FOLDER,
                resource_type="image",
                format="pdf",
                access_mode="public",
                type="upload",
                public_id=public_id
            )
        # raw public_ids keep their extension
        return self._upload(
            content,
            folder=RESUME_FOLDER,
            resource_type="raw",
            access_mode="public",
            type="upload",
            public_id=public_id + ext
        )

    def upload_snapshot(self, image_data_url: str) -> str:
        return self._upload(image_data_url, folder=PROCTORING_FOLDER)


# Singleton instance
_media_storage: MediaStorage = None


def get_media_storage() -> MediaStorage:
    """Get or create the storage wrapper. Also used as a FastAPI dependency."""
    global _media_storage
    if _media_storage is None:
        _media_storage = MediaStorage()
    return _media_storage
