"""
Featured image hosting for django-blockblog.

A media host takes an uploaded image and returns the URL it can be
fetched from. Pick one with ``BLOCKBLOG['MEDIA_HOST']``:

- ``blockblog.media.StorageMediaHost`` (default) stores files in Django's
  default storage, named by the SHA256 of their content so the same
  image uploaded twice is stored once.
- ``blockblog.media.CloudinaryMediaHost`` uploads to Cloudinary using the
  credentials in ``BLOCKBLOG['CLOUDINARY']``. Requires the ``cloudinary``
  extra.
"""
import hashlib
import logging
import os

from django.core.files.storage import default_storage
from django.utils.module_loading import import_string

from .conf import blog_settings
from .exceptions import ValidationError

logger = logging.getLogger(__name__)


def validate_image(file_obj):
    """
    Check that an upload is an allowed image within the size limit.

    Raises ValidationError otherwise. The file position is rewound.
    """
    content_type = getattr(file_obj, "content_type", None) or ""
    if not content_type.startswith("image/"):
        raise ValidationError("Only image files are allowed")

    allowed = blog_settings.ALLOWED_IMAGE_TYPES
    if allowed and content_type not in allowed:
        raise ValidationError(f"Image type {content_type} is not allowed")

    max_size_mb = blog_settings.MEDIA_MAX_SIZE_MB
    if file_obj.size > max_size_mb * 1024 * 1024:
        raise ValidationError(f"Image size should be less than {max_size_mb}MB")

    from PIL import Image, UnidentifiedImageError

    try:
        with Image.open(file_obj) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise ValidationError("Upload a valid image") from exc
    finally:
        file_obj.seek(0)


class MediaHost:
    """Base class for image hosts."""

    def __init__(self, folder=None):
        self.folder = folder or blog_settings.MEDIA_FOLDER

    def upload(self, file_obj):
        """Store ``file_obj`` and return its public URL."""
        raise NotImplementedError


class StorageMediaHost(MediaHost):
    """Content-addressed storage on a Django storage backend."""

    def __init__(self, folder=None, storage=None):
        super().__init__(folder)
        self.storage = storage or default_storage

    def upload(self, file_obj):
        hasher = hashlib.sha256()
        for chunk in file_obj.chunks():
            hasher.update(chunk)
        content_hash = hasher.hexdigest()

        extension = os.path.splitext(file_obj.name or "")[1].lower()
        name = f"{self.folder}/{content_hash}{extension}"

        if self.storage.exists(name):
            logger.debug("Reusing stored image %s", name)
        else:
            file_obj.seek(0)
            name = self.storage.save(name, file_obj)
            logger.info("Stored image %s", name)

        return self.storage.url(name)


class CloudinaryMediaHost(MediaHost):
    """Upload images to Cloudinary."""

    def __init__(self, folder=None, credentials=None):
        super().__init__(folder)
        self.credentials = credentials or blog_settings.CLOUDINARY

    def upload(self, file_obj):
        import cloudinary.uploader

        file_obj.seek(0)
        result = cloudinary.uploader.upload(
            file_obj.read(),
            folder=self.folder,
            resource_type="image",
            **self.credentials,
        )
        logger.info("Uploaded image to Cloudinary: %s", result.get("public_id"))
        return result["secure_url"]


def get_media_host():
    """Return an instance of the configured media host."""
    return import_string(blog_settings.MEDIA_HOST)()
