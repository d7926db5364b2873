"""
Configuration settings for django-blockblog.

Override these in your Django settings.py:

    BLOCKBLOG = {
        'DEFAULT_VISIBILITY': 'public',
        'MEDIA_HOST': 'blockblog.media.CloudinaryMediaHost',
        'CLOUDINARY': {
            'cloud_name': '...',
            'api_key': '...',
            'api_secret': '...',
        },
        ...
    }
"""
from django.conf import settings

DEFAULTS = {
    # Visibility options for posts
    "VISIBILITY_CHOICES": [
        ("public", "Public"),
        ("private", "Private"),
    ],
    "DEFAULT_VISIBILITY": "public",

    # Answer denied reads of private posts with 404 instead of 403
    "HIDE_PRIVATE_POSTS": True,

    # Content
    "HEADING_LEVELS": [2, 3, 4],
    "EXCERPT_LENGTH": 150,

    # Media
    "MEDIA_HOST": "blockblog.media.StorageMediaHost",
    "MEDIA_FOLDER": "blog-images",
    "MEDIA_MAX_SIZE_MB": 5,
    "ALLOWED_IMAGE_TYPES": ["image/jpeg", "image/png", "image/gif", "image/webp"],
    "CLOUDINARY": {},

    # Bearer tokens, in seconds
    "TOKEN_MAX_AGE": 30 * 24 * 60 * 60,
}


class BlockBlogSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from blockblog.conf import blog_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid blockblog setting: {name}")

        user_settings = getattr(settings, "BLOCKBLOG", {})
        return user_settings.get(name, DEFAULTS[name])

    @property
    def visibility_values(self):
        """Return the bare visibility values, e.g. ["public", "private"]."""
        return [value for value, _label in self.VISIBILITY_CHOICES]


blog_settings = BlockBlogSettings()
