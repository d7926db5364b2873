"""Django app configuration for blockblog."""
from django.apps import AppConfig


class BlockBlogConfig(AppConfig):
    """Configuration for the blockblog app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "blockblog"
    verbose_name = "Block Blog"
