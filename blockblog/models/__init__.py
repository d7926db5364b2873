"""
Models for django-blockblog.

    from blockblog.models import Post
"""
from .posts import Post

__all__ = [
    "Post",
]
