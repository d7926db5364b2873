"""
Post model for django-blockblog.
"""
import html

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.html import strip_tags

from .. import access
from ..conf import blog_settings


class Post(models.Model):
    """
    Blog post written with the block editor.

    ``content`` holds the HTML produced by ``blockblog.content.encode``.
    The author is fixed at creation; only the author may change or
    delete the post, and private posts are readable by the author alone.
    """

    VISIBILITY_CHOICES = blog_settings.VISIBILITY_CHOICES

    title = models.CharField(max_length=255)
    content = models.TextField()
    featured_image = models.CharField(
        max_length=500,
        help_text="URL returned by the media host",
    )
    visibility = models.CharField(
        max_length=20,
        choices=VISIBILITY_CHOICES,
        default=blog_settings.DEFAULT_VISIBILITY,
    )

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blog_posts",
    )

    # Timestamps
    created_at = models.DateTimeField(db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["visibility", "-created_at"]),
            models.Index(fields=["author", "-created_at"]),
        ]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.created_at:
            self.created_at = timezone.now()
        super().save(*args, **kwargs)

    @property
    def is_public(self):
        return self.visibility == "public"

    @property
    def excerpt(self):
        """Return the content as plain text, truncated for cards."""
        text = html.unescape(strip_tags(self.content))
        length = blog_settings.EXCERPT_LENGTH
        if len(text) > length:
            return text[:length] + "..."
        return text

    def can_view(self, identity):
        """Check if ``identity`` (None for anonymous) may read this post."""
        return bool(access.authorize_read(self, identity))

    def can_edit(self, identity):
        return bool(access.authorize_write(self, identity))

    def to_dict(self):
        """Return the API representation of this post."""
        author = self.author
        return {
            "id": self.pk,
            "title": self.title,
            "content": self.content,
            "excerpt": self.excerpt,
            "featuredImage": self.featured_image,
            "visibility": self.visibility,
            "author": {
                "id": author.pk,
                "username": author.get_username(),
                "name": author.get_full_name() or author.get_username(),
                "email": getattr(author, "email", ""),
            },
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }
