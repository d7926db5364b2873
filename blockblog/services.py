"""
Post operations for django-blockblog.

These functions sit between the HTTP views and the database. Each takes
the requester explicitly (an ``Identity`` or ``None``), loads at most one
snapshot of the post, asks ``blockblog.access`` for a decision and raises
a ``blockblog.exceptions.BlogError`` subclass on failure. Concurrent
updates to the same post are not coordinated: the last save wins.
"""
import logging

from django.db import DatabaseError

from . import access
from .conf import blog_settings
from .content import decode, encode
from .exceptions import NotFound, UpstreamFailure, ValidationError
from .media import get_media_host, validate_image
from .models import Post

logger = logging.getLogger(__name__)


def _who(requester):
    return f"user {requester.id}" if requester else "anonymous"


def _validate(title, document, visibility):
    """Return the cleaned title, or raise ValidationError."""
    errors = {}
    title = (title or "").strip()
    if not title:
        errors["title"] = ["Title is required"]
    if not document:
        errors["content"] = ["Content is required"]
    if visibility not in blog_settings.visibility_values:
        errors["visibility"] = ["Visibility must be public or private"]
    if errors:
        raise ValidationError(errors=errors)
    return title


def _upload(image, media_host):
    media_host = media_host or get_media_host()
    try:
        return media_host.upload(image)
    except Exception as exc:
        logger.error("Image upload failed", exc_info=True)
        raise UpstreamFailure("Error uploading image") from exc


def _get(post_id):
    try:
        return Post.objects.select_related("author").get(pk=post_id)
    except (Post.DoesNotExist, ValueError, TypeError):
        raise NotFound()
    except DatabaseError as exc:
        logger.error("Failed to load post %s", post_id, exc_info=True)
        raise UpstreamFailure() from exc


def _save(post):
    try:
        post.save()
    except DatabaseError as exc:
        logger.error("Failed to save post %s", post.pk, exc_info=True)
        raise UpstreamFailure() from exc


def create_post(title, document, visibility, image, requester, media_host=None):
    """
    Create a post owned by ``requester``. The featured image is required.

    An empty ``visibility`` falls back to ``DEFAULT_VISIBILITY``.
    """
    access.authorize_create(requester).enforce()

    visibility = visibility or blog_settings.DEFAULT_VISIBILITY
    title = _validate(title, document, visibility)
    if not image:
        raise ValidationError("Featured image is required")
    validate_image(image)

    post = Post(
        title=title,
        content=encode(document),
        visibility=visibility,
        author_id=requester.id,
    )
    post.featured_image = _upload(image, media_host)
    _save(post)

    logger.info("Post %s created by user %s", post.pk, requester.id)
    return post


def update_post(post_id, title, document, visibility, image, requester, media_host=None):
    """
    Replace the title, content and visibility of a post.

    The featured image is only replaced when ``image`` is given. An empty
    ``visibility`` is a ValidationError, never a reset to the default.
    """
    post = _get(post_id)

    decision = access.authorize_write(post, requester)
    if not decision:
        logger.info("Denied update of post %s to %s", post.pk, _who(requester))
        decision.enforce()

    title = _validate(title, document, visibility)
    if image:
        validate_image(image)

    post.title = title
    post.content = encode(document)
    post.visibility = visibility
    if image:
        post.featured_image = _upload(image, media_host)
    _save(post)

    logger.info("Post %s updated by user %s", post.pk, requester.id)
    return post


def delete_post(post_id, requester):
    post = _get(post_id)

    decision = access.authorize_write(post, requester)
    if not decision:
        logger.info("Denied delete of post %s to %s", post.pk, _who(requester))
        decision.enforce()

    try:
        post.delete()
    except DatabaseError as exc:
        logger.error("Failed to delete post %s", post_id, exc_info=True)
        raise UpstreamFailure() from exc

    logger.info("Post %s deleted by user %s", post_id, requester.id)


def read_post(post_id, requester):
    """Return a post if ``requester`` may read it."""
    post = _get(post_id)

    decision = access.authorize_read(post, requester)
    if not decision:
        logger.info("Denied read of private post %s to %s", post.pk, _who(requester))
        decision.enforce("Not authorized to view this blog")
    return post


def read_post_for_editing(post_id, requester):
    """Return ``(post, document)`` with the content parsed back into blocks."""
    post = read_post(post_id, requester)
    return post, decode(post.content)


def list_public_posts():
    """Return public posts, newest first."""
    return (
        Post.objects.filter(visibility="public")
        .select_related("author")
        .order_by("-created_at")
    )


def list_posts_by_author(requester):
    """Return all posts of ``requester``, newest first."""
    access.authorize_authenticated(requester).enforce()
    return (
        Post.objects.filter(author_id=requester.id)
        .select_related("author")
        .order_by("-created_at")
    )
