"""
Access decisions for posts.

Visibility only ever widens who may read a post. Updating and deleting
are always reserved to the author. Every function here is pure: it looks
at the post snapshot and the requester it is given and nothing else, so
decisions are made fresh on each request.

``requester`` is an ``Identity`` or ``None`` for anonymous requests.
"""
from dataclasses import dataclass

from .exceptions import Forbidden, Unauthenticated


@dataclass(frozen=True)
class Decision:
    allowed: bool
    error: type = None

    def __bool__(self):
        return self.allowed

    def enforce(self, message=None):
        """Raise the denial error if this decision is a denial."""
        if not self.allowed:
            raise self.error(message)


ALLOW = Decision(True)


def deny(error):
    return Decision(False, error)


def is_owner(post, requester):
    return requester is not None and requester.id == post.author_id


def authorize_read(post, requester):
    if post.visibility == "public":
        return ALLOW
    if is_owner(post, requester):
        return ALLOW
    return deny(Forbidden)


def authorize_write(post, requester):
    """Decide an update or delete. Visibility plays no part."""
    if is_owner(post, requester):
        return ALLOW
    return deny(Forbidden)


def authorize_authenticated(requester):
    if requester is None:
        return deny(Unauthenticated)
    return ALLOW


def authorize_create(requester):
    return authorize_authenticated(requester)
