"""
Requester identity for blockblog.

An identity is either an ``Identity`` or ``None`` for anonymous
requesters. API clients authenticate with a signed bearer token:

    Authorization: Bearer <token from issue_token(user)>

Requests without a bearer header fall back to the Django session user.
"""
import logging
from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.core import signing

from .conf import blog_settings

logger = logging.getLogger(__name__)

TOKEN_SALT = "blockblog.identity"


@dataclass(frozen=True)
class Identity:
    id: int


def identity_for_user(user):
    """Return the Identity for a Django user, or None if anonymous."""
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    return Identity(user.pk)


def issue_token(user):
    """Create a signed bearer token for ``user``."""
    signer = signing.TimestampSigner(salt=TOKEN_SALT)
    return signer.sign(str(user.pk))


def identity_from_token(token):
    """
    Return the Identity in a bearer token, or None if it does not verify.

    The token only counts while its user exists and is active, the same
    rule session logins follow.
    """
    signer = signing.TimestampSigner(salt=TOKEN_SALT)
    try:
        value = signer.unsign(token, max_age=blog_settings.TOKEN_MAX_AGE)
    except signing.BadSignature:
        # SignatureExpired is a BadSignature too
        logger.info("Rejected bearer token")
        return None

    try:
        user_id = int(value)
    except ValueError:
        return None

    users = get_user_model()._default_manager.filter(pk=user_id, is_active=True)
    if not users.exists():
        logger.info("Rejected bearer token for inactive or missing user %s", user_id)
        return None
    return Identity(user_id)


def identity_from_request(request):
    """
    Resolve the requester of ``request``.

    A bearer token, when present, decides alone: an invalid token means
    anonymous even if a session exists.
    """
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer"):
        _scheme, _sep, token = header.partition(" ")
        token = token.strip()
        if not token:
            return None
        return identity_from_token(token)

    return identity_for_user(getattr(request, "user", None))


def bearer_header(user):
    """Return the Authorization header value for ``user``."""
    return f"Bearer {issue_token(user)}"
