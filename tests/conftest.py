"""
Shared fixtures for django-blockblog tests.
"""
import io

import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from blockblog.content import Heading, ListBlock, Paragraph, Quote, encode
from blockblog.identity import Identity
from blockblog.media import MediaHost
from blockblog.models import Post

User = get_user_model()


def make_image(name="photo.png", content_type="image/png", color="red"):
    """Return an uploaded PNG file."""
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color).save(buffer, format="PNG")
    return SimpleUploadedFile(name, buffer.getvalue(), content_type=content_type)


class FakeMediaHost(MediaHost):
    """Media host that remembers uploads instead of storing them."""

    def __init__(self):
        super().__init__()
        self.uploads = []

    def upload(self, file_obj):
        self.uploads.append(file_obj.name)
        return f"https://media.example.com/{len(self.uploads)}/{file_obj.name}"


class FailingMediaHost(MediaHost):
    def upload(self, file_obj):
        raise RuntimeError("media host unavailable")


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username="testuser",
        email="test@example.com",
        password="testpass123",
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        username="other",
        email="other@example.com",
        password="pass",
    )


@pytest.fixture
def identity(user):
    return Identity(user.pk)


@pytest.fixture
def other_identity(other_user):
    return Identity(other_user.pk)


@pytest.fixture
def document():
    return [
        Heading(2, "Getting started"),
        Paragraph("Some <b>bold</b> and <i>italic</i> text."),
        ListBlock(False, ["first", "second"]),
        Quote("Stay hungry", "Someone"),
    ]


@pytest.fixture
def image():
    return make_image()


@pytest.fixture
def media_host():
    return FakeMediaHost()


@pytest.fixture
def post(db, user, document):
    """Create a public test post."""
    return Post.objects.create(
        title="Public Post",
        content=encode(document),
        featured_image="https://media.example.com/public.png",
        visibility="public",
        author=user,
    )


@pytest.fixture
def private_post(db, user):
    """Create a private test post."""
    return Post.objects.create(
        title="Private Post",
        content="<p>Secret</p>",
        featured_image="https://media.example.com/private.png",
        visibility="private",
        author=user,
    )
