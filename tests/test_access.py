"""
Tests for post access decisions.
"""
from types import SimpleNamespace

import pytest

from blockblog.access import (
    authorize_create,
    authorize_read,
    authorize_write,
)
from blockblog.exceptions import Forbidden, Unauthenticated
from blockblog.identity import Identity

OWNER = Identity("A")
STRANGER = Identity("B")


def make_post(visibility, author_id="A"):
    return SimpleNamespace(visibility=visibility, author_id=author_id)


class TestAuthorizeRead:
    """Visibility gates reads."""

    @pytest.mark.parametrize("requester", [None, OWNER, STRANGER])
    def test_public_readable_by_anyone(self, requester):
        assert authorize_read(make_post("public"), requester).allowed

    def test_private_readable_by_owner(self):
        assert authorize_read(make_post("private"), OWNER).allowed

    @pytest.mark.parametrize("requester", [None, STRANGER])
    def test_private_denied_to_others(self, requester):
        decision = authorize_read(make_post("private"), requester)
        assert not decision.allowed
        assert decision.error is Forbidden


class TestAuthorizeWrite:
    """Only the author may update or delete, whatever the visibility."""

    @pytest.mark.parametrize("visibility", ["public", "private"])
    def test_owner_allowed(self, visibility):
        assert authorize_write(make_post(visibility), OWNER).allowed

    @pytest.mark.parametrize("visibility", ["public", "private"])
    @pytest.mark.parametrize("requester", [None, STRANGER])
    def test_others_denied(self, visibility, requester):
        decision = authorize_write(make_post(visibility), requester)
        assert not decision.allowed
        assert decision.error is Forbidden


class TestAuthorizeCreate:
    def test_identity_required(self):
        assert authorize_create(OWNER).allowed
        decision = authorize_create(None)
        assert not decision.allowed
        assert decision.error is Unauthenticated


class TestDecision:
    def test_enforce_raises_denial(self):
        with pytest.raises(Forbidden) as excinfo:
            authorize_write(make_post("public"), STRANGER).enforce("Nope")
        assert excinfo.value.message == "Nope"

    def test_enforce_allows(self):
        authorize_read(make_post("public"), None).enforce()

    def test_truthiness(self):
        assert authorize_read(make_post("public"), None)
        assert not authorize_read(make_post("private"), None)

    def test_decisions_follow_current_state(self):
        """A post made private after an allowed read is denied next time."""
        post = make_post("public")
        assert authorize_read(post, STRANGER).allowed
        post.visibility = "private"
        assert not authorize_read(post, STRANGER).allowed
