"""
JSON API views for django-blockblog.

Clients authenticate with ``Authorization: Bearer <token>`` (see
``blockblog.identity``), so the views are exempt from CSRF checks.
"""
import json

from django.http import JsonResponse, QueryDict
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from . import services
from .conf import blog_settings
from .content import blocks_to_editor
from .exceptions import BlogError, Forbidden, NotFound, ValidationError
from .forms import PostForm
from .identity import identity_from_request


def parse_body(request):
    """
    Return ``(data, files)`` for a create or update request.

    Django only parses POST bodies itself; PUT bodies (multipart or
    urlencoded) and JSON bodies are parsed here.
    """
    if request.content_type == "application/json":
        try:
            payload = json.loads(request.body or b"{}")
        except ValueError as exc:
            raise ValidationError("Malformed JSON body") from exc
        if not isinstance(payload, dict):
            raise ValidationError("Malformed JSON body")
        blocks = payload.get("blocks")
        if blocks is not None and not isinstance(blocks, str):
            payload["blocks"] = json.dumps(blocks)
        return payload, {}

    if request.method == "POST":
        return request.POST, request.FILES

    if request.content_type == "multipart/form-data":
        return request.parse_file_upload(request.META, request)

    return QueryDict(request.body, encoding=request.encoding), {}


def _post_form(request):
    data, files = parse_body(request)
    return PostForm(data, files).cleaned_or_raise()


@method_decorator(csrf_exempt, name="dispatch")
class ApiView(View):
    """Resolve the requester and render BlogErrors as JSON."""

    def dispatch(self, request, *args, **kwargs):
        self.requester = identity_from_request(request)
        try:
            return super().dispatch(request, *args, **kwargs)
        except BlogError as exc:
            return JsonResponse(exc.as_dict(), status=exc.status_code)

    def guarded_read(self, read, pk):
        """Run a read service, answering denials as 404 when configured."""
        try:
            return read(pk, self.requester)
        except Forbidden:
            if blog_settings.HIDE_PRIVATE_POSTS:
                raise NotFound() from None
            raise


class PublicPostListView(ApiView):
    """List public posts, newest first."""

    def get(self, request):
        posts = services.list_public_posts()
        return JsonResponse([post.to_dict() for post in posts], safe=False)


class MyPostListView(ApiView):
    """List the requester's own posts, public and private."""

    def get(self, request):
        posts = services.list_posts_by_author(self.requester)
        return JsonResponse([post.to_dict() for post in posts], safe=False)


class PostCreateView(ApiView):
    """Create a post from editor blocks and a featured image."""

    def post(self, request):
        data = _post_form(request)
        post = services.create_post(
            data["title"],
            data["blocks"],
            data["visibility"],
            data["featuredImage"],
            self.requester,
        )
        return JsonResponse(post.to_dict(), status=201)


class PostDetailView(ApiView):
    """Read, update or delete a single post."""

    def get(self, request, pk):
        post = self.guarded_read(services.read_post, pk)
        return JsonResponse(post.to_dict())

    def put(self, request, pk):
        data = _post_form(request)
        post = services.update_post(
            pk,
            data["title"],
            data["blocks"],
            data["visibility"],
            data["featuredImage"],
            self.requester,
        )
        return JsonResponse(post.to_dict())

    # HTML forms cannot send PUT
    post = put

    def delete(self, request, pk):
        services.delete_post(pk, self.requester)
        return JsonResponse({"message": "Blog deleted successfully"})


class PostEditorView(ApiView):
    """Return a post with its content as Editor.js blocks."""

    def get(self, request, pk):
        post, document = self.guarded_read(services.read_post_for_editing, pk)
        return JsonResponse({
            "post": post.to_dict(),
            "blocks": blocks_to_editor(document),
        })


class HealthView(View):
    def get(self, request):
        return JsonResponse({"status": "OK"})
