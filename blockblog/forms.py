"""
Request parsing for the post API.
"""
from django import forms

from .conf import blog_settings
from .content import blocks_from_editor
from .exceptions import ValidationError


class PostForm(forms.Form):
    """
    Multipart or urlencoded body of a create/update request.

    ``blocks`` is the JSON output of the Editor.js ``save()`` call. The
    emptiness rules (title, content, image) are checked by the services,
    so the fields here are only about shape. A missing ``visibility`` is
    left empty: create falls back to the default, update rejects it.
    """

    title = forms.CharField(max_length=255, required=False)
    visibility = forms.ChoiceField(
        choices=blog_settings.VISIBILITY_CHOICES,
        required=False,
    )
    blocks = forms.CharField(required=False, strip=False)
    featuredImage = forms.ImageField(required=False)

    def clean_blocks(self):
        raw = self.cleaned_data["blocks"]
        if not raw:
            return []
        try:
            return blocks_from_editor(raw)
        except ValidationError as exc:
            raise forms.ValidationError(exc.message) from exc

    def cleaned_or_raise(self):
        """Return cleaned data, or raise blockblog ValidationError."""
        if not self.is_valid():
            raise ValidationError(
                "Invalid blog data",
                errors={field: list(messages) for field, messages in self.errors.items()},
            )
        return self.cleaned_data
