"""
Django admin configuration for blockblog.
"""
from django.contrib import admin

from .models import Post


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = [
        "title_preview",
        "author",
        "visibility",
        "created_at",
    ]
    list_filter = ["visibility", "created_at"]
    search_fields = ["title", "content", "author__username"]
    raw_id_fields = ["author"]
    date_hierarchy = "created_at"
    readonly_fields = ["created_at", "updated_at"]

    fieldsets = (
        (None, {
            "fields": ("title", "content", "featured_image", "author")
        }),
        ("Visibility", {
            "fields": ("visibility",)
        }),
        ("Metadata", {
            "fields": ("created_at", "updated_at"),
            "classes": ("collapse",),
        }),
    )

    actions = ["make_public", "make_private"]

    def get_readonly_fields(self, request, obj=None):
        """The author is chosen once, when the post is added."""
        fields = list(super().get_readonly_fields(request, obj))
        if obj is not None:
            fields.append("author")
        return fields

    def title_preview(self, obj):
        """Truncated title for list display."""
        return obj.title[:60] + "..." if len(obj.title) > 60 else obj.title

    title_preview.short_description = "Title"

    @admin.action(description="Make selected posts public")
    def make_public(self, request, queryset):
        updated = queryset.update(visibility="public")
        self.message_user(request, f"{updated} post(s) made public.")

    @admin.action(description="Make selected posts private")
    def make_private(self, request, queryset):
        updated = queryset.update(visibility="private")
        self.message_user(request, f"{updated} post(s) made private.")
