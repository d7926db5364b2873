"""
URL configuration for django-blockblog.

Include in your project urls.py:

    path('api/blogs/', include('blockblog.urls')),
"""
from django.urls import path

from . import views

app_name = "blockblog"

urlpatterns = [
    # Lists
    path("public/", views.PublicPostListView.as_view(), name="public_posts"),
    path("my-blogs/", views.MyPostListView.as_view(), name="my_posts"),

    # Post CRUD
    path("", views.PostCreateView.as_view(), name="post_create"),
    path("<int:pk>/", views.PostDetailView.as_view(), name="post_detail"),
    path("<int:pk>/editor/", views.PostEditorView.as_view(), name="post_editor"),

    path("health/", views.HealthView.as_view(), name="health"),
]
