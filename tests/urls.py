from django.urls import include, path

urlpatterns = [
    path("api/blogs/", include("blockblog.urls")),
]
